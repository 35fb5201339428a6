"""
値シリアライザ — Python の値を JavaScript リテラル式に変換

生成コードの呼び出しオプション（{ button: 'right' } 等）や
launch / newContext の設定オブジェクトを JavaScript のリテラルとして出力する。

対応する値:
  - str → シングルクォートのリテラル（区切り文字のみエスケープ）
  - bool / None / int / float → true / false / null / 数値
  - list / tuple → [a, b]
  - dict（Mapping）→ 改行区切りの { key: value } ブロック
  - Pydantic モデル → model_dump(exclude_none=True) の結果

文字列のエスケープは区切り文字のみを対象とするため、
バックスラッシュや改行を含む文字列はそのまま出力される。
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from typing import Any, Union

from pydantic import BaseModel

Value = Union[str, int, float, bool, None, list, tuple, Mapping, BaseModel]
"""render_value が受け付ける値の型。"""

# インデント 1 段分
_INDENT_UNIT = "  "

# クォートなしでオブジェクトキーに使える識別子
_IDENTIFIER_PATTERN = re.compile(r"^[A-Za-z_$][A-Za-z0-9_$]*$")

_QUOTE_CHARS = ("'", '"', "`")


def quote(text: str, char: str = "'") -> str:
    """文字列を区切り文字で囲み、区切り文字のみをエスケープする。

    Args:
        text: 対象文字列
        char: 区切り文字（' / " / `）

    Returns:
        クォート済みの文字列リテラル

    Raises:
        ValueError: 未対応の区切り文字が指定された場合
    """
    if char not in _QUOTE_CHARS:
        raise ValueError(f"未対応のエスケープ文字です: {char!r}")
    return char + text.replace(char, "\\" + char) + char


def _render_key(key: str) -> str:
    if _IDENTIFIER_PATTERN.match(key):
        return key
    return quote(key)


def _render_number(value: Union[int, float]) -> str:
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return repr(value)


def _render(value: Any, depth: int) -> str:
    if isinstance(value, BaseModel):
        value = value.model_dump(exclude_none=True)
    if isinstance(value, str):
        return quote(value)
    # bool は int のサブクラスのため先に判定する
    if isinstance(value, bool):
        return "true" if value else "false"
    if value is None:
        return "null"
    if isinstance(value, (int, float)):
        return _render_number(value)
    if isinstance(value, (list, tuple)):
        return "[" + ", ".join(_render(item, depth) for item in value) + "]"
    if isinstance(value, Mapping):
        if not value:
            return "{}"
        inner = _INDENT_UNIT * (depth + 1)
        tokens = [
            f"{_render_key(str(key))}: {_render(item, depth + 1)}"
            for key, item in value.items()
        ]
        return "{\n" + inner + f",\n{inner}".join(tokens) + "\n" + _INDENT_UNIT * depth + "}"
    raise TypeError(f"リテラルに変換できない値です: {type(value).__name__}")


def render_value(value: Value) -> str:
    """値を JavaScript のリテラル式に変換する。

    Args:
        value: 変換対象の値（入れ子可）

    Returns:
        リテラル式の文字列

    Raises:
        TypeError: 対応していない型の値が含まれる場合
    """
    return _render(value, 0)


def render_options(value: Mapping[str, Any], leading_comma: bool = True) -> str:
    """呼び出しオプションを末尾引数として出力する。

    空のオプションは空文字列になるため、既定値のみの呼び出しでは
    `click('#id')` のように引数が省略される。
    """
    if not value:
        return ""
    return (", " if leading_comma else "") + render_value(value)


def render_options_or_empty(value: Value) -> str:
    """render_value と同じだが、空オブジェクト {} は空文字列にする。"""
    result = render_value(value)
    return "" if result == "{}" else result
