"""
行フォーマッタ — 行ストリームを字句ヒューリスティックでインデント

生成された JavaScript の行を蓄積し、出力時に行頭・行末の字句パターンだけで
インデントを付け直す。AST は使用しない。

インデント規則:
  - `}` / `]` で始まる行は 1 段戻してから出力する
  - `{` / `[` で終わる行の後は 1 段下げる
  - 直前の行が `if (...)` 等の括弧付き制御構文の場合は 1 段追加する
  - `.method(...)` のようなメソッドチェーンの継続行は 1 段追加する
  - 空行はインデントせず、直前行としても記憶しない

1 文 1 行の入力を前提とした近似であり、任意の複数文テキストを
正しくインデントすることは保証しない。
"""

from __future__ import annotations

import re

# 括弧付き制御構文（ブレースなしの単文ブロックを想定）
_CONTROL_LINE_PATTERN = re.compile(r"^(for|while|if|try).*\(.*\)$")

# メソッドチェーンの継続行（スプレッド構文 `...x` は対象外）
_CALL_CARRY_OVER_PATTERN = re.compile(r"^\.[A-Za-z_$]")


def _split_lines(text: str) -> list[str]:
    return [line.strip() for line in text.strip().split("\n")]


class JavaScriptFormatter:
    """JavaScript 行フォーマッタ。

    インスタンスは 1 回の生成処理でのみ使用され、他のインスタンスと
    状態を共有しない。

    使用例::

        formatter = JavaScriptFormatter(2)
        formatter.add("if (x) {")
        formatter.add("y();")
        formatter.add("}")
        text = formatter.format()
    """

    def __init__(self, offset: int = 0) -> None:
        """フォーマッタを初期化する。

        Args:
            offset: 全行に付与するベースインデント（スペース数）
        """
        self._base_indent = " " * 2
        self._base_offset = " " * offset
        self._lines: list[str] = []

    @property
    def lines(self) -> list[str]:
        """蓄積済みの行（トリム済み）のコピー。"""
        return list(self._lines)

    def prepend(self, text: str) -> None:
        """テキストを行分割・トリムし、既存の行より前に挿入する。"""
        self._lines = _split_lines(text) + self._lines

    def add(self, text: str) -> None:
        """テキストを行分割・トリムし、末尾に追加する。"""
        self._lines.extend(_split_lines(text))

    def new_line(self) -> None:
        """空行を 1 行追加する。"""
        self._lines.append("")

    def format(self) -> str:
        """蓄積した行をインデント付きで結合する。

        内部の行バッファは変更しないため、繰り返し呼び出しても同じ結果を返す。

        Returns:
            インデント済みのテキスト
        """
        spaces = ""
        previous_line = ""
        result: list[str] = []
        for line in self._lines:
            if line == "":
                result.append(line)
                continue
            if line.startswith("}") or line.startswith("]"):
                spaces = spaces[len(self._base_indent):]

            extra_spaces = self._base_indent if _CONTROL_LINE_PATTERN.match(previous_line) else ""
            previous_line = line

            carry_over = self._base_indent if _CALL_CARRY_OVER_PATTERN.match(line) else ""
            indented = spaces + extra_spaces + carry_over + line
            if line.endswith("{") or line.endswith("["):
                spaces += self._base_indent
            result.append(self._base_offset + indented)
        return "\n".join(result)
