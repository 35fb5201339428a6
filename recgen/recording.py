"""
記録ファイルローダー — 記録済みアクション列の読み込み・検証

外部レコーダーが書き出したアクション列（YAML または JSON）を読み込み、
Pydantic モデル（Recording / ActionInContext）に変換する。

ファイル形式::

    options:
      browserName: chromium
      launchOptions: {headless: false}
    saveStorage: auth.json
    actions:
      - pageAlias: page
        isMainFrame: true
        action: {name: openPage, url: "https://example.com", signals: []}
      - pageAlias: page
        isMainFrame: true
        action: {name: click, selector: "text=Login", signals: []}
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic import ValidationError as PydanticValidationError
from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from .actions import ActionInContext
from .language import GeneratorOptions


# ---------------------------------------------------------------------------
# Recording モデル
# ---------------------------------------------------------------------------

class Recording(BaseModel):
    """記録ファイル 1 件分のルートモデル。"""

    model_config = ConfigDict(frozen=True)

    options: GeneratorOptions = Field(
        default_factory=GeneratorOptions, description="ヘッダー生成オプション",
    )
    saveStorage: Optional[str] = Field(default=None, description="storageState の保存先パス")
    actions: list[ActionInContext] = Field(..., description="記録されたアクション列")


# ---------------------------------------------------------------------------
# バリデーションエラー表現
# ---------------------------------------------------------------------------

@dataclass
class RecordingValidationError:
    """記録ファイルの検証で検出されたエラー。

    Attributes:
        message: エラーメッセージ
        location: エラー箇所（フィールドパス等）
        line: ファイル内の行番号（取得可能な場合）
    """

    message: str
    location: str = ""
    line: Optional[int] = None


# ---------------------------------------------------------------------------
# RecordingLoader 本体
# ---------------------------------------------------------------------------

class RecordingLoader:
    """記録ファイルの読み込みと検証を担当するローダー。"""

    def __init__(self) -> None:
        self._yaml = YAML(typ="safe")

    def load(self, path: Path) -> Recording:
        """記録ファイルを読み込み、Recording モデルに変換する。

        Raises:
            FileNotFoundError: ファイルが存在しない場合
            ValueError: YAML 構文エラーまたはスキーマ検証エラーの場合
        """
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"記録ファイルが見つかりません: {path}")

        try:
            data = self._read(path)
        except YAMLError as e:
            raise ValueError(f"YAML 構文エラー{_mark_info(e)}: {e}") from e

        if data is None:
            raise ValueError("記録ファイルが空です")

        try:
            return Recording.model_validate(data)
        except PydanticValidationError as e:
            raise ValueError(f"スキーマ検証エラー: {e}") from e

    def validate(self, path: Path) -> list[RecordingValidationError]:
        """記録ファイルを検証し、違反箇所をリストで返す。エラーがなければ空リスト。"""
        path = Path(path)
        errors: list[RecordingValidationError] = []

        if not path.exists():
            errors.append(RecordingValidationError(
                message=f"記録ファイルが見つかりません: {path}",
                location="file",
            ))
            return errors

        try:
            data = self._read(path)
        except YAMLError as e:
            line = None
            if getattr(e, "problem_mark", None) is not None:
                line = e.problem_mark.line + 1
            errors.append(RecordingValidationError(
                message=f"YAML 構文エラー: {e}",
                location="yaml",
                line=line,
            ))
            return errors

        if data is None:
            errors.append(RecordingValidationError(
                message="記録ファイルが空です",
                location="file",
            ))
            return errors

        try:
            Recording.model_validate(data)
        except PydanticValidationError as e:
            for err in e.errors():
                loc_parts = [str(part) for part in err.get("loc", [])]
                errors.append(RecordingValidationError(
                    message=err.get("msg", "不明なエラー"),
                    location=" -> ".join(loc_parts) if loc_parts else "unknown",
                ))

        return errors

    def _read(self, path: Path) -> Any:
        with open(path, "r", encoding="utf-8") as f:
            return self._yaml.load(f)


def _mark_info(error: YAMLError) -> str:
    """YAML エラーの位置情報を「(行 N, 列 M)」形式で返す。"""
    mark = getattr(error, "problem_mark", None)
    if mark is None:
        return ""
    return f" (行 {mark.line + 1}, 列 {mark.column + 1})"
