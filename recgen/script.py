"""
ScriptWriter — 記録アクション列を実行可能なスクリプトに変換

ヘッダー、各アクションのコードブロック、フッターを言語ジェネレータで生成し、
1 本のスクリプトとして結合する。既定の言語ジェネレータは
JavaScriptLanguageGenerator。
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from pathlib import Path
from typing import Optional

from .actions import ActionInContext, title_of
from .javascript import JavaScriptLanguageGenerator
from .language import GeneratorOptions, LanguageGenerator

logger = logging.getLogger(__name__)


class ScriptWriter:
    """記録アクション列をスクリプトに変換するライター。

    使用例::

        writer = ScriptWriter()
        writer.write(actions, GeneratorOptions(), Path("output.js"))
    """

    def __init__(self, generator: Optional[LanguageGenerator] = None) -> None:
        """ライターを初期化する。

        Args:
            generator: 使用する言語ジェネレータ（省略時は JavaScript）
        """
        self._generator = generator or JavaScriptLanguageGenerator()

    @property
    def generator(self) -> LanguageGenerator:
        return self._generator

    def build(
        self,
        actions: Iterable[ActionInContext],
        options: GeneratorOptions,
        save_storage: Optional[str] = None,
    ) -> str:
        """ヘッダー + アクションブロック + フッターを結合したスクリプトを返す。

        Args:
            actions: 宛先情報付きのアクション列
            options: ヘッダー生成オプション
            save_storage: storageState の保存先パス

        Returns:
            末尾改行付きのスクリプト全文
        """
        blocks = [self._generator.generate_header(options)]
        for action_in_context in actions:
            blocks.append(self._generator.generate_action(action_in_context))
        blocks.append(self._generator.generate_footer(save_storage))
        logger.debug("スクリプトを生成: %d アクション", len(blocks) - 2)
        return "\n".join(blocks) + "\n"

    def write(
        self,
        actions: Iterable[ActionInContext],
        options: GeneratorOptions,
        output_path: Path,
        save_storage: Optional[str] = None,
    ) -> None:
        """スクリプトをファイルに書き出す。親ディレクトリがなければ作成する。"""
        script = self.build(actions, options, save_storage)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(script, encoding="utf-8")
        logger.info("スクリプトを出力しました: %s", output_path)


def describe(actions: Iterable[ActionInContext]) -> list[str]:
    """各ステップのタイトル（自然言語の説明）を順に返す。"""
    return [title_of(action_in_context.action) for action_in_context in actions]
