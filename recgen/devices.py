"""
デバイスカタログ — デバイス名からコンテキスト設定プリセットへの参照表

外部から提供されるデバイス記述子（viewport, userAgent, isMobile 等）を
読み取り専用のマッピングとして保持する。中身は解釈せず、
ヘッダー生成時のスプレッド展開と重複項目の除去にのみ使用する。

ファイル形式（YAML / JSON）::

    "iPhone 11":
      userAgent: "Mozilla/5.0 ..."
      viewport: {width: 414, height: 715}
      deviceScaleFactor: 2
      isMobile: true
      hasTouch: true
"""

from __future__ import annotations

import logging
from collections.abc import Iterator, Mapping
from pathlib import Path
from typing import Any, Optional

from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

logger = logging.getLogger(__name__)


class DeviceCatalog(Mapping[str, Mapping[str, Any]]):
    """デバイス名 → コンテキスト設定の読み取り専用マッピング。

    使用例::

        catalog = DeviceCatalog.load(Path("devices.yaml"))
        generator = JavaScriptLanguageGenerator(devices=catalog)
    """

    def __init__(self, descriptors: Optional[Mapping[str, Mapping[str, Any]]] = None) -> None:
        self._descriptors: dict[str, dict[str, Any]] = {
            name: dict(descriptor) for name, descriptor in (descriptors or {}).items()
        }

    def __getitem__(self, name: str) -> Mapping[str, Any]:
        return self._descriptors[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._descriptors)

    def __len__(self) -> int:
        return len(self._descriptors)

    @classmethod
    def load(cls, path: Path) -> DeviceCatalog:
        """YAML / JSON ファイルからデバイスカタログを読み込む。

        Args:
            path: デバイス記述子ファイルのパス

        Returns:
            読み込んだカタログ

        Raises:
            FileNotFoundError: ファイルが存在しない場合
            ValueError: YAML 構文エラー、またはトップレベルが
                「名前 → マッピング」の形式でない場合
        """
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"デバイスファイルが見つかりません: {path}")

        yaml = YAML(typ="safe")
        try:
            with open(path, "r", encoding="utf-8") as f:
                data = yaml.load(f)
        except YAMLError as e:
            raise ValueError(f"YAML 構文エラー: {e}") from e

        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise ValueError("デバイスファイルのトップレベルはマッピングである必要があります")
        for name, descriptor in data.items():
            if not isinstance(descriptor, dict):
                raise ValueError(f"デバイス '{name}' の定義がマッピングではありません")

        logger.info("デバイスカタログを読み込みました: %s (%d 件)", path, len(data))
        return cls(data)
