"""
生成設定 — 環境変数・CLI 引数からの設定読み込み

環境変数または CLI 引数でスクリプト生成の動作を制御する。
CLI 引数 > 環境変数 > 記録ファイル内のオプション の優先順位で適用される。

環境変数一覧:
  RECGEN_BROWSER      : ブラウザ種別（chromium/firefox/webkit）
  RECGEN_DEVICE       : デバイスプリセット名
  RECGEN_DEVICES_FILE : デバイス記述子ファイル（YAML / JSON）
  RECGEN_SAVE_STORAGE : storageState の保存先パス
  RECGEN_HEADLESS     : launch() の headless 指定（true/false, 未設定時は出力しない）
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Optional

from .devices import DeviceCatalog
from .language import GeneratorOptions

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# 環境変数キー定数
# ---------------------------------------------------------------------------

_ENV_BROWSER = "RECGEN_BROWSER"
_ENV_DEVICE = "RECGEN_DEVICE"
_ENV_DEVICES_FILE = "RECGEN_DEVICES_FILE"
_ENV_SAVE_STORAGE = "RECGEN_SAVE_STORAGE"
_ENV_HEADLESS = "RECGEN_HEADLESS"

BROWSER_NAMES = ("chromium", "firefox", "webkit")


# ---------------------------------------------------------------------------
# 設定データクラス
# ---------------------------------------------------------------------------

@dataclass
class GeneratorConfig:
    """スクリプト生成の実行時設定。

    None の項目は記録ファイル側のオプションをそのまま使用する。

    Attributes:
        browser_name: ブラウザ種別
        device_name: デバイスプリセット名
        devices_file: デバイス記述子ファイルのパス
        save_storage: storageState の保存先パス
        headless: launch() の headless 指定
    """

    browser_name: Optional[str] = None
    device_name: Optional[str] = None
    devices_file: Optional[Path] = None
    save_storage: Optional[str] = None
    headless: Optional[bool] = None

    def apply_to(self, options: GeneratorOptions) -> GeneratorOptions:
        """設定をヘッダー生成オプションに上書き適用した新しいオプションを返す。"""
        updates: dict = {}
        if self.browser_name is not None:
            updates["browserName"] = self.browser_name
        if self.device_name is not None:
            updates["deviceName"] = self.device_name
        if self.headless is not None:
            updates["launchOptions"] = {**options.launchOptions, "headless": self.headless}
        if not updates:
            return options
        return options.model_copy(update=updates)

    def load_devices(self) -> Optional[DeviceCatalog]:
        """devices_file が設定されていればデバイスカタログを読み込む。"""
        if self.devices_file is None:
            return None
        return DeviceCatalog.load(self.devices_file)


# ---------------------------------------------------------------------------
# 環境変数からの読み込み
# ---------------------------------------------------------------------------

def _parse_bool(value: str) -> bool:
    """文字列を bool に変換する。

    Args:
        value: "true", "1", "yes" → True、それ以外 → False

    Returns:
        変換結果
    """
    return value.lower() in ("true", "1", "yes")


def load_config_from_env() -> GeneratorConfig:
    """環境変数から GeneratorConfig を生成する。

    不正な値は警告を出力して無視する。
    """
    config = GeneratorConfig()

    if _ENV_BROWSER in os.environ:
        val = os.environ[_ENV_BROWSER]
        if val in BROWSER_NAMES:
            config.browser_name = val
        else:
            logger.warning("RECGEN_BROWSER の値が不正です: %s", val)

    if os.environ.get(_ENV_DEVICE):
        config.device_name = os.environ[_ENV_DEVICE]

    if os.environ.get(_ENV_DEVICES_FILE):
        config.devices_file = Path(os.environ[_ENV_DEVICES_FILE])

    if os.environ.get(_ENV_SAVE_STORAGE):
        config.save_storage = os.environ[_ENV_SAVE_STORAGE]

    if _ENV_HEADLESS in os.environ:
        config.headless = _parse_bool(os.environ[_ENV_HEADLESS])

    logger.debug("設定を読み込みました: %s", config)
    return config


def apply_cli_args(
    config: GeneratorConfig,
    browser_name: Optional[str] = None,
    device_name: Optional[str] = None,
    devices_file: Optional[Path] = None,
    save_storage: Optional[str] = None,
) -> GeneratorConfig:
    """CLI 引数を GeneratorConfig に適用する。指定された項目のみ上書きする。"""
    updates: dict = {}
    if browser_name is not None:
        if browser_name in BROWSER_NAMES:
            updates["browser_name"] = browser_name
        else:
            logger.warning("--browser の値が不正です: %s", browser_name)
    if device_name is not None:
        updates["device_name"] = device_name
    if devices_file is not None:
        updates["devices_file"] = devices_file
    if save_storage is not None:
        updates["save_storage"] = save_storage
    return replace(config, **updates)
