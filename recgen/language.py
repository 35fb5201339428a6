"""
言語ジェネレータ共通定義 — 生成オプション・シグナル集約・修飾キー変換

各言語ジェネレータが共有するデータモデルとユーティリティを提供する。

主な機能:
  - GeneratorOptions / ContextOptions: ヘッダー生成用の設定
  - LanguageGenerator: 言語ジェネレータのプロトコル
  - to_signal_map: アクションのシグナル列を種別ごとに集約
  - to_modifiers: 修飾キーのビットマスクをキー名リストに変換
  - sanitize_device_options: デバイスプリセットと重複する設定を除去
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Literal, Optional, Protocol, runtime_checkable

from pydantic import BaseModel, ConfigDict, Field

from .actions import (
    Action,
    ActionInContext,
    CombinationSignal,
    DialogSignal,
    DownloadSignal,
    NavigationSignal,
    PopupSignal,
)

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# 生成オプション
# ---------------------------------------------------------------------------

class Viewport(BaseModel):
    model_config = ConfigDict(frozen=True)

    width: int
    height: int


class Geolocation(BaseModel):
    model_config = ConfigDict(frozen=True)

    latitude: float
    longitude: float
    accuracy: Optional[float] = None


class ContextOptions(BaseModel):
    """browser.newContext() に渡すコンテキスト設定。

    よく使われる項目のみを明示的に定義し、それ以外の項目も
    extra として受け付けて宣言順の後ろにそのまま出力する。
    未設定（None）の項目は出力しない。
    """

    model_config = ConfigDict(frozen=True, extra="allow")

    viewport: Optional[Viewport] = None
    userAgent: Optional[str] = None
    deviceScaleFactor: Optional[float] = None
    isMobile: Optional[bool] = None
    hasTouch: Optional[bool] = None
    colorScheme: Optional[Literal["light", "dark", "no-preference"]] = None
    geolocation: Optional[Geolocation] = None
    locale: Optional[str] = None
    timezoneId: Optional[str] = None
    permissions: Optional[list[str]] = None
    storageState: Optional[str] = None
    ignoreHTTPSErrors: Optional[bool] = None
    extraHTTPHeaders: Optional[dict[str, str]] = None

    def to_dict(self) -> dict[str, Any]:
        """未設定項目を除いた辞書に変換する。"""
        return self.model_dump(exclude_none=True)


class GeneratorOptions(BaseModel):
    """スクリプトヘッダー生成用のオプション。

    スクリプト 1 本につき 1 回だけ生成され、以後変更されない。
    """

    model_config = ConfigDict(frozen=True)

    browserName: Literal["chromium", "firefox", "webkit"] = Field(
        default="chromium", description="起動するブラウザ種別",
    )
    deviceName: Optional[str] = Field(default=None, description="デバイスプリセット名")
    launchOptions: dict[str, Any] = Field(default_factory=dict, description="launch() のオプション")
    contextOptions: ContextOptions = Field(
        default_factory=ContextOptions, description="newContext() のオプション",
    )


# ---------------------------------------------------------------------------
# 言語ジェネレータのプロトコル
# ---------------------------------------------------------------------------

@runtime_checkable
class LanguageGenerator(Protocol):
    """言語ジェネレータのプロトコル。

    1 アクション分のコード、スクリプトのヘッダー・フッターを生成する。
    """

    id: str
    file_name: str
    highlighter: str

    def generate_action(self, action_in_context: ActionInContext) -> str: ...

    def generate_header(self, options: GeneratorOptions) -> str: ...

    def generate_footer(self, save_storage: Optional[str] = None) -> str: ...


# ---------------------------------------------------------------------------
# シグナル集約
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class SignalMap:
    """アクションのシグナルを種別ごとに集約した結果。

    Attributes:
        wait_for_navigation: 同期的な遷移（Promise.all で待機する）
        assert_navigation: 非同期的な遷移（URL 確認コメントのみ出力する）
        popup: ポップアップ
        download: ダウンロード
        dialog: ダイアログ
        combination: 組み合わせ操作
    """

    wait_for_navigation: Optional[NavigationSignal] = None
    assert_navigation: Optional[NavigationSignal] = None
    popup: Optional[PopupSignal] = None
    download: Optional[DownloadSignal] = None
    dialog: Optional[DialogSignal] = None
    combination: Optional[CombinationSignal] = None

    @property
    def needs_parallel_wait(self) -> bool:
        """Promise.all による並列待機が必要か。"""
        return bool(self.wait_for_navigation or self.popup or self.download)


def to_signal_map(action: Action) -> SignalMap:
    """アクションのシグナル列を SignalMap に集約する。

    同じ種別のシグナルが複数ある場合は後のものを採用する。
    """
    slots: dict[str, Any] = {}
    for signal in action.signals:
        if signal.name == "navigation":
            slots["assert_navigation" if signal.isAsync else "wait_for_navigation"] = signal
        else:
            slots[signal.name] = signal
    return SignalMap(**slots)


# ---------------------------------------------------------------------------
# 修飾キー
# ---------------------------------------------------------------------------

_MODIFIER_BITS: tuple[tuple[int, str], ...] = (
    (1, "Alt"),
    (2, "Control"),
    (4, "Meta"),
    (8, "Shift"),
)


def to_modifiers(modifiers: int) -> list[str]:
    """修飾キーのビットマスクをキー名のリストに変換する。

    例: 10 (Control | Shift) → ["Control", "Shift"]
    """
    return [name for bit, name in _MODIFIER_BITS if modifiers & bit]


# ---------------------------------------------------------------------------
# デバイスプリセット
# ---------------------------------------------------------------------------

def sanitize_device_options(
    device: Mapping[str, Any], options: Mapping[str, Any],
) -> dict[str, Any]:
    """デバイスプリセットと同じ値の項目をコンテキスト設定から除去する。

    プリセットはスプレッド構文で展開されるため、同じ値を重ねて出力しない。

    Args:
        device: デバイスプリセット（項目名 → 値）
        options: コンテキスト設定

    Returns:
        プリセットと異なる項目のみを含む設定
    """
    cleaned: dict[str, Any] = {}
    for key, value in options.items():
        if key in device and device[key] == value:
            logger.debug("デバイスプリセットと重複する項目を除去: %s", key)
            continue
        cleaned[key] = value
    return cleaned
