"""
言語ジェネレータ共通定義のユニットテスト

to_signal_map のシグナル集約、to_modifiers のビットマスク変換、
sanitize_device_options の重複除去、生成オプションのモデルを検証する。
"""

from __future__ import annotations

import pytest

from recgen.actions import (
    ClickAction,
    CombinationSignal,
    DialogSignal,
    DownloadSignal,
    NavigationSignal,
    PopupSignal,
)
from recgen.javascript import JavaScriptLanguageGenerator
from recgen.language import (
    ContextOptions,
    GeneratorOptions,
    LanguageGenerator,
    sanitize_device_options,
    to_modifiers,
    to_signal_map,
)


# ===========================================================================
# 1. to_signal_map
# ===========================================================================

class TestToSignalMap:
    """シグナル集約のテスト。"""

    def test_no_signals(self) -> None:
        signals = to_signal_map(ClickAction(selector="a"))

        assert signals.wait_for_navigation is None
        assert signals.assert_navigation is None
        assert signals.popup is None
        assert signals.download is None
        assert signals.dialog is None
        assert signals.combination is None
        assert signals.needs_parallel_wait is False

    def test_sync_navigation_is_waited(self) -> None:
        nav = NavigationSignal(url="https://x/")
        signals = to_signal_map(ClickAction(selector="a", signals=[nav]))

        assert signals.wait_for_navigation == nav
        assert signals.assert_navigation is None
        assert signals.needs_parallel_wait is True

    def test_async_navigation_is_asserted(self) -> None:
        nav = NavigationSignal(url="https://x/", isAsync=True)
        signals = to_signal_map(ClickAction(selector="a", signals=[nav]))

        assert signals.wait_for_navigation is None
        assert signals.assert_navigation == nav
        assert signals.needs_parallel_wait is False

    def test_all_slots(self) -> None:
        popup = PopupSignal(popupAlias="popup1")
        download = DownloadSignal()
        dialog = DialogSignal(dialogAlias="dialog1")
        combination = CombinationSignal()
        signals = to_signal_map(ClickAction(
            selector="a", signals=[popup, download, dialog, combination],
        ))

        assert signals.popup == popup
        assert signals.download == download
        assert signals.dialog == dialog
        assert signals.combination == combination

    def test_dialog_alone_does_not_need_parallel_wait(self) -> None:
        signals = to_signal_map(ClickAction(
            selector="a", signals=[DialogSignal(dialogAlias="dialog1")],
        ))
        assert signals.needs_parallel_wait is False

    def test_last_signal_of_a_kind_wins(self) -> None:
        signals = to_signal_map(ClickAction(
            selector="a",
            signals=[PopupSignal(popupAlias="popup1"), PopupSignal(popupAlias="popup2")],
        ))
        assert signals.popup.popupAlias == "popup2"


# ===========================================================================
# 2. to_modifiers
# ===========================================================================

class TestToModifiers:
    """修飾キーのビットマスク変換テスト。"""

    @pytest.mark.parametrize(
        "mask, expected",
        [
            (0, []),
            (1, ["Alt"]),
            (2, ["Control"]),
            (4, ["Meta"]),
            (8, ["Shift"]),
            (10, ["Control", "Shift"]),
            (15, ["Alt", "Control", "Meta", "Shift"]),
        ],
    )
    def test_mask(self, mask: int, expected: list[str]) -> None:
        assert to_modifiers(mask) == expected


# ===========================================================================
# 3. sanitize_device_options
# ===========================================================================

class TestSanitizeDeviceOptions:
    """デバイスプリセットとの重複除去テスト。"""

    def test_removes_equal_values(self) -> None:
        device = {"isMobile": True, "viewport": {"width": 414, "height": 715}}
        options = {"isMobile": True, "viewport": {"width": 414, "height": 715}, "locale": "ja-JP"}

        assert sanitize_device_options(device, options) == {"locale": "ja-JP"}

    def test_keeps_overrides(self) -> None:
        device = {"viewport": {"width": 414, "height": 715}}
        options = {"viewport": {"width": 800, "height": 600}}

        assert sanitize_device_options(device, options) == options

    def test_integral_float_equals_int(self) -> None:
        assert sanitize_device_options({"deviceScaleFactor": 2}, {"deviceScaleFactor": 2.0}) == {}

    def test_empty_options(self) -> None:
        assert sanitize_device_options({"isMobile": True}, {}) == {}


# ===========================================================================
# 4. 生成オプション
# ===========================================================================

class TestGeneratorOptions:
    """GeneratorOptions / ContextOptions のテスト。"""

    def test_defaults(self) -> None:
        options = GeneratorOptions()

        assert options.browserName == "chromium"
        assert options.deviceName is None
        assert options.launchOptions == {}
        assert options.contextOptions.to_dict() == {}

    def test_context_options_drop_unset_fields(self) -> None:
        options = ContextOptions(viewport={"width": 1280, "height": 720}, locale="ja-JP")

        assert options.to_dict() == {
            "viewport": {"width": 1280, "height": 720},
            "locale": "ja-JP",
        }

    def test_context_options_accept_extra_fields(self) -> None:
        options = ContextOptions(acceptDownloads=True)
        assert options.to_dict() == {"acceptDownloads": True}

    def test_invalid_browser_name(self) -> None:
        with pytest.raises(ValueError):
            GeneratorOptions(browserName="safari")

    def test_javascript_generator_satisfies_protocol(self) -> None:
        generator = JavaScriptLanguageGenerator()

        assert isinstance(generator, LanguageGenerator)
        assert generator.id == "javascript"
        assert generator.file_name == "<javascript>"
        assert generator.highlighter == "javascript"
