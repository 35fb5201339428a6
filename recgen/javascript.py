"""
JavaScript ジェネレータ — 記録アクションを Playwright スクリプトに変換

ActionInContext を 1 件ずつ受け取り、タイトルコメントと 1 行以上の
JavaScript 文に変換する。アクションが引き起こしたシグナル（遷移・ポップアップ・
ダウンロード・ダイアログ）に応じて Promise.all による並列待機や
ダイアログリスナーの登録を組み立てる。

主な機能:
  - generate_action: 1 アクション分のコードブロック生成
  - generate_header: require / launch / newContext の定型ヘッダー生成
  - generate_footer: storageState 保存とクローズ処理の定型フッター生成

生成は同期的な純粋計算であり、ファイルやブラウザには触れない。
"""

from __future__ import annotations

import logging
import re
from collections.abc import Mapping
from typing import Any, Optional

from .actions import (
    Action,
    ActionInContext,
    MouseAction,
    ScreenshotAction,
    UnsupportedActionError,
    title_of,
)
from .formatter import JavaScriptFormatter
from .language import (
    ContextOptions,
    GeneratorOptions,
    SignalMap,
    sanitize_device_options,
    to_modifiers,
    to_signal_map,
)
from .serializer import quote, render_options, render_options_or_empty, render_value

logger = logging.getLogger(__name__)

# goto を出力しない新規ページの URL
_BLANK_PAGE_URLS = ("about:blank", "chrome://newtab/")

# 識別子に使えない文字
_NON_IDENTIFIER_CHARS = re.compile(r"[^A-Za-z0-9_$]")

# 生成スクリプト内で既に宣言される名前と JavaScript の予約語
_DECLARED_NAMES = frozenset({
    "browser", "context", "devices", "download", "dialog", "require",
    "chromium", "firefox", "webkit",
})
_RESERVED_WORDS = frozenset({
    "await", "break", "case", "catch", "class", "const", "continue", "debugger",
    "default", "delete", "do", "else", "enum", "export", "extends", "false",
    "finally", "for", "function", "if", "import", "in", "instanceof", "let",
    "new", "null", "return", "super", "switch", "this", "throw", "true", "try",
    "typeof", "var", "void", "while", "with", "yield",
})

# ページ / ポップアップ / ダイアログの変数名（page, page1, popup2 等）
_ALIAS_PATTERN = re.compile(r"^(page|popup|dialog)\d*$")


class JavaScriptLanguageGenerator:
    """JavaScript（Node.js + playwright）向けの言語ジェネレータ。

    使用例::

        generator = JavaScriptLanguageGenerator()
        header = generator.generate_header(GeneratorOptions(browserName="chromium"))
        block = generator.generate_action(action_in_context)
        footer = generator.generate_footer()
    """

    id = "javascript"
    file_name = "<javascript>"
    highlighter = "javascript"

    def __init__(self, devices: Optional[Mapping[str, Mapping[str, Any]]] = None) -> None:
        """ジェネレータを初期化する。

        Args:
            devices: デバイス名 → コンテキスト設定のプリセット表
        """
        self._devices: Mapping[str, Mapping[str, Any]] = devices or {}

    # ----- アクション -----

    def generate_action(self, action_in_context: ActionInContext) -> str:
        """1 アクション分のコードブロックを生成する。

        Args:
            action_in_context: 宛先情報付きのアクション

        Returns:
            空行 + タイトルコメント + 文からなるインデント済みテキスト
        """
        action = action_in_context.action
        page_alias = action_in_context.pageAlias
        logger.debug("アクションを変換: %s (%s)", action.name, page_alias)

        formatter = JavaScriptFormatter(2)
        formatter.new_line()
        formatter.add("// " + title_of(action))

        if action.name == "openPage":
            formatter.add(f"const {page_alias} = await context.newPage();")
            if action.url and action.url not in _BLANK_PAGE_URLS:
                formatter.add(f"await {page_alias}.goto({quote(action.url)});")
            return formatter.format()

        subject = self._subject(action_in_context)
        signals = to_signal_map(action)

        if signals.dialog:
            formatter.add(f"""{page_alias}.once('dialog', dialog => {{
  console.log(`Dialog message: ${{dialog.message()}}`);
  dialog.dismiss().catch(() => {{}});
}});""")

        # 要素スクリーンショットは要素を変数に束縛し、その要素を撮影対象にする
        element_bound = isinstance(action, ScreenshotAction) and bool(action.selector)
        if element_bound:
            element_name = _element_identifier(action.path, page_alias)
            formatter.add(f"const {element_name} = await {subject}.$({quote(action.selector)});")
            subject = element_name

        # 移動は押下 / 解放とは別の文にし、Promise.all の配列には含めない
        if isinstance(action, MouseAction):
            formatter.add(f"await {subject}.{_mouse_move_call(action)};")

        emit_promise_all = signals.needs_parallel_wait
        if emit_promise_all:
            # await Promise.all([...]) または const [popup1] = await Promise.all([...])
            formatter.add(f"{_left_hand_side(signals)}await Promise.all([")
            if signals.popup:
                formatter.add(f"{page_alias}.waitForEvent('popup'),")
            if signals.wait_for_navigation:
                url = quote(signals.wait_for_navigation.url)
                formatter.add(f"{page_alias}.waitForNavigation(/*{{ url: {url} }}*/),")
            if signals.download:
                formatter.add(f"{page_alias}.waitForEvent('download'),")

        # 束縛済みの要素は直前の呼び出しに連結できない
        chained = bool(signals.combination) and not element_bound
        prefix = "" if (emit_promise_all or chained) else "await "
        suffix = "" if emit_promise_all else ";"
        action_call = self._generate_action_call(action)
        if chained:
            formatter.add(f"{action_call}{suffix}")
        else:
            formatter.add(f"{prefix}{subject}.{action_call}{suffix}")

        if emit_promise_all:
            formatter.add("]);")
        elif signals.assert_navigation:
            url = quote(signals.assert_navigation.url)
            formatter.add(f"// assert.equal({page_alias}.url(), {url});")
        return formatter.format()

    def _subject(self, action_in_context: ActionInContext) -> str:
        """アクションを呼び出す対象の式を返す。"""
        page_alias = action_in_context.pageAlias
        # mouse は Page にのみ存在する
        if action_in_context.isMainFrame or action_in_context.action.name == "mouse":
            return page_alias
        if action_in_context.frameName:
            return f"{page_alias}.frame({render_value({'name': action_in_context.frameName})})"
        return f"{page_alias}.frame({render_value({'url': action_in_context.frameUrl})})"

    def _generate_action_call(self, action: Action) -> str:
        """アクション種別ごとの呼び出し断片（対象式を除く）を生成する。"""
        name = action.name
        if name == "openPage":
            raise UnsupportedActionError(name)
        if name == "closePage":
            return "close()"
        if name == "click":
            method = "dblclick" if action.clickCount == 2 else "click"
            options = _mouse_options(action.button, action.modifiers)
            if action.clickCount > 2:
                options["clickCount"] = action.clickCount
            return f"{method}({quote(action.selector)}{render_options(options)})"
        if name == "mouse":
            options = _mouse_options(action.button, action.modifiers)
            return f"mouse.{action.buttonState}({render_options(options, leading_comma=False)})"
        if name == "screenshot":
            screenshot_options: dict[str, Any] = {"path": action.path}
            if action.clip:
                screenshot_options["clip"] = action.clip
            if action.fullPage:
                screenshot_options["fullPage"] = action.fullPage
            return f"screenshot({render_options(screenshot_options, leading_comma=False)})"
        if name == "check":
            return f"check({quote(action.selector)})"
        if name == "uncheck":
            return f"uncheck({quote(action.selector)})"
        if name == "fill":
            return f"fill({quote(action.selector)}, {quote(action.text)})"
        if name == "setInputFiles":
            files = action.files[0] if len(action.files) == 1 else action.files
            return f"setInputFiles({quote(action.selector)}, {render_value(files)})"
        if name == "press":
            shortcut = "+".join([*to_modifiers(action.modifiers), action.key])
            return f"press({quote(action.selector)}, {quote(shortcut)})"
        if name == "navigate":
            return f"goto({quote(action.url)})"
        if name == "select":
            values = action.options[0] if len(action.options) == 1 else action.options
            return f"selectOption({quote(action.selector)}, {render_value(values)})"
        raise UnsupportedActionError(name)

    # ----- ヘッダー / フッター -----

    def generate_header(self, options: GeneratorOptions) -> str:
        """require からコンテキスト生成までの定型ヘッダーを生成する。"""
        browser_name = options.browserName
        devices = ", devices" if options.deviceName else ""
        launch_options = render_options_or_empty(options.launchOptions)
        context_options = self._context_options(options.contextOptions, options.deviceName)
        formatter = JavaScriptFormatter()
        formatter.add(f"""
      const {{ {browser_name}{devices} }} = require('playwright');

      (async () => {{
        const browser = await {browser_name}.launch({launch_options});
        const context = await browser.newContext({context_options});""")
        return formatter.format()

    def generate_footer(self, save_storage: Optional[str] = None) -> str:
        """storageState の保存とクローズ処理の定型フッターを生成する。

        Args:
            save_storage: storageState の保存先パス（生成コードに埋め込むのみ）
        """
        storage_state_line = ""
        if save_storage:
            storage_state_line = f"\n  await context.storageState({{ path: {quote(save_storage)} }});"
        return (
            f"\n  // ---------------------{storage_state_line}\n"
            "  await context.close();\n"
            "  await browser.close();\n"
            "})();"
        )

    def _context_options(self, options: ContextOptions, device_name: Optional[str]) -> str:
        """newContext() の引数を生成する。

        デバイスプリセットがある場合は `...devices['名前'],` を
        オブジェクトの先頭に展開し、プリセットと同じ値の項目は出力しない。
        """
        device = self._devices.get(device_name) if device_name else None
        if not device:
            if device_name:
                logger.warning("デバイスプリセットが見つかりません: %s", device_name)
            return render_options_or_empty(options.to_dict())

        serialized = render_options_or_empty(sanitize_device_options(device, options.to_dict()))
        # 追加の設定がなくてもデバイスは展開する
        if not serialized:
            serialized = "{\n}"
        lines = serialized.split("\n")
        lines.insert(1, f"...devices[{quote(device_name)}],")
        return "\n".join(lines)


# ---------------------------------------------------------------------------
# ヘルパー
# ---------------------------------------------------------------------------

def _mouse_options(button: str, modifiers: int) -> dict[str, Any]:
    """既定値（左ボタン・修飾キーなし）と異なるマウスオプションのみを返す。"""
    options: dict[str, Any] = {}
    if button != "left":
        options["button"] = button
    modifier_names = to_modifiers(modifiers)
    if modifier_names:
        options["modifiers"] = modifier_names
    return options


def _mouse_move_call(action: MouseAction) -> str:
    steps = ""
    if action.steps and action.steps != 1:
        steps = f", {{ steps: {action.steps} }}"
    position = action.position
    return f"mouse.move({render_value(position.x)}, {render_value(position.y)}{steps})"


def _left_hand_side(signals: SignalMap) -> str:
    """Promise.all の結果を束縛する左辺を返す。

    Promise.all の要素順は popup → navigation → download のため、
    navigation と download が同時にある場合は download を 2 番目で受ける。
    """
    if signals.popup:
        return f"const [{signals.popup.popupAlias}] = "
    if signals.download:
        hole = ", " if signals.wait_for_navigation else ""
        return f"const [{hole}download] = "
    return ""


def _element_identifier(path: str, page_alias: str) -> str:
    """スクリーンショットの保存先パスから要素の変数名を生成する。

    ページ変数や定型部分で宣言済みの名前、予約語と重なる場合は
    末尾に "Element" を付ける。

    例: "shots/header.png" → "shots_header", "page.png" → "pageElement"
    """
    name = path.replace("/", "_").replace(".png", "", 1).replace(".", "")
    name = _NON_IDENTIFIER_CHARS.sub("_", name)
    if not name or name[0].isdigit():
        name = "_" + name
    if (
        name == page_alias
        or name in _DECLARED_NAMES
        or name in _RESERVED_WORDS
        or _ALIAS_PATTERN.match(name)
    ):
        name += "Element"
    return name
