"""
アクションモデル — 記録されたブラウザ操作とシグナルの定義

外部レコーダーが生成するアクション（click, fill, navigate 等）と、
アクションが引き起こした非同期シグナル（navigation, popup, download 等）を
Pydantic v2 の discriminated union として定義する。

主な機能:
  - Action: name をタグとする閉じたアクション集合
  - Signal: name をタグとする閉じたシグナル集合
  - ActionInContext: アクション + ページ / フレームの宛先情報
  - title_of: アクションの短い英語タイトルを生成
"""

from __future__ import annotations

from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter


class UnsupportedActionError(ValueError):
    """閉じたアクション集合に含まれない種別が渡された場合のエラー。

    プログラミングエラーであり、呼び出し側で捕捉しない。
    """

    def __init__(self, name: object) -> None:
        super().__init__(f"未対応のアクション種別です: {name!r}")
        self.name = name


class _Record(BaseModel):
    """全レコードの基底クラス（不変）。"""

    model_config = ConfigDict(frozen=True)


# ---------------------------------------------------------------------------
# シグナル定義
# ---------------------------------------------------------------------------

class NavigationSignal(_Record):
    """アクションによって発生したページ遷移。

    isAsync が True の場合は遷移待機ではなく URL の確認コメントとして扱う。
    """

    name: Literal["navigation"] = "navigation"
    url: str
    isAsync: bool = False


class PopupSignal(_Record):
    """アクションによって開かれたポップアップ。"""

    name: Literal["popup"] = "popup"
    popupAlias: str
    isAsync: bool = False


class DownloadSignal(_Record):
    name: Literal["download"] = "download"
    isAsync: bool = False


class DialogSignal(_Record):
    """アクションによって表示されたダイアログ（alert / confirm 等）。"""

    name: Literal["dialog"] = "dialog"
    dialogAlias: str
    isAsync: bool = False


class CombinationSignal(_Record):
    name: Literal["combination"] = "combination"
    isAsync: bool = False


Signal = Annotated[
    Union[
        NavigationSignal,
        PopupSignal,
        DownloadSignal,
        DialogSignal,
        CombinationSignal,
    ],
    Field(discriminator="name"),
]
"""全シグナル種別の Union 型。name フィールドで判別する。"""


# ---------------------------------------------------------------------------
# アクション定義
# ---------------------------------------------------------------------------

MouseButton = Literal["left", "middle", "right"]
Number = Union[int, float]


class Point(_Record):
    x: Number
    y: Number


class Rect(_Record):
    """スクリーンショットの切り抜き領域。"""

    x: Number
    y: Number
    width: Number
    height: Number


class _ActionBase(_Record):
    signals: list[Signal] = Field(default_factory=list, description="アクションが引き起こしたシグナル")


class OpenPageAction(_ActionBase):
    name: Literal["openPage"] = "openPage"
    url: str = ""


class ClosePageAction(_ActionBase):
    name: Literal["closePage"] = "closePage"


class ClickAction(_ActionBase):
    """要素のクリック。clickCount が 2 の場合はダブルクリックとして扱う。"""

    name: Literal["click"] = "click"
    selector: str
    button: MouseButton = "left"
    modifiers: int = Field(default=0, ge=0, description="修飾キーのビットマスク")
    clickCount: int = Field(default=1, ge=1)


class MouseAction(_ActionBase):
    """座標指定のマウス操作（ボタンの押下 / 解放）。"""

    name: Literal["mouse"] = "mouse"
    button: MouseButton = "left"
    buttonState: Literal["up", "down"]
    steps: Optional[int] = None
    position: Point
    modifiers: int = Field(default=0, ge=0)


class ScreenshotAction(_ActionBase):
    """スクリーンショット撮影。

    selector が指定された場合はページではなく要素を撮影する。
    """

    name: Literal["screenshot"] = "screenshot"
    path: str
    fullPage: Optional[bool] = None
    selector: Optional[str] = None
    clip: Optional[Rect] = None


class CheckAction(_ActionBase):
    name: Literal["check"] = "check"
    selector: str


class UncheckAction(_ActionBase):
    name: Literal["uncheck"] = "uncheck"
    selector: str


class FillAction(_ActionBase):
    name: Literal["fill"] = "fill"
    selector: str
    text: str


class NavigateAction(_ActionBase):
    name: Literal["navigate"] = "navigate"
    url: str


class PressAction(_ActionBase):
    name: Literal["press"] = "press"
    selector: str
    key: str
    modifiers: int = Field(default=0, ge=0)


class SelectAction(_ActionBase):
    name: Literal["select"] = "select"
    selector: str
    options: list[str]


class SetInputFilesAction(_ActionBase):
    name: Literal["setInputFiles"] = "setInputFiles"
    selector: str
    files: list[str]


Action = Annotated[
    Union[
        OpenPageAction,
        ClosePageAction,
        ClickAction,
        MouseAction,
        ScreenshotAction,
        CheckAction,
        UncheckAction,
        FillAction,
        NavigateAction,
        PressAction,
        SelectAction,
        SetInputFilesAction,
    ],
    Field(discriminator="name"),
]
"""全アクション種別の Union 型。name フィールドで判別する。"""

ACTION_NAMES: tuple[str, ...] = (
    "openPage",
    "closePage",
    "click",
    "mouse",
    "screenshot",
    "check",
    "uncheck",
    "fill",
    "navigate",
    "press",
    "select",
    "setInputFiles",
)

_ACTION_ADAPTER: TypeAdapter = TypeAdapter(Action)


def parse_action(data: dict) -> Action:
    """辞書からアクションを生成する。

    Raises:
        pydantic.ValidationError: 未知の name やフィールド不足の場合
    """
    return _ACTION_ADAPTER.validate_python(data)


# ---------------------------------------------------------------------------
# ActionInContext
# ---------------------------------------------------------------------------

class ActionInContext(_Record):
    """アクションと、その操作対象ページ / フレームの宛先情報。

    isMainFrame が False の場合、frameName（優先）または frameUrl で
    フレームを再解決する。
    """

    action: Action
    pageAlias: str = Field(default="page", description="操作対象ページの変数名")
    isMainFrame: bool = True
    frameName: Optional[str] = None
    frameUrl: Optional[str] = None


# ---------------------------------------------------------------------------
# タイトル生成
# ---------------------------------------------------------------------------

def _num(value: Number) -> str:
    """座標値を表示用に整形する（整数値は小数点なし）。"""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def _click_title(action: ClickAction) -> str:
    if action.clickCount == 1:
        return f"Click {action.selector}"
    if action.clickCount == 2:
        return f"Double click {action.selector}"
    if action.clickCount == 3:
        return f"Triple click {action.selector}"
    # 4 回以上はセレクタを含めない
    return f"{action.clickCount}× click"


def _screenshot_title(action: ScreenshotAction) -> str:
    if action.fullPage:
        return f"Screenshot - fullscreen Path: {action.path}"
    if action.clip:
        clip = action.clip
        region = ",".join(_num(v) for v in (clip.x, clip.y, clip.width, clip.height))
        return f"Screeshot - Path: {action.path} Region:({region})"
    return f"Screenshot - Path: {action.path}"


def _set_input_files_title(action: SetInputFilesAction) -> str:
    if not action.files:
        return "Clear selected files"
    return f"Upload {', '.join(action.files)}"


def title_of(action: Action) -> str:
    """アクションの短い英語タイトルを返す。

    生成コードの各ステップ直前にコメントとして出力される。

    Args:
        action: 対象アクション

    Returns:
        現在形の英語タイトル

    Raises:
        UnsupportedActionError: 閉じたアクション集合に含まれない場合
    """
    name = getattr(action, "name", None)
    if name == "openPage":
        return "Open new page"
    if name == "closePage":
        return "Close page"
    if name == "check":
        return f"Check {action.selector}"
    if name == "uncheck":
        return f"Uncheck {action.selector}"
    if name == "click":
        return _click_title(action)
    if name == "mouse":
        pos = action.position
        return f"Mouse-{action.buttonState} at Position: {_num(pos.x)},{_num(pos.y)}"
    if name == "screenshot":
        return _screenshot_title(action)
    if name == "fill":
        return f"Fill {action.selector}"
    if name == "setInputFiles":
        return _set_input_files_title(action)
    if name == "navigate":
        return f"Go to {action.url}"
    if name == "press":
        return f"Press {action.key}" + (" with modifiers" if action.modifiers else "")
    if name == "select":
        return f"Select {', '.join(action.options)}"
    raise UnsupportedActionError(name)
