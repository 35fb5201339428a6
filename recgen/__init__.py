# recgen パッケージ
# 記録されたブラウザ操作（アクション列）を Playwright スクリプトに変換するコード生成エンジン

from .actions import (
    Action,
    ActionInContext,
    Signal,
    UnsupportedActionError,
    parse_action,
    title_of,
)
from .devices import DeviceCatalog
from .formatter import JavaScriptFormatter
from .javascript import JavaScriptLanguageGenerator
from .language import (
    ContextOptions,
    GeneratorOptions,
    LanguageGenerator,
    SignalMap,
    sanitize_device_options,
    to_modifiers,
    to_signal_map,
)
from .recording import Recording, RecordingLoader
from .script import ScriptWriter, describe
from .serializer import quote, render_options, render_options_or_empty, render_value

__all__ = [
    "Action",
    "ActionInContext",
    "ContextOptions",
    "DeviceCatalog",
    "GeneratorOptions",
    "JavaScriptFormatter",
    "JavaScriptLanguageGenerator",
    "LanguageGenerator",
    "Recording",
    "RecordingLoader",
    "ScriptWriter",
    "Signal",
    "SignalMap",
    "UnsupportedActionError",
    "describe",
    "parse_action",
    "quote",
    "render_options",
    "render_options_or_empty",
    "render_value",
    "sanitize_device_options",
    "title_of",
    "to_modifiers",
    "to_signal_map",
]
