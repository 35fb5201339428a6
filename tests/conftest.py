"""
テスト共通フィクスチャ定義

全テストモジュールで共有するフィクスチャ（ジェネレータ、デバイスプリセット、
サンプル記録ファイル、ActionInContext ファクトリ）を提供する。
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import pytest

from recgen.actions import ActionInContext
from recgen.javascript import JavaScriptLanguageGenerator


# ---------------------------------------------------------------------------
# pytest フィクスチャ
# ---------------------------------------------------------------------------

@pytest.fixture
def generator() -> JavaScriptLanguageGenerator:
    """デバイスカタログなしの JavaScriptLanguageGenerator を提供する。"""
    return JavaScriptLanguageGenerator()


@pytest.fixture
def devices() -> dict[str, dict[str, Any]]:
    """テスト用のデバイスプリセット表。"""
    return {
        "iPhone 11": {
            "userAgent": "Mozilla/5.0 (iPhone; CPU iPhone OS 12_2 like Mac OS X)",
            "viewport": {"width": 414, "height": 715},
            "deviceScaleFactor": 2,
            "isMobile": True,
            "hasTouch": True,
        },
        "Pixel 5": {
            "viewport": {"width": 393, "height": 727},
            "isMobile": True,
        },
    }


@pytest.fixture
def sample_recording_yaml() -> str:
    """最小構成の記録ファイル（YAML）。"""
    return """\
options:
  browserName: chromium
  launchOptions:
    headless: false
actions:
  - pageAlias: page
    isMainFrame: true
    action:
      name: openPage
      url: https://example.com
      signals: []
  - pageAlias: page
    isMainFrame: true
    action:
      name: fill
      selector: "#email"
      text: user@example.com
      signals: []
  - pageAlias: page
    isMainFrame: true
    action:
      name: click
      selector: text=Login
      button: left
      modifiers: 0
      clickCount: 1
      signals:
        - name: navigation
          url: https://example.com/home
"""


@pytest.fixture
def sample_recording_file(tmp_path: Path, sample_recording_yaml: str) -> Path:
    """sample_recording_yaml を書き出したファイルのパス。"""
    path = tmp_path / "recording.yaml"
    path.write_text(sample_recording_yaml, encoding="utf-8")
    return path


@pytest.fixture
def make_context():
    """アクションを ActionInContext で包むファクトリを提供する。"""

    def _make(action, page_alias: str = "page", **kwargs) -> ActionInContext:
        return ActionInContext(action=action, pageAlias=page_alias, **kwargs)

    return _make
