"""
DeviceCatalog のユニットテスト

YAML / JSON からの読み込み、不正な内容の検出、読み取り専用マッピングとしての
振る舞い、ジェネレータとの連携を検証する。
"""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from recgen.devices import DeviceCatalog
from recgen.javascript import JavaScriptLanguageGenerator
from recgen.language import GeneratorOptions


DEVICES_YAML = """\
"iPhone 11":
  userAgent: "Mozilla/5.0 (iPhone)"
  viewport: {width: 414, height: 715}
  deviceScaleFactor: 2
  isMobile: true
  hasTouch: true
"Desktop Chrome":
  viewport: {width: 1280, height: 720}
"""


class TestLoad:
    """DeviceCatalog.load のテスト。"""

    def test_load_yaml(self, tmp_path: Path) -> None:
        path = tmp_path / "devices.yaml"
        path.write_text(DEVICES_YAML, encoding="utf-8")

        catalog = DeviceCatalog.load(path)

        assert len(catalog) == 2
        assert list(catalog) == ["iPhone 11", "Desktop Chrome"]
        assert catalog["iPhone 11"]["viewport"] == {"width": 414, "height": 715}
        assert catalog["iPhone 11"]["isMobile"] is True

    def test_load_json(self, tmp_path: Path, devices) -> None:
        """JSON は YAML のサブセットとして読み込めること。"""
        path = tmp_path / "devices.json"
        path.write_text(json.dumps(devices), encoding="utf-8")

        catalog = DeviceCatalog.load(path)

        assert dict(catalog["Pixel 5"]) == devices["Pixel 5"]

    def test_empty_file(self, tmp_path: Path) -> None:
        path = tmp_path / "devices.yaml"
        path.write_text("", encoding="utf-8")

        assert len(DeviceCatalog.load(path)) == 0

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError, match="デバイスファイルが見つかりません"):
            DeviceCatalog.load(tmp_path / "missing.yaml")

    def test_top_level_list(self, tmp_path: Path) -> None:
        path = tmp_path / "devices.yaml"
        path.write_text("- a\n- b\n", encoding="utf-8")

        with pytest.raises(ValueError, match="トップレベル"):
            DeviceCatalog.load(path)

    def test_descriptor_not_mapping(self, tmp_path: Path) -> None:
        path = tmp_path / "devices.yaml"
        path.write_text("Phone: 42\n", encoding="utf-8")

        with pytest.raises(ValueError, match="Phone"):
            DeviceCatalog.load(path)

    def test_malformed_yaml(self, tmp_path: Path) -> None:
        path = tmp_path / "devices.yaml"
        path.write_text("a: [1, 2\n", encoding="utf-8")

        with pytest.raises(ValueError, match="YAML 構文エラー"):
            DeviceCatalog.load(path)


class TestMapping:
    """マッピングとしての振る舞いのテスト。"""

    def test_lookup(self, devices) -> None:
        catalog = DeviceCatalog(devices)

        assert "Pixel 5" in catalog
        assert catalog.get("Nokia") is None

    def test_copies_input(self, devices) -> None:
        """元の辞書を変更してもカタログに影響しないこと。"""
        catalog = DeviceCatalog(devices)
        devices["Pixel 5"]["isMobile"] = False

        assert catalog["Pixel 5"]["isMobile"] is True

    def test_used_by_generator(self, devices) -> None:
        generator = JavaScriptLanguageGenerator(devices=DeviceCatalog(devices))
        header = generator.generate_header(GeneratorOptions(deviceName="Pixel 5"))

        assert "...devices['Pixel 5']," in header
