"""
CLI エントリポイント — Typer ベースのコマンドラインインターフェース

recgen コマンドとして以下のサブコマンドを提供する:
  - generate: 記録ファイル → Playwright スクリプト変換
  - describe: 各ステップのタイトル一覧
  - validate: 記録ファイルのスキーマ検証
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import typer

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Typer アプリ定義
# ---------------------------------------------------------------------------

app = typer.Typer(
    help=(
        "recgen — 記録したブラウザ操作を Playwright スクリプトに変換するツール\n\n"
        "基本の流れ:\n"
        "  1. recgen validate recording.yaml   記録ファイルを検証\n"
        "  2. recgen generate recording.yaml -o script.js   スクリプトを生成\n\n"
        "詳しくは各コマンドに --help を付けてください。"
    ),
    no_args_is_help=True,
)


# ---------------------------------------------------------------------------
# generate コマンド
# ---------------------------------------------------------------------------

@app.command()
def generate(
    recording_file: Path = typer.Argument(..., help="記録ファイル（YAML / JSON）"),
    output: Optional[Path] = typer.Option(
        None, "--output", "-o", help="出力先ファイル（省略時は標準出力）",
    ),
    browser: Optional[str] = typer.Option(
        None, "--browser", "-b", help="ブラウザ種別 (chromium / firefox / webkit)",
    ),
    device: Optional[str] = typer.Option(
        None, "--device", "-d", help="デバイスプリセット名",
    ),
    devices_file: Optional[Path] = typer.Option(
        None, "--devices-file", help="デバイス記述子ファイル（YAML / JSON）",
    ),
    save_storage: Optional[str] = typer.Option(
        None, "--save-storage", help="生成スクリプトで storageState を保存するパス",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="デバッグログを出力する"),
) -> None:
    """記録ファイルを Playwright（JavaScript）スクリプトに変換する。"""
    from .config import apply_cli_args, load_config_from_env
    from .javascript import JavaScriptLanguageGenerator
    from .recording import RecordingLoader
    from .script import ScriptWriter

    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s - %(message)s")

    try:
        # 環境変数 → CLI 引数の順で設定を構築
        config = apply_cli_args(
            load_config_from_env(),
            browser_name=browser,
            device_name=device,
            devices_file=devices_file,
            save_storage=save_storage,
        )

        recording = RecordingLoader().load(recording_file)
        options = config.apply_to(recording.options)
        writer = ScriptWriter(JavaScriptLanguageGenerator(devices=config.load_devices()))
        storage = config.save_storage or recording.saveStorage

        if output is None:
            typer.echo(writer.build(recording.actions, options, storage), nl=False)
        else:
            writer.write(recording.actions, options, output, storage)
            typer.echo(f"生成完了: {output}")
    except Exception as exc:
        typer.echo(f"エラー: {exc}", err=True)
        raise typer.Exit(code=1)


# ---------------------------------------------------------------------------
# describe コマンド
# ---------------------------------------------------------------------------

@app.command()
def describe(
    recording_file: Path = typer.Argument(..., help="記録ファイル（YAML / JSON）"),
) -> None:
    """記録ファイルの各ステップを英語タイトルで一覧表示する。"""
    from .recording import RecordingLoader
    from .script import describe as describe_actions

    try:
        recording = RecordingLoader().load(recording_file)
    except Exception as exc:
        typer.echo(f"エラー: {exc}", err=True)
        raise typer.Exit(code=1)

    for index, title in enumerate(describe_actions(recording.actions), start=1):
        typer.echo(f"{index:>3}. {title}")


# ---------------------------------------------------------------------------
# validate コマンド
# ---------------------------------------------------------------------------

@app.command()
def validate(
    recording_file: Path = typer.Argument(..., help="検証する記録ファイル"),
) -> None:
    """記録ファイルのスキーマ検証を行う。"""
    from .recording import RecordingLoader

    errors = RecordingLoader().validate(recording_file)

    if not errors:
        typer.echo(f"✓ {recording_file}: スキーマ検証 OK")
        return

    for err in errors:
        line_info = f" (行 {err.line})" if err.line else ""
        typer.echo(f"✗ {err.location}{line_info}: {err.message}", err=True)
    raise typer.Exit(code=1)
