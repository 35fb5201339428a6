"""
recgen CLI エントリポイント

python -m recgen で CLI を起動する。

使用例:
  python -m recgen generate recording.yaml -o script.js
  python -m recgen describe recording.yaml
"""

from __future__ import annotations

from .cli import app

app()
