"""Root conftest: exports .env.test before chat_relay.config is imported.

Settings are built at import time, so the variables must be in the
environment before test collection imports any chat_relay module.
"""
from __future__ import annotations

import os
from pathlib import Path

ENV_FILE = Path(__file__).resolve().parent / ".env.test"


def _load_env_file(path: Path) -> dict[str, str]:
    values: dict[str, str] = {}
    for raw in path.read_text().splitlines():
        line = raw.strip()
        if not line or line.startswith("#") or "=" not in line:
            continue
        key, _, value = line.partition("=")
        values[key.strip()] = value.strip().strip("'\"")
    return values


if ENV_FILE.exists():
    for key, value in _load_env_file(ENV_FILE).items():
        os.environ.setdefault(key, value)
