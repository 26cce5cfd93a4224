# backend/tests/conftest.py
"""
Pytest configuration for Treasure Marketplace webhook relay tests.

- Ensures that the project root (backend/) is added to sys.path
  so that `import app.*` works correctly in tests.
- Ensures required environment variables for tests are set
  with safe dummy values (LIST_WEBHOOK, SOLD_WEBHOOK).
"""

import os
import sys
from datetime import datetime, timezone
from pathlib import Path

import pytest


def _ensure_project_root_in_sys_path() -> None:
    # This file is located at: backend/tests/conftest.py
    # parents[1] -> backend/
    project_root = Path(__file__).resolve().parents[1]
    project_root_str = str(project_root)

    if project_root_str not in sys.path:
        sys.path.insert(0, project_root_str)


def _ensure_test_env_vars() -> None:
    """
    Set dummy webhook destinations required for tests.

    These URLs never resolve to a real Discord webhook.
    """
    os.environ.setdefault("LIST_WEBHOOK", "https://discord.example/api/webhooks/list/token")
    os.environ.setdefault("SOLD_WEBHOOK", "https://discord.example/api/webhooks/sold/token")


_ensure_project_root_in_sys_path()
_ensure_test_env_vars()


FIXED_NOW = datetime(2026, 10, 19, 12, 0, 0, tzinfo=timezone.utc)
FIXED_NOW_MS = int(FIXED_NOW.timestamp() * 1000)
HOUR_MS = 60 * 60 * 1000


@pytest.fixture
def fixed_now() -> datetime:
    return FIXED_NOW


@pytest.fixture
def event_body() -> dict:
    """list イベントの最小限の正常ボディ。"""
    return {
        "address": "0xabc",
        "collection": "Smol Brains",
        "image": "https://cdn.example/smol.png",
        "name": "Smol #1",
        "price": "100",
        "quantity": 3,
        "user": "0xseller",
    }
