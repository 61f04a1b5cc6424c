"""Test configuration and fixtures."""

from __future__ import annotations

import json
from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest

from issue_announcer.announcer.config import AnnouncerSettings

_SETTINGS_ENV_VARS = (
    "NOVU_TOKEN",
    "NOVU_BASE_URL",
    "ANNOUNCER_NOTIFICATION_TEMPLATE",
    "ANNOUNCER_GITHUB_TOKEN",
    "GITHUB_BASE_URL",
    "ANNOUNCER_SEARCH_QUERY",
    "ANNOUNCER_DATA_PATH",
    "ANNOUNCER_MALFORMED_RECORD_POLICY",
    "ANNOUNCER_DISPATCH_MAX_WORKERS",
    "ANNOUNCER_REQUEST_TIMEOUT_SECONDS",
    "LOG_LEVEL",
    "ANNOUNCER_CORS_ORIGINS",
)


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep developer environment variables out of the tests."""
    for name in _SETTINGS_ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def data_dir(tmp_path: Path) -> Path:
    """Provide an empty user-record directory."""
    path = tmp_path / "data"
    path.mkdir()
    return path


@pytest.fixture
def write_user(data_dir: Path) -> Callable[[str, Any], Path]:
    """Write a user record file; dicts are JSON-encoded, strings written verbatim."""

    def _write(filename: str, content: Any) -> Path:
        path = data_dir / filename
        text = content if isinstance(content, str) else json.dumps(content)
        path.write_text(text, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def make_settings(
    monkeypatch: pytest.MonkeyPatch,
) -> Callable[..., AnnouncerSettings]:
    """Build settings from environment variables, ignoring any local `.env`."""

    def _make(**env: str) -> AnnouncerSettings:
        for name, value in env.items():
            monkeypatch.setenv(name, value)
        return AnnouncerSettings(_env_file=None)

    return _make


@pytest.fixture
def fix_typo_item() -> dict[str, Any]:
    """A single raw issue search item."""
    return {
        "title": "Fix typo",
        "user": {"login": "alice"},
        "labels": [{"name": "good-first-issue"}],
        "html_url": "https://x/1",
    }
