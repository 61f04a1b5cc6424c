"""Unit tests for settings loading."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import pytest
from pydantic import ValidationError

from issue_announcer.announcer.config import DEFAULT_SEARCH_QUERY, AnnouncerSettings


def test_settings_defaults(make_settings: Callable[..., AnnouncerSettings]) -> None:
    settings = make_settings()

    assert settings.novu_token == ""
    assert settings.can_send is False
    assert settings.novu_base_url == "https://api.novu.co"
    assert settings.notification_template == "good-first-issue"
    assert settings.github_base_url == "https://api.github.com"
    assert settings.search_query == DEFAULT_SEARCH_QUERY
    assert settings.search_query == "is:open is:issue label:good-first-issue"
    assert settings.users_data_path == Path("data")
    assert settings.malformed_record_policy == "skip"
    assert settings.dispatch_max_workers == 8


def test_settings_read_environment(make_settings: Callable[..., AnnouncerSettings]) -> None:
    settings = make_settings(
        NOVU_TOKEN="novu-key",
        ANNOUNCER_DATA_PATH="/srv/users",
        ANNOUNCER_MALFORMED_RECORD_POLICY="abort",
        ANNOUNCER_CORS_ORIGINS="http://a.test, http://b.test,",
    )

    assert settings.can_send is True
    assert settings.users_data_path == Path("/srv/users")
    assert settings.malformed_record_policy == "abort"
    assert settings.parsed_cors_origins() == ["http://a.test", "http://b.test"]


def test_settings_loads_from_dotenv(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.chdir(tmp_path)
    (tmp_path / ".env").write_text(
        "\n".join(["NOVU_TOKEN=from-dotenv", "LOG_LEVEL=DEBUG", ""]),
        encoding="utf-8",
    )

    settings = AnnouncerSettings()

    assert settings.novu_token == "from-dotenv"
    assert settings.log_level == "DEBUG"


def test_settings_reject_unknown_policy(make_settings: Callable[..., AnnouncerSettings]) -> None:
    with pytest.raises(ValidationError):
        make_settings(ANNOUNCER_MALFORMED_RECORD_POLICY="ignore")


def test_settings_bound_dispatch_workers(make_settings: Callable[..., AnnouncerSettings]) -> None:
    with pytest.raises(ValidationError):
        make_settings(ANNOUNCER_DISPATCH_MAX_WORKERS="0")


def test_settings_normalize_log_level(make_settings: Callable[..., AnnouncerSettings]) -> None:
    assert make_settings(LOG_LEVEL=" debug ").log_level == "DEBUG"


def test_settings_reject_unknown_log_level(
    make_settings: Callable[..., AnnouncerSettings],
) -> None:
    with pytest.raises(ValidationError, match="LOG_LEVEL"):
        make_settings(LOG_LEVEL="verbose")
