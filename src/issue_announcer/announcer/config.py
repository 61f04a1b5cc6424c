"""Configuration for the issue announcer.

Configuration is loaded from:
- environment variables
- and a local `.env` file (if present)

The Novu token keeps the name the notification provider documents (`NOVU_TOKEN`).
It is not required at startup: announcing without notifications works without any
credentials. Without it, every notification on the send path is reported as undelivered.
"""

from __future__ import annotations

from pathlib import Path
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_SEARCH_QUERY = "is:open is:issue label:good-first-issue"
DEFAULT_NOTIFICATION_TEMPLATE = "good-first-issue"

MalformedRecordPolicy = Literal["skip", "abort"]

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class AnnouncerSettings(BaseSettings):
    """Settings for the announcer service, CLI and REST API.

    Environment variables:
    - NOVU_TOKEN                         (needed for notifications to be delivered)
    - NOVU_BASE_URL                      (optional)
    - ANNOUNCER_GITHUB_TOKEN             (optional, raises the search rate limit)
    - GITHUB_BASE_URL                    (optional)
    - ANNOUNCER_DATA_PATH                (optional)
    - ANNOUNCER_MALFORMED_RECORD_POLICY  (optional, `skip` or `abort`)
    - LOG_LEVEL                          (optional, DEBUG|INFO|WARNING|ERROR|CRITICAL)

    Notes:
        Pydantic-settings supports overriding the env file in tests via:
        `AnnouncerSettings(_env_file=path_to_env)`.
    """

    novu_token: str = Field(
        default="",
        validation_alias="NOVU_TOKEN",
        description="Novu API key used to trigger notifications",
    )
    novu_base_url: str = Field(
        default="https://api.novu.co",
        validation_alias="NOVU_BASE_URL",
        description="Novu API base URL (useful for self-hosted Novu)",
    )
    notification_template: str = Field(
        default=DEFAULT_NOTIFICATION_TEMPLATE,
        validation_alias="ANNOUNCER_NOTIFICATION_TEMPLATE",
        description="Novu workflow (template) identifier triggered per recipient",
    )

    github_token: str = Field(
        default="",
        validation_alias="ANNOUNCER_GITHUB_TOKEN",
        description="Optional GitHub token; issue search works anonymously without it",
    )
    github_base_url: str = Field(
        default="https://api.github.com",
        validation_alias="GITHUB_BASE_URL",
        description="GitHub API base URL (useful for GitHub Enterprise)",
    )
    search_query: str = Field(
        default=DEFAULT_SEARCH_QUERY,
        validation_alias="ANNOUNCER_SEARCH_QUERY",
        description="Issue search query used to find candidate issues",
    )

    users_data_path: Path = Field(
        default=Path("data"),
        validation_alias="ANNOUNCER_DATA_PATH",
        description="Directory holding one JSON user record per file",
    )
    malformed_record_policy: MalformedRecordPolicy = Field(
        default="skip",
        validation_alias="ANNOUNCER_MALFORMED_RECORD_POLICY",
        description=(
            "What to do with a user record that is not valid JSON or lacks email/name: "
            "'skip' logs and continues, 'abort' fails the request before anything is sent."
        ),
    )

    dispatch_max_workers: int = Field(
        default=8,
        validation_alias="ANNOUNCER_DISPATCH_MAX_WORKERS",
        description="Maximum number of notification triggers in flight at once",
        ge=1,
        le=64,
    )
    request_timeout_seconds: float = Field(
        default=30.0,
        validation_alias="ANNOUNCER_REQUEST_TIMEOUT_SECONDS",
        description="Timeout applied to every outbound HTTP call",
        gt=0,
    )

    log_level: str = Field(
        default="INFO",
        validation_alias="LOG_LEVEL",
        description="Root logging level",
    )

    cors_origins: str = Field(
        default="http://localhost:3000",
        validation_alias="ANNOUNCER_CORS_ORIGINS",
        description="Comma-separated list of allowed CORS origins.",
    )

    model_config = SettingsConfigDict(env_prefix="", env_file=".env", extra="ignore")

    @field_validator("log_level")
    @classmethod
    def _known_log_level(cls, value: str) -> str:
        level = value.strip().upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"LOG_LEVEL must be one of {', '.join(LOG_LEVELS)}")
        return level

    def parsed_cors_origins(self) -> list[str]:
        return [o.strip() for o in self.cors_origins.split(",") if o.strip()]

    @property
    def can_send(self) -> bool:
        """Whether a notification token is configured."""

        return bool(self.novu_token.strip())
