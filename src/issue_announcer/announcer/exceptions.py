"""Errors raised while announcing an issue.

The REST API maps these to HTTP status codes and the CLI maps them to exit codes.
"""

from __future__ import annotations

from dataclasses import dataclass


class AnnouncerError(Exception):
    """Base class for announcer failures."""


class UpstreamUnavailable(AnnouncerError):
    """The issue search service could not be reached or returned an unusable response."""


class NoIssueFound(AnnouncerError):
    """The issue search returned no candidate issues."""

    def __init__(self, query: str) -> None:
        super().__init__(f"No open issue matched query: {query!r}")
        self.query = query


@dataclass
class MalformedUserRecord(AnnouncerError):
    """A user record file is not a JSON object with string `email` and `name`."""

    file: str
    reason: str

    def __str__(self) -> str:
        return f"Malformed user record {self.file!r}: {self.reason}"


@dataclass
class DeliveryFailed(AnnouncerError):
    """A notification could not be delivered to one recipient."""

    recipient: str
    reason: str

    def __str__(self) -> str:
        return f"Notification to {self.recipient} failed: {self.reason}"
