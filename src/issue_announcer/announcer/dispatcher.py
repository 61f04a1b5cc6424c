"""Fan out one notification per user for a selected issue.

All triggers are submitted to a bounded thread pool and awaited before returning,
so the caller always sees which recipients were notified and which failed.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from concurrent.futures import Future, ThreadPoolExecutor
from dataclasses import dataclass, field

from issue_announcer.announcer.exceptions import DeliveryFailed
from issue_announcer.announcer.issues import Issue
from issue_announcer.announcer.novu.client import NovuClient
from issue_announcer.announcer.users import UserRecord

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class FailedDelivery:
    recipient: str
    error: str


@dataclass(frozen=True, slots=True)
class DispatchSummary:
    """Outcome of one fan-out."""

    delivered: list[str] = field(default_factory=list)
    failed: list[FailedDelivery] = field(default_factory=list)

    @property
    def attempted(self) -> int:
        return len(self.delivered) + len(self.failed)

    def as_dict(self) -> dict[str, object]:
        return {
            "delivered": list(self.delivered),
            "failed": [{"recipient": f.recipient, "error": f.error} for f in self.failed],
        }


def build_payload(user: UserRecord, issue: Issue) -> dict[str, str]:
    """Template payload for one recipient."""

    return {
        "name": user.name,
        "title": issue.title,
        "author": issue.author,
        "labels": issue.joined_labels,
        "url": issue.url,
    }


class NotificationDispatcher:
    """Trigger a notification template once per user."""

    def __init__(self, *, notifier: NovuClient, template: str, max_workers: int = 8) -> None:
        if not template.strip():
            raise ValueError("template is required")
        if max_workers < 1:
            raise ValueError("max_workers must be at least 1")
        self._notifier = notifier
        self._template = template
        self._max_workers = max_workers

    def _send_one(self, user: UserRecord, issue: Issue) -> None:
        self._notifier.trigger(
            template=self._template,
            subscriber_id=user.email,
            email=user.email,
            payload=build_payload(user, issue),
        )

    def dispatch(self, issue: Issue, users: Sequence[UserRecord]) -> DispatchSummary:
        """Notify every user about `issue` and wait for all deliveries to settle."""

        summary = DispatchSummary()
        if not users:
            logger.info("No user records; nothing to dispatch")
            return summary

        workers = min(self._max_workers, len(users))
        with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="notify") as executor:
            futures: list[tuple[UserRecord, Future[None]]] = [
                (user, executor.submit(self._send_one, user, issue)) for user in users
            ]

            for user, future in futures:
                try:
                    future.result()
                except DeliveryFailed as e:
                    logger.warning(
                        "Notification delivery failed",
                        extra={"recipient": e.recipient, "file": user.file, "reason": e.reason},
                    )
                    summary.failed.append(FailedDelivery(recipient=e.recipient, error=e.reason))
                except Exception as e:
                    logger.exception(
                        "Notification delivery raised unexpectedly",
                        extra={"recipient": user.email, "file": user.file},
                    )
                    summary.failed.append(FailedDelivery(recipient=user.email, error=str(e)))
                else:
                    summary.delivered.append(user.email)

        logger.info(
            "Notification dispatch completed",
            extra={
                "template": self._template,
                "issue_url": issue.url,
                "delivered": len(summary.delivered),
                "failed": len(summary.failed),
            },
        )
        return summary
