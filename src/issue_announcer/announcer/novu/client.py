"""Novu notification client.

Only the event trigger endpoint is used: one call per recipient, addressed to a
workflow (template) identifier.

A missing token is not an error at construction time. Each trigger then fails as
an undeliverable notification, the same way a rejected token does.
"""

from __future__ import annotations

import logging
from typing import Any

import requests
from requests.adapters import HTTPAdapter

from issue_announcer.announcer.exceptions import DeliveryFailed

logger = logging.getLogger(__name__)


class NovuClient:
    """Small wrapper around the Novu REST API."""

    def __init__(
        self,
        *,
        token: str,
        base_url: str = "https://api.novu.co",
        timeout: float = 30.0,
        pool_size: int = 10,
        session: requests.Session | None = None,
    ) -> None:
        if pool_size < 1:
            raise ValueError("pool_size must be at least 1")

        self._token = token.strip()
        self._rest_base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._session = session or requests.Session()

        # Pool sized to the number of concurrent triggers.
        adapter = HTTPAdapter(pool_connections=1, pool_maxsize=pool_size)
        self._session.mount("https://", adapter)
        self._session.mount("http://", adapter)

        self._session.headers.update(
            {
                "Content-Type": "application/json",
                "User-Agent": "issue-announcer",
            }
        )
        if self._token:
            self._session.headers["Authorization"] = f"ApiKey {self._token}"

    @property
    def has_token(self) -> bool:
        return bool(self._token)

    def _events_url(self, *, path: str) -> str:
        path = path.lstrip("/")
        return f"{self._rest_base_url}/v1/events/{path}"

    def trigger(
        self,
        *,
        template: str,
        subscriber_id: str,
        email: str,
        payload: dict[str, Any],
    ) -> str | None:
        """Trigger `template` for one subscriber.

        Returns:
            The Novu transaction id when the response carries one.

        Raises:
            DeliveryFailed: when no token is configured, on network errors or on
                non-2xx responses.
        """

        if not self._token:
            raise DeliveryFailed(recipient=email, reason="NOVU_TOKEN is not configured")

        body = {
            "name": template,
            "to": {"subscriberId": subscriber_id, "email": email},
            "payload": payload,
        }
        try:
            resp = self._session.post(
                self._events_url(path="trigger"), json=body, timeout=self._timeout
            )
            resp.raise_for_status()
        except requests.HTTPError as e:
            status = e.response.status_code if e.response is not None else None
            raise DeliveryFailed(recipient=email, reason=f"HTTP {status}") from e
        except requests.RequestException as e:
            raise DeliveryFailed(recipient=email, reason=str(e)) from e

        transaction_id: str | None = None
        try:
            data = resp.json().get("data")
        except (ValueError, AttributeError):
            data = None
        if isinstance(data, dict) and isinstance(data.get("transactionId"), str):
            transaction_id = data["transactionId"]

        logger.debug(
            "Notification triggered",
            extra={"template": template, "recipient": email, "transaction_id": transaction_id},
        )
        return transaction_id

    def close(self) -> None:
        self._session.close()
