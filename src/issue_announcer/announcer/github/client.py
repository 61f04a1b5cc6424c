"""GitHub issue search client.

Thin wrapper over the REST search endpoint. Search works anonymously, so the token
is optional here.
"""

from __future__ import annotations

import logging
from typing import Any

import requests

from issue_announcer.announcer.exceptions import UpstreamUnavailable
from issue_announcer.announcer.issues import Issue

logger = logging.getLogger(__name__)


class GitHubSearchClient:
    """Small wrapper around the GitHub issue search API."""

    def __init__(
        self,
        *,
        token: str = "",
        base_url: str = "https://api.github.com",
        timeout: float = 30.0,
        session: requests.Session | None = None,
    ) -> None:
        self._rest_base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._session = session or requests.Session()
        self._session.headers.update(
            {
                "Accept": "application/vnd.github+json",
                "X-GitHub-Api-Version": "2022-11-28",
                "User-Agent": "issue-announcer",
            }
        )
        if token.strip():
            self._session.headers["Authorization"] = f"Bearer {token.strip()}"

    def _search_url(self, *, path: str) -> str:
        path = path.lstrip("/")
        return f"{self._rest_base_url}/{path}"

    def search_issue_items(self, *, query: str) -> list[dict[str, Any]]:
        """Return the raw `items` of the first page of an issue search.

        Raises:
            UpstreamUnavailable: on network errors, non-2xx responses (including rate
                limiting) and responses without an `items` list.
        """

        if not query.strip():
            raise ValueError("query must be non-empty")

        url = self._search_url(path="search/issues")
        logger.debug("Searching issues", extra={"query": query})
        try:
            resp = self._session.get(url, params={"q": query}, timeout=self._timeout)
            resp.raise_for_status()
            payload = resp.json()
        except requests.HTTPError as e:
            status = e.response.status_code if e.response is not None else None
            logger.error("Issue search failed", extra={"query": query, "status": status})
            raise UpstreamUnavailable(f"Issue search returned HTTP {status}") from e
        except (requests.RequestException, ValueError) as e:
            logger.error("Issue search failed", extra={"query": query, "error": str(e)})
            raise UpstreamUnavailable(f"Issue search failed: {e}") from e

        items = payload.get("items") if isinstance(payload, dict) else None
        if not isinstance(items, list):
            raise UpstreamUnavailable("Unexpected search response: missing items")

        return [item for item in items if isinstance(item, dict)]

    def search_issues(self, *, query: str) -> list[Issue]:
        """Search issues and project each result to :class:`Issue`."""

        issues = [Issue.from_search_item(item) for item in self.search_issue_items(query=query)]
        logger.info("Issue search completed", extra={"query": query, "count": len(issues)})
        return issues

    def close(self) -> None:
        self._session.close()
