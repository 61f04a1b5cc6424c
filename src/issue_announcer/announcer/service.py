"""Announce a random good first issue.

The workflow is linear and request scoped:
- search for candidate issues
- pick one at random
- optionally notify every user record about it
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass

from issue_announcer.announcer.dispatcher import DispatchSummary, NotificationDispatcher
from issue_announcer.announcer.github.client import GitHubSearchClient
from issue_announcer.announcer.issues import Issue, select_issue
from issue_announcer.announcer.users import UserStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class Announcement:
    """The selected issue and, on the send path, the dispatch outcome."""

    issue: Issue
    summary: DispatchSummary | None = None


class IssueAnnouncer:
    def __init__(
        self,
        *,
        search: GitHubSearchClient,
        query: str,
        users: UserStore | None = None,
        dispatcher: NotificationDispatcher | None = None,
        rng: random.Random | None = None,
    ) -> None:
        self._search = search
        self._query = query
        self._users = users
        self._dispatcher = dispatcher
        self._rng = rng or random.Random()

    def pick_issue(self) -> Issue:
        issues = self._search.search_issues(query=self._query)
        issue = select_issue(issues, rng=self._rng, query=self._query)
        logger.info("Selected issue", extra={"url": issue.url, "candidates": len(issues)})
        return issue

    def announce(self, *, send: bool = False) -> Announcement:
        """Pick an issue and, when `send` is true, notify every user about it.

        Raises:
            UpstreamUnavailable: the issue search failed.
            NoIssueFound: the search returned nothing.
            MalformedUserRecord: a user record is malformed and the store aborts.
            ValueError: `send` is true but no user store or dispatcher is configured.
        """

        if send and (self._users is None or self._dispatcher is None):
            raise ValueError("Sending requires a user store and a notification dispatcher")

        issue = self.pick_issue()
        if not send:
            return Announcement(issue=issue)

        assert self._users is not None and self._dispatcher is not None
        users = self._users.load()
        summary = self._dispatcher.dispatch(issue, users)
        return Announcement(issue=issue, summary=summary)
