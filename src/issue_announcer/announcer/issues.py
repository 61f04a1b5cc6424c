"""Issue projection and random selection."""

from __future__ import annotations

import random
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Any

from issue_announcer.announcer.exceptions import NoIssueFound


@dataclass(frozen=True, slots=True)
class Issue:
    """The narrow view of a search result that gets announced."""

    title: str
    author: str
    url: str
    labels: list[str] = field(default_factory=list)

    @classmethod
    def from_search_item(cls, item: dict[str, Any]) -> Issue:
        user = item.get("user")
        author = ""
        if isinstance(user, dict) and isinstance(user.get("login"), str):
            author = user["login"]

        labels: list[str] = []
        raw_labels = item.get("labels")
        if isinstance(raw_labels, list):
            # Keep upstream order; duplicates are passed through as-is.
            for label in raw_labels:
                if isinstance(label, dict) and isinstance(label.get("name"), str):
                    labels.append(label["name"])

        return cls(
            title=str(item.get("title") or ""),
            author=author,
            url=str(item.get("html_url") or ""),
            labels=labels,
        )

    @property
    def joined_labels(self) -> str:
        return ", ".join(self.labels)

    def as_dict(self) -> dict[str, Any]:
        return {
            "title": self.title,
            "author": self.author,
            "labels": list(self.labels),
            "url": self.url,
        }


def select_issue(
    issues: Sequence[Issue], *, rng: random.Random | None = None, query: str = ""
) -> Issue:
    """Pick one issue uniformly at random.

    Raises:
        NoIssueFound: if `issues` is empty.
    """

    if not issues:
        raise NoIssueFound(query)
    chooser = rng or random.Random()
    return issues[chooser.randrange(len(issues))]
