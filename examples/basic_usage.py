#!/usr/bin/env python3
"""Programmatic announcement example.

This demonstrates using the announcer components directly:

* load settings from `.env`
* search for open good first issues and pick one at random
* optionally notify every user record in the data directory

The label to search for is passed as an argument (not read from `.env`).
"""

from __future__ import annotations

import argparse
from typing import Sequence

from issue_announcer.announcer.config import AnnouncerSettings
from issue_announcer.announcer.dispatcher import NotificationDispatcher
from issue_announcer.announcer.github.client import GitHubSearchClient
from issue_announcer.announcer.logging import configure_logging
from issue_announcer.announcer.novu.client import NovuClient
from issue_announcer.announcer.service import IssueAnnouncer
from issue_announcer.announcer.users import UserStore


def _parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Announce a random issue (programmatic example).")
    parser.add_argument("--label", default="good-first-issue", help="Issue label to search for")
    parser.add_argument("--send", action="store_true", help="Notify users (uses NOVU_TOKEN)")
    return parser.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> int:
    args = _parse_args(argv)

    settings = AnnouncerSettings()
    configure_logging(settings.log_level)

    search = GitHubSearchClient(token=settings.github_token, base_url=settings.github_base_url)
    dispatcher = None
    if args.send:
        if not settings.can_send:
            print("NOVU_TOKEN is not set; every notification will be reported as failed")
        dispatcher = NotificationDispatcher(
            notifier=NovuClient(token=settings.novu_token, base_url=settings.novu_base_url),
            template=settings.notification_template,
        )

    announcer = IssueAnnouncer(
        search=search,
        query=f"is:open is:issue label:{args.label}",
        users=UserStore(settings.users_data_path),
        dispatcher=dispatcher,
    )

    try:
        announcement = announcer.announce(send=args.send)
    finally:
        search.close()

    issue = announcement.issue
    print(f"{issue.title} by {issue.author}")
    print(f"Labels: {issue.joined_labels}")
    print(f"URL: {issue.url}")
    if announcement.summary is not None:
        print(f"Notified {len(announcement.summary.delivered)} user(s)")
        for failure in announcement.summary.failed:
            print(f"Failed: {failure.recipient} ({failure.error})")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
