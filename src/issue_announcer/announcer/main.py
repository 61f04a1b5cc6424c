"""CLI entrypoint for the issue announcer."""

from __future__ import annotations

import argparse
import json
import logging
import sys

from pydantic import ValidationError

from issue_announcer import __version__
from issue_announcer.announcer.config import AnnouncerSettings
from issue_announcer.announcer.dispatcher import NotificationDispatcher
from issue_announcer.announcer.exceptions import NoIssueFound
from issue_announcer.announcer.github.client import GitHubSearchClient
from issue_announcer.announcer.logging import configure_logging
from issue_announcer.announcer.novu.client import NovuClient
from issue_announcer.announcer.service import IssueAnnouncer
from issue_announcer.announcer.users import UserStore

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="issue-announcer",
        description="Pick a random good first issue and optionally notify subscribers",
    )
    parser.add_argument("--version", action="version", version=f"issue-announcer {__version__}")

    subparsers = parser.add_subparsers(dest="command", required=True)

    pick = subparsers.add_parser("pick", help="Pick a random issue and print it as JSON")
    pick.add_argument(
        "--send",
        action="store_true",
        help="Notify every user record in the data directory (uses NOVU_TOKEN)",
    )

    serve = subparsers.add_parser("serve", help="Run the REST API")
    serve.add_argument("--host", default="127.0.0.1", help="Bind address")
    serve.add_argument("--port", type=int, default=8000, help="Bind port")

    return parser


def _run_pick(settings: AnnouncerSettings, *, send: bool) -> int:
    if send and not settings.can_send:
        logger.warning("NOVU_TOKEN is not set; notifications will fail to deliver")

    search = GitHubSearchClient(
        token=settings.github_token,
        base_url=settings.github_base_url,
        timeout=settings.request_timeout_seconds,
    )
    notifier: NovuClient | None = None
    try:
        dispatcher = None
        if send:
            notifier = NovuClient(
                token=settings.novu_token,
                base_url=settings.novu_base_url,
                timeout=settings.request_timeout_seconds,
                pool_size=settings.dispatch_max_workers,
            )
            dispatcher = NotificationDispatcher(
                notifier=notifier,
                template=settings.notification_template,
                max_workers=settings.dispatch_max_workers,
            )

        announcer = IssueAnnouncer(
            search=search,
            query=settings.search_query,
            users=UserStore(settings.users_data_path, policy=settings.malformed_record_policy),
            dispatcher=dispatcher,
        )
        announcement = announcer.announce(send=send)

        print(json.dumps(announcement.issue.as_dict(), indent=2, ensure_ascii=False))
        if announcement.summary is not None:
            print(json.dumps(announcement.summary.as_dict(), indent=2), file=sys.stderr)
        return 0
    finally:
        search.close()
        if notifier is not None:
            notifier.close()


def _run_serve(settings: AnnouncerSettings, *, host: str, port: int) -> int:
    import uvicorn

    from issue_announcer.server.app import create_app

    uvicorn.run(create_app(settings), host=host, port=port, log_level=settings.log_level.lower())
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        settings = AnnouncerSettings()
    except ValidationError as e:
        # Logging isn't configured yet; keep it simple and actionable.
        print("Configuration error (check your .env):", file=sys.stderr)
        print(e, file=sys.stderr)
        return 2

    configure_logging(settings.log_level)

    try:
        if args.command == "pick":
            return _run_pick(settings, send=args.send)
        if args.command == "serve":
            return _run_serve(settings, host=args.host, port=args.port)

        logger.error("Unknown command", extra={"command": args.command})
        return 2

    except NoIssueFound as e:
        logger.warning(str(e), extra={"query": e.query})
        print(str(e), file=sys.stderr)
        return 3

    except Exception:
        logger.exception("Command failed")
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
