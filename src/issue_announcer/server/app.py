"""FastAPI app factory.

Endpoints are thin wrappers over :class:`issue_announcer.announcer.service.IssueAnnouncer`.
"""

from __future__ import annotations

import logging
import random

from fastapi import FastAPI, HTTPException, Query, Response
from fastapi.middleware.cors import CORSMiddleware

from issue_announcer import __version__
from issue_announcer.announcer.config import AnnouncerSettings
from issue_announcer.announcer.dispatcher import NotificationDispatcher
from issue_announcer.announcer.exceptions import (
    MalformedUserRecord,
    NoIssueFound,
    UpstreamUnavailable,
)
from issue_announcer.announcer.github.client import GitHubSearchClient
from issue_announcer.announcer.novu.client import NovuClient
from issue_announcer.announcer.service import IssueAnnouncer
from issue_announcer.announcer.users import UserStore
from issue_announcer.server.models import ApiIssue

logger = logging.getLogger(__name__)

DELIVERED_HEADER = "X-Notifications-Delivered"
FAILED_HEADER = "X-Notifications-Failed"


def create_app(
    settings: AnnouncerSettings | None = None,
    *,
    search: GitHubSearchClient | None = None,
    notifier: NovuClient | None = None,
    users: UserStore | None = None,
    rng: random.Random | None = None,
) -> FastAPI:
    """Build the API.

    Collaborators default to clients built from `settings`; tests inject fakes.
    """

    settings = settings or AnnouncerSettings()

    app = FastAPI(
        title="Good First Issue Announcer",
        version=__version__,
        description="Pick a random good first issue and optionally notify subscribers.",
        openapi_url="/api/openapi.json",
        docs_url="/api/docs",
        redoc_url="/api/redoc",
    )
    app.state.settings = settings

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.parsed_cors_origins(),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    search = search or GitHubSearchClient(
        token=settings.github_token,
        base_url=settings.github_base_url,
        timeout=settings.request_timeout_seconds,
    )
    notifier = notifier or NovuClient(
        token=settings.novu_token,
        base_url=settings.novu_base_url,
        timeout=settings.request_timeout_seconds,
        pool_size=settings.dispatch_max_workers,
    )
    if not settings.can_send:
        logger.warning("NOVU_TOKEN is not set; notifications will fail to deliver")
    users = users or UserStore(settings.users_data_path, policy=settings.malformed_record_policy)
    dispatcher = NotificationDispatcher(
        notifier=notifier,
        template=settings.notification_template,
        max_workers=settings.dispatch_max_workers,
    )
    announcer = IssueAnnouncer(
        search=search,
        query=settings.search_query,
        users=users,
        dispatcher=dispatcher,
        rng=rng,
    )

    @app.get("/api/health")
    def health() -> dict[str, str]:
        return {"status": "ok"}

    @app.api_route("/api/issues", methods=["GET", "POST"], response_model=ApiIssue)
    def random_issue(
        response: Response,
        send: str | None = Query(
            default=None,
            description="Any non-empty value notifies every user record about the issue.",
        ),
    ) -> ApiIssue:
        should_send = bool(send)

        try:
            announcement = announcer.announce(send=should_send)
        except NoIssueFound as e:
            raise HTTPException(status_code=404, detail="No open good first issue found") from e
        except UpstreamUnavailable as e:
            raise HTTPException(status_code=502, detail=str(e)) from e
        except MalformedUserRecord as e:
            raise HTTPException(status_code=500, detail=str(e)) from e

        if announcement.summary is not None:
            response.headers[DELIVERED_HEADER] = str(len(announcement.summary.delivered))
            response.headers[FAILED_HEADER] = str(len(announcement.summary.failed))

        return ApiIssue.from_issue(announcement.issue)

    return app
