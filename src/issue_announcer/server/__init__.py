"""FastAPI server adapter for issue-announcer.

This module exposes the announcer over HTTP.

Design intent:
- Keep business logic in `issue_announcer.announcer.*`
- Keep server-specific concerns (routing, CORS, status mapping) here
"""

from __future__ import annotations

__all__ = ["create_app"]

from issue_announcer.server.app import create_app
