"""Good First Issue Announcer.

Picks a random open "good first issue" from GitHub search and, on request,
notifies a list of subscribers about it through Novu:
- configuration loaded from `.env`
- structured logging
- a small CLI and a REST endpoint
"""

__version__ = "0.1.0"

from issue_announcer.announcer.config import AnnouncerSettings

__all__ = ["__version__", "AnnouncerSettings"]
