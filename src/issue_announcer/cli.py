"""Console script entrypoint.

The CLI is implemented in `issue_announcer.announcer.main`.
"""

from __future__ import annotations

from issue_announcer.announcer.main import main

__all__ = ["main"]


if __name__ == "__main__":
    raise SystemExit(main())
