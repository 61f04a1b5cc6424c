"""Announcer components.

- Settings loaded from .env
- Structured logging
- GitHub issue search and random selection
- Novu notification fan-out over a directory of user records
"""
