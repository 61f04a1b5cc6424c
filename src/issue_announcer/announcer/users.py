"""Read-only store of notification recipients.

Each recipient is one JSON file in a data directory, e.g. `data/ada.json`:

    {"email": "ada@example.com", "name": "Ada"}

Records are read fresh on every call; the directory is owned by whoever manages the
subscriber list.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, ValidationError

from issue_announcer.announcer.config import MalformedRecordPolicy
from issue_announcer.announcer.exceptions import MalformedUserRecord

logger = logging.getLogger(__name__)


class UserRecord(BaseModel):
    """A notification recipient loaded from disk."""

    model_config = ConfigDict(extra="allow")

    email: str
    name: str

    # Source filename, kept for traceability in logs.
    file: str = ""


def discover_user_files(data_dir: Path) -> list[Path]:
    """Return user record files in a stable order."""

    if not data_dir.exists():
        return []

    candidates = [p for p in data_dir.iterdir() if p.is_file()]
    return sorted(candidates, key=lambda p: p.name)


def parse_user_record(path: Path) -> UserRecord:
    """Parse one user record file.

    Raises:
        MalformedUserRecord: if the file is not a JSON object with string `email`
            and `name`.
    """

    try:
        raw: Any = json.loads(path.read_text(encoding="utf-8"))
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise MalformedUserRecord(file=path.name, reason=f"invalid JSON ({e})") from e

    if not isinstance(raw, dict):
        raise MalformedUserRecord(file=path.name, reason="expected a JSON object")

    try:
        return UserRecord.model_validate({**raw, "file": path.name}, strict=True)
    except ValidationError as e:
        missing = ", ".join(str(err["loc"][0]) for err in e.errors() if err["loc"])
        raise MalformedUserRecord(file=path.name, reason=f"invalid fields: {missing}") from e


class UserStore:
    """Directory-backed store of :class:`UserRecord`."""

    def __init__(self, path: Path, *, policy: MalformedRecordPolicy = "skip") -> None:
        self._path = path
        self._policy = policy

    @property
    def path(self) -> Path:
        return self._path

    def load(self) -> list[UserRecord]:
        """Load every user record.

        With the `abort` policy the first malformed record is raised and nothing is
        returned. With `skip` it is logged and the remaining records are returned.
        """

        users: list[UserRecord] = []
        for path in discover_user_files(self._path):
            try:
                users.append(parse_user_record(path))
            except MalformedUserRecord as e:
                if self._policy == "abort":
                    logger.error(str(e), extra={"file": e.file})
                    raise
                logger.warning(
                    "Skipping malformed user record", extra={"file": e.file, "reason": e.reason}
                )

        logger.debug("Loaded user records", extra={"path": str(self._path), "count": len(users)})
        return users
