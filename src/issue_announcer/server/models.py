"""Pydantic models for the REST server."""

from __future__ import annotations

from pydantic import BaseModel, Field

from issue_announcer.announcer.issues import Issue


class ApiIssue(BaseModel):
    title: str
    author: str
    labels: list[str] = Field(default_factory=list)
    url: str

    @classmethod
    def from_issue(cls, issue: Issue) -> ApiIssue:
        return cls.model_validate(issue.as_dict())
