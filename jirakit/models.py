"""Plain records for JIRA issues, comments, users, boards and sprints."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime


@dataclass
class Issue:
    """A JIRA issue as listed in searches and on boards."""

    key: str = ""
    status: str = ""
    priority: str = ""
    summary: str = ""
    updated: datetime | None = None
    assignee: str = ""  # assignee e-mail address
    board: str = ""
    sprint: str = ""  # empty for kanban boards


@dataclass
class IssueDetail:
    """Full issue fields used for enrichment and editing."""

    key: str = ""
    summary: str = ""
    description: str = ""  # plain text extracted from ADF
    status: str = ""
    priority: str = ""
    labels: list[str] = field(default_factory=list)
    issue_type: str = ""
    assignee: str = ""  # display name
    assignee_id: str = ""
    parent_key: str = ""
    parent_summary: str = ""
    updated: datetime | None = None


@dataclass
class Comment:
    """A single comment on an issue."""

    id: str = ""
    issue_key: str = ""
    author_name: str = ""
    author_email: str = ""
    body: str = ""
    created: datetime | None = None


@dataclass
class IssueLink:
    """A directional link between two issues."""

    source_key: str = ""
    target_key: str = ""
    link_type: str = ""
    direction: str = ""  # "inward" or "outward"
    target_summary: str = ""
    target_status: str = ""
    target_type: str = ""


@dataclass
class Transition:
    """An available workflow transition."""

    id: str = ""
    name: str = ""
    to: str = ""  # target status name


@dataclass
class User:
    """A JIRA user."""

    account_id: str = ""
    display_name: str = ""
    email_address: str = ""


@dataclass
class BoardInfo:
    """A board together with the issues found on it."""

    name: str = ""
    board_type: str = ""  # "scrum" or "kanban"
    sprint_name: str = ""
    issues: list[Issue] = field(default_factory=list)


@dataclass
class Worklog:
    """A single worklog entry."""

    id: str = ""
    issue_key: str = ""
    author_name: str = ""
    time_spent: str = ""
    time_spent_seconds: int = 0
    started: datetime | None = None
    comment: str = ""


@dataclass
class Board:
    """An agile board."""

    id: int = 0
    name: str = ""
    type: str = ""  # "scrum" or "kanban"


@dataclass
class Sprint:
    """An agile sprint."""

    id: int = 0
    name: str = ""
    state: str = ""  # "active", "future" or "closed"
    start_date: datetime | None = None
    end_date: datetime | None = None
    board_name: str = ""