"""JIRA REST client covering issue editing, comments, links, worklogs and agile boards."""

from __future__ import annotations

import logging
import os
from collections.abc import Iterable, Iterator
from contextlib import contextmanager
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any

import requests

from jirakit.models import Board, Comment, Issue, Sprint, Transition, User, Worklog
from jirakit.text import truncate

log = logging.getLogger(__name__)

_JIRA_TIME = "%Y-%m-%dT%H:%M:%S.%f%z"
_AGILE_TIME = "%Y-%m-%dT%H:%M:%S.%fZ"


class JiraError(Exception):
    """Raised when a JIRA request fails; ``status`` holds the HTTP status if any."""

    def __init__(self, message: str, status: int | None = None) -> None:
        super().__init__(message)
        self.status = status


@contextmanager
def _context(what: str) -> Iterator[None]:
    try:
        yield
    except JiraError as exc:
        raise JiraError(f"{what}: {exc}", status=exc.status) from exc


def _parse_time(value: Any, fmt: str, utc: bool = False) -> datetime | None:
    if not isinstance(value, str) or not value:
        return None
    try:
        parsed = datetime.strptime(value, fmt)
    except ValueError:
        return None
    return parsed.replace(tzinfo=timezone.utc) if utc else parsed


def text_to_adf(text: str) -> dict[str, Any]:
    """Wrap plain text in an Atlassian Document Format document."""
    content = [{"type": "text", "text": text}] if text else []
    return {
        "version": 1,
        "type": "doc",
        "content": [{"type": "paragraph", "content": content}],
    }


def process_fields_for_api(fields: dict[str, Any]) -> dict[str, Any]:
    """Convert user-friendly field values into the shapes the JIRA API expects."""
    wrappers = {
        "description": text_to_adf,
        "priority": lambda s: {"name": s},
        "assignee": lambda s: {"accountId": s},
    }
    processed: dict[str, Any] = {}
    for name, value in fields.items():
        wrap = wrappers.get(name)
        processed[name] = wrap(value) if wrap and isinstance(value, str) else value
    return processed


@dataclass
class CreateIssueParams:
    """Parameters for creating an issue of any type."""

    issue_type: str
    summary: str
    project_key: str = ""
    description: str = ""
    priority: str = ""
    labels: list[str] = field(default_factory=list)
    parent: str = ""
    assignee_id: str = ""
    custom_fields: dict[str, Any] = field(default_factory=dict)


class JiraClient:
    """Authenticated access to the JIRA REST and agile APIs."""

    def __init__(
        self,
        base: str,
        email: str,
        token: str,
        project: str = "",
        session: requests.Session | None = None,
    ) -> None:
        self.base = base.rstrip("/")
        self.email = email
        self.token = token
        self.project = project
        self.session = session if session is not None else requests.Session()

    def _request(
        self,
        method: str,
        path: str,
        body: Any = None,
        params: dict[str, Any] | None = None,
    ) -> Any:
        kwargs: dict[str, Any] = {
            "auth": (self.email, self.token),
            "headers": {"Accept": "application/json"},
            "params": params,
        }
        if body is not None:
            kwargs["json"] = body
        try:
            resp = self.session.request(method, self.base + path, **kwargs)
        except requests.RequestException as exc:
            raise JiraError(f"{method} {path}: {exc}") from exc
        if resp.status_code >= 400:
            raise JiraError(
                f"{method} {path}: {truncate(resp.text, 200)} (status {resp.status_code})",
                status=resp.status_code,
            )
        if not resp.content:
            return None
        try:
            return resp.json()
        except ValueError as exc:
            raise JiraError(f"{method} {path}: invalid JSON response") from exc

    # --- Transitions ---

    def get_transitions(self, key: str) -> list[Transition]:
        """Return the workflow transitions available for an issue."""
        log.info("fetching transitions key=%s", key)
        with _context(f"get transitions {key}"):
            data = self._request("GET", f"/rest/api/3/issue/{key}/transitions") or {}
        transitions = [
            Transition(
                id=t.get("id", ""),
                name=t.get("name", ""),
                to=(t.get("to") or {}).get("name", ""),
            )
            for t in data.get("transitions") or []
        ]
        log.info("transitions fetched key=%s count=%d", key, len(transitions))
        return transitions

    def transition_issue(self, key: str, transition_id: str) -> None:
        """Move an issue through a workflow transition."""
        log.info("transitioning issue key=%s transition=%s", key, transition_id)
        body = {"transition": {"id": transition_id}}
        with _context(f"transition issue {key}"):
            self._request("POST", f"/rest/api/3/issue/{key}/transitions", body)
        log.info("issue transitioned key=%s", key)

    # --- Comments ---

    def add_comment(self, key: str, body: str) -> Comment:
        """Add a comment to an issue and return it."""
        log.info("adding comment key=%s", key)
        with _context(f"add comment to {key}"):
            data = self._request(
                "POST", f"/rest/api/3/issue/{key}/comment", {"body": text_to_adf(body)}
            ) or {}
        author = data.get("author") or {}
        log.info("comment added key=%s id=%s", key, data.get("id", ""))
        return Comment(
            id=data.get("id", ""),
            issue_key=key,
            author_name=author.get("displayName", ""),
            author_email=author.get("emailAddress", ""),
            body=body,
            created=_parse_time(data.get("created"), _JIRA_TIME),
        )

    # --- Issues ---

    def create_issue(self, params: CreateIssueParams) -> Issue:
        """Create an issue of any type and return its key and summary."""
        project = params.project_key or self.project
        log.info(
            "creating issue type=%s summary=%s project=%s",
            params.issue_type, params.summary, project,
        )
        fields: dict[str, Any] = {
            "project": {"key": project},
            "issuetype": {"name": params.issue_type},
            "summary": params.summary,
        }
        if params.description:
            fields["description"] = text_to_adf(params.description)
        if params.priority:
            fields["priority"] = {"name": params.priority}
        if params.labels:
            fields["labels"] = list(params.labels)
        if params.parent:
            fields["parent"] = {"key": params.parent}
        if params.assignee_id:
            fields["assignee"] = {"accountId": params.assignee_id}
        fields.update(params.custom_fields)

        with _context("create issue"):
            data = self._request("POST", "/rest/api/3/issue", {"fields": fields}) or {}
        key = data.get("key", "")
        log.info("issue created key=%s type=%s", key, params.issue_type)
        return Issue(key=key, summary=params.summary)

    def edit_issue(self, key: str, fields: dict[str, Any]) -> None:
        """Update arbitrary fields on an existing issue."""
        log.info("editing issue key=%s fields=%d", key, len(fields))
        body = {"fields": process_fields_for_api(fields)}
        with _context(f"edit issue {key}"):
            self._request("PUT", f"/rest/api/3/issue/{key}", body)
        log.info("issue edited key=%s", key)

    # --- Users ---

    def search_users(self, query: str) -> list[User]:
        """Find active users by name or e-mail."""
        log.info("searching users query=%s", query)
        with _context("search users"):
            data = self._request(
                "GET",
                "/rest/api/3/user/search",
                params={"query": query, "maxResults": 10},
            ) or []
        users = [
            User(
                account_id=u.get("accountId", ""),
                display_name=u.get("displayName", ""),
                email_address=u.get("emailAddress", ""),
            )
            for u in data
            if u.get("active")
        ]
        log.info("users found count=%d", len(users))
        return users

    def get_myself(self) -> str:
        """Return the account ID of the authenticated user."""
        with _context("get myself"):
            data = self._request("GET", "/rest/api/3/myself") or {}
        return data.get("accountId", "")

    # --- Links and attachments ---

    def link_issues(self, inward_key: str, outward_key: str, link_type: str) -> None:
        """Create a link of *link_type* between two issues."""
        log.info(
            "linking issues inward=%s outward=%s type=%s", inward_key, outward_key, link_type
        )
        body = {
            "type": {"name": link_type},
            "inwardIssue": {"key": inward_key},
            "outwardIssue": {"key": outward_key},
        }
        with _context("link issues"):
            self._request("POST", "/rest/api/3/issueLink", body)
        log.info("issues linked inward=%s outward=%s", inward_key, outward_key)

    def attach_file(self, key: str, file_path: str | os.PathLike[str]) -> str:
        """Upload a file to an issue and return the attached file name."""
        log.info("attaching file key=%s file=%s", key, file_path)
        filename = os.path.basename(os.fspath(file_path))
        with open(file_path, "rb") as handle:
            try:
                resp = self.session.post(
                    f"{self.base}/rest/api/3/issue/{key}/attachments",
                    auth=(self.email, self.token),
                    headers={"X-Atlassian-Token": "no-check"},
                    files={"file": (filename, handle)},
                )
            except requests.RequestException as exc:
                raise JiraError(f"upload attachment: {exc}") from exc
        if resp.status_code >= 400:
            raise JiraError(
                f"attach file to {key}: {truncate(resp.text, 200)} (status {resp.status_code})",
                status=resp.status_code,
            )
        log.info("file attached key=%s file=%s", key, filename)
        return filename

    # --- Worklog ---

    def add_worklog(
        self, key: str, time_spent: str, comment: str = "", started: str = ""
    ) -> Worklog:
        """Log time against an issue."""
        log.info("adding worklog key=%s timeSpent=%s", key, time_spent)
        body: dict[str, Any] = {"timeSpent": time_spent}
        if comment:
            body["comment"] = text_to_adf(comment)
        if started:
            body["started"] = started
        with _context(f"add worklog to {key}"):
            data = self._request("POST", f"/rest/api/3/issue/{key}/worklog", body) or {}
        log.info("worklog added key=%s id=%s", key, data.get("id", ""))
        return Worklog(
            id=data.get("id", ""),
            issue_key=key,
            author_name=(data.get("author") or {}).get("displayName", ""),
            time_spent=data.get("timeSpent", ""),
            time_spent_seconds=int(data.get("timeSpentSeconds") or 0),
            started=_parse_time(data.get("started"), _JIRA_TIME),
        )

    # --- Watchers ---

    def watch_issue(self, key: str) -> None:
        """Add the authenticated user as a watcher."""
        log.info("watching issue key=%s", key)
        with _context(f"watch issue {key}"):
            account_id = self.get_myself()
            # The watchers endpoint takes a bare JSON string.
            self._request("POST", f"/rest/api/3/issue/{key}/watchers", account_id)
        log.info("now watching issue key=%s", key)

    def unwatch_issue(self, key: str) -> None:
        """Remove the authenticated user from the issue's watchers."""
        log.info("unwatching issue key=%s", key)
        with _context(f"unwatch issue {key}"):
            account_id = self.get_myself()
            self._request(
                "DELETE",
                f"/rest/api/3/issue/{key}/watchers",
                params={"accountId": account_id},
            )
        log.info("unwatched issue key=%s", key)

    # --- Labels ---

    def _update_labels(self, key: str, op: str, labels: Iterable[str]) -> int:
        ops = [{op: label} for label in labels]
        body = {"update": {"labels": ops}}
        self._request("PUT", f"/rest/api/3/issue/{key}", body)
        return len(ops)

    def add_labels(self, key: str, labels: Iterable[str]) -> None:
        """Add labels without removing existing ones."""
        log.info("adding labels key=%s", key)
        with _context(f"add labels to {key}"):
            count = self._update_labels(key, "add", labels)
        log.info("labels added key=%s count=%d", key, count)

    def remove_labels(self, key: str, labels: Iterable[str]) -> None:
        """Remove labels from an issue."""
        log.info("removing labels key=%s", key)
        with _context(f"remove labels from {key}"):
            count = self._update_labels(key, "remove", labels)
        log.info("labels removed key=%s count=%d", key, count)

    # --- Boards and sprints ---

    def list_boards(self) -> list[Board]:
        """Return all boards of the configured project."""
        log.info("listing boards project=%s", self.project)
        with _context("list boards"):
            data = self._request(
                "GET", "/rest/agile/1.0/board", params={"projectKeyOrId": self.project}
            ) or {}
        boards = [
            Board(id=int(b.get("id") or 0), name=b.get("name", ""), type=b.get("type", ""))
            for b in data.get("values") or []
        ]
        log.info("boards found count=%d", len(boards))
        return boards

    def list_sprints(self, board_id: int, state: str = "") -> list[Sprint]:
        """Return a board's sprints, optionally filtered by state."""
        log.info("listing sprints board=%d state=%s", board_id, state)
        params = {"state": state} if state else None
        with _context(f"list sprints for board {board_id}"):
            data = self._request(
                "GET", f"/rest/agile/1.0/board/{board_id}/sprint", params=params
            ) or {}
        sprints = [
            Sprint(
                id=int(s.get("id") or 0),
                name=s.get("name", ""),
                state=s.get("state", ""),
                start_date=_parse_time(s.get("startDate"), _AGILE_TIME, utc=True),
                end_date=_parse_time(s.get("endDate"), _AGILE_TIME, utc=True),
            )
            for s in data.get("values") or []
        ]
        log.info("sprints found board=%d count=%d", board_id, len(sprints))
        return sprints

    # --- Voting ---

    def vote_issue(self, key: str) -> None:
        """Vote for an issue as the authenticated user."""
        log.info("voting for issue key=%s", key)
        with _context(f"vote issue {key}"):
            self._request("POST", f"/rest/api/3/issue/{key}/votes")
        log.info("voted for issue key=%s", key)

    def unvote_issue(self, key: str) -> None:
        """Withdraw the authenticated user's vote."""
        log.info("removing vote from issue key=%s", key)
        with _context(f"unvote issue {key}"):
            self._request("DELETE", f"/rest/api/3/issue/{key}/votes")
        log.info("vote removed from issue key=%s", key)