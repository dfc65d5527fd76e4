"""Render weekly status reports as markdown, Slack or plain text."""

from __future__ import annotations

from collections.abc import Iterator

from jirakit.reports import WeeklyStatusData

__all__ = ["render_weekly_status"]


def _slack(data: WeeklyStatusData, server: str) -> Iterator[str]:
    yield f"*{data.user_name}*\n\n"
    for proj in data.projects:
        link = f"<{server}/browse/{proj.issue_key}|{proj.issue_key}>"
        yield f"- {proj.project_name} ({link})\n"
        for bullet in proj.bullets:
            yield f"  - {bullet}\n"


def _text(data: WeeklyStatusData, server: str) -> Iterator[str]:
    yield f"{data.user_name}\n"
    for proj in data.projects:
        yield (
            f"* {proj.project_name} ({proj.issue_key} — "
            f"{server}/browse/{proj.issue_key})\n"
        )
        for bullet in proj.bullets:
            yield f"  * {bullet}\n"


def _markdown(data: WeeklyStatusData, server: str) -> Iterator[str]:
    yield f"# {data.user_name}\n\n"
    for proj in data.projects:
        link = f"[{proj.issue_key}]({server}/browse/{proj.issue_key})"
        yield f"* **{proj.project_name}** ({link})\n"
        for bullet in proj.bullets:
            yield f"  * {bullet}\n"


_RENDERERS = {"slack": _slack, "text": _text, "markdown": _markdown}


def render_weekly_status(
    data: WeeklyStatusData, jira_server: str, output_format: str = "markdown"
) -> str:
    """Render a weekly status report; unknown formats fall back to markdown."""
    renderer = _RENDERERS.get(output_format, _markdown)
    return "".join(renderer(data, jira_server))