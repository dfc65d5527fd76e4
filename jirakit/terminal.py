"""Rich terminal display of summaries, previews, digests and other reports."""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence

from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from jirakit.models import BoardInfo, Issue, IssueDetail
from jirakit.reports import (
    BacklogHealthData,
    CommentSummaryData,
    DigestData,
    PageAnalytics,
    SimilarIssue,
    WeeklyStatusData,
)
from jirakit.text import join_labels, truncate

__all__ = [
    "colorize",
    "display_summary",
    "display_epic_preview",
    "display_enrich_preview",
    "display_query_results",
    "display_digest",
    "display_backlog_health",
    "display_comment_summary",
    "display_weekly_status",
    "display_similar_issues",
    "display_confluence_analytics",
]

_PRIORITY_COLORS = {
    "Highest": "bright_red",
    "High": "red",
    "Medium": "yellow",
    "Low": "green",
    "Lowest": "bright_green",
}

_STATUS_COLORS = {
    "To Do": "white",
    "In Progress": "cyan",
    "In Review": "magenta",
    "Done": "green",
}

_OVERALL_STATUS_COLORS = {
    "on track": "green",
    "at risk": "yellow",
    "blocked": "red",
}


def colorize(text: str, colors: Mapping[str, str]) -> Text:
    """Return *text* styled with its colour from *colors*, or unstyled if absent."""
    return Text(text, style=colors.get(text, ""))


def _out(console: Console | None) -> Console:
    return console if console is not None else Console()


def _plain(console: Console, text: str | Text = "", style: str = "") -> None:
    if isinstance(text, str):
        text = Text(text, style=style)
    console.print(text, highlight=False)


def _box(console: Console, title: str, body: str | Text) -> None:
    content = body if isinstance(body, Text) else Text(body)
    console.print(Panel(content, title=Text(title)))


def _section(console: Console, title: str) -> None:
    console.print()
    _plain(console, title, style="bold cyan")


def _table(console: Console, headers: Sequence[str], rows: Iterable[Sequence[str | Text]]) -> None:
    table = Table(show_header=True)
    for header in headers:
        table.add_column(header)
    for row in rows:
        table.add_row(*(cell if isinstance(cell, Text) else Text(cell) for cell in row))
    console.print(table)


def _bullets(console: Console, items: Iterable[tuple[int, str]]) -> None:
    for level, item in items:
        _plain(console, "  " * level + "• " + item)


def _bullet_section(console: Console, title: str, items: Sequence[str]) -> None:
    if items:
        _section(console, title)
        _bullets(console, ((0, item) for item in items))


def _issue_table(console: Console, title: str, issues: Iterable[Issue]) -> None:
    rows = [
        (
            issue.key,
            colorize(issue.status, _STATUS_COLORS),
            colorize(issue.priority, _PRIORITY_COLORS),
            truncate(issue.summary, 50),
        )
        for issue in issues
    ]
    if title:
        _section(console, title)
    _table(console, ("Key", "Status", "Pri", "Summary"), rows)


def display_summary(
    boards: Iterable[BoardInfo], open_issues: Iterable[Issue], console: Console | None = None
) -> None:
    """Show board issues and all open issues."""
    out = _out(console)
    boards = list(boards)
    open_issues = list(open_issues)
    out.print()
    for board in boards:
        if board.board_type == "scrum" and board.sprint_name:
            _box(out, f"Sprint - {board.name}", board.sprint_name)
        else:
            _box(out, "Kanban Board", board.name)
        _issue_table(out, f"{board.name} Issues", board.issues)
    if not boards:
        _plain(out, "No board issues found.", style="bright_white")
    if open_issues:
        _issue_table(out, "All Open Issues", open_issues)
    else:
        _plain(out, "No open issues assigned to you!", style="green")
    out.print()


def display_epic_preview(
    summary: str,
    description: str,
    criteria: Sequence[str],
    priority: str,
    labels: Sequence[str],
    console: Console | None = None,
) -> None:
    """Show an epic before it is created."""
    out = _out(console)
    out.print()
    _box(out, "EPIC Summary", summary)
    _box(out, "Description", description)
    _bullet_section(out, "Acceptance Criteria", list(criteria))
    _plain(out, f"  Priority: {priority}")
    _plain(out, f"  Labels:   {join_labels(labels)}")
    out.print()


def display_enrich_preview(
    issue: IssueDetail,
    desc: str,
    criteria: Sequence[str],
    priority: str,
    labels: Sequence[str],
    console: Console | None = None,
) -> None:
    """Show current against suggested fields for an issue."""
    out = _out(console)
    out.print()
    _box(out, f"{issue.key} — {issue.issue_type}", issue.summary)
    _section(out, "Current Description")
    if issue.description:
        _plain(out, issue.description)
    else:
        _plain(out, "(empty)", style="bright_white")
    _section(out, "Suggested Description")
    _plain(out, desc)
    _bullet_section(out, "Acceptance Criteria", list(criteria))
    _plain(out, f"  Priority: {issue.priority} → {priority}")
    _plain(out, f"  Labels:   {join_labels(issue.labels)} → {join_labels(labels)}")
    out.print()


def display_query_results(
    issues: Iterable[Issue], jql: str = "", console: Console | None = None
) -> None:
    """Show the issues returned by a JQL query."""
    out = _out(console)
    issues = list(issues)
    out.print()
    if jql:
        _plain(out, f"JQL: {jql}", style="bright_white")
        out.print()
    if not issues:
        _plain(out, "No issues found.", style="yellow")
        out.print()
        return
    _issue_table(out, "Query Results", issues)
    _plain(out, f"({len(issues)} issues)", style="bright_white")
    out.print()


def display_digest(
    parent: IssueDetail, digest: DigestData, console: Console | None = None
) -> None:
    """Show a progress digest for a feature or initiative."""
    out = _out(console)
    out.print()
    _box(out, f"{parent.key} — {parent.issue_type}", parent.summary)
    status_line = Text("  Overall Status: ")
    status_line.append_text(colorize(digest.overall_status, _OVERALL_STATUS_COLORS))
    _plain(out, status_line)
    out.print()

    if digest.progress:
        _section(out, "Progress Updates")
        _table(
            out,
            ("Issue", "Status", "Update"),
            ((p.epic_key, p.status, truncate(p.update, 50)) for p in digest.progress),
        )

    if digest.blockers:
        _section(out, "Blockers")
        for blocker in digest.blockers:
            line = Text(f"  {blocker.epic_key}: ", style="red")
            line.append(blocker.blocker)
            if blocker.impact:
                line.append(f" (Impact: {blocker.impact})", style="bright_white")
            _plain(out, line)
        out.print()

    if digest.not_started:
        _section(out, "Not Started")
        for item in digest.not_started:
            line = Text(f"  {item.epic_key}: ", style="yellow")
            line.append(f"{item.epic_summary} — {item.reason}")
            _plain(out, line)
        out.print()

    _box(out, "Executive Summary", digest.summary)
    out.print()


def _health_style(percent: int) -> str:
    if percent >= 80:
        return "green"
    if percent >= 60:
        return "yellow"
    return "red"


def display_backlog_health(
    report: BacklogHealthData, jira_server: str = "", console: Console | None = None
) -> None:
    """Show a backlog health report."""
    out = _out(console)
    percent = report.health_percent()
    header = Text(
        f"{report.total_issues} open issues — {report.healthy_count} healthy, "
        f"{report.problem_count()} with problems ("
    )
    header.append(f"{percent}% healthy", style=_health_style(percent))
    header.append(")")
    _box(out, "Backlog Health Check", header)

    if report.executive_summary:
        _section(out, "Executive Summary")
        _plain(out, report.executive_summary)
        out.print()

    for cat in report.categories:
        _section(out, f"{cat.name} ({len(cat.issues)})")
        _table(
            out,
            ("Key", "Summary", "Problem"),
            ((i.key, truncate(i.summary, 45), i.detail) for i in cat.issues),
        )

    _bullet_section(out, "Recommendations", list(report.recommendations))

    if not report.categories:
        _plain(out, "No problems found — backlog is healthy!", style="green")
    out.print()


def display_comment_summary(
    issue: IssueDetail, summary: CommentSummaryData, console: Console | None = None
) -> None:
    """Show a summary of an issue's comment thread."""
    out = _out(console)
    _box(out, f"{issue.key} — {issue.issue_type}", issue.summary)
    _section(out, "Summary")
    _plain(out, summary.summary)
    _bullet_section(out, "Key Decisions", summary.key_decisions)
    _bullet_section(out, "Action Items", summary.action_items)
    _bullet_section(out, "Open Questions", summary.open_questions)
    out.print()


def display_weekly_status(
    data: WeeklyStatusData, jira_server: str = "", console: Console | None = None
) -> None:
    """Show a weekly status report as nested bullet lists."""
    out = _out(console)
    out.print()
    _box(out, "Weekly Status", data.user_name)
    for proj in data.projects:
        items = [(0, f"{proj.project_name} ({proj.issue_key})")]
        items.extend((1, bullet) for bullet in proj.bullets)
        _bullets(out, items)
    out.print()


def display_similar_issues(
    target_key: str,
    target_text: str,
    matches: Iterable[SimilarIssue],
    jira_server: str = "",
    console: Console | None = None,
) -> None:
    """Show issues judged similar to a target issue or free text."""
    out = _out(console)
    matches = list(matches)
    _box(out, "Find Similar", target_key or "Freeform text")
    if not matches:
        _plain(out, "No similar issues found.", style="green")
        out.print()
        return
    _section(out, f"Similar Issues ({len(matches)})")
    _table(
        out,
        ("Key", "Confidence", "Relation", "Summary", "Reason"),
        (
            (
                m.key,
                f"{m.confidence * 100:.0f}%",
                m.relation,
                truncate(m.summary, 40),
                truncate(m.reason, 50),
            )
            for m in matches
        ),
    )
    out.print()


def display_confluence_analytics(
    parent_title: str,
    pages: Iterable[PageAnalytics],
    jira_server: str = "",
    console: Console | None = None,
) -> None:
    """Show page-view analytics for Confluence pages."""
    out = _out(console)
    pages = list(pages)
    _box(out, "Confluence Analytics", parent_title)
    if not pages:
        _plain(out, "No pages found.", style="yellow")
        out.print()
        return
    _section(out, f"Page Analytics ({len(pages)} pages)")
    _table(
        out,
        ("Page", "Total Views", "Unique Viewers"),
        ((truncate(p.title, 50), str(p.total_views), str(p.unique_viewers)) for p in pages),
    )
    out.print()