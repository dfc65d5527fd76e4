"""Render summaries, digests, backlog health and comment summaries as markdown, Slack or text."""

from __future__ import annotations

import logging
import os
from collections.abc import Callable, Iterable, Iterator, Sequence
from dataclasses import dataclass
from pathlib import Path

from jirakit.models import BoardInfo, Issue, IssueDetail
from jirakit.reports import BacklogHealthData, CommentSummaryData, DigestData

log = logging.getLogger(__name__)

__all__ = [
    "render_summary",
    "write_summary",
    "render_digest",
    "write_digest",
    "render_backlog_health",
    "render_comment_summary",
]


def _md_link(key: str, server: str) -> str:
    return f"[{key}]({server}/browse/{key})"


def _slack_link(key: str, server: str) -> str:
    return f"<{server}/browse/{key}|{key}>"


# --- Summary ---


def _issue_table_md(issues: Iterable[Issue], server: str) -> Iterator[str]:
    yield "| Key | Status | Priority | Summary |\n"
    yield "|-----|--------|----------|---------|\n"
    for issue in issues:
        link = _md_link(issue.key, server)
        yield f"| {link} | {issue.status} | {issue.priority} | {issue.summary} |\n"
    yield "\n"


def _issue_list_slack(issues: Iterable[Issue], server: str) -> Iterator[str]:
    for issue in issues:
        link = _slack_link(issue.key, server)
        yield f"- {link} [{issue.status}] ({issue.priority}) {issue.summary}\n"
    yield "\n"


def _issue_list_text(issues: Iterable[Issue], server: str) -> Iterator[str]:
    for issue in issues:
        yield f"  {issue.key:<14} {issue.status:<15} {issue.priority:<10} {issue.summary}\n"
    yield "\n"


@dataclass(frozen=True)
class _SummaryStyle:
    sprint: str
    kanban: str
    no_boards: str
    open_heading: str
    issues: Callable[[Iterable[Issue], str], Iterator[str]]


_SUMMARY_STYLES = {
    "slack": _SummaryStyle(
        sprint="*Sprint: {sprint}* ({name})\n\n",
        kanban="*Kanban: {name}*\n\n",
        no_boards="_No board issues found._\n\n",
        open_heading="*All Open Issues*\n\n",
        issues=_issue_list_slack,
    ),
    "text": _SummaryStyle(
        sprint="Sprint: {sprint} ({name})\n\n",
        kanban="Kanban: {name}\n\n",
        no_boards="No board issues found.\n\n",
        open_heading="All Open Issues\n\n",
        issues=_issue_list_text,
    ),
    "markdown": _SummaryStyle(
        sprint="## Sprint: {sprint} ({name})\n\n",
        kanban="## Kanban: {name}\n\n",
        no_boards="*No board issues found.*\n\n",
        open_heading="## All Open Issues\n\n",
        issues=_issue_table_md,
    ),
}


def _summary_parts(
    boards: Sequence[BoardInfo], open_issues: Sequence[Issue], server: str, style: _SummaryStyle
) -> Iterator[str]:
    for board in boards:
        if board.board_type == "scrum" and board.sprint_name:
            yield style.sprint.format(sprint=board.sprint_name, name=board.name)
        else:
            yield style.kanban.format(name=board.name)
        yield from style.issues(board.issues, server)
    if not boards:
        yield style.no_boards
    if open_issues:
        yield style.open_heading
        yield from style.issues(open_issues, server)
    else:
        yield "No open issues assigned!\n\n"


def render_summary(
    boards: Iterable[BoardInfo],
    open_issues: Iterable[Issue],
    jira_server: str,
    output_format: str = "markdown",
) -> str:
    """Render board and open-issue summaries; unknown formats fall back to markdown."""
    style = _SUMMARY_STYLES.get(output_format, _SUMMARY_STYLES["markdown"])
    return "".join(_summary_parts(list(boards), list(open_issues), jira_server, style))


def write_summary(
    boards: Iterable[BoardInfo],
    open_issues: Iterable[Issue],
    outfile: str | os.PathLike[str],
    jira_server: str,
    output_format: str = "markdown",
) -> None:
    """Render a summary and write it to *outfile*."""
    content = render_summary(boards, open_issues, jira_server, output_format)
    Path(outfile).write_text(content, encoding="utf-8")
    log.info("summary written path=%s", outfile)
    print(f"Summary written to {outfile}")


# --- Digest ---


def _digest_slack(parent: IssueDetail, digest: DigestData, server: str) -> Iterator[str]:
    yield f"*Digest: {parent.key} — {parent.summary}*\n"
    yield f"Status: *{digest.overall_status}*\n\n"
    if digest.progress:
        yield "*Progress Updates*\n\n"
        for p in digest.progress:
            yield f"- {_slack_link(p.epic_key, server)} [{p.status}] {p.update}\n"
        yield "\n"
    if digest.blockers:
        yield "*Blockers*\n\n"
        for bl in digest.blockers:
            yield f"- {_slack_link(bl.epic_key, server)}: {bl.blocker}"
            if bl.impact:
                yield f" (Impact: {bl.impact})"
            yield "\n"
        yield "\n"
    if digest.not_started:
        yield "*Not Started*\n\n"
        for n in digest.not_started:
            yield f"- {_slack_link(n.epic_key, server)}: {n.epic_summary} — {n.reason}\n"
        yield "\n"
    yield f"*Summary*\n{digest.summary}\n"


def _digest_text(parent: IssueDetail, digest: DigestData, server: str) -> Iterator[str]:
    yield f"Digest: {parent.key} — {parent.summary}\n"
    yield f"Overall Status: {digest.overall_status}\n\n"
    if digest.progress:
        yield "Progress Updates\n"
        for p in digest.progress:
            yield f"  {p.epic_key} [{p.status}] {p.update}\n"
        yield "\n"
    if digest.blockers:
        yield "Blockers\n"
        for bl in digest.blockers:
            yield f"  {bl.epic_key}: {bl.blocker}"
            if bl.impact:
                yield f" (Impact: {bl.impact})"
            yield "\n"
        yield "\n"
    if digest.not_started:
        yield "Not Started\n"
        for n in digest.not_started:
            yield f"  {n.epic_key}: {n.epic_summary} — {n.reason}\n"
        yield "\n"
    yield f"Summary\n  {digest.summary}\n"


def _digest_markdown(parent: IssueDetail, digest: DigestData, server: str) -> Iterator[str]:
    yield f"# Digest: {parent.key} — {parent.summary}\n\n"
    yield f"**Overall Status:** {digest.overall_status}\n\n"
    if digest.progress:
        yield "## Progress Updates\n\n"
        yield "| Epic | Status | Update |\n"
        yield "|------|--------|--------|\n"
        for p in digest.progress:
            yield f"| {_md_link(p.epic_key, server)} | {p.status} | {p.update} |\n"
        yield "\n"
    if digest.blockers:
        yield "## Blockers\n\n"
        for bl in digest.blockers:
            yield f"- **{_md_link(bl.epic_key, server)}**: {bl.blocker}"
            if bl.impact:
                yield f" _(Impact: {bl.impact})_"
            yield "\n"
        yield "\n"
    if digest.not_started:
        yield "## Not Started\n\n"
        for n in digest.not_started:
            yield f"- **{_md_link(n.epic_key, server)}**: {n.epic_summary} — {n.reason}\n"
        yield "\n"
    yield f"## Summary\n\n{digest.summary}\n"


_DIGEST_RENDERERS = {
    "slack": _digest_slack,
    "text": _digest_text,
    "markdown": _digest_markdown,
}


def render_digest(
    parent: IssueDetail, digest: DigestData, jira_server: str, output_format: str = "markdown"
) -> str:
    """Render a progress digest for a feature or initiative."""
    renderer = _DIGEST_RENDERERS.get(output_format, _digest_markdown)
    return "".join(renderer(parent, digest, jira_server))


def write_digest(
    parent: IssueDetail,
    digest: DigestData,
    outfile: str | os.PathLike[str],
    jira_server: str,
    output_format: str = "markdown",
) -> None:
    """Render a digest and write it to *outfile*."""
    content = render_digest(parent, digest, jira_server, output_format)
    Path(outfile).write_text(content, encoding="utf-8")
    log.info("digest written path=%s", outfile)
    print(f"Digest written to {outfile}")


# --- Backlog health ---


def _health_stats(report: BacklogHealthData) -> str:
    return (
        f"{report.total_issues} open issues — {report.healthy_count} healthy, "
        f"{report.problem_count()} with problems ({report.health_percent()}% healthy)"
    )


def _health_slack(report: BacklogHealthData, server: str) -> Iterator[str]:
    yield "*Backlog Health Check*\n"
    yield f"{_health_stats(report)}\n\n"
    if report.executive_summary:
        yield f"*Summary*\n{report.executive_summary}\n\n"
    for cat in report.categories:
        yield f"*{cat.name} ({len(cat.issues)})*\n"
        for issue in cat.issues:
            yield f"- {_slack_link(issue.key, server)}: {issue.summary} — {issue.detail}\n"
        yield "\n"
    if report.recommendations:
        yield "*Recommendations*\n"
        for rec in report.recommendations:
            yield f"- {rec}\n"
        yield "\n"


def _health_text(report: BacklogHealthData, server: str) -> Iterator[str]:
    yield "Backlog Health Check\n"
    yield f"{_health_stats(report)}\n\n"
    if report.executive_summary:
        yield f"Summary\n  {report.executive_summary}\n\n"
    for cat in report.categories:
        yield f"{cat.name} ({len(cat.issues)})\n"
        for issue in cat.issues:
            yield f"  {issue.key:<14} {issue.summary} — {issue.detail}\n"
        yield "\n"
    if report.recommendations:
        yield "Recommendations\n"
        for rec in report.recommendations:
            yield f"  - {rec}\n"
        yield "\n"


def _health_markdown(report: BacklogHealthData, server: str) -> Iterator[str]:
    yield "# Backlog Health Check\n\n"
    yield f"**{report.total_issues} open issues** — {report.healthy_count} healthy, "
    yield f"{report.problem_count()} with problems ({report.health_percent()}% healthy)\n\n"
    if report.executive_summary:
        yield f"## Summary\n\n{report.executive_summary}\n\n"
    for cat in report.categories:
        yield f"## {cat.name} ({len(cat.issues)})\n\n"
        yield "| Key | Summary | Problem |\n"
        yield "|-----|---------|--------|\n"
        for issue in cat.issues:
            yield f"| {_md_link(issue.key, server)} | {issue.summary} | {issue.detail} |\n"
        yield "\n"
    if report.recommendations:
        yield "## Recommendations\n\n"
        for rec in report.recommendations:
            yield f"- {rec}\n"
        yield "\n"


_HEALTH_RENDERERS = {
    "slack": _health_slack,
    "text": _health_text,
    "markdown": _health_markdown,
}


def render_backlog_health(
    report: BacklogHealthData, jira_server: str, output_format: str = "markdown"
) -> str:
    """Render a backlog health report."""
    renderer = _HEALTH_RENDERERS.get(output_format, _health_markdown)
    content = "".join(renderer(report, jira_server))
    if not report.categories:
        content += "No problems found — backlog is healthy!\n"
    return content


# --- Comment summary ---


def _comment_sections(
    summary: CommentSummaryData, heading: str, bullet: str
) -> Iterator[str]:
    sections = (
        ("Key Decisions", summary.key_decisions),
        ("Action Items", summary.action_items),
        ("Open Questions", summary.open_questions),
    )
    for title, items in sections:
        if not items:
            continue
        yield heading.format(title=title)
        for item in items:
            yield f"{bullet}{item}\n"
        yield "\n"


def _comments_slack(
    issue: IssueDetail, summary: CommentSummaryData, server: str
) -> Iterator[str]:
    yield f"*Comment Summary: {_slack_link(issue.key, server)} — {issue.summary}*\n\n"
    yield f"{summary.summary}\n\n"
    yield from _comment_sections(summary, "*{title}*\n", "- ")


def _comments_text(
    issue: IssueDetail, summary: CommentSummaryData, server: str
) -> Iterator[str]:
    yield f"Comment Summary: {issue.key} — {issue.summary}\n\n"
    yield f"{summary.summary}\n\n"
    yield from _comment_sections(summary, "{title}\n", "  - ")


def _comments_markdown(
    issue: IssueDetail, summary: CommentSummaryData, server: str
) -> Iterator[str]:
    yield f"# Comment Summary: {_md_link(issue.key, server)} — {issue.summary}\n\n"
    yield f"{summary.summary}\n\n"
    yield from _comment_sections(summary, "## {title}\n\n", "- ")


_COMMENT_RENDERERS = {
    "slack": _comments_slack,
    "text": _comments_text,
    "markdown": _comments_markdown,
}


def render_comment_summary(
    issue: IssueDetail,
    summary: CommentSummaryData,
    jira_server: str,
    output_format: str = "markdown",
) -> str:
    """Render a summary of an issue's comment thread."""
    renderer = _COMMENT_RENDERERS.get(output_format, _comments_markdown)
    return "".join(renderer(issue, summary, jira_server))