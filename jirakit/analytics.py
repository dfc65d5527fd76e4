"""Render Confluence page-view analytics as markdown, Slack or plain text."""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Sequence

from jirakit.reports import PageAnalytics
from jirakit.text import escape_pipe, truncate

__all__ = ["render_confluence_analytics"]


def _page_url(server: str, page_id: str) -> str:
    return f"{server}/wiki/pages/viewpage.action?pageId={page_id}"


def _slack(title: str, pages: Sequence[PageAnalytics], server: str) -> Iterator[str]:
    yield f"*Confluence Analytics: {title}*\n\n"
    if not pages:
        yield "No pages found.\n"
        return
    for p in pages:
        link = f"<{_page_url(server, p.page_id)}|{p.title}>"
        yield f"- {link} — {p.total_views} views, {p.unique_viewers} unique viewers\n"


def _text(title: str, pages: Sequence[PageAnalytics], server: str) -> Iterator[str]:
    yield f"Confluence Analytics: {title}\n\n"
    if not pages:
        yield "No pages found.\n"
        return
    for p in pages:
        yield (
            f"  {truncate(p.title, 50):<50}  {p.total_views:>5} views"
            f"  {p.unique_viewers:>5} unique\n"
        )


def _markdown(title: str, pages: Sequence[PageAnalytics], server: str) -> Iterator[str]:
    yield f"# Confluence Analytics: {title}\n\n"
    if not pages:
        yield "No pages found.\n"
        return
    yield "| Page | Total Views | Unique Viewers |\n"
    yield "|------|------------|----------------|\n"
    for p in pages:
        link = f"[{escape_pipe(p.title)}]({_page_url(server, p.page_id)})"
        yield f"| {link} | {p.total_views} | {p.unique_viewers} |\n"


_RENDERERS = {"slack": _slack, "text": _text, "markdown": _markdown}


def render_confluence_analytics(
    parent_title: str,
    pages: Iterable[PageAnalytics],
    jira_server: str,
    output_format: str = "markdown",
) -> str:
    """Render page analytics; unknown formats fall back to markdown."""
    renderer = _RENDERERS.get(output_format, _markdown)
    return "".join(renderer(parent_title, list(pages), jira_server))