"""Confluence storage-format (XHTML) builders for weekly status pages."""

from __future__ import annotations

from collections.abc import Iterable

from jirakit.reports import WeeklyProject
from jirakit.text import escape_html


def weekly_status_to_storage(
    user_name: str, jira_server: str, projects: Iterable[WeeklyProject]
) -> str:
    """Render a weekly status report as Confluence storage format."""
    parts = [f"<h2>{escape_html(user_name)}</h2>\n"]
    for proj in projects:
        issue_url = f"{jira_server}/browse/{proj.issue_key}"
        parts.append("<ul>\n")
        parts.append(
            f'  <li>{escape_html(proj.project_name)} '
            f'(<a href="{issue_url}">{proj.issue_key}</a>)\n'
        )
        parts.append("    <ul>\n")
        parts.extend(f"      <li>{escape_html(bullet)}</li>\n" for bullet in proj.bullets)
        parts.append("    </ul>\n")
        parts.append("  </li>\n")
        parts.append("</ul>\n")
    return "".join(parts)


def index_entry_storage(title: str, page_id: str) -> str:
    """Return a parent-page index entry linking to the child page."""
    return (
        f'<li><ac:link><ri:content-id ri:content-id="{page_id}" />'
        f"<ac:plain-text-link-body><![CDATA[{escape_html(title)}]]>"
        f"</ac:plain-text-link-body></ac:link></li>"
    )


def insert_index_entry(body: str, entry: str, title: str) -> str:
    """Insert *entry* at the top of the first list in *body*.

    Any existing list item carrying the same title is dropped first; when the
    body has no list, a new one holding the entry is prepended.
    """
    escaped_title = escape_html(title)
    if escaped_title in body:
        body = "\n".join(
            line
            for line in body.split("\n")
            if not (escaped_title in line and "<li>" in line)
        )

    marker = "<ul>"
    idx = body.find(marker)
    if idx >= 0:
        insert_point = idx + len(marker)
        return body[:insert_point] + "\n" + entry + body[insert_point:]
    return "<ul>\n" + entry + "\n</ul>\n" + body