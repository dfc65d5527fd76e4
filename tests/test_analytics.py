import pytest

from jirakit.analytics import render_confluence_analytics
from jirakit.reports import PageAnalytics

SERVER = "https://example.atlassian.net"


def _pages():
    return [
        PageAnalytics(page_id="99999", title="Weekly Status", total_views=42, unique_viewers=7),
        PageAnalytics(page_id="22222", title="A|B", total_views=3, unique_viewers=1),
    ]


@pytest.mark.parametrize(
    "fmt,heading",
    [
        ("markdown", "# Confluence Analytics: Parent\n\n"),
        ("slack", "*Confluence Analytics: Parent*\n\n"),
        ("text", "Confluence Analytics: Parent\n\n"),
    ],
)
def test_empty_pages(fmt, heading):
    out = render_confluence_analytics("Parent", [], SERVER, fmt)
    assert out == heading + "No pages found.\n"


def test_markdown_table():
    out = render_confluence_analytics("Parent", _pages(), SERVER, "markdown")
    assert "| Page | Total Views | Unique Viewers |\n" in out
    assert f"| [Weekly Status]({SERVER}/wiki/pages/viewpage.action?pageId=99999) | 42 | 7 |\n" in out
    assert "[A\\|B]" in out
    assert len([line for line in out.splitlines() if line.startswith("| [")]) == 2


def test_slack_links_not_escaped():
    out = render_confluence_analytics("Parent", _pages(), SERVER, "slack")
    assert f"- <{SERVER}/wiki/pages/viewpage.action?pageId=99999|Weekly Status> — 42 views, 7 unique viewers\n" in out
    assert "|A|B>" in out


def test_text_columns_are_aligned():
    out = render_confluence_analytics("Parent", _pages(), SERVER, "text")
    rows = out.splitlines()[2:]
    assert len(rows) == 2
    assert len({len(row) for row in rows}) == 1
    assert rows[0].rstrip().endswith("unique")
    assert rows[0].startswith("  Weekly Status")


def test_text_truncates_long_titles():
    long_title = "x" * 80
    page = PageAnalytics(page_id="1", title=long_title, total_views=1, unique_viewers=1)
    out = render_confluence_analytics("Parent", [page], SERVER, "text")
    assert long_title not in out
    assert "x" * 47 + "..." in out


def test_unknown_format_is_markdown():
    md = render_confluence_analytics("Parent", _pages(), SERVER, "markdown")
    assert render_confluence_analytics("Parent", _pages(), SERVER, "pdf") == md