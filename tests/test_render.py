import pytest

from jirakit.models import BoardInfo, Issue, IssueDetail
from jirakit.render import (
    render_backlog_health,
    render_comment_summary,
    render_digest,
    render_summary,
    write_digest,
    write_summary,
)
from jirakit.reports import (
    BacklogHealthData,
    CommentSummaryData,
    DigestBlocker,
    DigestData,
    DigestNotStarted,
    DigestProgress,
    HealthCategory,
    HealthIssue,
)

SERVER = "https://jira.example.com"


def _issues():
    return [
        Issue(key="TEST-1", status="Open", priority="High", summary="First issue"),
        Issue(key="TEST-2", status="In Progress", priority="Medium", summary="Second issue"),
    ]


def _boards():
    return [
        BoardInfo(name="Scrum Board", board_type="scrum", sprint_name="Sprint 1", issues=_issues()),
        BoardInfo(name="Kanban Board", board_type="kanban", issues=_issues()[:1]),
    ]


def _parent():
    return IssueDetail(key="TEST-0", summary="Parent feature", issue_type="Feature")


def _digest():
    return DigestData(
        overall_status="at risk",
        progress=[DigestProgress(epic_key="TEST-5", status="In Progress", update="API done")],
        blockers=[
            DigestBlocker(epic_key="TEST-6", blocker="Waiting on infra", impact="Delays launch"),
            DigestBlocker(epic_key="TEST-7", blocker="Needs review"),
        ],
        not_started=[DigestNotStarted(epic_key="TEST-8", epic_summary="Docs", reason="Later")],
        summary="Mostly fine.",
    )


# --- summary ---


@pytest.mark.parametrize(
    "fmt, expected",
    [
        ("markdown", "*No board issues found.*\n\nNo open issues assigned!\n\n"),
        ("slack", "_No board issues found._\n\nNo open issues assigned!\n\n"),
        ("text", "No board issues found.\n\nNo open issues assigned!\n\n"),
    ],
)
def test_summary_empty(fmt, expected):
    assert render_summary([], [], SERVER, fmt) == expected


def test_summary_markdown_headings_and_table():
    out = render_summary(_boards(), _issues(), SERVER, "markdown")
    first = out.splitlines()[0]
    assert first.startswith("## Sprint: ")
    assert "Sprint 1" in first and "(Scrum Board)" in first
    assert "## Kanban: Kanban Board" in out
    assert "## All Open Issues" in out
    assert out.count("| Key | Status | Priority | Summary |") == 3
    assert "[TEST-1](https://jira.example.com/browse/TEST-1)" in out
    assert "No open issues assigned!" not in out


def test_summary_scrum_without_sprint_is_kanban():
    board = BoardInfo(name="Scrum Board", board_type="scrum", issues=[])
    out = render_summary([board], [], SERVER, "slack")
    assert out.startswith("*Kanban: Scrum Board*")
    assert "Sprint" not in out


def test_summary_slack_links():
    out = render_summary([], _issues(), SERVER, "slack")
    assert "*All Open Issues*" in out
    assert f"<{SERVER}/browse/TEST-2|TEST-2>" in out
    assert "[In Progress]" in out and "(Medium)" in out


def test_summary_text_columns_aligned():
    out = render_summary([], _issues(), SERVER, "text")
    rows = [line for line in out.splitlines() if line.startswith("  TEST-")]
    assert len(rows) == 2
    for row, issue in zip(rows, _issues()):
        assert row[2:16].rstrip() == issue.key
        assert row[17:32].rstrip() == issue.status
        assert row.endswith(issue.summary)
    assert SERVER not in out


def test_summary_unknown_format_is_markdown():
    assert render_summary(_boards(), _issues(), SERVER, "html") == render_summary(
        _boards(), _issues(), SERVER, "markdown"
    )


def test_write_summary_matches_render(tmp_path, capsys):
    path = tmp_path / "summary.md"
    write_summary(_boards(), _issues(), path, SERVER, "text")
    assert path.read_text(encoding="utf-8") == render_summary(_boards(), _issues(), SERVER, "text")
    assert "Summary written to" in capsys.readouterr().out


def test_write_summary_missing_dir_raises(tmp_path):
    with pytest.raises(OSError):
        write_summary([], [], tmp_path / "missing" / "out.md", SERVER, "markdown")


# --- digest ---


def test_digest_markdown_sections():
    out = render_digest(_parent(), _digest(), SERVER, "markdown")
    assert out.startswith("# Digest: TEST-0 — Parent feature")
    assert "**Overall Status:** at risk" in out
    assert "| Epic | Status | Update |" in out
    assert "_(Impact: Delays launch)_" in out
    assert out.count("_(Impact:") == 1
    assert "## Not Started" in out
    assert out.endswith("## Summary\n\nMostly fine.\n")


def test_digest_omits_empty_sections():
    digest = DigestData(overall_status="on track", summary="All good")
    for fmt in ("markdown", "slack", "text"):
        out = render_digest(_parent(), digest, SERVER, fmt)
        assert "Blockers" not in out
        assert "Progress Updates" not in out
        assert "Not Started" not in out
        assert "All good" in out


def test_digest_slack_and_text():
    slack = render_digest(_parent(), _digest(), SERVER, "slack")
    assert "Status: *at risk*" in slack
    assert f"<{SERVER}/browse/TEST-6|TEST-6>" in slack
    assert slack.endswith("*Summary*\nMostly fine.\n")
    text = render_digest(_parent(), _digest(), SERVER, "text")
    assert "Overall Status: at risk" in text
    assert " (Impact: Delays launch)" in text
    assert SERVER not in text
    assert text.endswith("Summary\n  Mostly fine.\n")


def test_write_digest_matches_render(tmp_path, capsys):
    path = tmp_path / "digest.md"
    write_digest(_parent(), _digest(), str(path), SERVER, "slack")
    assert path.read_text(encoding="utf-8") == render_digest(_parent(), _digest(), SERVER, "slack")
    assert "Digest written to" in capsys.readouterr().out


# --- backlog health ---


def _report():
    return BacklogHealthData(
        total_issues=4,
        healthy_count=2,
        categories=[
            HealthCategory(
                name="Stale",
                issues=[HealthIssue(key="TEST-3", summary="Old thing", detail="No update")],
            )
        ],
        executive_summary="Needs grooming.",
        recommendations=["Close stale issues"],
    )


def test_backlog_health_markdown():
    out = render_backlog_health(_report(), SERVER, "markdown")
    assert out.startswith("# Backlog Health Check")
    assert "(50% healthy)" in out
    assert "## Stale (1)" in out
    assert "| Key | Summary | Problem |" in out
    assert "- Close stale issues" in out
    assert "backlog is healthy" not in out


@pytest.mark.parametrize("fmt", ["markdown", "slack", "text"])
def test_backlog_health_no_categories(fmt):
    report = BacklogHealthData()
    out = render_backlog_health(report, SERVER, fmt)
    assert out.endswith("No problems found — backlog is healthy!\n")
    assert "(0% healthy)" in out


def test_backlog_health_text_and_slack():
    text = render_backlog_health(_report(), SERVER, "text")
    assert "Summary\n  Needs grooming." in text
    assert "  - Close stale issues" in text
    row = next(line for line in text.splitlines() if line.startswith("  TEST-3"))
    assert row[2:16].rstrip() == "TEST-3"
    slack = render_backlog_health(_report(), SERVER, "slack")
    assert "*Stale (1)*" in slack
    assert f"<{SERVER}/browse/TEST-3|TEST-3>" in slack


# --- comment summary ---


def _comments():
    return CommentSummaryData(
        summary="Discussion about caching.",
        key_decisions=["Use redis"],
        action_items=["Write a spike"],
    )


def test_comment_summary_markdown():
    issue = IssueDetail(key="TEST-1", summary="Cache layer")
    out = render_comment_summary(issue, _comments(), SERVER, "markdown")
    assert out.startswith("# Comment Summary: [TEST-1](")
    assert "## Key Decisions\n\n- Use redis\n" in out
    assert "## Action Items\n\n- Write a spike\n" in out
    assert "Open Questions" not in out


def test_comment_summary_text_and_slack():
    issue = IssueDetail(key="TEST-1", summary="Cache layer")
    text = render_comment_summary(issue, _comments(), SERVER, "text")
    assert "Key Decisions\n  - Use redis\n" in text
    assert SERVER not in text
    slack = render_comment_summary(issue, _comments(), SERVER, "slack")
    assert "*Action Items*\n- Write a spike\n" in slack
    assert f"<{SERVER}/browse/TEST-1|TEST-1>" in slack