"""Render issue-similarity results as markdown, Slack or plain text."""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Sequence

from jirakit.reports import SimilarIssue
from jirakit.text import escape_pipe, truncate

__all__ = ["render_similar_issues"]

_SIMPLE_ESCAPES = {
    "\\": "\\\\",
    '"': '\\"',
    "\a": "\\a",
    "\b": "\\b",
    "\f": "\\f",
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
    "\v": "\\v",
}


def _quote(s: str) -> str:
    """Double-quote *s*, escaping backslashes, quotes and control characters."""
    out = []
    for ch in s:
        if ch in _SIMPLE_ESCAPES:
            out.append(_SIMPLE_ESCAPES[ch])
        elif ord(ch) < 0x20 or ord(ch) == 0x7F:
            out.append(f"\\x{ord(ch):02x}")
        else:
            out.append(ch)
    return '"' + "".join(out) + '"'


def _percent(confidence: float) -> str:
    return f"{confidence * 100:.0f}%"


def _slack(
    target_key: str, title: str, matches: Sequence[SimilarIssue], server: str
) -> Iterator[str]:
    if target_key:
        yield f"*Similar Issues: <{server}/browse/{target_key}|{target_key}>*\n\n"
    else:
        yield f"*Similar Issues: {title}*\n\n"
    if not matches:
        yield "No similar issues found.\n"
        return
    for m in matches:
        link = f"<{server}/browse/{m.key}|{m.key}>"
        yield f"- {link} ({_percent(m.confidence)} {m.relation}) {m.summary} — _{m.reason}_\n"


def _text(
    target_key: str, title: str, matches: Sequence[SimilarIssue], server: str
) -> Iterator[str]:
    yield f"Similar Issues: {title}\n\n"
    if not matches:
        yield "No similar issues found.\n"
        return
    for m in matches:
        yield (
            f"  {m.key}  {_percent(m.confidence)}  {m.relation:<10}  {m.summary}\n"
            f"    Reason: {m.reason}\n"
        )


def _markdown(
    target_key: str, title: str, matches: Sequence[SimilarIssue], server: str
) -> Iterator[str]:
    if target_key:
        yield f"# Similar Issues: [{target_key}]({server}/browse/{target_key})\n\n"
    else:
        yield f"# Similar Issues: {title}\n\n"
    if not matches:
        yield "No similar issues found.\n"
        return
    yield "| Key | Confidence | Relation | Summary | Reason |\n"
    yield "|-----|-----------|----------|---------|--------|\n"
    for m in matches:
        link = f"[{m.key}]({server}/browse/{m.key})"
        yield (
            f"| {link} | {_percent(m.confidence)} | {m.relation} | "
            f"{escape_pipe(m.summary)} | {escape_pipe(m.reason)} |\n"
        )


_RENDERERS = {"slack": _slack, "text": _text, "markdown": _markdown}


def render_similar_issues(
    target_key: str,
    target_text: str,
    matches: Iterable[SimilarIssue],
    jira_server: str,
    output_format: str = "markdown",
) -> str:
    """Render similarity matches; unknown formats fall back to markdown.

    Without a target key the title is the quoted, truncated target text.
    """
    title = target_key or _quote(truncate(target_text, 60))
    renderer = _RENDERERS.get(output_format, _markdown)
    return "".join(renderer(target_key, title, list(matches), jira_server))