"""Small string helpers shared by the report renderers."""

from __future__ import annotations

from collections.abc import Iterable

_HTML_ESCAPES = (
    ("&", "&amp;"),
    ("<", "&lt;"),
    (">", "&gt;"),
    ('"', "&quot;"),
)


def truncate(s: str, n: int) -> str:
    """Shorten *s* to at most *n* characters, ending with '...' when cut."""
    if len(s) <= n:
        return s
    return s[: n - 3] + "..."


def escape_pipe(s: str) -> str:
    """Escape pipe characters so the text fits in a markdown table cell."""
    return s.replace("|", "\\|")


def escape_html(s: str) -> str:
    """Escape &, <, > and double quotes for XHTML output."""
    for raw, escaped in _HTML_ESCAPES:
        s = s.replace(raw, escaped)
    return s


def join_labels(labels: Iterable[str]) -> str:
    """Join labels with commas, or return '(none)' when there are none."""
    joined = ", ".join(labels)
    return joined if joined or _has_items(labels) else "(none)"


def _has_items(labels: Iterable[str]) -> bool:
    try:
        return len(labels) > 0  # type: ignore[arg-type]
    except TypeError:
        return False