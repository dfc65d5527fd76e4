"""Report data structures consumed by the renderers and terminal display."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class DigestProgress:
    epic_key: str = ""
    epic_summary: str = ""
    status: str = ""
    update: str = ""


@dataclass
class DigestBlocker:
    epic_key: str = ""
    epic_summary: str = ""
    blocker: str = ""
    impact: str = ""


@dataclass
class DigestNotStarted:
    epic_key: str = ""
    epic_summary: str = ""
    reason: str = ""


@dataclass
class DigestData:
    """Progress digest for a feature or initiative."""

    overall_status: str = ""
    progress: list[DigestProgress] = field(default_factory=list)
    blockers: list[DigestBlocker] = field(default_factory=list)
    not_started: list[DigestNotStarted] = field(default_factory=list)
    summary: str = ""


@dataclass
class HealthIssue:
    """An issue flagged by a backlog health check."""

    key: str = ""
    summary: str = ""
    detail: str = ""


@dataclass
class HealthCategory:
    """Flagged issues grouped by problem type."""

    name: str = ""
    issues: list[HealthIssue] = field(default_factory=list)


@dataclass
class BacklogHealthData:
    """Results of a backlog health check."""

    total_issues: int = 0
    healthy_count: int = 0
    stale_days: int = 0
    categories: list[HealthCategory] = field(default_factory=list)
    executive_summary: str = ""
    recommendations: list[str] = field(default_factory=list)

    def problem_count(self) -> int:
        """Number of issues that are not healthy."""
        return self.total_issues - self.healthy_count

    def health_percent(self) -> int:
        """Whole-number percentage of healthy issues; 0 when there are none."""
        if self.total_issues <= 0:
            return 0
        return self.healthy_count * 100 // self.total_issues


@dataclass
class CommentSummaryData:
    """Summary of an issue's comment thread."""

    summary: str = ""
    key_decisions: list[str] = field(default_factory=list)
    action_items: list[str] = field(default_factory=list)
    open_questions: list[str] = field(default_factory=list)


@dataclass
class WeeklyProject:
    """Work items grouped under a project or epic heading."""

    project_name: str = ""
    issue_key: str = ""
    bullets: list[str] = field(default_factory=list)


@dataclass
class WeeklyStatusData:
    """A weekly status report for one person."""

    user_name: str = ""
    projects: list[WeeklyProject] = field(default_factory=list)


@dataclass
class SimilarIssue:
    """An issue judged similar to a target issue or text."""

    key: str = ""
    summary: str = ""
    confidence: float = 0.0  # 0.0 to 1.0
    relation: str = ""
    reason: str = ""


@dataclass
class PageAnalytics:
    """View counts for a Confluence page."""

    page_id: str = ""
    title: str = ""
    total_views: int = 0
    unique_viewers: int = 0