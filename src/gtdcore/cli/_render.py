# pyright: reportExplicitAny=false, reportAny=false
"""Converting engine results to plain data and Rich tables."""

from dataclasses import asdict
from datetime import datetime
from enum import Enum
from typing import Any

from rich.console import Console
from rich.table import Table

from gtdcore.engage import ScoredIdea
from gtdcore.review import HealthLevel, SystemHealthCheck, WeeklyMetrics

_LEVEL_STYLES = {
    HealthLevel.EXCELLENT: "green",
    HealthLevel.GOOD: "cyan",
    HealthLevel.FAIR: "yellow",
    HealthLevel.POOR: "red",
}


def plain(value: Any) -> Any:
    """Reduce a value to JSON and YAML safe builtins."""
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, dict):
        return {str(k): plain(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [plain(v) for v in value]
    return value


def ranked_data(ranked: list[ScoredIdea]) -> list[dict[str, Any]]:
    return [
        {
            "id": s.idea.id,
            "content": s.idea.content,
            "score": s.score,
            "context_id": s.idea.context_id,
            "project_id": s.idea.project_id,
            "estimated_minutes": s.idea.estimated_minutes,
            "energy_required": plain(s.idea.energy_required),
            "due_date": plain(s.idea.due_date),
        }
        for s in ranked
    ]


def health_data(check: SystemHealthCheck) -> dict[str, Any]:
    return plain(asdict(check))


def metrics_data(metrics: WeeklyMetrics) -> dict[str, Any]:
    return plain(asdict(metrics))


def _short_date(value: datetime | None) -> str:
    return "" if value is None else value.strftime("%Y-%m-%d")


def render_ranked(ranked: list[ScoredIdea], console: Console) -> None:
    if not ranked:
        console.print("[yellow]No next actions match.[/yellow]")
        return

    table = Table(title="Next actions", title_justify="left")
    table.add_column("#", justify="right")
    table.add_column("Score", justify="right")
    table.add_column("Action")
    table.add_column("Context")
    table.add_column("Min", justify="right")
    table.add_column("Energy")
    table.add_column("Due")
    for position, scored in enumerate(ranked, start=1):
        idea = scored.idea
        table.add_row(
            str(position),
            f"{scored.score:g}",
            idea.content,
            idea.context_id or "",
            "" if idea.estimated_minutes is None else str(idea.estimated_minutes),
            "" if idea.energy_required is None else idea.energy_required.value,
            _short_date(idea.due_date),
        )
    console.print(table)


def render_health(check: SystemHealthCheck, console: Console) -> None:
    overall = check.overall
    style = _LEVEL_STYLES[overall.level]

    table = Table(title="System health", title_justify="left")
    table.add_column("Area")
    table.add_column("Details")
    table.add_column("Score", justify="right")
    table.add_row(
        "Inbox",
        f"{check.inbox.count} unprocessed",
        f"{check.inbox.score:g}",
    )
    table.add_row(
        "Projects",
        f"{check.projects.total} active, {check.projects.stuck} stuck",
        f"{check.projects.score:g}",
    )
    table.add_row(
        "Actions",
        f"{check.actions.total} active, {check.actions.overdue} overdue",
        f"{check.actions.score:g}",
    )
    table.add_row(
        "Review",
        f"{check.review.days_since_review} days since last",
        f"{check.review.score:g}",
    )
    console.print(table)
    console.print(
        f"Overall: [bold {style}]{overall.score} ({overall.grade.value}, "
        f"{overall.level.value})[/bold {style}]"
    )
    for recommendation in overall.recommendations:
        console.print(f"  • {recommendation}", highlight=False)


def render_metrics(metrics: WeeklyMetrics, console: Console) -> None:
    table = Table(title="Weekly metrics", show_header=False, title_justify="left")
    table.add_column("Metric")
    table.add_column("Value", justify="right")
    table.add_row("Ideas captured", str(metrics.ideas_captured))
    table.add_row("Ideas processed", str(metrics.ideas_processed))
    table.add_row("Ideas completed", str(metrics.ideas_completed))
    table.add_row("Processing rate", f"{metrics.inbox_processing_rate:.0%}")
    table.add_row("Actionable rate", f"{metrics.actionable_rate:.0%}")
    table.add_row("Active projects", str(metrics.projects_active))
    table.add_row("Completed projects", str(metrics.projects_completed))
    table.add_row("Stuck projects", str(metrics.projects_stuck))
    table.add_row("Overdue actions", str(metrics.overdue_actions))
    for name, count in metrics.context_distribution.items():
        table.add_row(f"  {name}", str(count))
    console.print(table)
