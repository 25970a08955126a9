"""CLI commands for studydebt.

Commands:
- init-db: Create the database schema
- debt: Show the knowledge debt dashboard for a user
"""

from datetime import datetime
from pathlib import Path

import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from studydebt.config.app_config import load_app_config
from studydebt.core.debt import DebtReport
from studydebt.db.database import get_db_path, init_db
from studydebt.db.snapshot import build_debt_report
from studydebt.utils.text_utils import format_deadline, format_minutes, truncate
from studydebt.utils.time_utils import parse_iso, utc_now

app = typer.Typer(
    name="studydebt",
    help="Personal study tracker with knowledge debt scoring.",
    no_args_is_help=True,
)

console = Console()

SEVERITY_STYLES = {
    "safe": "green",
    "warning": "yellow",
    "danger": "red",
}

SEVERITY_LABELS = {
    "safe": "SAFE",
    "warning": "WARNING",
    "danger": "DANGER",
}


def _resolve_db(db: str | None) -> Path:
    """Database path from --db or config."""
    if db:
        return Path(db).expanduser()
    return load_app_config().database.path


def _parse_now_or_exit(now: str | None) -> datetime:
    if now is None:
        return utc_now()
    try:
        return parse_iso(now)
    except ValueError:
        console.print(f"[red]✗ Invalid timestamp for --now: {now}[/red]")
        raise typer.Exit(code=1)


def _progress_bar(percent: float, width: int = 30) -> str:
    filled = int(round(percent / 100 * width))
    return "█" * filled + "░" * (width - filled)


def _render_report(report: DebtReport, now: datetime) -> None:
    style = SEVERITY_STYLES[report.severity]

    console.print(
        Panel(
            f"[bold {style}]{report.total_debt_score} pts[/bold {style}]  "
            f"[{style}]{SEVERITY_LABELS[report.severity]}[/{style}]\n"
            f"[{style}]{_progress_bar(report.progress_percent)}[/{style}]\n\n"
            f"{report.message}",
            title="Knowledge Debt",
            border_style=style,
        )
    )

    measures = Table(show_header=True, header_style="bold")
    measures.add_column("Measure")
    measures.add_column("Value", justify="right")
    measures.add_row("Unwatched lectures", format_minutes(report.unwatched_lecture_minutes))
    measures.add_row("Unreviewed lectures", format_minutes(report.unreviewed_lecture_minutes))
    measures.add_row("Unread pages", f"{report.unread_pages}p")
    measures.add_row("Overdue assignments", str(report.overdue_assignments))
    measures.add_row("Urgent assignments (24h)", str(report.urgent_assignments))
    measures.add_row("Unresolved questions", str(report.unresolved_questions))
    console.print(measures)

    for heading, items, item_style in (
        ("Overdue assignments", report.details.overdue_assignment_list, "red"),
        ("Urgent assignments", report.details.urgent_assignment_list, "yellow"),
    ):
        console.print(f"\n[bold]{heading}[/bold]")
        if not items:
            console.print("  [dim]None ✓[/dim]")
            continue
        for item in items:
            console.print(
                f"  [{item_style}]•[/{item_style}] {truncate(item.title)} "
                f"[dim]({item.progress_rate}%, {format_deadline(item.deadline_at, now)})[/dim]"
            )


@app.command(name="init-db")
def init_db_command(
    db: str | None = typer.Option(None, "--db", help="Database file path"),
) -> None:
    """Create the database schema."""
    db_path = _resolve_db(db)
    init_db(db_path)
    console.print(f"[green]✓ Database ready[/green] [dim]{get_db_path()}[/dim]")


@app.command()
def debt(
    user: str | None = typer.Option(None, "--user", "-u", help="User ID"),
    db: str | None = typer.Option(None, "--db", help="Database file path"),
    now: str | None = typer.Option(
        None, "--now", help="Reference time (ISO-8601), default: now"
    ),
) -> None:
    """Show the knowledge debt dashboard."""
    user_id = user or load_app_config().cli.default_user
    reference = _parse_now_or_exit(now)

    init_db(_resolve_db(db))
    report = build_debt_report(user_id, now=reference)
    _render_report(report, reference)


if __name__ == "__main__":
    app()
