"""Display components for CLI using Rich."""

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from multibuild.builder.report import ReportModel

console = Console()

BANNER = (
    "[bold cyan]multibuild[/bold cyan]\n"
    "[dim]Builds every Maven and Gradle project in a directory[/dim]"
)


def show_banner() -> None:
    """Display the multibuild banner."""
    console.print()
    console.print(Panel(BANNER, border_style="cyan", padding=(0, 2)))
    console.print()


def show_error(title: str, message: str) -> None:
    """Display an error message."""
    console.print()
    console.print(
        Panel(
            f"[bold red]{escape(message)}[/]",
            title=f"[bold]{escape(title)}[/]",
            border_style="red",
        )
    )


def show_warning(title: str, message: str) -> None:
    """Display a warning message."""
    console.print()
    console.print(
        Panel(
            f"[bold yellow]{escape(message)}[/]",
            title=f"[bold]{escape(title)}[/]",
            border_style="yellow",
        )
    )


def show_info(title: str, message: str) -> None:
    """Display an info message."""
    console.print()
    console.print(
        Panel(
            escape(message),
            title=f"[bold]{title}[/]",
            border_style="blue",
        )
    )


def format_duration(duration_ms: int) -> str:
    """Format a duration for the summary table.

    Args:
        duration_ms: Duration in milliseconds.

    Returns:
        ``850ms`` below one second, ``12.3s`` below one minute, else ``2m 05s``.
    """
    if duration_ms < 1000:
        return f"{duration_ms}ms"
    seconds = duration_ms / 1000
    if seconds < 60:
        return f"{seconds:.1f}s"
    minutes, secs = divmod(int(seconds), 60)
    return f"{minutes}m {secs:02d}s"


def show_build_summary(report: ReportModel) -> None:
    """Display the results of a build run.

    Args:
        report: Report to render.
    """
    console.print()

    if report.is_empty:
        show_warning("Nothing To Build", "No Maven or Gradle projects were found.")
        return

    table = Table(title="[bold]Build Summary[/]")
    table.add_column("Project", style="cyan")
    table.add_column("Type", style="white")
    table.add_column("Status")
    table.add_column("Duration", justify="right")
    table.add_column("Error", style="red")

    for result in report.results:
        if result.success:
            status = "[bold green]SUCCESS[/]"
        elif result.interrupted:
            status = "[bold yellow]INTERRUPTED[/]"
        else:
            status = "[bold red]FAILED[/]"
        table.add_row(
            escape(result.project_name),
            result.build_type,
            status,
            format_duration(result.duration_ms),
            escape(result.error_message or ""),
        )

    console.print(table)

    totals = (
        f"Total: [bold]{report.total}[/]  "
        f"Successful: [bold green]{report.success_count}[/]  "
        f"Failed: [bold red]{report.failure_count}[/]"
    )
    console.print(Panel(totals, border_style="green" if report.all_succeeded else "red"))
