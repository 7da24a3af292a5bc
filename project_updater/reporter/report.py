"""Final run report.

:func:`render_report` is a pure function of the final :class:`Stats`;
:func:`print_report` wraps it in a Rich panel together with the closing
hints.
"""

from __future__ import annotations

from rich.panel import Panel

from project_updater.runner.results import Stats
from project_updater.utils import console, print_success

_LABEL_WIDTH = 18


def _row(label: str, value: object) -> str:
    return f"{label + ':':<{_LABEL_WIDTH}}{value}"


def render_report(stats: Stats) -> str:
    """Render the outcome counters and total time as plain text.

    Always produces every line, including when all counts are zero.  Time is
    shown in seconds with one decimal place.
    """
    lines = [
        _row("Packages removed", stats.packages_removed),
        _row("Packages added", stats.packages_added),
        _row("Files edited", stats.files_edited),
        _row("Files created", stats.files_created),
        _row("Failures", stats.failures),
        _row("Warnings", stats.warnings),
        "",
        _row("Total time", f"{stats.elapsed_seconds:.1f}s"),
    ]
    return "\n".join(lines)


def print_report(stats: Stats, package_manager: str = "npm") -> None:
    """Print the report panel and the follow-up hint."""
    clean = stats.failures == 0
    console.print()
    console.print(
        Panel(
            render_report(stats),
            title="[bold]Update Complete[/bold]" if clean else "[bold]Update Finished With Errors[/bold]",
            border_style="bold green" if clean else "bold yellow",
            expand=False,
        )
    )
    if clean:
        print_success("All selected operations completed.")
    if stats.files_edited:
        console.print(
            f"[cyan]Run \"{package_manager} run ai-dev\" to start the development server.[/cyan]"
        )
    console.print()
