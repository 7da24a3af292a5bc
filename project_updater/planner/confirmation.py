"""The single boundary between read-only planning and mutating execution."""

from __future__ import annotations

from rich.markup import escape
from rich.panel import Panel

from project_updater.planner.models import Plan
from project_updater.planner.prompts import Prompter
from project_updater.utils import console


def summarize(plan: Plan) -> list[str]:
    """Describe the plan, one line per non-empty collection.

    The order is fixed (remove, install, create, edit) so the same plan always
    produces the same summary.
    """
    lines: list[str] = []
    if plan.packages_to_remove:
        lines.append(f"Packages to remove: {', '.join(plan.packages_to_remove)}")
    if plan.packages_to_add:
        lines.append(f"Packages to install: {', '.join(plan.packages_to_add)}")
    if plan.files_to_create:
        lines.append(f"Files to create: {len(plan.files_to_create)}")
    if plan.config_edits:
        targets = ", ".join(edit.target for edit in plan.config_edits)
        lines.append(f"Config files to update: {targets}")
    return lines


class ConfirmationGate:
    def __init__(self, prompter: Prompter) -> None:
        self.prompter = prompter

    def confirm(self, plan: Plan) -> bool:
        """Show the summary and return whether the user wants to proceed."""
        lines = [escape(line) for line in summarize(plan)] or ["[dim]No changes selected.[/dim]"]
        console.print()
        console.print(
            Panel("\n".join(lines), title="[bold]Operation Summary[/bold]", border_style="cyan")
        )
        return self.prompter.ask_yes_no("Proceed with these operations?")
