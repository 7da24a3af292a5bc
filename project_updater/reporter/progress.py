"""Console feedback while steps execute.

Purely presentational: the spinner is a transient Rich ``Progress`` that
refreshes on its own thread, starts when a step starts and is dismissed as
soon as the step settles.  Nothing here influences a step's outcome.
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator, Optional

from rich.markup import escape

from project_updater.planner.models import Step, StepKind
from project_updater.runner.results import StepResult, StepStatus
from project_updater.utils import (
    console,
    create_progress,
    format_duration,
    print_error,
    print_section_header,
    print_warning,
)

SECTION_TITLES: dict[StepKind, str] = {
    StepKind.REMOVE_PACKAGE: "Removing packages",
    StepKind.ADD_PACKAGE: "Installing packages",
    StepKind.CREATE_FILE: "Creating files",
    StepKind.EDIT_CONFIG: "Updating configuration",
    StepKind.VERIFICATION_TASK: "Post-update verification",
}

_ACTIVE: dict[StepKind, str] = {
    StepKind.REMOVE_PACKAGE: "Removing {}...",
    StepKind.ADD_PACKAGE: "Installing {}...",
    StepKind.CREATE_FILE: "Generating {}...",
    StepKind.EDIT_CONFIG: "Updating {}...",
    StepKind.VERIFICATION_TASK: "{}...",
}

_DONE: dict[StepKind, str] = {
    StepKind.REMOVE_PACKAGE: "Removed {}",
    StepKind.ADD_PACKAGE: "Installed {}",
    StepKind.CREATE_FILE: "Created {}",
    StepKind.EDIT_CONFIG: "Updated {}",
}

_FAILED: dict[StepKind, str] = {
    StepKind.REMOVE_PACKAGE: "Failed to remove {}",
    StepKind.ADD_PACKAGE: "Failed to install {}",
    StepKind.CREATE_FILE: "Failed to create {}",
    StepKind.EDIT_CONFIG: "Failed to update {}",
    StepKind.VERIFICATION_TASK: "{} failed",
}

_IRREGULAR_PAST = {"running": "ran", "building": "built", "making": "made"}


def past_tense(task_name: str) -> str:
    """Turn a task label's leading gerund into the past tense.

    Examples::

        past_tense("Analyzing project structure") -> "Analyzed project structure"
        past_tense("Running build verification") -> "Ran build verification"
        past_tense("Lint") -> "Lint"
    """
    head, sep, rest = task_name.partition(" ")
    lowered = head.lower()
    if lowered in _IRREGULAR_PAST:
        word = _IRREGULAR_PAST[lowered]
    elif lowered.endswith("ing") and len(lowered) > 4:
        word = lowered[:-3] + "ed"
    else:
        return task_name
    if head[:1].isupper():
        word = word[:1].upper() + word[1:]
    return word + sep + rest


def describe_result(result: StepResult) -> str:
    """One-line, markup-free description of a step outcome."""
    ident = result.identifier
    if result.status is StepStatus.FAILED:
        return f"{_FAILED[result.kind].format(ident)}: {result.error or 'unknown error'}"
    if result.status is StepStatus.SUCCEEDED_WITH_WARNING:
        detail = f" ({result.error})" if result.error else ""
        return f"{ident} completed with warnings{detail}"
    if result.kind is StepKind.VERIFICATION_TASK:
        return past_tense(ident)
    if not result.changed:
        return f"Skipped {ident} (nothing to change)"
    return _DONE[result.kind].format(ident)


class ProgressReporter:
    """Section headers, an optional spinner per step, and a result line."""

    def __init__(self, show_spinner: bool = True) -> None:
        self.show_spinner = show_spinner
        self._section: Optional[StepKind] = None

    @contextmanager
    def track(self, step: Step) -> Iterator[None]:
        """Show feedback for *step* for as long as the block runs."""
        if step.kind is not self._section:
            print_section_header(SECTION_TITLES[step.kind])
            self._section = step.kind

        if not self.show_spinner:
            yield
            return

        with create_progress(transient=True) as progress:
            progress.add_task(_ACTIVE[step.kind].format(escape(step.identifier)), total=None)
            yield

    def step_finished(self, result: StepResult) -> None:
        message = escape(describe_result(result))
        took = f" [dim]({format_duration(result.duration_seconds)})[/dim]"
        if result.status is StepStatus.FAILED:
            print_error(f"  x {message}")
        elif result.status is StepStatus.SUCCEEDED_WITH_WARNING:
            print_warning(f"  ! {message}")
        elif not result.changed:
            console.print(f"  [dim]- {message}[/dim]")
        else:
            console.print(f"[bold green]  + {message}[/bold green]{took}")
