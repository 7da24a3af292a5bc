"""Project Updater run orchestrator.

Drives one interactive run through its stages:

COLLECTING_INPUT      -- ask what to remove, add, generate and edit.
AWAITING_CONFIRMATION -- show the plan and ask for a go-ahead.
ABORTED               -- the user declined; nothing was touched.
EXECUTING             -- run every step in order, isolating failures.
REPORTING             -- print the final counters and elapsed time.
TERMINATED            -- prompter released; the run is over.

Usage::

    python -m project_updater
    python -m project_updater --project-dir ./my-app --package-manager pnpm
"""

from __future__ import annotations

import argparse
import asyncio
import sys
import time
from enum import Enum
from pathlib import Path
from typing import Any, Callable

from pydantic import ValidationError
from rich.markup import escape
from rich.panel import Panel

from project_updater.config import PACKAGE_MANAGER_VERBS, Config
from project_updater.logging_setup import get_logger, setup_logging
from project_updater.planner.collector import PromptCollector
from project_updater.planner.confirmation import ConfirmationGate
from project_updater.planner.models import Plan, build_steps
from project_updater.planner.prompts import Prompter
from project_updater.reporter.progress import ProgressReporter
from project_updater.reporter.report import print_report
from project_updater.runner.results import Stats
from project_updater.runner.steps import StepRunner
from project_updater.scaffolder.templates import TemplateRenderer
from project_updater.utils import console, first_line, print_error, print_warning

log = get_logger("pipeline")

# ---------------------------------------------------------------------------
# Run states, outcomes and errors
# ---------------------------------------------------------------------------


class RunState(str, Enum):
    COLLECTING_INPUT = "collecting_input"
    AWAITING_CONFIRMATION = "awaiting_confirmation"
    ABORTED = "aborted"
    EXECUTING = "executing"
    REPORTING = "reporting"
    TERMINATED = "terminated"


class RunOutcome(str, Enum):
    COMPLETED = "completed"
    ABORTED = "aborted"
    INTERRUPTED = "interrupted"
    FAILED = "failed"


# 130 is 128 + SIGINT.
EXIT_CODES: dict[RunOutcome, int] = {
    RunOutcome.COMPLETED: 0,
    RunOutcome.ABORTED: 0,
    RunOutcome.FAILED: 1,
    RunOutcome.INTERRUPTED: 130,
}


class UpdaterError(Exception):
    """Raised when the orchestration itself (not a single step) cannot go on."""


# ---------------------------------------------------------------------------
# Orchestrator
# ---------------------------------------------------------------------------


class Updater:
    """Interactive staged-workflow engine.

    Attributes:
        config: Run configuration.
        state: Current :class:`RunState`.
        history: Every state entered, in order.
        stats: Final statistics, set once the run reaches ``REPORTING``.
    """

    def __init__(
        self,
        config: Config,
        prompter: Prompter | None = None,
        runner: StepRunner | None = None,
        reporter: ProgressReporter | None = None,
        renderer: TemplateRenderer | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.config = config
        self.prompter = prompter or Prompter()
        self.runner = runner or StepRunner(config, clock=clock)
        self.reporter = reporter or ProgressReporter(show_spinner=config.show_progress)
        self.collector = PromptCollector(self.prompter, config, renderer)
        self.gate = ConfirmationGate(self.prompter)
        self._clock = clock
        self.state: RunState | None = None
        self.history: list[RunState] = []
        self.stats: Stats | None = None

    def _enter(self, state: RunState) -> None:
        self.state = state
        self.history.append(state)
        log.debug("Run state -> %s", state.value)

    # ------------------------------------------------------------------
    # Pre-flight
    # ------------------------------------------------------------------

    def _preflight(self) -> None:
        project_dir = self.config.project_dir
        if not project_dir.is_dir():
            raise UpdaterError(f"Project directory not found: {project_dir}")

        console.print(
            Panel(
                f"[bold bright_cyan]Project Updater[/bold bright_cyan]\n"
                f"Project  : {escape(str(project_dir.resolve()))}\n"
                f"Manager  : {self.config.package_manager}\n"
                f"Manifest : {escape(self.config.manifest_name)}",
                title="[bold]Interactive Configuration[/bold]",
                border_style="bright_cyan",
            )
        )

    # ------------------------------------------------------------------
    # Run
    # ------------------------------------------------------------------

    def run(self) -> RunOutcome:
        """Execute one full interactive run and return how it ended.

        Never raises for step failures, user cancellation or interrupts; an
        unexpected error outside any step skips the report.  The prompter is
        closed in every case.
        """
        stats = Stats.start(self._clock())
        try:
            self._enter(RunState.COLLECTING_INPUT)
            self._preflight()
            plan = self.collector.collect()

            self._enter(RunState.AWAITING_CONFIRMATION)
            if not self.gate.confirm(plan):
                self._enter(RunState.ABORTED)
                print_warning("Operation cancelled by user")
                return RunOutcome.ABORTED

            self._enter(RunState.EXECUTING)
            stats = asyncio.run(self.execute(plan, stats))

            self._enter(RunState.REPORTING)
            self.stats = stats.finish(self._clock())
            log.debug("Final stats: %s", self.stats.summary_dict())
            print_report(self.stats, self.config.package_manager)
            return RunOutcome.COMPLETED

        except KeyboardInterrupt:
            console.print("\n[bold yellow]Operation interrupted by user[/bold yellow]")
            return RunOutcome.INTERRUPTED

        except Exception as exc:
            log.debug("Fatal orchestrator error", exc_info=True)
            print_error(f"Update failed: {escape(first_line(str(exc)) or type(exc).__name__)}")
            console.print("[yellow]Check your project configuration and try again.[/yellow]")
            return RunOutcome.FAILED

        finally:
            self.prompter.close()
            self._enter(RunState.TERMINATED)

    async def execute(self, plan: Plan, stats: Stats) -> Stats:
        """Run every step of *plan* sequentially, folding results into *stats*."""
        tasks = self.config.verification_tasks if self.config.run_verification else []
        for step in build_steps(plan, tasks):
            with self.reporter.track(step):
                result = await self.runner.run(step)
            self.reporter.step_finished(result)
            stats = stats.fold(result)
        return stats


# ---------------------------------------------------------------------------
# CLI entry point
# ---------------------------------------------------------------------------


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="project-updater",
        description="Project Updater -- interactive dependency and config updates",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  project-updater\n"
            "  project-updater --project-dir ./my-app --package-manager yarn\n"
            "  project-updater --skip-verify --no-progress\n"
        ),
    )
    parser.add_argument(
        "--project-dir", "-C",
        default=None,
        help="Project directory to update (default: current directory)",
    )
    parser.add_argument(
        "--package-manager",
        choices=sorted(PACKAGE_MANAGER_VERBS),
        default=None,
        help="Package manager used to add/remove packages (default: npm)",
    )
    parser.add_argument(
        "--skip-verify",
        action="store_true",
        help="Do not run the post-update verification tasks",
    )
    parser.add_argument(
        "--no-progress",
        action="store_true",
        help="Disable the progress spinner",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        help="Diagnostic log level (DEBUG, INFO, WARNING, ERROR)",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    """CLI entry point for ``project-updater`` / ``python -m project_updater``."""
    args = _build_parser().parse_args(argv)

    overrides: dict[str, Any] = {}
    if args.project_dir:
        overrides["project_dir"] = Path(args.project_dir)
    if args.package_manager:
        overrides["package_manager"] = args.package_manager
    if args.skip_verify:
        overrides["run_verification"] = False
    if args.no_progress:
        overrides["show_progress"] = False
    if args.log_level:
        overrides["log_level"] = args.log_level

    try:
        config = Config.from_env(**overrides)
    except (ValidationError, ValueError) as exc:
        console.print(f"[bold red]Error:[/bold red] Invalid configuration: {escape(str(exc))}")
        return 1

    setup_logging(config.log_level)
    outcome = Updater(config).run()
    return EXIT_CODES[outcome]


if __name__ == "__main__":
    sys.exit(main())
