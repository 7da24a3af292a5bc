"""Execution of a single planned step.

:class:`StepRunner` dispatches on ``step.kind`` to one handler per variant and
wraps every call in the same timing and failure isolation: whatever a handler
raises is downgraded to a :class:`StepResult` (``FAILED``, or
``SUCCEEDED_WITH_WARNING`` for advisory kinds) so the rest of the plan keeps
running.  Cancellation and interrupts are not caught.
"""

from __future__ import annotations

import asyncio
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Awaitable, Callable, Optional

from project_updater.config import Config
from project_updater.logging_setup import get_logger
from project_updater.planner.models import (
    AddPackageStep,
    CreateFileStep,
    EditConfigStep,
    RemovePackageStep,
    Step,
    StepKind,
    VerificationStep,
)
from project_updater.runner.manifest import get_operation
from project_updater.runner.package_manager import CommandError, PackageManager
from project_updater.runner.results import StepResult, StepStatus
from project_updater.utils import ensure_dir, first_line, load_json, run_command, save_json

log = get_logger("runner")

# Kinds whose failures are advisory.
TOLERANT_KINDS = frozenset({StepKind.VERIFICATION_TASK})


@dataclass(frozen=True)
class _Outcome:
    status: StepStatus = StepStatus.SUCCEEDED
    error: Optional[str] = None
    changed: bool = True


def describe_error(exc: BaseException) -> str:
    """Reduce an exception to a single line for display."""
    if isinstance(exc, CommandError):
        return exc.summary
    return first_line(str(exc)) or type(exc).__name__


def _write_file(path: Path, content: str) -> None:
    ensure_dir(path.parent)
    path.write_text(content, encoding="utf-8")


class StepRunner:
    """Runs one step at a time and always returns a :class:`StepResult`."""

    def __init__(
        self,
        config: Config,
        package_manager: PackageManager | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.config = config
        self.package_manager = package_manager or PackageManager(
            config.package_manager,
            cwd=config.project_dir,
            timeout=config.command_timeout,
        )
        self._clock = clock
        self._handlers: dict[StepKind, Callable[..., Awaitable[_Outcome]]] = {
            StepKind.REMOVE_PACKAGE: self._remove_package,
            StepKind.ADD_PACKAGE: self._add_package,
            StepKind.CREATE_FILE: self._create_file,
            StepKind.EDIT_CONFIG: self._edit_config,
            StepKind.VERIFICATION_TASK: self._verify,
        }

    async def run(self, step: Step) -> StepResult:
        start = self._clock()
        try:
            handler = self._handlers[step.kind]
            outcome = await handler(step)
        except Exception as exc:
            status = (
                StepStatus.SUCCEEDED_WITH_WARNING
                if step.kind in TOLERANT_KINDS
                else StepStatus.FAILED
            )
            outcome = _Outcome(status=status, error=describe_error(exc), changed=False)
            log.debug("%s %s raised %r", step.kind.value, step.identifier, exc)

        return StepResult(
            kind=step.kind,
            identifier=step.identifier,
            status=outcome.status,
            duration_seconds=max(0.0, self._clock() - start),
            error=outcome.error,
            changed=outcome.changed,
        )

    # ------------------------------------------------------------------
    # Handlers, one per step kind
    # ------------------------------------------------------------------

    async def _remove_package(self, step: RemovePackageStep) -> _Outcome:
        await self.package_manager.remove(step.name)
        return _Outcome()

    async def _add_package(self, step: AddPackageStep) -> _Outcome:
        await self.package_manager.install(step.name)
        return _Outcome()

    async def _create_file(self, step: CreateFileStep) -> _Outcome:
        path = self.config.resolve(step.path)
        content = step.generator()
        # Not atomic: a failure after mkdir leaves the directory behind.
        await asyncio.to_thread(_write_file, path, content)
        log.debug("Wrote %d chars to %s", len(content), path)
        return _Outcome()

    async def _edit_config(self, step: EditConfigStep) -> _Outcome:
        operation = get_operation(step.operation)
        path = self.config.resolve(step.target)
        if not path.exists():
            log.debug("%s not found, skipping %s", path, step.operation)
            return _Outcome(changed=False)

        manifest = load_json(path)
        await save_json(operation(manifest), path)
        log.debug("Applied %s to %s", step.operation, path)
        return _Outcome()

    async def _verify(self, step: VerificationStep) -> _Outcome:
        returncode, _stdout, stderr = await run_command(
            step.command,
            cwd=self.config.project_dir,
            timeout=self.config.verification_timeout,
        )
        log.debug("Verification %r exited with %d", step.name, returncode)
        if returncode != 0:
            return _Outcome(
                status=StepStatus.SUCCEEDED_WITH_WARNING,
                error=first_line(stderr) or f"exit code {returncode}",
                changed=False,
            )
        return _Outcome()
