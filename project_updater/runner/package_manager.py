"""Opaque install/remove capability backed by the project's package manager.

Commands run through :func:`project_updater.utils.run_command` with output
captured; on failure only the first line of the diagnostic is surfaced.
"""

from __future__ import annotations

from pathlib import Path

from project_updater.config import PACKAGE_MANAGER_VERBS
from project_updater.logging_setup import get_logger
from project_updater.utils import first_line, run_command

log = get_logger("package_manager")


class CommandError(Exception):
    """Raised when an external command exits non-zero or cannot be started."""

    def __init__(self, message: str, command: str = "", returncode: int | None = None, stderr: str = ""):
        self.command = command
        self.returncode = returncode
        self.stderr = stderr
        super().__init__(message)

    @property
    def summary(self) -> str:
        """One-line diagnostic: the first stderr line, else the message."""
        return first_line(self.stderr) or first_line(str(self))


class PackageManager:
    """Runs ``<manager> <verb> <package>`` inside the project directory."""

    def __init__(self, name: str = "npm", cwd: str | Path | None = None, timeout: int = 300) -> None:
        if name not in PACKAGE_MANAGER_VERBS:
            raise ValueError(f"unsupported package manager: {name}")
        self.name = name
        self.cwd = Path(cwd) if cwd is not None else None
        self.timeout = timeout
        self.install_verb, self.remove_verb = PACKAGE_MANAGER_VERBS[name]

    def command_for(self, verb: str, package: str) -> list[str]:
        return [self.name, verb, package]

    async def install(self, package: str) -> None:
        await self._run(self.command_for(self.install_verb, package))

    async def remove(self, package: str) -> None:
        await self._run(self.command_for(self.remove_verb, package))

    async def _run(self, cmd: list[str]) -> None:
        cmd_str = " ".join(cmd)
        log.debug("Running %s (cwd=%s)", cmd_str, self.cwd or ".")
        try:
            returncode, _stdout, stderr = await run_command(cmd, cwd=self.cwd, timeout=self.timeout)
        except OSError as exc:
            raise CommandError(f"Could not start {cmd_str}: {exc}", command=cmd_str) from exc

        log.debug("%s exited with %d", cmd_str, returncode)
        if returncode != 0:
            raise CommandError(
                f"Command failed (exit {returncode}): {cmd_str}",
                command=cmd_str,
                returncode=returncode,
                stderr=stderr,
            )
