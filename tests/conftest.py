"""Shared pytest fixtures for the Project Updater test suite.

Provides reusable fixtures for:
- Temporary project directories with a sample ``package.json``
- Test configurations pointing at those directories
- Scripted prompt answers
- Mock package managers and subprocess helpers
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Callable
from unittest.mock import AsyncMock, MagicMock

import pytest

from project_updater.config import Config
from project_updater.runner.package_manager import PackageManager


# ---------------------------------------------------------------------------
# Paths & Directories
# ---------------------------------------------------------------------------

@pytest.fixture
def tmp_project_dir(tmp_path: Path) -> Path:
    """Temporary project directory (auto-cleanup)."""
    project_dir = tmp_path / "test-project"
    project_dir.mkdir()
    yield project_dir


@pytest.fixture
def sample_manifest_data() -> dict[str, Any]:
    """A small but realistic ``package.json`` with existing scripts."""
    return {
        "name": "test-project",
        "version": "1.0.0",
        "scripts": {
            "build": "vite build",
            "dev": "vite",
            "test": "vitest",
        },
        "dependencies": {
            "react": "^19.0.0",
        },
    }


@pytest.fixture
def sample_manifest(tmp_project_dir: Path, sample_manifest_data: dict[str, Any]) -> Path:
    """Write ``sample_manifest_data`` to ``<tmp_project_dir>/package.json``."""
    path = tmp_project_dir / "package.json"
    path.write_text(json.dumps(sample_manifest_data, indent=2), encoding="utf-8")
    return path


# ---------------------------------------------------------------------------
# Configuration
# ---------------------------------------------------------------------------

@pytest.fixture
def make_config(tmp_project_dir: Path) -> Callable[..., Config]:
    """Factory for a Config rooted at ``tmp_project_dir``.

    Verification tasks and the spinner are off unless overridden.
    """
    def factory(**overrides: Any) -> Config:
        values: dict[str, Any] = {
            "project_dir": tmp_project_dir,
            "run_verification": False,
            "show_progress": False,
        }
        values.update(overrides)
        return Config(**values)

    return factory


# ---------------------------------------------------------------------------
# Prompt answers
# ---------------------------------------------------------------------------

class ScriptedInput:
    """Stand-in for ``Console.input`` that replays canned answers.

    Records every prompt it was shown.  Running out of answers raises
    ``EOFError``, like a closed stdin.
    """

    def __init__(self, answers: list[str]) -> None:
        self.answers = list(answers)
        self.prompts: list[str] = []

    def __call__(self, prompt: str) -> str:
        self.prompts.append(prompt)
        if not self.answers:
            raise EOFError
        return self.answers.pop(0)


@pytest.fixture
def scripted_input() -> Callable[..., ScriptedInput]:
    """Factory: ``scripted_input("a, b", "", "y", "n")``."""
    def factory(*answers: str) -> ScriptedInput:
        return ScriptedInput(list(answers))

    return factory


# ---------------------------------------------------------------------------
# Mock package manager & subprocess
# ---------------------------------------------------------------------------

@pytest.fixture
def mock_package_manager() -> MagicMock:
    """A PackageManager whose install/remove are AsyncMocks that succeed."""
    pm = MagicMock(spec=PackageManager)
    pm.install = AsyncMock(return_value=None)
    pm.remove = AsyncMock(return_value=None)
    return pm


@pytest.fixture
def mock_subprocess():
    """Mock asyncio subprocess for testing command execution.

    Returns a factory that creates mock subprocess instances with configurable
    stdout, stderr, and return codes.

    Usage:
        def test_command(mock_subprocess):
            proc = mock_subprocess(stdout="output", returncode=0)
            with patch("asyncio.create_subprocess_exec", return_value=proc):
                ...
    """
    def factory(
        stdout: str = "",
        stderr: str = "",
        returncode: int = 0,
    ) -> AsyncMock:
        mock_proc = AsyncMock()
        mock_proc.communicate = AsyncMock(
            return_value=(stdout.encode("utf-8"), stderr.encode("utf-8"))
        )
        mock_proc.returncode = returncode
        mock_proc.pid = 99999
        mock_proc.kill = MagicMock()
        mock_proc.wait = AsyncMock(return_value=returncode)
        return mock_proc

    return factory
