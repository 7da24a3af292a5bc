"""Project Updater configuration.

Centralised, typed configuration for a run. All settings use Pydantic v2
models so they can be validated at construction time and serialised to/from
JSON or environment variables without boiler-plate.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, field_validator, model_validator

# Install / uninstall verbs per supported package manager.
PACKAGE_MANAGER_VERBS: dict[str, tuple[str, str]] = {
    "npm": ("install", "uninstall"),
    "yarn": ("add", "remove"),
    "pnpm": ("add", "remove"),
}


class VerificationTaskConfig(BaseModel):
    """A named shell command run after all edits.  Failures are advisory."""

    name: str = Field(..., min_length=1)
    command: str = Field(..., min_length=1)


# Dependency audit command per package manager; yarn has no in-place fix.
AUDIT_COMMANDS: dict[str, str] = {
    "npm": "npm audit fix --force",
    "yarn": "yarn audit",
    "pnpm": "pnpm audit --fix",
}


def _default_verification_tasks(package_manager: str = "npm") -> list[VerificationTaskConfig]:
    """The stock post-update checks, phrased for *package_manager*."""
    return [
        VerificationTaskConfig(
            name="Analyzing project structure",
            command='echo "Structure analysis complete"',
        ),
        VerificationTaskConfig(
            name="Optimizing dependencies",
            command=f'{AUDIT_COMMANDS[package_manager]} || echo "Audit complete"',
        ),
        VerificationTaskConfig(
            name="Running build verification",
            command=f'{package_manager} run build || echo "Build verification complete"',
        ),
    ]


class Config(BaseModel):
    """Global Project Updater configuration.

    Instances are created once by the CLI entry point (or by tests) and then
    passed to the ``Updater`` and everything it builds.
    """

    project_dir: Path = Field(default=Path("."))
    manifest_name: str = Field(default="package.json", min_length=1)
    component_path: str = Field(default="src/components/AIGeneratedComponent.jsx")
    component_name: str = Field(default="AIGeneratedComponent")
    package_manager: str = Field(default="npm")
    command_timeout: int = Field(
        default=300, ge=1, description="Timeout for package install/remove in seconds"
    )
    verification_timeout: int = Field(
        default=600, ge=1, description="Timeout for each verification task in seconds"
    )
    verification_tasks: list[VerificationTaskConfig] = Field(
        default_factory=_default_verification_tasks
    )
    run_verification: bool = Field(default=True)
    show_progress: bool = Field(default=True)
    log_level: str = Field(default="WARNING")

    @field_validator("package_manager")
    @classmethod
    def _known_package_manager(cls, value: str) -> str:
        value = value.strip().lower()
        if value not in PACKAGE_MANAGER_VERBS:
            known = ", ".join(sorted(PACKAGE_MANAGER_VERBS))
            raise ValueError(f"unsupported package manager {value!r} (expected one of: {known})")
        return value

    @field_validator("log_level")
    @classmethod
    def _upper_log_level(cls, value: str) -> str:
        return value.strip().upper()

    @model_validator(mode="after")
    def _tasks_for_package_manager(self) -> "Config":
        if "verification_tasks" not in self.model_fields_set:
            self.verification_tasks = _default_verification_tasks(self.package_manager)
        return self

    # ------------------------------------------------------------------
    # Derived paths (read-only properties)
    # ------------------------------------------------------------------

    @property
    def manifest_path(self) -> Path:
        """Path to the project manifest edited by config-edit steps."""
        return self.project_dir / self.manifest_name

    @property
    def component_file(self) -> Path:
        """Destination of the generated sample component."""
        return self.project_dir / self.component_path

    def resolve(self, relative: str | Path) -> Path:
        """Resolve a project-relative path against ``project_dir``."""
        path = Path(relative)
        return path if path.is_absolute() else self.project_dir / path

    # ------------------------------------------------------------------
    # Serialisation helpers
    # ------------------------------------------------------------------

    def save(self, path: Path) -> Path:
        """Persist the configuration to a JSON file and return its path."""
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(self.model_dump_json(indent=2), encoding="utf-8")
        return path

    @classmethod
    def load(cls, path: Path) -> "Config":
        """Load a previously-saved configuration from JSON."""
        raw = Path(path).read_text(encoding="utf-8")
        return cls.model_validate_json(raw)

    @classmethod
    def from_env(cls, **overrides: Any) -> "Config":
        """Build a ``Config`` from environment variables.

        Keyword *overrides* (e.g. CLI flags) win over the environment.

        Recognised variables (all optional):
            UPDATER_PROJECT_DIR, UPDATER_MANIFEST, UPDATER_PACKAGE_MANAGER,
            UPDATER_COMMAND_TIMEOUT, UPDATER_SKIP_VERIFY, UPDATER_LOG_LEVEL.
        """
        kwargs: dict[str, Any] = {}
        if os.environ.get("UPDATER_PROJECT_DIR"):
            kwargs["project_dir"] = Path(os.environ["UPDATER_PROJECT_DIR"])
        if os.environ.get("UPDATER_MANIFEST"):
            kwargs["manifest_name"] = os.environ["UPDATER_MANIFEST"]
        if os.environ.get("UPDATER_PACKAGE_MANAGER"):
            kwargs["package_manager"] = os.environ["UPDATER_PACKAGE_MANAGER"]
        if os.environ.get("UPDATER_COMMAND_TIMEOUT"):
            kwargs["command_timeout"] = int(os.environ["UPDATER_COMMAND_TIMEOUT"])
        if os.environ.get("UPDATER_LOG_LEVEL"):
            kwargs["log_level"] = os.environ["UPDATER_LOG_LEVEL"]

        skip = os.environ.get("UPDATER_SKIP_VERIFY", "").strip().lower()
        if skip in {"1", "true", "yes"}:
            kwargs["run_verification"] = False

        kwargs.update(overrides)
        return cls(**kwargs)
