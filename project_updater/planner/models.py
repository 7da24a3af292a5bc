"""Data models for planning a run.

A :class:`Plan` is the immutable description of the work a user asked for.
:func:`build_steps` expands it (plus the configured verification tasks) into
the ordered list of :data:`Step` values the runner executes.
"""

from __future__ import annotations

from enum import Enum
from typing import Annotated, Callable, Literal, Union

from pydantic import BaseModel, ConfigDict, Field

from project_updater.config import VerificationTaskConfig


class StepKind(str, Enum):
    """The five kinds of unit the runner knows how to execute."""

    REMOVE_PACKAGE = "remove_package"
    ADD_PACKAGE = "add_package"
    CREATE_FILE = "create_file"
    EDIT_CONFIG = "edit_config"
    VERIFICATION_TASK = "verification_task"


# ---------------------------------------------------------------------------
# Plan directives
# ---------------------------------------------------------------------------


class FileDirective(BaseModel):
    """Create (or overwrite) *path* with the text returned by *generator*."""

    model_config = ConfigDict(frozen=True)

    path: str = Field(..., min_length=1, description="Project-relative target path")
    generator: Callable[[], str] = Field(..., description="Deferred content producer")


class ConfigEditDirective(BaseModel):
    """Apply the named manifest operation to *target*."""

    model_config = ConfigDict(frozen=True)

    target: str = Field(..., min_length=1, description="Manifest file name")
    operation: str = Field(..., min_length=1, description="Registered operation name")


class Plan(BaseModel):
    """Everything the user asked for, fixed before confirmation."""

    model_config = ConfigDict(frozen=True)

    packages_to_remove: tuple[str, ...] = ()
    packages_to_add: tuple[str, ...] = ()
    files_to_create: tuple[FileDirective, ...] = ()
    config_edits: tuple[ConfigEditDirective, ...] = ()

    @property
    def is_empty(self) -> bool:
        """True when no collection has an entry (a valid, no-op plan)."""
        return not (
            self.packages_to_remove
            or self.packages_to_add
            or self.files_to_create
            or self.config_edits
        )


# ---------------------------------------------------------------------------
# Steps (tagged union on ``kind``)
# ---------------------------------------------------------------------------


class _StepBase(BaseModel):
    model_config = ConfigDict(frozen=True)

    @property
    def identifier(self) -> str:
        raise NotImplementedError


class RemovePackageStep(_StepBase):
    kind: Literal[StepKind.REMOVE_PACKAGE] = StepKind.REMOVE_PACKAGE
    name: str

    @property
    def identifier(self) -> str:
        return self.name


class AddPackageStep(_StepBase):
    kind: Literal[StepKind.ADD_PACKAGE] = StepKind.ADD_PACKAGE
    name: str

    @property
    def identifier(self) -> str:
        return self.name


class CreateFileStep(_StepBase):
    kind: Literal[StepKind.CREATE_FILE] = StepKind.CREATE_FILE
    path: str
    generator: Callable[[], str]

    @property
    def identifier(self) -> str:
        return self.path


class EditConfigStep(_StepBase):
    kind: Literal[StepKind.EDIT_CONFIG] = StepKind.EDIT_CONFIG
    target: str
    operation: str

    @property
    def identifier(self) -> str:
        return self.target


class VerificationStep(_StepBase):
    """Advisory: a failing command downgrades to a warning, never a failure."""

    kind: Literal[StepKind.VERIFICATION_TASK] = StepKind.VERIFICATION_TASK
    name: str
    command: str

    @property
    def identifier(self) -> str:
        return self.name


Step = Annotated[
    Union[
        RemovePackageStep,
        AddPackageStep,
        CreateFileStep,
        EditConfigStep,
        VerificationStep,
    ],
    Field(discriminator="kind"),
]


def build_steps(
    plan: Plan,
    verification_tasks: list[VerificationTaskConfig] | None = None,
) -> list[Step]:
    """Expand *plan* into execution order.

    Removals first, then installs, file creations, config edits and finally
    the verification tasks.
    """
    steps: list[Step] = []
    steps.extend(RemovePackageStep(name=name) for name in plan.packages_to_remove)
    steps.extend(AddPackageStep(name=name) for name in plan.packages_to_add)
    steps.extend(
        CreateFileStep(path=directive.path, generator=directive.generator)
        for directive in plan.files_to_create
    )
    steps.extend(
        EditConfigStep(target=edit.target, operation=edit.operation)
        for edit in plan.config_edits
    )
    for task in verification_tasks or []:
        steps.append(VerificationStep(name=task.name, command=task.command))
    return steps
