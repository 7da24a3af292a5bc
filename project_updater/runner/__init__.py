"""Project Updater -- Runner module.

Executes planned steps one at a time with per-step failure isolation and
folds their outcomes into run statistics.

Public API
----------
.. autoclass:: StepRunner
.. autoclass:: PackageManager
.. autoclass:: StepResult
.. autoclass:: Stats
"""

from .manifest import OPERATIONS, UPDATE_SCRIPTS, ManifestError, apply_operation, merge_section
from .package_manager import CommandError, PackageManager
from .results import Stats, StepResult, StepStatus
from .steps import TOLERANT_KINDS, StepRunner, describe_error

__all__ = [
    # Runner
    "StepRunner",
    "TOLERANT_KINDS",
    "describe_error",
    # Package manager
    "PackageManager",
    "CommandError",
    # Manifest
    "OPERATIONS",
    "UPDATE_SCRIPTS",
    "ManifestError",
    "apply_operation",
    "merge_section",
    # Results
    "StepResult",
    "StepStatus",
    "Stats",
]
