"""Project Updater planner -- turns user answers into an execution plan.

Quick usage::

    from project_updater.planner import PromptCollector, ConfirmationGate, Prompter

    with Prompter() as prompter:
        plan = PromptCollector(prompter, config).collect()
        if ConfirmationGate(prompter).confirm(plan):
            steps = build_steps(plan, config.verification_tasks)
"""

from project_updater.planner.collector import PromptCollector
from project_updater.planner.confirmation import ConfirmationGate, summarize
from project_updater.planner.models import (
    AddPackageStep,
    ConfigEditDirective,
    CreateFileStep,
    EditConfigStep,
    FileDirective,
    Plan,
    RemovePackageStep,
    Step,
    StepKind,
    VerificationStep,
    build_steps,
)
from project_updater.planner.prompts import Prompter, is_affirmative, split_csv

__all__ = [
    # Models
    "Plan",
    "FileDirective",
    "ConfigEditDirective",
    "Step",
    "StepKind",
    "RemovePackageStep",
    "AddPackageStep",
    "CreateFileStep",
    "EditConfigStep",
    "VerificationStep",
    "build_steps",
    # Interaction
    "Prompter",
    "PromptCollector",
    "ConfirmationGate",
    "summarize",
    "split_csv",
    "is_affirmative",
]
