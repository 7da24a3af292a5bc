"""Unit tests for Plan, Step variants and build_steps (project_updater.planner.models).

Tests cover:
- Plan.is_empty and immutability
- Step identifiers
- Discriminated union validation on ``kind``
- build_steps ordering, including verification tasks
"""

from __future__ import annotations

import pytest
from pydantic import TypeAdapter, ValidationError

from project_updater.config import VerificationTaskConfig
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


def _content() -> str:
    return "export default () => null;\n"


# ---------------------------------------------------------------------------
# Plan
# ---------------------------------------------------------------------------


class TestPlan:
    @pytest.mark.unit
    def test_default_plan_is_empty(self):
        assert Plan().is_empty is True

    @pytest.mark.unit
    @pytest.mark.parametrize(
        "fields",
        [
            {"packages_to_remove": ("lodash",)},
            {"packages_to_add": ("left-pad",)},
            {"files_to_create": (FileDirective(path="a.jsx", generator=_content),)},
            {"config_edits": (ConfigEditDirective(target="package.json", operation="update_scripts"),)},
        ],
    )
    def test_any_entry_makes_plan_non_empty(self, fields):
        assert Plan(**fields).is_empty is False

    @pytest.mark.unit
    def test_plan_is_frozen(self):
        plan = Plan(packages_to_add=("a",))
        with pytest.raises(ValidationError):
            plan.packages_to_add = ("b",)

    @pytest.mark.unit
    def test_lists_coerced_to_tuples(self):
        plan = Plan(packages_to_add=["a", "b", "a"])
        assert plan.packages_to_add == ("a", "b", "a")

    @pytest.mark.unit
    def test_file_directive_generator_is_deferred(self):
        calls: list[int] = []

        def generator() -> str:
            calls.append(1)
            return "x"

        directive = FileDirective(path="a.jsx", generator=generator)
        assert calls == []
        assert directive.generator() == "x"

    @pytest.mark.unit
    def test_file_directive_requires_path(self):
        with pytest.raises(ValidationError):
            FileDirective(path="", generator=_content)


# ---------------------------------------------------------------------------
# Steps
# ---------------------------------------------------------------------------


class TestSteps:
    @pytest.mark.unit
    def test_identifiers(self):
        assert RemovePackageStep(name="lodash").identifier == "lodash"
        assert AddPackageStep(name="left-pad").identifier == "left-pad"
        assert CreateFileStep(path="src/A.jsx", generator=_content).identifier == "src/A.jsx"
        assert EditConfigStep(target="package.json", operation="update_scripts").identifier == "package.json"
        assert VerificationStep(name="Lint", command="npm run lint").identifier == "Lint"

    @pytest.mark.unit
    def test_kind_defaults(self):
        assert RemovePackageStep(name="a").kind is StepKind.REMOVE_PACKAGE
        assert VerificationStep(name="a", command="true").kind is StepKind.VERIFICATION_TASK

    @pytest.mark.unit
    def test_discriminated_union(self):
        adapter = TypeAdapter(Step)
        step = adapter.validate_python({"kind": StepKind.ADD_PACKAGE, "name": "left-pad"})
        assert isinstance(step, AddPackageStep)
        step = adapter.validate_python(
            {"kind": StepKind.VERIFICATION_TASK, "name": "Build", "command": "npm run build"}
        )
        assert isinstance(step, VerificationStep)

    @pytest.mark.unit
    def test_unknown_kind_rejected(self):
        with pytest.raises(ValidationError):
            TypeAdapter(Step).validate_python({"kind": "reboot", "name": "x"})


# ---------------------------------------------------------------------------
# build_steps
# ---------------------------------------------------------------------------


class TestBuildSteps:
    @pytest.mark.unit
    def test_empty_plan_no_tasks(self):
        assert build_steps(Plan()) == []

    @pytest.mark.unit
    def test_empty_plan_still_runs_verification(self):
        tasks = [VerificationTaskConfig(name="Lint", command="npm run lint")]
        steps = build_steps(Plan(), tasks)
        assert [s.kind for s in steps] == [StepKind.VERIFICATION_TASK]

    @pytest.mark.unit
    def test_execution_order(self):
        plan = Plan(
            packages_to_remove=("old-a", "old-b"),
            packages_to_add=("new-a",),
            files_to_create=(FileDirective(path="src/A.jsx", generator=_content),),
            config_edits=(ConfigEditDirective(target="package.json", operation="update_scripts"),),
        )
        tasks = [
            VerificationTaskConfig(name="Analyze", command="true"),
            VerificationTaskConfig(name="Build", command="true"),
        ]
        steps = build_steps(plan, tasks)

        assert [(s.kind, s.identifier) for s in steps] == [
            (StepKind.REMOVE_PACKAGE, "old-a"),
            (StepKind.REMOVE_PACKAGE, "old-b"),
            (StepKind.ADD_PACKAGE, "new-a"),
            (StepKind.CREATE_FILE, "src/A.jsx"),
            (StepKind.EDIT_CONFIG, "package.json"),
            (StepKind.VERIFICATION_TASK, "Analyze"),
            (StepKind.VERIFICATION_TASK, "Build"),
        ]

    @pytest.mark.unit
    def test_duplicates_preserved(self):
        steps = build_steps(Plan(packages_to_add=("a", "a")))
        assert [s.identifier for s in steps] == ["a", "a"]

    @pytest.mark.unit
    def test_generator_carried_over(self):
        plan = Plan(files_to_create=(FileDirective(path="a.jsx", generator=_content),))
        (step,) = build_steps(plan)
        assert step.generator() == _content()
