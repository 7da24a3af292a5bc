"""Interactive collection of the user's choices into a :class:`Plan`."""

from __future__ import annotations

from project_updater.config import Config
from project_updater.logging_setup import get_logger
from project_updater.planner.models import ConfigEditDirective, FileDirective, Plan
from project_updater.planner.prompts import Prompter
from project_updater.runner.manifest import UPDATE_SCRIPTS
from project_updater.scaffolder.templates import TemplateRenderer, component_generator

log = get_logger("planner")


class PromptCollector:
    """Asks the four planning questions and returns an immutable Plan.

    Performs no filesystem or network access: the component content is a
    deferred generator rendered only when its step runs.
    """

    def __init__(
        self,
        prompter: Prompter,
        config: Config,
        renderer: TemplateRenderer | None = None,
    ) -> None:
        self.prompter = prompter
        self.config = config
        self.renderer = renderer

    def collect(self) -> Plan:
        to_remove = self.prompter.ask_list("Enter packages to remove (comma-separated): ")
        to_add = self.prompter.ask_list("Enter packages to add (comma-separated): ")

        files: list[FileDirective] = []
        if self.prompter.ask_yes_no("Create sample React component?"):
            files.append(
                FileDirective(
                    path=self.config.component_path,
                    generator=component_generator(
                        self.config.component_name, renderer=self.renderer
                    ),
                )
            )

        edits: list[ConfigEditDirective] = []
        if self.prompter.ask_yes_no("Update configuration files?"):
            edits.append(
                ConfigEditDirective(target=self.config.manifest_name, operation=UPDATE_SCRIPTS)
            )

        plan = Plan(
            packages_to_remove=tuple(to_remove),
            packages_to_add=tuple(to_add),
            files_to_create=tuple(files),
            config_edits=tuple(edits),
        )
        log.debug(
            "Plan collected: remove=%s add=%s files=%d edits=%d",
            list(plan.packages_to_remove),
            list(plan.packages_to_add),
            len(plan.files_to_create),
            len(plan.config_edits),
        )
        return plan
