"""Top-level generation flow for one entity.

Validate the name, run the one-time bootstrap setup if needed, generate the
model (the only step that can abort the run), collect custom methods, then
run every remaining generator in order and print a summary table.
"""

from __future__ import annotations

from .bootstrap import BootstrapPatcher
from .collectors import CustomMethodCollector
from .config import Config
from .errors import InvalidIdentifierError
from .generators import PIPELINE, ModelGenerator
from .models import GenerationRun, StepResult, StepStatus
from .prompts import ConsolePrompter, Prompter
from .templates import TemplateRenderer
from .utils import print_error, print_header, print_info, print_success, print_summary_table
from .validation import is_valid_entity_name

EXIT_OK = 0
EXIT_FAILURE = 1

_STATUS_STYLES: dict[StepStatus, str] = {
    StepStatus.CREATED: "[green]created[/green]",
    StepStatus.UPDATED: "[green]updated[/green]",
    StepStatus.SKIPPED: "[yellow]skipped[/yellow]",
    StepStatus.COLLISION: "[yellow]exists[/yellow]",
    StepStatus.FAILED: "[red]failed[/red]",
}


class Orchestrator:
    """Runs the full generation pipeline for a single entity."""

    def __init__(
        self,
        config: Config,
        prompter: Prompter | None = None,
        renderer: TemplateRenderer | None = None,
    ) -> None:
        self.config = config
        self.prompter = prompter or ConsolePrompter()
        self.renderer = renderer or TemplateRenderer()
        self.results: list[StepResult] = []

    def run(self, entity: str) -> int:
        """Generate every layer for *entity*.

        Returns:
            ``EXIT_OK`` once the pipeline ran to the end (individual steps may
            still have reported collisions), ``EXIT_FAILURE`` when the name is
            invalid or the model step failed.
        """
        self.results = []
        print_header(f"oneclick: {entity}")

        if not is_valid_entity_name(entity):
            print_error(str(InvalidIdentifierError("model", entity)))
            return EXIT_FAILURE

        patcher = BootstrapPatcher(self.config, self.renderer)
        needs_setup = not patcher.is_setup_complete()
        if needs_setup:
            self.results.append(patcher.setup())

        run = GenerationRun(entity=entity)
        model_result, run = ModelGenerator(self.config, self.renderer, self.prompter).run(run)
        self.results.append(model_result)
        if not model_result.ok:
            self.print_summary()
            return EXIT_FAILURE

        run = run.with_custom_methods(CustomMethodCollector(self.prompter).collect())

        for generator_cls in PIPELINE:
            generator = generator_cls(self.config, self.renderer, self.prompter)
            self.results.append(generator.run(run))

        self.print_summary()
        print_success("Project generation completed!")
        if needs_setup:
            print_info(
                "Note: you may need to restart your application to apply the changes "
                "to bootstrap/app.php."
            )
        return EXIT_OK

    def print_summary(self) -> None:
        rows = [
            (
                result.step,
                _STATUS_STYLES[result.status],
                ", ".join(str(p) for p in result.paths) or result.message,
            )
            for result in self.results
        ]
        print_summary_table(rows, title="Generation summary")
