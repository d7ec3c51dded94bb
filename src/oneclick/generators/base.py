"""Shared behaviour for every file generator.

A generator turns a :class:`~oneclick.models.GenerationRun` into one or more
PHP files.  Subclasses implement :meth:`BaseGenerator.generate` and raise
:mod:`oneclick.errors` exceptions for anything that stops the step;
:meth:`BaseGenerator.run` converts those into a :class:`StepResult` and
prints the outcome, so one failing step never stops the ones after it.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from ..config import Config
from ..errors import CollisionError, ScaffoldError
from ..models import AttributeSpec, GenerationRun, StepResult, StepStatus
from ..patching import ensure_provider_registered
from ..prompts import ConsolePrompter, Prompter
from ..templates import TemplateRenderer
from ..utils import print_error, print_info, print_success, print_warning, read_text, write_file
from ..validation import is_valid_identifier


class BaseGenerator:
    """Base class for the model, migration, repository ... route generators."""

    #: Short name shown in the summary table.
    step: str = ""

    def __init__(
        self,
        config: Config,
        renderer: TemplateRenderer | None = None,
        prompter: Prompter | None = None,
    ) -> None:
        self.config = config
        self.renderer = renderer or TemplateRenderer()
        self.prompter = prompter or ConsolePrompter()

    # -- Public API --------------------------------------------------------

    def run(self, run: GenerationRun) -> StepResult:
        """Generate and report, never raising :class:`ScaffoldError`."""
        try:
            result = self.generate(run)
        except ScaffoldError as exc:
            return self.failure(exc)
        self.report(result)
        return result

    def generate(self, run: GenerationRun) -> StepResult:
        raise NotImplementedError

    # -- Results -----------------------------------------------------------

    def result(self, status: StepStatus, message: str, *paths: Path) -> StepResult:
        return StepResult(step=self.step, status=status, message=message, paths=list(paths))

    def created(self, message: str, *paths: Path) -> StepResult:
        return self.result(StepStatus.CREATED, message, *paths)

    def skipped(self, message: str, *paths: Path) -> StepResult:
        return self.result(StepStatus.SKIPPED, message, *paths)

    def failure(self, exc: ScaffoldError) -> StepResult:
        """Print *exc* and wrap it in a ``collision`` or ``failed`` result."""
        print_error(str(exc))
        if isinstance(exc, CollisionError):
            return self.result(StepStatus.COLLISION, str(exc), exc.path)
        return self.result(StepStatus.FAILED, str(exc))

    @staticmethod
    def report(result: StepResult) -> None:
        if result.status is StepStatus.SKIPPED:
            print_warning(result.message)
        elif result.ok:
            print_success(result.message)
        else:
            print_error(result.message)

    # -- Helpers -----------------------------------------------------------

    def context(self, run: GenerationRun, **extra: Any) -> dict[str, Any]:
        """Template context shared by all generators."""
        ctx: dict[str, Any] = dict(run.names)
        ctx["attributes"] = list(run.attributes)
        ctx["methods"] = list(run.custom_methods)
        ctx.update(extra)
        return ctx

    @staticmethod
    def valid_attributes(run: GenerationRun) -> list[AttributeSpec]:
        """Attributes with a usable name; the rest are reported and dropped."""
        valid: list[AttributeSpec] = []
        for attr in run.attributes:
            if not is_valid_identifier(attr.name):
                print_error(f"Invalid attribute name '{attr.name}', skipping.")
                continue
            valid.append(attr)
        return valid

    @staticmethod
    def ensure_absent(label: str, *paths: Path) -> None:
        """Raise :class:`CollisionError` for the first of *paths* that exists."""
        for path in paths:
            if path.exists():
                raise CollisionError(label, path)

    def write(self, template: str, path: Path, context: dict[str, Any]) -> Path:
        return self.renderer.render_to_file(template, path, context)

    def write_once(self, template: str, path: Path, label: str) -> bool:
        """Render a context-free template unless *path* already exists.

        Returns ``True`` when the file was written.
        """
        if path.exists():
            print_warning(f"{label} already exists, skipping.")
            return False
        self.write(template, path, {})
        return True

    def register_provider(self, provider_class: str) -> None:
        """Add *provider_class* to ``bootstrap/providers.php`` when that file exists."""
        registry = self.config.providers_registry_path
        if not registry.exists():
            print_info(f"Don't forget to register {provider_class} in your application.")
            return
        text = read_text(registry)
        patched = ensure_provider_registered(text, provider_class)
        if patched != text:
            write_file(registry, patched)
            print_info(f"Registered {provider_class} in {registry.name}")
