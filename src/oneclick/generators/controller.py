"""HTTP controller generation."""

from __future__ import annotations

from ..models import GenerationRun, StepResult
from .base import BaseGenerator


class ControllerGenerator(BaseGenerator):
    """``app/Http/Controllers/<Name>Controller.php`` delegating to the entity service.

    An existing controller is left alone and reported as a collision.
    """

    step = "controller"

    def generate(self, run: GenerationRun) -> StepResult:
        entity = run.names["entity"]
        path = self.config.controllers_path / f"{entity}Controller.php"
        self.ensure_absent(f"Controller '{entity}Controller'", path)

        self.write(
            "http/controller.php.j2",
            path,
            self.context(run, per_page=self.config.generation.default_per_page),
        )
        return self.created(f"Controller '{entity}Controller' created successfully!", path)
