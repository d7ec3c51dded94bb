"""API resource generation."""

from __future__ import annotations

from ..models import GenerationRun, StepResult
from .base import BaseGenerator


class ResourceGenerator(BaseGenerator):
    """``app/Http/Resources/<Name>Resource.php`` mapping ``id`` plus every attribute."""

    step = "resource"

    def generate(self, run: GenerationRun) -> StepResult:
        entity = run.names["entity"]
        path = self.config.resources_path / f"{entity}Resource.php"
        self.ensure_absent(f"Resource {entity}Resource", path)

        fields = [attr.name for attr in self.valid_attributes(run)]
        self.write("http/resource.php.j2", path, self.context(run, fields=fields))
        return self.created(f"Resource {entity}Resource created successfully!", path)
