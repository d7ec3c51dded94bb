"""Eloquent model generation.

The model step is the gate of the whole pipeline: it refuses an invalid name
or an existing model file, and it is where the attributes are collected.
"""

from __future__ import annotations

from ..collectors import AttributeCollector
from ..errors import ScaffoldError
from ..models import GenerationRun, StepResult
from ..patching import inject_class_members
from ..utils import read_text, write_file
from ..validation import require_entity_name
from .base import BaseGenerator


class ModelGenerator(BaseGenerator):
    """Writes ``app/Models/<Name>.php`` and fills in ``$fillable`` and relations."""

    step = "model"

    def run(self, run: GenerationRun) -> tuple[StepResult, GenerationRun]:  # type: ignore[override]
        """Generate the model and return the run carrying the collected attributes.

        On failure the original *run* is returned unchanged.
        """
        try:
            result, updated = self.generate(run)
        except ScaffoldError as exc:
            return self.failure(exc), run
        self.report(result)
        return result, updated

    def generate(self, run: GenerationRun) -> tuple[StepResult, GenerationRun]:  # type: ignore[override]
        require_entity_name(run.entity)
        names = run.names
        path = self.config.models_path / f"{names['entity']}.php"
        self.ensure_absent(f"Model {names['entity']}", path)

        self.write("model/model.php.j2", path, names)

        attributes = AttributeCollector(self.prompter).collect()
        run = run.with_attributes(attributes)
        self.add_members(path, run)

        return self.created(f"Model {names['entity']} created successfully!", path), run

    def add_members(self, path, run: GenerationRun) -> None:
        """Inject ``$fillable`` and one ``belongsTo`` per foreign key into *path*."""
        members = self.renderer.render(
            "model/members.php.j2",
            {
                "fillable": run.attribute_names,
                "relations": [a for a in run.attributes if a.is_foreign_key],
            },
        )
        text = read_text(path)
        write_file(path, inject_class_members(text, run.names["entity"], members))
