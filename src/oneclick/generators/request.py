"""Form request (validation rule) generation."""

from __future__ import annotations

from collections.abc import Sequence

from ..models import AttributeSpec, AttributeType, GenerationRun, StepResult
from ..utils import print_warning
from .base import BaseGenerator

IMAGE_MIMES = "jpeg,png,jpg,gif,svg"

DATE_TYPES = frozenset({
    AttributeType.DATE.value,
    AttributeType.DATETIME.value,
    AttributeType.TIMESTAMP.value,
})


def attribute_rule(
    attr: AttributeSpec,
    presence: str,
    image_fields: Sequence[str],
    image_max_kb: int,
    string_max: int = 255,
) -> str:
    """Laravel rule string for one attribute.

    *presence* is ``required`` for store requests and ``sometimes`` for update
    requests.  Names in *image_fields* win over the declared type.
    """
    if attr.name in image_fields:
        return f"{presence}|image|mimes:{IMAGE_MIMES}|max:{image_max_kb}"
    if attr.type == AttributeType.STRING.value:
        return f"{presence}|string|max:{string_max}"
    if attr.type == AttributeType.INTEGER.value:
        return f"{presence}|integer"
    if attr.type == AttributeType.BOOLEAN.value:
        return f"{presence}|boolean"
    if attr.type in DATE_TYPES:
        return f"{presence}|date"
    if attr.is_foreign_key:
        return f"{presence}|numeric|exists:{attr.related_table},id"
    return presence


class RequestGenerator(BaseGenerator):
    """``Store<Name>Request`` and ``Update<Name>Request`` under ``app/Http/Requests``."""

    step = "request"

    def generate(self, run: GenerationRun) -> StepResult:
        entity = run.names["entity"]
        store_path = self.config.requests_path / f"Store{entity}Request.php"
        update_path = self.config.requests_path / f"Update{entity}Request.php"
        self.ensure_absent(f"Request classes for {entity}", store_path, update_path)

        attributes = self.valid_attributes(run)
        if not attributes:
            print_warning(f"No attributes defined for {entity}; request rules will be empty.")

        generation = self.config.generation
        for path, presence, max_kb in (
            (store_path, "required", generation.store_image_max_kb),
            (update_path, "sometimes", generation.update_image_max_kb),
        ):
            rules = [
                (
                    attr.name,
                    attribute_rule(
                        attr,
                        presence,
                        generation.image_fields,
                        max_kb,
                        generation.string_max_length,
                    ),
                )
                for attr in attributes
            ]
            self.write(
                "http/request.php.j2",
                path,
                self.context(run, class_name=path.stem, rules=rules),
            )

        return self.created(
            f"Request classes for {entity} created successfully!", store_path, update_path
        )
