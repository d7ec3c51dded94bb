"""Pydantic models describing one generation run.

A :class:`GenerationRun` is built once per command invocation and threaded
through every generator.  It is frozen: collectors produce new values and the
orchestrator swaps in an updated run with :meth:`GenerationRun.with_attributes`
or :meth:`GenerationRun.with_custom_methods` instead of mutating shared state.
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .naming import camel_case, entity_names, foreign_table, pascal_case, strip_id_suffix

Scalar = Union[bool, int, float, str]


# ---------------------------------------------------------------------------
# Enumerations
# ---------------------------------------------------------------------------


class AttributeType(str, Enum):
    """Column types offered by the attribute prompt."""

    STRING = "string"
    INTEGER = "integer"
    TEXT = "text"
    BOOLEAN = "boolean"
    DATE = "date"
    DATETIME = "datetime"
    TIMESTAMP = "timestamp"
    FLOAT = "float"
    DECIMAL = "decimal"
    FOREIGN_ID = "foreignId"
    ENUM = "enum"


class ReturnType(str, Enum):
    """Return types accepted for custom repository/service methods."""

    MIXED = "mixed"
    VOID = "void"
    BOOL = "bool"
    INT = "int"
    STRING = "string"
    ARRAY = "array"
    MODEL = "Model"
    COLLECTION = "Collection"


class StepStatus(str, Enum):
    """Outcome of a single pipeline step."""

    CREATED = "created"
    UPDATED = "updated"
    SKIPPED = "skipped"
    COLLISION = "collision"
    FAILED = "failed"


# ---------------------------------------------------------------------------
# Attribute / method specifications
# ---------------------------------------------------------------------------


class AttributeSpec(BaseModel):
    """One column on the generated entity.

    ``type`` is kept as a plain string: the collectors only ever produce known
    types, but generators must still be able to report and drop an
    unrecognised one coming from other sources.
    """

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., description="Column / field name")
    type: str = Field(default=AttributeType.STRING.value, description="Column type")
    nullable: bool = Field(default=False)
    unique: bool = Field(default=False)
    default: Scalar | None = Field(default=None, description="Column default value")
    enum_values: tuple[str, ...] = Field(
        default=(), description="Allowed values when type is 'enum'"
    )

    @property
    def is_foreign_key(self) -> bool:
        return self.type == AttributeType.FOREIGN_ID.value

    @property
    def is_enum(self) -> bool:
        return self.type == AttributeType.ENUM.value

    @property
    def related_name(self) -> str:
        """``author_id`` -> ``author``."""
        return strip_id_suffix(self.name)

    @property
    def related_model(self) -> str:
        """``author_id`` -> ``Author``."""
        return pascal_case(self.related_name)

    @property
    def related_table(self) -> str:
        """``author_id`` -> ``authors``."""
        return foreign_table(self.name)

    @property
    def relation_method(self) -> str:
        """``blog_post_id`` -> ``blogPost``."""
        return camel_case(self.related_name)


class CustomMethodSpec(BaseModel):
    """An extra repository (and optionally service) method."""

    model_config = ConfigDict(frozen=True)

    name: str
    return_type: str = Field(default=ReturnType.MIXED.value)
    params: str = Field(default="", description="Raw PHP parameter list")
    implement_in_service: bool = Field(default=True)

    @property
    def signature(self) -> str:
        """PHP method signature without a trailing ``;`` or body."""
        return f"public function {self.name}({self.params}): {self.return_type}"


# ---------------------------------------------------------------------------
# Generation run
# ---------------------------------------------------------------------------


class GenerationRun(BaseModel):
    """Everything the generators need to know about one entity."""

    model_config = ConfigDict(frozen=True)

    entity: str
    attributes: tuple[AttributeSpec, ...] = ()
    custom_methods: tuple[CustomMethodSpec, ...] = ()

    @field_validator("attributes")
    @classmethod
    def _unique_attribute_names(
        cls, value: tuple[AttributeSpec, ...]
    ) -> tuple[AttributeSpec, ...]:
        seen: set[str] = set()
        for attr in value:
            if attr.name in seen:
                raise ValueError(f"Duplicate attribute '{attr.name}'")
            seen.add(attr.name)
        return value

    # -- Derived views -----------------------------------------------------

    @property
    def names(self) -> dict[str, str]:
        """Derived entity names, see :func:`oneclick.naming.entity_names`."""
        return entity_names(self.entity)

    @property
    def attribute_names(self) -> list[str]:
        return [attr.name for attr in self.attributes]

    def image_field(self, vocabulary: list[str] | tuple[str, ...]) -> str | None:
        """First vocabulary entry that is also an attribute name, if any."""
        names = set(self.attribute_names)
        for candidate in vocabulary:
            if candidate in names:
                return candidate
        return None

    @property
    def service_methods(self) -> list[CustomMethodSpec]:
        return [m for m in self.custom_methods if m.implement_in_service]

    # -- Copy-on-write updates ---------------------------------------------

    def with_entity(self, entity: str) -> "GenerationRun":
        return GenerationRun(
            entity=entity,
            attributes=self.attributes,
            custom_methods=self.custom_methods,
        )

    def with_attributes(self, attributes: list[AttributeSpec] | tuple[AttributeSpec, ...]) -> "GenerationRun":
        return GenerationRun(
            entity=self.entity,
            attributes=tuple(attributes),
            custom_methods=self.custom_methods,
        )

    def with_custom_methods(
        self, methods: list[CustomMethodSpec] | tuple[CustomMethodSpec, ...]
    ) -> "GenerationRun":
        return GenerationRun(
            entity=self.entity,
            attributes=self.attributes,
            custom_methods=tuple(methods),
        )


# ---------------------------------------------------------------------------
# Step results
# ---------------------------------------------------------------------------


class StepResult(BaseModel):
    """Outcome of one generator, collected into the final summary table."""

    step: str
    status: StepStatus
    message: str = ""
    paths: list[Path] = Field(default_factory=list)

    @property
    def ok(self) -> bool:
        """``True`` unless the step failed or hit an existing file."""
        return self.status in (StepStatus.CREATED, StepStatus.UPDATED, StepStatus.SKIPPED)
