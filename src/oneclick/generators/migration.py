"""Schema migration generation.

Produces ``database/migrations/<timestamp>_create_<table>_table.php``.  When a
migration for the same table already exists the user picks overwrite, rename
or skip; nothing is replaced silently.
"""

from __future__ import annotations

import secrets
from datetime import datetime
from pathlib import Path

from ..errors import InvalidIdentifierError, ScaffoldError
from ..models import AttributeSpec, AttributeType, GenerationRun, StepResult
from ..templates import php_literal, php_string
from ..utils import ensure_dir, migration_timestamp, print_error, print_warning
from ..validation import is_valid_entity_name, require_identifier
from .base import BaseGenerator

COLLISION_CHOICES: tuple[str, ...] = ("overwrite", "rename", "skip")

# Blueprint method per attribute type (foreignId and enum are handled apart).
COLUMN_METHODS: dict[str, str] = {
    AttributeType.STRING.value: "string",
    AttributeType.INTEGER.value: "integer",
    AttributeType.TEXT.value: "text",
    AttributeType.BOOLEAN.value: "boolean",
    AttributeType.DATE.value: "date",
    AttributeType.DATETIME.value: "dateTime",
    AttributeType.TIMESTAMP.value: "timestamp",
    AttributeType.FLOAT.value: "float",
    AttributeType.DECIMAL.value: "decimal",
}

_BOOLEAN_WORDS = {"true": True, "false": False, "1": True, "0": False}


def default_literal(attr: AttributeSpec) -> str:
    """PHP literal for ``->default(...)``; boolean columns accept true/false/1/0."""
    value = attr.default
    if attr.type == AttributeType.BOOLEAN.value and isinstance(value, str):
        value = _BOOLEAN_WORDS.get(value.strip().lower(), value)
    return php_literal(value)


def column_statement(attr: AttributeSpec) -> str:
    """Render the ``$table->...;`` line for one attribute.

    Raises:
        InvalidIdentifierError: If the column name is invalid.
        ScaffoldError: If the type is missing or unknown.
    """
    require_identifier(attr.name)

    name = php_string(attr.name)
    if attr.is_foreign_key:
        column = f"$table->foreignId({name})"
    elif attr.is_enum and attr.enum_values:
        values = ", ".join(php_string(v) for v in attr.enum_values)
        column = f"$table->enum({name}, [{values}])"
    elif attr.is_enum:
        column = f"$table->string({name})"
    elif attr.type in COLUMN_METHODS:
        column = f"$table->{COLUMN_METHODS[attr.type]}({name})"
    else:
        raise ScaffoldError(f"Unknown column type '{attr.type}' for '{attr.name}'.")

    if attr.nullable:
        column += "->nullable()"
    if attr.default is not None:
        column += f"->default({default_literal(attr)})"
    if attr.unique:
        column += "->unique()"
    if attr.is_foreign_key:
        column += "->constrained()->cascadeOnDelete()->cascadeOnUpdate()"
    return column + ";"


class MigrationGenerator(BaseGenerator):
    """Writes one create (or recreate) migration per entity."""

    step = "migration"

    def generate(self, run: GenerationRun) -> StepResult:
        table = run.names["table"]
        recreate = False

        existing = self.existing_migrations(table)
        if existing:
            choice = self.prompter.choice(
                f"A migration for table '{table}' already exists. What do you want to do?",
                COLLISION_CHOICES,
                default="skip",
            )
            if choice == "skip":
                return self.skipped(f"Migration for '{table}' skipped.", *existing)
            if choice == "rename":
                return self.generate(run.with_entity(self._ask_new_name(run.entity)))
            for path in existing:
                path.unlink()
            recreate = True

        columns = self.build_columns(run)
        if not columns:
            print_warning(
                f"No columns defined for '{table}'; the table will only have id and timestamps."
            )

        kind = "recreate" if recreate else "create"
        path = self.migration_path(kind, table)
        self.write(
            "migration/create_table.php.j2",
            path,
            self.context(run, columns=columns, recreate=recreate),
        )
        return self.created(f"Migration for {run.names['entity']} created successfully!", path)

    def build_columns(self, run: GenerationRun) -> list[str]:
        """One statement per usable attribute; broken ones are reported and dropped."""
        columns: list[str] = []
        for attr in run.attributes:
            try:
                columns.append(column_statement(attr))
            except ScaffoldError as exc:
                print_error(f"{exc} Column skipped.")
                continue
            if attr.is_enum and not attr.enum_values:
                print_warning(
                    f"Enum column '{attr.name}' has no allowed values; using a string column instead."
                )
        return columns

    def existing_migrations(self, table: str) -> list[Path]:
        directory = self.config.migrations_path
        if not directory.is_dir():
            return []
        found = list(directory.glob(f"*_create_{table}_table.php"))
        found += directory.glob(f"*_recreate_{table}_table.php")
        return sorted(found)

    def migration_path(self, kind: str, table: str, now: datetime | None = None) -> Path:
        """Timestamped file name; a random hex suffix is added if it is taken."""
        directory = ensure_dir(self.config.migrations_path)
        stamp = migration_timestamp(now)
        path = directory / f"{stamp}_{kind}_{table}_table.php"
        while path.exists():
            path = directory / f"{stamp}_{secrets.token_hex(2)}_{kind}_{table}_table.php"
        return path

    def _ask_new_name(self, current: str) -> str:
        while True:
            name = self.prompter.ask("Enter a new model name for the migration").strip()
            if not is_valid_entity_name(name):
                print_error(str(InvalidIdentifierError("model", name)))
                continue
            if name == current:
                print_error("The new name must differ from the current one.")
                continue
            return name
