"""Interactive collection of attributes and custom methods.

Both collectors loop on a :class:`~oneclick.prompts.Prompter` and re-prompt
on every invalid answer; nothing is coerced silently.
"""

from __future__ import annotations

from .models import AttributeSpec, AttributeType, CustomMethodSpec, ReturnType
from .prompts import Prompter
from .utils import print_error
from .validation import (
    ATTRIBUTE_TYPES,
    RETURN_TYPES,
    is_valid_attribute_type,
    is_valid_identifier,
    is_valid_params,
    is_valid_return_type,
)

DONE_SENTINEL = "done"
MODIFIERS: tuple[str, ...] = ("nullable", "unique", "default", "none")


class AttributeCollector:
    """Gathers the ordered column definitions for one entity."""

    def __init__(self, prompter: Prompter) -> None:
        self.prompter = prompter

    def collect(self) -> tuple[AttributeSpec, ...]:
        """Run the prompt loop until the user types ``done``.

        Returns:
            Attributes in the order they were entered (possibly empty).
        """
        attributes: list[AttributeSpec] = []
        seen: set[str] = set()

        while True:
            name = self.prompter.ask('Enter column name (or "done" to finish)').strip()

            if name.lower() == DONE_SENTINEL:
                break
            if not name:
                print_error("Column name cannot be empty.")
                continue
            if not is_valid_identifier(name):
                print_error(
                    f"Invalid column name '{name}'. Use letters, digits and underscores, "
                    "starting with a letter."
                )
                continue
            if name in seen:
                print_error(f"Column '{name}' has already been added.")
                continue

            attributes.append(self._collect_details(name))
            seen.add(name)

        return tuple(attributes)

    def _collect_details(self, name: str) -> AttributeSpec:
        column_type = self._ask_type()
        modifiers = self.prompter.multi_choice(
            f"Select modifiers for '{name}'", MODIFIERS, default=["none"]
        )
        if "none" in modifiers:
            modifiers = []

        default = None
        if "default" in modifiers:
            default = self.prompter.ask(f"Enter default value for '{name}'")

        enum_values: tuple[str, ...] = ()
        if column_type == AttributeType.ENUM.value:
            enum_values = self._collect_enum_values(name)

        return AttributeSpec(
            name=name,
            type=column_type,
            nullable="nullable" in modifiers,
            unique="unique" in modifiers,
            default=default,
            enum_values=enum_values,
        )

    def _ask_type(self) -> str:
        while True:
            column_type = self.prompter.choice("Select column type", ATTRIBUTE_TYPES)
            if is_valid_attribute_type(column_type):
                return column_type
            print_error(f"Invalid column type '{column_type}'.")

    def _collect_enum_values(self, name: str) -> tuple[str, ...]:
        while True:
            raw = self.prompter.ask(f"Enter allowed values for '{name}' (comma-separated)")
            values = tuple(v.strip() for v in raw.split(",") if v.strip())
            if values:
                return values
            print_error("Enum columns need at least one allowed value.")


class CustomMethodCollector:
    """Gathers extra repository (and optionally service) method signatures."""

    def __init__(self, prompter: Prompter) -> None:
        self.prompter = prompter

    def collect(self) -> tuple[CustomMethodSpec, ...]:
        methods: list[CustomMethodSpec] = []

        while True:
            response = self.prompter.ask(
                "Do you want to add a custom method in the repository? (yes/no)"
            ).strip().lower()

            if response == "no":
                break
            if response != "yes":
                print_error('Invalid input. Please enter "yes" or "no".')
                continue

            methods.append(self._collect_method())

        return tuple(methods)

    def _collect_method(self) -> CustomMethodSpec:
        name = self._ask_method_name()
        return_type = self._ask_return_type()
        params = self._ask_params()
        implement_in_service = self.prompter.confirm(
            "Do you want to implement this method in the service?", default=True
        )
        return CustomMethodSpec(
            name=name,
            return_type=return_type,
            params=params,
            implement_in_service=implement_in_service,
        )

    def _ask_method_name(self) -> str:
        while True:
            name = self.prompter.ask("Enter method name (e.g., findByEmail)").strip()
            if is_valid_identifier(name):
                return name
            print_error(f"Invalid method name '{name}'.")

    def _ask_return_type(self) -> str:
        while True:
            value = self.prompter.choice(
                "Enter return type", RETURN_TYPES, default=ReturnType.MIXED.value
            )
            if is_valid_return_type(value):
                return value
            print_error(f"Invalid return type '{value}'. Choose one of: {', '.join(RETURN_TYPES)}")

    def _ask_params(self) -> str:
        while True:
            params = self.prompter.ask(
                "Enter parameters (e.g., string $email, int $id)", default=""
            ).strip()
            if is_valid_params(params):
                return params
            print_error(f"Invalid parameter list '{params}'. Expected 'type $name, type $name'.")
            if self.prompter.confirm("Leave the parameter list empty instead?", default=False):
                return ""
