"""Exception hierarchy for the generation pipeline.

Generators raise these internally; :class:`~oneclick.generators.base.BaseGenerator`
turns them into a :class:`~oneclick.models.StepResult` so that a single failing
step never aborts the run (the model step is the only gate).
"""

from __future__ import annotations

from pathlib import Path


class ScaffoldError(Exception):
    """Base class for every error raised while generating an entity."""


class InvalidIdentifierError(ScaffoldError):
    """Raised when an entity, column or method name fails validation."""

    def __init__(self, kind: str, value: str) -> None:
        self.kind = kind
        self.value = value
        super().__init__(
            f"Invalid {kind} name '{value}'. Use alphanumeric characters and start with a letter."
        )


class CollisionError(ScaffoldError):
    """Raised when a target file already exists and must not be overwritten."""

    def __init__(self, label: str, path: Path) -> None:
        self.label = label
        self.path = path
        super().__init__(f"{label} already exists at '{path}'!")


class PatchError(ScaffoldError):
    """Raised when a patch rule cannot find the anchor it inserts after."""
