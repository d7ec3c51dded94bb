"""Lexical validation for entity, column and method names.

All checks are pure functions.  Interactive flows re-prompt when a check
fails; batch code paths call :func:`require_entity_name` (or report and skip)
instead of coercing the input into something valid.
"""

from __future__ import annotations

import re

from .errors import InvalidIdentifierError

IDENTIFIER_RE = re.compile(r"^[A-Za-z][A-Za-z0-9_]*$")
ENTITY_NAME_RE = re.compile(r"^[A-Za-z][A-Za-z0-9]*$")

ATTRIBUTE_TYPES: tuple[str, ...] = (
    "string",
    "integer",
    "text",
    "boolean",
    "date",
    "datetime",
    "timestamp",
    "float",
    "decimal",
    "foreignId",
    "enum",
)

RETURN_TYPES: tuple[str, ...] = (
    "mixed",
    "void",
    "bool",
    "int",
    "string",
    "array",
    "Model",
    "Collection",
)

# One ``type $name`` pair; tolerates ``?int``, ``\App\Foo``, ``int|string``,
# by-reference/variadic markers and a trailing ``= default``.
_PARAM = r"\s*\??[A-Za-z_\\][A-Za-z0-9_\\|]*\s+&?(?:\.\.\.)?\$[A-Za-z_][A-Za-z0-9_]*(?:\s*=\s*[^,]+?)?\s*"
PARAMS_RE = re.compile(rf"^{_PARAM}(?:,{_PARAM})*$")


def is_valid_identifier(text: str | None) -> bool:
    """Return ``True`` if *text* is a valid column or method name."""
    return bool(text) and IDENTIFIER_RE.match(text) is not None


def is_valid_entity_name(text: str | None) -> bool:
    """Return ``True`` if *text* is a valid model/entity name (no underscores)."""
    return bool(text) and ENTITY_NAME_RE.match(text) is not None


def is_valid_attribute_type(text: str | None) -> bool:
    return text in ATTRIBUTE_TYPES


def is_valid_return_type(text: str | None) -> bool:
    return text in RETURN_TYPES


def is_valid_params(text: str | None) -> bool:
    """Return ``True`` for an empty list or ``type $name[, type $name]*``.

    Examples::

        is_valid_params("")                        -> True
        is_valid_params("string $email, int $id")  -> True
        is_valid_params("$email")                  -> False
    """
    if text is None or not text.strip():
        return True
    return PARAMS_RE.match(text) is not None


def require_entity_name(name: str) -> str:
    """Return *name* unchanged or raise :class:`InvalidIdentifierError`."""
    if not is_valid_entity_name(name):
        raise InvalidIdentifierError("entity", name)
    return name


def require_identifier(name: str, kind: str = "column") -> str:
    """Return *name* unchanged or raise :class:`InvalidIdentifierError`."""
    if not is_valid_identifier(name):
        raise InvalidIdentifierError(kind, name)
    return name
