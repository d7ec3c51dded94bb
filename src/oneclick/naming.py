"""Naming conventions shared by every template.

All derived names (class names, variables, table names, route segments, file
names) come from the helpers below so that the model, migration, repository,
service, controller, request and route generators always agree with each other.
"""

from __future__ import annotations

import re
from typing import Any

# ---------------------------------------------------------------------------
# Case conversion
# ---------------------------------------------------------------------------


def snake_case(value: str) -> str:
    """Convert ``SomeThing`` or ``some-thing`` to ``some_thing``."""
    s1 = re.sub(r"(.)([A-Z][a-z]+)", r"\1_\2", value)
    s2 = re.sub(r"([a-z0-9])([A-Z])", r"\1_\2", s1)
    return re.sub(r"[-\s]+", "_", s2).lower()


def kebab_case(value: str) -> str:
    """Convert ``SomeThing`` or ``some_thing`` to ``some-thing``."""
    return snake_case(value).replace("_", "-")


def pascal_case(value: str) -> str:
    """Convert ``some_thing``, ``some-thing`` or ``someThing`` to ``SomeThing``.

    Unlike ``str.capitalize`` this keeps inner capitals, so ``BlogPost`` stays
    ``BlogPost``.
    """
    parts = re.split(r"[-_\s]+", value)
    return "".join(word[:1].upper() + word[1:] for word in parts if word)


def camel_case(value: str) -> str:
    """Convert ``some_thing`` or ``SomeThing`` to ``someThing``."""
    pascal = pascal_case(value)
    if pascal:
        return pascal[0].lower() + pascal[1:]
    return ""


# ---------------------------------------------------------------------------
# Pluralisation
# ---------------------------------------------------------------------------

_UNCOUNTABLE = frozenset({
    "equipment", "information", "rice", "money", "species", "series",
    "fish", "sheep", "deer", "news", "feedback", "metadata", "staff",
})

_IRREGULAR: dict[str, str] = {
    "person": "people",
    "man": "men",
    "woman": "women",
    "child": "children",
    "tooth": "teeth",
    "foot": "feet",
    "mouse": "mice",
    "goose": "geese",
    "ox": "oxen",
}

_SEGMENT_SPLIT = re.compile(r"(?<=[a-z0-9])(?=[A-Z])|_")


def _match_case(source: str, target: str) -> str:
    if source.isupper() and len(source) > 1:
        return target.upper()
    if source[:1].isupper():
        return target[:1].upper() + target[1:]
    return target


def _plural_segment(word: str) -> str:
    lower = word.lower()
    if lower in _UNCOUNTABLE:
        return word
    if lower in _IRREGULAR:
        return _match_case(word, _IRREGULAR[lower])

    upper = word.isupper() and len(word) > 1
    if lower.endswith(("s", "x", "z", "ch", "sh")):
        suffix = "es"
    elif lower.endswith("y") and len(lower) > 1 and lower[-2] not in "aeiou":
        word, suffix = word[:-1], "ies"
    else:
        suffix = "s"
    return word + (suffix.upper() if upper else suffix)


def pluralize(word: str) -> str:
    """Return the English plural of *word*, preserving its casing.

    Only the last segment of a compound name is pluralised::

        pluralize("Post")       -> "Posts"
        pluralize("BlogPost")   -> "BlogPosts"
        pluralize("category")   -> "categories"
        pluralize("sales_person") -> "sales_people"
    """
    if not word:
        return word
    segments = [s for s in _SEGMENT_SPLIT.split(word) if s]
    if not segments:
        return word
    last = segments[-1]
    prefix = word[: len(word) - len(last)]
    return prefix + _plural_segment(last)


# ---------------------------------------------------------------------------
# Derived names
# ---------------------------------------------------------------------------


def strip_id_suffix(column: str) -> str:
    """``author_id`` -> ``author``; names without the suffix are unchanged."""
    if column.endswith("_id") and len(column) > 3:
        return column[: -len("_id")]
    return column


def table_name(entity: str) -> str:
    """Database table for an entity: ``snake_case(pluralize(name))``."""
    return snake_case(pluralize(entity))


def foreign_table(column: str) -> str:
    """Referenced table for a ``foreignId`` column (``author_id`` -> ``authors``)."""
    return pluralize(snake_case(strip_id_suffix(column)))


def entity_names(entity: str) -> dict[str, Any]:
    """Build the naming part of every template context.

    Keys:
        ``entity``       -- class name (``BlogPost``)
        ``var``          -- variable / parameter name (``blogPost``)
        ``plural_var``   -- collection variable name (``blogPosts``)
        ``snake``        -- snake_case name (``blog_post``), used for file names
        ``table``        -- table name (``blog_posts``)
        ``route``        -- URI segment (``blog-posts``)
        ``message_key``  -- translation key prefix (``blog_post``)
    """
    klass = pascal_case(entity)
    snake = snake_case(klass)
    return {
        "entity": klass,
        "var": camel_case(klass),
        "plural_var": camel_case(pluralize(klass)),
        "snake": snake,
        "table": table_name(klass),
        "route": kebab_case(pluralize(klass)),
        "message_key": snake,
    }
