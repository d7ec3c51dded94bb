"""Idempotent text patches for shared Laravel files.

Every rule here is a pure function ``(text, ...) -> text``.  Applying a rule to
its own output returns the output unchanged, so a generator can re-run a
patch without first checking whether an earlier run already applied it.

Method-call blocks in ``bootstrap/app.php`` (``->withRouting(...)`` and
friends) are located by scanning for the matching closing parenthesis while
skipping PHP strings and comments, not with a regular expression, so nested
closures and arrays inside a block are handled.
"""

from __future__ import annotations

import re
from collections.abc import Callable, Iterable, Sequence

from .errors import PatchError

PatchRule = Callable[[str], str]

PHP_OPEN_TAG = "<?php"
BOOTSTRAP_INDENT = "    "

ROUTE_HELPER_USE = "use App\\Helpers\\Routes\\v1\\RouteHelper;"
ROUTE_HELPER_CALL = "RouteHelper::includeRouteFiles(__DIR__ . '/api/');"
ROUTE_HELPER_MARKER = "RouteHelper::includeRouteFiles"

_REGISTER_RE = re.compile(r"function\s+register\s*\(\s*\)[^{;]*\{")


# ---------------------------------------------------------------------------
# Scanning helpers
# ---------------------------------------------------------------------------


_PAIRS = {"(": ")", "[": "]", "{": "}"}


def find_closing(text: str, open_index: int) -> int:
    """Return the index of the bracket matching the one at *open_index*.

    Works for ``()``, ``[]`` and ``{}``.  Quoted strings, ``//`` / ``#`` line
    comments and ``/* */`` block comments are skipped.

    Raises:
        PatchError: If the bracket is never closed.
    """
    opener = text[open_index] if open_index < len(text) else ""
    if opener not in _PAIRS:
        raise PatchError(f"Expected an opening bracket at offset {open_index}")
    closer = _PAIRS[opener]

    depth = 0
    i = open_index
    length = len(text)
    while i < length:
        ch = text[i]
        if ch in ("'", '"'):
            i = _skip_string(text, i)
            continue
        if text.startswith("//", i) or (ch == "#" and not text.startswith("#[", i)):
            newline = text.find("\n", i)
            i = length if newline == -1 else newline + 1
            continue
        if text.startswith("/*", i):
            end = text.find("*/", i + 2)
            i = length if end == -1 else end + 2
            continue
        if ch == opener:
            depth += 1
        elif ch == closer:
            depth -= 1
            if depth == 0:
                return i
        i += 1
    raise PatchError(f"Unbalanced '{opener}' starting at offset {open_index}")


def _skip_string(text: str, start: int) -> int:
    quote = text[start]
    i = start + 1
    while i < len(text):
        if text[i] == "\\":
            i += 2
            continue
        if text[i] == quote:
            return i + 1
        i += 1
    return len(text)


def find_call_span(text: str, call: str) -> tuple[int, int] | None:
    """Locate a method call such as ``->withRouting(...)``.

    Args:
        text: PHP source.
        call: Call prefix up to (not including) the opening parenthesis,
            e.g. ``"->withRouting"``.

    Returns:
        ``(start, end)`` where ``text[start:end]`` is the whole call including
        its closing parenthesis, or ``None`` when the call is absent.
    """
    match = re.search(re.escape(call) + r"\s*\(", text)
    if match is None:
        return None
    open_index = match.end() - 1
    return match.start(), find_closing(text, open_index) + 1


# ---------------------------------------------------------------------------
# Generic rules
# ---------------------------------------------------------------------------


def ensure_use_statements(text: str, statements: Sequence[str]) -> str:
    """Insert each missing ``use`` statement right after the ``<?php`` tag."""
    missing = [s for s in statements if s not in text]
    if not missing:
        return text
    index = text.find(PHP_OPEN_TAG)
    if index == -1:
        raise PatchError("No '<?php' tag to insert use statements after")
    insert_at = index + len(PHP_OPEN_TAG)
    block = "\n\n" + "\n".join(missing)
    # Keep the original separation between the tag and what followed it.
    if not text[insert_at:].startswith("\n"):
        block += "\n"
    return text[:insert_at] + block + text[insert_at:]


def upsert_call_block(text: str, call: str, block: str, after: Sequence[str]) -> str:
    """Replace an existing call block or insert *block* after an anchor call.

    Args:
        text: PHP source.
        call: Call prefix to look for (``"->withMiddleware"``).
        block: Canonical replacement text starting with *call*.
        after: Candidate anchor call prefixes, tried in order; the new block
            is inserted right after the first one found.

    Raises:
        PatchError: When the call is absent and no anchor exists.
    """
    span = find_call_span(text, call)
    if span is not None:
        start, end = span
        return text[:start] + block + text[end:]

    for anchor in after:
        anchor_span = find_call_span(text, anchor)
        if anchor_span is not None:
            end = anchor_span[1]
            return text[:end] + "\n" + BOOTSTRAP_INDENT + block + text[end:]
    raise PatchError(f"Cannot place '{call}': none of {list(after)} found")


def apply_rules(text: str, rules: Iterable[PatchRule]) -> str:
    """Thread *text* through each rule in order."""
    for rule in rules:
        text = rule(text)
    return text


# ---------------------------------------------------------------------------
# Provider bindings
# ---------------------------------------------------------------------------


def binding_line(interface: str, implementation: str) -> str:
    """``$this->app->bind(\\Interface::class, \\Impl::class);``"""
    return f"$this->app->bind(\\{interface}::class, \\{implementation}::class);"


def ensure_binding(text: str, interface: str, implementation: str) -> str:
    """Add a container binding inside ``register()`` unless *interface* is bound.

    The check matches the short class name so bindings written against an
    imported alias (``PostRepository::class``) are recognised too.
    """
    short_name = interface.split("\\")[-1]
    if re.search(rf"\b{re.escape(short_name)}::class", text):
        return text
    match = _REGISTER_RE.search(text)
    if match is None:
        raise PatchError("No 'register()' method found in provider")
    line = "\n        " + binding_line(interface, implementation)
    return text[: match.end()] + line + text[match.end():]


def ensure_provider_registered(text: str, provider: str) -> str:
    """Append ``Provider::class,`` to the array returned by ``bootstrap/providers.php``."""
    entry = f"{provider}::class"
    if entry in text:
        return text
    match = re.search(r"return\s*\[", text)
    if match is None:
        raise PatchError("No 'return [' array found in providers file")
    close = find_closing(text, match.end() - 1)
    head = text[:close].rstrip()
    if not head.endswith(("[", ",")):
        head += ","
    return f"{head}\n    {entry},\n{text[close:]}"


# ---------------------------------------------------------------------------
# Model members
# ---------------------------------------------------------------------------

FILLABLE_MARKER = "protected $fillable"


def inject_class_members(
    text: str, class_name: str, members: str, marker: str = FILLABLE_MARKER
) -> str:
    """Insert *members* right after ``class <class_name> ... {``.

    Skipped when *marker* is already present in the file.
    """
    if marker in text:
        return text
    match = re.search(rf"class\s+{re.escape(class_name)}\b[^{{]*\{{", text)
    if match is None:
        raise PatchError(f"Class '{class_name}' not found")
    return text[: match.end()] + "\n" + members.rstrip("\n") + "\n" + text[match.end():]


# ---------------------------------------------------------------------------
# Aggregate route file
# ---------------------------------------------------------------------------


def ensure_route_include(text: str) -> str:
    """Append the RouteHelper include to ``routes/api.php`` once."""
    if ROUTE_HELPER_MARKER in text:
        return text
    body = f"{ROUTE_HELPER_USE}\n\n{ROUTE_HELPER_CALL}\n"
    if not text.strip():
        return f"{PHP_OPEN_TAG}\n\n{body}"
    if PHP_OPEN_TAG not in text:
        text = f"{PHP_OPEN_TAG}\n\n{text}"
    return text.rstrip("\n") + "\n\n" + body
