"""Jinja2 template rendering for the generated Laravel sources.

Provides the TemplateRenderer class which loads ``*.php.j2`` templates from
the ``oneclick/templates/`` package directory and renders them with an entity
context.  Every naming transform a template needs is registered as a filter
so templates and Python code share the same conventions.
"""

from __future__ import annotations

import re
from pathlib import Path
from typing import Any

from jinja2 import Environment, FileSystemLoader, select_autoescape

from .naming import camel_case, kebab_case, pascal_case, pluralize, snake_case
from .utils import write_file


# ---------------------------------------------------------------------------
# Template directory discovery
# ---------------------------------------------------------------------------

_DEFAULT_TEMPLATE_DIR = Path(__file__).parent / "templates"

# Stub body for a custom method, keyed by its declared return type.
DEFAULT_RETURNS: dict[str, str] = {
    "bool": "return false;",
    "int": "return 0;",
    "string": 'return "";',
    "array": "return [];",
    "void": "return;",
    "Model": "return $this->model->first();",
    "Collection": "return $this->model->get();",
}
FALLBACK_RETURN = "return null;"

_NUMERIC_RE = re.compile(r"^-?\d+(\.\d+)?$")


# ---------------------------------------------------------------------------
# TemplateRenderer
# ---------------------------------------------------------------------------


class TemplateRenderer:
    """Renders Jinja2 templates for generated source files.

    The renderer discovers ``.j2`` template files under a configurable
    template directory.  Templates are rendered with a context dictionary that
    typically contains the entity names, attributes and custom methods.
    """

    def __init__(self, template_dir: str | Path | None = None) -> None:
        if template_dir is None:
            template_dir = _DEFAULT_TEMPLATE_DIR
        self.template_dir = Path(template_dir)
        self.env = Environment(
            loader=FileSystemLoader(str(self.template_dir)),
            autoescape=select_autoescape([]),
            keep_trailing_newline=True,
            trim_blocks=True,
            lstrip_blocks=True,
        )
        # Register custom filters
        self.env.filters["snake_case"] = snake_case
        self.env.filters["pascal_case"] = pascal_case
        self.env.filters["camel_case"] = camel_case
        self.env.filters["kebab_case"] = kebab_case
        self.env.filters["plural"] = pluralize
        self.env.filters["php_literal"] = php_literal
        self.env.filters["php_string"] = php_string
        self.env.filters["default_return"] = default_return

    # -- Rendering -----------------------------------------------------------

    def render(self, template_path: str, context: dict[str, Any]) -> str:
        """Render a single template with the provided context.

        Args:
            template_path: Path relative to the template directory (e.g.
                ``"model/model.php.j2"``).
            context: Dictionary of variables available inside the template.

        Returns:
            The rendered template content as a string.
        """
        template = self.env.get_template(template_path)
        return template.render(**context)

    def render_to_file(
        self,
        template_path: str,
        output_path: str | Path,
        context: dict[str, Any],
    ) -> Path:
        """Render a template and write the result to *output_path*.

        Parent directories are created automatically.  Returns the output path.
        """
        content = self.render(template_path, context)
        return write_file(output_path, content)


# ---------------------------------------------------------------------------
# Jinja2 custom filters
# ---------------------------------------------------------------------------

def php_string(value: Any) -> str:
    """Single-quoted PHP string literal."""
    escaped = str(value).replace("\\", "\\\\").replace("'", "\\'")
    return f"'{escaped}'"


def php_literal(value: Any) -> str:
    """PHP literal for a column default.

    Numbers (and numeric strings) stay unquoted, booleans become
    ``true``/``false``, ``None`` becomes ``null`` and anything else is quoted.
    """
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return str(value)
    if _NUMERIC_RE.match(str(value).strip()):
        return str(value).strip()
    return php_string(value)


def default_return(return_type: str) -> str:
    """Stub ``return`` statement for a custom method's declared return type."""
    return DEFAULT_RETURNS.get(return_type, FALLBACK_RETURN)
