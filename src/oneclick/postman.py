"""Postman collection export.

Reads the generated route files under ``routes/api/`` together with the
form requests their controllers type-hint, and writes a Postman v2.1
collection with one folder per resource and sample request data.  The
exporter only reads the application tree; its single output is the JSON file.
"""

from __future__ import annotations

import random
import re
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field

from .config import Config
from .utils import print_info, print_success, print_warning, read_text, save_json, unix_timestamp

POSTMAN_SCHEMA = "https://schema.getpostman.com/json/collection/v2.1.0/collection.json"
GENERAL_FOLDER = "General"

_PREFIX_RE = re.compile(r"->prefix\(\s*'([^']*)'\s*\)")
_ROUTE_RE = re.compile(
    r"Route::(get|post|put|patch|delete)\(\s*'([^']*)'\s*,\s*"
    r"\[\s*([A-Za-z0-9_\\]+)::class\s*,\s*'(\w+)'\s*\]"
)
_USE_RE = re.compile(r"^use\s+([A-Za-z0-9_\\]+);", re.MULTILINE)
_RULE_KEY_RE = re.compile(r"^\s*'([^']+)'\s*=>", re.MULTILINE)


class ApiRoute(BaseModel):
    """One ``Route::<verb>(...)`` registration found in a route file."""

    method: str
    uri: str
    controller: str
    action: str
    attributes: list[str] = Field(default_factory=list)

    @property
    def has_parameter(self) -> bool:
        return "{" in self.uri


# ---------------------------------------------------------------------------
# Sample values
# ---------------------------------------------------------------------------


def dummy_value(attribute: str, prefix: str = "sample", rng: random.Random | None = None) -> str:
    """Plausible form value for *attribute*, chosen from its name."""
    rng = rng or random.Random()
    value = f"{prefix} " + attribute.replace("_", " ").lower()
    if re.search(r"(id|count|number)", attribute, re.IGNORECASE):
        return str(rng.randint(1, 100))
    if re.search(r"(name|title|description)", attribute, re.IGNORECASE):
        return value
    if re.search(r"email", attribute, re.IGNORECASE):
        return f"{prefix}.email@example.com"
    if re.search(r"(code|slug)", attribute, re.IGNORECASE):
        return value[:3].upper() + str(rng.randint(1, 999))
    return value


# ---------------------------------------------------------------------------
# Exporter
# ---------------------------------------------------------------------------


class PostmanExporter:
    """Builds and writes the collection document."""

    def __init__(self, config: Config, rng: random.Random | None = None) -> None:
        self.config = config
        self.rng = rng or random.Random()

    # -- Discovery -----------------------------------------------------------

    def discover_routes(self) -> list[ApiRoute]:
        """Parse every ``routes/api/*.php`` file, in file-name order."""
        directory = self.config.entity_routes_path
        if not directory.is_dir():
            return []

        routes: list[ApiRoute] = []
        for path in sorted(directory.glob("*.php")):
            text = read_text(path)
            prefix_match = _PREFIX_RE.search(text)
            prefix = prefix_match.group(1).strip("/") if prefix_match else ""
            for verb, uri, controller, action in _ROUTE_RE.findall(text):
                full_uri = "/".join(part for part in ("api", prefix, uri.strip("/")) if part)
                route = ApiRoute(
                    method=verb.upper(),
                    uri=full_uri,
                    controller=self._resolve_class(text, controller),
                    action=action,
                )
                route.attributes = self.validation_attributes(route)
                routes.append(route)
        return routes

    @staticmethod
    def _resolve_class(text: str, name: str, namespace: str = "App\\Http\\Controllers") -> str:
        """Fully-qualified name of *name* as seen from the PHP source *text*."""
        if "\\" in name:
            return name.lstrip("\\")
        for imported in _USE_RE.findall(text):
            if imported.split("\\")[-1] == name:
                return imported
        return f"{namespace}\\{name}"

    def _class_path(self, fqcn: str) -> Path:
        parts = fqcn.split("\\")
        if parts[0] == "App":
            parts = parts[1:]
        return self.config.app_path.joinpath(*parts).with_suffix(".php")

    def validation_attributes(self, route: ApiRoute) -> list[str]:
        """Rule keys of the form request type-hinted by the route's action."""
        controller_path = self._class_path(route.controller)
        if not controller_path.exists():
            return []
        controller = read_text(controller_path)
        match = re.search(
            rf"function\s+{re.escape(route.action)}\s*\(\s*(\w+Request)\s+\$", controller
        )
        if match is None:
            return []

        request_class = self._resolve_class(controller, match.group(1), "App\\Http\\Requests")
        request_path = self._class_path(request_class)
        if not request_path.exists():
            print_warning(f"Could not extract validation rules for route: {route.uri}")
            return []

        source = read_text(request_path)
        rules_at = source.find("function rules")
        if rules_at == -1:
            return []
        return _RULE_KEY_RE.findall(source[rules_at:])

    # -- Collection ------------------------------------------------------------

    def folder_name(self, uri: str) -> str:
        segments = uri.strip("/").split("/")
        version = self.config.routes.prefix.strip("/")
        if len(segments) >= 3 and segments[0] == "api" and segments[1] == version:
            return segments[2].lower()
        return GENERAL_FOLDER

    @staticmethod
    def item_name(route: ApiRoute) -> str:
        if route.method == "GET":
            return "get one" if route.has_parameter else "get all"
        return {"POST": "store", "PATCH": "update", "DELETE": "delete"}.get(
            route.method, route.uri
        )

    def dummy_data(self, route: ApiRoute) -> dict[str, Any]:
        """Body and query skeleton for *route*."""
        data: dict[str, Any] = {"body": None, "query": None}

        if route.method == "GET" and not route.has_parameter:
            data["query"] = [
                {"key": "per_page", "value": "10", "description": "Items per page"},
                {"key": "page", "value": "2", "description": "Page number"},
            ]
        elif route.method in ("POST", "PATCH") and route.attributes:
            prefix, label = ("sample", "Sample") if route.method == "POST" else ("updated", "Updated")
            data["body"] = {
                "mode": "formdata",
                "formdata": [
                    {
                        "key": attribute,
                        "value": dummy_value(attribute, prefix, self.rng),
                        "type": "text",
                        "description": f"{label} value for {attribute}",
                    }
                    for attribute in route.attributes
                ],
            }
        elif route.method == "DELETE":
            data["query"] = [
                {"key": "id", "value": "1", "description": "Sample ID to delete"},
            ]
        return data

    def item(self, route: ApiRoute) -> dict[str, Any]:
        data = self.dummy_data(route)
        url: dict[str, Any] = {}
        if data["query"]:
            url["query"] = data["query"]
        url.update(
            raw="{{base_url}}/" + route.uri,
            host="{{base_url}}",
            path=route.uri.split("/"),
        )
        return {
            "name": self.item_name(route),
            "request": {
                "method": route.method,
                "header": [
                    {"key": "Accept", "value": "application/json"},
                    {"key": "Content-Type", "value": "multipart/form-data"},
                ],
                "body": data["body"],
                "url": url,
            },
            "response": [],
        }

    def build(self, name: str | None = None) -> dict[str, Any]:
        """The full collection document."""
        folders: dict[str, dict[str, Any]] = {}
        for route in self.discover_routes():
            folder = self.folder_name(route.uri)
            folders.setdefault(folder, {"name": folder, "item": []})["item"].append(
                self.item(route)
            )

        return {
            "info": {
                "name": name or self.config.postman.collection_name,
                "schema": POSTMAN_SCHEMA,
            },
            "auth": {
                "type": "bearer",
                "bearer": [
                    {"key": "token", "value": self.config.postman.token, "type": "string"},
                ],
            },
            "item": list(folders.values()),
        }

    def export(self, name: str | None = None, output_dir: Path | None = None) -> Path:
        """Write ``postman_collection_<timestamp>.json`` and return its path."""
        collection = self.build(name)
        if not collection["item"]:
            print_info("No routes found under routes/api; exporting an empty collection.")
        directory = Path(output_dir) if output_dir else self.config.postman_export_path
        path = save_json(collection, directory / f"postman_collection_{unix_timestamp()}.json")
        print_success(f"Postman collection exported to: {path}")
        return path
