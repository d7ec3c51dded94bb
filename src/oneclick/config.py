"""oneclick configuration.

Centralised, typed configuration for a generation run.  All settings use
Pydantic v2 models so they can be validated at construction time and
serialised to/from JSON or environment variables without boiler-plate.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field

DEFAULT_IMAGE_FIELDS: list[str] = ["image", "photo", "plan_image", "icon"]


class LayoutConfig(BaseModel):
    """Where the host Laravel application keeps each kind of file.

    All values are relative to ``Config.base_path``.
    """

    app_dir: str = Field(default="app")
    migrations_dir: str = Field(default="database/migrations")
    routes_dir: str = Field(default="routes")
    bootstrap_file: str = Field(default="bootstrap/app.php")
    providers_file: str = Field(default="bootstrap/providers.php")


class GenerationConfig(BaseModel):
    """Knobs that change the content of generated files."""

    image_fields: list[str] = Field(
        default_factory=lambda: list(DEFAULT_IMAGE_FIELDS),
        description="Attribute names treated as file-upload fields",
    )
    default_per_page: int = Field(default=10, ge=1, description="Controller index page size")
    store_image_max_kb: int = Field(default=5120, ge=1)
    update_image_max_kb: int = Field(default=10240, ge=1)
    string_max_length: int = Field(default=255, ge=1)


class RouteConfig(BaseModel):
    """Shape of the generated per-entity route files."""

    prefix: str = Field(default="v1/")
    middleware: list[str] = Field(default_factory=lambda: ["cors", "lang", "throttle"])
    auth_middleware: str = Field(default="auth:sanctum")
    ask_auth: bool = Field(
        default=True, description="Ask which actions require authentication"
    )


class PostmanConfig(BaseModel):
    """Settings for the Postman collection exporter."""

    collection_name: str = Field(default="Laravel API")
    token: str = Field(default="{{api_token}}")
    export_dir: str = Field(default="storage/app")


class Config(BaseModel):
    """Global oneclick configuration.

    Holds every tuneable parameter and derived path used by the generators.
    Instances are created once by the CLI entry point and then passed through
    the rest of the system.
    """

    base_path: Path = Field(default=Path("."))
    layout: LayoutConfig = Field(default_factory=LayoutConfig)
    generation: GenerationConfig = Field(default_factory=GenerationConfig)
    routes: RouteConfig = Field(default_factory=RouteConfig)
    postman: PostmanConfig = Field(default_factory=PostmanConfig)

    # ------------------------------------------------------------------
    # Derived paths (read-only properties)
    # ------------------------------------------------------------------

    @property
    def app_path(self) -> Path:
        return self.base_path / self.layout.app_dir

    @property
    def models_path(self) -> Path:
        return self.app_path / "Models"

    @property
    def migrations_path(self) -> Path:
        return self.base_path / self.layout.migrations_dir

    @property
    def repositories_path(self) -> Path:
        return self.app_path / "Repositories"

    @property
    def services_path(self) -> Path:
        return self.app_path / "Services"

    @property
    def providers_path(self) -> Path:
        return self.app_path / "Providers"

    @property
    def http_path(self) -> Path:
        return self.app_path / "Http"

    @property
    def resources_path(self) -> Path:
        return self.http_path / "Resources"

    @property
    def controllers_path(self) -> Path:
        return self.http_path / "Controllers"

    @property
    def requests_path(self) -> Path:
        return self.http_path / "Requests"

    @property
    def middleware_path(self) -> Path:
        return self.http_path / "Middleware"

    @property
    def traits_path(self) -> Path:
        return self.app_path / "Traits"

    @property
    def helpers_path(self) -> Path:
        return self.app_path / "Helpers"

    @property
    def routes_path(self) -> Path:
        return self.base_path / self.layout.routes_dir

    @property
    def entity_routes_path(self) -> Path:
        """Directory holding one route file per generated entity."""
        return self.routes_path / "api"

    @property
    def api_routes_file(self) -> Path:
        """The aggregate ``routes/api.php`` file."""
        return self.routes_path / "api.php"

    @property
    def bootstrap_path(self) -> Path:
        """The application composition root (``bootstrap/app.php``)."""
        return self.base_path / self.layout.bootstrap_file

    @property
    def providers_registry_path(self) -> Path:
        """Laravel 11 provider list (``bootstrap/providers.php``)."""
        return self.base_path / self.layout.providers_file

    @property
    def postman_export_path(self) -> Path:
        return self.base_path / self.postman.export_dir

    # ------------------------------------------------------------------
    # Serialisation helpers
    # ------------------------------------------------------------------

    def save(self, path: Path) -> Path:
        """Persist the configuration to a JSON file."""
        target = Path(path)
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(self.model_dump_json(indent=2), encoding="utf-8")
        return target

    @classmethod
    def load(cls, path: Path) -> "Config":
        """Load a previously-saved configuration from JSON."""
        raw = Path(path).read_text(encoding="utf-8")
        return cls.model_validate_json(raw)

    @classmethod
    def from_env(cls) -> "Config":
        """Build a ``Config`` from environment variables.

        Recognised variables (all optional):
            ONECLICK_BASE_PATH, ONECLICK_PER_PAGE, ONECLICK_IMAGE_FIELDS,
            ONECLICK_ROUTE_PREFIX, ONECLICK_ASK_ROUTE_AUTH.
        """
        generation_kwargs: dict[str, Any] = {}
        if os.environ.get("ONECLICK_PER_PAGE"):
            generation_kwargs["default_per_page"] = int(os.environ["ONECLICK_PER_PAGE"])
        if os.environ.get("ONECLICK_IMAGE_FIELDS"):
            generation_kwargs["image_fields"] = [
                f.strip() for f in os.environ["ONECLICK_IMAGE_FIELDS"].split(",") if f.strip()
            ]

        route_kwargs: dict[str, Any] = {}
        if os.environ.get("ONECLICK_ROUTE_PREFIX"):
            route_kwargs["prefix"] = os.environ["ONECLICK_ROUTE_PREFIX"]
        if os.environ.get("ONECLICK_ASK_ROUTE_AUTH"):
            route_kwargs["ask_auth"] = os.environ["ONECLICK_ASK_ROUTE_AUTH"].strip().lower() in (
                "1", "true", "yes", "on",
            )

        return cls(
            base_path=Path(os.environ.get("ONECLICK_BASE_PATH", ".")),
            generation=GenerationConfig(**generation_kwargs),
            routes=RouteConfig(**route_kwargs),
        )
