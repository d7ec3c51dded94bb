"""Per-entity API route generation.

Each entity gets ``routes/api/<snake>.php``; ``routes/api.php`` includes the
whole folder through ``RouteHelper::includeRouteFiles`` so it is patched only
once, however many entities are generated.
"""

from __future__ import annotations

from ..models import GenerationRun, StepResult
from ..patching import ensure_route_include
from ..utils import ensure_dir, print_info, read_text, write_file
from .base import BaseGenerator

ROUTE_ACTIONS: tuple[str, ...] = ("index", "show", "store", "update", "destroy")

# action -> (HTTP verb, takes the route-model parameter)
_ACTION_ROUTES: dict[str, tuple[str, bool]] = {
    "index": ("get", False),
    "show": ("get", True),
    "store": ("post", False),
    "update": ("patch", True),
    "destroy": ("delete", True),
}


def route_line(action: str, names: dict[str, str]) -> str:
    """``Route::get('posts/{post}', [PostController::class, 'show']);``"""
    verb, with_param = _ACTION_ROUTES[action]
    uri = names["route"]
    if with_param:
        uri += "/{" + names["var"] + "}"
    return f"Route::{verb}('{uri}', [{names['entity']}Controller::class, '{action}']);"


class RouteGenerator(BaseGenerator):
    """Writes the entity route file and wires ``routes/api.php`` to load it."""

    step = "route"

    def generate(self, run: GenerationRun) -> StepResult:
        names = run.names
        ensure_dir(self.config.controllers_path / "Api")
        ensure_dir(self.config.entity_routes_path)
        self.include_route_folder()

        path = self.config.entity_routes_path / f"{names['snake']}.php"
        self.ensure_absent(f"API Routes file for {names['entity']}", path)

        authenticated = self.ask_authenticated_actions()
        routes = self.config.routes
        self.write(
            "route/routes.php.j2",
            path,
            self.context(
                run,
                prefix=routes.prefix,
                middleware=routes.middleware,
                auth_middleware=routes.auth_middleware,
                auth_routes=[route_line(a, names) for a in ROUTE_ACTIONS if a in authenticated],
                public_routes=[
                    route_line(a, names) for a in ROUTE_ACTIONS if a not in authenticated
                ],
            ),
        )
        return self.created(f"API Routes file for {names['entity']} created successfully!", path)

    def ask_authenticated_actions(self) -> list[str]:
        """Actions placed behind the auth middleware; an empty answer means all."""
        if not self.config.routes.ask_auth:
            return list(ROUTE_ACTIONS)
        selected = self.prompter.multi_choice(
            "Which actions require authentication? (leave empty for all)",
            ROUTE_ACTIONS,
        )
        return list(selected) or list(ROUTE_ACTIONS)

    def include_route_folder(self) -> None:
        """Append the RouteHelper include to ``routes/api.php`` (created if missing)."""
        path = self.config.api_routes_file
        text = read_text(path) if path.exists() else ""
        patched = ensure_route_include(text)
        if patched != text:
            write_file(path, patched)
            print_info("The api.php file has been updated to include RouteHelper.")
