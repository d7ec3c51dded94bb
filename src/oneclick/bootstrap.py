"""One-time wiring of the host application.

:class:`BootstrapPatcher` makes ``bootstrap/app.php`` load ``routes/api.php``,
registers the ``lang``/``cors``/``throttle`` middleware aliases and renders
API exceptions as JSON.  :class:`SupportPublisher` writes the helper classes
the generated code depends on.
"""

from __future__ import annotations

import shutil
from functools import partial
from pathlib import Path

from .config import Config
from .errors import ScaffoldError
from .models import StepResult, StepStatus
from .patching import apply_rules, ensure_use_statements, upsert_call_block
from .templates import TemplateRenderer
from .utils import print_error, print_info, print_success, read_text, unix_timestamp, write_file

ROUTING_MARKER = "api: __DIR__.'/../routes/api.php'"
CORS_MARKER = "'cors' => App\\Http\\Middleware\\Cors::class"
THROTTLE_MARKER = "'throttle' => Illuminate\\Routing\\Middleware\\ThrottleRequests::class"
SETUP_MARKERS: tuple[str, ...] = (ROUTING_MARKER, CORS_MARKER, THROTTLE_MARKER)

USE_STATEMENTS: tuple[str, ...] = (
    "use Illuminate\\Foundation\\Application;",
    "use Illuminate\\Foundation\\Configuration\\Exceptions;",
    "use Illuminate\\Foundation\\Configuration\\Middleware;",
    "use Illuminate\\Http\\Request;",
)

CONFIGURE_CALL = "Application::configure"
ROUTING_CALL = "->withRouting"
MIDDLEWARE_CALL = "->withMiddleware"
EXCEPTIONS_CALL = "->withExceptions"


# ---------------------------------------------------------------------------
# Support files
# ---------------------------------------------------------------------------


class SupportPublisher:
    """Writes RouteHelper, the response, image and timezone traits, and the two middlewares.

    Existing files are never overwritten.
    """

    def __init__(self, config: Config, renderer: TemplateRenderer | None = None) -> None:
        self.config = config
        self.renderer = renderer or TemplateRenderer()

    def targets(self) -> dict[str, Path]:
        """Template path -> destination in the host application."""
        cfg = self.config
        return {
            "support/RouteHelper.php.j2": cfg.helpers_path / "Routes" / "v1" / "RouteHelper.php",
            "support/ResponseTrait.php.j2": cfg.traits_path / "ResponseTrait.php",
            "support/ImageTrait.php.j2": cfg.traits_path / "ImageTrait.php",
            "support/HasTimezoneConversion.php.j2": cfg.traits_path / "HasTimezoneConversion.php",
            "support/Cors.php.j2": cfg.middleware_path / "Cors.php",
            "support/Lang.php.j2": cfg.middleware_path / "Lang.php",
        }

    def publish(self) -> list[Path]:
        """Write every missing support file and return the ones written."""
        written: list[Path] = []
        for template, target in self.targets().items():
            if target.exists():
                continue
            written.append(self.renderer.render_to_file(template, target, {}))
        return written


# ---------------------------------------------------------------------------
# bootstrap/app.php
# ---------------------------------------------------------------------------


class BootstrapPatcher:
    """Idempotent setup of ``bootstrap/app.php``.

    The file itself is the only state: setup is needed while any of
    ``SETUP_MARKERS`` is missing from it.
    """

    step = "bootstrap"

    def __init__(self, config: Config, renderer: TemplateRenderer | None = None) -> None:
        self.config = config
        self.renderer = renderer or TemplateRenderer()
        self.publisher = SupportPublisher(config, self.renderer)

    # -- State -------------------------------------------------------------

    def missing_markers(self) -> list[str]:
        path = self.config.bootstrap_path
        if not path.exists():
            return list(SETUP_MARKERS)
        text = read_text(path)
        return [marker for marker in SETUP_MARKERS if marker not in text]

    def is_setup_complete(self) -> bool:
        return not self.missing_markers()

    # -- Pure transformation -------------------------------------------------

    def block(self, name: str) -> str:
        return self.renderer.render(f"bootstrap/{name}.php.j2", {}).rstrip("\n")

    def patch(self, text: str) -> str:
        """Return *text* with use statements and the three call blocks in place."""
        return apply_rules(
            text,
            [
                partial(ensure_use_statements, statements=USE_STATEMENTS),
                partial(
                    upsert_call_block,
                    call=ROUTING_CALL,
                    block=self.block("routing"),
                    after=(CONFIGURE_CALL,),
                ),
                partial(
                    upsert_call_block,
                    call=MIDDLEWARE_CALL,
                    block=self.block("middleware"),
                    after=(ROUTING_CALL, CONFIGURE_CALL),
                ),
                partial(
                    upsert_call_block,
                    call=EXCEPTIONS_CALL,
                    block=self.block("exceptions"),
                    after=(MIDDLEWARE_CALL, ROUTING_CALL, CONFIGURE_CALL),
                ),
            ],
        )

    # -- Side effects --------------------------------------------------------

    def ensure_api_routes_file(self) -> Path | None:
        """Create an empty ``routes/api.php`` if it is missing."""
        path = self.config.api_routes_file
        if path.exists():
            return None
        write_file(path, "<?php\n")
        print_info("Created routes/api.php")
        return path

    def backup(self) -> Path:
        source = self.config.bootstrap_path
        target = source.with_name(f"{source.name}.backup_{unix_timestamp()}")
        shutil.copy2(source, target)
        print_info(f"Backed up {source.name} to {target}")
        return target

    def setup(self) -> StepResult:
        """Run the one-time setup; a no-op when every marker is present."""
        touched: list[Path] = []
        created = self.ensure_api_routes_file()
        if created is not None:
            touched.append(created)
        touched.extend(self.publisher.publish())

        path = self.config.bootstrap_path
        if not path.exists():
            message = f"{path} not found. Please ensure your Laravel installation is complete."
            print_error(message)
            return StepResult(step=self.step, status=StepStatus.FAILED, message=message)

        if self.is_setup_complete():
            return StepResult(
                step=self.step,
                status=StepStatus.SKIPPED,
                message="Setup already complete.",
                paths=touched,
            )

        text = read_text(path)
        try:
            patched = self.patch(text)
        except ScaffoldError as exc:
            print_error(f"Could not patch {path.name}: {exc}")
            return StepResult(step=self.step, status=StepStatus.FAILED, message=str(exc))

        if patched != text:
            touched.append(self.backup())
            write_file(path, patched)
            touched.append(path)
        message = "Updated bootstrap/app.php with API routing, middleware aliases, and exception handling."
        print_success(message)
        return StepResult(step=self.step, status=StepStatus.UPDATED, message=message, paths=touched)
