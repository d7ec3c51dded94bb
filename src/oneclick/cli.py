"""Command-line entry point (``oneclick`` / ``python -m oneclick``)."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from rich.markup import escape

from .config import Config
from .orchestrator import Orchestrator
from .postman import PostmanExporter
from .utils import console


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="oneclick",
        description="oneclick -- generate a complete Laravel API slice for one entity",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  oneclick generate Post\n"
            "  oneclick generate BlogPost --base-path ../my-laravel-app\n"
            "  oneclick generate Post --config oneclick.json --no-route-auth-prompt\n"
            "  oneclick postman-export \"My API\" --output ./exports\n"
        ),
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    generate = subparsers.add_parser(
        "generate",
        help="Create model, migration, repository, service, resource, controller, requests and routes",
    )
    generate.add_argument("name", help="Entity name, e.g. Post")
    _add_common_arguments(generate)
    generate.add_argument(
        "--no-route-auth-prompt",
        action="store_true",
        help="Put every route behind the auth middleware without asking",
    )

    export = subparsers.add_parser(
        "postman-export",
        help="Export the generated API routes as a Postman collection",
    )
    export.add_argument("name", nargs="?", default=None, help="Collection name")
    _add_common_arguments(export)
    export.add_argument(
        "--output", "-o",
        default=None,
        help="Directory for the JSON file (default: <base-path>/storage/app)",
    )
    return parser


def _add_common_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--base-path", "-b",
        default=None,
        help="Root of the Laravel application (default: $ONECLICK_BASE_PATH or .)",
    )
    parser.add_argument(
        "--config", "-c",
        default=None,
        help="JSON configuration file written by Config.save()",
    )


def load_config(args: argparse.Namespace) -> Config:
    """Config from ``--config`` (or the environment), then ``--base-path``."""
    if args.config:
        config_path = Path(args.config)
        if not config_path.exists():
            console.print(
                f"[bold red]Error:[/bold red] Config file not found: {escape(str(config_path))}"
            )
            sys.exit(1)
        config = Config.load(config_path)
    else:
        config = Config.from_env()

    if args.base_path:
        config.base_path = Path(args.base_path)
    if not config.base_path.is_dir():
        console.print(
            f"[bold red]Error:[/bold red] Base path not found: {escape(str(config.base_path))}"
        )
        sys.exit(1)
    return config


def main(argv: list[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)
    config = load_config(args)

    if args.command == "generate":
        if args.no_route_auth_prompt:
            config.routes.ask_auth = False
        sys.exit(Orchestrator(config).run(args.name))

    PostmanExporter(config).export(args.name, Path(args.output) if args.output else None)


if __name__ == "__main__":
    main()
