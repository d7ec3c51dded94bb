"""Shared pytest fixtures for the oneclick test suite.

Provides reusable fixtures for:
- A temporary Laravel 11 application tree
- A Config pointing at that tree
- A scripted Prompter that replays canned answers
- A wide console so rich never wraps asserted messages
"""

from __future__ import annotations

import textwrap
from collections import deque
from collections.abc import Iterable, Sequence
from pathlib import Path
from typing import Any

import pytest

from oneclick.config import Config
from oneclick.templates import TemplateRenderer
from oneclick.utils import console


# ---------------------------------------------------------------------------
# Laravel skeleton
# ---------------------------------------------------------------------------

LARAVEL_BOOTSTRAP_APP = textwrap.dedent("""\
    <?php

    use Illuminate\\Foundation\\Application;
    use Illuminate\\Foundation\\Configuration\\Exceptions;
    use Illuminate\\Foundation\\Configuration\\Middleware;

    return Application::configure(basePath: dirname(__DIR__))
        ->withRouting(
            web: __DIR__.'/../routes/web.php',
            commands: __DIR__.'/../routes/console.php',
            health: '/up',
        )
        ->withMiddleware(function (Middleware $middleware) {
            //
        })
        ->withExceptions(function (Exceptions $exceptions) {
            //
        })->create();
""")

LARAVEL_PROVIDERS = textwrap.dedent("""\
    <?php

    return [
        App\\Providers\\AppServiceProvider::class,
    ];
""")

LARAVEL_BASE_CONTROLLER = textwrap.dedent("""\
    <?php

    namespace App\\Http\\Controllers;

    abstract class Controller
    {
        //
    }
""")


@pytest.fixture
def laravel_app(tmp_path: Path) -> Path:
    """A minimal Laravel 11 application tree (auto-cleanup)."""
    root = tmp_path / "laravel-app"
    files = {
        "bootstrap/app.php": LARAVEL_BOOTSTRAP_APP,
        "bootstrap/providers.php": LARAVEL_PROVIDERS,
        "routes/web.php": "<?php\n\nuse Illuminate\\Support\\Facades\\Route;\n",
        "routes/console.php": "<?php\n",
        "app/Http/Controllers/Controller.php": LARAVEL_BASE_CONTROLLER,
    }
    for relative, content in files.items():
        path = root / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
    (root / "database" / "migrations").mkdir(parents=True)
    return root


@pytest.fixture
def config(laravel_app: Path) -> Config:
    """Default configuration rooted at the temporary Laravel tree."""
    return Config(base_path=laravel_app)


@pytest.fixture
def renderer() -> TemplateRenderer:
    return TemplateRenderer()


def _snapshot(root: Path) -> dict[str, str]:
    return {
        p.relative_to(root).as_posix(): p.read_text(encoding="utf-8")
        for p in sorted(root.rglob("*"))
        if p.is_file()
    }


@pytest.fixture
def snapshot():
    """Callable returning relative path -> content for every file under a root."""
    return _snapshot


# ---------------------------------------------------------------------------
# Prompts
# ---------------------------------------------------------------------------


class ScriptedPrompter:
    """Prompter that replays a fixed list of answers in order.

    ``None`` as an answer means "accept the default".  Every question asked
    is recorded in ``questions``; running out of answers fails the test.
    """

    def __init__(self, answers: Iterable[Any] = ()) -> None:
        self.answers: deque[Any] = deque(answers)
        self.questions: list[str] = []

    def _next(self, question: str) -> Any:
        self.questions.append(question)
        if not self.answers:
            raise AssertionError(f"Unexpected prompt: {question!r}")
        return self.answers.popleft()

    def ask(self, question: str, default: str | None = None) -> str:
        answer = self._next(question)
        if answer is None:
            return default or ""
        return answer

    def choice(self, question: str, choices: Sequence[str], default: str | None = None) -> str:
        answer = self._next(question)
        return default if answer is None else answer

    def multi_choice(
        self, question: str, choices: Sequence[str], default: Sequence[str] | None = None
    ) -> list[str]:
        answer = self._next(question)
        if answer is None:
            return list(default or [])
        return list(answer)

    def confirm(self, question: str, default: bool = True) -> bool:
        answer = self._next(question)
        return default if answer is None else answer


@pytest.fixture
def prompter_factory():
    """Build a ScriptedPrompter from a list of answers."""
    return ScriptedPrompter


@pytest.fixture(autouse=True)
def wide_console(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep rich from wrapping long messages captured by ``capsys``."""
    monkeypatch.setattr(console, "width", 300)


# ---------------------------------------------------------------------------
# Canned answer scripts
# ---------------------------------------------------------------------------

# title:string, body:text, author_id:foreignId, no modifiers.
POST_ATTRIBUTE_ANSWERS: list[Any] = [
    "title", "string", ["none"],
    "body", "text", ["none"],
    "author_id", "foreignId", ["none"],
    "done",
]


@pytest.fixture
def post_attribute_answers() -> list[Any]:
    """Attribute prompts for ``Post {title: string, body: text, author_id: foreignId}``."""
    return list(POST_ATTRIBUTE_ANSWERS)
