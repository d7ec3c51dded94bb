"""Integration tests for a full ``generate`` run.

These tests drive the Orchestrator with scripted answers against a temporary
Laravel 11 tree and check every generated layer, the one-time bootstrap
setup, and that re-running or passing a bad name leaves the tree untouched.

No PHP runtime or Laravel install is required.
"""

from __future__ import annotations

from pathlib import Path

import pytest

from oneclick.bootstrap import CORS_MARKER, ROUTING_MARKER, THROTTLE_MARKER
from oneclick.orchestrator import EXIT_FAILURE, EXIT_OK, Orchestrator
from oneclick.models import StepStatus
from oneclick.patching import ROUTE_HELPER_CALL


def _read(root: Path, relative: str) -> str:
    return (root / relative).read_text(encoding="utf-8")


@pytest.mark.integration
class TestGeneratePost:
    """``Post {title: string, body: text, author_id: foreignId}``, no custom methods."""

    @pytest.fixture
    def generated(self, config, prompter_factory, post_attribute_answers):
        prompter = prompter_factory(post_attribute_answers + ["no", []])
        orchestrator = Orchestrator(config, prompter=prompter)
        code = orchestrator.run("Post")
        assert not prompter.answers
        return code, orchestrator, config.base_path

    def test_exit_code_and_summary(self, capsys, generated):
        code, orchestrator, _ = generated
        assert code == EXIT_OK
        assert [r.step for r in orchestrator.results] == [
            "bootstrap", "model", "migration", "repository", "service",
            "resource", "controller", "request", "route",
        ]
        assert all(r.ok for r in orchestrator.results)
        out = capsys.readouterr().out
        assert "Generation summary" in out
        assert "Project generation completed!" in out
        assert "restart your application" in out

    def test_bootstrap_is_wired(self, generated):
        _, _, root = generated
        app = _read(root, "bootstrap/app.php")
        for marker in (ROUTING_MARKER, CORS_MARKER, THROTTLE_MARKER):
            assert marker in app
        assert list((root / "bootstrap").glob("app.php.backup_*"))
        providers = _read(root, "bootstrap/providers.php")
        assert "App\\Providers\\RepositoryServiceProvider::class," in providers
        assert "App\\Providers\\ServiceServiceProvider::class," in providers

    def test_model(self, generated):
        model = _read(generated[2], "app/Models/Post.php")
        assert "'title',\n        'body',\n        'author_id'," in model
        assert "public function author()" in model
        assert "return $this->belongsTo(Author::class);" in model

    def test_migration(self, generated):
        (migration,) = (generated[2] / "database" / "migrations").glob("*_create_posts_table.php")
        text = migration.read_text(encoding="utf-8")
        assert "$table->string('title');" in text
        assert "$table->text('body');" in text
        assert (
            "$table->foreignId('author_id')->constrained()->cascadeOnDelete()->cascadeOnUpdate();"
            in text
        )

    def test_layers(self, generated):
        root = generated[2]
        for relative in (
            "app/Repositories/Interfaces/BaseRepository.php",
            "app/Repositories/Implementation/PostRepositoryImpl.php",
            "app/Services/Interfaces/PostService.php",
            "app/Services/Implementation/PostServiceImpl.php",
            "app/Providers/RepositoryServiceProvider.php",
            "app/Providers/ServiceServiceProvider.php",
            "app/Http/Resources/PostResource.php",
            "app/Http/Controllers/PostController.php",
            "app/Traits/ResponseTrait.php",
            "app/Traits/HasTimezoneConversion.php",
            "app/Helpers/Routes/v1/RouteHelper.php",
        ):
            assert (root / relative).is_file(), relative

    def test_requests(self, generated):
        store = _read(generated[2], "app/Http/Requests/StorePostRequest.php")
        assert "'title' => 'required|string|max:255'," in store
        assert "'body' => 'required'," in store
        assert "'author_id' => 'required|numeric|exists:authors,id'," in store
        update = _read(generated[2], "app/Http/Requests/UpdatePostRequest.php")
        assert "'title' => 'sometimes|string|max:255'," in update

    def test_routes(self, generated):
        root = generated[2]
        routes = _read(root, "routes/api/post.php")
        assert "Route::get('posts', [PostController::class, 'index']);" in routes
        assert "Route::get('posts/{post}', [PostController::class, 'show']);" in routes
        assert "Route::post('posts', [PostController::class, 'store']);" in routes
        assert "Route::patch('posts/{post}', [PostController::class, 'update']);" in routes
        assert "Route::delete('posts/{post}', [PostController::class, 'destroy']);" in routes
        assert ROUTE_HELPER_CALL in _read(root, "routes/api.php")

    def test_second_run_changes_nothing(self, generated, config, prompter_factory, snapshot):
        root = generated[2]
        before = snapshot(root)
        prompter = prompter_factory([])

        orchestrator = Orchestrator(config, prompter=prompter)
        assert orchestrator.run("Post") == EXIT_FAILURE
        assert [r.step for r in orchestrator.results] == ["model"]
        assert orchestrator.results[0].status is StepStatus.COLLISION
        assert prompter.questions == []
        assert snapshot(root) == before


@pytest.mark.integration
class TestGenerateEdgeCases:
    def test_invalid_name_changes_nothing(self, config, prompter_factory, snapshot):
        before = snapshot(config.base_path)
        prompter = prompter_factory([])
        assert Orchestrator(config, prompter=prompter).run("123abc") == EXIT_FAILURE
        assert prompter.questions == []
        assert snapshot(config.base_path) == before

    def test_bracketed_name_exits_with_failure(self, config, prompter_factory, snapshot, capsys):
        before = snapshot(config.base_path)
        assert Orchestrator(config, prompter=prompter_factory([])).run("x[/]") == EXIT_FAILURE
        assert "Invalid model name 'x[/]'" in capsys.readouterr().out
        assert snapshot(config.base_path) == before

    def test_photo_and_custom_method(self, config, prompter_factory):
        answers = [
            "title", "string", ["none"],
            "photo", "string", ["nullable"],
            "done",
            "yes", "findByTitle", "Model", "string $title", True,
            "no",
            ["store", "update", "destroy"],
        ]
        prompter = prompter_factory(answers)
        assert Orchestrator(config, prompter=prompter).run("Post") == EXIT_OK
        assert not prompter.answers

        root = config.base_path
        service = _read(root, "app/Services/Implementation/PostServiceImpl.php")
        assert "$this->saveImage($request, 'photo', 'Post/Images')" in service
        assert "$this->deleteImage($post->photo);" in service
        assert "public function findByTitle(string $title): Model" in service

        repository = _read(root, "app/Repositories/Interfaces/PostRepository.php")
        assert "public function findByTitle(string $title): Model;" in repository

        store = _read(root, "app/Http/Requests/StorePostRequest.php")
        assert "'photo' => 'required|image|mimes:jpeg,png,jpg,gif,svg|max:5120'," in store
        update = _read(root, "app/Http/Requests/UpdatePostRequest.php")
        assert "'photo' => 'sometimes|image|mimes:jpeg,png,jpg,gif,svg|max:10240'," in update

        (migration,) = (root / "database" / "migrations").glob("*_create_posts_table.php")
        assert "$table->string('photo')->nullable();" in migration.read_text(encoding="utf-8")

        routes = _read(root, "routes/api/post.php")
        public = routes.split("    });\n")[1]
        assert "Route::get('posts', [PostController::class, 'index']);" in public

    def test_missing_bootstrap_still_generates(self, config, prompter_factory):
        config.bootstrap_path.unlink()
        prompter = prompter_factory(["done", "no", []])
        orchestrator = Orchestrator(config, prompter=prompter)
        assert orchestrator.run("Tag") == EXIT_OK
        assert orchestrator.results[0].status is StepStatus.FAILED
        assert (config.models_path / "Tag.php").exists()
