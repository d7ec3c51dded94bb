"""Unit tests for the Postman collection exporter (oneclick.postman)."""

from __future__ import annotations

import json
import random

import pytest

from oneclick.generators import ControllerGenerator, RequestGenerator, RouteGenerator
from oneclick.models import AttributeSpec, GenerationRun
from oneclick.postman import POSTMAN_SCHEMA, ApiRoute, PostmanExporter, dummy_value

pytestmark = pytest.mark.unit


@pytest.fixture
def generated_post(config, prompter_factory):
    """Controller, requests and routes for ``Post {title, author_id}``."""
    run = GenerationRun(
        entity="Post",
        attributes=(
            AttributeSpec(name="title"),
            AttributeSpec(name="author_id", type="foreignId"),
        ),
    )
    ControllerGenerator(config).run(run)
    RequestGenerator(config).run(run)
    RouteGenerator(config, prompter=prompter_factory([[]])).run(run)
    return config


# ---------------------------------------------------------------------------
# Sample values
# ---------------------------------------------------------------------------


class TestDummyValue:
    def test_numeric_names(self):
        value = dummy_value("author_id", rng=random.Random(1))
        assert value.isdigit()
        assert 1 <= int(value) <= 100

    def test_text_names(self):
        assert dummy_value("title") == "sample title"
        assert dummy_value("full_name", prefix="updated") == "updated full name"

    def test_email(self):
        assert dummy_value("email") == "sample.email@example.com"

    def test_slug(self):
        value = dummy_value("slug", rng=random.Random(7))
        assert value[:3] == "SAM"
        assert value[3:].isdigit()

    def test_fallback(self):
        assert dummy_value("body") == "sample body"

    def test_seeded_rng_is_repeatable(self):
        assert dummy_value("views_count", rng=random.Random(3)) == dummy_value(
            "views_count", rng=random.Random(3)
        )


# ---------------------------------------------------------------------------
# Discovery
# ---------------------------------------------------------------------------


class TestDiscovery:
    def test_no_routes_directory(self, config):
        assert PostmanExporter(config).discover_routes() == []

    def test_discovers_generated_routes(self, generated_post):
        routes = PostmanExporter(generated_post).discover_routes()
        assert [(r.method, r.uri, r.action) for r in routes] == [
            ("GET", "api/v1/posts", "index"),
            ("GET", "api/v1/posts/{post}", "show"),
            ("POST", "api/v1/posts", "store"),
            ("PATCH", "api/v1/posts/{post}", "update"),
            ("DELETE", "api/v1/posts/{post}", "destroy"),
        ]
        assert routes[0].controller == "App\\Http\\Controllers\\PostController"
        store = routes[2]
        assert store.attributes == ["title", "author_id"]
        assert routes[0].attributes == []

    def test_missing_request_file_warns(self, generated_post, capsys):
        (generated_post.requests_path / "UpdatePostRequest.php").unlink()
        routes = PostmanExporter(generated_post).discover_routes()
        update = next(r for r in routes if r.action == "update")
        assert update.attributes == []
        assert "Could not extract validation rules for route: api/v1/posts/{post}" in (
            capsys.readouterr().out
        )


# ---------------------------------------------------------------------------
# Collection
# ---------------------------------------------------------------------------


class TestCollection:
    def test_item_names(self):
        def route(method, uri):
            return ApiRoute(method=method, uri=uri, controller="X", action="a")

        assert PostmanExporter.item_name(route("GET", "api/v1/posts")) == "get all"
        assert PostmanExporter.item_name(route("GET", "api/v1/posts/{post}")) == "get one"
        assert PostmanExporter.item_name(route("POST", "api/v1/posts")) == "store"
        assert PostmanExporter.item_name(route("PATCH", "api/v1/posts/{post}")) == "update"
        assert PostmanExporter.item_name(route("DELETE", "api/v1/posts/{post}")) == "delete"

    def test_folder_name(self, config):
        exporter = PostmanExporter(config)
        assert exporter.folder_name("api/v1/Posts/{post}") == "posts"
        assert exporter.folder_name("api/health") == "General"

    def test_build(self, generated_post):
        collection = PostmanExporter(generated_post, rng=random.Random(0)).build("Blog API")
        assert collection["info"] == {"name": "Blog API", "schema": POSTMAN_SCHEMA}
        assert collection["auth"]["type"] == "bearer"
        assert collection["auth"]["bearer"][0]["value"] == "{{api_token}}"

        (folder,) = collection["item"]
        assert folder["name"] == "posts"
        items = {item["name"]: item for item in folder["item"]}
        assert list(items) == ["get all", "get one", "store", "update", "delete"]

        index_url = items["get all"]["request"]["url"]
        assert index_url["raw"] == "{{base_url}}/api/v1/posts"
        assert [q["key"] for q in index_url["query"]] == ["per_page", "page"]
        assert items["get all"]["request"]["body"] is None

        store_body = items["store"]["request"]["body"]
        assert store_body["mode"] == "formdata"
        assert [f["key"] for f in store_body["formdata"]] == ["title", "author_id"]
        assert store_body["formdata"][0]["value"] == "sample title"

        update_body = items["update"]["request"]["body"]
        assert update_body["formdata"][0]["value"] == "updated title"
        assert update_body["formdata"][0]["description"] == "Updated value for title"

        delete_url = items["delete"]["request"]["url"]
        assert delete_url["query"] == [
            {"key": "id", "value": "1", "description": "Sample ID to delete"}
        ]
        assert delete_url["path"] == ["api", "v1", "posts", "{post}"]

    def test_default_name(self, config):
        assert PostmanExporter(config).build()["info"]["name"] == "Laravel API"


class TestExport:
    def test_writes_json_file(self, generated_post):
        path = PostmanExporter(generated_post).export()
        assert path.parent == generated_post.postman_export_path
        assert path.name.startswith("postman_collection_")
        assert path.suffix == ".json"
        data = json.loads(path.read_text(encoding="utf-8"))
        assert data["item"][0]["name"] == "posts"

    def test_custom_output_dir_and_empty_collection(self, config, tmp_path, capsys):
        path = PostmanExporter(config).export("Empty", output_dir=tmp_path / "exports")
        assert path.parent == tmp_path / "exports"
        assert json.loads(path.read_text(encoding="utf-8"))["item"] == []
        assert "No routes found" in capsys.readouterr().out
