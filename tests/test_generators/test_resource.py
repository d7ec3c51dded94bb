"""Unit tests for the API resource generator."""

from __future__ import annotations

import pytest

from oneclick.generators import ResourceGenerator
from oneclick.models import AttributeSpec, GenerationRun, StepStatus

pytestmark = pytest.mark.unit


class TestResourceGenerator:
    def test_maps_id_and_attributes(self, config):
        run = GenerationRun(
            entity="Post",
            attributes=(AttributeSpec(name="title"), AttributeSpec(name="author_id", type="foreignId")),
        )
        result = ResourceGenerator(config).run(run)
        assert result.status is StepStatus.CREATED

        text = (config.resources_path / "PostResource.php").read_text(encoding="utf-8")
        assert "class PostResource extends JsonResource" in text
        assert (
            "            'id' => $this->id,\n"
            "            'title' => $this->title,\n"
            "            'author_id' => $this->author_id,\n"
            "        ];"
        ) in text

    def test_invalid_attribute_names_are_skipped(self, config, capsys):
        run = GenerationRun(
            entity="Post",
            attributes=(AttributeSpec(name="title"), AttributeSpec(name="bad-name")),
        )
        ResourceGenerator(config).run(run)
        text = (config.resources_path / "PostResource.php").read_text(encoding="utf-8")
        assert "bad-name" not in text
        assert "Invalid attribute name 'bad-name', skipping." in capsys.readouterr().out

    def test_existing_resource_is_a_collision(self, config):
        path = config.resources_path / "PostResource.php"
        path.parent.mkdir(parents=True)
        path.write_text("<?php\n", encoding="utf-8")
        result = ResourceGenerator(config).run(GenerationRun(entity="Post"))
        assert result.status is StepStatus.COLLISION
        assert "Resource PostResource already exists" in result.message
