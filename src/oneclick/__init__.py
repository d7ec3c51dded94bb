"""oneclick -- Laravel vertical-slice scaffolding.

Given an entity name and interactively collected columns, generates the
model, migration, repository, service, resource, controller, form requests
and routes, and wires them into the host application.

Quick usage::

    from pathlib import Path

    from oneclick import Config, Orchestrator

    exit_code = Orchestrator(Config(base_path=Path("my-app"))).run("Post")
"""

from oneclick.config import Config
from oneclick.models import AttributeSpec, CustomMethodSpec, GenerationRun, StepResult
from oneclick.orchestrator import Orchestrator
from oneclick.postman import PostmanExporter

__version__ = "0.1.0"

__all__ = [
    "AttributeSpec",
    "Config",
    "CustomMethodSpec",
    "GenerationRun",
    "Orchestrator",
    "PostmanExporter",
    "StepResult",
]
