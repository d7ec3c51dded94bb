"""File generators, one per layer of the generated Laravel slice.

Each generator renders its ``*.php.j2`` templates for one
:class:`~oneclick.models.GenerationRun` and returns a
:class:`~oneclick.models.StepResult`.  The orchestrator runs them in the
order listed in ``PIPELINE``::

    from oneclick.generators import ResourceGenerator

    result = ResourceGenerator(config).run(run)
"""

from oneclick.generators.base import BaseGenerator
from oneclick.generators.controller import ControllerGenerator
from oneclick.generators.migration import MigrationGenerator
from oneclick.generators.model import ModelGenerator
from oneclick.generators.repository import RepositoryGenerator
from oneclick.generators.request import RequestGenerator
from oneclick.generators.resource import ResourceGenerator
from oneclick.generators.route import RouteGenerator
from oneclick.generators.service import ServiceGenerator

# Everything after the model step, in execution order.
PIPELINE: tuple[type[BaseGenerator], ...] = (
    MigrationGenerator,
    RepositoryGenerator,
    ServiceGenerator,
    ResourceGenerator,
    ControllerGenerator,
    RequestGenerator,
    RouteGenerator,
)

__all__ = [
    "BaseGenerator",
    "ControllerGenerator",
    "MigrationGenerator",
    "ModelGenerator",
    "PIPELINE",
    "RepositoryGenerator",
    "RequestGenerator",
    "ResourceGenerator",
    "RouteGenerator",
    "ServiceGenerator",
]
