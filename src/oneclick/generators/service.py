"""Service layer generation.

Same flow as the repository layer.  The implementation wraps every CRUD body
in a try/catch that logs and answers with a generic failure message, and
adds image upload, replace and delete steps when an attribute name is in the
configured image vocabulary.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from ..models import GenerationRun
from .repository import LayerGenerator


class ServiceGenerator(LayerGenerator):
    """``app/Services/{Interfaces,Implementation}/<Name>Service[Impl].php``."""

    step = "service"
    layer = "Services"
    interface_suffix = "Service"
    provider_class = "ServiceServiceProvider"
    base_files = (
        ("service/base_interface.php.j2", "Interfaces/BaseService.php"),
        ("service/base_impl.php.j2", "Implementation/BaseServiceImpl.php"),
    )

    @property
    def root(self) -> Path:
        return self.config.services_path

    def entity_context(self, run: GenerationRun) -> dict[str, Any]:
        return self.context(
            run,
            methods=run.service_methods,
            image_field=run.image_field(self.config.generation.image_fields),
        )
