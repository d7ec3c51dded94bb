"""Repository layer generation.

Writes the shared ``BaseRepository`` pair once, then the entity interface and
implementation, and binds them in ``RepositoryServiceProvider``.
"""

from __future__ import annotations

from pathlib import Path

from ..models import CustomMethodSpec, GenerationRun, ReturnType, StepResult
from ..patching import binding_line, ensure_binding
from ..utils import ensure_dir, print_info, read_text, write_file
from .base import BaseGenerator

ELOQUENT_CLASSES = {
    ReturnType.MODEL.value: "Illuminate\\Database\\Eloquent\\Model",
    ReturnType.COLLECTION.value: "Illuminate\\Database\\Eloquent\\Collection",
}


def eloquent_imports(methods: list[CustomMethodSpec]) -> list[str]:
    """Class names the custom method signatures need imported, in a stable order."""
    used = {method.return_type for method in methods}
    return [fqcn for name, fqcn in ELOQUENT_CLASSES.items() if name in used]


class LayerGenerator(BaseGenerator):
    """Common flow of the repository and service generators.

    Subclasses set the directory, template and provider names; the flow is
    directories, shared base, entity pair, provider binding.
    """

    layer: str = ""
    interface_suffix: str = ""
    provider_class: str = ""
    base_files: tuple[tuple[str, str], ...] = ()

    @property
    def root(self) -> Path:
        raise NotImplementedError

    @property
    def provider_path(self) -> Path:
        return self.config.providers_path / f"{self.provider_class}.php"

    def interface_fqcn(self, entity: str) -> str:
        return f"App\\{self.layer}\\Interfaces\\{entity}{self.interface_suffix}"

    def implementation_fqcn(self, entity: str) -> str:
        return f"App\\{self.layer}\\Implementation\\{entity}{self.interface_suffix}Impl"

    def generate(self, run: GenerationRun) -> StepResult:
        entity = run.names["entity"]
        interfaces = ensure_dir(self.root / "Interfaces")
        implementations = ensure_dir(self.root / "Implementation")

        for template, relative in self.base_files:
            self.write_once(template, self.root / relative, relative)

        interface_path = interfaces / f"{entity}{self.interface_suffix}.php"
        impl_path = implementations / f"{entity}{self.interface_suffix}Impl.php"
        self.ensure_absent(f"{entity}{self.interface_suffix}", interface_path, impl_path)

        context = self.entity_context(run)
        context["imports"] = eloquent_imports(context["methods"])
        self.write(f"{self.template_dir}/interface.php.j2", interface_path, context)
        self.write(f"{self.template_dir}/impl.php.j2", impl_path, context)

        self.bind(entity)
        return self.created(
            f"{self.interface_suffix} for {entity} created successfully!",
            interface_path,
            impl_path,
        )

    @property
    def template_dir(self) -> str:
        return self.step

    def entity_context(self, run: GenerationRun) -> dict:
        return self.context(run)

    def bind(self, entity: str) -> Path:
        """Bind the entity interface in the layer's provider, creating it if needed."""
        interface = self.interface_fqcn(entity)
        implementation = self.implementation_fqcn(entity)
        path = self.provider_path

        if not path.exists():
            self.write(
                "provider.php.j2",
                path,
                {
                    "provider": self.provider_class,
                    "binding": binding_line(interface, implementation),
                },
            )
            print_info(f"Created {self.provider_class}.")
            self.register_provider(f"App\\Providers\\{self.provider_class}")
            return path

        text = read_text(path)
        patched = ensure_binding(text, interface, implementation)
        if patched != text:
            write_file(path, patched)
        return path


class RepositoryGenerator(LayerGenerator):
    """``app/Repositories/{Interfaces,Implementation}/<Name>Repository[Impl].php``."""

    step = "repository"
    layer = "Repositories"
    interface_suffix = "Repository"
    provider_class = "RepositoryServiceProvider"
    base_files = (
        ("repository/base_interface.php.j2", "Interfaces/BaseRepository.php"),
        ("repository/base_impl.php.j2", "Implementation/BaseRepositoryImpl.php"),
    )

    @property
    def root(self) -> Path:
        return self.config.repositories_path
