"""Resource registry: maps resource type names to their adapters.

Nothing registers itself on import; whoever composes the provider builds a
registry explicitly (see ``build_registry``).
"""

from __future__ import annotations

from ..providers.base import ResourceAdapter
from ..providers.schema import ResourceSchema


class ResourceRegistry:
    """Central registry mapping resource_type → adapter instance."""

    def __init__(self) -> None:
        self._adapters: dict[str, ResourceAdapter] = {}

    # -- Registration --------------------------------------------------------

    def register(self, adapter: ResourceAdapter) -> None:
        """Register an adapter under its own ``resource_type``."""
        if adapter.resource_type in self._adapters:
            raise ValueError(f"Resource type '{adapter.resource_type}' is already registered")
        self._adapters[adapter.resource_type] = adapter

    @property
    def supported_types(self) -> list[str]:
        return sorted(self._adapters)

    # -- Lookup --------------------------------------------------------------

    def get(self, resource_type: str) -> ResourceAdapter:
        adapter = self._adapters.get(resource_type)
        if adapter is None:
            raise KeyError(
                f"No adapter registered for type '{resource_type}'. "
                f"Supported: {self.supported_types}"
            )
        return adapter

    def schemas(self) -> dict[str, ResourceSchema]:
        return {name: adapter.schema() for name, adapter in sorted(self._adapters.items())}


def build_registry() -> ResourceRegistry:
    """Return a registry holding every resource this package implements."""
    from ..providers.azure.elastic_pool import elastic_pool_resource

    registry = ResourceRegistry()
    registry.register(elastic_pool_resource())
    return registry
