"""Abstract base class for resource adapters and the attribute bag they operate on."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from .schema import ResourceSchema

logger = logging.getLogger(__name__)


class ResourceData:
    """Mutable attribute bag for one resource instance.

    Holds the desired attributes on the way in and the reconciled remote
    state on the way out. An attribute set to ``None`` is treated as unset;
    ``0``, ``""`` and ``{}`` are real values.
    """

    def __init__(self, attributes: dict[str, Any] | None = None, resource_id: str = "") -> None:
        self._attributes: dict[str, Any] = dict(attributes or {})
        self._id = resource_id

    @property
    def id(self) -> str:
        return self._id

    def set_id(self, value: str | None) -> None:
        """Assign the durable handle; an empty value marks the resource as gone."""
        self._id = value or ""

    @property
    def exists(self) -> bool:
        return bool(self._id)

    def get(self, key: str, default: Any = None) -> Any:
        return self._attributes.get(key, default)

    def set(self, key: str, value: Any) -> None:
        self._attributes[key] = value

    @property
    def attributes(self) -> dict[str, Any]:
        return dict(self._attributes)

    def as_dict(self) -> dict[str, Any]:
        return {"id": self._id, **self._attributes}

    def __repr__(self) -> str:
        return f"ResourceData(id={self._id!r}, attributes={self._attributes!r})"


class ResourceAdapter(ABC):
    """Interface that every declarative resource adapter implements.

    The orchestrating engine calls the lifecycle methods with the resource's
    attribute bag and a provider client container; adapters never hold
    per-resource state between calls.
    """

    @property
    @abstractmethod
    def resource_type(self) -> str:
        """Return the resource type identifier (e.g. 'azurerm_sql_elasticpool')."""
        ...

    @abstractmethod
    def schema(self) -> ResourceSchema:
        """Return the field definitions and validator for this resource."""
        ...

    @abstractmethod
    def create(self, data: ResourceData, clients: Any) -> None:
        """Create the remote resource and populate *data* from the result."""
        ...

    @abstractmethod
    def read(self, data: ResourceData, clients: Any) -> None:
        """Refresh *data* from the remote resource; clear its ID if it is gone."""
        ...

    @abstractmethod
    def update(self, data: ResourceData, clients: Any) -> None:
        """Apply in-place changes from *data* to the remote resource."""
        ...

    @abstractmethod
    def delete(self, data: ResourceData, clients: Any) -> None:
        """Delete the remote resource identified by *data*."""
        ...

    def import_state(self, data: ResourceData, clients: Any) -> list[ResourceData]:
        """Import an existing resource by ID. Default is passthrough: the ID is kept as-is."""
        logger.debug("Importing %s %s (passthrough)", self.resource_type, data.id)
        return [data]
