"""Azure SQL Elastic Pool resource adapter.

Maps the declarative ``azurerm_sql_elasticpool`` attribute set onto the
``elastic_pools`` operations of ``azure.mgmt.sql.SqlManagementClient``:

    create / update  -> begin_create_or_update (waits for completion), then get
    read             -> get (not found clears the ID)
    delete           -> begin_delete(polling=False) (does not wait)

After a create or update the remote resource is re-read; the locally built
payload is never written back as state.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Any, Optional

from azure.core.exceptions import HttpResponseError
from azure.mgmt.sql.models import ElasticPool, ElasticPoolPerDatabaseSettings, Sku
from pydantic import BaseModel, Field, StrictInt, field_validator

from ..base import ResourceAdapter, ResourceData
from ..errors import MissingResourceIdError, ResourceIdParseError
from ..schema import FieldSpec, ResourceSchema
from .auth import AzureClients
from .helpers import (
    bytes_to_megabytes,
    expand_tags,
    flatten_tags,
    format_rfc3339,
    megabytes_to_bytes,
    normalize_location,
    response_was_not_found,
    validate_resource_group_name,
    validate_tags,
)
from .resource_id import ElasticPoolId, parse_elastic_pool_id

logger = logging.getLogger(__name__)

RESOURCE_TYPE = "azurerm_sql_elasticpool"
DISPLAY_NAME = "SQL Elastic Pool"


class ElasticPoolEdition(str, Enum):
    BASIC = "Basic"
    STANDARD = "Standard"
    PREMIUM = "Premium"


# DTU editions -> pool SKU names
SKU_NAMES = {
    ElasticPoolEdition.BASIC: "BasicPool",
    ElasticPoolEdition.STANDARD: "StandardPool",
    ElasticPoolEdition.PREMIUM: "PremiumPool",
}


# ---------------------------------------------------------------------------
# Schema
# ---------------------------------------------------------------------------


class ElasticPoolConfig(BaseModel):
    """Desired attributes of an elastic pool.

    ``None`` on an optional sizing field means "not configured": the field
    is left out of the request and the API picks the value.
    """

    name: str = Field(..., min_length=1)
    server_name: str = Field(..., min_length=1)
    resource_group_name: str = Field(..., min_length=1)
    location: str = Field(..., min_length=1)
    edition: ElasticPoolEdition
    dtu: StrictInt
    db_dtu_min: Optional[StrictInt] = None
    db_dtu_max: Optional[StrictInt] = None
    pool_size: Optional[StrictInt] = Field(None, description="Storage limit in MB")
    tags: dict[str, str] = Field(default_factory=dict)

    # State read back from the API (id, creation_date) may sit in the same bag
    model_config = {"extra": "ignore"}

    @field_validator("resource_group_name")
    @classmethod
    def _check_resource_group_name(cls, v: str) -> str:
        problems = validate_resource_group_name(v)
        if problems:
            raise ValueError("; ".join(problems))
        return v

    @field_validator("tags", mode="before")
    @classmethod
    def _check_tags(cls, v: Any) -> Any:
        if isinstance(v, dict):
            problems = validate_tags(v)
            if problems:
                raise ValueError("; ".join(problems))
            return expand_tags(v)
        return v


def elastic_pool_schema() -> ResourceSchema:
    return ResourceSchema(
        resource_type=RESOURCE_TYPE,
        model=ElasticPoolConfig,
        fields={
            "name": FieldSpec("string", required=True, force_new=True),
            "location": FieldSpec(
                "string", required=True, force_new=True, state_func=normalize_location,
                description="Azure region; stored lower case without spaces",
            ),
            "resource_group_name": FieldSpec("string", required=True, force_new=True),
            "server_name": FieldSpec("string", required=True, force_new=True),
            "edition": FieldSpec("string", required=True, description="Basic, Standard or Premium"),
            "dtu": FieldSpec("int", required=True, description="Pool capacity in eDTUs"),
            "db_dtu_min": FieldSpec("int", computed=True, description="Minimum eDTUs guaranteed per database"),
            "db_dtu_max": FieldSpec("int", computed=True, description="Maximum eDTUs any one database can use"),
            "pool_size": FieldSpec("int", computed=True, description="Storage limit in MB"),
            "creation_date": FieldSpec("string", computed=True, description="RFC 3339 creation timestamp"),
            "tags": FieldSpec("map"),
        },
    )


# ---------------------------------------------------------------------------
# Request payload
# ---------------------------------------------------------------------------


def build_properties(cfg: ElasticPoolConfig) -> dict[str, Any]:
    """Sizing properties for the request; unset optionals are omitted, not zeroed."""
    props: dict[str, Any] = {"edition": cfg.edition.value, "dtu": cfg.dtu}
    if cfg.db_dtu_min is not None:
        props["db_dtu_min"] = cfg.db_dtu_min
    if cfg.db_dtu_max is not None:
        props["db_dtu_max"] = cfg.db_dtu_max
    if cfg.pool_size is not None:
        props["pool_size"] = cfg.pool_size
    return props


def expand_elastic_pool(cfg: ElasticPoolConfig) -> ElasticPool:
    """Build the SDK request model for ``begin_create_or_update``."""
    props = build_properties(cfg)
    pool = ElasticPool(
        location=cfg.location,
        tags=expand_tags(cfg.tags),
        sku=Sku(name=SKU_NAMES[cfg.edition], tier=props["edition"], capacity=props["dtu"]),
    )
    if "db_dtu_min" in props or "db_dtu_max" in props:
        pool.per_database_settings = ElasticPoolPerDatabaseSettings(
            min_capacity=float(props["db_dtu_min"]) if "db_dtu_min" in props else None,
            max_capacity=float(props["db_dtu_max"]) if "db_dtu_max" in props else None,
        )
    if "pool_size" in props:
        pool.max_size_bytes = megabytes_to_bytes(props["pool_size"])
    return pool


# ---------------------------------------------------------------------------
# Response
# ---------------------------------------------------------------------------


def flatten_elastic_pool(data: ResourceData, resp: Any, pool_id: ElasticPoolId) -> None:
    """Write an API response into *data*.

    Each field of the response is optional on its own; whatever is missing
    is skipped rather than failing the read.
    """
    data.set("name", getattr(resp, "name", None) or pool_id.name)
    data.set("resource_group_name", pool_id.resource_group)
    data.set("server_name", pool_id.server_name)

    location = getattr(resp, "location", None)
    if location:
        data.set("location", normalize_location(location))

    sku = getattr(resp, "sku", None)
    if sku is not None:
        if getattr(sku, "tier", None):
            data.set("edition", str(sku.tier))
        if getattr(sku, "capacity", None) is not None:
            data.set("dtu", int(sku.capacity))

    per_db = getattr(resp, "per_database_settings", None)
    if per_db is not None:
        if getattr(per_db, "min_capacity", None) is not None:
            data.set("db_dtu_min", int(per_db.min_capacity))
        if getattr(per_db, "max_capacity", None) is not None:
            data.set("db_dtu_max", int(per_db.max_capacity))

    max_size_bytes = getattr(resp, "max_size_bytes", None)
    if max_size_bytes is not None:
        data.set("pool_size", bytes_to_megabytes(int(max_size_bytes)))

    created = getattr(resp, "creation_date", None)
    if created:
        data.set("creation_date", format_rfc3339(created))

    data.set("tags", flatten_tags(getattr(resp, "tags", None)))


# ---------------------------------------------------------------------------
# Adapter
# ---------------------------------------------------------------------------


class ElasticPoolResource(ResourceAdapter):
    """Lifecycle operations for ``azurerm_sql_elasticpool``."""

    @property
    def resource_type(self) -> str:
        return RESOURCE_TYPE

    def schema(self) -> ResourceSchema:
        return elastic_pool_schema()

    def create(self, data: ResourceData, clients: AzureClients) -> None:
        """Create or update the pool, wait for it, then read it back."""
        logger.info("Preparing arguments for %s creation", DISPLAY_NAME)
        cfg: ElasticPoolConfig = self.schema().validate(data.attributes)
        pool = expand_elastic_pool(cfg)
        logger.debug("%s %r properties: %s", DISPLAY_NAME, cfg.name, build_properties(cfg))

        poller = clients.elastic_pools.begin_create_or_update(
            cfg.resource_group_name, cfg.server_name, cfg.name, pool,
        )
        logger.info(
            "Waiting for %s %r (resource group %r) to finish provisioning",
            DISPLAY_NAME, cfg.name, cfg.resource_group_name,
        )
        poller.result()

        resp = clients.elastic_pools.get(cfg.resource_group_name, cfg.server_name, cfg.name)
        resource_id = getattr(resp, "id", None)
        if not resource_id:
            raise MissingResourceIdError(DISPLAY_NAME, cfg.name, cfg.resource_group_name)

        data.set_id(resource_id)
        self.read(data, clients)

    # create_or_update is a full upsert
    update = create

    def read(self, data: ResourceData, clients: AzureClients) -> None:
        pool_id = self._parse_id(data.id, "read")
        try:
            resp = clients.elastic_pools.get(pool_id.resource_group, pool_id.server_name, pool_id.name)
        except HttpResponseError as e:
            if response_was_not_found(e):
                logger.warning(
                    "%s %r (resource group %r) was not found, removing from state",
                    DISPLAY_NAME, pool_id.name, pool_id.resource_group,
                )
                data.set_id("")
                return
            logger.error("Error making Read request on %s %r: %s", DISPLAY_NAME, pool_id.name, e)
            raise

        flatten_elastic_pool(data, resp, pool_id)

    def delete(self, data: ResourceData, clients: AzureClients) -> None:
        """Issue the delete without waiting for it to complete.

        Polling is switched off so no background poller outlives the call.
        """
        pool_id = self._parse_id(data.id, "delete")
        logger.info(
            "Deleting %s %r (server %r, resource group %r)",
            DISPLAY_NAME, pool_id.name, pool_id.server_name, pool_id.resource_group,
        )
        clients.elastic_pools.begin_delete(
            pool_id.resource_group, pool_id.server_name, pool_id.name, polling=False,
        )
        data.set_id("")

    @staticmethod
    def _parse_id(resource_id: str, operation: str) -> ElasticPoolId:
        try:
            return parse_elastic_pool_id(resource_id)
        except ValueError as e:
            raise ResourceIdParseError(resource_id, f"{DISPLAY_NAME} {operation}", str(e)) from e


def elastic_pool_resource() -> ElasticPoolResource:
    return ElasticPoolResource()
