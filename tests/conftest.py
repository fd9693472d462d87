"""Shared pytest fixtures."""

from __future__ import annotations

from datetime import datetime, timezone
from types import SimpleNamespace
from unittest.mock import MagicMock

import pytest

from sqlpool.providers.azure.auth import AzureClients
from sqlpool.providers.azure.resource_id import format_elastic_pool_id

SUBSCRIPTION_ID = "00000000-0000-0000-0000-000000000000"
POOL_ID = format_elastic_pool_id(SUBSCRIPTION_ID, "rg1", "srv1", "pool1")


def make_pool_response(**overrides):
    """Build an object shaped like ``azure.mgmt.sql.models.ElasticPool`` as returned by ``get``."""
    fields = {
        "id": POOL_ID,
        "name": "pool1",
        "location": "West US",
        "tags": {"env": "test"},
        "sku": SimpleNamespace(name="StandardPool", tier="Standard", capacity=100),
        "per_database_settings": SimpleNamespace(min_capacity=0.0, max_capacity=100.0),
        "max_size_bytes": 102400 * 1024 * 1024,
        "creation_date": datetime(2024, 1, 1, tzinfo=timezone.utc),
    }
    fields.update(overrides)
    return SimpleNamespace(**fields)


@pytest.fixture
def sql_client() -> MagicMock:
    """A mocked SqlManagementClient whose ``elastic_pools.get`` returns a healthy pool."""
    sql = MagicMock()
    sql.elastic_pools.get.return_value = make_pool_response()
    return sql


@pytest.fixture
def clients(sql_client: MagicMock) -> AzureClients:
    return AzureClients(SUBSCRIPTION_ID, sql=sql_client)


@pytest.fixture
def desired() -> dict:
    """Minimal valid desired attributes."""
    return {
        "name": "pool1",
        "server_name": "srv1",
        "resource_group_name": "rg1",
        "location": "westus",
        "edition": "Standard",
        "dtu": 100,
    }
