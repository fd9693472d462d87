"""Tests for the sqlpool CLI (mocked Azure clients)."""

from __future__ import annotations

import json
from unittest.mock import patch

import pytest
from azure.core.exceptions import HttpResponseError, ResourceNotFoundError
from click.testing import CliRunner

from conftest import POOL_ID
from sqlpool.cli.main import cli
from sqlpool.providers.azure.auth import AzureClients

APPLY_ARGS = [
    "apply",
    "--name", "pool1",
    "--server", "srv1",
    "--resource-group", "rg1",
    "--location", "westus",
    "--edition", "Standard",
    "--dtu", "100",
]


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture
def invoke(runner, clients, tmp_path):
    """Invoke the CLI with logs in tmp_path and the mocked AzureClients."""
    def _invoke(*args: str):
        with patch.object(AzureClients, "from_settings", return_value=clients):
            return runner.invoke(cli, ["--log-dir", str(tmp_path), *args])
    return _invoke


def _state(output: str) -> dict:
    return json.loads(output[output.index("{"):])


def test_version(runner):
    result = runner.invoke(cli, ["--version"])
    assert result.exit_code == 0
    assert "sqlpool" in result.output


def test_schema_lists_fields(invoke):
    result = invoke("schema")
    assert result.exit_code == 0
    assert "azurerm_sql_elasticpool" in result.output
    assert "db_dtu_min" in result.output


def test_apply_creates(invoke, sql_client):
    result = invoke(*APPLY_ARGS, "--tag", "env=test")
    assert result.exit_code == 0, result.output
    pool = sql_client.elastic_pools.begin_create_or_update.call_args.args[3]
    assert pool.tags == {"env": "test"}
    assert pool.per_database_settings is None
    state = _state(result.output)
    assert state["id"] == POOL_ID
    assert state["edition"] == "Standard"


def test_apply_invalid_edition(invoke, sql_client):
    args = list(APPLY_ARGS)
    args[args.index("Standard")] = "Gold"
    result = invoke(*args)
    assert result.exit_code == 1
    assert "edition" in result.output
    sql_client.elastic_pools.begin_create_or_update.assert_not_called()


def test_apply_bad_tag(invoke):
    result = invoke(*APPLY_ARGS, "--tag", "novalue")
    assert result.exit_code == 2
    assert "KEY=VALUE" in result.output


def test_show(invoke, sql_client):
    result = invoke("show", POOL_ID)
    assert result.exit_code == 0, result.output
    assert _state(result.output)["pool_size"] == 102400


def test_show_gone(invoke, sql_client):
    sql_client.elastic_pools.get.side_effect = ResourceNotFoundError("gone")
    result = invoke("show", POOL_ID)
    assert result.exit_code == 0
    assert "no longer exists" in result.output


def test_show_api_error(invoke, sql_client):
    sql_client.elastic_pools.get.side_effect = HttpResponseError("throttled")
    result = invoke("show", POOL_ID)
    assert result.exit_code == 1
    assert "throttled" in result.output


def test_show_malformed_id(invoke):
    result = invoke("show", "garbage")
    assert result.exit_code == 1
    assert "Unable to parse" in result.output


def test_destroy(invoke, sql_client):
    result = invoke("destroy", POOL_ID)
    assert result.exit_code == 0
    sql_client.elastic_pools.begin_delete.assert_called_once_with("rg1", "srv1", "pool1", polling=False)


def test_import(invoke, sql_client):
    result = invoke("import", POOL_ID)
    assert result.exit_code == 0, result.output
    assert _state(result.output)["server_name"] == "srv1"


def test_import_missing(invoke, sql_client):
    sql_client.elastic_pools.get.side_effect = ResourceNotFoundError("gone")
    result = invoke("import", POOL_ID)
    assert result.exit_code == 1
    assert "non-existent" in result.output
