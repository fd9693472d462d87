"""Tests for the elastic pool schema and desired-attribute validation."""

from __future__ import annotations

import pytest

from sqlpool.providers.azure.elastic_pool import ElasticPoolConfig, ElasticPoolEdition, elastic_pool_schema
from sqlpool.providers.errors import SchemaValidationError


@pytest.fixture
def schema():
    return elastic_pool_schema()


@pytest.mark.parametrize("edition", ["Basic", "Standard", "Premium"])
def test_valid_editions_accepted(schema, desired, edition):
    cfg = schema.validate({**desired, "edition": edition})
    assert cfg.edition == ElasticPoolEdition(edition)


@pytest.mark.parametrize("edition", ["basic", "STANDARD", "Gold", "", "GeneralPurpose", "Premium "])
def test_other_editions_rejected(schema, desired, edition):
    with pytest.raises(SchemaValidationError) as exc:
        schema.validate({**desired, "edition": edition})
    assert exc.value.resource_type == "azurerm_sql_elasticpool"
    assert any(p.startswith("edition:") for p in exc.value.problems)


def test_reports_every_problem(schema):
    with pytest.raises(SchemaValidationError) as exc:
        schema.validate({"name": "pool1", "edition": "Gold", "resource_group_name": "bad rg."})
    fields = {p.split(":", 1)[0] for p in exc.value.problems}
    assert {"server_name", "location", "edition", "dtu", "resource_group_name"} <= fields


def test_unset_optionals_stay_none(schema, desired):
    cfg = schema.validate({**desired, "db_dtu_min": None, "pool_size": None})
    assert cfg.db_dtu_min is None
    assert cfg.db_dtu_max is None
    assert cfg.pool_size is None
    assert cfg.tags == {}


def test_computed_state_is_ignored(schema, desired):
    cfg = schema.validate({**desired, "creation_date": "2024-01-01T00:00:00Z", "id": "/x"})
    assert cfg.name == "pool1"


def test_tag_limits_enforced(schema, desired):
    with pytest.raises(SchemaValidationError, match="maximum of 15 tags"):
        schema.validate({**desired, "tags": {f"k{i}": "v" for i in range(16)}})


def test_tag_values_coerced_to_str(schema, desired):
    cfg = schema.validate({**desired, "tags": {"cost_center": 42}})
    assert cfg.tags == {"cost_center": "42"}


def test_tag_without_value_rejected(schema, desired):
    with pytest.raises(SchemaValidationError, match="value for tag 'env' must be a string"):
        schema.validate({**desired, "tags": {"env": None}})


@pytest.mark.parametrize("field", ["dtu", "db_dtu_min", "db_dtu_max", "pool_size"])
def test_booleans_rejected_for_sizing(schema, desired, field):
    with pytest.raises(SchemaValidationError, match=field):
        schema.validate({**desired, field: True})


def test_field_metadata_matches_model(schema):
    required = {name for name, f in ElasticPoolConfig.model_fields.items() if f.is_required()}
    assert schema.required_fields == required
    assert schema.required_fields == {"name", "server_name", "resource_group_name", "location", "edition", "dtu"}
    assert schema.computed_fields == {"db_dtu_min", "db_dtu_max", "pool_size", "creation_date"}
    assert schema.force_new_fields == {"name", "server_name", "resource_group_name", "location"}
    assert schema.fields["tags"].optional


class TestReplacementFields:
    def test_no_prior_state(self, schema, desired):
        assert schema.replacement_fields({}, desired) == []

    def test_sizing_changes_update_in_place(self, schema, desired):
        changed = {**desired, "edition": "Premium", "dtu": 250, "pool_size": 1024}
        assert schema.replacement_fields(desired, changed) == []

    def test_identity_change_forces_replacement(self, schema, desired):
        changed = {**desired, "server_name": "srv2", "name": "pool2"}
        assert schema.replacement_fields(desired, changed) == ["name", "server_name"]

    def test_location_compared_normalised(self, schema, desired):
        assert schema.replacement_fields(desired, {**desired, "location": "West US"}) == []
        assert schema.replacement_fields(desired, {**desired, "location": "East US"}) == ["location"]
