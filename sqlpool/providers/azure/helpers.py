"""Azure attribute helpers: locations, tags, timestamps, resource group names."""

from __future__ import annotations

import re
from datetime import datetime, timezone
from typing import Any, Mapping, Optional

from azure.core.exceptions import HttpResponseError, ResourceNotFoundError

MAX_TAG_COUNT = 15
MAX_TAG_KEY_LENGTH = 512
MAX_TAG_VALUE_LENGTH = 256

MAX_RESOURCE_GROUP_NAME_LENGTH = 90
_RESOURCE_GROUP_NAME_RE = re.compile(r"[-\w._()]+")

MEGABYTE = 1024 * 1024


# ---------------------------------------------------------------------------
# Locations
# ---------------------------------------------------------------------------


def normalize_location(location: str) -> str:
    """'West US' -> 'westus'."""
    return location.replace(" ", "").lower()


# ---------------------------------------------------------------------------
# Tags
# ---------------------------------------------------------------------------


def validate_tags(tags: Mapping[str, Any]) -> list[str]:
    """Return a list of problems with *tags* (empty when valid)."""
    problems: list[str] = []
    if len(tags) > MAX_TAG_COUNT:
        problems.append(f"a maximum of {MAX_TAG_COUNT} tags can be applied to each ARM resource")
    for key, value in tags.items():
        if len(key) > MAX_TAG_KEY_LENGTH:
            problems.append(f"the maximum length for a tag key is {MAX_TAG_KEY_LENGTH} characters: {key!r}")
        if not isinstance(value, (str, int, float)):
            problems.append(f"the value for tag {key!r} must be a string, got {type(value).__name__}")
            continue
        if len(str(value)) > MAX_TAG_VALUE_LENGTH:
            problems.append(
                f"the maximum length for a tag value is {MAX_TAG_VALUE_LENGTH} characters: "
                f"the value for {key!r} is {len(str(value))} characters"
            )
    return problems


def expand_tags(tags: Mapping[str, Any]) -> dict[str, str]:
    """Convert configured tags to the string map the API expects."""
    return {key: str(value) for key, value in tags.items()}


def flatten_tags(tags: Optional[Mapping[str, Optional[str]]]) -> dict[str, str]:
    """Convert API tags to the local mapping; a missing tag set becomes ``{}``."""
    if not tags:
        return {}
    return {key: value if value is not None else "" for key, value in tags.items()}


# ---------------------------------------------------------------------------
# Timestamps
# ---------------------------------------------------------------------------


def format_rfc3339(value: datetime | str) -> str:
    """Render a timestamp as RFC 3339 with second precision, UTC as ``Z``.

    Naive datetimes are taken to be UTC.
    """
    if isinstance(value, str):
        value = datetime.fromisoformat(value.replace("Z", "+00:00"))
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    text = value.replace(microsecond=0).isoformat()
    if text.endswith("+00:00"):
        text = text[:-6] + "Z"
    return text


# ---------------------------------------------------------------------------
# Resource group names
# ---------------------------------------------------------------------------


def validate_resource_group_name(name: str) -> list[str]:
    problems: list[str] = []
    if len(name) > MAX_RESOURCE_GROUP_NAME_LENGTH:
        problems.append(f"resource group name may not exceed {MAX_RESOURCE_GROUP_NAME_LENGTH} characters in length")
    if name.endswith("."):
        problems.append("resource group name may not end with a period")
    if not _RESOURCE_GROUP_NAME_RE.fullmatch(name):
        problems.append(
            "resource group name may only contain alphanumeric characters, dash, underscores, parentheses and periods"
        )
    return problems


# ---------------------------------------------------------------------------
# Sizes
# ---------------------------------------------------------------------------


def megabytes_to_bytes(mb: int) -> int:
    return mb * MEGABYTE


def bytes_to_megabytes(b: int) -> int:
    return b // MEGABYTE


# ---------------------------------------------------------------------------
# Responses
# ---------------------------------------------------------------------------


def response_was_not_found(error: HttpResponseError) -> bool:
    return isinstance(error, ResourceNotFoundError) or error.status_code == 404
