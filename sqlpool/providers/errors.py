"""Adapter error types.

Remote API failures are not wrapped: callers see the SDK's own
``azure.core.exceptions.HttpResponseError`` subclasses.
"""

from __future__ import annotations


class AdapterError(Exception):
    """Base class for errors raised by the resource adapters themselves."""


class SchemaValidationError(AdapterError):
    """Desired attributes failed validation; raised before any network call."""

    def __init__(self, resource_type: str, problems: list[str]):
        self.resource_type = resource_type
        self.problems = problems
        super().__init__(f"Invalid {resource_type} configuration: " + "; ".join(problems))


class ResourceIdParseError(AdapterError):
    """A stored resource ID could not be parsed into its addressing fields."""

    def __init__(self, resource_id: str, operation: str, reason: str):
        self.resource_id = resource_id
        self.operation = operation
        self.reason = reason
        super().__init__(f"Unable to parse resource ID {resource_id!r} during {operation}: {reason}")


class MissingResourceIdError(AdapterError):
    """The API accepted a create/update but the follow-up read returned no ID."""

    def __init__(self, kind: str, name: str, resource_group: str):
        self.kind = kind
        self.name = name
        self.resource_group = resource_group
        super().__init__(f"Cannot read {kind} {name!r} (resource group {resource_group!r}) ID")
