"""Resource schema: field metadata plus a pydantic model for validating desired attributes."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Optional

from pydantic import BaseModel, ValidationError

from .errors import SchemaValidationError


@dataclass(frozen=True)
class FieldSpec:
    """How one attribute behaves in the declarative configuration.

    ``computed`` fields may be filled in by the API when left unset;
    ``force_new`` fields cannot be changed in place. ``state_func``
    normalises a value before it is compared or stored.
    """

    type: str
    required: bool = False
    computed: bool = False
    force_new: bool = False
    description: str = ""
    state_func: Optional[Callable[[Any], Any]] = field(default=None, compare=False)

    @property
    def optional(self) -> bool:
        return not self.required


@dataclass(frozen=True)
class ResourceSchema:
    resource_type: str
    fields: dict[str, FieldSpec]
    model: type[BaseModel]

    @property
    def required_fields(self) -> set[str]:
        return {k for k, f in self.fields.items() if f.required}

    @property
    def computed_fields(self) -> set[str]:
        return {k for k, f in self.fields.items() if f.computed}

    @property
    def force_new_fields(self) -> set[str]:
        return {k for k, f in self.fields.items() if f.force_new}

    def validate(self, attributes: dict[str, Any]) -> Any:
        """Validate desired attributes and return the parsed model.

        Unset (``None``) values are dropped first so a missing required
        field reads as "Field required". Raises SchemaValidationError
        listing every problem found.
        """
        desired = {k: v for k, v in attributes.items() if v is not None}
        try:
            return self.model.model_validate(desired)
        except ValidationError as e:
            problems = [
                f"{'.'.join(str(p) for p in err['loc']) or self.resource_type}: {err['msg']}"
                for err in e.errors()
            ]
            raise SchemaValidationError(self.resource_type, problems) from e

    def replacement_fields(self, prior: dict[str, Any], desired: dict[str, Any]) -> list[str]:
        """Return the ForceNew attributes whose desired value differs from prior state."""
        changed: list[str] = []
        for name in sorted(self.force_new_fields):
            old = prior.get(name)
            if old is None:
                continue
            new = desired.get(name)
            fdef = self.fields[name]
            if fdef.state_func is not None:
                old = fdef.state_func(old)
                new = fdef.state_func(new) if new is not None else None
            if old != new:
                changed.append(name)
        return changed
