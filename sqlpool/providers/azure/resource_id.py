"""Azure Resource Manager IDs: parsing and formatting.

An ARM ID is an absolute path of key/value segments::

    /subscriptions/<sub>/resourceGroups/<rg>/providers/<namespace>/<type>/<name>[/<type>/<name>...]
"""

from __future__ import annotations

from dataclasses import dataclass, field

SQL_NAMESPACE = "Microsoft.Sql"


@dataclass
class ResourceId:
    subscription_id: str
    resource_group: str = ""
    provider: str = ""
    path: dict[str, str] = field(default_factory=dict)

    @classmethod
    def parse(cls, value: str) -> ResourceId:
        """Split an ARM ID into its parts. Raises ValueError on malformed input."""
        text = value.strip()
        if not text.startswith("/"):
            raise ValueError(f"resource ID must be an absolute path, got {value!r}")

        components = text.strip("/").split("/")
        if len(components) % 2 != 0:
            raise ValueError(f"the number of path segments is not divisible by 2 in {value!r}")

        pairs: dict[str, str] = {}
        for key, val in zip(components[::2], components[1::2]):
            if not key or not val:
                raise ValueError(f"key/value cannot be empty strings (key {key!r}, value {val!r})")
            # Some APIs hand back the lower-cased form
            if key.lower() == "resourcegroups":
                key = "resourceGroups"
            if key in pairs:
                raise ValueError(f"duplicate key {key!r} in {value!r}")
            pairs[key] = val

        subscription_id = pairs.pop("subscriptions", "")
        if not subscription_id:
            raise ValueError(f"no subscription ID found in {value!r}")

        resource_group = pairs.pop("resourceGroups", "")
        provider = pairs.pop("providers", "")
        if not resource_group and pairs:
            raise ValueError(f"no resource group name found in {value!r}")

        return cls(
            subscription_id=subscription_id,
            resource_group=resource_group,
            provider=provider,
            path=pairs,
        )

    def __str__(self) -> str:
        parts = ["subscriptions", self.subscription_id]
        if self.resource_group:
            parts += ["resourceGroups", self.resource_group]
        if self.provider:
            parts += ["providers", self.provider]
        for key, val in self.path.items():
            parts += [key, val]
        return "/" + "/".join(parts)


@dataclass(frozen=True)
class ElasticPoolId:
    resource_group: str
    server_name: str
    name: str


def parse_elastic_pool_id(value: str) -> ElasticPoolId:
    """Extract (resource group, server, pool) from an elastic pool ARM ID.

    Raises ValueError when the ID is malformed or lacks any of the three parts.
    """
    rid = ResourceId.parse(value)
    server = rid.path.get("servers", "")
    pool = rid.path.get("elasticPools", "")
    if not server:
        raise ValueError(f"no 'servers' segment found in {value!r}")
    if not pool:
        raise ValueError(f"no 'elasticPools' segment found in {value!r}")
    return ElasticPoolId(resource_group=rid.resource_group, server_name=server, name=pool)


def format_elastic_pool_id(subscription_id: str, resource_group: str, server_name: str, name: str) -> str:
    return str(ResourceId(
        subscription_id=subscription_id,
        resource_group=resource_group,
        provider=SQL_NAMESPACE,
        path={"servers": server_name, "elasticPools": name},
    ))
