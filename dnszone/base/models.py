"""
Data models shared by every actuator.

``ZoneSpec`` is the desired state handed over by the resource store,
``ZoneStatus`` is what the actuator writes back. ``HostedZone`` only
lives for the duration of one reconciliation pass.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator

from dnszone.base.conditions import Condition


def dotted(domain: str) -> str:
    """Return *domain* with exactly one trailing dot."""
    return domain.rstrip(".") + "."


class Tag(BaseModel):
    """A key/value label attached to a provider resource."""

    model_config = ConfigDict(frozen=True)

    key: str
    value: str = ""

    def __str__(self) -> str:
        return f"{self.key}={self.value}"


def tags_string(tags: list[Tag]) -> str:
    return ",".join(str(t) for t in tags)


class ZoneSpec(BaseModel):
    """Desired state of a DNS zone.

    Attributes:
        zone: Domain name of the zone (e.g. ``example.com``).
        namespace: Namespace of the declaring resource.
        name: Name of the declaring resource.
        uid: Durable unique identifier of the declaring resource; used as
            the provider-side idempotency token on create.
        region: Optional provider region override.
        tags: User-declared tags, keys unique.
    """

    model_config = ConfigDict(frozen=True)

    zone: str
    namespace: str
    name: str
    uid: str
    region: str | None = None
    tags: list[Tag] = Field(default_factory=list)

    @field_validator("zone")
    @classmethod
    def zone_not_empty(cls, v: str) -> str:
        if not v.strip("."):
            raise ValueError("zone must be a non-empty domain name")
        return v

    @field_validator("tags")
    @classmethod
    def unique_tag_keys(cls, v: list[Tag]) -> list[Tag]:
        seen: set[str] = set()
        for tag in v:
            if tag.key in seen:
                raise ValueError(f"duplicate tag key: {tag.key}")
            seen.add(tag.key)
        return v

    @property
    def owner(self) -> str:
        """``<namespace>/<name>`` of the declaring resource."""
        return f"{self.namespace}/{self.name}"


class ZoneStatus(BaseModel):
    """Observed state written back by the actuator."""

    zone_id: str | None = None
    conditions: list[Condition] = Field(default_factory=list)


class HostedZone(BaseModel):
    """Provider-side hosted zone, cached for one pass."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    caller_reference: str | None = None
