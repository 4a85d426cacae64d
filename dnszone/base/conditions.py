"""
Health conditions surfaced on a zone's status.

Conditions are immutable; :func:`set_condition` returns a new list plus a
flag telling the caller whether anything it would persist has changed.
A list never holds two conditions of the same type.
"""

from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class ConditionType(str, Enum):
    INSUFFICIENT_CREDENTIALS = "InsufficientCredentials"
    AUTHENTICATION_FAILURE = "AuthenticationFailure"


class UpdatePolicy(str, Enum):
    """When an existing condition with the same status is rewritten.

    ``ALWAYS`` refreshes the condition on every call (probe time included).
    ``IF_REASON_OR_MESSAGE_CHANGED`` leaves it untouched unless the reason
    or message differ.
    """

    ALWAYS = "Always"
    IF_REASON_OR_MESSAGE_CHANGED = "IfReasonOrMessageChanged"


ACCESS_DENIED_REASON = "AccessDenied"
ACCESS_GRANTED_REASON = "AccessGranted"
AUTHENTICATION_FAILED_REASON = "AuthenticationFailed"
AUTHENTICATION_SUCCEEDED_REASON = "AuthenticationSucceeded"


def _now() -> datetime:
    return datetime.now(timezone.utc)


class Condition(BaseModel):
    model_config = ConfigDict(frozen=True)

    type: ConditionType
    status: bool
    reason: str = ""
    message: str = ""
    last_transition_time: datetime = Field(default_factory=_now)
    last_probe_time: datetime = Field(default_factory=_now)


def find_condition(
    conditions: list[Condition], condition_type: ConditionType
) -> Condition | None:
    for cond in conditions:
        if cond.type == condition_type:
            return cond
    return None


def set_condition(
    conditions: list[Condition],
    condition_type: ConditionType,
    status: bool,
    reason: str,
    message: str,
    policy: UpdatePolicy,
    now: datetime | None = None,
) -> tuple[list[Condition], bool]:
    """Set a condition, replacing any existing entry of the same type.

    A condition that was never raised is not materialised just to record
    that it is false.

    Args:
        conditions: Current conditions; not mutated.
        condition_type: Type to set.
        status: New status.
        reason: Machine-readable reason.
        message: Human-readable message.
        policy: How to treat an existing condition with the same status.
        now: Timestamp to stamp on the condition, defaults to UTC now.

    Returns:
        ``(new_conditions, changed)`` where *changed* is true when the
        stored status, reason or message differ from before.
    """
    now = now or _now()
    existing = find_condition(conditions, condition_type)
    if existing is None:
        if not status:
            return list(conditions), False
        cond = Condition(
            type=condition_type,
            status=status,
            reason=reason,
            message=message,
            last_transition_time=now,
            last_probe_time=now,
        )
        return [*conditions, cond], True

    status_changed = existing.status != status
    content_changed = existing.reason != reason or existing.message != message
    if not status_changed and not content_changed and policy != UpdatePolicy.ALWAYS:
        return list(conditions), False

    updated = existing.model_copy(
        update={
            "status": status,
            "reason": reason,
            "message": message,
            "last_probe_time": now,
            "last_transition_time": now if status_changed else existing.last_transition_time,
        }
    )
    new_conditions = [updated if c.type == condition_type else c for c in conditions]
    return new_conditions, status_changed or content_changed
