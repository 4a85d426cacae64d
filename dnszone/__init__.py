"""dnszone — reconcile declared DNS zones against a hosted DNS provider.

Entry point for the library. Import :func:`actuator_factory` to build an
actuator for one reconciliation pass and :func:`reconcile` to run it::

    from dnszone import ZoneSpec, ZoneStatus, actuator_factory, reconcile

    spec = ZoneSpec(zone="example.com", namespace="ns", name="zone", uid="...")
    status = ZoneStatus()
    result = reconcile(actuator_factory("aws", spec, status, {}))
"""

from .base import (
    ActuatorBlueprint,
    Condition,
    ConditionType,
    HostedZone,
    Tag,
    ZoneSpec,
    ZoneStatus,
)
from .factory import actuator_factory
from .reconcile import ReconcileResult, reconcile

__all__ = [
    "ActuatorBlueprint",
    "Condition",
    "ConditionType",
    "HostedZone",
    "ReconcileResult",
    "Tag",
    "ZoneSpec",
    "ZoneStatus",
    "actuator_factory",
    "reconcile",
]
