"""Abstract actuator blueprint and core utilities.

Every provider actuator inherits from the blueprint defined here.
Import it to type-hint your own code or to create custom providers.
"""

from .actuator import ActuatorBlueprint
from .models import HostedZone, Tag, ZoneSpec, ZoneStatus
from .conditions import Condition, ConditionType
from .supported_providers import existing_providers


__all__ = [
    "ActuatorBlueprint",
    "Condition",
    "ConditionType",
    "HostedZone",
    "Tag",
    "ZoneSpec",
    "ZoneStatus",
    "existing_providers",
]
