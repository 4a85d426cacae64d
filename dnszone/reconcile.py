"""Single reconciliation pass over any actuator.

Scheduling and retries belong to the caller; :func:`reconcile` runs one
pass to completion and leaves the actuator's status ready to persist.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from dnszone.base.actuator import ActuatorBlueprint


class ReconcileResult(BaseModel):
    """Outcome of a successful pass."""

    exists: bool
    deleted: bool = False
    name_servers: list[str] = Field(default_factory=list)
    conditions_changed: bool = False


def reconcile(actuator: ActuatorBlueprint, deleting: bool = False) -> ReconcileResult:
    """Converge the provider zone for ``actuator.spec``.

    Args:
        actuator: Freshly built actuator for this pass.
        deleting: Whether the declaring resource is being torn down.

    Returns:
        The pass outcome. Health conditions are cleared on success.

    Raises:
        Exception: Whatever the actuator raised, after the health
            conditions have been updated for it.
    """
    try:
        actuator.refresh()
        if deleting:
            if not actuator.exists():
                return ReconcileResult(
                    exists=False,
                    conditions_changed=actuator.set_conditions_for_error(None),
                )
            actuator.delete()
            return ReconcileResult(
                exists=False,
                deleted=True,
                conditions_changed=actuator.set_conditions_for_error(None),
            )

        if actuator.exists():
            actuator.update_metadata()
        else:
            actuator.create()
        name_servers = actuator.get_name_servers()
    except Exception as err:
        actuator.set_conditions_for_error(err)
        raise

    return ReconcileResult(
        exists=True,
        name_servers=name_servers,
        conditions_changed=actuator.set_conditions_for_error(None),
    )
