"""Zone actuator blueprint."""

from __future__ import annotations

from abc import ABC, abstractmethod

from dnszone.base.models import ZoneSpec, ZoneStatus


class ActuatorBlueprint(ABC):
    """Abstract interface for reconciling one DNS zone against a provider.

    A new actuator is built for every reconciliation pass and discarded
    afterwards. ``refresh`` is called first; at most one of ``create``,
    ``update_metadata`` or ``delete`` follows.

    Attributes:
        spec: Desired state of the zone.
        status: Status object updated in place; the caller persists it.
    """

    spec: ZoneSpec
    status: ZoneStatus

    @abstractmethod
    def refresh(self) -> None:
        """Look up the provider zone for the spec.

        Finding nothing is not an error; :meth:`exists` reports it.
        """

    @abstractmethod
    def create(self) -> None:
        """Create the zone idempotently and apply its metadata."""

    @abstractmethod
    def exists(self) -> bool:
        """Whether the last ``refresh``/``create`` resolved a zone."""

    @abstractmethod
    def update_metadata(self) -> None:
        """Bring the metadata of an existing zone in line with the spec."""

    @abstractmethod
    def delete(self) -> None:
        """Remove all non-default records and then the zone itself."""

    @abstractmethod
    def get_name_servers(self) -> list[str]:
        """Return the authoritative name servers of the zone."""

    @abstractmethod
    def set_conditions_for_error(self, err: BaseException | None) -> bool:
        """Update health conditions for *err*; ``None`` clears them.

        Returns:
            True if any condition changed.
        """
