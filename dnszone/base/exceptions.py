"""
dnszone exception hierarchy.

Every failure raised by an actuator inherits from :class:`DNSZoneError`.
Errors returned by the DNS provider are :class:`ProviderError` instances
carrying the provider's error ``code``; failures below the API layer
(connection, endpoint resolution, missing credentials) are
:class:`TransportError` and never carry a code, so they cannot be
attributed to a health condition.
"""

from __future__ import annotations


# ── Base ──────────────────────────────────────────────────────────────
class DNSZoneError(Exception):
    """Root exception for all dnszone errors."""

    code: str | None = None


# ── Provider ──────────────────────────────────────────────────────────
class ProviderError(DNSZoneError):
    """Structured error returned by the DNS provider API.

    Attributes:
        code: Provider error code (e.g. ``AccessDenied``).
        message: Raw provider message.
        operation: API operation that failed.
    """

    def __init__(
        self,
        description: str,
        *,
        code: str,
        message: str = "",
        operation: str | None = None,
    ) -> None:
        super().__init__(f"{description}: {code}: {message}" if message else f"{description}: {code}")
        self.code = code
        self.message = message
        self.operation = operation


class ZoneNotFoundError(ProviderError):
    """Hosted zone does not exist."""


class ZoneAlreadyExistsError(ProviderError):
    """Hosted zone already exists for the caller reference."""


class ZoneNotEmptyError(ProviderError):
    """Hosted zone still contains non-default record sets."""


# ── Transport ─────────────────────────────────────────────────────────
class TransportError(DNSZoneError):
    """Failure below the provider API; carries no classification code."""


# ── Actuator ──────────────────────────────────────────────────────────
class ActuatorStateError(DNSZoneError):
    """Operation requires a hosted zone that has not been resolved."""


class ZoneLookupError(DNSZoneError):
    """No hosted zone matched the caller reference."""


class NameServerLookupError(DNSZoneError):
    """The apex NS record set was missing or malformed."""
