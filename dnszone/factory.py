"""Actuator factory.

Provides :func:`actuator_factory`, the single entry-point for creating a
zone actuator. The function dispatches to the provider-specific builder
based on ``provider`` after validating the raw config dict.
"""

from typing import Any, Callable

from dnszone.base import ActuatorBlueprint, ZoneSpec, ZoneStatus, existing_providers
from dnszone.base.config import validate_config
from dnszone.base.logger import ZoneLogger
from dnszone.aws.factory import build_actuator as build_aws_actuator


_FACTORY_REGISTRY: dict[str, Callable[..., ActuatorBlueprint]] = {
    "aws": build_aws_actuator,
}


def actuator_factory(
    provider: existing_providers,
    spec: ZoneSpec,
    status: ZoneStatus,
    config: dict,
    client_builder: Any = None,
    logger: ZoneLogger | None = None,
) -> ActuatorBlueprint:
    """
    Create an actuator for one reconciliation pass of *spec*.
    Args:
        provider: The DNS provider (e.g., 'aws').
        spec: Desired zone state.
        status: Current zone status; updated in place by the actuator.
        config: Configuration dictionary validated against the provider's model.
        client_builder: Optional override for building the provider client.
        logger: Optional logger.
    Returns:
        An actuator implementing :class:`ActuatorBlueprint`.
    Raises:
        ValueError: If the provider is not supported.
    """
    if provider not in _FACTORY_REGISTRY:
        raise ValueError(f"Unsupported DNS provider: {provider}")

    configObj = validate_config(provider, config)
    return _FACTORY_REGISTRY[provider](
        spec, status, configObj, client_builder=client_builder, logger=logger
    )
