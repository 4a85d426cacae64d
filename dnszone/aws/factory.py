"""AWS actuator factory.

Builds a region-scoped Route 53 client and wraps it in an
:class:`AWSActuator`. ``build_actuator`` is consumed by
:func:`dnszone.factory.actuator_factory`.
"""

from __future__ import annotations

from typing import Callable

from dnszone.aws.actuator import AWSActuator
from dnszone.aws.client import Route53Client
from dnszone.base.config import AWSConfig
from dnszone.base.logger import ZoneLogger, zone_logger
from dnszone.base.models import ZoneSpec, ZoneStatus

ClientBuilder = Callable[[AWSConfig], Route53Client]


def build_actuator(
    spec: ZoneSpec,
    status: ZoneStatus,
    config: AWSConfig,
    client_builder: ClientBuilder | None = None,
    logger: ZoneLogger | None = None,
) -> AWSActuator:
    """Create an actuator for one reconciliation pass.

    Args:
        spec: Desired zone state.
        status: Status object the actuator updates in place.
        config: Validated AWS credentials/region.
        client_builder: Callable returning a :class:`Route53Client` for a
            region-scoped config; defaults to the class itself.
        logger: Optional logger; defaults to the module singleton.
    """
    logger = logger or zone_logger
    scoped = config.for_region(spec.region)
    builder = client_builder or Route53Client
    try:
        client = builder(scoped)
    except Exception:
        logger.error("Error creating AWS client", zone=spec.zone, exc_info=True)
        raise
    return AWSActuator(spec, status, client, logger=logger)
