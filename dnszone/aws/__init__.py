"""AWS provider implementation."""

from .actuator import AWSActuator
from .client import Route53Client

__all__ = ["AWSActuator", "Route53Client"]
