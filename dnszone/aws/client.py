"""Thin Route 53 / resource tagging client.

Wraps the boto3 clients used by the AWS actuator and translates botocore
failures into the :mod:`dnszone.base.exceptions` hierarchy: API errors
become :class:`ProviderError` subclasses carrying the AWS error code,
lower-level failures become :class:`TransportError`.
"""

from __future__ import annotations

from typing import Any, NoReturn

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from dnszone.base.config import AWSConfig
from dnszone.base.exceptions import (
    ProviderError,
    TransportError,
    ZoneAlreadyExistsError,
    ZoneNotEmptyError,
    ZoneNotFoundError,
)
from dnszone.base.models import HostedZone, Tag

HOSTED_ZONE_RESOURCE_TYPE = "hostedzone"

_ERROR_MAP: dict[str, type[ProviderError]] = {
    "NoSuchHostedZone": ZoneNotFoundError,
    "HostedZoneAlreadyExists": ZoneAlreadyExistsError,
    "HostedZoneNotEmpty": ZoneNotEmptyError,
}


def _handle(e: ClientError, msg: str) -> NoReturn:
    error = e.response.get("Error", {})
    code = error.get("Code", "Unknown")
    exc = _ERROR_MAP.get(code, ProviderError)
    raise exc(
        msg,
        code=code,
        message=error.get("Message", ""),
        operation=e.operation_name,
    ) from e


def _transport(e: BotoCoreError, msg: str) -> NoReturn:
    raise TransportError(f"{msg}: {e}") from e


def strip_zone_id(zone_id: str) -> str:
    """``/hostedzone/Z123`` -> ``Z123``."""
    return zone_id.split("/")[-1]


def _to_hosted_zone(raw: dict[str, Any]) -> HostedZone:
    return HostedZone(
        id=strip_zone_id(raw["Id"]),
        name=raw["Name"],
        caller_reference=raw.get("CallerReference"),
    )


class Route53Client:
    """Route 53 and resource-groups tagging operations used by the actuator.

    Attributes:
        route53: boto3 Route 53 client.
        tagging: boto3 Resource Groups Tagging API client.
        region: AWS region both clients are scoped to.
    """

    def __init__(self, config: AWSConfig) -> None:
        """Initialize both boto3 clients.

        Args:
            config: AWS configuration object containing credentials and region.
        """
        kwargs = {
            "aws_access_key_id": config.aws_access_key_id,
            "aws_secret_access_key": config.aws_secret_access_key,
            "region_name": config.region_name,
        }
        self.route53 = boto3.client("route53", **kwargs)
        self.tagging = boto3.client("resourcegroupstaggingapi", **kwargs)
        self.region = config.region_name

    # --- Hosted zones ---

    def create_hosted_zone(self, name: str, caller_reference: str) -> HostedZone:
        """Create a hosted zone.

        Raises:
            ZoneAlreadyExistsError: A zone was already created with
                *caller_reference*.
        """
        try:
            resp = self.route53.create_hosted_zone(Name=name, CallerReference=caller_reference)
        except ClientError as e:
            _handle(e, f"Failed to create zone '{name}'")
        except BotoCoreError as e:
            _transport(e, f"Failed to create zone '{name}'")
        return _to_hosted_zone(resp["HostedZone"])

    def get_hosted_zone(self, zone_id: str) -> HostedZone:
        """Fetch a hosted zone by ID.

        Raises:
            ZoneNotFoundError: If the zone does not exist.
        """
        try:
            resp = self.route53.get_hosted_zone(Id=zone_id)
        except ClientError as e:
            _handle(e, f"Failed to get zone '{zone_id}'")
        except BotoCoreError as e:
            _transport(e, f"Failed to get zone '{zone_id}'")
        return _to_hosted_zone(resp["HostedZone"])

    def list_hosted_zones_by_name(
        self,
        dns_name: str,
        hosted_zone_id: str | None = None,
        max_items: int = 50,
    ) -> dict[str, Any]:
        """Return one page of zones ordered by name, starting at *dns_name*.

        Returns:
            Dict with ``zones`` (list of :class:`HostedZone`),
            ``is_truncated``, ``next_dns_name`` and ``next_hosted_zone_id``.
        """
        params: dict[str, Any] = {"DNSName": dns_name, "MaxItems": str(max_items)}
        if hosted_zone_id:
            params["HostedZoneId"] = hosted_zone_id
        try:
            resp = self.route53.list_hosted_zones_by_name(**params)
        except ClientError as e:
            _handle(e, f"Failed to list zones by name '{dns_name}'")
        except BotoCoreError as e:
            _transport(e, f"Failed to list zones by name '{dns_name}'")
        return {
            "zones": [_to_hosted_zone(z) for z in resp.get("HostedZones", [])],
            "is_truncated": resp.get("IsTruncated", False),
            "next_dns_name": resp.get("NextDNSName"),
            "next_hosted_zone_id": resp.get("NextHostedZoneId"),
        }

    def delete_hosted_zone(self, zone_id: str) -> None:
        """Delete a hosted zone.

        Raises:
            ZoneNotEmptyError: If the zone still holds non-default records.
        """
        try:
            self.route53.delete_hosted_zone(Id=zone_id)
        except ClientError as e:
            _handle(e, f"Failed to delete zone '{zone_id}'")
        except BotoCoreError as e:
            _transport(e, f"Failed to delete zone '{zone_id}'")

    # --- Record sets ---

    def list_resource_record_sets(
        self,
        zone_id: str,
        *,
        start_name: str | None = None,
        start_type: str | None = None,
        start_identifier: str | None = None,
        max_items: int = 100,
    ) -> dict[str, Any]:
        """Return one page of record sets in raw Route 53 form.

        Returns:
            The ``list_resource_record_sets`` response: ``ResourceRecordSets``,
            ``IsTruncated`` and, when truncated, ``NextRecordName``,
            ``NextRecordType`` and ``NextRecordIdentifier``.
        """
        params: dict[str, Any] = {"HostedZoneId": zone_id, "MaxItems": str(max_items)}
        if start_name:
            params["StartRecordName"] = start_name
        if start_type:
            params["StartRecordType"] = start_type
        if start_identifier:
            params["StartRecordIdentifier"] = start_identifier
        try:
            return self.route53.list_resource_record_sets(**params)  # type: ignore[no-any-return]
        except ClientError as e:
            _handle(e, f"Failed to list records in zone '{zone_id}'")
        except BotoCoreError as e:
            _transport(e, f"Failed to list records in zone '{zone_id}'")

    def change_resource_record_sets(self, zone_id: str, changes: list[dict[str, Any]]) -> None:
        """Submit *changes* as a single change batch."""
        try:
            self.route53.change_resource_record_sets(
                HostedZoneId=zone_id,
                ChangeBatch={"Changes": changes},
            )
        except ClientError as e:
            _handle(e, f"Failed to change records in zone '{zone_id}'")
        except BotoCoreError as e:
            _transport(e, f"Failed to change records in zone '{zone_id}'")

    # --- Tags ---

    def list_tags(self, zone_id: str) -> list[Tag]:
        try:
            resp = self.route53.list_tags_for_resource(
                ResourceType=HOSTED_ZONE_RESOURCE_TYPE,
                ResourceId=zone_id,
            )
        except ClientError as e:
            _handle(e, f"Failed to list tags for zone '{zone_id}'")
        except BotoCoreError as e:
            _transport(e, f"Failed to list tags for zone '{zone_id}'")
        return [
            Tag(key=t["Key"], value=t.get("Value", ""))
            for t in resp.get("ResourceTagSet", {}).get("Tags", [])
        ]

    def change_tags(self, zone_id: str, add: list[Tag], remove_keys: list[str]) -> None:
        """Add and remove tags in one call (Route 53 accepts 10 of each)."""
        params: dict[str, Any] = {
            "ResourceType": HOSTED_ZONE_RESOURCE_TYPE,
            "ResourceId": zone_id,
        }
        if add:
            params["AddTags"] = [{"Key": t.key, "Value": t.value} for t in add]
        if remove_keys:
            params["RemoveTagKeys"] = list(remove_keys)
        try:
            self.route53.change_tags_for_resource(**params)
        except ClientError as e:
            _handle(e, f"Failed to change tags for zone '{zone_id}'")
        except BotoCoreError as e:
            _transport(e, f"Failed to change tags for zone '{zone_id}'")

    # --- Resource tagging search ---

    def get_resources(
        self,
        tag_key: str,
        tag_value: str,
        pagination_token: str | None = None,
    ) -> dict[str, Any]:
        """Return one page of hosted zone ARNs carrying ``tag_key=tag_value``.

        Returns:
            Dict with ``arns`` and ``pagination_token`` (empty when done).
        """
        params: dict[str, Any] = {
            "ResourceTypeFilters": ["route53:hostedzone"],
            "TagFilters": [{"Key": tag_key, "Values": [tag_value]}],
        }
        if pagination_token:
            params["PaginationToken"] = pagination_token
        try:
            resp = self.tagging.get_resources(**params)
        except ClientError as e:
            _handle(e, f"Failed to search resources tagged '{tag_key}={tag_value}'")
        except BotoCoreError as e:
            _transport(e, f"Failed to search resources tagged '{tag_key}={tag_value}'")
        return {
            "arns": [m["ResourceARN"] for m in resp.get("ResourceTagMappingList", [])],
            "pagination_token": resp.get("PaginationToken", ""),
        }
