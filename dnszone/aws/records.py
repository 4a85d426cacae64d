"""Record set sweeping ahead of hosted zone deletion."""

from __future__ import annotations

from typing import Any

from dnszone.aws.client import Route53Client
from dnszone.base.logger import ZoneLogger
from dnszone.base.models import dotted

RECORD_PAGE_SIZE = 100

# Created with the zone and cannot be deleted.
PROTECTED_RECORD_TYPES = frozenset({"NS", "SOA"})


def is_protected(record_set: dict[str, Any], domain: str) -> bool:
    return record_set["Name"] == dotted(domain) and record_set["Type"] in PROTECTED_RECORD_TYPES


def delete_record_sets(
    client: Route53Client,
    zone_id: str,
    domain: str,
    logger: ZoneLogger,
    page_size: int = RECORD_PAGE_SIZE,
) -> int:
    """Delete every record set in the zone except the apex NS and SOA.

    Each page's deletable record sets go out as one change batch before
    the next page is requested.

    Args:
        client: Provider client.
        zone_id: Hosted zone ID.
        domain: Apex domain of the zone.
        logger: Logger bound to the zone.
        page_size: Record sets requested per page.

    Returns:
        Number of record sets deleted.
    """
    cursor: dict[str, str | None] = {}
    deleted = 0
    while True:
        page = client.list_resource_record_sets(zone_id, max_items=page_size, **cursor)
        changes = []
        for record_set in page.get("ResourceRecordSets", []):
            if is_protected(record_set, domain):
                continue
            logger.info(
                "recordset set for deletion",
                name=record_set["Name"],
                type=record_set["Type"],
            )
            changes.append({"Action": "DELETE", "ResourceRecordSet": record_set})
        if changes:
            logger.info("deleting recordsets", count=len(changes))
            client.change_resource_record_sets(zone_id, changes)
            deleted += len(changes)
        if not page.get("IsTruncated"):
            break
        cursor = {
            "start_name": page.get("NextRecordName"),
            "start_type": page.get("NextRecordType"),
            "start_identifier": page.get("NextRecordIdentifier"),
        }
    return deleted
