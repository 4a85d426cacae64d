"""Hosted zone tag reconciliation."""

from __future__ import annotations

from collections.abc import Iterator

from dnszone.aws.client import Route53Client
from dnszone.base.exceptions import DNSZoneError
from dnszone.base.logger import ZoneLogger
from dnszone.base.models import Tag, tags_string

# Route 53 accepts at most 10 tags to add and 10 keys to remove per call.
MAX_TAGS_PER_CALL = 10


def diff_tags(existing: list[Tag], expected: list[Tag]) -> tuple[list[Tag], list[Tag]]:
    """Compute the tags to add and the tags to remove.

    Every existing tag starts as a removal candidate; an expected tag with
    an exact key/value match takes its candidate off the list, anything
    unmatched is added.

    Returns:
        ``(to_add, to_delete)``
    """
    to_delete = list(existing)
    to_add: list[Tag] = []
    for tag in expected:
        for i, candidate in enumerate(to_delete):
            if candidate == tag:
                del to_delete[i]
                break
        else:
            to_add.append(tag)
    return to_add, to_delete


def tag_batches(
    to_add: list[Tag], keys_to_delete: list[str], size: int = MAX_TAGS_PER_CALL
) -> Iterator[tuple[list[Tag], list[str]]]:
    """Yield ``(add, remove)`` chunks stepping both lists by *size* together."""
    index = 0
    while index < len(to_add) or index < len(keys_to_delete):
        yield to_add[index:index + size], keys_to_delete[index:index + size]
        index += size


def sync_tags(
    client: Route53Client,
    zone_id: str,
    existing: list[Tag],
    expected: list[Tag],
    logger: ZoneLogger,
) -> int:
    """Make the zone's tags match *expected*.

    Returns:
        Number of ``change_tags`` calls issued; zero when already in sync.
    """
    log = logger.bind(zone_id=zone_id)
    log.debug("syncing tags", current=tags_string(existing), expected=tags_string(expected))

    to_add, to_delete = diff_tags(existing, expected)
    if not to_add and not to_delete:
        log.debug("tags are in sync, no action required")
        return 0

    for tag in to_add:
        log.debug("tag will be added", tag=str(tag))
    for tag in to_delete:
        log.debug("tag will be deleted", tag=str(tag))
    keys_to_delete = [tag.key for tag in to_delete]

    calls = 0
    for add_chunk, remove_chunk in tag_batches(to_add, keys_to_delete):
        log.debug(f"Adding {len(add_chunk)} tags, deleting {len(remove_chunk)} tags")
        try:
            client.change_tags(zone_id, add_chunk, remove_chunk)
        except DNSZoneError:
            log.error("Cannot update tags for hosted zone", exc_info=True)
            raise
        calls += 1
    return calls
