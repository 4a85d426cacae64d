"""AWS Route 53 implementation of the actuator blueprint."""

from __future__ import annotations

from dnszone.aws.client import Route53Client
from dnszone.aws.records import delete_record_sets
from dnszone.aws.tags import sync_tags
from dnszone.base.actuator import ActuatorBlueprint
from dnszone.base.conditions import (
    ACCESS_DENIED_REASON,
    ACCESS_GRANTED_REASON,
    AUTHENTICATION_FAILED_REASON,
    AUTHENTICATION_SUCCEEDED_REASON,
    ConditionType,
    UpdatePolicy,
    set_condition,
)
from dnszone.base.exceptions import (
    ActuatorStateError,
    DNSZoneError,
    NameServerLookupError,
    ProviderError,
    ZoneAlreadyExistsError,
    ZoneLookupError,
    ZoneNotEmptyError,
    ZoneNotFoundError,
)
from dnszone.base.logger import ZoneLogger, zone_logger
from dnszone.base.models import HostedZone, Tag, ZoneSpec, ZoneStatus, dotted, tags_string

OWNER_TAG_KEY = "hive.openshift.io/dnszone"

ACCESS_DENIED_CODES = frozenset({"AccessDenied", "AccessDeniedException"})
AUTHENTICATION_FAILURE_CODES = frozenset({"InvalidSignatureException", "UnrecognizedClientException"})

# The raw AccessDenied message embeds the calling identity, which can be
# generated per session; storing it would rewrite the status on every retry.
ACCESS_DENIED_MESSAGE = "AccessDenied error encountered (see controller logs for details)"

CALLER_REFERENCE_PAGE_SIZE = 50


def parse_zone_arn(arn: str) -> str | None:
    """Return the zone ID from ``arn:aws:route53:::hostedzone/<id>``."""
    parts = arn.split(":", 5)
    if len(parts) != 6 or parts[0] != "arn":
        return None
    elems = parts[5].split("/")
    if len(elems) != 2 or elems[0] != "hostedzone" or not elems[1]:
        return None
    return elems[1]


class AWSActuator(ActuatorBlueprint):
    """Reconciles one DNS zone against Route 53.

    A new actuator is expected to be created for each reconciliation pass.

    Attributes:
        spec: Desired state of the zone.
        status: Status updated in place with the zone ID and conditions.
        client: Region-scoped Route 53 client.
        hosted_zone: Zone resolved by :meth:`refresh` or :meth:`create`.
        current_tags: Tags on :attr:`hosted_zone` as last read.
    """

    def __init__(
        self,
        spec: ZoneSpec,
        status: ZoneStatus,
        client: Route53Client,
        logger: ZoneLogger | None = None,
    ) -> None:
        self.spec = spec
        self.status = status
        self.client = client
        self.logger = (logger or zone_logger).bind(provider="aws", zone=spec.zone)
        self.hosted_zone: HostedZone | None = None
        self.current_tags: list[Tag] = []

    # --- Lookup ---

    def refresh(self) -> None:
        """Resolve the hosted zone for the spec.

        A zone ID cached in status is authoritative; otherwise zones are
        searched by the ownership tag. If several tagged zones carry the
        expected name, the last one scanned is kept.

        Raises:
            DNSZoneError: On any provider failure other than a candidate
                zone no longer existing.
        """
        log = self.logger.bind(operation="refresh")
        if self.status.zone_id:
            log.debug("Zone ID is set in status, will retrieve by ID")
            zone_ids = [self.status.zone_id]
        else:
            log.debug("Zone ID is not set in status, looking up by tag")
            try:
                zone_ids = self._find_zone_ids_by_tag()
            except DNSZoneError:
                log.error("Failed to lookup zone by tag", exc_info=True)
                raise
        if not zone_ids:
            log.debug("No matching existing zone found")
            return

        self.hosted_zone = None
        expected_name = dotted(self.spec.zone)
        for zone_id in zone_ids:
            zlog = log.bind(zone_id=zone_id)
            zlog.debug("Fetching hosted zone by ID")
            try:
                zone = self.client.get_hosted_zone(zone_id)
            except ZoneNotFoundError:
                zlog.debug("Zone no longer exists")
                continue
            except DNSZoneError:
                zlog.error("Cannot get hosted zone", exc_info=True)
                raise
            if zone.name != expected_name:
                zlog.debug("Zone name does not match expected name", zone_name=zone.name)
                continue
            zlog.debug("Found hosted zone")
            self.hosted_zone = zone
            self._modify_status()

        if self.hosted_zone is None:
            log.debug("No existing zone found")
            return

        self.current_tags = self._existing_tags(self.hosted_zone.id)

    def _find_zone_ids_by_tag(self) -> list[str]:
        log = self.logger.bind(operation="refresh", filter=f"{OWNER_TAG_KEY}={self.spec.owner}")
        log.debug("Searching for zone by tag")
        ids: list[str] = []
        token: str | None = None
        while True:
            page = self.client.get_resources(OWNER_TAG_KEY, self.spec.owner, token)
            for arn in page["arns"]:
                zone_id = parse_zone_arn(arn)
                if zone_id is None:
                    log.error("Unexpected hostedzone ARN", arn=arn)
                    continue
                log.debug("Found hosted zone", arn=arn, zone_id=zone_id)
                ids.append(zone_id)
            token = page["pagination_token"]
            if not token:
                return ids

    def _existing_tags(self, zone_id: str) -> list[Tag]:
        log = self.logger.bind(zone_id=zone_id)
        log.debug("listing existing tags for zone")
        try:
            tags = self.client.list_tags(zone_id)
        except DNSZoneError:
            log.error("cannot list tags for zone", exc_info=True)
            raise
        log.debug("retrieved zone tags", tags=tags_string(tags))
        return tags

    def _modify_status(self) -> None:
        if self.hosted_zone is None:
            raise ActuatorStateError("zoneID is unpopulated")
        self.status.zone_id = self.hosted_zone.id

    def exists(self) -> bool:
        return self.hosted_zone is not None

    # --- Create ---

    def create(self) -> None:
        """Create the hosted zone using the spec UID as caller reference.

        Reusing the UID means a retry after a lost response or a failed
        status write finds the zone created earlier instead of making a
        second one. A tag sync failure leaves the zone in place; the next
        pass picks it up again through the caller reference.

        Raises:
            ZoneLookupError: The provider reported the zone as existing but
                no zone with this caller reference was found.
            DNSZoneError: On any other provider failure.
        """
        log = self.logger.bind(operation="create")
        log.info("Creating route53 hostedzone")
        try:
            hosted_zone = self.client.create_hosted_zone(self.spec.zone, self.spec.uid)
        except ZoneAlreadyExistsError:
            log.debug(
                "Hosted zone already exists, looking up by caller reference",
                caller_ref=self.spec.uid,
            )
            try:
                hosted_zone = self._find_zone_by_caller_reference(dotted(self.spec.zone), self.spec.uid)
            except DNSZoneError:
                log.error("Failed to find zone by caller reference", exc_info=True)
                raise
        except DNSZoneError:
            log.error("Error creating hosted zone", exc_info=True)
            raise
        else:
            log.debug("Hosted zone successfully created")

        log = log.bind(zone_id=hosted_zone.id)
        log.debug("Fetching zone tags")
        existing_tags = self._existing_tags(hosted_zone.id)

        self.hosted_zone = hosted_zone
        self._modify_status()
        self.current_tags = existing_tags

        log.debug("Syncing zone tags")
        try:
            self._sync_tags()
        except DNSZoneError:
            log.error("Failed to apply tags to newly created zone", exc_info=True)
            raise

    def _find_zone_by_caller_reference(self, domain: str, caller_ref: str) -> HostedZone:
        log = self.logger.bind(operation="create", domain=domain, caller_ref=caller_ref)
        log.debug("Searching for zone by domain and callerRef")
        next_name: str | None = domain
        next_zone_id: str | None = None
        while True:
            log.debug("listing hosted zones by name")
            page = self.client.list_hosted_zones_by_name(
                next_name or domain, next_zone_id, max_items=CALLER_REFERENCE_PAGE_SIZE
            )
            for zone in page["zones"]:
                if zone.caller_reference == caller_ref:
                    log.debug("found hosted zone matching caller reference", zone_id=zone.id)
                    return zone
                # Results are ordered by name, nothing further can match.
                if zone.name != domain:
                    log.debug("reached zone with different domain name, aborting search", found=zone.name)
                    raise ZoneLookupError(f"Hosted zone not found for {domain} with caller reference {caller_ref}")
            if not page["is_truncated"]:
                log.debug("reached end of results, did not find hosted zone")
                raise ZoneLookupError(f"Hosted zone not found for {domain} with caller reference {caller_ref}")
            next_name = page["next_dns_name"]
            next_zone_id = page["next_hosted_zone_id"]

    # --- Metadata ---

    def expected_tags(self) -> list[Tag]:
        tags = [Tag(key=OWNER_TAG_KEY, value=self.spec.owner), *self.spec.tags]
        self.logger.debug("Expected tags", tags=tags_string(tags))
        return tags

    def _sync_tags(self) -> int:
        if self.hosted_zone is None:
            raise ActuatorStateError("hostedZone is unpopulated")
        return sync_tags(
            self.client,
            self.hosted_zone.id,
            self.current_tags,
            self.expected_tags(),
            self.logger,
        )

    def update_metadata(self) -> None:
        """Sync the hosted zone's tags with the spec.

        Tags are the only metadata that can change on an existing zone.
        """
        if self.hosted_zone is None:
            raise ActuatorStateError("hostedZone is unpopulated")
        self._sync_tags()

    # --- Delete ---

    def delete(self) -> None:
        """Sweep the zone's record sets and delete the zone.

        Raises:
            ZoneNotEmptyError: A record appeared after the sweep; logged at
                info since the next pass sweeps again.
            DNSZoneError: On any other provider failure.
        """
        if self.hosted_zone is None:
            raise ActuatorStateError("hostedZone is unpopulated")
        log = self.logger.bind(operation="delete", zone_id=self.hosted_zone.id)

        log.info("Deleting route53 recordsets in hostedzone")
        delete_record_sets(self.client, self.hosted_zone.id, self.spec.zone, log)

        log.info("Deleting route53 hostedzone")
        try:
            self.client.delete_hosted_zone(self.hosted_zone.id)
        except ZoneNotEmptyError:
            log.info("Cannot delete hosted zone", exc_info=True)
            raise
        except DNSZoneError:
            log.error("Cannot delete hosted zone", exc_info=True)
            raise

    # --- Name servers ---

    def get_name_servers(self) -> list[str]:
        """Return the values of the apex NS record set, in provider order.

        Raises:
            ActuatorStateError: No zone has been resolved.
            NameServerLookupError: The query did not return exactly the apex
                NS record set.
        """
        if self.hosted_zone is None:
            raise ActuatorStateError("hostedZone is unpopulated")
        log = self.logger.bind(operation="get_name_servers", zone_id=self.hosted_zone.id)
        log.debug("Listing hosted zone NS records")
        try:
            resp = self.client.list_resource_record_sets(
                self.hosted_zone.id,
                start_name=self.spec.zone,
                start_type="NS",
                max_items=1,
            )
        except DNSZoneError:
            log.error("Error listing recordsets for zone", exc_info=True)
            raise

        record_sets = resp.get("ResourceRecordSets", [])
        if len(record_sets) != 1:
            msg = f"unexpected number of recordsets returned: {len(record_sets)}"
            log.error(msg)
            raise NameServerLookupError(msg)
        record_set = record_sets[0]
        if record_set.get("Type") != "NS":
            msg = "name server record not found"
            log.error(msg)
            raise NameServerLookupError(msg)
        if record_set.get("Name") != dotted(self.spec.zone):
            msg = f"name server record not found for domain {self.spec.zone}"
            log.error(msg)
            raise NameServerLookupError(msg)

        result = [rr["Value"] for rr in record_set.get("ResourceRecords", [])]
        log.debug("found hosted zone name servers", nameservers=result)
        return result

    # --- Conditions ---

    def _set_condition(
        self,
        condition_type: ConditionType,
        status: bool,
        reason: str,
        message: str,
        policy: UpdatePolicy,
    ) -> bool:
        conditions, changed = set_condition(
            self.status.conditions, condition_type, status, reason, message, policy
        )
        self.status.conditions = conditions
        return changed

    def _clear_insufficient_credentials(self) -> bool:
        return self._set_condition(
            ConditionType.INSUFFICIENT_CREDENTIALS,
            False,
            ACCESS_GRANTED_REASON,
            "credentials are valid",
            UpdatePolicy.ALWAYS,
        )

    def _clear_authentication_failure(self) -> bool:
        return self._set_condition(
            ConditionType.AUTHENTICATION_FAILURE,
            False,
            AUTHENTICATION_SUCCEEDED_REASON,
            "credentials authenticated",
            UpdatePolicy.ALWAYS,
        )

    def set_conditions_for_error(self, err: BaseException | None) -> bool:
        """Set health conditions for *err*. Returns True if conditions changed.

        ``None`` and errors without a provider code cannot be attributed to
        credentials, so both conditions are cleared.
        """
        if not isinstance(err, ProviderError):
            access_changed = self._clear_insufficient_credentials()
            auth_changed = self._clear_authentication_failure()
            return access_changed or auth_changed

        code = err.code
        if code in ACCESS_DENIED_CODES:
            access_changed = self._set_condition(
                ConditionType.INSUFFICIENT_CREDENTIALS,
                True,
                ACCESS_DENIED_REASON,
                ACCESS_DENIED_MESSAGE,
                UpdatePolicy.IF_REASON_OR_MESSAGE_CHANGED,
            )
        else:
            access_changed = self._clear_insufficient_credentials()

        if code in AUTHENTICATION_FAILURE_CODES:
            auth_changed = self._set_condition(
                ConditionType.AUTHENTICATION_FAILURE,
                True,
                AUTHENTICATION_FAILED_REASON,
                err.message,
                UpdatePolicy.IF_REASON_OR_MESSAGE_CHANGED,
            )
        else:
            auth_changed = self._clear_authentication_failure()

        return access_changed or auth_changed
