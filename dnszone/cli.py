"""dnszone CLI — run a single reconciliation pass from the command line.

Usage examples::

    dnszone --spec zone.json --status status.json reconcile
    dnszone --spec zone.json --config '{"region_name":"us-east-1"}' name-servers
"""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from dnszone.base.exceptions import DNSZoneError
from dnszone.base.models import ZoneSpec, ZoneStatus

OPERATIONS = ["refresh", "reconcile", "delete", "name-servers"]


def _build_parser() -> argparse.ArgumentParser:
    """Build the argparse parser for the ``dnszone`` CLI.

    Returns:
        Configured :class:`~argparse.ArgumentParser`.
    """
    parser = argparse.ArgumentParser(
        prog="dnszone",
        description="Reconcile a declared DNS zone against its provider",
    )
    parser.add_argument(
        "--provider", "-p",
        default="aws",
        choices=["aws"],
        help="DNS provider",
    )
    parser.add_argument(
        "--spec",
        required=True,
        type=Path,
        help="Path to the zone spec JSON file",
    )
    parser.add_argument(
        "--status",
        type=Path,
        default=None,
        help="Path to the zone status JSON file; read if present and rewritten",
    )
    parser.add_argument(
        "--config", "-c",
        type=str,
        default="{}",
        help='JSON config string (e.g. \'{"region_name":"us-east-1"}\')',
    )
    parser.add_argument(
        "operation",
        choices=OPERATIONS,
        help="Operation to perform",
    )
    return parser


def _load_status(path: Path | None) -> ZoneStatus:
    if path is None or not path.exists():
        return ZoneStatus()
    return ZoneStatus.model_validate_json(path.read_text())


def _run(operation: str, actuator: Any) -> Any:
    from dnszone.reconcile import reconcile

    if operation == "reconcile":
        return reconcile(actuator).model_dump()
    if operation == "delete":
        return reconcile(actuator, deleting=True).model_dump()

    try:
        actuator.refresh()
        if operation == "refresh":
            result = {"exists": actuator.exists()}
        else:
            if not actuator.exists():
                raise DNSZoneError(f"no hosted zone found for {actuator.spec.zone}")
            result = actuator.get_name_servers()
    except Exception as err:
        actuator.set_conditions_for_error(err)
        raise
    actuator.set_conditions_for_error(None)
    return result


def main(argv: list[str] | None = None) -> None:
    """CLI entry point.

    Loads the spec (and status, if given), builds an actuator via the
    factory and runs the requested operation. Results are printed as JSON.
    The status file is written back even when the operation fails, since
    health conditions are updated for the failure.

    Args:
        argv: Optional argument list (defaults to ``sys.argv``).
    """
    parser = _build_parser()
    ns = parser.parse_args(argv)

    try:
        config: dict[str, Any] = json.loads(ns.config)
    except json.JSONDecodeError as e:
        print(f"Invalid --config JSON: {e}", file=sys.stderr)
        sys.exit(1)

    try:
        spec = ZoneSpec.model_validate_json(ns.spec.read_text())
        status = _load_status(ns.status)
    except (OSError, ValidationError) as e:
        print(f"Invalid spec or status: {e}", file=sys.stderr)
        sys.exit(1)

    from dnszone.factory import actuator_factory

    try:
        actuator = actuator_factory(ns.provider, spec, status, config)
    except (ValueError, ValidationError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    try:
        result = _run(ns.operation, actuator)
    except DNSZoneError as e:
        print(f"Operation failed: {e}", file=sys.stderr)
        result = None
    finally:
        if ns.status is not None:
            ns.status.write_text(status.model_dump_json(indent=2))

    if result is None:
        sys.exit(1)
    print(json.dumps({"result": result, "status": status.model_dump(mode="json")}, indent=2, default=str))


if __name__ == "__main__":
    main()
