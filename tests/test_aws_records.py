"""Tests for record set sweeping."""

from unittest.mock import MagicMock
import pytest

from dnszone.aws.client import Route53Client
from dnszone.aws.records import delete_record_sets, is_protected
from dnszone.base.exceptions import ProviderError
from dnszone.base.logger import ZoneLogger


def _rs(name: str, rtype: str, value: str = "1.2.3.4") -> dict:
    return {"Name": name, "Type": rtype, "TTL": 300, "ResourceRecords": [{"Value": value}]}


APEX_NS = _rs("example.com.", "NS", "ns-1.awsdns.com.")
APEX_SOA = _rs("example.com.", "SOA", "ns-1.awsdns.com. admin. 1 7200 900 1209600 86400")


@pytest.fixture
def client():
    return MagicMock(spec=Route53Client)


@pytest.fixture
def logger():
    return ZoneLogger("test_records")


class TestIsProtected:
    def test_apex_ns_and_soa(self):
        assert is_protected(APEX_NS, "example.com")
        assert is_protected(APEX_SOA, "example.com.")

    def test_delegated_ns_not_protected(self):
        assert not is_protected(_rs("sub.example.com.", "NS"), "example.com")

    def test_apex_a_not_protected(self):
        assert not is_protected(_rs("example.com.", "A"), "example.com")


class TestDeleteRecordSets:
    def test_single_page(self, client, logger):
        www = _rs("www.example.com.", "A")
        client.list_resource_record_sets.return_value = {
            "ResourceRecordSets": [APEX_NS, APEX_SOA, www],
            "IsTruncated": False,
        }
        assert delete_record_sets(client, "Z1", "example.com", logger) == 1
        client.list_resource_record_sets.assert_called_once_with("Z1", max_items=100)
        client.change_resource_record_sets.assert_called_once_with(
            "Z1", [{"Action": "DELETE", "ResourceRecordSet": www}]
        )

    def test_only_protected_no_change(self, client, logger):
        client.list_resource_record_sets.return_value = {
            "ResourceRecordSets": [APEX_NS, APEX_SOA],
            "IsTruncated": False,
        }
        assert delete_record_sets(client, "Z1", "example.com", logger) == 0
        client.change_resource_record_sets.assert_not_called()

    def test_follows_cursor_across_pages(self, client, logger):
        a = _rs("a.example.com.", "A")
        b = _rs("b.example.com.", "TXT", '"v"')
        client.list_resource_record_sets.side_effect = [
            {
                "ResourceRecordSets": [APEX_NS, a],
                "IsTruncated": True,
                "NextRecordName": "b.example.com.",
                "NextRecordType": "TXT",
                "NextRecordIdentifier": "set-1",
            },
            {"ResourceRecordSets": [APEX_SOA, b], "IsTruncated": False},
        ]
        assert delete_record_sets(client, "Z1", "example.com", logger, page_size=2) == 2
        second = client.list_resource_record_sets.call_args_list[1]
        assert second[1] == {
            "max_items": 2,
            "start_name": "b.example.com.",
            "start_type": "TXT",
            "start_identifier": "set-1",
        }
        batches = [c[0][1] for c in client.change_resource_record_sets.call_args_list]
        assert batches == [
            [{"Action": "DELETE", "ResourceRecordSet": a}],
            [{"Action": "DELETE", "ResourceRecordSet": b}],
        ]
        for batch in batches:
            for change in batch:
                assert not is_protected(change["ResourceRecordSet"], "example.com")

    def test_whole_page_in_one_batch(self, client, logger):
        records = [_rs(f"h{i}.example.com.", "A") for i in range(150)]
        client.list_resource_record_sets.return_value = {
            "ResourceRecordSets": records,
            "IsTruncated": False,
        }
        delete_record_sets(client, "Z1", "example.com", logger, page_size=150)
        client.change_resource_record_sets.assert_called_once()
        assert len(client.change_resource_record_sets.call_args[0][1]) == 150

    def test_change_error_stops_sweep(self, client, logger):
        client.list_resource_record_sets.return_value = {
            "ResourceRecordSets": [_rs("a.example.com.", "A")],
            "IsTruncated": True,
            "NextRecordName": "b.example.com.",
            "NextRecordType": "A",
        }
        client.change_resource_record_sets.side_effect = ProviderError("boom", code="InvalidChangeBatch")
        with pytest.raises(ProviderError):
            delete_record_sets(client, "Z1", "example.com", logger)
        client.list_resource_record_sets.assert_called_once()
