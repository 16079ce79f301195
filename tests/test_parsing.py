import pytest

from pivpn_client.pivpn.exceptions import PiVPNParseError
from pivpn_client.pivpn.models import BackupResult, ConnectionRecord, UserRecord
from pivpn_client.pivpn.parsing import parse_backup, parse_connections, parse_table, parse_users


def test_parse_connections_single_row():
    output = "header1\nheader2\nAlice   10.0.0.2   10.8.0.2   100   200   2024-01-01\n"

    assert parse_connections(output) == [
        ConnectionRecord(
            user_name="Alice",
            remote_ip="10.0.0.2",
            virtual_ip="10.8.0.2",
            bytes_received="100",
            bytes_sent="200",
            last_seen="2024-01-01",
        )
    ]


def test_parse_connections_keeps_single_spaces_inside_fields():
    output = (
        "::: Connected Clients List :::\n"
        "Name  Remote IP  Virtual IP  Bytes Received  Bytes Sent  Last Seen\n"
        "bob  1.2.3.4:51820  10.6.0.3  1.2KiB  3.4KiB  Jan 01 2024, 10:00\n"
        "carol  (none)  10.6.0.4  0B  0B  (not yet)\n"
        "::: Disabled clients :::"
    )

    records = parse_connections(output)

    assert [r.user_name for r in records] == ["bob", "carol"]
    assert records[0].bytes_received == "1.2KiB"
    assert records[0].last_seen == "Jan 01 2024, 10:00"
    assert records[1].remote_ip == "(none)"


def test_parse_connections_header_only():
    assert parse_connections("header1\nheader2\n") == []
    assert parse_connections("") == []


def test_parse_users():
    output = (
        "::: Clients Summary :::\n"
        "Client  Public key  Creation date\n"
        "alice   aGVsbG8gd29ybGQ=   12 Jan 2024, 10:15, UTC\n"
        "bob     Ym9i   13 Jan 2024, 11:00, UTC\n"
        "::: Disabled clients :::"
    )

    assert parse_users(output) == [
        UserRecord("alice", "aGVsbG8gd29ybGQ=", "12 Jan 2024, 10:15, UTC"),
        UserRecord("bob", "Ym9i", "13 Jan 2024, 11:00, UTC"),
    ]


def test_parse_table_skips_blank_lines_and_surrounding_whitespace():
    output = "h1\nh2\n  a  b  \n\nc  d\nfooter"

    assert parse_table(output, field_count=2) == [["a", "b"], ["c", "d"]]


def test_parse_table_custom_header_lines():
    output = "only header\na  b\n"

    assert parse_table(output, field_count=2, header_lines=1) == [["a", "b"]]


def test_parse_table_wrong_field_count_fails():
    output = "h1\nh2\nAlice   10.0.0.2   10.8.0.2\n"

    with pytest.raises(PiVPNParseError, match="Expected 6 fields, got 3"):
        parse_connections(output)


def test_parse_backup():
    output = "/tmp/backup.tar.gz\nsome notice\nhttps://example.com/restore\n"

    assert parse_backup(output) == BackupResult(
        backup_path="/tmp/backup.tar.gz",
        instructions_url="https://example.com/restore",
    )


def test_parse_backup_too_short():
    with pytest.raises(PiVPNParseError):
        parse_backup("/tmp/backup.tar.gz\n")


def test_records_are_read_only():
    record = UserRecord("alice", "key", "today")

    with pytest.raises(AttributeError):
        record.user_name = "mallory"
    assert record.to_dict() == {"user_name": "alice", "public_key": "key", "creation_date": "today"}
