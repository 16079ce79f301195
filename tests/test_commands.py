from pathlib import Path

import pytest

from pivpn_client.pivpn.command_factory import PiVPNCommandFactory
from pivpn_client.pivpn.commands import PIVPN, QRENCODE, Command, ValidationError


def test_pivpn_flags_use_single_dash():
    assert PIVPN.with_flag("up").build() == ["pivpn", "-up"]
    assert PIVPN.with_flags("a", "n").with_arg("alice").build() == ["pivpn", "-a", "-n", "alice"]


def test_unknown_flag_rejected():
    with pytest.raises(ValidationError, match="Invalid option"):
        PIVPN.with_flag("x")


def test_option_value_validation():
    with pytest.raises(ValidationError, match="takes no value"):
        PIVPN.with_option("c", "1")
    with pytest.raises(ValidationError, match="requires a value"):
        QRENCODE.with_flag("o")


def test_commands_are_immutable():
    base = Command.from_str("pivpn")
    extended = base.with_arg("-l")

    assert base.build() == ["pivpn"]
    assert extended.build() == ["pivpn", "-l"]


def test_empty_command_rejected():
    with pytest.raises(ValidationError):
        Command.from_str("")


def test_long_options_default_to_double_dash():
    cmd = Command.from_str("tool").with_option("max_time", "10")

    assert cmd.build() == ["tool", "--max-time", "10"]


def test_factory_command_forms():
    factory = PiVPNCommandFactory()

    assert factory.add_user("alice") == ["pivpn", "-a", "-n", "alice"]
    assert factory.list_connections() == ["pivpn", "-c"]
    assert factory.list_users() == ["pivpn", "-l"]
    assert factory.remove_user("alice") == ["pivpn", "-r", "-y", "alice"]
    assert factory.update() == ["pivpn", "-up"]
    assert factory.backup() == ["pivpn", "-bk"]
    assert factory.qrencode_png(Path("/etc/wg/alice.png")) == ["qrencode", "-o", "/etc/wg/alice.png"]


def test_factory_custom_binaries_and_sudo():
    factory = PiVPNCommandFactory(pivpn_bin="/usr/local/bin/pivpn", qrencode_bin="/opt/qrencode", use_sudo=True)

    assert factory.list_users() == ["sudo", "/usr/local/bin/pivpn", "-l"]
    # qrencode only writes into the conf dir, it never needs root
    assert factory.qrencode_png(Path("a.png")) == ["/opt/qrencode", "-o", "a.png"]
