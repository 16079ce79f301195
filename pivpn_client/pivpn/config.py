"""Settings for the PiVPN client, read from an INI file."""

import configparser
from dataclasses import dataclass, field
from typing import Optional

from .models import OutputMarkers

DEFAULT_CONFIG_FILE = "config/pivpn_client.conf"


@dataclass(frozen=True)
class PiVPNSettings:
    """Everything needed to build a PiVPNClient"""
    conf_path: Optional[str] = None
    pivpn_bin: str = "pivpn"
    qrencode_bin: str = "qrencode"
    use_sudo: bool = False
    timeout: Optional[float] = 60.0
    header_lines: int = 2
    markers: OutputMarkers = field(default_factory=OutputMarkers)
    log_level: str = "INFO"


def _load_config(config_file: str) -> configparser.ConfigParser:
    config = configparser.ConfigParser()
    config.read(config_file)
    return config


def load_settings(config_file: str = DEFAULT_CONFIG_FILE) -> PiVPNSettings:
    """
    Build settings from an INI file.

    A missing file or missing keys fall back to defaults. A `timeout` of 0
    disables the timeout.

    Args:
        config_file: Path to the INI file

    Returns:
        PiVPNSettings
    """
    config = _load_config(config_file)
    defaults = PiVPNSettings()
    default_markers = OutputMarkers()

    pivpn = config["pivpn"] if config.has_section("pivpn") else {}
    log_section = config["logging"] if config.has_section("logging") else {}

    try:
        timeout = float(pivpn.get("timeout", defaults.timeout))
        header_lines = int(pivpn.get("header_lines", defaults.header_lines))
        use_sudo = (
            config.getboolean("pivpn", "use_sudo")
            if config.has_option("pivpn", "use_sudo") else defaults.use_sudo
        )
    except ValueError as e:
        raise ValueError(f"Invalid value in {config_file}: {e}") from e

    markers = OutputMarkers(
        add_success=pivpn.get("add_success_marker", default_markers.add_success),
        remove_missing=pivpn.get("remove_missing_marker", default_markers.remove_missing),
        update_disabled=pivpn.get("update_disabled_marker", default_markers.update_disabled),
    )

    return PiVPNSettings(
        conf_path=pivpn.get("conf_path") or None,
        pivpn_bin=pivpn.get("pivpn_bin", defaults.pivpn_bin),
        qrencode_bin=pivpn.get("qrencode_bin", defaults.qrencode_bin),
        use_sudo=use_sudo,
        timeout=timeout if timeout > 0 else None,
        header_lines=header_lines,
        markers=markers,
        log_level=log_section.get("level", defaults.log_level),
    )
