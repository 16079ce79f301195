"""Data models for PiVPN management."""

from dataclasses import dataclass, asdict
from typing import Dict


@dataclass(frozen=True)
class ConnectionRecord:
    """One row of `pivpn -c`"""
    user_name: str
    remote_ip: str
    virtual_ip: str
    bytes_received: str
    bytes_sent: str
    last_seen: str

    def to_dict(self) -> Dict[str, str]:
        return asdict(self)


@dataclass(frozen=True)
class UserRecord:
    """One row of `pivpn -l`"""
    user_name: str
    public_key: str
    creation_date: str

    def to_dict(self) -> Dict[str, str]:
        return asdict(self)


@dataclass(frozen=True)
class BackupResult:
    """Archive location and restore instructions reported by `pivpn -bk`"""
    backup_path: str
    instructions_url: str

    def to_dict(self) -> Dict[str, str]:
        return asdict(self)


@dataclass(frozen=True)
class OutputMarkers:
    """Phrases searched for in pivpn output to decide success"""
    add_success: str = "Client Keys generated"
    remove_missing: str = "does not exist"
    update_disabled: str = "PiVPN scripts is temporarily disabled"
