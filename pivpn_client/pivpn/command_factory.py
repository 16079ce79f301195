"""Factory for creating PiVPN-related commands."""

from pathlib import Path
from typing import List

from .commands import PIVPN, QRENCODE


class PiVPNCommandFactory:
    """Factory for creating PiVPN management commands."""

    def __init__(self, pivpn_bin: str = "pivpn", qrencode_bin: str = "qrencode", use_sudo: bool = False):
        self.pivpn = PIVPN.with_executable(pivpn_bin).as_sudo(use_sudo)
        self.qrencode = QRENCODE.with_executable(qrencode_bin)

    def add_user(self, user_name: str) -> List[str]:
        """Create command adding a client without prompting."""
        return self.pivpn.with_flags("a", "n").with_arg(user_name).build()

    def list_connections(self) -> List[str]:
        """Create connected clients command."""
        return self.pivpn.with_flag("c").build()

    def list_users(self) -> List[str]:
        """Create client list command."""
        return self.pivpn.with_flag("l").build()

    def remove_user(self, user_name: str) -> List[str]:
        """Create command removing a client without confirmation."""
        return self.pivpn.with_flags("r", "y").with_arg(user_name).build()

    def update(self) -> List[str]:
        """Create scripts update command."""
        return self.pivpn.with_flag("up").build()

    def backup(self) -> List[str]:
        """Create backup command."""
        return self.pivpn.with_flag("bk").build()

    def qrencode_png(self, png_path: Path) -> List[str]:
        """Create command rendering stdin into a PNG QR code."""
        return self.qrencode.with_option("o", str(png_path)).build()
