"""PiVPN client wrapper."""

import os
from pathlib import Path
from typing import BinaryIO, List, Optional, Union

from .command_factory import PiVPNCommandFactory
from .config import PiVPNSettings
from .exceptions import ConfPathNotSetError, InvalidUserNameError
from .models import BackupResult, ConnectionRecord, OutputMarkers, UserRecord
from .parsing import HEADER_LINES, parse_backup, parse_connections, parse_users
from .utils import run_command
from ..logging_utility import logger


class PiVPNClient:
    """
    Wraps the pivpn command line tool.

    Every method that talks to pivpn or qrencode is a coroutine and waits
    for the child process to exit. Methods touching client profiles or QR
    images need a conf path, see `set_conf_path`.
    """

    def __init__(
            self,
            conf_path: Optional[Union[str, Path]] = None,
            commands: Optional[PiVPNCommandFactory] = None,
            markers: Optional[OutputMarkers] = None,
            timeout: Optional[float] = 60.0,
            header_lines: int = HEADER_LINES,
    ):
        self._conf_path: Optional[Path] = None
        self.commands = commands or PiVPNCommandFactory()
        self.markers = markers or OutputMarkers()
        self.timeout = timeout
        self.header_lines = header_lines

        if conf_path:
            if not self.set_conf_path(conf_path):
                logger.warning(f"Client conf path does not exist: {conf_path}")

    @classmethod
    def from_settings(cls, settings: PiVPNSettings) -> 'PiVPNClient':
        commands = PiVPNCommandFactory(
            pivpn_bin=settings.pivpn_bin,
            qrencode_bin=settings.qrencode_bin,
            use_sudo=settings.use_sudo,
        )
        return cls(
            conf_path=settings.conf_path,
            commands=commands,
            markers=settings.markers,
            timeout=settings.timeout,
            header_lines=settings.header_lines,
        )

    @property
    def conf_path(self) -> Optional[Path]:
        return self._conf_path

    @property
    def is_conf_path_set(self) -> bool:
        return self._conf_path is not None

    def get_conf_path(self) -> Optional[Path]:
        """Return the client conf directory, or None if not set."""
        return self._conf_path

    def set_conf_path(self, conf_path: Union[str, Path]) -> bool:
        """
        Set the directory holding client conf files.

        The path is only accepted if it exists. A rejected path leaves the
        previous value in place.

        Returns:
            bool: True if the path was accepted
        """
        path = Path(conf_path)
        if not path.exists():
            return False
        self._conf_path = path
        logger.info(f"Client conf path set to {path}")
        return True

    def _require_conf_path(self) -> Path:
        if self._conf_path is None:
            logger.warning("Client conf path is not set")
            raise ConfPathNotSetError()
        return self._conf_path

    @staticmethod
    def _validate_user_name(user_name: str) -> str:
        if not user_name or not user_name.strip():
            raise InvalidUserNameError("User name cannot be empty")
        if user_name.startswith("-"):
            raise InvalidUserNameError(f"User name cannot start with '-': {user_name!r}")
        if user_name in (".", "..") or "/" in user_name or os.sep in user_name:
            raise InvalidUserNameError(f"User name cannot be a path: {user_name!r}")
        return user_name

    async def _run(self, cmd: List[str], input_data: Optional[bytes] = None):
        return await run_command(cmd, timeout=self.timeout, input_data=input_data)

    async def add_user(self, user_name: str) -> bool:
        """
        Create a client profile.

        Returns:
            bool: True if pivpn reported the keys were generated
        """
        self._validate_user_name(user_name)
        stdout, _ = await self._run(self.commands.add_user(user_name))
        added = self.markers.add_success in stdout
        if added:
            logger.info(f"Added user {user_name}")
        else:
            logger.warning(f"pivpn did not confirm adding {user_name}:\n{stdout}")
        return added

    async def list_connections(self) -> List[ConnectionRecord]:
        """Connection details for every client pivpn reports."""
        stdout, _ = await self._run(self.commands.list_connections())
        return parse_connections(stdout, self.header_lines)

    async def get_connection(self, user_name: str) -> Optional[ConnectionRecord]:
        """Connection details for one client, or None."""
        for record in await self.list_connections():
            if record.user_name == user_name:
                return record
        return None

    async def list_users(self) -> List[UserRecord]:
        """All client profiles. Anything written to stderr yields an empty list."""
        stdout, stderr = await self._run(self.commands.list_users())
        if stderr:
            logger.warning(f"pivpn -l reported an error:\n{stderr}")
            return []
        return parse_users(stdout, self.header_lines)

    async def get_user(self, user_name: str) -> Optional[UserRecord]:
        for record in await self.list_users():
            if record.user_name == user_name:
                return record
        return None

    async def get_user_config_path(self, user_name: str) -> Optional[Path]:
        """Path of `<conf_path>/<user_name>.conf`, or None if it does not exist."""
        conf_dir = self._require_conf_path()
        self._validate_user_name(user_name)
        conf_file = conf_dir / f"{user_name}.conf"
        if conf_file.is_file():
            return conf_file
        return None

    async def generate_user_qr_code(self, user_name: str) -> Optional[Path]:
        """
        Render a client profile as a PNG QR code next to the profile.

        Returns:
            Path of the PNG, or None if the user has no conf file
        """
        conf_dir = self._require_conf_path()
        conf_file = await self.get_user_config_path(user_name)
        if conf_file is None:
            return None

        png_file = conf_dir / f"{user_name}.png"
        await self._run(self.commands.qrencode_png(png_file), input_data=conf_file.read_bytes())
        logger.info(f"Generated QR code for {user_name} at {png_file}")
        return png_file

    async def get_user_qr_code_path(self, user_name: str) -> Optional[Path]:
        """Existing QR code for a client, generated on first request."""
        conf_dir = self._require_conf_path()
        self._validate_user_name(user_name)
        png_file = conf_dir / f"{user_name}.png"
        if png_file.exists():
            return png_file
        return await self.generate_user_qr_code(user_name)

    async def get_user_qr_code_stream(self, user_name: str) -> Optional[BinaryIO]:
        """
        Open the client's QR code PNG for reading.

        The caller owns the returned file object and must close it.
        """
        self._require_conf_path()
        png_file = await self.get_user_qr_code_path(user_name)
        if png_file is None:
            return None
        return open(png_file, "rb")

    async def remove_user(self, user_name: str) -> bool:
        """
        Remove a client.

        Returns:
            bool: False if pivpn says the client does not exist
        """
        self._validate_user_name(user_name)
        stdout, _ = await self._run(self.commands.remove_user(user_name))
        if self.markers.remove_missing in stdout:
            logger.warning(f"Cannot remove {user_name}, user does not exist")
            return False
        logger.info(f"Removed user {user_name}")
        return True

    async def update_pivpn(self) -> bool:
        """Update the PiVPN scripts. False if updates are disabled."""
        stdout, _ = await self._run(self.commands.update())
        if self.markers.update_disabled in stdout:
            logger.warning("PiVPN script updates are disabled")
            return False
        return True

    async def backup(self) -> BackupResult:
        """Back up server config and client profiles."""
        stdout, _ = await self._run(self.commands.backup())
        result = parse_backup(stdout)
        logger.info(f"Backup written to {result.backup_path}")
        return result
