"""Custom exceptions for PiVPN management."""

from typing import List, Optional


class PiVPNError(Exception):
    """Base exception for PiVPN-related errors."""
    pass


class ConfPathNotSetError(PiVPNError):
    """Raised when an operation needs the client conf directory and none is set"""

    def __init__(self, message: str = "Client conf path is not set"):
        super().__init__(message)


class InvalidUserNameError(PiVPNError, ValueError):
    """Raised when a user name cannot be passed to pivpn or used as a file name"""
    pass


class PiVPNCommandError(PiVPNError):
    """Raised when an external command cannot be spawned or exits non-zero"""

    def __init__(
            self,
            message: str,
            cmd: Optional[List[str]] = None,
            returncode: Optional[int] = None,
            stdout: str = "",
            stderr: str = "",
    ):
        super().__init__(message)
        self.cmd = cmd or []
        self.returncode = returncode
        self.stdout = stdout
        self.stderr = stderr


class PiVPNTimeoutError(PiVPNCommandError):
    """Raised when an external command does not finish in time"""
    pass


class PiVPNParseError(PiVPNError):
    """Raised when pivpn output does not have the expected layout"""
    pass
