"""Command templates and builders for PiVPN management."""

from typing import List, Optional, Dict
from dataclasses import dataclass
from pathlib import Path


class CommandError(Exception):
    """Base exception for command-related errors."""
    pass


class ValidationError(CommandError):
    """Raised when command validation fails."""
    pass


@dataclass(frozen=True)
class Command:
    """Immutable command builder with validation."""
    base_cmd: List[str]
    use_sudo: bool = False
    _valid_options: Optional[Dict[str, Optional[type]]] = None
    # pivpn spells multi-letter options with one dash (-up, -bk)
    long_prefix: str = "--"

    def _copy(self, base_cmd: List[str], use_sudo: Optional[bool] = None) -> 'Command':
        return Command(
            base_cmd,
            self.use_sudo if use_sudo is None else use_sudo,
            self._valid_options,
            self.long_prefix,
        )

    def _render_option(self, opt: str) -> str:
        opt = opt.lstrip('-')
        if len(opt) == 1:
            return f"-{opt}"
        return self.long_prefix + opt.replace('_', '-')

    def _validate_option(self, opt: str, value: Optional[str]) -> None:
        """Validate option and its value if validation rules exist."""
        if self._valid_options is None:
            return

        opt_name = opt.lstrip('-').replace('-', '_')

        if opt_name not in self._valid_options:
            valid_opts = ", ".join(self._render_option(o) for o in self._valid_options)
            raise ValidationError(
                f"Invalid option '{opt}' for command {self.base_cmd[0]}. "
                f"Valid options are: {valid_opts}"
            )

        expected_type = self._valid_options[opt_name]
        if expected_type is None:
            if value is not None:
                raise ValidationError(f"Option '{opt}' is a flag and takes no value")
            return

        if value is None:
            raise ValidationError(f"Option '{opt}' requires a value")
        try:
            expected_type(value)
        except (TypeError, ValueError):
            raise ValidationError(
                f"Invalid value '{value}' for option '{opt}'. Expected {expected_type.__name__}"
            )

    def _validate_executable(self) -> None:
        """Validate that base command exists."""
        if not self.base_cmd or not self.base_cmd[0]:
            raise ValidationError("Command cannot be empty")

    @classmethod
    def from_str(
            cls,
            cmd: str,
            use_sudo: bool = False,
            valid_options: Optional[Dict[str, Optional[type]]] = None,
            long_prefix: str = "--",
    ) -> 'Command':
        """Create command from string with optional validation rules."""
        command = cls(cmd.split(), use_sudo, valid_options, long_prefix)
        command._validate_executable()
        return command

    def with_executable(self, executable: str) -> 'Command':
        """Swap the program while keeping arguments and rules."""
        return self._copy([executable] + self.base_cmd[1:])

    def with_arg(self, arg: str) -> 'Command':
        """Add single argument."""
        return self._copy(self.base_cmd + [str(arg)])

    def with_args(self, *args: str) -> 'Command':
        """Add multiple arguments."""
        return self._copy(self.base_cmd + [str(a) for a in args])

    def with_flag(self, flag: str) -> 'Command':
        """Add a value-less option."""
        self._validate_option(flag, None)
        return self._copy(self.base_cmd + [self._render_option(flag)])

    def with_flags(self, *flags: str) -> 'Command':
        """Add several value-less options in order."""
        cmd = self
        for flag in flags:
            cmd = cmd.with_flag(flag)
        return cmd

    def with_option(self, opt: str, value: str) -> 'Command':
        """Add option with a value."""
        value = str(value)
        self._validate_option(opt, value)
        return self._copy(self.base_cmd + [self._render_option(opt), value])

    def as_sudo(self, enabled: bool = True) -> 'Command':
        """Mark command to be executed with sudo."""
        return self._copy(self.base_cmd, use_sudo=enabled)

    def build(self) -> List[str]:
        """Get final command list."""
        self._validate_executable()
        return ["sudo"] + self.base_cmd if self.use_sudo else list(self.base_cmd)


PIVPN_OPTIONS = {
    'a': None,    # add
    'n': None,    # client name follows, no prompt
    'c': None,    # connected clients
    'l': None,    # list clients
    'r': None,    # remove
    'y': None,    # assume yes
    'up': None,   # update scripts
    'bk': None,   # backup
}

QRENCODE_OPTIONS = {
    'o': Path,
}


PIVPN = Command.from_str("pivpn", valid_options=PIVPN_OPTIONS, long_prefix="-")
QRENCODE = Command.from_str("qrencode", valid_options=QRENCODE_OPTIONS)
