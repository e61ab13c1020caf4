"""Device command channel backed by the adb executable."""

from __future__ import annotations

import logging
import re
import shlex
import subprocess
from pathlib import Path
from typing import Protocol

from .config import config
from .exceptions import CommandChannelError

logger = logging.getLogger(__name__)

RE_TOTAL = re.compile(r"^total \d+$")


class DeviceChannel(Protocol):
    """Operations the sync engine needs from a remote device."""

    def list(self, remote_path: str) -> str:
        """Return the long-format listing of a remote directory."""
        ...

    def pull(self, remote_path: str, local_path: Path) -> str:
        """Copy a remote file to a local path and return captured output."""
        ...


class AdbChannel:
    """Runs listing and pull commands through ``adb``."""

    def __init__(
        self,
        adb_path: str | None = None,
        serial: str | None = None,
        encoding: str = "utf-8",
    ):
        """Initialize adb channel.

        Args:
            adb_path: Path to the adb executable (uses config if not provided)
            serial: Device serial number (uses config if not provided)
            encoding: Encoding of adb output
        """
        self.adb_path = adb_path or config.adb_path
        self.serial = serial or config.device_serial
        self.encoding = encoding

    def _base_command(self) -> list[str]:
        command = [self.adb_path]
        if self.serial:
            command += ["-s", self.serial]
        return command

    def _run(self, args: list[str]) -> subprocess.CompletedProcess:
        command = self._base_command() + args
        logger.debug("Running: %s", shlex.join(command))
        try:
            return subprocess.run(command, capture_output=True, check=False)
        except OSError as e:
            raise CommandChannelError(
                f"Cannot run {self.adb_path}", e.strerror or str(e)
            ) from e

    def _decode(self, data: bytes) -> str:
        return data.decode(self.encoding, errors="replace").strip()

    def list(self, remote_path: str) -> str:
        """List a remote directory with ``adb shell ls -la``.

        Args:
            remote_path: Remote directory

        Returns:
            Listing text, without the ``total N`` summary line

        Raises:
            CommandChannelError: If adb exits with a non-zero status
        """
        result = self._run(["shell", "ls", "-la", shlex.quote(remote_path)])
        stdout = result.stdout.decode(self.encoding, errors="replace")
        if result.returncode != 0:
            diagnostic = self._decode(result.stderr) or stdout.strip()
            raise CommandChannelError(
                f"Listing {remote_path} failed (exit status {result.returncode})",
                diagnostic,
            )

        lines = [
            line
            for line in stdout.replace("\r\n", "\n").split("\n")
            if not RE_TOTAL.match(line.strip())
        ]
        return "\n".join(lines)

    def pull(self, remote_path: str, local_path: Path) -> str:
        """Pull a remote file with ``adb pull``.

        Args:
            remote_path: Remote file
            local_path: Local destination file

        Returns:
            Captured stdout and stderr joined with ": "

        Raises:
            CommandChannelError: If adb exits with a non-zero status
        """
        result = self._run(["pull", remote_path, str(local_path)])
        stdout = self._decode(result.stdout)
        stderr = self._decode(result.stderr)
        if result.returncode != 0:
            raise CommandChannelError(
                f"Pulling {remote_path} failed (exit status {result.returncode})",
                stderr or stdout,
            )
        return ": ".join(part for part in (stdout, stderr) if part)
