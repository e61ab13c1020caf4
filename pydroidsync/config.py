"""User configuration for pydroidsync.

Settings are read from
``~/.config/pydroidsync/config`` (``KEY=value`` lines). The CLI options
read the ``PYDROIDSYNC_ADB_PATH`` and ``ANDROID_SERIAL`` environment variables
and fall back to these values.
"""

import logging
from pathlib import Path
from typing import Optional

from .exceptions import DroidSyncConfigError

logger = logging.getLogger(__name__)

ADB_PATH_KEY = "PYDROIDSYNC_ADB_PATH"
DEVICE_SERIAL_KEY = "PYDROIDSYNC_DEVICE_SERIAL"
DEFAULT_ADB_PATH = "adb"


class Config:
    """Configuration manager for pydroidsync."""

    def __init__(self, config_dir: Optional[Path] = None):
        """Initialize configuration.

        Args:
            config_dir: Directory holding the config file. Defaults to
                ~/.config/pydroidsync/
        """
        if config_dir is None:
            config_dir = Path.home() / ".config" / "pydroidsync"
        self.config_dir = config_dir
        self.config_file = config_dir / "config"
        self._values: dict[str, str] = {}
        self.reload()

    def reload(self) -> None:
        """Re-read the config file."""
        self._values = self._read_config_file()

    def _read_config_file(self) -> dict[str, str]:
        if not self.config_file.exists():
            return {}

        values: dict[str, str] = {}
        try:
            with open(self.config_file, encoding="utf-8") as f:
                for line in f:
                    line = line.strip()
                    if not line or line.startswith("#") or "=" not in line:
                        continue
                    key, value = line.split("=", 1)
                    values[key.strip()] = value.strip().strip("\"'")
        except OSError as e:
            logger.warning(f"Failed to read config file {self.config_file}: {e}")
        return values

    @property
    def adb_path(self) -> str:
        """Path to the adb executable."""
        return self._values.get(ADB_PATH_KEY) or DEFAULT_ADB_PATH

    @property
    def device_serial(self) -> Optional[str]:
        """Serial number of the default device, if any."""
        return self._values.get(DEVICE_SERIAL_KEY)

    def is_configured(self) -> bool:
        """Check whether a config file has been written."""
        return self.config_file.exists()

    def get_config_path(self) -> Path:
        """Get the path of the config file."""
        return self.config_file

    def save(
        self, adb_path: Optional[str] = None, device_serial: Optional[str] = None
    ) -> None:
        """Save settings to the config file.

        Args:
            adb_path: Path to the adb executable
            device_serial: Serial number of the default device

        Raises:
            DroidSyncConfigError: If the file cannot be written
        """
        values = dict(self._values)
        if adb_path:
            values[ADB_PATH_KEY] = adb_path
        if device_serial:
            values[DEVICE_SERIAL_KEY] = device_serial

        try:
            self.config_dir.mkdir(parents=True, exist_ok=True)
            with open(self.config_file, "w", encoding="utf-8") as f:
                for key, value in values.items():
                    f.write(f"{key}={value}\n")
            self.config_file.chmod(0o600)
        except OSError as e:
            raise DroidSyncConfigError(f"Cannot write {self.config_file}: {e}") from e

        self._values = values


config = Config()
