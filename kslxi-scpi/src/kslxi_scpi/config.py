"""Configuration for LXI device connections.

Device settings can be built directly, from a mapping, or loaded from a YAML
file with a top-level ``device`` section.

Example YAML configuration:
    device:
      host: "192.168.1.100"
      port: 5025
      timeout: 2.5
      write_termination: "\\n"
"""

from __future__ import annotations

from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Mapping

import yaml

from kslxi_core.errors import ConfigError

DEFAULT_PORT = 5025


@dataclass(frozen=True)
class LxiDeviceConfig:
    """Configuration for connecting to an LXI instrument over raw TCP.

    Attributes:
        host: Instrument host name or IP address.
        port: SCPI raw socket port (5025 on most LXI instruments).
        timeout: Socket timeout in seconds, or None to block indefinitely.
        write_termination: Terminator appended to every command sent.
    """

    host: str
    port: int = DEFAULT_PORT
    timeout: float | None = 5.0
    write_termination: str = "\n"

    def __post_init__(self) -> None:
        """Validate configuration."""
        if not self.host:
            raise ConfigError("host must be non-empty")
        if not 1 <= self.port <= 65535:
            raise ConfigError(f"port must be in 1..65535, got {self.port}")
        if self.timeout is not None and self.timeout <= 0:
            raise ConfigError("timeout must be positive or None")

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> LxiDeviceConfig:
        """Create config from a mapping of field names to values.

        Args:
            data: Mapping with at least a ``host`` key.

        Returns:
            LxiDeviceConfig instance.

        Raises:
            ConfigError: If keys are unknown, ``host`` is missing, or a value
                is invalid.
        """
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ConfigError(f"Unknown device config keys: {', '.join(unknown)}")
        if "host" not in data:
            raise ConfigError("Device config requires 'host'")
        try:
            port = int(data.get("port", DEFAULT_PORT))
            timeout = data.get("timeout", 5.0)
            timeout = None if timeout is None else float(timeout)
        except (TypeError, ValueError) as exc:
            raise ConfigError(f"Invalid device config value: {exc}") from exc
        return cls(
            host=str(data["host"]),
            port=port,
            timeout=timeout,
            write_termination=str(data.get("write_termination", "\n")),
        )


def load_device_config(path: str | Path) -> LxiDeviceConfig:
    """Load device configuration from a YAML file.

    Args:
        path: Path to a YAML file containing a ``device`` mapping.

    Returns:
        Parsed device configuration.

    Raises:
        FileNotFoundError: If the file doesn't exist.
        ConfigError: If the file is empty, malformed, or invalid.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Configuration file not found: {path}")

    with open(path, encoding="utf-8") as f:
        try:
            data = yaml.safe_load(f)
        except yaml.YAMLError as exc:
            raise ConfigError(f"Invalid YAML in {path}: {exc}") from exc

    if data is None:
        raise ConfigError(f"Configuration file is empty: {path}")
    if not isinstance(data, dict) or not isinstance(data.get("device"), dict):
        raise ConfigError(f"Configuration file must contain a 'device' mapping: {path}")

    return LxiDeviceConfig.from_dict(data["device"])
