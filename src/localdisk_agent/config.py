"""Configuration management for the local disk agent."""

import json
import os
import sys
from dataclasses import dataclass, asdict, field
from pathlib import Path
from typing import List

from .classifier import ClassifierPolicy

MOUNT_SOURCES = ("file", "psutil")


@dataclass
class ScanConfig:
    """Scan configuration."""

    mount_source: str = "file"  # "file" or "psutil"
    mounts_path: str = "/proc/mounts"
    local_prefixes: List[str] = field(default_factory=lambda: ["/dev/", "/dev2/"])
    remote_fstypes: List[str] = field(default_factory=lambda: ["autofs", "gfs", "none"])
    remote_fstype_prefixes: List[str] = field(default_factory=lambda: ["nfs"])
    scale_divisor: float = 1000.0

    def __post_init__(self):
        if self.mount_source not in MOUNT_SOURCES:
            raise ValueError(f"Unknown mount source: {self.mount_source}")
        if self.mount_source == "psutil" and sys.platform == "win32":
            # Drive letters ("C:\") look like host:path remote devices
            raise ValueError("The psutil mount source is only supported on POSIX platforms")
        if self.scale_divisor <= 0:
            raise ValueError(f"scale_divisor must be positive: {self.scale_divisor}")

    def policy(self) -> ClassifierPolicy:
        """Build the classifier policy described by this configuration."""
        return ClassifierPolicy(
            local_prefixes=tuple(self.local_prefixes),
            remote_fstypes=tuple(self.remote_fstypes),
            remote_fstype_prefixes=tuple(self.remote_fstype_prefixes),
        )


class ConfigManager:
    """Manages scan configuration."""

    def __init__(self, config_path: str = "/etc/localdisk/config.json"):
        self.config_path = Path(config_path)

    def load(self) -> ScanConfig:
        """Load configuration from file."""
        if not self.config_path.exists():
            raise FileNotFoundError(f"Config file not found: {self.config_path}")

        with open(self.config_path, "r") as f:
            data = json.load(f)

        if not isinstance(data, dict):
            raise ValueError(f"Config file must contain a JSON object: {self.config_path}")

        return ScanConfig(**data)

    def load_or_default(self) -> ScanConfig:
        """Load configuration, falling back to defaults if the file is absent."""
        if not self.exists():
            return ScanConfig()
        return self.load()

    def save(self, config: ScanConfig) -> None:
        """Save configuration to file."""
        # Ensure directory exists
        self.config_path.parent.mkdir(parents=True, exist_ok=True)

        with open(self.config_path, "w") as f:
            json.dump(asdict(config), f, indent=2)

        os.chmod(self.config_path, 0o600)

    def exists(self) -> bool:
        """Check if config file exists."""
        return self.config_path.exists()
