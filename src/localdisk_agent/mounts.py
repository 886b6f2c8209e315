"""Mount table sources and line parsing."""

import io
import re
from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional, TextIO

import psutil

if TYPE_CHECKING:
    from .config import ScanConfig

PROC_MOUNTS = "/proc/mounts"

# The kernel escapes space, tab, newline and backslash as three-digit octal
_OCTAL_ESCAPE = re.compile(r"\\([0-7]{3})")


@dataclass(frozen=True)
class MountRecord:
    """One entry of the mount table."""

    device: str
    mount_point: str
    fstype: str
    options: str


def unescape_mount_field(field: str) -> str:
    """Decode kernel octal escapes (e.g. ``\\040`` for a space)."""
    return _OCTAL_ESCAPE.sub(lambda m: chr(int(m.group(1), 8)), field)


def escape_mount_field(field: str) -> str:
    """Inverse of :func:`unescape_mount_field` for whitespace and backslash."""
    return (
        field.replace("\\", "\\134")
        .replace(" ", "\\040")
        .replace("\t", "\\011")
        .replace("\n", "\\012")
    )


def parse_mount_line(line: str) -> Optional[MountRecord]:
    """
    Parse a mount table line into a MountRecord.

    Returns None for lines with fewer than four whitespace separated fields.
    Only the first token of the fourth field is kept as the options; the
    device string is left untouched.
    """
    fields = line.split(None, 3)
    if len(fields) < 4:
        return None

    device, mount_point, fstype, rest = fields
    options = rest.split(None, 1)[0]

    return MountRecord(
        device=device,
        mount_point=unescape_mount_field(mount_point),
        fstype=fstype,
        options=options,
    )


class FileMountTable:
    """Mount table read from a procfs style file."""

    def __init__(self, path: str = PROC_MOUNTS):
        self.path = path

    def open(self) -> TextIO:
        """Open the table for reading. Raises OSError if it is unavailable."""
        return open(self.path, "r", encoding="utf-8", errors="surrogateescape")

    def __repr__(self) -> str:
        return f"FileMountTable({self.path!r})"


class PsutilMountTable:
    """
    Mount table built from psutil, for platforms without /proc/mounts.

    Partitions are rendered as mount table lines so they go through the
    same parser and classifier as the procfs file.
    """

    def open(self) -> TextIO:
        try:
            partitions = psutil.disk_partitions(all=True)
        except (psutil.Error, RuntimeError) as e:
            raise OSError(f"Unable to list partitions: {e}") from e

        lines = []
        for partition in partitions:
            lines.append(
                " ".join((
                    escape_mount_field(partition.device or "none"),
                    escape_mount_field(partition.mountpoint),
                    partition.fstype or "none",
                    partition.opts or "rw",
                ))
                + " 0 0\n"
            )

        return io.StringIO("".join(lines))

    def __repr__(self) -> str:
        return "PsutilMountTable()"


def mount_table_from_config(config: "ScanConfig"):
    """Build the mount table source named by the configuration."""
    if config.mount_source == "file":
        return FileMountTable(config.mounts_path)
    if config.mount_source == "psutil":
        return PsutilMountTable()
    raise ValueError(f"Unknown mount source: {config.mount_source}")
