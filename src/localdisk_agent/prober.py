"""Per-mount filesystem space queries."""

import logging
import os
from dataclasses import dataclass
from typing import Callable, NamedTuple, Optional

from .seen import SeenDevices

logger = logging.getLogger("localdisk-agent.prober")


class FsStats(NamedTuple):
    """Block counts reported by statvfs for one filesystem."""

    total_blocks: int
    available_blocks: int  # excludes blocks reserved for root
    block_size: int


StatFunction = Callable[[str], FsStats]


def statvfs_stats(mount_point: str) -> FsStats:
    """Query statvfs for a mount point. Raises OSError on failure."""
    try:
        st = os.statvfs(mount_point)
    except ValueError as e:
        # Embedded NUL from an escaped mount point
        raise OSError(str(e)) from e
    return FsStats(
        total_blocks=st.f_blocks,
        available_blocks=st.f_bavail,
        block_size=st.f_bsize,
    )


@dataclass
class RunningTotals:
    """Byte sums accumulated over the probed mounts."""

    size: float = 0.0
    free: float = 0.0


class SpaceProber:
    """Adds each distinct device's size and free space to running totals."""

    def __init__(self, seen: SeenDevices, stat_fn: StatFunction = statvfs_stats):
        self.seen = seen
        self.stat_fn = stat_fn

    def measure(self, mount_point: str, device: str, totals: RunningTotals) -> Optional[float]:
        """
        Probe one mount and accumulate its space into totals.

        Args:
            mount_point: Path passed to the statistics query
            device: Device identifier used to skip multiply-mounted disks
            totals: Running totals, updated in place on success

        Returns:
            Percentage of the filesystem in use, or None if the device was
            already counted or its statistics could not be read
        """
        if self.seen.check_and_mark(device):
            logger.debug(f"Skipping {mount_point}: {device} already counted")
            return None

        try:
            stats = self.stat_fn(mount_point)
        except OSError as e:
            # Stale or inaccessible mount
            logger.debug(f"Skipping {mount_point}: {e}")
            return None

        size = stats.total_blocks
        free = stats.available_blocks
        totals.size += size * stats.block_size
        totals.free += free * stats.block_size

        return (size - free) / size * 100 if size else 0.0

    def probe(self, mount_point: str, device: str, totals: RunningTotals) -> float:
        """Like :meth:`measure`, but reports skipped mounts as 0.0."""
        pct = self.measure(mount_point, device, totals)
        return 0.0 if pct is None else pct
