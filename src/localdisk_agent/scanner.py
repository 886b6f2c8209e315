"""Scan orchestrator: walks the mount table and sums local disk space."""

import logging
from dataclasses import dataclass
from typing import List, Optional, Tuple

from .classifier import ClassifierPolicy, is_eligible
from .config import ScanConfig
from .mounts import mount_table_from_config, parse_mount_line
from .prober import RunningTotals, SpaceProber, StatFunction, statvfs_stats
from .seen import SeenDevices

logger = logging.getLogger("localdisk-agent.scanner")


@dataclass(frozen=True)
class DiskAggregate:
    """
    Local disk capacity summed over all counted mounts.

    Both values are byte counts divided by the configured scale divisor
    (1000 by default).
    """

    total_bytes: float = 0.0
    free_bytes: float = 0.0


@dataclass(frozen=True)
class ScanResult:
    """Aggregate plus the details gathered while scanning."""

    aggregate: DiskAggregate
    max_usage_percent: float = 0.0
    probed: Tuple[str, ...] = ()
    skipped: int = 0


class DiskScanner:
    """Performs single-pass scans of the mount table."""

    def __init__(
        self,
        config: Optional[ScanConfig] = None,
        source=None,
        stat_fn: Optional[StatFunction] = None,
    ):
        self.config = config or ScanConfig()
        self.source = source or mount_table_from_config(self.config)
        self.stat_fn = stat_fn or statvfs_stats
        self.policy: ClassifierPolicy = self.config.policy()

    def scan(self) -> DiskAggregate:
        """Scan the mount table and return the aggregate."""
        return self.scan_detailed().aggregate

    def scan_detailed(self) -> ScanResult:
        """
        Scan the mount table.

        An unavailable mount table yields a zero result. Malformed lines,
        ineligible or duplicate mounts and failed statistics queries are
        skipped.
        """
        try:
            table = self.source.open()
        except OSError as e:
            logger.debug(f"Mount table {self.source!r} unavailable: {e}")
            return ScanResult(aggregate=DiskAggregate())

        seen = SeenDevices()
        prober = SpaceProber(seen, self.stat_fn)
        totals = RunningTotals()
        max_pct = 0.0
        probed: List[str] = []
        skipped = 0

        try:
            with table:
                for line in table:
                    record = parse_mount_line(line)
                    if record is None:
                        if line.strip():
                            logger.debug(f"Skipping malformed mount line: {line.rstrip()!r}")
                        skipped += 1
                        continue

                    if not is_eligible(record, self.policy):
                        skipped += 1
                        continue

                    pct = prober.measure(record.mount_point, record.device, totals)
                    if pct is None:
                        skipped += 1
                        continue

                    probed.append(record.mount_point)
                    max_pct = max(max_pct, pct)
        finally:
            seen.clear()

        divisor = self.config.scale_divisor
        aggregate = DiskAggregate(
            total_bytes=totals.size / divisor,
            free_bytes=totals.free / divisor,
        )
        logger.debug(
            f"Scanned {len(probed)} mounts ({skipped} skipped): "
            f"total={aggregate.total_bytes} free={aggregate.free_bytes}"
        )

        return ScanResult(
            aggregate=aggregate,
            max_usage_percent=max_pct,
            probed=tuple(probed),
            skipped=skipped,
        )


def get_disk_info(config: Optional[ScanConfig] = None) -> DiskAggregate:
    """Scan the host's mount table with the given (or default) configuration."""
    return DiskScanner(config).scan()
