"""Disk capacity collector."""

from typing import Any, Dict, Optional

from ..config import ScanConfig
from ..scanner import DiskScanner


def collect_disks(config: Optional[ScanConfig] = None, scanner: Optional[DiskScanner] = None) -> Dict[str, Any]:
    """
    Collect aggregate local disk capacity.

    Returns totals in thousands of bytes, the highest per-mount usage and the
    mount points that were counted.
    """
    scanner = scanner or DiskScanner(config)
    result = scanner.scan_detailed()
    aggregate = result.aggregate

    return {
        "total_kb": aggregate.total_bytes,
        "free_kb": aggregate.free_bytes,
        "used_kb": aggregate.total_bytes - aggregate.free_bytes,
        "max_usage_pct": round(result.max_usage_percent, 1),
        "mounts": list(result.probed),
    }
