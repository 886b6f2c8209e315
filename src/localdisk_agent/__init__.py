"""Local disk capacity agent."""

__version__ = "0.1.0"

from .scanner import DiskAggregate, DiskScanner, ScanResult, get_disk_info

__all__ = [
    "__version__",
    "DiskAggregate",
    "DiskScanner",
    "ScanResult",
    "get_disk_info",
]
