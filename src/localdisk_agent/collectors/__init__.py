"""Metrics collectors for the local disk agent."""

from .disks import collect_disks

__all__ = [
    "collect_disks",
]
