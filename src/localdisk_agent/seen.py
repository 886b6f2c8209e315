"""Set of devices already accounted for during a scan."""

from typing import Set


class SeenDevices:
    """
    Tracks device identifiers probed during one scan.

    Keys are the device strings exactly as they appear in the mount table,
    so a device mounted at several points is only counted once.
    """

    def __init__(self) -> None:
        self._devices: Set[str] = set()

    def check_and_mark(self, device: str) -> bool:
        """
        Mark a device as seen.

        Returns True if the device was already present, False if it was
        inserted by this call.
        """
        if device in self._devices:
            return True
        self._devices.add(device)
        return False

    def clear(self) -> None:
        """Forget every device."""
        self._devices.clear()

    def __contains__(self, device: object) -> bool:
        return device in self._devices

    def __len__(self) -> int:
        return len(self._devices)
