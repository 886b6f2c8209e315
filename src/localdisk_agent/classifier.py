"""Mount classifier: decides which mount table entries count as local disks."""

from dataclasses import dataclass
from typing import Callable, Tuple

from .mounts import MountRecord


@dataclass(frozen=True)
class ClassifierPolicy:
    """Filesystem markers used to tell local disks from everything else."""

    local_prefixes: Tuple[str, ...] = ("/dev/", "/dev2/")
    remote_fstypes: Tuple[str, ...] = ("autofs", "gfs", "none")
    remote_fstype_prefixes: Tuple[str, ...] = ("nfs",)


DEFAULT_POLICY = ClassifierPolicy()

RemoteRule = Callable[[str, str, ClassifierPolicy], bool]


def _host_path_syntax(device: str, fstype: str, policy: ClassifierPolicy) -> bool:
    # host:/export
    return ":" in device


def _smb_share(device: str, fstype: str, policy: ClassifierPolicy) -> bool:
    return fstype == "smbfs" and device.startswith("//")


def _remote_fstype_prefix(device: str, fstype: str, policy: ClassifierPolicy) -> bool:
    return fstype.startswith(policy.remote_fstype_prefixes)


def _remote_fstype(device: str, fstype: str, policy: ClassifierPolicy) -> bool:
    return fstype in policy.remote_fstypes


# Evaluated in order, first match wins
REMOTE_RULES: Tuple[Tuple[str, RemoteRule], ...] = (
    ("host-path", _host_path_syntax),
    ("smb-share", _smb_share),
    ("fstype-prefix", _remote_fstype_prefix),
    ("fstype", _remote_fstype),
)


def is_remote(device: str, fstype: str, policy: ClassifierPolicy = DEFAULT_POLICY) -> bool:
    """Return True if the filesystem is reached over the network."""
    return any(rule(device, fstype, policy) for _, rule in REMOTE_RULES)


def is_read_only(options: str) -> bool:
    return options.startswith("ro")


def is_local_device(device: str, policy: ClassifierPolicy = DEFAULT_POLICY) -> bool:
    """Return True if the device path names a local block device."""
    return device.startswith(policy.local_prefixes)


def is_eligible(record: MountRecord, policy: ClassifierPolicy = DEFAULT_POLICY) -> bool:
    """
    Decide whether a mount should be counted.

    Read-only mounts, remote filesystems and anything not backed by a local
    device path (proc, tmpfs, sysfs, ...) are rejected.
    """
    if is_read_only(record.options):
        return False
    if is_remote(record.device, record.fstype, policy):
        return False
    return is_local_device(record.device, policy)
