import pytest

from localdisk_agent.classifier import ClassifierPolicy, is_eligible, is_remote
from localdisk_agent.mounts import MountRecord


def record(device="/dev/sda1", mount_point="/", fstype="ext4", options="rw,relatime"):
    return MountRecord(device=device, mount_point=mount_point, fstype=fstype, options=options)


@pytest.mark.parametrize("device,fstype", [
    ("host:/export", "ext4"),
    ("10.0.0.1:/srv", "nfs"),
    ("//server/share", "smbfs"),
    ("/dev/sda1", "nfs4"),
    ("/dev/sda1", "nfsd"),
    ("/dev/sda1", "autofs"),
    ("/dev/sda1", "gfs"),
    ("/dev/sda1", "none"),
])
def test_remote(device, fstype):
    assert is_remote(device, fstype)


@pytest.mark.parametrize("device,fstype", [
    ("/dev/sda1", "ext4"),
    ("//server/share", "cifs"),
    ("/dev/sda1", "smbfs"),
    ("/dev/sda1", "gfs2"),
    ("/dev/mapper/vg-root", "xfs"),
])
def test_not_remote(device, fstype):
    assert not is_remote(device, fstype)


def test_local_rw_mount_is_eligible():
    assert is_eligible(record())


def test_alternate_device_prefix_is_eligible():
    assert is_eligible(record(device="/dev2/disk0"))


def test_read_only_rejected():
    assert not is_eligible(record(options="ro"))
    assert not is_eligible(record(options="ro,relatime"))


def test_remote_rejected():
    assert not is_eligible(record(device="host:/export", fstype="ext4"))
    assert not is_eligible(record(fstype="nfs4"))


@pytest.mark.parametrize("device,fstype", [
    ("proc", "proc"),
    ("tmpfs", "tmpfs"),
    ("sysfs", "sysfs"),
    ("overlay", "overlay"),
    ("dev/sda1", "ext4"),
])
def test_pseudo_filesystems_rejected(device, fstype):
    assert not is_eligible(record(device=device, fstype=fstype))


def test_policy_overrides_markers():
    policy = ClassifierPolicy(
        local_prefixes=("/dev/", "zroot/"),
        remote_fstypes=("fuse.sshfs",),
        remote_fstype_prefixes=(),
    )
    assert is_eligible(record(device="zroot/home", fstype="zfs"), policy)
    assert is_eligible(record(fstype="nfs4"), policy)
    assert not is_eligible(record(fstype="fuse.sshfs"), policy)
    # host:path syntax is not configurable
    assert not is_eligible(record(device="/dev/x:y"), policy)
