import json
import stat

import pytest

from localdisk_agent.classifier import DEFAULT_POLICY
from localdisk_agent.config import ConfigManager, ScanConfig


def test_defaults_match_default_policy():
    assert ScanConfig().policy() == DEFAULT_POLICY


def test_save_and_load(tmp_path):
    path = tmp_path / "etc" / "config.json"
    mgr = ConfigManager(str(path))
    config = ScanConfig(mount_source="psutil", remote_fstypes=["autofs", "fuse.sshfs"])

    mgr.save(config)

    assert mgr.exists()
    assert stat.S_IMODE(path.stat().st_mode) == 0o600
    assert mgr.load() == config
    assert mgr.load().policy().remote_fstypes == ("autofs", "fuse.sshfs")


def test_load_missing_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        ConfigManager(str(tmp_path / "missing.json")).load()


def test_load_or_default(tmp_path):
    assert ConfigManager(str(tmp_path / "missing.json")).load_or_default() == ScanConfig()


def test_partial_file_uses_defaults(tmp_path):
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"mounts_path": "/host/proc/mounts"}))

    config = ConfigManager(str(path)).load()

    assert config.mounts_path == "/host/proc/mounts"
    assert config.scale_divisor == 1000.0


def test_unknown_key_rejected(tmp_path):
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"api_url": "https://example.com"}))

    with pytest.raises(TypeError):
        ConfigManager(str(path)).load()


def test_non_object_rejected(tmp_path):
    path = tmp_path / "config.json"
    path.write_text("[]")

    with pytest.raises(ValueError):
        ConfigManager(str(path)).load()


@pytest.mark.parametrize("kwargs", [{"mount_source": "getmntinfo"}, {"scale_divisor": 0}])
def test_invalid_values(kwargs):
    with pytest.raises(ValueError):
        ScanConfig(**kwargs)


def test_psutil_source_rejected_on_windows(monkeypatch):
    monkeypatch.setattr("sys.platform", "win32")

    with pytest.raises(ValueError):
        ScanConfig(mount_source="psutil")
    assert ScanConfig(mount_source="file").mount_source == "file"
