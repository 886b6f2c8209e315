import io

import pytest

from localdisk_agent.prober import FsStats


class StringMountTable:
    """In-memory mount table source."""

    def __init__(self, text):
        self.text = text
        self.opened = 0
        self.handle = None

    def open(self):
        self.opened += 1
        self.handle = io.StringIO(self.text)
        return self.handle


class MissingMountTable:
    def open(self):
        raise FileNotFoundError("no mount table")


class FakeStats:
    """statvfs stand-in returning canned stats per mount point."""

    def __init__(self, stats):
        self.stats = stats
        self.calls = []

    def __call__(self, mount_point):
        self.calls.append(mount_point)
        try:
            value = self.stats[mount_point]
        except KeyError:
            raise FileNotFoundError(mount_point)
        if isinstance(value, Exception):
            raise value
        return FsStats(*value)


@pytest.fixture
def make_table():
    return StringMountTable


@pytest.fixture
def make_stats():
    return FakeStats


@pytest.fixture
def missing_table():
    return MissingMountTable()
