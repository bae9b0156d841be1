"""
Pytest configuration for the ql_label tests.

Provides a scripted in-memory backend and a builder for status frames so
the print engine can be exercised without a printer attached.
"""

import pytest

from ql_label.backends import BaseBrotherQLBackend
from ql_label.config import Config
from ql_label.media import Media
from ql_label.models import Models


class FakeBackend(BaseBrotherQLBackend):
    """Answers reads from a list of scripted replies and records every write."""

    def __init__(self, reads=()):
        self.reads = list(reads)
        self.writes = []
        self.disposed = False

    def _read(self, length, timeout):
        if self.reads:
            return self.reads.pop(0)
        return b""

    def _write(self, data):
        self.writes.append(bytes(data))

    def _dispose(self):
        self.disposed = True

    @staticmethod
    def list_available_devices():
        return []


def build_status_frame(
    model_code=0x41,
    error_info_1=0x00,
    error_info_2=0x00,
    media_width=62,
    media_type=0x0A,
    media_length=0,
    status_type=0x00,
    phase=0x00,
    phase_number=0x0000,
    notification=0x00,
    color=0x01,
    sequence_id=0x00,
    mode=0x00,
):
    data = bytearray(32)
    data[0:4] = b"\x80\x20\x42\x34"
    data[4] = model_code
    data[5] = 0x30
    data[6] = 0x30
    data[8] = error_info_1
    data[9] = error_info_2
    data[10] = media_width
    data[11] = media_type
    data[14] = sequence_id
    data[15] = mode
    data[17] = media_length
    data[18] = status_type
    data[19] = phase
    data[20] = phase_number >> 8
    data[21] = phase_number & 0xFF
    data[22] = notification
    data[25] = color
    return bytes(data)


@pytest.fixture
def status_frame():
    """Builder for 32 byte status frames, QL-820NWB with 62mm continuous tape by default."""
    return build_status_frame


@pytest.fixture
def backend():
    """A fresh fake backend with nothing to read."""
    return FakeBackend()


@pytest.fixture
def config():
    """QL-820NWB with 62mm continuous tape, default settings."""
    return Config(Models.QL820NWB.value, "", Media.CONTINUOUS_62)
