"""
Printers bound to the `usblp` kernel driver, which shows up as /dev/usb/lpN.
"""

import glob
import os
import select

from .abstract import BaseBrotherQLBackend
from ..exceptions import BrotherQLTransportError


class BrotherQLBackendLinuxKernel(BaseBrotherQLBackend):
    def __init__(self, device_specifier: str | int) -> None:
        """
        device_specifier: file:///dev/usb/lp0, /dev/usb/lp0 or a file
            descriptor that is already open for reading and writing.
        """
        self.dev = BrotherQLBackendLinuxKernel.get_device(device_specifier)

    def _read(self, length: int, timeout: int) -> bytes:
        try:
            result, _, _ = select.select([self.dev], [], [], timeout / 1000.0)
            if self.dev not in result:
                return b""
            return os.read(self.dev, length)
        except OSError as e:
            raise BrotherQLTransportError(f"Read failed: {e}") from e

    def _write(self, data: bytes) -> None:
        try:
            written = os.write(self.dev, data)
        except OSError as e:
            raise BrotherQLTransportError(f"Write failed: {e}") from e
        if written != len(data):
            raise BrotherQLTransportError(f"Wrote {written} of {len(data)} bytes")

    def _dispose(self) -> None:
        os.close(self.dev)

    @staticmethod
    def list_available_devices() -> list[str]:
        """file:// identifiers of the usblp devices. Not opened, opening can block."""
        return ["file://" + path for path in sorted(glob.glob("/dev/usb/lp*"))]

    @staticmethod
    def get_device(device_identifier: str | int) -> int:
        if isinstance(device_identifier, int):
            return device_identifier
        path = device_identifier.removeprefix("file://")
        try:
            return os.open(path, os.O_RDWR)
        except OSError as e:
            raise BrotherQLTransportError(f"Can't open {path}: {e}") from e
