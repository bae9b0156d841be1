import logging
from abc import ABC, abstractmethod

from ..exceptions import BrotherQLTransportError

logger = logging.getLogger(__name__)


class BaseBrotherQLBackend(ABC):
    """
    A duplex byte channel to one printer.

    Reads return whatever arrived within the timeout, an empty or short
    result means the printer had nothing (complete) to say yet. Failures
    of the underlying device are raised as :py:class:`BrotherQLTransportError`.
    """

    # ms
    READ_TIMEOUT = 1000

    @abstractmethod
    def __init__(self, device_specifier: str) -> None:
        pass

    @abstractmethod
    def _read(self, length: int, timeout: int) -> bytes:
        pass

    @abstractmethod
    def _write(self, data: bytes) -> None:
        pass

    @abstractmethod
    def _dispose(self) -> None:
        pass

    def read(self, length: int = 32, timeout: int | None = None) -> bytes:
        if timeout is None:
            timeout = self.READ_TIMEOUT
        try:
            ret_bytes = self._read(length, timeout)
        except BrotherQLTransportError as e:
            logger.debug("Error reading... %s", e)
            raise
        if ret_bytes:
            logger.debug("Read %d bytes.", len(ret_bytes))
        return ret_bytes

    def write(self, data: bytes) -> None:
        logger.debug("Writing %d bytes.", len(data))
        self._write(data)

    def dispose(self) -> None:
        try:
            self._dispose()
        except NotImplementedError:
            pass

    def __enter__(self) -> "BaseBrotherQLBackend":
        return self

    def __exit__(self, *exc_info) -> None:
        self.dispose()

    @staticmethod
    @abstractmethod
    def list_available_devices() -> list[str]:
        """List all available devices (by Identifier) for the Backend"""
        pass
