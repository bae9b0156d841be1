from enum import Enum
from typing import Type

from .abstract import BaseBrotherQLBackend


class Backend(Enum):
    PYUSB = "pyusb"
    LINUX_KERNEL = "linux_kernel"

    @property
    def backend_class(self) -> Type[BaseBrotherQLBackend]:
        match self:
            case Backend.PYUSB:
                from .pyusb import BrotherQLBackendPyUSB

                return BrotherQLBackendPyUSB
            case Backend.LINUX_KERNEL:
                from .linux_kernel import BrotherQLBackendLinuxKernel

                return BrotherQLBackendLinuxKernel

    @property
    def identifier_prefixes(self) -> tuple[str, ...]:
        match self:
            case Backend.PYUSB:
                return "usb://", "0x"
            case Backend.LINUX_KERNEL:
                return "file://", "/dev/usb/"

    def open(self, identifier: str) -> BaseBrotherQLBackend:
        """Open the device `identifier` with this backend."""
        return self.backend_class(identifier)

    def discover(self) -> list[str]:
        return self.backend_class.list_available_devices()

    @staticmethod
    def all() -> list[str]:
        return [b.value for b in Backend]

    @staticmethod
    def detect(identifier: str) -> "Backend":
        """:raises ValueError: if no backend handles identifiers like `identifier`."""
        for backend in Backend:
            if identifier.startswith(backend.identifier_prefixes):
                return backend
        raise ValueError(f"Cannot Detect the Backend for identifier: {identifier}")
