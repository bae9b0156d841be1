"""
Backend to support Brother QL-series printers via PyUSB.
Works on Mac OS X and Linux.

Requires PyUSB: https://github.com/walac/pyusb/
Install via `pip install pyusb`
"""

import logging

import usb.core
import usb.util

from .abstract import BaseBrotherQLBackend
from ..exceptions import BrotherQLTransportError
from ..models import BROTHER_VENDOR_ID

logger = logging.getLogger(__name__)

PRINTER_CLASS = 7


class BrotherQLBackendPyUSB(BaseBrotherQLBackend):
    """
    BrotherQL backend using PyUSB
    """

    READ_TIMEOUT = 1000  # ms
    WRITE_TIMEOUT = 15000  # ms

    def __init__(self, device_specifier: str) -> None:
        """
        device_specifier: string of the format usb://idVendor:idProduct/iSerialNumber, \
            the serial number is optional.
        """
        vendor, product, serial = BrotherQLBackendPyUSB.extract_vendor_product_serial_from_device_identifier(device_specifier)
        self.dev = BrotherQLBackendPyUSB.find_device(vendor, product, serial)

        try:
            self.was_kernel_driver_active = self.dev.is_kernel_driver_active(0)
            if self.was_kernel_driver_active:
                self.dev.detach_kernel_driver(0)
        except NotImplementedError:
            self.was_kernel_driver_active = False

        try:
            # set the active configuration. With no arguments, the first configuration will be the active one
            self.dev.set_configuration()
            cfg = self.dev.get_active_configuration()
        except usb.core.USBError as e:
            raise BrotherQLTransportError(f"Could not configure {device_specifier}: {e}") from e

        intf = usb.util.find_descriptor(cfg, bInterfaceClass=PRINTER_CLASS)
        if intf is None:
            raise BrotherQLTransportError(f"No printer interface on {device_specifier}")

        ep_match_in = lambda e: usb.util.endpoint_direction(e.bEndpointAddress) == usb.util.ENDPOINT_IN
        ep_match_out = lambda e: usb.util.endpoint_direction(e.bEndpointAddress) == usb.util.ENDPOINT_OUT

        ep_in = usb.util.find_descriptor(intf, custom_match=ep_match_in)
        ep_out = usb.util.find_descriptor(intf, custom_match=ep_match_out)

        if ep_in is None or ep_out is None:
            raise BrotherQLTransportError(f"Missing bulk endpoint on {device_specifier}")

        self.write_dev = ep_out
        self.read_dev = ep_in

    @classmethod
    def open(cls, vendor_id: int, product_id: int, serial: str = "") -> "BrotherQLBackendPyUSB":
        return cls("usb://0x{:04x}:0x{:04x}/{}".format(vendor_id, product_id, serial))

    def _read(self, length: int, timeout: int) -> bytes:
        try:
            # pyusb Device.read() operations return array() type - convert it to bytes()
            return bytes(self.read_dev.read(length, timeout))
        except usb.core.USBTimeoutError:
            return b""
        except usb.core.USBError as e:
            raise BrotherQLTransportError(f"Read failed: {e}") from e

    def _write(self, data: bytes) -> None:
        try:
            written = self.write_dev.write(data, self.WRITE_TIMEOUT)
        except usb.core.USBError as e:
            raise BrotherQLTransportError(f"Write failed: {e}") from e
        if written != len(data):
            raise BrotherQLTransportError(f"Wrote {written} of {len(data)} bytes")

    def _dispose(self) -> None:
        usb.util.dispose_resources(self.dev)
        if self.was_kernel_driver_active:
            self.dev.attach_kernel_driver(0)

    @staticmethod
    def find_device(vendor: int, product: int, serial: str = "") -> usb.core.Device:
        try:
            for device in usb.core.find(find_all=True, idVendor=vendor, idProduct=product):
                if not serial or BrotherQLBackendPyUSB.read_serial(device) == serial:
                    return device
        except usb.core.USBError as e:
            raise BrotherQLTransportError(f"Can't read device list: {e}") from e
        raise BrotherQLTransportError("Device 0x{:04x}:0x{:04x} {} not found".format(vendor, product, serial))

    @staticmethod
    def read_serial(device: usb.core.Device) -> str | None:
        try:
            return usb.util.get_string(device, device.iSerialNumber)
        except (usb.core.USBError, ValueError) as e:
            logger.debug("Can't read the serial number of %s: %s", device, e)
            return None

    @staticmethod
    def list_available_devices_as_usb() -> list[usb.core.Device]:
        class USBFindClass:
            def __init__(self, class_):
                self._class = class_

            def __call__(self, device):
                if device.bDeviceClass == self._class:
                    return True
                # ok, transverse all devices to find an interface that matches our class
                for cfg in device:
                    intf = usb.util.find_descriptor(cfg, bInterfaceClass=self._class)
                    if intf is not None:
                        return True
                return False

        return list(usb.core.find(find_all=True, custom_match=USBFindClass(PRINTER_CLASS), idVendor=BROTHER_VENDOR_ID))

    @staticmethod
    def list_available_devices() -> list[str]:
        """
        List all available devices for the respective backend

        returns: a list of identifiers of the format usb://idVendor:idProduct/iSerialNumber, \
            eg. 'usb://0x04f9:0x209d/000G0Z123456'.
        """

        def extract_identifier(dev: usb.core.Device) -> str:
            serial = BrotherQLBackendPyUSB.read_serial(dev)
            identifier = "usb://0x{:04x}:0x{:04x}".format(dev.idVendor, dev.idProduct)
            return identifier + "/" + serial if serial else identifier

        return [extract_identifier(printer) for printer in BrotherQLBackendPyUSB.list_available_devices_as_usb()]

    @staticmethod
    def extract_vendor_product_serial_from_device_identifier(device_identifier: str) -> tuple[int, int, str]:
        device_identifier = device_identifier.removeprefix("usb://")
        vendor_product, _, serial = device_identifier.partition("/")
        vendor, _, product = vendor_product.partition(":")
        vendor, product = int(vendor, 16), int(product, 16)
        return vendor, product, serial
