"""
The print job state machine.

:py:class:`BrotherQLPrinter` owns one open backend (device session) and
sequences a print job over it: status request and media check, the raster
data of every page, page acknowledgments and finally polling the printer
until it reports that it is done and ready to receive again.

Everything blocks the calling thread. A printer instance must not be used
from several threads at once.
"""

import logging
import time
from collections.abc import Iterable
from enum import Enum, auto
from io import BytesIO

from . import instructions
from .backends import Backend, BaseBrotherQLBackend
from .compression import pack_bits
from .config import Config
from .control import Phase, Status, StatusType, is_status_frame
from .exceptions import BrotherQLError, BrotherQLPrinterError, BrotherQLPrintTimeout, BrotherQLRasterError, BrotherQLReadStatusTimeout
from .models import BROTHER_VENDOR_ID
from .raster import BitmapPage, TwoColorPage
from .utils.hex import hex_format

logger = logging.getLogger(__name__)


class PrinterState(Enum):
    IDLE = auto()
    AWAITING_STATUS = auto()
    STREAMING = auto()
    AWAITING_PAGE_ACK = auto()
    AWAITING_COMPLETION = auto()
    DONE = auto()
    ERROR = auto()


class BrotherQLPrinter:
    """
    Prints bitmap pages with a :py:class:`Config` on the printer behind `backend`.

    :ivar PrinterState state: Where the last/current print job is.
    :ivar int page_index: Index of the page being sent, None outside of streaming.
    """

    STATUS_READ_ATTEMPTS = 10
    STATUS_POLL_INTERVAL = 1.0  # s
    PAGE_ACK_POLL_INTERVAL = 0.1  # s
    COMPLETION_READ_ATTEMPTS = 300
    COMPLETION_POLL_INTERVAL = 0.1  # s
    COMPLETION_READ_TIMEOUT = 100  # ms

    def __init__(self, config: Config, backend: BaseBrotherQLBackend) -> None:
        self.config = config
        self.backend = backend
        self.state = PrinterState.IDLE
        self.page_index = None

    @classmethod
    def open(cls, config: Config, backend: Backend = Backend.PYUSB, identifier: str | None = None) -> "BrotherQLPrinter":
        """
        Open the printer. Without `identifier` the USB device is looked up by
        the model's product id and the serial number of `config`.
        """
        if identifier is None:
            logger.info("Opening %s printer %s", config.model.identifier, config.serial or "(first found)")
            return cls(config, Backend.PYUSB.backend_class.open(BROTHER_VENDOR_ID, config.model.product_id, config.serial))
        logger.info("Opening %s printer %s", config.model.identifier, identifier)
        return cls(config, backend.open(identifier))

    def close(self) -> None:
        self.backend.dispose()

    def __enter__(self) -> "BrotherQLPrinter":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def request_status(self) -> None:
        """Ask for a status frame. Call once before reading the status."""
        self.backend.write(instructions.request_status())

    def read_status(self, attempts: int | None = None, interval: float | None = None) -> Status:
        """
        Read status frames until a complete one arrives.

        :raises BrotherQLReadStatusTimeout: after `attempts` reads without a complete frame.
        """
        if attempts is None:
            attempts = self.STATUS_READ_ATTEMPTS
        interval = self.STATUS_POLL_INTERVAL if interval is None else interval
        for attempt in range(attempts):
            data = self.backend.read(32)
            if is_status_frame(data):
                return Status.from_bytes(data)
            if data:
                logger.warning("Ignoring incomplete status (%d bytes): %s", len(data), hex_format(data))
            else:
                logger.debug("No status yet (attempt %d/%d)", attempt + 1, attempts)
            time.sleep(interval)
        raise BrotherQLReadStatusTimeout(f"No status received after {attempts} attempts")

    def check_status(self) -> Status:
        self.request_status()
        return self.read_status()

    def cancel(self) -> None:
        """Reset the printer, dropping whatever it received so far."""
        self.backend.write(instructions.initialize())

    def print(self, pages: Iterable[BitmapPage | TwoColorPage]) -> None:
        """
        Print `pages`, one label each, and block until the printer is done.

        :raises BrotherQLConfigError: the config doesn't suit the media or the model. Nothing was sent.
        :raises BrotherQLRasterError: a page doesn't suit the config or the model. Nothing was sent.
        :raises BrotherQLMediaError: other or no media installed. Nothing but the status request was sent.
        :raises BrotherQLPrinterError: the printer reported a hardware error.
        :raises BrotherQLReadStatusTimeout:
        :raises BrotherQLPrintTimeout: the printer didn't finish in time.
        :raises BrotherQLTransportError:
        """
        try:
            self._print(pages)
        except BrotherQLError as e:
            logger.error("Print job failed in state %s: %s", self.state.name, e)
            self.state = PrinterState.ERROR
            raise
        finally:
            self.page_index = None

    def _print(self, pages: Iterable[BitmapPage | TwoColorPage]) -> None:
        self.config.validate()
        pages = list(pages)
        for page in pages:
            self._check_page(page)

        self.state = PrinterState.AWAITING_STATUS
        self.request_status()
        status = self.read_status()
        status.check_media(self.config.media)
        self._raise_on_error(status)

        if not pages:
            logger.warning("Nothing to print.")
            self.state = PrinterState.DONE
            return

        for index, page in enumerate(pages):
            last_page = index == len(pages) - 1

            self.state = PrinterState.STREAMING
            self.page_index = index
            data = self._build_page(page, is_first_page=index == 0)
            data += instructions.print_page(last_page)
            logger.info("Sending page %d to the printer. Total: %d bytes.", index + 1, len(data))
            self.backend.write(data)

            if not last_page:
                self.state = PrinterState.AWAITING_PAGE_ACK
                self._raise_on_error(self.read_status(interval=self.PAGE_ACK_POLL_INTERVAL))

        self.state = PrinterState.AWAITING_COMPLETION
        self._wait_for_completion()

        # leave the printer ready for the next job
        self.backend.write(instructions.initialize())
        self.state = PrinterState.DONE
        logger.info("Printing was successful. Waiting for the next job.")

    def _preamble(self) -> bytes:
        data = instructions.initialize()
        if self.config.model.mode_setting:
            data += instructions.switch_mode()
        data += instructions.automatic_status()
        data += instructions.compression(self.config.compress)
        data += instructions.build_mode_commands(self.config)
        return data

    def _check_page(self, page: BitmapPage | TwoColorPage) -> None:
        """:raises BrotherQLRasterError: if `page` can't be printed with the config."""
        model = self.config.model
        if self.config.two_colors != isinstance(page, TwoColorPage):
            fmt = "Two color printing is {} but got a {}"
            raise BrotherQLRasterError(fmt.format("on" if self.config.two_colors else "off", type(page).__name__))
        if page.row_length != model.number_bytes_per_row:
            fmt = "Wrong row length: {}, expected {}"
            raise BrotherQLRasterError(fmt.format(page.row_length, model.number_bytes_per_row))
        min_dots, max_dots = model.min_max_length_dots
        if self.config.high_resolution:
            # twice the rows per inch
            min_dots, max_dots = min_dots * 2, max_dots * 2
        if page.height > max_dots:
            raise BrotherQLRasterError(f"Page of {page.height} rows is longer than the {max_dots} the {model.identifier} can print")
        if page.height < min_dots and self.config.media.spec.is_continuous:
            logger.warning("Page of %d rows is shorter than %d, the printer feeds to the minimum length", page.height, min_dots)

    def _build_page(self, page: BitmapPage | TwoColorPage, is_first_page: bool) -> bytes:
        if isinstance(page, TwoColorPage):
            rows = page.interleaved()
            # rows come in black/red pairs
            raster_count = len(rows) // 2
        else:
            rows = list(page)
            raster_count = len(rows)

        file_str = BytesIO()
        if is_first_page:
            file_str.write(self._preamble())
        file_str.write(instructions.build_media_header(self.config, raster_count, is_first_page))
        for i, row in enumerate(rows):
            # compression is set for the whole job, red rows included
            if self.config.compress:
                row = pack_bits(row)
            color = None
            if self.config.two_colors:
                color = instructions.COLOR_BLACK if i % 2 == 0 else instructions.COLOR_RED
            file_str.write(instructions.raster_row(row, color))
        return file_str.getvalue()

    def _poll_status(self) -> Status | None:
        data = self.backend.read(32, self.COMPLETION_READ_TIMEOUT)
        if is_status_frame(data):
            status = Status.from_bytes(data)
            logger.debug("status: %s / %s", status.status_type.name, status.phase.name)
            return status
        if data:
            logger.warning("Ignoring incomplete status (%d bytes): %s", len(data), hex_format(data))
        return None

    def _wait_for_completion(self) -> None:
        for attempt in range(self.COMPLETION_READ_ATTEMPTS):
            status = self._poll_status()
            if status is not None:
                self._raise_on_error(status)
                if status.status_type == StatusType.PRINTING_COMPLETED and status.phase == Phase.PRINTING:
                    # printed, the next status should show it receiving again
                    status = self._poll_status()
                    if status is not None:
                        self._raise_on_error(status)
                if status is not None and status.phase == Phase.RECEIVING:
                    return
            time.sleep(self.COMPLETION_POLL_INTERVAL)
        raise BrotherQLPrintTimeout(f"Printer didn't finish after {self.COMPLETION_READ_ATTEMPTS} status reads")

    @staticmethod
    def _raise_on_error(status: Status) -> None:
        if status.has_error:
            raise BrotherQLPrinterError(status.error, status)
