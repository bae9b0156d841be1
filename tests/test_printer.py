"""Tests for the print job state machine."""

from unittest.mock import patch

import pytest

from ql_label import instructions
from ql_label.backends.pyusb import BrotherQLBackendPyUSB
from ql_label.compression import pack_bits
from ql_label.config import Config
from ql_label.control import ErrorKind
from ql_label.exceptions import (
    BrotherQLConfigError,
    BrotherQLMediaMismatch,
    BrotherQLNoMediaInstalled,
    BrotherQLPrinterError,
    BrotherQLPrintTimeout,
    BrotherQLRasterError,
    BrotherQLReadStatusTimeout,
)
from ql_label.media import Media
from ql_label.printer import BrotherQLPrinter, PrinterState
from ql_label.raster import BitmapPage, TwoColorPage

from conftest import FakeBackend, build_status_frame

READY = build_status_frame()
PRINTING = build_status_frame(status_type=0x06, phase=0x01)
COMPLETED = build_status_frame(status_type=0x01, phase=0x01)
RECEIVING = build_status_frame(status_type=0x01, phase=0x00)


@pytest.fixture(autouse=True)
def no_sleep():
    with patch("ql_label.printer.time.sleep"):
        yield


def page(height=3, fill=0x00):
    return BitmapPage([bytes([fill]) * 90] * height)


class TestPrint:
    """Test BrotherQLPrinter.print."""

    def test_single_page(self, config):
        backend = FakeBackend([READY, PRINTING, COMPLETED, RECEIVING])
        printer = BrotherQLPrinter(config, backend)

        printer.print([page()])

        assert printer.state == PrinterState.DONE
        assert backend.writes[0] == instructions.request_status()
        job = backend.writes[1]
        assert job.startswith(instructions.initialize() + instructions.switch_mode() + instructions.automatic_status())
        assert instructions.compression(False) + instructions.build_mode_commands(config) in job
        assert instructions.build_media_header(config, 3, is_first_page=True) in job
        assert job.count(b"\x67\x00\x5A") == 3
        assert job.endswith(b"\x1A")
        assert backend.writes[-1] == instructions.initialize()
        assert len(backend.writes) == 3

    def test_completion_waits_for_receiving(self, config):
        """A completed status while printing needs the confirming re-read."""
        backend = FakeBackend([READY, PRINTING, COMPLETED, b"", PRINTING, RECEIVING])
        printer = BrotherQLPrinter(config, backend)

        printer.print([page()])

        assert printer.state == PrinterState.DONE
        assert backend.reads == []

    def test_never_receiving_times_out(self, config):
        backend = FakeBackend([READY] + [PRINTING] * 5)
        printer = BrotherQLPrinter(config, backend)
        printer.COMPLETION_READ_ATTEMPTS = 20

        with pytest.raises(BrotherQLPrintTimeout):
            printer.print([page()])

        assert printer.state == PrinterState.ERROR
        # no final reset after a timeout
        assert len(backend.writes) == 2

    def test_media_mismatch_writes_only_the_status_request(self, config):
        backend = FakeBackend([READY])
        printer = BrotherQLPrinter(config.with_media(Media.DIE_CUT_62X29), backend)

        with pytest.raises(BrotherQLMediaMismatch) as exc_info:
            printer.print([page()])

        assert exc_info.value.expected == Media.DIE_CUT_62X29
        assert exc_info.value.actual == Media.CONTINUOUS_62
        assert backend.writes == [instructions.request_status()]
        assert printer.state == PrinterState.ERROR

    def test_no_media(self, config):
        backend = FakeBackend([build_status_frame(media_width=0, media_type=0x00)])
        printer = BrotherQLPrinter(config, backend)

        with pytest.raises(BrotherQLNoMediaInstalled):
            printer.print([page()])

    def test_invalid_config_does_no_io(self, config):
        backend = FakeBackend([READY])
        printer = BrotherQLPrinter(config.with_feed(5), backend)

        with pytest.raises(BrotherQLConfigError):
            printer.print([page()])

        assert backend.writes == []

    def test_status_timeout(self, config):
        backend = FakeBackend([b"\x80\x20", b""])
        printer = BrotherQLPrinter(config, backend)

        with pytest.raises(BrotherQLReadStatusTimeout):
            printer.print([page()])

    def test_garbled_read_is_skipped(self, config):
        backend = FakeBackend([READY[:10], READY, PRINTING, COMPLETED, RECEIVING])
        printer = BrotherQLPrinter(config, backend)

        printer.print([page()])

        assert printer.state == PrinterState.DONE

    def test_hardware_error_while_printing(self, config):
        cover_open = build_status_frame(error_info_2=0x10, status_type=0x02, phase=0x01)
        backend = FakeBackend([READY, PRINTING, cover_open])
        printer = BrotherQLPrinter(config, backend)

        with pytest.raises(BrotherQLPrinterError) as exc_info:
            printer.print([page()])

        assert exc_info.value.condition.kind == ErrorKind.COVER_OPEN
        assert printer.state == PrinterState.ERROR

    def test_multiple_pages(self, config):
        """Every page but the last ends with a form feed and waits for an acknowledgment."""
        backend = FakeBackend([READY, PRINTING, PRINTING, COMPLETED, RECEIVING])
        printer = BrotherQLPrinter(config, backend)

        printer.print([page(2), page(4)])

        first, second = backend.writes[1], backend.writes[2]
        assert first.startswith(instructions.initialize())
        assert first.endswith(b"\x0C")
        assert instructions.build_media_header(config, 2, is_first_page=True) in first
        assert second.startswith(instructions.build_media_header(config, 4, is_first_page=False))
        assert second.endswith(b"\x1A")
        assert printer.state == PrinterState.DONE

    def test_compressed_rows(self, config):
        backend = FakeBackend([READY, COMPLETED, RECEIVING])
        printer = BrotherQLPrinter(config.with_compression(), backend)

        printer.print([page(2)])

        job = backend.writes[1]
        assert instructions.compression(True) in job
        assert job.count(instructions.raster_row(pack_bits(b"\x00" * 90))) == 2

    def test_two_color_page(self, config):
        backend = FakeBackend([build_status_frame(color=0x81), COMPLETED, RECEIVING])
        config = config.with_media(Media.CONTINUOUS_62_RED).with_two_colors()
        printer = BrotherQLPrinter(config, backend)

        printer.print([TwoColorPage(page(2, 0x01), page(2, 0x02))])

        job = backend.writes[1]
        assert instructions.build_media_header(config, 2, is_first_page=True) in job
        black = instructions.raster_row(b"\x01" * 90, instructions.COLOR_BLACK)
        red = instructions.raster_row(b"\x02" * 90, instructions.COLOR_RED)
        assert (black + red) * 2 + b"\x1A" in job

    def test_wrong_row_length(self, config):
        backend = FakeBackend([READY])
        printer = BrotherQLPrinter(config, backend)

        with pytest.raises(BrotherQLRasterError):
            printer.print([BitmapPage([b"\x00" * 162])])

        assert backend.writes == []

    def test_bad_later_page_sends_nothing(self, config):
        """Pages are checked before the first one goes out, so the printer is never left mid-job."""
        backend = FakeBackend([READY, PRINTING, PRINTING, COMPLETED, RECEIVING])
        printer = BrotherQLPrinter(config, backend)

        with pytest.raises(BrotherQLRasterError):
            printer.print([page(2), page(2), BitmapPage([b"\x00" * 162])])

        assert backend.writes == []
        assert printer.state == PrinterState.ERROR

    def test_page_longer_than_the_model_allows(self, config):
        backend = FakeBackend([READY])
        printer = BrotherQLPrinter(config, backend)

        with pytest.raises(BrotherQLRasterError):
            printer.print([page(11812)])

        assert backend.writes == []

    def test_high_resolution_doubles_the_maximum_length(self, config):
        backend = FakeBackend([READY, COMPLETED, RECEIVING])
        printer = BrotherQLPrinter(config.with_high_resolution(), backend)

        printer.print([page(11812)])

        assert printer.state == PrinterState.DONE

    def test_short_continuous_page_warns(self, config, caplog):
        backend = FakeBackend([READY, COMPLETED, RECEIVING])
        printer = BrotherQLPrinter(config, backend)

        printer.print([page(2)])

        assert "shorter than 150" in caplog.text
        assert printer.state == PrinterState.DONE

    def test_compressed_two_color_page(self, config):
        """Compression is set once per job, so the red rows are packed too."""
        backend = FakeBackend([build_status_frame(color=0x81), COMPLETED, RECEIVING])
        config = config.with_media(Media.CONTINUOUS_62_RED).with_two_colors().with_compression()
        printer = BrotherQLPrinter(config, backend)

        printer.print([TwoColorPage(page(2, 0x01), page(2, 0x02))])

        job = backend.writes[1]
        assert instructions.compression(True) in job
        black = instructions.raster_row(b"\xA7\x01", instructions.COLOR_BLACK)
        red = instructions.raster_row(b"\xA7\x02", instructions.COLOR_RED)
        assert (black + red) * 2 + b"\x1A" in job

    def test_nothing_to_print(self, config):
        backend = FakeBackend([READY])
        printer = BrotherQLPrinter(config, backend)

        printer.print([])

        assert printer.state == PrinterState.DONE
        assert backend.writes == [instructions.request_status()]


class TestControl:
    """Test status requests and cancelling."""

    def test_check_status(self, config):
        backend = FakeBackend([READY])
        status = BrotherQLPrinter(config, backend).check_status()

        assert status.is_ready
        assert backend.writes == [instructions.request_status()]

    def test_zero_attempts_reads_nothing(self, config):
        backend = FakeBackend([READY])
        printer = BrotherQLPrinter(config, backend)

        with pytest.raises(BrotherQLReadStatusTimeout):
            printer.read_status(attempts=0)

        assert backend.reads == [READY]

    def test_cancel(self, config):
        backend = FakeBackend()
        BrotherQLPrinter(config, backend).cancel()

        assert backend.writes == [instructions.initialize()]

    def test_close_disposes_the_backend(self, config):
        backend = FakeBackend()
        with BrotherQLPrinter(config, backend):
            pass

        assert backend.disposed

    def test_open_looks_up_the_usb_device(self, config, monkeypatch):
        """Without an identifier the printer is found by the model's product id and the serial."""
        backend = FakeBackend()
        calls = []

        def fake_open(*args):
            calls.append(args)
            return backend

        monkeypatch.setattr(BrotherQLBackendPyUSB, "open", fake_open)
        printer = BrotherQLPrinter.open(Config(config.model, "000G0Z123456", config.media))

        assert calls == [(0x04F9, 0x209D, "000G0Z123456")]
        assert printer.backend is backend
