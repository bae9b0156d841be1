"""Tests for CLI functionality."""

from unittest.mock import patch

import pytest
from click.testing import CliRunner

from ql_label.cli import cli
from ql_label.exceptions import BrotherQLTransportError
from ql_label.printer import BrotherQLPrinter

from conftest import FakeBackend, build_status_frame


@pytest.fixture
def runner():
    """Create CLI test runner."""
    return CliRunner()


class TestInfo:
    """Test the info commands."""

    def test_models(self, runner):
        result = runner.invoke(cli, ["info", "models"])
        assert result.exit_code == 0
        assert "QL-820NWB" in result.output

    def test_media(self, runner):
        result = runner.invoke(cli, ["info", "media"])
        assert result.exit_code == 0
        assert "62red" in result.output
        assert " 165 x  566" in result.output


class TestStatus:
    """Test the status command."""

    def test_requires_model(self, runner):
        result = runner.invoke(cli, ["status"])
        assert result.exit_code != 0
        assert "--model" in result.output

    def test_shows_status(self, runner):
        backend = FakeBackend([build_status_frame()])
        with patch("ql_label.cli.context.BrotherQLPrinter.open", side_effect=lambda config, *args: BrotherQLPrinter(config, backend)):
            result = runner.invoke(cli, ["-m", "QL-820NWB", "status"])
        assert result.exit_code == 0, result.output
        assert "QL-820NWB" in result.output
        assert "Media:        62 " in result.output
        assert backend.disposed

    def test_transport_error_is_reported(self, runner):
        with patch("ql_label.cli.context.BrotherQLPrinter.open", side_effect=BrotherQLTransportError("Device not found")):
            result = runner.invoke(cli, ["-m", "QL-820NWB", "status"])
        assert result.exit_code == 1
        assert "Device not found" in result.output

    def test_model_from_environment(self, runner):
        backend = FakeBackend([build_status_frame()])
        with patch("ql_label.cli.context.BrotherQLPrinter.open", side_effect=lambda config, *args: BrotherQLPrinter(config, backend)):
            result = runner.invoke(cli, ["status"], env={"QL_LABEL_MODEL": "QL-820NWB"})
        assert result.exit_code == 0, result.output


class TestPrint:
    """Test the print command."""

    def test_prints_image(self, runner, tmp_path):
        from PIL import Image

        path = tmp_path / "label.png"
        Image.new("L", (696, 5), 0).save(path)
        backend = FakeBackend([build_status_frame(), build_status_frame(status_type=0x01, phase=0x01), build_status_frame(status_type=0x01)])
        with patch("ql_label.printer.time.sleep"), patch("ql_label.cli.context.BrotherQLPrinter.open", side_effect=lambda config, *args: BrotherQLPrinter(config, backend)):
            result = runner.invoke(cli, ["-m", "QL-820NWB", "print", "--media", "62", str(path)])
        assert result.exit_code == 0, result.output
        assert backend.writes[1].endswith(b"\x1A")

    def test_bad_image(self, runner, tmp_path):
        path = tmp_path / "label.png"
        path.write_bytes(b"fake png")
        result = runner.invoke(cli, ["-m", "QL-820NWB", "print", "--media", "62", str(path)])
        assert result.exit_code == 1
        assert "Can't read image" in result.output

    def test_bad_feed(self, runner, tmp_path):
        path = tmp_path / "label.png"
        path.write_bytes(b"fake png")
        result = runner.invoke(cli, ["-m", "QL-820NWB", "print", "--media", "62x29", "--feed", "35", str(path)])
        assert result.exit_code == 1
        assert "must be 0" in result.output
