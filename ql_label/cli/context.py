from collections.abc import Iterator
from contextlib import contextmanager

import click

from ..backends import Backend
from ..config import Config
from ..exceptions import BrotherQLError
from ..media import Media
from ..models import Models
from ..printer import BrotherQLPrinter

DEVICE_PREFIXES = tuple(prefix for backend in Backend for prefix in backend.identifier_prefixes)


def is_device_identifier(printer: str | None) -> bool:
    return bool(printer) and printer.startswith(DEVICE_PREFIXES)


def config_from_context(ctx: click.Context, media: str = Media.CONTINUOUS_62.identifier) -> Config:
    """Config of the --model and --printer group options. --printer counts as serial number unless it names a device."""
    model = ctx.meta.get("MODEL")
    if not model:
        raise click.UsageError("Please specify the printer model with --model or QL_LABEL_MODEL.")
    printer = ctx.meta.get("PRINTER")
    serial = "" if not printer or is_device_identifier(printer) else printer
    return Config(Models.from_identifier(model), serial, Media.from_identifier(media))


def open_printer(ctx: click.Context, config: Config) -> BrotherQLPrinter:
    printer = ctx.meta.get("PRINTER")
    if not is_device_identifier(printer):
        return BrotherQLPrinter.open(config)
    backend = ctx.meta.get("BACKEND")
    backend = Backend(backend) if backend else Backend.detect(printer)
    return BrotherQLPrinter.open(config, backend, printer)


@contextmanager
def reporting_errors() -> Iterator[None]:
    """Show library errors as a plain message and a non-zero exit code."""
    try:
        yield
    except BrotherQLError as e:
        raise click.ClickException(str(e)) from e
