import click

from .context import reporting_errors
from ..backends import Backend
from ..utils.output_helpers import log_discovered_devices


@click.command()
@click.pass_context
def discover(ctx):
    """find connected label printers"""
    backend = Backend(ctx.meta.get("BACKEND") or "pyusb")
    with reporting_errors():
        available_devices = backend.discover()

    log_discovered_devices(available_devices)
    for device in available_devices:
        click.echo(device)
