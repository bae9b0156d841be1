import logging

import click

from .control import cancel, status
from .discover import discover
from .info import info
from .print import print_cmd
from ..backends import Backend
from ..models import Models

printer_help = "The identifier for the printer. This could be a string like usb://0x04f9:0x209d/000G0Z123456 or file:///dev/usb/lp0, or just the serial number of a USB printer."


@click.group()
@click.option("-b", "--backend", type=click.Choice(Backend.all()), envvar="QL_LABEL_BACKEND")
@click.option("-m", "--model", type=click.Choice(Models.identifiers()), envvar="QL_LABEL_MODEL")
@click.option("-p", "--printer", metavar="PRINTER_IDENTIFIER", envvar="QL_LABEL_PRINTER", help=printer_help)
@click.option("--debug", is_flag=True)
@click.pass_context
def cli(ctx, *args, **kwargs):
    """Command line interface for the ql_label Python package."""

    backend = kwargs.get("backend", None)
    model = kwargs.get("model", None)
    printer = kwargs.get("printer", None)
    debug = kwargs.get("debug")

    # Store the general CLI options in the context meta dictionary.
    # The name corresponds to the second half of the respective envvar:
    ctx.meta["MODEL"] = model
    ctx.meta["BACKEND"] = backend
    ctx.meta["PRINTER"] = printer

    logging.basicConfig(level="DEBUG" if debug else "INFO")


cli.add_command(discover)
cli.add_command(info)
cli.add_command(print_cmd)
cli.add_command(status)
cli.add_command(cancel)

if __name__ == "__main__":
    cli()
