import click

from .context import config_from_context, open_printer, reporting_errors
from ..utils.output_helpers import textual_status


@click.command()
@click.pass_context
def status(ctx):
    """Read and show the status of the printer"""
    with reporting_errors():
        config = config_from_context(ctx)
        with open_printer(ctx, config) as printer:
            click.echo(textual_status(printer.check_status()), nl=False)


@click.command()
@click.pass_context
def cancel(ctx):
    """Reset the printer, dropping a job in progress"""
    with reporting_errors():
        config = config_from_context(ctx)
        with open_printer(ctx, config) as printer:
            printer.cancel()
    click.echo("Printer reset.")
