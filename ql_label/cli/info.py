import click

from ..media import Media
from ..models import Models
from ..utils.output_helpers import textual_media_description


@click.group()
@click.pass_context
def info(ctx, *args, **kwargs):
    """List available media, models etc."""


@info.command(name="models")
@click.pass_context
def models_cmd(ctx, *args, **kwargs):
    """List the choices for --model"""
    click.echo("Supported models:")
    for model in Models.identifiers():
        click.echo(" " + model)


@info.command()
@click.pass_context
def media(ctx, *args, **kwargs):
    """List the choices for --media"""
    click.echo(textual_media_description(list(Media)), nl=False)
