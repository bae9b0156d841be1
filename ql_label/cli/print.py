import click

from .context import config_from_context, open_printer, reporting_errors
from ..images import DEFAULT_THRESHOLD, ROTATIONS, image_to_page
from ..media import Media


@click.command("print", short_help="Print a label")
@click.argument("images", nargs=-1, required=True, type=click.File("rb"), metavar="IMAGE [IMAGE] ...")
@click.option(
    "-l",
    "--media",
    type=click.Choice(Media.identifiers()),
    envvar="QL_LABEL_MEDIA",
    required=True,
    help="The media installed (size, type - die-cut or endless). Run `ql_label info media` for a full list including ideal pixel dimensions.",
)
@click.option("-r", "--rotate", type=click.Choice(ROTATIONS), default="auto", help="Rotate the image (counterclock-wise) by this amount of degrees.")
@click.option("-t", "--threshold", type=float, default=DEFAULT_THRESHOLD, help="The threshold value (in percent) to discriminate between black and white pixels.")
@click.option(
    "-c",
    "--compress",
    is_flag=True,
    help="Enable compression (if available with the model). Label creation can take slightly longer but the resulting instruction size is normally considerably smaller.",
)
@click.option(
    "--red",
    is_flag=True,
    help="Create a label to be printed on black/red/white tape (only with QL-8xx series on DK-22251 labels). You must use this option when printing on black/red tape, even when not printing red.",
)
@click.option(
    "--600dpi", "dpi_600", is_flag=True, help="Print with 600x300 dpi available on some models. Provide your image as 600x600 dpi; perpendicular to the feeding the image will be resized to 300dpi."
)
@click.option("--lq", is_flag=True, help="Print with low quality (faster). Default is high quality.")
@click.option("--no-cut", is_flag=True, help="Don't cut the tape after printing the label.")
@click.option("--feed", type=int, default=None, help="Feed amount in dots. Defaults to 35 for continuous tape and 0 for die-cut labels.")
@click.pass_context
def print_cmd(ctx, images, media, rotate, threshold, compress, red, dpi_600, lq, no_cut, feed):
    """Print a label of each provided IMAGE."""
    with reporting_errors():
        config = config_from_context(ctx, media)
        config = config.with_two_colors(red).with_high_resolution(dpi_600).with_high_quality(not lq).with_compression(compress)
        if no_cut:
            config = config.without_auto_cut().with_cut_at_end(False)
        if feed is not None:
            config = config.with_feed(feed)
        config.validate()

        pages = [image_to_page(image, config, threshold, rotate) for image in images]

        with open_printer(ctx, config) as printer:
            printer.print(pages)
