import logging

from ..control import Status
from ..media import Media
from ..models import Models

logger = logging.getLogger(__name__)


def textual_media_description(media_to_include: list[Media]) -> str:
    output = "Supported media:\n"
    fmt = " {media:9s} {dots_printable:14s} {media_descr:26s}\n"
    output += fmt.format(media="Name", dots_printable="Printable px", media_descr="Description")
    for media in media_to_include:
        spec = media.spec
        if spec.is_continuous:
            dots_printable = "{0:4d}".format(spec.printable_size[0])
        else:
            dots_printable = "{0:4d} x {1:4d}".format(*spec.printable_size)
        output += fmt.format(media=media.identifier, dots_printable=dots_printable, media_descr=spec.description)
    return output


def textual_status(status: Status) -> str:
    model = status.model.identifier if status.model else "unknown (0x%02X)" % status.model_code
    media = status.media.identifier if status.media else "none/unknown"
    output = "Model:        %s\n" % model
    output += "Media:        %s (%d mm, type 0x%02X, length %d mm)\n" % (media, status.media_width, status.media_type, status.media_length)
    output += "Status type:  %s\n" % status.status_type.name
    output += "Phase:        %s\n" % status.phase.name
    output += "Notification: %s\n" % status.notification.name
    output += "Errors:       %s\n" % ("none" if status.error.is_clear() else status.error)
    return output


def log_discovered_devices(available_devices: list[str], level=logging.INFO) -> None:
    for ad in available_devices:
        result = {"model": "unknown", "identifier": ad}
        if ad.startswith("usb://"):
            product = int(ad.removeprefix("usb://").partition("/")[0].partition(":")[2], 16)
            for model in Models:
                if model.value.product_id == product:
                    result["model"] = model.value.identifier
                    break
        logger.log(level, "  Found a label printer: {identifier}  (model: {model})".format(**result))
