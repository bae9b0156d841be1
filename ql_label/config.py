import logging
from dataclasses import dataclass, replace

from .compression import RASTER_ROW_LENGTH
from .exceptions import BrotherQLConfigError
from .media import Media
from .models import Model, Models

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Config:
    """
    Parameters of a print job. Immutable: every ``with_*`` method returns
    a new config, so a config handed to the printer can't change while printing.

    Use :py:meth:`validate` (the printer does so before talking to the
    device) to catch settings the media or the model can't handle.
    """

    model: Model
    serial: str
    media: Media
    # Cut after every n labels, None disables the auto cutter.
    auto_cut: int | None = 1
    two_colors: bool = False
    cut_at_end: bool = True
    high_resolution: bool = False
    # Feed amount in dots, defaults to what the media needs.
    feed: int | None = None
    compress: bool = False
    high_quality: bool = True

    def __post_init__(self) -> None:
        if self.feed is None:
            object.__setattr__(self, "feed", self.media.default_feed_dots)

    @staticmethod
    def from_identifiers(model: str, serial: str, media: str) -> "Config":
        return Config(Models.from_identifier(model), serial, Media.from_identifier(media))

    @property
    def auto_cut_enabled(self) -> bool:
        return self.auto_cut is not None

    def with_media(self, media: Media) -> "Config":
        return replace(self, media=media, feed=media.default_feed_dots)

    def with_auto_cut(self, every: int = 1) -> "Config":
        return replace(self, auto_cut=every)

    def without_auto_cut(self) -> "Config":
        return replace(self, auto_cut=None)

    def with_two_colors(self, flag: bool = True) -> "Config":
        return replace(self, two_colors=flag)

    def with_cut_at_end(self, flag: bool = True) -> "Config":
        return replace(self, cut_at_end=flag)

    def with_high_resolution(self, flag: bool = True) -> "Config":
        return replace(self, high_resolution=flag)

    def with_feed(self, dots: int) -> "Config":
        return replace(self, feed=dots)

    def with_compression(self, flag: bool = True) -> "Config":
        return replace(self, compress=flag)

    def with_high_quality(self, flag: bool = True) -> "Config":
        return replace(self, high_quality=flag)

    def validate(self) -> None:
        """:raises BrotherQLConfigError:"""
        self.media.check_feed_dots(self.feed)
        if self.auto_cut is not None and not 1 <= self.auto_cut <= 255:
            raise BrotherQLConfigError(f"Auto cut count must be between 1 and 255, got {self.auto_cut}")
        if self.two_colors and not self.model.two_color:
            raise BrotherQLConfigError(f"Two color printing is not supported by the {self.model.identifier}")
        if self.compress:
            if not self.model.compression:
                raise BrotherQLConfigError(f"Compression is not supported by the {self.model.identifier}")
            if self.model.is_wide:
                raise BrotherQLConfigError(f"Compression needs {RASTER_ROW_LENGTH} byte raster rows, the {self.model.identifier} uses {self.model.number_bytes_per_row}")
        if self.high_resolution and not self.model.expanded_mode:
            raise BrotherQLConfigError(f"High resolution printing is not supported by the {self.model.identifier}")
        if self.media.spec.two_color and not self.two_colors:
            logger.warning("Black/red media %s installed but two color printing is off", self.media.identifier)
