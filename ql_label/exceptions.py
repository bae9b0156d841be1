class BrotherQLError(Exception):
    pass


class BrotherQLUnknownModel(BrotherQLError):
    pass


class BrotherQLUnknownMedia(BrotherQLError):
    pass


class BrotherQLConfigError(BrotherQLError):
    """The print configuration is invalid. Detected before any I/O."""


class BrotherQLRasterError(BrotherQLError):
    """Bitmap data has the wrong size or shape."""


class BrotherQLStatusError(BrotherQLError):
    """A status frame could not be decoded."""


class BrotherQLTransportError(BrotherQLError):
    """Opening, reading from or writing to the device failed."""


class BrotherQLMediaError(BrotherQLError):
    pass


class BrotherQLNoMediaInstalled(BrotherQLMediaError):
    def __init__(self, expected) -> None:
        self.expected = expected
        super().__init__(f"No media is installed in the printer (expected {expected.name})")


class BrotherQLMediaMismatch(BrotherQLMediaError):
    def __init__(self, expected, actual) -> None:
        self.expected = expected
        self.actual = actual
        super().__init__(f"Media mismatch: expected {expected.name}, found {actual.name}")


class BrotherQLReadStatusTimeout(BrotherQLError):
    pass


class BrotherQLPrintTimeout(BrotherQLError):
    pass


class BrotherQLPrinterError(BrotherQLError):
    """A hardware fault reported by the printer in its status."""

    def __init__(self, condition, status=None) -> None:
        self.condition = condition
        self.status = status
        super().__init__(str(condition))
