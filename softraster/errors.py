class RenderError(Exception):
    """Base class for every error raised by softraster."""


class ParseError(RenderError, ValueError):
    """A geometry record could not be parsed.

    The loader recovers from it locally by skipping the line.
    """

    def __init__(self, line_number: int, line: str, reason: str):
        self.line_number = line_number
        self.line = line
        self.reason = reason
        super().__init__(f"line {line_number}: {reason}: {line!r}")


class IndexOutOfRange(RenderError, IndexError):
    """A face references a position, UV or normal that does not exist."""

    def __init__(self, line_number: int, pool: str, index: int, size: int):
        self.line_number = line_number
        self.pool = pool
        self.index = index
        self.size = size
        super().__init__(
            f"line {line_number}: face references {pool} index {index}, "
            f"but only {size} {pool} record(s) exist"
        )


class TextureLoadError(RenderError, OSError):
    """The texture file is missing or could not be decoded."""


class ImageWriteError(RenderError, OSError):
    """The rendered image could not be written to the output path."""
