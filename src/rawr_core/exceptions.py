"""
Exceptions raised by rawr-core

Every error derives from RawrError so callers can catch the whole family,
while the secondary builtin base keeps ``except FileNotFoundError`` and
friends working.
"""


class RawrError(Exception):
    """Base class for all rawr-core errors."""

    pass


class NotReadyError(RawrError, RuntimeError):
    """Scratch directory or external tools failed validation."""

    pass


class MissingFileError(RawrError, FileNotFoundError):
    """A required input file or directory does not exist."""

    pass


class NotRawFileError(RawrError, ValueError):
    """File extension is not a recognized RAW extension."""

    pass


class PreviewNotFoundError(RawrError, LookupError):
    """Requested preview ordinal has no usable catalog entry."""

    pass


class PreviewParseError(RawrError, ValueError):
    """A line of preview listing output did not have the expected shape."""

    def __init__(self, line: str) -> None:
        super().__init__(f"Unrecognized preview line: {line!r}")
        self.line = line


class ExtractionFailedError(RawrError):
    """exiv2 ran but did not produce the expected preview file."""

    pass


class PreviewAlreadyExistsError(RawrError, FileExistsError):
    """Destination preview file exists and overwrite was not requested."""

    pass


class ToolExecutionError(RawrError):
    """External tool could not be started or did not finish in time."""

    pass
