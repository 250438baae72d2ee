"""Error kinds raised by the label pipeline.

Filesystem failures are not wrapped: they surface as the built-in OSError.
"""


class LabelsError(Exception):
    """Base class for all label pipeline errors."""
    pass


class PathError(LabelsError):
    """Raised when an input path is missing or unreadable."""
    pass


class ArchiveFormatError(LabelsError):
    """Raised when a file is not a valid zip container."""
    pass


class ArchiveTraversalError(LabelsError):
    """Raised when an archive entry would be written outside the extraction root."""

    def __init__(self, path: str):
        super().__init__(f"illegal file path: {path}")
        self.path = path


class XmlDecodeError(LabelsError):
    """Raised in strict mode when the label document cannot be parsed."""
    pass
