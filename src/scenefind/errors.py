"""Error types raised by scenefind."""


class SceneFindError(Exception):
    """Base class for scenefind errors."""


class InvalidInputError(SceneFindError, ValueError):
    """The component name list is empty after parsing."""


class ExportError(SceneFindError):
    """An export sink rejected the write.

    Attributes:
        path: Destination that could not be written
    """

    def __init__(self, path, message: str) -> None:
        super().__init__(message)
        self.path = path
