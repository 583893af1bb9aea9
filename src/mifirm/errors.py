"""Exception hierarchy for firmware extraction."""

from typing import Optional


class MiFirmError(Exception):
    """Base class for all MiFirm errors."""

    pass


class InvalidSourceError(MiFirmError):
    """The APK path failed the pre-flight checks."""

    def __init__(self, path, reason: str) -> None:
        super().__init__(f"Failed to locate valid APK file {path}: {reason}")
        self.path = path
        self.reason = reason


class InvalidSelectionError(MiFirmError):
    """User input did not name a valid option."""

    pass


class CatalogIndexError(MiFirmError, IndexError):
    """A catalog position or device name is out of range."""

    pass


class ArchiveError(MiFirmError):
    """The archive could not be opened as a zip container."""

    pass


class ExtractionFailedError(MiFirmError):
    """Extraction for a device did not complete."""

    def __init__(
        self, device: str, message: str, cause: Optional[BaseException] = None
    ) -> None:
        super().__init__(f"Extraction failed for {device}: {message}")
        self.device = device
        self.cause = cause


class FeedError(MiFirmError):
    """The release feed could not be fetched or parsed."""

    pass
