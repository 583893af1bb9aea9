"""Pre-flight checks on the APK path before it is opened."""

import logging
from pathlib import Path
from typing import Union

from .errors import InvalidSourceError

logger = logging.getLogger(__name__)

APK_EXTENSION = ".apk"
# Largest unsigned 16-bit value; rejects empty and truncated downloads.
MIN_SOURCE_SIZE = 0xFFFF


def validate_source(path: Union[str, Path]) -> Path:
    """
    Check that a path looks like a usable Mi Fit APK.

    Args:
        path: User-supplied path to the APK file

    Returns:
        The path as a Path object

    Raises:
        InvalidSourceError: If the file is missing, not a regular file,
            not an .apk, or smaller than MIN_SOURCE_SIZE bytes
    """
    source = Path(path).expanduser()

    try:
        if not source.exists():
            raise InvalidSourceError(source, "file does not exist")
        if not source.is_file():
            raise InvalidSourceError(source, "not a regular file")
        if source.suffix.lower() != APK_EXTENSION:
            raise InvalidSourceError(source, f"expected a {APK_EXTENSION} file")
        size = source.stat().st_size
    except OSError as e:
        raise InvalidSourceError(source, str(e)) from e

    if size < MIN_SOURCE_SIZE:
        raise InvalidSourceError(
            source, f"file is too small ({size} bytes, need {MIN_SOURCE_SIZE})"
        )

    logger.debug(f"Validated source {source} ({size} bytes)")
    return source
