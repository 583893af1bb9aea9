"""
MiFirm - extract Mi Band and Amazfit firmware from the Mi Fit APK.

Looks up each device's firmware files under the APK's assets folder and
copies them into one output folder per device.
"""

__version__ = "1.0.0"

from .archive import ApkArchive
from .catalog import DEFAULT_CATALOG, Catalog, DeviceRecord
from .config import MiFirmConfig
from .errors import (
    ArchiveError,
    CatalogIndexError,
    ExtractionFailedError,
    FeedError,
    InvalidSelectionError,
    InvalidSourceError,
    MiFirmError,
)
from .extractor import ExtractionResult, FirmwareExtractor
from .source import validate_source

__all__ = [
    "ApkArchive",
    "DEFAULT_CATALOG",
    "Catalog",
    "DeviceRecord",
    "MiFirmConfig",
    "ArchiveError",
    "CatalogIndexError",
    "ExtractionFailedError",
    "FeedError",
    "InvalidSelectionError",
    "InvalidSourceError",
    "MiFirmError",
    "ExtractionResult",
    "FirmwareExtractor",
    "validate_source",
]
