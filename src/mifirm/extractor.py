"""Copies a device's firmware payloads out of the Mi Fit APK."""

import logging
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Union

from .archive import ApkArchive
from .catalog import DeviceRecord
from .errors import ArchiveError, ExtractionFailedError
from .file_manager import FileManager

# Payloads always live under this folder inside the APK.
ASSET_PREFIX = "assets/"

# Read failures arrive as ArchiveError, write failures as OSError.
_EXTRACT_ERRORS = (ArchiveError, OSError)


@dataclass
class ExtractionResult:
    """Outcome of a successful extraction."""

    device: str
    output_directory: Path
    files: List[Path] = field(default_factory=list)
    bytes_written: int = 0
    elapsed_seconds: float = 0.0


class FirmwareExtractor:
    """Extracts the payload files of one device into its output folder."""

    def __init__(self, output_dir: Union[str, Path]) -> None:
        """
        Initialize firmware extractor.

        Args:
            output_dir: Root directory receiving one subfolder per device
        """
        self.file_manager = FileManager(Path(output_dir))
        self.logger = logging.getLogger(__name__)

    @property
    def output_dir(self) -> Path:
        return self.file_manager.output_dir

    def extract(self, archive: ApkArchive, device: DeviceRecord) -> ExtractionResult:
        """
        Extract every payload of a device from an open archive.

        Entries are processed in catalog order and the first missing or
        unreadable one aborts the run. Files written before the failure
        are left in place.

        Args:
            archive: Open APK archive
            device: Device whose payloads are wanted

        Returns:
            ExtractionResult listing the written files

        Raises:
            ExtractionFailedError: On a missing entry, I/O error or corrupt data
        """
        self.logger.info(f"Starting extraction: {device.name} from {archive.path}")
        start = time.time()

        try:
            device_dir = self.file_manager.prepare_device_dir(device)
        except OSError as e:
            self.logger.error(f"Cannot create {self.file_manager.device_dir(device)}: {e}")
            raise ExtractionFailedError(
                device.name, f"cannot create output folder: {e}", e
            ) from e

        existing = self.file_manager.existing_payloads(device)
        if existing:
            self.logger.info(f"Overwriting {len(existing)} existing file(s) in {device_dir}")

        result = ExtractionResult(device=device.name, output_directory=device_dir)

        for filename in device.payload_files:
            entry_name = ASSET_PREFIX + filename
            info = archive.find_entry(entry_name)
            if info is None:
                error = KeyError(entry_name)
                self.logger.error(f"{entry_name} not found in {archive.path}")
                raise ExtractionFailedError(
                    device.name, f"{entry_name} not found in archive", error
                ) from error

            destination = self.file_manager.destination(device, filename)
            try:
                written = archive.extract_entry(info, destination)
            except _EXTRACT_ERRORS as e:
                self.logger.error(f"Failed to extract {entry_name}: {e}")
                raise ExtractionFailedError(
                    device.name, f"failed to extract {entry_name}: {e}", e
                ) from e

            self.logger.debug(f"Wrote {destination} ({written} bytes)")
            result.files.append(destination)
            result.bytes_written += written

        result.elapsed_seconds = round(time.time() - start, 2)
        self.logger.info(
            f"Completed extraction: {device.name} - {len(result.files)} files, "
            f"{result.bytes_written} bytes"
        )
        return result

    def extract_from_path(
        self, source: Union[str, Path], device: DeviceRecord
    ) -> ExtractionResult:
        """
        Open an APK, extract a device's payloads and close it again.

        Args:
            source: Path to an APK that already passed validate_source
            device: Device whose payloads are wanted

        Returns:
            ExtractionResult listing the written files

        Raises:
            ExtractionFailedError: If the archive cannot be opened or extraction fails
        """
        try:
            archive = ApkArchive(source)
        except ArchiveError as e:
            self.logger.error(str(e))
            raise ExtractionFailedError(device.name, str(e), e) from e

        with archive:
            return self.extract(archive, device)
