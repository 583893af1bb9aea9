"""Read-only access to the zip container inside an APK."""

import lzma
import shutil
import zipfile
import zlib
from pathlib import Path
from typing import List, Optional, Union

from .errors import ArchiveError

COPY_CHUNK_SIZE = 1024 * 1024

# Raised by zipfile and its decompressors for encrypted, unsupported or
# damaged entries. RuntimeError also covers NotImplementedError.
_READ_ERRORS = (
    zipfile.BadZipFile,
    zlib.error,
    lzma.LZMAError,
    EOFError,
    RuntimeError,
)


class ApkArchive:
    """Scoped read-only handle on an APK (zip) file."""

    def __init__(self, path: Union[str, Path]) -> None:
        """
        Open the archive for random access.

        Args:
            path: Path to the APK file

        Raises:
            ArchiveError: If the file is not a readable zip container
        """
        self.path = Path(path)
        try:
            self._zip = zipfile.ZipFile(self.path, "r")
        except (zipfile.BadZipFile, zipfile.LargeZipFile) as e:
            raise ArchiveError(f"Not a valid zip container: {self.path}: {e}") from e
        except OSError as e:
            raise ArchiveError(f"Cannot open archive {self.path}: {e}") from e

    def names(self) -> List[str]:
        return self._zip.namelist()

    def find_entry(self, name: str) -> Optional[zipfile.ZipInfo]:
        """Return the entry stored under exactly this name, or None."""
        try:
            return self._zip.getinfo(name)
        except KeyError:
            return None

    def extract_entry(self, info: zipfile.ZipInfo, destination: Path) -> int:
        """
        Write an entry's decompressed bytes to destination, overwriting it.

        Args:
            info: Entry returned by find_entry
            destination: Target file path

        Returns:
            Number of bytes written

        Raises:
            ArchiveError: If the entry is encrypted, uses an unsupported
                compression method or its data is corrupt
            OSError: If the destination cannot be written
        """
        try:
            src = self._zip.open(info, "r")
        except _READ_ERRORS as e:
            raise ArchiveError(f"Cannot read {info.filename}: {e}") from e

        with src, destination.open("wb") as dst:
            try:
                shutil.copyfileobj(src, dst, COPY_CHUNK_SIZE)
            except _READ_ERRORS as e:
                raise ArchiveError(f"Corrupt data in {info.filename}: {e}") from e
        return info.file_size

    def close(self) -> None:
        self._zip.close()

    def __enter__(self) -> "ApkArchive":
        """Context manager entry."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        """Context manager exit; always releases the file handle."""
        self.close()
