import zipfile
from pathlib import Path
from typing import Dict

import pytest

# Stored (uncompressed) filler so built APKs clear the minimum size check.
FILLER_SIZE = 70000


def build_apk(path: Path, entries: Dict[str, bytes], filler: bool = True) -> Path:
    """Write a zip with the given entries, padded past the source size floor."""
    with zipfile.ZipFile(path, "w", compression=zipfile.ZIP_DEFLATED) as zf:
        for name, data in entries.items():
            zf.writestr(name, data)
        if filler:
            zf.writestr(
                zipfile.ZipInfo("classes.dex"),
                b"\x00" * FILLER_SIZE,
                compress_type=zipfile.ZIP_STORED,
            )
    return path


@pytest.fixture
def make_apk(tmp_path):
    def _make(entries: Dict[str, bytes], name: str = "mifit.apk") -> Path:
        return build_apk(tmp_path / name, entries)

    return _make


@pytest.fixture
def output_dir(tmp_path) -> Path:
    return tmp_path / "Firmware Files"


def _entry_data_span(path: Path, name: str):
    """Offset and length of an entry's stored (compressed) bytes."""
    with zipfile.ZipFile(path) as zf:
        info = zf.getinfo(name)
    raw = path.read_bytes()
    local = info.header_offset
    name_len = int.from_bytes(raw[local + 26 : local + 28], "little")
    extra_len = int.from_bytes(raw[local + 28 : local + 30], "little")
    return local + 30 + name_len + extra_len, info.compress_size


def corrupt_entry(path: Path, name: str, skip: int = 0) -> Path:
    """Invert an entry's compressed bytes after the first skip bytes."""
    start, size = _entry_data_span(path, name)
    data = bytearray(path.read_bytes())
    for offset in range(start + skip, start + size):
        data[offset] ^= 0xFF
    path.write_bytes(bytes(data))
    return path


def mark_encrypted(path: Path, name: str) -> Path:
    """Set the encryption flag of an entry in its local and central headers."""
    data = bytearray(path.read_bytes())
    encoded = name.encode()
    # (signature, flag bits offset, file name offset)
    for signature, flag_offset, name_offset in (
        (b"PK\x03\x04", 6, 30),
        (b"PK\x01\x02", 8, 46),
    ):
        pos = data.find(signature)
        while pos >= 0:
            if data[pos + name_offset : pos + name_offset + len(encoded)] == encoded:
                data[pos + flag_offset] |= 0x01
            pos = data.find(signature, pos + 4)
    path.write_bytes(bytes(data))
    return path


# Varied but compressible payload so compressed streams have real content.
FIRMWARE_BYTES = b"".join(
    f"block {i:05d} firmware payload\n".encode() for i in range(400)
)


@pytest.fixture
def make_lzma_apk(tmp_path):
    def _make(entries: Dict[str, bytes], name: str = "mifit-lzma.apk") -> Path:
        path = tmp_path / name
        with zipfile.ZipFile(path, "w", compression=zipfile.ZIP_LZMA) as zf:
            for entry_name, data in entries.items():
                zf.writestr(entry_name, data)
            zf.writestr(
                zipfile.ZipInfo("classes.dex"),
                b"\x00" * FILLER_SIZE,
                compress_type=zipfile.ZIP_STORED,
            )
        return path

    return _make
