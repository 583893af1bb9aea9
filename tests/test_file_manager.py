from mifirm.catalog import DEFAULT_CATALOG
from mifirm.file_manager import FileManager

MI_BAND_3 = DEFAULT_CATALOG.find("Mi Band 3")


def test_prepare_device_dir_creates_parents(tmp_path):
    manager = FileManager(tmp_path / "nested" / "Firmware Files")

    device_dir = manager.prepare_device_dir(MI_BAND_3)

    assert device_dir == tmp_path / "nested" / "Firmware Files" / "Mi Band 3"
    assert device_dir.is_dir()
    # Idempotent on an existing folder.
    assert manager.prepare_device_dir(MI_BAND_3) == device_dir


def test_destination(tmp_path):
    manager = FileManager(tmp_path)
    assert manager.destination(MI_BAND_3, "Mili_wuhan.res") == (
        tmp_path / "Mi Band 3" / "Mili_wuhan.res"
    )


def test_existing_payloads(tmp_path):
    manager = FileManager(tmp_path)
    assert manager.existing_payloads(MI_BAND_3) == []

    manager.prepare_device_dir(MI_BAND_3)
    manager.destination(MI_BAND_3, "Mili_wuhan.res").write_bytes(b"res")
    (manager.device_dir(MI_BAND_3) / "unrelated.txt").write_text("x")

    assert manager.existing_payloads(MI_BAND_3) == [
        tmp_path / "Mi Band 3" / "Mili_wuhan.res"
    ]
