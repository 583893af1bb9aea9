"""Output folder layout for extracted firmware."""

from pathlib import Path
from typing import List

from .catalog import DeviceRecord


class FileManager:
    """Manages the output root and the per-device folders beneath it."""

    def __init__(self, output_dir: Path) -> None:
        """
        Initialize file manager.

        Args:
            output_dir: Root directory receiving one subfolder per device
        """
        self.output_dir = Path(output_dir)

    def device_dir(self, device: DeviceRecord) -> Path:
        return self.output_dir / device.name

    def prepare_device_dir(self, device: DeviceRecord) -> Path:
        """
        Create the device's output folder and any missing parents.

        Args:
            device: Device being extracted

        Returns:
            Path to the device folder
        """
        device_dir = self.device_dir(device)
        device_dir.mkdir(parents=True, exist_ok=True)
        return device_dir

    def destination(self, device: DeviceRecord, filename: str) -> Path:
        return self.device_dir(device) / filename

    def existing_payloads(self, device: DeviceRecord) -> List[Path]:
        """List payload files of a device already present on disk."""
        return [
            self.destination(device, filename)
            for filename in device.payload_files
            if self.destination(device, filename).is_file()
        ]

