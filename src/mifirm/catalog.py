"""Device catalog: which firmware files each supported wearable needs."""

from typing import List, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from .errors import CatalogIndexError


class DeviceRecord(BaseModel):
    """A device and the payload files extracted for it."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., min_length=1, description="Display name and output folder")
    payload_files: Tuple[str, ...] = Field(
        ..., min_length=1, description="Filenames looked up under assets/"
    )

    @field_validator("payload_files")
    @classmethod
    def validate_payload_files(cls, v: Tuple[str, ...]) -> Tuple[str, ...]:
        """Payloads are plain names, never paths."""
        for filename in v:
            if not filename or "/" in filename or "\\" in filename:
                raise ValueError(
                    f"Payload file '{filename}' must be a plain name without separators"
                )
            if filename in (".", ".."):
                raise ValueError(f"Payload file '{filename}' is not a file name")
        return v


class Catalog(BaseModel):
    """Ordered, read-only list of devices addressed by 1-based position."""

    model_config = ConfigDict(frozen=True)

    devices: Tuple[DeviceRecord, ...] = Field(..., min_length=1)

    @model_validator(mode="after")
    def validate_unique_names(self) -> "Catalog":
        """Ensure all device names are unique."""
        names = [device.name for device in self.devices]
        if len(names) != len(set(names)):
            raise ValueError("All device names must be unique")
        return self

    def __len__(self) -> int:
        return len(self.devices)

    def get(self, index: int) -> DeviceRecord:
        """
        Look up a device by its 1-based position.

        Args:
            index: Position as shown to the user

        Returns:
            The device record

        Raises:
            CatalogIndexError: If index is outside [1, len(catalog)]
        """
        if not 1 <= index <= len(self.devices):
            raise CatalogIndexError(
                f"Device index {index} out of range 1-{len(self.devices)}"
            )
        return self.devices[index - 1]

    def find(self, name: str) -> DeviceRecord:
        """Look up a device by its exact name."""
        for device in self.devices:
            if device.name == name:
                return device
        raise CatalogIndexError(f"Unknown device: {name}")

    def names(self) -> List[str]:
        return [device.name for device in self.devices]


DEFAULT_CATALOG = Catalog(
    devices=(
        DeviceRecord(name="Mi Band (Model 1)", payload_files=("Mili.fw",)),
        DeviceRecord(name="Mi Band (Model 1A)", payload_files=("Mili_1a.fw",)),
        DeviceRecord(name="Mi Band (Model 1S)", payload_files=("Mili_hr.fw",)),
        DeviceRecord(name="Mi Band 2", payload_files=("Mili_pro.ft.en",)),
        DeviceRecord(
            name="Mi Band 3", payload_files=("Mili_wuhan.fw", "Mili_wuhan.res")
        ),
        DeviceRecord(
            name="Mi Band 3 (NFC)",
            payload_files=("Mili_chongqing.fw", "Mili_chongqing.res"),
        ),
        DeviceRecord(
            name="Amazfit Bip",
            payload_files=("Mili_chaohu.fw", "Mili_chaohu.res", "Mili_chaohu.gps"),
        ),
        DeviceRecord(
            name="Amazfit Cor", payload_files=("Mili_tempo.fw", "Mili_tempo.res")
        ),
    )
)
