"""Interactive input: how to get the APK, where it is, and which device."""

from enum import Enum
from typing import Optional

from rich.console import Console
from rich.prompt import Prompt
from rich.table import Table

from .catalog import Catalog, DeviceRecord
from .errors import CatalogIndexError, InvalidSelectionError


class SourceChoice(Enum):
    """Ways of obtaining the Mi Fit APK."""

    DOWNLOAD_PAGE = "1"
    LOCAL_FILE = "2"


def parse_source_choice(text: str) -> SourceChoice:
    try:
        return SourceChoice(text.strip())
    except ValueError:
        raise InvalidSelectionError(f"Expected 1 or 2, got {text!r}")


def parse_device_selection(text: str, catalog: Catalog) -> DeviceRecord:
    """
    Turn a typed number into a device record.

    Args:
        text: Raw user input
        catalog: Catalog the number refers to

    Returns:
        The selected device

    Raises:
        InvalidSelectionError: If the input is not a number in [1, len(catalog)]
    """
    try:
        index = int(text.strip())
    except ValueError:
        raise InvalidSelectionError(f"Not a number: {text!r}")

    try:
        return catalog.get(index)
    except CatalogIndexError as e:
        raise InvalidSelectionError(str(e)) from e


def render_catalog(catalog: Catalog) -> Table:
    table = Table(title="Supported devices")
    table.add_column("#", justify="right", style="cyan")
    table.add_column("Device", style="bold", no_wrap=True)
    table.add_column("Firmware files")
    for position, device in enumerate(catalog.devices, start=1):
        table.add_row(str(position), device.name, ", ".join(device.payload_files))
    return table


def prompt_source_choice(console: Optional[Console] = None) -> SourceChoice:
    console = console or Console()
    console.print("Please select one of the following options of obtaining the Mi Fit APK:")
    console.print("1. Open APKMirror link")
    console.print("2. Specify pre-downloaded file")
    while True:
        answer = Prompt.ask("Option", console=console, default="2")
        try:
            return parse_source_choice(answer)
        except InvalidSelectionError as e:
            console.print(f"[red]{e}[/]")


def prompt_apk_path(console: Optional[Console] = None) -> str:
    console = console or Console()
    while True:
        answer = Prompt.ask(
            "Please enter the full path of the APK file you would like to extract",
            console=console,
        ).strip()
        if answer:
            # Paths pasted from a file manager often arrive quoted.
            return answer.strip("\"'")


def prompt_device(catalog: Catalog, console: Optional[Console] = None) -> DeviceRecord:
    """Show the catalog and ask until a valid device number is given."""
    console = console or Console()
    console.print(render_catalog(catalog))
    while True:
        answer = Prompt.ask(
            "Which device would you like to extract firmware for?", console=console
        )
        try:
            return parse_device_selection(answer, catalog)
        except InvalidSelectionError as e:
            console.print(f"[red]{e}[/]")
