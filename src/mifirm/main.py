"""CLI entry point for MiFirm."""

import logging
import sys
from pathlib import Path
from typing import Optional

import click
from rich.console import Console

from .catalog import DEFAULT_CATALOG, Catalog, DeviceRecord
from .config import MiFirmConfig
from .errors import (
    CatalogIndexError,
    ExtractionFailedError,
    FeedError,
    InvalidSelectionError,
    InvalidSourceError,
)
from .extractor import ExtractionResult, FirmwareExtractor
from .feed import fetch_latest_release_url, open_in_browser
from .prompts import (
    SourceChoice,
    parse_device_selection,
    prompt_apk_path,
    prompt_device,
    prompt_source_choice,
    render_catalog,
)
from .source import validate_source

console = Console()


def setup_logging(config: MiFirmConfig) -> None:
    """Setup logging configuration."""
    handlers = [logging.StreamHandler()]
    if config.log_file:
        config.output_directory.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(config.output_directory / config.log_file))

    logging.basicConfig(
        level=getattr(logging, config.log_level),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=handlers,
    )


def load_config(
    config_path: Optional[Path],
    output_dir: Optional[Path],
    log_level: Optional[str],
) -> MiFirmConfig:
    """Load configuration and apply CLI overrides."""
    config = MiFirmConfig.from_json(config_path) if config_path else MiFirmConfig()
    if output_dir:
        config.output_directory = output_dir
    if log_level:
        config.log_level = log_level.upper()
    return config


def resolve_device(value: str, catalog: Catalog) -> DeviceRecord:
    """Accept either a 1-based catalog number or an exact device name."""
    if value.strip().lstrip("-").isdigit():
        return parse_device_selection(value, catalog)
    try:
        return catalog.find(value)
    except CatalogIndexError as e:
        raise InvalidSelectionError(str(e)) from e


def _open_download_page(config: MiFirmConfig) -> None:
    click.echo("Opening APKMirror link, standby...")
    url = fetch_latest_release_url(config.feed_url, timeout=config.feed_timeout)
    click.echo(url)
    open_in_browser(url)


def _print_result(result: ExtractionResult) -> None:
    click.echo(f"\n✅ Extracted {len(result.files)} file(s) for {result.device}")
    for path in result.files:
        click.echo(f"  • {path}")
    click.echo(f"📁 Firmware saved to: {result.output_directory}")
    click.echo(f"⏱️ Time: {result.elapsed_seconds:.2f}s")


@click.command()
@click.option(
    "--apk",
    "-a",
    type=str,
    default=None,
    help="Path to a pre-downloaded Mi Fit APK (prompted for if omitted)",
)
@click.option(
    "--device",
    "-d",
    type=str,
    default=None,
    help="Device number or exact device name (prompted for if omitted)",
)
@click.option(
    "--output-dir",
    "-o",
    type=click.Path(path_type=Path),
    default=None,
    help="Output directory (overrides config)",
)
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=True, path_type=Path),
    default=None,
    help="JSON configuration file",
)
@click.option(
    "--log-level",
    "-l",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    default=None,
    help="Log level (overrides config)",
)
@click.option(
    "--open-download-page",
    is_flag=True,
    help="Open the latest APKMirror release page before asking for the APK",
)
def extract(
    apk: Optional[str],
    device: Optional[str],
    output_dir: Optional[Path],
    config_path: Optional[Path],
    log_level: Optional[str],
    open_download_page: bool,
) -> None:
    """
    Extract Mi Band / Amazfit firmware from a Mi Fit APK.

    Copies the selected device's firmware files from the APK's assets
    folder into "<output dir>/<device name>/".
    """
    try:
        config = load_config(config_path, output_dir, log_level)
        setup_logging(config)

        selected: Optional[DeviceRecord] = None
        if device is not None:
            try:
                selected = resolve_device(device, DEFAULT_CATALOG)
            except InvalidSelectionError as e:
                raise click.BadParameter(str(e), param_hint="--device")

        if apk is None:
            if (
                open_download_page
                or prompt_source_choice(console) is SourceChoice.DOWNLOAD_PAGE
            ):
                _open_download_page(config)
            apk = prompt_apk_path(console)
        elif open_download_page:
            _open_download_page(config)

        source = validate_source(apk)

        if selected is None:
            selected = prompt_device(DEFAULT_CATALOG, console)

        extractor = FirmwareExtractor(config.output_directory)
        result = extractor.extract_from_path(source, selected)
        _print_result(result)

    except InvalidSourceError as e:
        click.echo(f"❌ {e}", err=True)
        sys.exit(1)

    except ExtractionFailedError as e:
        click.echo(f"❌ {e}", err=True)
        sys.exit(1)

    except FeedError as e:
        click.echo(f"❌ Failed to open APKMirror link: {e}", err=True)
        sys.exit(1)

    except FileNotFoundError as e:
        click.echo(f"❌ Configuration file not found: {e}", err=True)
        sys.exit(1)

    except OSError as e:
        click.echo(f"❌ File system error: {e}", err=True)
        sys.exit(1)

    except ValueError as e:
        click.echo(f"❌ Configuration error: {e}", err=True)
        sys.exit(1)

    except KeyboardInterrupt:
        click.echo("\n⚠️ Extraction interrupted by user", err=True)
        sys.exit(1)


@click.command()
def devices() -> None:
    """List supported devices and their firmware files."""
    console.print(render_catalog(DEFAULT_CATALOG))


@click.command()
@click.option(
    "--feed-url",
    type=str,
    default=None,
    help="Release feed URL (defaults to the Mi Fit APKMirror feed)",
)
@click.option(
    "--open/--no-open",
    "open_page",
    default=True,
    help="Open the release page in a browser",
)
def latest(feed_url: Optional[str], open_page: bool) -> None:
    """Print the download page of the newest Mi Fit release."""
    try:
        config = MiFirmConfig(feed_url=feed_url) if feed_url else MiFirmConfig()
        url = fetch_latest_release_url(config.feed_url, timeout=config.feed_timeout)
    except (FeedError, ValueError) as e:
        click.echo(f"❌ {e}", err=True)
        sys.exit(1)

    click.echo(url)
    if open_page:
        open_in_browser(url)


@click.command()
@click.argument("config_file", type=click.Path(path_type=Path))
def validate(config_file: Path) -> None:
    """Validate a configuration file."""
    try:
        config = MiFirmConfig.from_json(config_file)
        click.echo("✅ Configuration is valid!")
        _print_config_summary(config)
    except Exception as e:
        click.echo(f"❌ Configuration error: {e}", err=True)
        sys.exit(1)


def _print_config_summary(config: MiFirmConfig) -> None:
    """Print configuration summary."""
    click.echo("\n📋 Configuration Summary:")
    click.echo(f"  Output Directory: {config.output_directory}")
    click.echo(f"  Log Level: {config.log_level}")
    click.echo(f"  Log File: {config.log_file or '-'}")
    click.echo(f"  Feed URL: {config.feed_url}")
    click.echo(f"  Feed Timeout: {config.feed_timeout}s")


@click.group()
def cli() -> None:
    """MiFirm - extract wearable firmware from the Mi Fit APK."""
    pass


cli.add_command(extract, "extract")
cli.add_command(devices, "devices")
cli.add_command(latest, "latest")
cli.add_command(validate, "validate")


if __name__ == "__main__":
    cli()
