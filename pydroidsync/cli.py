"""CLI interface for pydroidsync."""

import logging
from typing import Any, Optional

import click
from rich.markup import escape
from rich.progress import Progress, SpinnerColumn, TextColumn

from .adb import AdbChannel
from .config import ADB_PATH_KEY, config
from .exceptions import DroidSyncError
from .output import OutputFormatter
from .sync import SyncConfig, SyncEngine, parse_listing, split_ignore_patterns
from .utils import ensure_trailing_separator, format_timestamp

logger = logging.getLogger(__name__)


@click.group()
@click.option("--quiet", "-q", is_flag=True, help="Suppress non-essential output")
@click.option("--json", is_flag=True, help="Output in JSON format")
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    help="Enable verbose/debug logging output",
)
@click.version_option(package_name="pydroidsync")
@click.pass_context
def main(ctx: Any, quiet: bool, json: bool, verbose: bool) -> None:
    """PyDroidSync - Mirror files from an Android device to a local directory."""
    ctx.ensure_object(dict)
    ctx.obj["out"] = OutputFormatter(json_output=json, quiet=quiet)
    ctx.obj["verbose"] = verbose

    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            datefmt="%H:%M:%S",
        )
        logging.getLogger("pydroidsync").setLevel(logging.DEBUG)
    elif quiet or json:
        logging.basicConfig(level=logging.WARNING)
    else:
        # Transferred files are reported at INFO level
        logging.basicConfig(level=logging.INFO, format="%(message)s")


@main.command()
@click.option("--adb", "adb_path", help="Path to the adb executable")
@click.option("--serial", "-s", help="Default device serial number")
@click.pass_context
def init(ctx: Any, adb_path: Optional[str], serial: Optional[str]) -> None:
    """Save default adb settings.

    Stores the settings in ~/.config/pydroidsync/config for future use.
    """
    out: OutputFormatter = ctx.obj["out"]

    if not adb_path and not serial:
        adb_path = click.prompt("Path to adb", default=config.adb_path)

    try:
        config.save(adb_path=adb_path, device_serial=serial)
    except DroidSyncError as e:
        out.error(str(e))
        ctx.exit(1)

    out.success("Configuration saved successfully")
    out.info(f"Config file: {config.get_config_path()}")


@main.command()
@click.argument("remote_path", default="/sdcard/")
@click.option(
    "--adb", "adb_path", envvar=ADB_PATH_KEY, help="Path to the adb executable"
)
@click.option("--serial", "-s", envvar="ANDROID_SERIAL", help="Device serial number")
@click.pass_context
def ls(
    ctx: Any, remote_path: str, adb_path: Optional[str], serial: Optional[str]
) -> None:
    """List a directory on the device.

    REMOTE_PATH: Remote directory (default: /sdcard/)
    """
    out: OutputFormatter = ctx.obj["out"]
    channel = AdbChannel(adb_path=adb_path, serial=serial)
    remote_path = ensure_trailing_separator(remote_path)

    try:
        entries = parse_listing(channel.list(remote_path), remote_path)
    except DroidSyncError as e:
        out.error(str(e))
        ctx.exit(1)

    if out.json_output:
        out.output_json(
            [
                {
                    "path": entry.path,
                    "name": entry.name,
                    "is_directory": entry.is_directory,
                    "size": entry.size,
                    "timestamp": entry.timestamp.isoformat(),
                    "is_readable": entry.is_readable,
                }
                for entry in entries
            ]
        )
        return

    if not entries:
        return

    table_data = [
        {
            "name": entry.name + ("/" if entry.is_directory else ""),
            "size": "" if entry.is_directory else out.format_size(entry.size),
            "modified": format_timestamp(entry.timestamp),
        }
        for entry in entries
    ]
    out.output_table(
        table_data,
        ["name", "size", "modified"],
        {"name": "Name", "size": "Size", "modified": "Modified"},
    )


@main.command()
@click.argument("source", required=False)
@click.argument("target", required=False)
@click.option(
    "--adb", "adb_path", envvar=ADB_PATH_KEY, help="Path to the adb executable"
)
@click.option("--serial", "-s", envvar="ANDROID_SERIAL", help="Device serial number")
@click.option(
    "--ignore",
    "-i",
    "ignore",
    default="",
    help="Semicolon-separated ignore patterns, e.g. '*.mkv;cache/'",
)
@click.option(
    "--tolerance",
    type=float,
    default=2.0,
    show_default=True,
    help="Timestamp difference in seconds treated as unchanged",
)
@click.option(
    "--no-default-ignores",
    is_flag=True,
    help="Do not skip /proc/, /acct/, /dev/, /tmp/ and /sys/",
)
@click.option("--dry-run", is_flag=True, help="Show what would be pulled")
@click.pass_context
def sync(
    ctx: Any,
    source: Optional[str],
    target: Optional[str],
    adb_path: Optional[str],
    serial: Optional[str],
    ignore: str,
    tolerance: float,
    no_default_ignores: bool,
    dry_run: bool,
) -> None:
    """Mirror a device directory to a local directory.

    SOURCE: Directory on the device (e.g. /sdcard/)
    TARGET: Local directory

    Only new or changed files are pulled. Files are considered unchanged
    when size matches and modification times are within the tolerance.

    Examples:
        pydroidsync sync /sdcard/ ./phone
        pydroidsync sync / ./phone -i '*.mkv;*.iso;cache/'
        pydroidsync sync /sdcard/DCIM/ ./photos -s emulator-5554 --dry-run
    """
    out: OutputFormatter = ctx.obj["out"]

    if not source or not target:
        click.echo(ctx.get_help())
        return

    try:
        sync_config = SyncConfig(
            ignore_patterns=split_ignore_patterns(ignore),
            change_tolerance=tolerance,
            use_default_ignores=not no_default_ignores,
            dry_run=dry_run,
        )
    except DroidSyncError as e:
        out.error(str(e))
        ctx.exit(1)

    logger.debug(f"Sync config: {sync_config}")

    channel = AdbChannel(adb_path=adb_path, serial=serial)
    engine = SyncEngine(channel, sync_config, output=out)

    out.info(f"Syncing: {source} -> {target}")
    if dry_run:
        out.info("Dry run: No files will be pulled")

    try:
        with Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            transient=True,
            disable=out.quiet or out.json_output,
        ) as progress:
            task = progress.add_task("Listing device...", total=None)

            def on_directory(remote_dir: str) -> None:
                progress.update(task, description=f"Scanning {escape(remote_dir)}")

            stats = engine.synchronize(source, target, progress_callback=on_directory)
    except DroidSyncError as e:
        out.error(str(e))
        ctx.exit(1)

    if out.json_output:
        out.output_json(stats)


if __name__ == "__main__":
    main()
