"""
Command-line interface for parcel.
Provides commands for tracking a parcel and managing configuration.
"""

import sys
import click
from rich.console import Console
from rich.table import Table
from pathlib import Path

from parcel import __version__
from parcel.config import OUTPUT_FORMATS, STDOUT
from parcel.exceptions import ParcelError
from parcel.models import Carrier

console = Console(stderr=True)


@click.group()
@click.version_option(version=__version__, prog_name="parcel")
@click.option(
    "--config", "-C", "config_path",
    type=click.Path(exists=True, dir_okay=False),
    help="Path to env configuration file"
)
@click.pass_context
def cli(ctx, config_path):
    """parcel - track USPS, UPS, FedEx and DHL shipments"""
    ctx.ensure_object(dict)
    ctx.obj["config_path"] = config_path


@cli.command()
@click.option("--number", "-n", required=True, help="Tracking number")
@click.option("--carrier", "-c", required=True, help="Carrier: DHL, FEDEX, UPS or USPS")
@click.option("--output", "-o", default=STDOUT, show_default=True, help="Path to output file")
@click.option("--pretty", is_flag=True, help="Indent the output JSON")
@click.option("--tz", "timezone", default=None, help="IANA time zone used for timestamps")
@click.option(
    "--format", "output_format",
    type=click.Choice(OUTPUT_FORMATS, case_sensitive=False),
    default=None,
    help="Output format (default from PARCEL_FORMAT, else json)"
)
@click.option("--pickle", "use_pickle", is_flag=True, help="Shortcut for --format pickle")
@click.option("--quiet", "-q", is_flag=True, help="Do not log to stderr (LOG_FILE still applies)")
@click.pass_context
def track(ctx, number, carrier, output, pretty, timezone, output_format, use_pickle, quiet):
    """Track a shipment and print the result."""
    from parcel.config import init_config
    from parcel.logging_config import setup_logging
    from parcel.output import serialize, write_output
    from parcel.tracking import TrackingManager

    try:
        config = init_config(ctx.obj.get("config_path"))
    except ParcelError as e:
        console.print(f"[red]✗ {e}[/red]")
        sys.exit(1)

    if timezone is not None:
        config.timezone = timezone
    if use_pickle:
        config.output_format = "pickle"
    elif output_format:
        config.output_format = output_format.lower()

    errors = config.validate()
    if errors:
        for error in errors:
            console.print(f"[red]✗ {error}[/red]")
        sys.exit(1)

    setup_logging(config, console=not quiet)

    try:
        manager = TrackingManager(config)
        result = manager.track(number, carrier)
        # Encode fully before touching the output target
        data = serialize(result, config.output_format, pretty=pretty)
        write_output(data, output)
    except ParcelError as e:
        console.print(f"[red]✗ {e}[/red]")
        sys.exit(1)


@cli.command()
def carriers():
    """List supported carriers."""
    table = Table(title="Supported Carriers")
    table.add_column("Code", style="cyan")

    for carrier in Carrier:
        table.add_row(carrier.value)

    Console().print(table)


@cli.command()
@click.argument("config_path", type=click.Path())
def init(config_path):
    """Initialize configuration file."""
    config_path = Path(config_path)

    if config_path.exists():
        if not click.confirm(f"{config_path} already exists. Overwrite?"):
            return

    template = '''# parcel configuration

# IANA time zone for timestamps (empty = system local)
PARCEL_TZ=

# Tracking endpoint
PARCEL_TIMEOUT=5

# Output format: json or pickle
PARCEL_FORMAT=json

# Logging
LOG_LEVEL=WARNING
LOG_FILE=
'''

    config_path.write_text(template, encoding='utf-8')
    console.print(f"[green]✓ Configuration file created: {config_path}[/green]")
    console.print("\nEdit this file with your settings, then run:")
    console.print(f"  parcel --config {config_path} track -n <number> -c <carrier>")


def main():
    """Main entry point."""
    cli()


if __name__ == "__main__":
    main()
