"""
geocalib CLI - Command-line interface for render/geographic calibration.

Loads correspondence points and viewport settings from a YAML configuration,
then reports calibration status, converts coordinates or evaluates accuracy.
"""

import sys
from pathlib import Path
from typing import Optional

import click

from .. import __version__, configure_logging
from ..calibration import CoordinateCalibrator, PositionAccuracyTester
from ..core.config_spec import GeoCalibConfig, load_config
from ..core.exceptions import (
    CalibrationError, ConfigurationError, InverseUndefinedError, MissingProviderDataError
)
from ..core.types import GeoPoint, Projection, RenderPoint


def _load(config_path: Path, verbose: bool) -> GeoCalibConfig:
    """Load configuration and apply its logging settings."""
    try:
        config = load_config(config_path)
    except ConfigurationError as e:
        click.echo(f"❌ {e}", err=True)
        sys.exit(1)

    configure_logging("debug" if verbose or config.verbose else config.log_level)
    return config


def _build_calibrator(config: GeoCalibConfig) -> CoordinateCalibrator:
    """Build the calibrator, preloading configured points."""
    try:
        return CoordinateCalibrator.from_config(config)
    except CalibrationError as e:
        click.echo(f"❌ Failed to load calibration points: {e}", err=True)
        sys.exit(1)


def _echo_projection(label: str, projection: Projection) -> None:
    first, second = projection.point
    click.echo(f"{label}: ({first:.9g}, {second:.9g}) [{projection.source.value}]")
    if projection.is_degraded:
        click.echo("⚠️  Degraded result: map provider data was unavailable", err=True)


@click.group()
@click.version_option(version=__version__, prog_name='geocalib')
def cli():
    """geocalib - Render-space to geographic coordinate calibration.

    \b
    Common Commands:
      geocalib validate config.yaml          - Validate configuration
      geocalib status config.yaml            - Show calibration status
      geocalib to-geo config.yaml X Y        - Convert render -> geographic
      geocalib to-render config.yaml LAT LON - Convert geographic -> render
      geocalib evaluate config.yaml          - Score checkpoints

    Use 'geocalib COMMAND --help' for more information on each command.
    """
    pass


@cli.command()
@click.argument('config_path', type=click.Path(exists=True, path_type=Path))
def validate(config_path: Path):
    """Validate a configuration file.

    CONFIG_PATH: Path to YAML configuration file
    """
    try:
        config = load_config(config_path)
    except ConfigurationError as e:
        click.echo(f"❌ {e}", err=True)
        sys.exit(1)

    click.echo(f"✓ Configuration is valid: {config_path}")
    click.echo(f"   Viewport: {config.viewport.width:g}x{config.viewport.height:g}")
    click.echo(f"   Map view: {'configured' if config.map_view else 'not configured'}")
    click.echo(f"   Correspondence points: {len(config.points)}")
    click.echo(f"   Checkpoints: {len(config.checkpoints)}")


@cli.command()
@click.argument('config_path', type=click.Path(exists=True, path_type=Path))
@click.option('--verbose', '-v', is_flag=True, help='Enable verbose output')
def status(config_path: Path, verbose: bool):
    """Show calibration status after loading configured points.

    CONFIG_PATH: Path to YAML configuration file
    """
    config = _load(config_path, verbose)
    calibrator = _build_calibrator(config)
    click.echo(calibrator.status().format_status())


@cli.command('to-geo')
@click.argument('config_path', type=click.Path(exists=True, path_type=Path))
@click.argument('x', type=float)
@click.argument('y', type=float)
@click.option('--verbose', '-v', is_flag=True, help='Enable verbose output')
def to_geo(config_path: Path, x: float, y: float, verbose: bool):
    """Convert a render position to latitude/longitude.

    \b
    CONFIG_PATH: Path to YAML configuration file
    X, Y: Render-space position
    """
    config = _load(config_path, verbose)
    calibrator = _build_calibrator(config)
    try:
        projection = calibrator.to_geographic(RenderPoint(x, y))
    except MissingProviderDataError as e:
        click.echo(f"❌ {e}", err=True)
        sys.exit(1)
    _echo_projection("(lat, lon)", projection)


@cli.command('to-render')
@click.argument('config_path', type=click.Path(exists=True, path_type=Path))
@click.argument('lat', type=float)
@click.argument('lon', type=float)
@click.option('--verbose', '-v', is_flag=True, help='Enable verbose output')
def to_render(config_path: Path, lat: float, lon: float, verbose: bool):
    """Convert latitude/longitude to a render position.

    \b
    CONFIG_PATH: Path to YAML configuration file
    LAT, LON: Geographic position in degrees
    """
    config = _load(config_path, verbose)
    calibrator = _build_calibrator(config)
    try:
        projection = calibrator.to_render(GeoPoint(lat, lon))
    except (InverseUndefinedError, MissingProviderDataError) as e:
        click.echo(f"❌ {e}", err=True)
        sys.exit(1)
    _echo_projection("(x, y)", projection)


@cli.command()
@click.argument('config_path', type=click.Path(exists=True, path_type=Path))
@click.option('--csv', 'csv_path', type=click.Path(path_type=Path), default=None,
              help='Write individual test results to this CSV file')
@click.option('--verbose', '-v', is_flag=True, help='Enable verbose output')
def evaluate(config_path: Path, csv_path: Optional[Path], verbose: bool):
    """Score configured checkpoints against the calibrated conversion.

    CONFIG_PATH: Path to YAML configuration file
    """
    config = _load(config_path, verbose)
    if not config.checkpoints:
        click.echo("❌ No checkpoints configured", err=True)
        sys.exit(1)

    calibrator = _build_calibrator(config)
    tester = PositionAccuracyTester(config.accuracy)
    try:
        for checkpoint in config.checkpoints:
            tester.evaluate(calibrator, checkpoint.render_point(), checkpoint.expected_point())
    except MissingProviderDataError as e:
        click.echo(f"❌ {e}", err=True)
        sys.exit(1)

    click.echo(tester.format_report())
    if csv_path is not None:
        tester.save_csv(csv_path)
        click.echo(f"💾 Results saved to: {csv_path}")


def main():
    """Main entry point for the CLI."""
    cli()


if __name__ == '__main__':
    main()
