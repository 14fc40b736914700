"""
Command-line interface for Candlescan.
"""

import random
import sys
from pathlib import Path
from typing import List, Optional

import click
from rich.console import Console
from rich.table import Table

from . import __version__
from .config import Config
from .data.loader import load_candles
from .data.simulator import simulate_candles
from .logger import get_scanner_logger
from .models.detections import Detection, PatternBias
from .models.market_data import Candle, Timeframe
from .strategies.filters import filter_detections, newest_first, search_detections
from .strategies.patterns.classifier import priority_order
from .strategies.scanner import PatternScanner

console = Console()

BIAS_STYLES = {
    PatternBias.BULLISH: "green",
    PatternBias.BEARISH: "red",
    PatternBias.NEUTRAL: "yellow",
}


def _series_options(func):
    """Shared candle-source options for scan commands."""
    options = [
        click.option("--file", "-f", "file_path", type=click.Path(exists=True, dir_okay=False, path_type=Path),
                     help="JSON or CSV candle file"),
        click.option("--simulate", is_flag=True, help="Scan a simulated series instead of a file"),
        click.option("--seed", type=int, default=None, help="Seed for simulated prices and confidence"),
        click.option("--instrument", "-i", default="EUR/USD", show_default=True, help="Instrument symbol"),
        click.option("--timeframe", "-t", type=click.Choice([t.value for t in Timeframe], case_sensitive=False),
                     default="H4", show_default=True, help="Timeframe label"),
    ]
    for option in reversed(options):
        func = option(func)
    return func


def _load_series(
    config: Config,
    file_path: Optional[Path],
    simulate: bool,
    seed: Optional[int],
    instrument: str,
    timeframe: Timeframe
) -> List[Candle]:
    if file_path and simulate:
        raise click.UsageError("Use either --file or --simulate, not both")
    if file_path:
        return load_candles(file_path)
    if not simulate:
        raise click.UsageError("Provide a candle source with --file or --simulate")

    catalogued = config.data.get_instrument(instrument)
    if catalogued is None:
        raise click.BadParameter(f"Unknown instrument for simulation: {instrument}", param_hint="--instrument")

    return simulate_candles(
        catalogued,
        timeframe,
        length=config.data.history_length,
        volatility=config.data.simulation_volatility,
        rng=random.Random(seed) if seed is not None else None
    )


def _scanner(config: Config, seed: Optional[int]) -> PatternScanner:
    return PatternScanner(seed=seed if seed is not None else config.scanner.confidence_seed)


def _render_detections(detections: List[Detection], title: str) -> None:
    table = Table(title=title, show_header=True, header_style="bold magenta")
    table.add_column("Time (UTC)", style="cyan")
    table.add_column("Pattern")
    table.add_column("Instrument")
    table.add_column("Timeframe")
    table.add_column("Price", justify="right")
    table.add_column("Confidence", justify="right")

    for detection in detections:
        style = BIAS_STYLES[detection.bias]
        table.add_row(
            detection.detected_at.strftime("%Y-%m-%d %H:%M"),
            f"[{style}]{detection.pattern.label}[/{style}]",
            detection.instrument,
            detection.timeframe,
            f"{detection.price:.5f}",
            f"{detection.confidence:.0%}",
        )

    console.print(table)


@click.group()
@click.version_option(version=__version__, prog_name="candlescan")
@click.option(
    "--env-file",
    "-e",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Path to .env configuration file"
)
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    help="Enable verbose logging"
)
@click.pass_context
def main(ctx: click.Context, env_file: Optional[Path], verbose: bool) -> None:
    """
    Candlescan: Candlestick Pattern Classification Engine

    Scans OHLC candle series for engulfing, hammer, pinbar, inverted hammer
    and doji patterns.
    """
    ctx.ensure_object(dict)

    try:
        ctx.obj["config"] = Config.load_from_env(str(env_file) if env_file else None)
    except ValueError as e:
        click.echo(f"Error loading configuration: {e}", err=True)
        sys.exit(1)

    config: Config = ctx.obj["config"]
    if verbose:
        config.logging.level = "DEBUG"

    ctx.obj["logger"] = get_scanner_logger(
        level=config.logging.level,
        log_file=config.logging.file_path,
        max_size=config.logging.max_size,
        backup_count=config.logging.backup_count
    )


@main.command()
@_series_options
@click.option("--newest-first", "newest_first_flag", is_flag=True, help="List the most recent detection first")
@click.option("--notify-only", is_flag=True, help="Only show detections of interest for notifications")
@click.option("--search", "-s", default="", help="Filter by instrument or pattern text")
@click.pass_context
def scan(
    ctx: click.Context,
    file_path: Optional[Path],
    simulate: bool,
    seed: Optional[int],
    instrument: str,
    timeframe: str,
    newest_first_flag: bool,
    notify_only: bool,
    search: str
) -> None:
    """Scan a whole candle series for patterns."""
    config: Config = ctx.obj["config"]
    logger = ctx.obj["logger"]
    instrument = instrument.upper()
    tf = Timeframe(timeframe.upper())

    try:
        series = _load_series(config, file_path, simulate, seed, instrument, tf)
    except ValueError as e:
        click.echo(f"Failed to load candles: {e}", err=True)
        sys.exit(1)

    detections = _scanner(config, seed).scan_history(series, instrument, tf)

    if notify_only:
        detections = filter_detections(detections, config.notifications)
    detections = search_detections(detections, search)
    if newest_first_flag:
        detections = newest_first(detections)

    if not detections:
        click.echo(f"No patterns found in {len(series)} candles")
    else:
        _render_detections(detections, f"{instrument} {tf.value} patterns")

    logger.info(f"Scan finished: {instrument} {tf.value}, {len(series)} candles, {len(detections)} detections")


@main.command()
@_series_options
@click.pass_context
def latest(
    ctx: click.Context,
    file_path: Optional[Path],
    simulate: bool,
    seed: Optional[int],
    instrument: str,
    timeframe: str
) -> None:
    """Classify only the most recent candle of a series."""
    config: Config = ctx.obj["config"]
    logger = ctx.obj["logger"]
    instrument = instrument.upper()
    tf = Timeframe(timeframe.upper())

    try:
        series = _load_series(config, file_path, simulate, seed, instrument, tf)
    except ValueError as e:
        click.echo(f"Failed to load candles: {e}", err=True)
        sys.exit(1)

    detection = _scanner(config, seed).detect_latest(series, instrument, tf)

    if detection is None:
        click.echo("No pattern on the latest candle")
    else:
        _render_detections([detection], f"{instrument} {tf.value} latest candle")

    logger.info(f"Latest check finished: {instrument} {tf.value}, pattern={detection.pattern.value if detection else None}")


@main.command()
def patterns() -> None:
    """List pattern types in classification priority order."""
    table = Table(title="Pattern Priority", show_header=True, header_style="bold magenta")
    table.add_column("#", justify="right", style="cyan")
    table.add_column("Pattern")
    table.add_column("Bias")
    table.add_column("Candles", justify="right")

    for rank, pattern in enumerate(priority_order(), start=1):
        style = BIAS_STYLES[pattern.bias]
        table.add_row(str(rank), pattern.label, f"[{style}]{pattern.bias.value}[/{style}]", str(pattern.candle_count))

    console.print(table)


@main.command()
@click.pass_context
def instruments(ctx: click.Context) -> None:
    """List the instrument catalogue and configured timeframes."""
    config: Config = ctx.obj["config"]

    table = Table(title="Instruments", show_header=True, header_style="bold magenta")
    table.add_column("Symbol", style="cyan")
    table.add_column("Name")
    table.add_column("Base Price", justify="right")
    table.add_column("Scanned", justify="center")
    table.add_column("Notify", justify="center")

    for instrument in config.data.instruments:
        scanned = instrument.symbol in config.data.default_instruments
        notify = config.notifications.master_enabled and instrument.symbol in config.notifications.instruments
        table.add_row(
            instrument.symbol,
            instrument.name,
            f"{instrument.base_price:.4f}",
            "✅" if scanned else "-",
            "✅" if notify else "-",
        )

    console.print(table)
    click.echo(f"Timeframes: {', '.join(config.get_timeframes())}")


if __name__ == "__main__":
    main()
