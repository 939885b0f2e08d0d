from __future__ import annotations

import logging
import time
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional

import typer
from pydantic import ValidationError

from sumguard.config import AppConfig, EnvSettings, WindowConfig, load_config
from sumguard.core.errors import (
    ConfigurationError,
    InputParseError,
    PairSumMismatchError,
    WindowInvariantError,
)
from sumguard.core.pairsum import resolve_strategy
from sumguard.core.tracker import AnomalyTracker
from sumguard.core.validator import Anomaly, StreamValidator
from sumguard.core.window import PairSumWindow
from sumguard.data.reader import read_numbered
from sumguard.utils.logging import setup_logging


logger = logging.getLogger("sumguard.cli")

app = typer.Typer(add_completion=False)

EXIT_BAD_INPUT = 1
EXIT_INVARIANT = 2


def _load(
    config: Optional[Path],
    log_level: Optional[str],
    log_format: Optional[str],
    window_overrides: Dict[str, Any],
) -> AppConfig:
    cfg = load_config(config)
    env_overrides = {"LOG_LEVEL": log_level, "LOG_FORMAT": log_format}
    env_overrides = {k: v for k, v in env_overrides.items() if v is not None}
    if env_overrides:
        try:
            cfg.env = EnvSettings(**{**cfg.env.model_dump(), **env_overrides})
        except ValidationError as ve:
            raise ConfigurationError(f"invalid logging options: {ve}") from ve
    setup_logging(cfg.env.LOG_LEVEL, cfg.env.LOG_FORMAT)
    overrides = {k: v for k, v in window_overrides.items() if v is not None}
    if overrides:
        try:
            cfg.runtime.window = WindowConfig(**{**cfg.runtime.window.model_dump(), **overrides})
        except ValidationError as ve:
            raise ConfigurationError(f"invalid window options: {ve}") from ve
    return cfg


def _make_validator(
    window_cfg: WindowConfig,
    on_anomaly: Optional[Callable[[Anomaly[int]], None]],
    strategy_key: Optional[str] = None,
) -> StreamValidator[int]:
    strategy = resolve_strategy(strategy_key or window_cfg.strategy)
    window: PairSumWindow[int] = PairSumWindow(window_cfg.capacity, strategy=strategy)
    return StreamValidator(
        window,
        validation_threshold=window_cfg.effective_threshold,
        on_anomaly=on_anomaly,
        check_invariants=window_cfg.check_invariants,
    )


@app.command()
def scan(
    input_path: Optional[str] = typer.Argument(None, help="File with one integer per line, '-' for stdin"),
    capacity: Optional[int] = typer.Option(None, help="Window size"),
    threshold: Optional[int] = typer.Option(None, help="Window size at which checks begin"),
    strategy: Optional[str] = typer.Option(None, help="two_pointer | naive | cross_check"),
    cross_check: bool = typer.Option(False, "--cross-check", help="Verify every query against the pairwise scan"),
    check_invariants: bool = typer.Option(False, "--check-invariants", help="Verify window views agree after every update"),
    skip_blank: bool = typer.Option(False, "--skip-blank", help="Ignore empty lines instead of failing"),
    config: Optional[Path] = typer.Option(None, help="YAML config file (default: ./sumguard.yaml if present)"),
    log_level: Optional[str] = typer.Option(None),
    log_format: Optional[str] = typer.Option(None, help="json | text"),
) -> None:
    """Report every value that is not the sum of two values in the recent window."""
    try:
        cfg = _load(
            config,
            log_level,
            log_format,
            {
                "capacity": capacity,
                "validation_threshold": threshold,
                "strategy": "cross_check" if cross_check else strategy,
                "check_invariants": True if check_invariants else None,
            },
        )
    except ConfigurationError as exc:
        typer.echo(f"error: {exc}", err=True)
        raise typer.Exit(EXIT_BAD_INPUT)

    tracker = AnomalyTracker()

    def report(anomaly: Anomaly[int]) -> None:
        tracker.record(anomaly)
        typer.echo(f"bad input at line {anomaly.position}: {anomaly.value}")

    validator = _make_validator(cfg.runtime.window, report)
    path = input_path or cfg.runtime.input_path
    try:
        validator.run_positioned(
            read_numbered(path, skip_blank=skip_blank or cfg.runtime.skip_blank_lines)
        )
    except (InputParseError, OSError) as exc:
        typer.echo(f"error: {exc}", err=True)
        raise typer.Exit(EXIT_BAD_INPUT)
    except (WindowInvariantError, PairSumMismatchError):
        logger.exception("internal invariant violated, aborting")
        raise typer.Exit(EXIT_INVARIANT)

    stats = validator.stats()
    typer.echo(f"processed={stats.processed} checked={stats.checked} anomalies={stats.anomalies}")


@app.command()
def bench(
    input_path: Optional[str] = typer.Argument(None, help="File with one integer per line"),
    strategies: List[str] = typer.Option(["two_pointer", "naive"], "--strategy", "-s"),
    capacity: Optional[int] = typer.Option(None),
    threshold: Optional[int] = typer.Option(None),
    config: Optional[Path] = typer.Option(None),
    log_level: Optional[str] = typer.Option("WARNING"),
) -> None:
    """Time each pair-sum strategy over the same input.

    Capacity and threshold are independent here so query cost can be measured
    at window sizes other than the one used for validation.
    """
    try:
        cfg = _load(
            config,
            log_level,
            None,
            {"capacity": capacity, "validation_threshold": threshold},
        )
        for key in strategies:
            resolve_strategy(key)
    except ConfigurationError as exc:
        typer.echo(f"error: {exc}", err=True)
        raise typer.Exit(EXIT_BAD_INPUT)

    path = input_path or cfg.runtime.input_path
    try:
        values = list(read_numbered(path, skip_blank=cfg.runtime.skip_blank_lines))
    except (InputParseError, OSError) as exc:
        typer.echo(f"error: {exc}", err=True)
        raise typer.Exit(EXIT_BAD_INPUT)

    wcfg = cfg.runtime.window
    typer.echo(
        f"values={len(values)} capacity={wcfg.capacity} threshold={wcfg.effective_threshold}"
    )
    for key in strategies:
        validator = _make_validator(wcfg, None, strategy_key=key)
        start = time.perf_counter()
        try:
            found = validator.run_positioned(values)
        except (WindowInvariantError, PairSumMismatchError):
            logger.exception("internal invariant violated, aborting")
            raise typer.Exit(EXIT_INVARIANT)
        elapsed = time.perf_counter() - start
        typer.echo(f"{key}: anomalies={found} elapsed={elapsed:.3f}s")


if __name__ == "__main__":
    app()
