"""CLI entry point and orchestration for check_jitter."""

from __future__ import annotations

import logging
import sys
from typing import Sequence

import click
from rich.logging import RichHandler

from check_jitter import __version__
from check_jitter.config import (
    ABOUT_TEXT,
    DEFAULT_AGGREGATION,
    DEFAULT_MAX_INTERVAL_MS,
    DEFAULT_MIN_INTERVAL_MS,
    DEFAULT_PRECISION,
    DEFAULT_SAMPLES,
    DEFAULT_TIMEOUT_MS,
    EXIT_UNKNOWN,
    MAX_VERBOSITY,
    MIN_SAMPLES,
)
from check_jitter.display import err_console, render_status
from check_jitter.engine import check_jitter
from check_jitter.errors import (
    CommandLineError,
    ConfigurationError,
    InvalidAddress,
    InvalidInterval,
    LoggerInitError,
    NoThresholds,
)
from check_jitter.models import AggregationMethod, CheckConfig, SocketType, Status
from check_jitter.resolver import validate_host
from check_jitter.thresholds import parse_thresholds

logger = logging.getLogger(__name__)

PROG_NAME = "check_jitter"


def setup_logging(verbosity: int) -> None:
    """Send package logs to stderr: -vv for info, -vvv for debug with paths."""
    verbosity = min(verbosity, MAX_VERBOSITY)
    if verbosity >= 3:
        level, show_path = logging.DEBUG, True
    elif verbosity == 2:
        level, show_path = logging.INFO, False
    else:
        level, show_path = logging.ERROR, False

    try:
        handler = RichHandler(console=err_console, show_path=show_path)
        handler.setFormatter(logging.Formatter("[%(name)s] %(message)s"))
        pkg_logger = logging.getLogger("check_jitter")
        for existing in list(pkg_logger.handlers):
            pkg_logger.removeHandler(existing)
        pkg_logger.addHandler(handler)
        pkg_logger.setLevel(level)
    except (ValueError, TypeError, OSError) as exc:
        raise LoggerInitError(str(exc)) from exc


def _parse_method(ctx: click.Context, param: click.Parameter, value: str) -> AggregationMethod:
    try:
        return AggregationMethod.from_string(value)
    except ValueError as exc:
        raise click.BadParameter(str(exc), ctx=ctx, param=param) from None


def build_config(
    host: str,
    aggregation_method: AggregationMethod,
    warning: str | None,
    critical: str | None,
    samples: int,
    timeout: int,
    min_interval: int,
    max_interval: int,
    precision: int,
    dgram_socket: bool,
) -> CheckConfig:
    """Validate option values and assemble a :class:`CheckConfig`.

    Raises a :class:`ConfigurationError` subclass on the first problem found.
    """
    if min_interval > max_interval:
        raise InvalidInterval(min_interval, max_interval)

    if not validate_host(host):
        raise InvalidAddress(host)

    if warning is None and critical is None:
        raise NoThresholds()

    thresholds = parse_thresholds(warning, critical)

    return CheckConfig(
        host=host,
        thresholds=thresholds,
        aggregation_method=aggregation_method,
        samples=samples,
        timeout_ms=timeout,
        min_interval_ms=min_interval,
        max_interval_ms=max_interval,
        precision=precision,
        socket_type=SocketType.DATAGRAM if dgram_socket else SocketType.RAW,
    )


def _log_config(config: CheckConfig) -> None:
    logger.info("%-34s%s", "Will check jitter for host:", config.host)
    logger.info("%-34s%s", "Aggregation method:", config.aggregation_method)
    logger.info("%-34s%s", "Socket type:", config.socket_type)
    logger.info("%-34s%d", "Sample size:", config.samples)
    logger.info("%-34s%dms", "Timeout per ping:", config.timeout_ms)
    logger.info("%-34s%dms", "Minimum wait time between pings:", config.min_interval_ms)
    logger.info("%-34s%dms", "Maximum wait time between pings:", config.max_interval_ms)
    logger.info("%-34s%d", "Decimal precision:", config.precision)
    logger.info("%-34s%s", "Warning threshold:", config.thresholds.warning)
    logger.info("%-34s%s", "Critical threshold:", config.thresholds.critical)


@click.command(
    name=PROG_NAME,
    epilog=ABOUT_TEXT,
    no_args_is_help=True,
    context_settings={"help_option_names": ["-h", "--help"]},
)
@click.option("-H", "--host", required=True, help="Hostname or IP address to ping")
@click.option(
    "-a", "--aggregation-method", default=DEFAULT_AGGREGATION, callback=_parse_method,
    help="Aggregation method to use for multiple samples", show_default=True,
)
@click.option("-w", "--warning", default=None, help="Warning limit for network jitter in milliseconds")
@click.option("-c", "--critical", default=None, help="Critical limit for network jitter in milliseconds")
@click.option(
    "-s", "--samples", default=DEFAULT_SAMPLES, type=click.IntRange(MIN_SAMPLES, 255),
    help="Sample size: the number of pings to send", show_default=True,
)
@click.option(
    "-t", "--timeout", default=DEFAULT_TIMEOUT_MS, type=click.IntRange(min=1),
    help="Timeout in milliseconds per individual ping check", show_default=True,
)
@click.option(
    "-m", "--min-interval", default=DEFAULT_MIN_INTERVAL_MS, type=click.IntRange(min=0),
    help="Minimum interval between ping samples in milliseconds", show_default=True,
)
@click.option(
    "-M", "--max-interval", default=DEFAULT_MAX_INTERVAL_MS, type=click.IntRange(min=0),
    help="Maximum interval between ping samples in milliseconds", show_default=True,
)
@click.option(
    "-p", "--precision", default=DEFAULT_PRECISION, type=click.IntRange(0, 255),
    help="Precision of the output decimal places", show_default=True,
)
@click.option(
    "-D", "--dgram-socket", is_flag=True,
    help="Use a datagram socket instead of a raw socket (expert option)",
)
@click.option(
    "-v", "--verbose", count=True, type=click.IntRange(0, MAX_VERBOSITY),
    help="Enable verbose output. Use multiple times to increase verbosity (e.g. -vvv)",
)
@click.version_option(version=__version__, prog_name=PROG_NAME)
def cli(
    host: str,
    aggregation_method: AggregationMethod,
    warning: str | None,
    critical: str | None,
    samples: int,
    timeout: int,
    min_interval: int,
    max_interval: int,
    precision: int,
    dgram_socket: bool,
    verbose: int,
) -> Status:
    """check_jitter - A monitoring plugin that measures network jitter."""
    try:
        setup_logging(verbose)
        config = build_config(
            host, aggregation_method, warning, critical, samples,
            timeout, min_interval, max_interval, precision, dgram_socket,
        )
    except ConfigurationError as exc:
        return Status.unknown(exc)

    _log_config(config)
    return check_jitter(config)


def run(argv: Sequence[str] | None = None) -> int:
    """Parse *argv*, run the check, print the status line, return the exit code.

    Per monitoring-plugin guidelines, --help and --version also exit UNKNOWN.
    """
    try:
        rv = cli.main(
            args=list(argv) if argv is not None else None,
            prog_name=PROG_NAME,
            standalone_mode=False,
        )
    except click.ClickException as exc:
        status = Status.unknown(CommandLineError(exc.format_message()))
    else:
        if not isinstance(rv, Status):
            return EXIT_UNKNOWN
        status = rv

    click.echo(render_status(status))
    return status.code


def main() -> None:
    sys.exit(run())


if __name__ == "__main__":
    main()
