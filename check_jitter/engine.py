"""Core measurement engine for check_jitter.

Pipeline:
  resolve -> sample (spaced by generated intervals) -> deltas -> aggregate
  -> round -> evaluate thresholds

Everything runs sequentially on one thread: each probe is sent and its
reply awaited before the next one, and inter-probe waits are blocking
sleeps.  The first failure aborts the run.

Public API:
    generate_intervals  -- inter-probe delays for a sample run
    run_samples         -- N timed probes against one address
    get_durations       -- resolve + run_samples
    get_jitter          -- durations reduced to one jitter value
    check_jitter        -- the whole check, returning a Status
"""

from __future__ import annotations

import logging
import random
import time
from typing import Callable

from check_jitter.errors import CheckJitterError, InsufficientSamples
from check_jitter.models import AggregationMethod, CheckConfig, SocketType, Status
from check_jitter.probe import Prober, create_prober
from check_jitter.resolver import LookupFunc, dns_lookup, resolve_address
from check_jitter.stats import aggregate, calculate_deltas, round_jitter
from check_jitter.thresholds import evaluate_thresholds

logger = logging.getLogger(__name__)

SleepFunc = Callable[[float], None]


# ---------------------------------------------------------------------------
# Inter-probe intervals
# ---------------------------------------------------------------------------

def generate_intervals(
    count: int,
    min_interval: int,
    max_interval: int,
    rng: random.Random | None = None,
) -> list[int]:
    """Return *count* wait durations in milliseconds.

    Both bounds 0 means "no waiting" and yields an empty list, as does an
    inverted range (rejected upstream).  Equal bounds give a fixed interval;
    otherwise each value is drawn uniformly from ``[min, max]``.
    """
    if min_interval > max_interval:
        logger.debug(
            "Invalid min and max interval: min: %d, max: %d. "
            "No random intervals will be generated.",
            min_interval, max_interval,
        )
        return []

    if min_interval == 0 and max_interval == 0:
        logger.debug("Min and max interval are both 0. No random intervals will be generated.")
        return []

    if min_interval == max_interval:
        logger.debug(
            "Min and max interval are equal: %dms. Intervals will not be randomized.",
            min_interval,
        )
        intervals = [min_interval] * count
        logger.debug("Intervals: %s", intervals)
        return intervals

    logger.debug(
        "Generating %d random intervals between %dms and %dms...",
        count, min_interval, max_interval,
    )
    rng = rng or random
    intervals = [rng.randint(min_interval, max_interval) for _ in range(count)]
    logger.debug("Random intervals: %s", intervals)
    return intervals


# ---------------------------------------------------------------------------
# Sampling
# ---------------------------------------------------------------------------

def run_samples(
    address: str,
    prober: Prober,
    samples: int,
    timeout: float,
    intervals: list[int],
    sleep: SleepFunc = time.sleep,
) -> list[int]:
    """Send *samples* sequential probes and return their durations (ns).

    After each reply one interval is popped off *intervals* and slept; once
    the list is exhausted the next probe goes out immediately.  *intervals*
    is consumed in place.
    """
    durations: list[int] = []
    for i in range(samples):
        duration = prober.ping(address, timeout)
        logger.debug("Ping round %d, duration: %dns", i + 1, duration)
        durations.append(duration)

        if intervals:
            interval = intervals.pop()
            logger.debug("Sleeping for %dms...", interval)
            sleep(interval / 1000.0)

    logger.debug("Ping durations: %s", durations)
    return durations


def get_durations(
    host: str,
    samples: int,
    timeout: float,
    min_interval: int = 0,
    max_interval: int = 0,
    prober: Prober | None = None,
    socket_type: SocketType = SocketType.RAW,
    lookup: LookupFunc = dns_lookup,
    rng: random.Random | None = None,
    sleep: SleepFunc = time.sleep,
) -> list[int]:
    """Resolve *host* and collect *samples* round-trip durations."""
    address = resolve_address(host, lookup)

    if samples < 2:
        raise InsufficientSamples(samples)

    intervals = generate_intervals(samples - 1, min_interval, max_interval, rng)

    owns_prober = prober is None
    if prober is None:
        prober = create_prober(socket_type)
    try:
        return run_samples(address, prober, samples, timeout, intervals, sleep)
    finally:
        if owns_prober:
            prober.close()


def get_jitter(
    method: AggregationMethod,
    host: str,
    samples: int,
    timeout: float,
    min_interval: int = 0,
    max_interval: int = 0,
    **kwargs,
) -> float:
    """Measure *host* and return the unrounded jitter in milliseconds.

    Extra keyword arguments are passed through to :func:`get_durations`.
    """
    durations = get_durations(host, samples, timeout, min_interval, max_interval, **kwargs)
    deltas = calculate_deltas(durations)
    return aggregate(method, deltas)


# ---------------------------------------------------------------------------
# Whole check
# ---------------------------------------------------------------------------

def check_jitter(
    config: CheckConfig,
    prober: Prober | None = None,
    lookup: LookupFunc = dns_lookup,
    rng: random.Random | None = None,
    sleep: SleepFunc = time.sleep,
) -> Status:
    """Run one check and classify the result.

    Measurement failures become an UNKNOWN status; the value used for
    classification is the rounded one that ends up in the report.
    """
    try:
        raw_jitter = get_jitter(
            config.aggregation_method,
            config.host,
            config.samples,
            config.timeout,
            config.min_interval_ms,
            config.max_interval_ms,
            prober=prober,
            socket_type=config.socket_type,
            lookup=lookup,
            rng=rng,
            sleep=sleep,
        )
    except CheckJitterError as exc:
        logger.error("Jitter measurement failed for %s: %s", config.host, exc)
        return Status.unknown(exc)

    jitter = round_jitter(raw_jitter, config.precision)
    return evaluate_thresholds(config.aggregation_method, jitter, config.thresholds)
