"""Delta computation and statistical aggregation for jitter measurements.

Samples and deltas are integer nanoseconds; aggregates are float
milliseconds so sub-millisecond precision is preserved.
"""

from __future__ import annotations

import logging
import math
from typing import Sequence

from check_jitter.errors import EmptyDeltas, InsufficientSamples
from check_jitter.models import AggregationMethod

logger = logging.getLogger(__name__)

NANOS_PER_MILLI = 1_000_000


def ns_to_ms(value: float) -> float:
    return value / NANOS_PER_MILLI


def abs_diff(a: int, b: int) -> int:
    """Absolute difference between two durations."""
    return a - b if a > b else b - a


def calculate_deltas(durations: Sequence[int]) -> list[int]:
    """Differences between temporally adjacent samples, in send order."""
    if len(durations) < 2:
        raise InsufficientSamples(len(durations))

    deltas = [abs_diff(durations[i], durations[i + 1]) for i in range(len(durations) - 1)]
    logger.debug("Deltas: %s", deltas)
    return deltas


def calculate_avg_jitter(deltas: Sequence[int]) -> float:
    if not deltas:
        raise EmptyDeltas()
    total = sum(deltas)
    logger.debug("Sum of deltas: %dns", total)
    # whole-nanosecond mean, truncated before the unit conversion
    avg = ns_to_ms(total // len(deltas))
    logger.debug("Average jitter: %rms", avg)
    return avg


def calculate_median_jitter(deltas: Sequence[int]) -> float:
    if not deltas:
        raise EmptyDeltas()
    sorted_deltas = sorted(deltas)
    logger.debug("Sorted deltas: %s", sorted_deltas)

    n = len(sorted_deltas)
    mid = n // 2
    if n % 2 == 0:
        median = (ns_to_ms(sorted_deltas[mid - 1]) + ns_to_ms(sorted_deltas[mid])) / 2
    else:
        median = ns_to_ms(sorted_deltas[mid])
    logger.debug("Median jitter: %rms", median)
    return median


def calculate_max_jitter(deltas: Sequence[int]) -> float:
    if not deltas:
        raise EmptyDeltas()
    value = ns_to_ms(max(deltas))
    logger.debug("Max jitter: %rms", value)
    return value


def calculate_min_jitter(deltas: Sequence[int]) -> float:
    if not deltas:
        raise EmptyDeltas()
    value = ns_to_ms(min(deltas))
    logger.debug("Min jitter: %rms", value)
    return value


_AGGREGATORS = {
    AggregationMethod.AVERAGE: calculate_avg_jitter,
    AggregationMethod.MEDIAN: calculate_median_jitter,
    AggregationMethod.MAX: calculate_max_jitter,
    AggregationMethod.MIN: calculate_min_jitter,
}


def aggregate(method: AggregationMethod, deltas: Sequence[int]) -> float:
    """Reduce *deltas* to a single jitter value in milliseconds."""
    return _AGGREGATORS[method](deltas)


def round_jitter(value: float, precision: int) -> float:
    """Round *value* to *precision* decimal places, halves away from zero."""
    factor = 10 ** precision
    scaled = abs(value) * factor
    whole = math.floor(scaled)
    if scaled - whole >= 0.5:
        whole += 1
    rounded = math.copysign(whole, value) / factor
    logger.debug("Rounded jitter: %r", rounded)
    return rounded
