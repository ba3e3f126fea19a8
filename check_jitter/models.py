"""Data models for check_jitter."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from check_jitter.config import (
    AGGREGATION_ALIASES,
    DEFAULT_MAX_INTERVAL_MS,
    DEFAULT_MIN_INTERVAL_MS,
    DEFAULT_PRECISION,
    DEFAULT_SAMPLES,
    DEFAULT_TIMEOUT_MS,
    EXIT_CRITICAL,
    EXIT_OK,
    EXIT_UNKNOWN,
    EXIT_WARNING,
)

if TYPE_CHECKING:
    from check_jitter.thresholds import ThresholdRange


class AggregationMethod(enum.Enum):
    """Statistic used to reduce the delta list to one jitter value."""

    AVERAGE = "average"
    MEDIAN = "median"
    MAX = "max"
    MIN = "min"

    @classmethod
    def from_string(cls, text: str) -> AggregationMethod:
        """Parse a method name or alias, case-insensitively."""
        canonical = AGGREGATION_ALIASES.get(text.strip().lower())
        if canonical is None:
            raise ValueError(f"'{text}' is not a valid aggregation method")
        return cls(canonical)

    @property
    def label(self) -> str:
        return {
            AggregationMethod.AVERAGE: "Average",
            AggregationMethod.MEDIAN: "Median",
            AggregationMethod.MAX: "Max",
            AggregationMethod.MIN: "Min",
        }[self]

    def __str__(self) -> str:
        return self.label


class SocketType(enum.Enum):
    """ICMP transport: raw sockets need privileges, datagram sockets do not."""

    RAW = "raw"
    DATAGRAM = "datagram"

    @property
    def privileged(self) -> bool:
        return self is SocketType.RAW

    def __str__(self) -> str:
        return self.value.capitalize()


class State(enum.IntEnum):
    """Service state; the value doubles as the process exit code."""

    OK = EXIT_OK
    WARNING = EXIT_WARNING
    CRITICAL = EXIT_CRITICAL
    UNKNOWN = EXIT_UNKNOWN


@dataclass(frozen=True)
class Thresholds:
    """Warning and critical alert ranges; either may be absent."""

    warning: ThresholdRange | None = None
    critical: ThresholdRange | None = None

    @property
    def is_empty(self) -> bool:
        return self.warning is None and self.critical is None


@dataclass(frozen=True)
class Status:
    """Terminal value of one check run.

    OK/WARNING/CRITICAL carry the aggregation method, the rounded jitter and
    the thresholds used.  UNKNOWN carries the exception that stopped the run.
    """

    state: State
    method: AggregationMethod | None = None
    value: float | None = None
    thresholds: Thresholds | None = None
    error: Exception | None = None

    @classmethod
    def ok(cls, method: AggregationMethod, value: float, thresholds: Thresholds) -> Status:
        return cls(State.OK, method, value, thresholds)

    @classmethod
    def warning(cls, method: AggregationMethod, value: float, thresholds: Thresholds) -> Status:
        return cls(State.WARNING, method, value, thresholds)

    @classmethod
    def critical(cls, method: AggregationMethod, value: float, thresholds: Thresholds) -> Status:
        return cls(State.CRITICAL, method, value, thresholds)

    @classmethod
    def unknown(cls, error: Exception) -> Status:
        return cls(State.UNKNOWN, error=error)

    @property
    def code(self) -> int:
        return int(self.state)


@dataclass
class CheckConfig:
    """Validated parameters for one check run."""

    host: str
    thresholds: Thresholds = field(default_factory=Thresholds)
    aggregation_method: AggregationMethod = AggregationMethod.AVERAGE
    samples: int = DEFAULT_SAMPLES
    timeout_ms: int = DEFAULT_TIMEOUT_MS
    min_interval_ms: int = DEFAULT_MIN_INTERVAL_MS
    max_interval_ms: int = DEFAULT_MAX_INTERVAL_MS
    precision: int = DEFAULT_PRECISION
    socket_type: SocketType = SocketType.RAW

    @property
    def timeout(self) -> float:
        """Per-probe timeout in seconds."""
        return self.timeout_ms / 1000.0
