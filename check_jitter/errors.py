"""Exception types raised by check_jitter.

Two families:

* :class:`CheckJitterError`: a failure while measuring jitter (DNS,
  transport, not enough data).  Rendered as ``An error occurred: '...'``.
* :class:`ConfigurationError`: the invocation itself is invalid.  Each
  subclass renders its own message after ``UNKNOWN - ``.
"""

from __future__ import annotations


class CheckJitterError(Exception):
    """Base class for failures raised by the measurement pipeline."""


class DnsLookupFailed(CheckJitterError):
    """The hostname resolved, but to zero addresses."""

    def __init__(self, addr: str):
        self.addr = addr
        super().__init__(f"DNS Lookup failed for: {addr}")


class DnsResolutionError(CheckJitterError):
    """The resolution mechanism itself failed."""

    def __init__(self, addr: str, error: str):
        self.addr = addr
        self.error = error
        super().__init__(f"DNS resolution error for '{addr}': {error}")


class EmptyDeltas(CheckJitterError):
    def __init__(self):
        super().__init__("The delta count is 0. Cannot calculate jitter.")


class InsufficientSamples(CheckJitterError):
    def __init__(self, count: int):
        self.count = count
        super().__init__(
            f"At least 2 samples are required to calculate jitter, got {count}."
        )


class PermissionDenied(CheckJitterError):
    def __init__(self):
        super().__init__("Ping failed because of insufficient permissions")


class PingError(CheckJitterError):
    """Wraps a transport error that is neither I/O nor a timeout."""

    def __init__(self, error: Exception):
        self.error = error
        super().__init__(f"Ping failed with error: {error!r}")


class PingIoError(CheckJitterError):
    def __init__(self, message: str):
        self.message = message
        super().__init__(f"Ping failed with IO error: {message}")


class PingTimeout(CheckJitterError):
    def __init__(self, timeout_ms: int):
        self.timeout_ms = timeout_ms
        super().__init__(f"Ping timed out after: {timeout_ms}ms")


class ConfigurationError(Exception):
    """Base class for invalid invocations, caught before sampling starts."""


class InvalidAddress(ConfigurationError):
    def __init__(self, host: str):
        self.host = host
        super().__init__(f"Invalid address or hostname: {host}")


class InvalidInterval(ConfigurationError):
    def __init__(self, min_interval: int, max_interval: int):
        self.min_interval = min_interval
        self.max_interval = max_interval
        super().__init__(
            f"Invalid min/max interval: min: {min_interval}, max: {max_interval}"
        )


class NoThresholds(ConfigurationError):
    def __init__(self):
        super().__init__("No thresholds provided. Provide at least one threshold.")


class RangeParseError(ConfigurationError):
    """A threshold string is not valid monitoring-plugin range syntax."""

    def __init__(self, text: str, reason: str):
        self.text = text
        self.reason = reason
        super().__init__(f"Unable to parse range '{text}' with error: {reason}")


class CommandLineError(ConfigurationError):
    def __init__(self, message: str):
        message = message.strip()
        if message.startswith("Error: "):
            message = message[len("Error: "):]
        self.message = message
        super().__init__(f"Command line parsing produced an error: {message}")


class LoggerInitError(ConfigurationError):
    def __init__(self, message: str):
        self.message = message
        super().__init__(f"Failed to initialize logger with error: '{message}'")
