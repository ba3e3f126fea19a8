import pytest

from check_jitter.display import display_string, render_status
from check_jitter.errors import (
    CommandLineError,
    DnsLookupFailed,
    InvalidAddress,
    InvalidInterval,
    LoggerInitError,
    NoThresholds,
    PermissionDenied,
    PingTimeout,
    RangeParseError,
)
from check_jitter.models import AggregationMethod, Status, Thresholds
from check_jitter.thresholds import parse_thresholds


def test_display_string_with_both_thresholds():
    t = parse_thresholds("0:0.5", "0:1")
    assert (
        display_string("Average Jitter", "OK", "ms", 0.1, t)
        == "OK - Average Jitter: 0.1ms|'Average Jitter'=0.1ms;0:0.5;0:1;0"
    )


def test_display_string_with_only_warning():
    t = parse_thresholds("0:0.5", None)
    assert (
        display_string("Average Jitter", "OK", "ms", 0.1, t)
        == "OK - Average Jitter: 0.1ms|'Average Jitter'=0.1ms;0:0.5;;0"
    )


def test_display_string_with_only_critical():
    t = parse_thresholds(None, "0:0.5")
    assert (
        display_string("Average Jitter", "OK", "ms", 0.1, t)
        == "OK - Average Jitter: 0.1ms|'Average Jitter'=0.1ms;;0:0.5;0"
    )


def test_display_string_with_no_thresholds():
    assert (
        display_string("Average Jitter", "OK", "ms", 0.1, Thresholds())
        == "OK - Average Jitter: 0.1ms|'Average Jitter'=0.1ms;;;0"
    )


def test_ok_status_is_stable():
    t = parse_thresholds("0:0.5", "0:1")
    status = Status.ok(AggregationMethod.AVERAGE, 0.1, t)
    expected = "OK - Average Jitter: 0.1ms|'Average Jitter'=0.1ms;0:0.5;0:1;0"
    assert render_status(status) == expected
    assert render_status(status) == expected
    assert status.code == 0


def test_ok_with_simple_thresholds():
    t = parse_thresholds("0.5", "1")
    status = Status.ok(AggregationMethod.MEDIAN, 0.1, t)
    assert render_status(status) == "OK - Median Jitter: 0.1ms|'Median Jitter'=0.1ms;0:0.5;0:1;0"


def test_warning_status():
    t = parse_thresholds("0:0.5", "0:1")
    status = Status.warning(AggregationMethod.AVERAGE, 0.1, t)
    assert render_status(status) == "WARNING - Average Jitter: 0.1ms|'Average Jitter'=0.1ms;0:0.5;0:1;0"
    assert status.code == 1


def test_critical_status():
    t = parse_thresholds("0:0.5", "0:1")
    status = Status.critical(AggregationMethod.MAX, 0.1, t)
    assert render_status(status) == "CRITICAL - Max Jitter: 0.1ms|'Max Jitter'=0.1ms;0:0.5;0:1;0"
    assert status.code == 2


def test_min_label_and_integer_value():
    t = parse_thresholds("5", None)
    status = Status.ok(AggregationMethod.MIN, 2.0, t)
    assert render_status(status) == "OK - Min Jitter: 2ms|'Min Jitter'=2ms;0:5;;0"


@pytest.mark.parametrize("error,expected", [
    (
        DnsLookupFailed("example.com"),
        "UNKNOWN - An error occurred: 'DNS Lookup failed for: example.com'",
    ),
    (
        PermissionDenied(),
        "UNKNOWN - An error occurred: 'Ping failed because of insufficient permissions'",
    ),
    (
        PingTimeout(1000),
        "UNKNOWN - An error occurred: 'Ping timed out after: 1000ms'",
    ),
    (
        InvalidAddress("bad host"),
        "UNKNOWN - Invalid address or hostname: bad host",
    ),
    (
        InvalidInterval(100, 10),
        "UNKNOWN - Invalid min/max interval: min: 100, max: 10",
    ),
    (
        NoThresholds(),
        "UNKNOWN - No thresholds provided. Provide at least one threshold.",
    ),
    (
        RangeParseError("20:10", "start (20) is greater than end (10)"),
        "UNKNOWN - Unable to parse range '20:10' with error: start (20) is greater than end (10)",
    ),
    (
        CommandLineError("Error: No such option: -x"),
        "UNKNOWN - Command line parsing produced an error: No such option: -x",
    ),
    (
        LoggerInitError("boom"),
        "UNKNOWN - Failed to initialize logger with error: 'boom'",
    ),
])
def test_unknown_status(error, expected):
    status = Status.unknown(error)
    assert render_status(status) == expected
    assert status.code == 3
    assert "|" not in render_status(status)
