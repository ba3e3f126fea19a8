import math

import pytest

from check_jitter.errors import RangeParseError
from check_jitter.models import AggregationMethod, State, Thresholds
from check_jitter.thresholds import (
    ThresholdRange,
    evaluate_thresholds,
    format_number,
    parse_thresholds,
)


def _thresholds(warning=None, critical=None):
    return parse_thresholds(warning, critical)


@pytest.mark.parametrize("text,start,end,inside", [
    ("10", 0.0, 10.0, False),
    ("10:", 10.0, math.inf, False),
    ("~:10", -math.inf, 10.0, False),
    ("10:20", 10.0, 20.0, False),
    ("@10:20", 10.0, 20.0, True),
    ("0:0.5", 0.0, 0.5, False),
    (":5", 0.0, 5.0, False),
])
def test_parse(text, start, end, inside):
    r = ThresholdRange.parse(text)
    assert (r.start, r.end, r.inside) == (start, end, inside)


@pytest.mark.parametrize("text", ["", "@", "abc", "1:abc", "20:10", "1:2:3", "nan"])
def test_parse_rejects_malformed_ranges(text):
    with pytest.raises(RangeParseError) as exc_info:
        ThresholdRange.parse(text)
    assert exc_info.value.text == text
    assert str(exc_info.value).startswith(f"Unable to parse range '{text}' with error: ")


@pytest.mark.parametrize("text,value,alert", [
    ("10", -1, True),
    ("10", 0, False),
    ("10", 10, False),
    ("10", 10.1, True),
    ("10:", 9.9, True),
    ("10:", 1000, False),
    ("~:10", -1000, False),
    ("~:10", 10.5, True),
    ("10:20", 9, True),
    ("10:20", 15, False),
    ("10:20", 21, True),
    ("@10:20", 10, True),
    ("@10:20", 20, True),
    ("@10:20", 9.99, False),
    ("@10:20", 20.01, False),
])
def test_check(text, value, alert):
    assert ThresholdRange.parse(text).check(value) is alert


@pytest.mark.parametrize("text,rendered", [
    ("0:0.5", "0:0.5"),
    ("0.5", "0:0.5"),
    ("1", "0:1"),
    ("10:", "10:"),
    ("~:10", "~:10"),
    ("@10:20", "@10:20"),
    ("1.50:3", "1.5:3"),
])
def test_str_renders_range_syntax(text, rendered):
    assert str(ThresholdRange.parse(text)) == rendered


@pytest.mark.parametrize("value,text", [
    (0.1, "0.1"),
    (1.0, "1"),
    (10.0, "10"),
    (0.0, "0"),
    (0.00005, "0.00005"),
    (0.135236, "0.135236"),
])
def test_format_number(value, text):
    assert format_number(value) == text


def test_parse_thresholds_keeps_missing_slots_empty():
    t = parse_thresholds("0.5", None)
    assert t.warning == ThresholdRange(0.0, 0.5)
    assert t.critical is None
    assert not t.is_empty
    assert Thresholds().is_empty


def test_ok_within_both_ranges():
    t = _thresholds("0:0.5", "0:1")
    status = evaluate_thresholds(AggregationMethod.AVERAGE, 0.1, t)
    assert status.state is State.OK
    assert status.method is AggregationMethod.AVERAGE
    assert status.value == 0.1
    assert status.thresholds is t
    assert status.code == 0


def test_warning_when_only_warning_breached():
    t = _thresholds("0:0.5", "0:1")
    status = evaluate_thresholds(AggregationMethod.MEDIAN, 0.7, t)
    assert status.state is State.WARNING
    assert status.code == 1


def test_critical_checked_before_warning():
    t = _thresholds("0:0.5", "0:1")
    status = evaluate_thresholds(AggregationMethod.MAX, 1.5, t)
    assert status.state is State.CRITICAL
    assert status.code == 2


def test_only_critical_threshold():
    t = _thresholds(None, "1")
    assert evaluate_thresholds(AggregationMethod.MIN, 0.7, t).state is State.OK
    assert evaluate_thresholds(AggregationMethod.MIN, 1.2, t).state is State.CRITICAL


def test_inverted_warning_range():
    t = _thresholds("@0:0.2", None)
    assert evaluate_thresholds(AggregationMethod.AVERAGE, 0.1, t).state is State.WARNING
    assert evaluate_thresholds(AggregationMethod.AVERAGE, 0.3, t).state is State.OK


def test_no_thresholds_is_ok():
    status = evaluate_thresholds(AggregationMethod.AVERAGE, 123.0, Thresholds())
    assert status.state is State.OK
