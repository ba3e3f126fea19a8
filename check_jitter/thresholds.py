"""Monitoring-plugin range parsing and threshold evaluation.

Range syntax (``[@]start:end``):

=========  =========================================
``10``     alert if x < 0 or x > 10
``10:``    alert if x < 10
``~:10``   alert if x > 10
``10:20``  alert if x < 10 or x > 20
``@10:20`` alert if 10 <= x <= 20
=========  =========================================
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from decimal import Decimal

from check_jitter.errors import RangeParseError
from check_jitter.models import AggregationMethod, Status, Thresholds

logger = logging.getLogger(__name__)


def format_number(value: float) -> str:
    """Shortest decimal form of *value*: no exponent, no trailing ``.0``."""
    text = format(Decimal(repr(float(value))), "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    if text == "-0":
        text = "0"
    return text


def _parse_bound(text: str, whole: str) -> float:
    try:
        value = float(text)
    except ValueError:
        raise RangeParseError(whole, f"'{text}' is not a number") from None
    if math.isnan(value) or math.isinf(value):
        raise RangeParseError(whole, f"'{text}' is not a finite number")
    return value


@dataclass(frozen=True)
class ThresholdRange:
    """One alert range.  ``inside`` flips the polarity (``@`` prefix)."""

    start: float = 0.0
    end: float = math.inf
    inside: bool = False

    @classmethod
    def parse(cls, text: str) -> ThresholdRange:
        body = text.strip()
        inside = body.startswith("@")
        if inside:
            body = body[1:]
        if not body:
            raise RangeParseError(text, "the range is empty")

        if ":" in body:
            start_text, _, end_text = body.partition(":")
            if ":" in end_text:
                raise RangeParseError(text, "too many ':' separators")
            if start_text == "~":
                start = -math.inf
            elif start_text == "":
                start = 0.0
            else:
                start = _parse_bound(start_text, text)
            end = math.inf if end_text == "" else _parse_bound(end_text, text)
        else:
            start = 0.0
            end = _parse_bound(body, text)

        if start > end:
            raise RangeParseError(
                text, f"start ({format_number(start)}) is greater than end ({format_number(end)})"
            )
        return cls(start=start, end=end, inside=inside)

    def contains(self, value: float) -> bool:
        return self.start <= value <= self.end

    def check(self, value: float) -> bool:
        """Return True when *value* should raise an alert."""
        if self.inside:
            return self.contains(value)
        return not self.contains(value)

    def __str__(self) -> str:
        start = "~" if self.start == -math.inf else format_number(self.start)
        end = "" if self.end == math.inf else format_number(self.end)
        prefix = "@" if self.inside else ""
        return f"{prefix}{start}:{end}"


def parse_thresholds(warning: str | None, critical: str | None) -> Thresholds:
    """Build :class:`Thresholds` from raw option strings.

    Raises :class:`RangeParseError` on malformed syntax.
    """
    return Thresholds(
        warning=ThresholdRange.parse(warning) if warning is not None else None,
        critical=ThresholdRange.parse(critical) if critical is not None else None,
    )


def evaluate_thresholds(
    method: AggregationMethod,
    value: float,
    thresholds: Thresholds,
) -> Status:
    """Classify *value*; critical is checked before warning."""
    logger.info("Evaluating jitter: %r", value)

    if thresholds.critical is not None:
        logger.info("Checking critical threshold: %s", thresholds.critical)
        if thresholds.critical.check(value):
            logger.info("Jitter is critical: %r", value)
            return Status.critical(method, value, thresholds)
        logger.info("Jitter is not critical: %r", value)
    else:
        logger.info("No critical threshold provided")

    if thresholds.warning is not None:
        logger.info("Checking warning threshold: %s", thresholds.warning)
        if thresholds.warning.check(value):
            logger.info("Jitter is warning: %r", value)
            return Status.warning(method, value, thresholds)
        logger.info("Jitter is not warning: %r", value)
    else:
        logger.info("No warning threshold provided")

    return Status.ok(method, value, thresholds)
