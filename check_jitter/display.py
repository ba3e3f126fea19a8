"""Status line rendering and stderr console for check_jitter."""

from __future__ import annotations

from rich.console import Console

from check_jitter.config import PERFDATA_MIN, UNIT_OF_MEASURE
from check_jitter.errors import CheckJitterError
from check_jitter.models import State, Status, Thresholds
from check_jitter.thresholds import ThresholdRange, format_number

# Diagnostics only; the status line itself goes to stdout via click.echo.
err_console = Console(stderr=True)


def _fmt_range(r: ThresholdRange | None) -> str:
    return "" if r is None else str(r)


def display_string(label: str, state: str, uom: str, value: float, thresholds: Thresholds) -> str:
    """``<STATE> - <label>: <value><uom>|'<label>'=<value><uom>;<warn>;<crit>;<min>``"""
    v = format_number(value)
    warn = _fmt_range(thresholds.warning)
    crit = _fmt_range(thresholds.critical)
    return f"{state} - {label}: {v}{uom}|'{label}'={v}{uom};{warn};{crit};{PERFDATA_MIN}"


def render_unknown(error: Exception) -> str:
    if isinstance(error, CheckJitterError):
        return f"UNKNOWN - An error occurred: '{error}'"
    return f"UNKNOWN - {error}"


def render_status(status: Status) -> str:
    """Render *status* as the single report line."""
    if status.state is State.UNKNOWN:
        return render_unknown(status.error)

    label = f"{status.method.label} Jitter"
    return display_string(
        label,
        status.state.name,
        UNIT_OF_MEASURE,
        status.value,
        status.thresholds or Thresholds(),
    )
