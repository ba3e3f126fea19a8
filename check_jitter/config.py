"""Constants and configuration for check_jitter."""

# Default measurement settings
DEFAULT_AGGREGATION = "average"
DEFAULT_SAMPLES = 10
MIN_SAMPLES = 3
DEFAULT_TIMEOUT_MS = 1000
DEFAULT_MIN_INTERVAL_MS = 0
DEFAULT_MAX_INTERVAL_MS = 0
DEFAULT_PRECISION = 3

# Verbosity is counted (-v, -vv, -vvv) and capped here
MAX_VERBOSITY = 3

# DNS resolver lifetime (seconds) for hostname targets
DNS_LIFETIME = 5.0

# ICMP echo payload size in bytes
ICMP_PAYLOAD_SIZE = 56

# Performance data
UNIT_OF_MEASURE = "ms"
PERFDATA_MIN = 0

# Exit codes per monitoring-plugin guidelines
EXIT_OK = 0
EXIT_WARNING = 1
EXIT_CRITICAL = 2
EXIT_UNKNOWN = 3

# Aggregation method aliases accepted on the command line
AGGREGATION_ALIASES = {
    "average": "average",
    "avg": "average",
    "mean": "average",
    "median": "median",
    "med": "median",
    "maximum": "max",
    "max": "max",
    "minimum": "min",
    "min": "min",
}

ABOUT_TEXT = """\
\b
AGGREGATION METHOD

\b
The plugin can aggregate the deltas from multiple samples in the following ways:
- average: the average of all deltas (arithmetic mean) [default]
- median: the median of all deltas
- max: the maximum of all deltas
- min: the minimum of all deltas

\b
HOSTNAME

If the hostname resolves to multiple IP addresses, the plugin will use the
first address returned by the DNS resolver and skip the rest. Consider setting
up one check per IP address instead of relying on hostname resolution.

\b
SAMPLES

The number of pings to send to the target host. Must be at least 3.

\b
SAMPLE INTERVALS

\b
When -m and -M are both 0, pings are sent immediately after each response.
When -m and -M are equal, pings are sent at a fixed interval.
When -m and -M differ, pings are sent at random intervals between the two.
-m must be less than or equal to -M.

\b
THRESHOLD SYNTAX

\b
Thresholds use monitoring plugin range syntax:
  10       alert if x < 0 or > 10   (outside {0 .. 10})
  10:      alert if x < 10          (outside {10 .. inf})
  ~:10     alert if x > 10          (outside {-inf .. 10})
  10:20    alert if x < 10 or > 20  (outside {10 .. 20})
  @10:20   alert if 10 <= x <= 20   (inside {10 .. 20})
"""
