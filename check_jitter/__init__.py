"""check_jitter: a monitoring plugin that measures network jitter."""

__version__ = "0.1.0"
