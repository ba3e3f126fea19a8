"""Entry point for ``python -m check_jitter``."""

from check_jitter.cli import main

if __name__ == "__main__":
    main()
