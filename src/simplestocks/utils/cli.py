"""
src/simplestocks/utils/cli.py

ANSI escape codes and helpers for terminal output.
"""

from decimal import Decimal

# ANSI escape codes
BOLD = "\033[1m"
DIM = "\033[2m"
RESET = "\033[0m"


def format_optional(val: Decimal | None, fmt: str = "{:,}") -> str:
    """Format a metric that may be missing.

    Args:
        val: The value to format, or None when the metric is unavailable.
        fmt: ``str.format`` pattern applied to present values.
    """
    if val is None:
        return f"{DIM}n/a{RESET}"
    return fmt.format(val)
