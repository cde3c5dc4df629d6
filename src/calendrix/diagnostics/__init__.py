"""Diagnostics package.

Light-weight command-line checks and renderers built on the public engines.
"""

__all__ = ["pretty_month", "round_trip"]
