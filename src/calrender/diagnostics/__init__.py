"""Diagnostics package.

Text-mode checks of the calendar arithmetic, with no rendering involved.
"""

__all__ = ["pretty_month"]
