"""
Exceptions raised by the layout core.
"""


class LayoutError(Exception):
    """Base class for all layout failures."""


class ConfigurationError(LayoutError, ValueError):
    """Page geometry, margin, or font size leave no drawable area."""


class LayoutInvariantError(LayoutError, RuntimeError):
    """
    Internal cursor/page bookkeeping is inconsistent.

    Signals a defect in the paginator, never bad input. Raised instead of
    silently dropping text.
    """
