"""Exceptions raised by the engine.

Calculators never raise for numeric input; these cover configuration and
export problems only."""


class AutolytiqError(Exception):
    """Base exception for the package"""

    pass


class ConfigurationError(AutolytiqError):
    """Configuration file or lookup key is invalid"""

    pass


class ReportExportError(AutolytiqError):
    """A report could not be rendered or written"""

    pass
