"""Exceptions raised by the calculator's configuration layer.

Stat input never raises: invalid text is normalized and flagged instead.
"""


class CalculatorError(Exception):
    """Base class for calculator errors."""


class ConfigError(CalculatorError):
    """Raised when configuration content is malformed."""

    def __init__(self, message: str, source: str = "<config>"):
        super().__init__(f"{source}: {message}")
        self.source = source
