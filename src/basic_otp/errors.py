"""Exceptions raised by basic-otp."""


class OTPError(Exception):
    """Base class for all basic-otp errors."""


class ConfigurationError(OTPError, ValueError):
    """A generator was configured with unusable parameters (e.g. an empty secret)."""


class InvalidInputError(OTPError, ValueError):
    """A counter, timestamp or encoded secret outside the accepted domain."""
