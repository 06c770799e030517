"""
Exception classes for parcel.

Every fatal condition raised by the tracking pipeline derives from
ParcelError so the CLI can report it and exit non-zero in one place.
Date parse failures are not represented here: the normalizer always
recovers from them by returning the raw source text.
"""

from typing import Any


class ParcelError(Exception):
    """Base exception for all parcel errors.

    Keyword arguments are stored as attributes for debugging.
    """

    def __init__(self, message: str = "", **kwargs: Any) -> None:
        if not message:
            message = self.__class__.__doc__ or "parcel error occurred"
        super().__init__(message)
        for key, value in kwargs.items():
            setattr(self, key, value)


class InputValidationError(ParcelError):
    """Tracking number or carrier is invalid."""

    def __init__(self, message: str = "", **kwargs: Any) -> None:
        if not message:
            message = "Tracking number or carrier is invalid"
        super().__init__(message, **kwargs)


class TransportError(ParcelError):
    """Tracking request could not be completed."""

    def __init__(self, message: str = "", **kwargs: Any) -> None:
        if not message:
            message = "Tracking request could not be completed"
        super().__init__(message, **kwargs)


class SourceFormatError(ParcelError):
    """Upstream response was not parseable."""

    def __init__(self, message: str = "", **kwargs: Any) -> None:
        if not message:
            message = "Upstream response was not parseable"
        super().__init__(message, **kwargs)


class OutputError(ParcelError):
    """Output target could not be written."""

    def __init__(self, message: str = "", **kwargs: Any) -> None:
        if not message:
            message = "Output target could not be written"
        super().__init__(message, **kwargs)


class ConfigurationError(ParcelError):
    """Configuration is invalid or missing."""

    def __init__(self, message: str = "", **kwargs: Any) -> None:
        if not message:
            message = "Configuration is invalid or missing"
        super().__init__(message, **kwargs)


__all__ = [
    "ParcelError",
    "InputValidationError",
    "TransportError",
    "SourceFormatError",
    "OutputError",
    "ConfigurationError",
]
