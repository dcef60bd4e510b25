"""Exceptions raised by PyFastResample.

All errors derive from ``ValueError`` so existing ``except ValueError``
handlers around resize calls keep working.
"""


class ResampleError(ValueError):
    """Base class for invalid resampling requests."""


class InvalidDimensionError(ResampleError):
    """A source or destination dimension is < 1, or a buffer size is inconsistent."""

    def __init__(self, name, value, message=None):
        self.name = name
        self.value = value
        super().__init__(message or f"{name} must be >= 1, got {value}")


class InvalidOptionError(ResampleError):
    """A resize/reduce option is outside its valid range."""


def check_dimensions(**dims):
    """Raise ``InvalidDimensionError`` for the first dimension below 1."""
    for name, value in dims.items():
        if int(value) != value or value < 1:
            raise InvalidDimensionError(name, value)


__all__ = [
    "ResampleError",
    "InvalidDimensionError",
    "InvalidOptionError",
    "check_dimensions",
]
