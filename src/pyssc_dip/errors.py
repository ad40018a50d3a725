"""Clear exceptions for pyssc-dip: settings outside the card's legal choices."""

from typing import Any


class PySSCDipError(Exception):
    """Base exception for pyssc-dip."""

    pass


class InvalidSettingError(PySSCDipError):
    """Raised when a user-supplied value is not one of a field's legal choices."""

    def __init__(self, field: str, value: Any, message: str | None = None) -> None:
        self.field = field
        self.value = value
        self._msg = message or f"Invalid {field}: {value!r}"
        super().__init__(self._msg)
