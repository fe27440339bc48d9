from __future__ import annotations

from typing import Optional


class FormatError(ValueError):
    """The report's layout cannot be auto-extracted."""

    def __init__(self, message: str, line: Optional[str] = None) -> None:
        self.line = line
        if line is not None:
            message = f"{message} | line={line!r}"
        super().__init__(message)


class StructuralError(FormatError):
    """A right holder line appeared before any work line."""


SequencingError = StructuralError


class ColumnCountError(FormatError):
    def __init__(self, count: int, line: Optional[str] = None) -> None:
        self.count = count
        super().__init__(
            f"Unexpected number of tokens on right holder line: {count}", line
        )


class UnknownRoleError(FormatError):
    def __init__(self, code: str, line: Optional[str] = None) -> None:
        self.code = code
        super().__init__(f"Unknown role code: {code!r}", line)


class MissingAnchorError(FormatError):
    """No role/share pair could be located on a right holder line."""
