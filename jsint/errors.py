"""Exceptions raised when parsing or converting JavaScript-safe integers."""

from __future__ import annotations

import enum

__all__ = ["ParseIntErrorKind", "ParseIntError", "TryFromIntError"]


class ParseIntErrorKind(enum.Enum):
    """Why parsing an integer failed."""

    OVERFLOW = "overflow"
    UNDERFLOW = "underflow"
    UNKNOWN = "unknown"


_KIND_MESSAGES = {
    ParseIntErrorKind.OVERFLOW: "number too large to fit in target type",
    ParseIntErrorKind.UNDERFLOW: "number too small to fit in target type",
}


class ParseIntError(ValueError):
    """Raised when a string cannot be parsed into a safe integer.

    ``OVERFLOW`` and ``UNDERFLOW`` mean the text was a valid integer outside
    the safe range; ``UNKNOWN`` carries the lower-level reason in ``detail``.
    """

    def __init__(self, kind: ParseIntErrorKind, detail: str | None = None) -> None:
        self.kind = kind
        self.detail = detail
        super().__init__(self.__str__())

    def __str__(self) -> str:
        if self.kind is ParseIntErrorKind.UNKNOWN:
            return self.detail if self.detail is not None else "invalid integer"
        return _KIND_MESSAGES[self.kind]

    def __repr__(self) -> str:
        return f"ParseIntError(kind={self.kind.name}, detail={self.detail!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ParseIntError):
            return NotImplemented
        return self.kind is other.kind and self.detail == other.detail

    def __hash__(self) -> int:
        return hash((self.kind, self.detail))


class TryFromIntError(ValueError):
    """Raised when a checked integer conversion falls out of range."""

    def __init__(self) -> None:
        super().__init__(self.__str__())

    def __str__(self) -> str:
        return "out of range integral type conversion attempted"

    def __repr__(self) -> str:
        return "TryFromIntError"