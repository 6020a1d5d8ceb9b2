"""
Custom exceptions for linecfg.

This module defines the exception hierarchy for codec errors:
- CodecError: Base exception for all codec errors
- SchemaError: Malformed or absent setting annotations
- EncodeError: Write failure on the output sink
- UnsupportedKindError: Value kind not handled on the current path
- DecodeError: Base for everything raised while decoding a document
"""

from __future__ import annotations

__all__ = [
    "CodecError",
    "DecodeError",
    "DefaultParseError",
    "EncodeError",
    "LineParseError",
    "MissingKeyError",
    "SchemaError",
    "SourceReadError",
    "UnknownKeyError",
    "UnsupportedKindError",
]


class CodecError(Exception):
    """Base exception for all codec errors."""

    pass


class SchemaError(CodecError):
    """
    Raised when a record's setting annotations cannot be turned into descriptors.

    This includes non-dataclass records, unresolvable annotations and empty keys.
    These are programming errors in the record definition.
    """

    pass


class EncodeError(CodecError):
    """
    Raised when a field cannot be written to the sink.

    Parameters
    ----------
    key
        External key of the field being written.
    kind
        Name of the field's value kind.
    reason
        Short description of what went wrong.
    """

    def __init__(self, key: str, kind: str, reason: str = "sink write failed") -> None:
        super().__init__(f"write {key} {kind}: {reason}")
        self.key = key
        self.kind = kind
        self.reason = reason


class UnsupportedKindError(CodecError):
    """
    Raised when a field's kind is not handled on the current path.

    Parameters
    ----------
    key
        External key of the field.
    kind
        Name of the unsupported kind (or the field's type name).
    path
        Codec path that refused the kind ("encode", "default" or "decode").
    line_number
        Input line number, when raised while parsing a document line.
    """

    def __init__(
        self, key: str, kind: str, path: str, line_number: int | None = None
    ) -> None:
        prefix = f"line {line_number} " if line_number is not None else ""
        super().__init__(f"{prefix}unknown type {kind} for key {key} ({path})")
        self.key = key
        self.kind = kind
        self.path = path
        self.line_number = line_number


class DecodeError(CodecError):
    """Base exception for errors raised while decoding a document."""

    pass


class DefaultParseError(DecodeError):
    """
    Raised when a declared default string does not fit its field's kind.

    Parameters
    ----------
    key
        External key of the field.
    raw
        The raw default string.
    kind
        Name of the target kind.
    reason
        Short description of what went wrong.
    """

    def __init__(self, key: str, raw: str, kind: str, reason: str) -> None:
        super().__init__(f"decode default {key}: parse {raw!r} to {kind}: {reason}")
        self.key = key
        self.raw = raw
        self.kind = kind
        self.reason = reason


class LineParseError(DecodeError):
    """
    Raised when the value of a recognised key does not fit its field's kind.

    Parameters
    ----------
    line_number
        1-based line number of the offending assignment.
    key
        Normalised key from the line.
    value
        Trimmed value from the line.
    kind
        Name of the target kind.
    reason
        Short description of what went wrong.
    """

    def __init__(
        self, line_number: int, key: str, value: str, kind: str, reason: str
    ) -> None:
        super().__init__(
            f"line {line_number} parse {key}={value} to {kind}: {reason}"
        )
        self.line_number = line_number
        self.key = key
        self.value = value
        self.kind = kind
        self.reason = reason


class SourceReadError(DecodeError):
    """
    Raised when the input source fails while it is being scanned.

    Parameters
    ----------
    line_number
        Number of lines successfully read before the failure.
    """

    def __init__(self, line_number: int) -> None:
        super().__init__(f"read failed after line {line_number}")
        self.line_number = line_number


class UnknownKeyError(DecodeError):
    """
    Raised for an undeclared key when unknown keys are fatal.

    Parameters
    ----------
    line_number
        1-based line number of the assignment.
    key
        Normalised key that matched no declared setting.
    """

    def __init__(self, line_number: int, key: str) -> None:
        super().__init__(f"line {line_number} unknown key {key}")
        self.line_number = line_number
        self.key = key


class MissingKeyError(DecodeError):
    """
    Raised for a declared key absent from the input when missing keys are fatal.

    Parameters
    ----------
    key
        The declared key that was never assigned.
    """

    def __init__(self, key: str) -> None:
        super().__init__(f"missing key {key}")
        self.key = key
