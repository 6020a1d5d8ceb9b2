"""
Decoder that reads ``key = value`` lines into a record.

Decoding runs in three steps over the record's field descriptors:

1. Raw defaults declared with ``setting(..., raw_default=...)`` are parsed and
   assigned.
2. The source is scanned line by line. Comment lines (``#`` in the first
   column) are skipped, lines without exactly one ``=`` are ignored, keys are
   trimmed and lower-cased, values are trimmed.
3. Declared keys that never appeared are checked against the missing key
   policy.

The value kinds accepted on assignment lines are a strict subset of those
accepted for raw defaults; see :mod:`linecfg.values`.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from typing import TYPE_CHECKING, Any, TextIO

from .exceptions import (
    DefaultParseError,
    LineParseError,
    SourceReadError,
    UnknownKeyError,
    UnsupportedKindError,
)
from .schema import FieldDescriptor, record_fields
from .validation import check_missing_keys
from .values import DEFAULT_PARSERS, LINE_PARSERS

if TYPE_CHECKING:
    from .hooks import FallbackHandler

logger = logging.getLogger(__name__)

__all__ = ["Decoder"]


def _scan_lines(source: TextIO) -> Iterator[tuple[int, str]]:
    """Yield ``(line_number, line)`` with the line terminator removed."""
    line_number = 0
    try:
        for line in source:
            line_number += 1
            line = line.removesuffix("\n")
            yield line_number, line.removesuffix("\r")
    except (OSError, UnicodeDecodeError) as err:
        raise SourceReadError(line_number) from err


def _split_assignment(line: str) -> tuple[str, str] | None:
    """Split an assignment line into a normalised key and trimmed value."""
    if line.startswith("#"):
        return None
    parts = line.split("=")
    if len(parts) != 2:  # noqa: PLR2004
        # No "=" or more than one: not an assignment
        return None
    return parts[0].strip().lower(), parts[1].strip()


class Decoder:
    """
    Reads config records from a text source.

    Parameters
    ----------
    source
        Readable text stream, iterated line by line. It is never seeked or
        closed.
    decode_fallback
        Accepted for symmetry with the default fallback. Assignment lines never
        consult it: an unsupported kind on a line is always an error.
    default_fallback
        Optional handler offered raw defaults whose kind cannot be parsed.
    fail_on_unknown_key
        Raise :class:`UnknownKeyError` for keys no field declares.
    fail_on_missing_key
        Raise :class:`MissingKeyError` for declared keys absent from the
        document.
    """

    def __init__(  # noqa: PLR0913
        self,
        source: TextIO,
        decode_fallback: FallbackHandler | None = None,
        default_fallback: FallbackHandler | None = None,
        fail_on_unknown_key: bool = False,
        fail_on_missing_key: bool = False,
    ) -> None:
        self.source = source
        self.decode_fallback = decode_fallback
        self.default_fallback = default_fallback
        self.fail_on_unknown_key = fail_on_unknown_key
        self.fail_on_missing_key = fail_on_missing_key

    def decode(self, record: Any) -> None:
        """
        Apply defaults, then read the source into ``record``.

        Parameters
        ----------
        record
            Dataclass instance to populate. On error it is left partially
            updated.

        Raises
        ------
        SchemaError
            If the record's settings cannot be extracted.
        DefaultParseError
            If a raw default does not fit its field. No line has been read.
        UnsupportedKindError
            If a raw default or an assignment targets a kind that path cannot
            parse.
        LineParseError
            If an assignment's value does not fit its field.
        UnknownKeyError, MissingKeyError
            According to the key policy.
        SourceReadError
            If the source fails while being read.
        """
        descriptors = record_fields(record)
        self._apply_defaults(record, descriptors)
        found = self._read_document(record, descriptors)
        check_missing_keys(
            (d.key for d in descriptors), found, self.fail_on_missing_key
        )

    def apply_defaults(self, record: Any) -> None:
        """
        Parse and assign every declared raw default, without reading the source.

        Raises
        ------
        DefaultParseError, UnsupportedKindError
            As for :meth:`decode`.
        """
        self._apply_defaults(record, record_fields(record))

    def _apply_defaults(self, record: Any, descriptors: list[FieldDescriptor]) -> None:
        for descriptor in descriptors:
            raw = descriptor.raw_default
            if not raw:
                continue

            parser = DEFAULT_PARSERS.get(descriptor.kind)
            if parser is None:
                error = UnsupportedKindError(
                    descriptor.key, descriptor.kind_label, "default"
                )
                if self.default_fallback is not None:
                    try:
                        self.default_fallback.try_parse(descriptor, raw)
                    except Exception as err:
                        raise error from err
                raise error

            try:
                value = parser(raw, descriptor.bits)
            except ValueError as err:
                raise DefaultParseError(
                    descriptor.key, raw, descriptor.kind_label, str(err)
                ) from err
            setattr(record, descriptor.name, value)
            logger.debug(f"Applied default {raw!r} to '{descriptor.key}'")

    def _read_document(
        self, record: Any, descriptors: list[FieldDescriptor]
    ) -> set[str]:
        found: set[str] = set()
        for line_number, line in _scan_lines(self.source):
            assignment = _split_assignment(line)
            if assignment is None:
                continue
            key, value = assignment

            matched = False
            for descriptor in descriptors:
                # Declared keys are compared as written, input keys lower-cased
                if descriptor.key != key:
                    continue
                parsed = self._parse_line_value(descriptor, line_number, key, value)
                setattr(record, descriptor.name, parsed)
                matched = True
                found.add(key)

            if not matched:
                if self.fail_on_unknown_key:
                    raise UnknownKeyError(line_number, key)
                logger.warning(f"Line {line_number}: unknown key '{key}', ignoring")
        return found

    def _parse_line_value(
        self, descriptor: FieldDescriptor, line_number: int, key: str, value: str
    ) -> Any:
        parser = LINE_PARSERS.get(descriptor.kind)
        if parser is None:
            raise UnsupportedKindError(
                key, descriptor.kind_label, "decode", line_number=line_number
            )
        try:
            return parser(value, descriptor.bits)
        except ValueError as err:
            raise LineParseError(
                line_number, key, value, descriptor.kind_label, str(err)
            ) from err
