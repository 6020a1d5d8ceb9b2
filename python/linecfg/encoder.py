"""Encoder that writes a record as ``key = value`` lines."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, NoReturn, TextIO

from .exceptions import EncodeError, UnsupportedKindError
from .schema import FieldDescriptor, record_fields
from .values import ENCODE_FORMATTERS

if TYPE_CHECKING:
    from .hooks import FallbackHandler

logger = logging.getLogger(__name__)

__all__ = ["Encoder"]


class Encoder:
    """
    Writes config records to a text sink.

    Parameters
    ----------
    sink
        Writable text stream. It is never seeked or closed.
    fallback
        Optional handler offered values whose kind cannot be formatted.

    Examples
    --------
    >>> import io
    >>> out = io.StringIO()
    >>> Encoder(out).encode(config)  # doctest: +SKIP
    >>> out.getvalue()  # doctest: +SKIP
    'width = 640\\n'
    """

    def __init__(self, sink: TextIO, fallback: FallbackHandler | None = None) -> None:
        self.sink = sink
        self.fallback = fallback

    def encode(self, record: Any) -> None:
        """
        Write one line per participating field, in declaration order.

        Parameters
        ----------
        record
            Dataclass instance to encode.

        Raises
        ------
        SchemaError
            If the record's settings cannot be extracted.
        UnsupportedKindError
            If a field's kind has no formatter. The fallback is consulted first.
        EncodeError
            If a value cannot be formatted or the sink fails. Lines already
            written stay written.
        """
        for descriptor in record_fields(record):
            value = getattr(record, descriptor.name)
            text = self._format(descriptor, value)
            try:
                self.sink.write(f"{descriptor.key} = {text}\n")
            except (OSError, ValueError) as err:
                raise EncodeError(descriptor.key, descriptor.kind_label) from err
            logger.debug(f"Wrote '{descriptor.key}' ({descriptor.kind_label})")

    def _format(self, descriptor: FieldDescriptor, value: Any) -> str:
        formatter = ENCODE_FORMATTERS.get(descriptor.kind)
        if formatter is None:
            self._refuse(descriptor, value)

        try:
            return formatter(value)
        except (TypeError, ValueError, AttributeError) as err:
            raise EncodeError(
                descriptor.key,
                descriptor.kind_label,
                f"cannot format {type(value).__name__} value",
            ) from err

    def _refuse(self, descriptor: FieldDescriptor, value: Any) -> NoReturn:
        error = UnsupportedKindError(descriptor.key, descriptor.kind_label, "encode")
        if self.fallback is not None:
            try:
                self.fallback.try_format(descriptor, value)
            except Exception as err:
                raise error from err
        raise error
