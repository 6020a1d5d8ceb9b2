"""
String and file helpers around :class:`Encoder` and :class:`Decoder`.

This module provides:
- dumps / loads: Encode to and decode from a string
- dump_file / load_file: Encode to and decode from a file on disk
"""

from __future__ import annotations

import io
import logging
from pathlib import Path
from typing import TYPE_CHECKING, Any, TypeVar

from .decoder import Decoder
from .encoder import Encoder

if TYPE_CHECKING:
    from .hooks import FallbackHandler

logger = logging.getLogger(__name__)

__all__ = [
    "dump_file",
    "dumps",
    "load_file",
    "loads",
]

RecordT = TypeVar("RecordT")


def dumps(record: Any, fallback: FallbackHandler | None = None) -> str:
    """
    Encode a record to a string.

    Parameters
    ----------
    record
        Dataclass instance with fields declared via setting().
    fallback
        Optional handler for kinds the encoder cannot format.

    Returns
    -------
    str
        The encoded document.

    Examples
    --------
    >>> dumps(config)  # doctest: +SKIP
    'title = untitled\\nwidth = 640\\n'
    """
    buffer = io.StringIO()
    Encoder(buffer, fallback=fallback).encode(record)
    return buffer.getvalue()


def loads(text: str, record: RecordT, **options: Any) -> RecordT:
    """
    Decode a string into a record.

    Parameters
    ----------
    text
        Document text.
    record
        Dataclass instance to populate.
    **options
        Passed to :class:`Decoder` (``fail_on_unknown_key`` and friends).

    Returns
    -------
    RecordT
        ``record`` itself, for chaining.
    """
    Decoder(io.StringIO(text), **options).decode(record)
    return record


def dump_file(
    record: Any, path: str | Path, fallback: FallbackHandler | None = None
) -> None:
    """
    Encode a record and write it to a file.

    The document is encoded in memory first, so an encoding error leaves
    any existing file untouched.

    Parameters
    ----------
    record
        Dataclass instance with fields declared via setting().
    path
        Destination file path.
    fallback
        Optional handler for kinds the encoder cannot format.
    """
    path = Path(path)
    text = dumps(record, fallback=fallback)
    with path.open("w", encoding="utf-8", newline="\n") as f:
        f.write(text)
    logger.info(f"Wrote {type(record).__name__} to {path}")


def load_file(path: str | Path, record: RecordT, **options: Any) -> RecordT:
    """
    Decode a file into a record.

    Parameters
    ----------
    path
        Path to the document.
    record
        Dataclass instance to populate.
    **options
        Passed to :class:`Decoder`.

    Returns
    -------
    RecordT
        ``record`` itself, for chaining.

    Examples
    --------
    >>> config = load_file("window.cfg", WindowConfig())  # doctest: +SKIP
    >>> config.width  # doctest: +SKIP
    640
    """
    path = Path(path)
    with path.open(encoding="utf-8") as f:
        Decoder(f, **options).decode(record)
    logger.info(f"Loaded {type(record).__name__} from {path}")
    return record
