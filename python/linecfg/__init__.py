"""
Line-oriented configuration codec.

This package reads and writes dataclass records as plain text documents with
one ``key = value`` assignment per line and ``#`` comments:
- Fields opt in with setting(), which names the external key and an optional
  raw default string
- Encoder writes a record, Decoder applies defaults and reads one back
- Unknown and missing keys are fatal or ignored per Decoder flags

Example:
    >>> from dataclasses import dataclass
    >>> from linecfg import Rectangle, loads, setting
    >>>
    >>> @dataclass
    ... class Viewport:
    ...     fullscreen: bool = setting("fullscreen", default=False)
    ...     area: Rectangle = setting("area", default_factory=Rectangle)
    >>>
    >>> view = loads("fullscreen = true\\narea = 0,0,800,600\\n", Viewport())
    >>> view.area.max
    (800, 600)
"""

from __future__ import annotations

from .decoder import Decoder
from .docs import export_settings_json, generate_settings_docs, write_template
from .encoder import Encoder
from .exceptions import (
    CodecError,
    DecodeError,
    DefaultParseError,
    EncodeError,
    LineParseError,
    MissingKeyError,
    SchemaError,
    SourceReadError,
    UnknownKeyError,
    UnsupportedKindError,
)
from .hooks import FallbackCall, FallbackHandler, RecordingFallback
from .kinds import Color, Rectangle, ValueKind
from .loader import dump_file, dumps, load_file, loads
from .schema import FieldDescriptor, SettingMetadata, extract_fields, setting

__all__ = [
    "CodecError",
    "Color",
    "DecodeError",
    "Decoder",
    "DefaultParseError",
    "EncodeError",
    "Encoder",
    "FallbackCall",
    "FallbackHandler",
    "FieldDescriptor",
    "LineParseError",
    "MissingKeyError",
    "Rectangle",
    "RecordingFallback",
    "SchemaError",
    "SettingMetadata",
    "SourceReadError",
    "UnknownKeyError",
    "UnsupportedKindError",
    "ValueKind",
    "dump_file",
    "dumps",
    "export_settings_json",
    "extract_fields",
    "generate_settings_docs",
    "load_file",
    "loads",
    "setting",
    "write_template",
]
