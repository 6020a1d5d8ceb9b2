"""
Setting annotations and schema extraction.

Record types are plain dataclasses. Fields that should appear in a document
are declared with :func:`setting`, which attaches the external key and an
optional raw default string to the field's metadata:

    >>> from dataclasses import dataclass
    >>> from linecfg.schema import extract_fields, setting
    >>>
    >>> @dataclass
    ... class WindowConfig:
    ...     title: str = setting("title", default="", raw_default="untitled")
    ...     width: int = setting("width", default=0, raw_default="640")
    ...     scratch: int = 0  # not part of the document
    >>>
    >>> [d.key for d in extract_fields(WindowConfig)]
    ['title', 'width']
"""

from __future__ import annotations

import dataclasses
import typing
from dataclasses import MISSING, dataclass, field
from typing import Any

from .exceptions import SchemaError
from .kinds import ValueKind, infer_kind

__all__ = [
    "FieldDescriptor",
    "SettingMetadata",
    "extract_fields",
    "get_setting_metadata",
    "record_fields",
    "setting",
]

METADATA_KEY = "setting"


@dataclass
class SettingMetadata:
    """Annotation attached to a participating dataclass field.

    Attributes
    ----------
    key : str
        External key used in the document
    raw_default : str | None
        Default applied (as text) before a document is parsed
    kind : ValueKind | None
        Explicit kind, overriding the one implied by the annotation
    bits : int | None
        Explicit bit width for integer kinds
    description : str | None
        Human-readable description, used by the docs helpers
    """

    key: str
    raw_default: str | None = None
    kind: ValueKind | None = None
    bits: int | None = None
    description: str | None = None


@dataclass(frozen=True)
class FieldDescriptor:
    """Everything the codec needs to know about one participating field.

    Attributes
    ----------
    name : str
        Attribute name on the record
    key : str
        External key
    kind : ValueKind | None
        Native kind, or None when the field's type has no native kind
    raw_default : str | None
        Raw default string, None when absent or empty
    bits : int
        Bit width (integer and float kinds)
    type_name : str
        Name of the field's annotated type, for messages
    description : str | None
        Human-readable description
    """

    name: str
    key: str
    kind: ValueKind | None
    raw_default: str | None = None
    bits: int = 0
    type_name: str = ""
    description: str | None = None

    @property
    def kind_label(self) -> str:
        """Kind name for messages; falls back to the type name."""
        return self.kind.label if self.kind is not None else self.type_name


def setting(  # noqa: PLR0913
    key: str,
    default: Any = MISSING,
    *,
    default_factory: Any = MISSING,
    raw_default: str | None = None,
    kind: ValueKind | None = None,
    bits: int | None = None,
    description: str | None = None,
) -> Any:
    """Create a dataclass field that participates in the document.

    Parameters
    ----------
    key : str
        External key. Input keys are lower-cased before matching, so keys
        containing upper-case characters never match a document line.
    default : Any
        Python default for constructing the record.
    default_factory : Any
        Factory for mutable defaults such as ``Rectangle``.
    raw_default : str | None
        Text parsed into the field before a document is decoded.
    kind : ValueKind | None
        Explicit kind, for fields whose annotation does not imply one.
    bits : int | None
        Explicit bit width for INT and UINT fields.
    description : str | None
        Human-readable description

    Returns
    -------
    Any
        A dataclass field with setting metadata attached

    Examples
    --------
    >>> from dataclasses import dataclass
    >>> @dataclass
    ... class Limits:
    ...     retries: int = setting("retries", default=0, raw_default="3")
    """
    metadata = {
        METADATA_KEY: SettingMetadata(
            key=key,
            raw_default=raw_default,
            kind=kind,
            bits=bits,
            description=description,
        )
    }

    if default_factory is not MISSING:
        return field(default_factory=default_factory, metadata=metadata)
    if default is MISSING:
        return field(metadata=metadata)
    return field(default=default, metadata=metadata)


def get_setting_metadata(cls: type) -> dict[str, SettingMetadata]:
    """Map attribute names to the setting metadata of participating fields.

    Parameters
    ----------
    cls : type
        A dataclass type with fields declared via setting()

    Returns
    -------
    dict[str, SettingMetadata]
        Metadata by attribute name, in declaration order
    """
    return {
        f.name: f.metadata[METADATA_KEY]
        for f in dataclasses.fields(cls)
        if METADATA_KEY in f.metadata
    }


def _record_type(record: Any) -> type:
    cls = record if isinstance(record, type) else type(record)
    if not dataclasses.is_dataclass(cls):
        msg = f"{cls.__name__} is not a dataclass"
        raise SchemaError(msg)
    return cls


def _type_name(annotation: Any) -> str:
    return getattr(annotation, "__name__", str(annotation))


def extract_fields(record: Any) -> list[FieldDescriptor]:
    """Build the ordered field descriptors of a record type.

    Parameters
    ----------
    record : Any
        A dataclass type or instance

    Returns
    -------
    list[FieldDescriptor]
        One descriptor per participating field, in declaration order

    Raises
    ------
    SchemaError
        If the record is not a dataclass, its annotations cannot be
        resolved, or a setting has an empty key
    """
    cls = _record_type(record)
    try:
        hints = typing.get_type_hints(cls)
    except Exception as err:
        msg = f"cannot resolve annotations of {cls.__name__}: {err}"
        raise SchemaError(msg) from err

    descriptors = []
    for f in dataclasses.fields(cls):
        meta = f.metadata.get(METADATA_KEY)
        if meta is None:
            continue
        if not meta.key:
            msg = f"{cls.__name__}.{f.name} has an empty setting key"
            raise SchemaError(msg)

        annotation = hints.get(f.name)
        kind, bits = infer_kind(annotation, meta.kind, meta.bits)
        descriptors.append(
            FieldDescriptor(
                name=f.name,
                key=meta.key,
                kind=kind,
                raw_default=meta.raw_default or None,
                bits=bits,
                type_name=_type_name(annotation),
                description=meta.description,
            )
        )
    return descriptors


def record_fields(record: Any) -> list[FieldDescriptor]:
    """Like :func:`extract_fields`, but only for record instances.

    Raises
    ------
    SchemaError
        If ``record`` is a type rather than an instance
    """
    if isinstance(record, type):
        msg = f"expected a {record.__name__} instance, got the class itself"
        raise SchemaError(msg)
    return extract_fields(record)
