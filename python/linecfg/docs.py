"""
Documentation generation from setting metadata.

This module provides:
- generate_settings_docs: Generate markdown documentation
- export_settings_json: Export to a JSON-serialisable dict
- write_template: Write a commented document with every declared default
"""

from __future__ import annotations

from typing import Any, TextIO

from .schema import extract_fields
from .values import LINE_PARSERS

__all__ = ["export_settings_json", "generate_settings_docs", "write_template"]


def generate_settings_docs(cls: type) -> str:
    """Generate markdown documentation from setting metadata.

    Parameters
    ----------
    cls : type
        A dataclass type with fields defined via setting()

    Returns
    -------
    str
        Markdown-formatted documentation

    Examples
    --------
    >>> from dataclasses import dataclass
    >>> from linecfg.schema import setting
    >>> @dataclass
    ... class Window:
    ...     '''Window settings.'''
    ...
    ...     width: int = setting("width", default=0, description="Width in px")
    >>> md = generate_settings_docs(Window)
    >>> "`width`" in md
    True
    """
    lines = [f"# {cls.__name__}", ""]

    if cls.__doc__:
        lines.append(cls.__doc__.strip())
        lines.append("")

    descriptors = extract_fields(cls)
    if descriptors:
        lines.append("## Settings")
        lines.append("")

        for descriptor in descriptors:
            lines.append(f"### `{descriptor.key}`")
            lines.append("")

            if descriptor.description:
                lines.append(descriptor.description)
                lines.append("")

            lines.append(f"- **Kind**: {descriptor.kind_label}")
            if descriptor.raw_default is not None:
                lines.append(f"- **Default**: `{descriptor.raw_default}`")
            lines.append("")

    return "\n".join(lines)


def export_settings_json(cls: type) -> dict[str, Any]:
    """Export setting metadata as a JSON-serialisable dict.

    Returns
    -------
    dict
        ``{"class": str, "description": str | None, "settings": [...]}``
        where each setting has ``key``, ``field``, ``kind``, ``bits``,
        ``default`` and ``description``.
    """
    settings = [
        {
            "key": descriptor.key,
            "field": descriptor.name,
            "kind": descriptor.kind_label,
            "bits": descriptor.bits or None,
            "default": descriptor.raw_default,
            "description": descriptor.description,
        }
        for descriptor in extract_fields(cls)
    ]
    return {
        "class": cls.__name__,
        "description": cls.__doc__.strip() if cls.__doc__ else None,
        "settings": settings,
    }


def write_template(cls: type, sink: TextIO) -> None:
    """
    Write a commented starter document for a record type.

    Settings with a raw default are written as assignments. Settings without
    one, or whose kind cannot be read back from an assignment line, are
    written commented out so the document still decodes.

    Parameters
    ----------
    cls
        A dataclass type with fields defined via setting()
    sink
        Writable text stream.
    """
    for descriptor in extract_fields(cls):
        if descriptor.description:
            sink.write(f"# {descriptor.description}\n")
        if descriptor.raw_default is None:
            sink.write(f"# {descriptor.key} =\n")
        elif descriptor.kind not in LINE_PARSERS:
            sink.write(f"# {descriptor.key} = {descriptor.raw_default}\n")
        else:
            sink.write(f"{descriptor.key} = {descriptor.raw_default}\n")
