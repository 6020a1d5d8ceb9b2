"""
Fallback handlers for kinds a codec path does not understand.

A fallback is consulted only on the unsupported-kind path. It may inspect,
log or record the value; the codec raises ``UnsupportedKindError`` afterwards
regardless. If the handler itself raises, that exception becomes the cause of
the ``UnsupportedKindError``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Protocol

if TYPE_CHECKING:
    from .schema import FieldDescriptor

logger = logging.getLogger(__name__)

__all__ = ["FallbackCall", "FallbackHandler", "RecordingFallback"]


class FallbackHandler(Protocol):
    """Capability interface for fallback handlers."""

    def try_format(self, descriptor: FieldDescriptor, value: Any) -> None:
        """Observe a value the encoder cannot format."""
        ...

    def try_parse(self, descriptor: FieldDescriptor, raw: str) -> None:
        """Observe a raw default the decoder cannot parse."""
        ...


@dataclass
class FallbackCall:
    """One observed fallback invocation."""

    path: str  # "encode" or "default"
    key: str
    kind: str
    value: Any


@dataclass
class RecordingFallback:
    """
    Fallback handler that logs and keeps every value it is offered.

    Attributes
    ----------
    calls
        Observed invocations, oldest first
    """

    calls: list[FallbackCall] = field(default_factory=list)

    def try_format(self, descriptor: FieldDescriptor, value: Any) -> None:
        """Log and record a value the encoder cannot format."""
        logger.info(
            f"No formatter for '{descriptor.key}' ({descriptor.kind_label}), "
            "recording value"
        )
        self.calls.append(
            FallbackCall("encode", descriptor.key, descriptor.kind_label, value)
        )

    def try_parse(self, descriptor: FieldDescriptor, raw: str) -> None:
        """Log and record a raw default the decoder cannot parse."""
        logger.info(
            f"No default parser for '{descriptor.key}' ({descriptor.kind_label}), "
            "recording raw default"
        )
        self.calls.append(
            FallbackCall("default", descriptor.key, descriptor.kind_label, raw)
        )
