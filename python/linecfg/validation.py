"""
Key presence validation for decoded documents.

This module provides:
- Missing key detection after a document has been scanned
- Missing key policy enforcement
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from .exceptions import MissingKeyError

logger = logging.getLogger(__name__)

__all__ = [
    "check_missing_keys",
    "find_missing_keys",
]


def find_missing_keys(declared: Iterable[str], found: set[str]) -> list[str]:
    """
    Find declared keys that were never assigned.

    Parameters
    ----------
    declared
        Declared keys, in declaration order.
    found
        Keys recorded as found while scanning.

    Returns
    -------
    list[str]
        Declared keys absent from ``found``, in declaration order and
        without duplicates.

    Examples
    --------
    >>> find_missing_keys(["a", "b", "c"], {"b"})
    ['a', 'c']
    >>> find_missing_keys(["a"], {"a", "zzz"})
    []
    """
    missing = []
    for key in declared:
        if key not in found and key not in missing:
            missing.append(key)
    return missing


def check_missing_keys(
    declared: Iterable[str], found: set[str], fail_on_missing_key: bool
) -> None:
    """
    Apply the missing key policy.

    Parameters
    ----------
    declared
        Declared keys, in declaration order.
    found
        Keys recorded as found while scanning.
    fail_on_missing_key
        Whether a missing key is fatal.

    Raises
    ------
    MissingKeyError
        For the first missing key, if ``fail_on_missing_key`` is set.
    """
    for key in find_missing_keys(declared, found):
        if fail_on_missing_key:
            raise MissingKeyError(key)
        logger.debug(f"Key '{key}' not in document, keeping current value")
