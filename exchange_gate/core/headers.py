"""Helpers for multi-valued header mappings.

A header mapping maps a header name, as stored, to an ordered list of values.
Repeatable headers such as Set-Cookie keep one list entry per occurrence.
"""

import logging
from typing import List, MutableMapping, Optional

logger = logging.getLogger(__name__)

HeaderMapping = MutableMapping[str, List[str]]


def get_headers(headers: HeaderMapping, name: str) -> Optional[List[str]]:
    """Return the stored values for `name`, or None if the header is absent."""
    return headers.get(name)


def get_header(headers: HeaderMapping, name: str) -> Optional[str]:
    """Return the values for `name` combined into a single string.

    Returns:
        None if the header is absent, an empty string if it has no values,
        the sole value if it has one, otherwise all values joined with ",".
    """
    values = get_headers(headers, name)
    if values is None:
        return None
    if len(values) == 0:
        return ""
    if len(values) == 1:
        return values[0]
    return ",".join(values)


def add_header(headers: HeaderMapping, name: str, value: str) -> None:
    """Append `value` to the values for `name`, creating the entry if needed."""
    existing = headers.get(name)
    if existing is None:
        headers[name] = [value]
    else:
        existing.append(value)


def set_header(headers: HeaderMapping, name: str, value: Optional[str]) -> None:
    """Replace all values for `name` with `value`.

    An empty or whitespace-only value removes the header instead.
    """
    if value is None or not value.strip():
        if headers.pop(name, None) is not None:
            logger.debug(f"Removed header '{name}'")
        return
    headers[name] = [value]
