"""Canonical reason phrases for HTTP status codes."""

import httpx


def to_reason_phrase(status_code: int) -> str:
    """Return the canonical reason phrase for a status code.

    Args:
        status_code: The numeric HTTP status code, e.g. 404.

    Returns:
        The registered phrase (e.g. "Not Found"), or an empty string when the
        code is not a registered HTTP status.
    """
    return httpx.codes.get_reason_phrase(status_code)
