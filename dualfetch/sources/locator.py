from __future__ import annotations

from urllib.parse import urlparse

from ..errors import InvalidSourceError

ALLOWED_SCHEMES = ("http", "https")


def validate_locator(source_id: str, locator: object) -> str:
    """Return the locator unchanged if it is an absolute http(s) URL."""
    if not isinstance(locator, str) or not locator.strip():
        raise InvalidSourceError(source_id=source_id, message="Locator must be a non-empty string", locator=locator)

    if any(ch.isspace() for ch in locator):
        raise InvalidSourceError(source_id=source_id, message=f"Locator contains whitespace: {locator!r}", locator=locator)

    try:
        parsed = urlparse(locator)
    except ValueError as exc:
        raise InvalidSourceError(source_id=source_id, message=f"Malformed URL: {exc}", locator=locator) from exc

    if parsed.scheme.lower() not in ALLOWED_SCHEMES:
        raise InvalidSourceError(
            source_id=source_id,
            message=f"Unsupported scheme {parsed.scheme!r} (expected http or https)",
            locator=locator,
        )
    if not parsed.hostname:
        raise InvalidSourceError(source_id=source_id, message="URL has no host", locator=locator)
    return locator
