"""
Input Validators

This module decides which submissions are acceptable before anything touches
the registry:
- Submitted URLs must be absolute http/https URLs with a host
- Short URL identifiers must be integers

Validation is pure: no I/O, no state. The hostname existence check lives in
services/hostname_resolver.py because it performs network lookups.

Design Decisions:
- The original string is returned untouched; deduplication is exact-string
- Scheme comparison happens after lowercasing (urlsplit normalizes it), so
  "HTTP://example.com" is accepted and stored as submitted
"""

import re
from typing import NamedTuple, Optional
from urllib.parse import urlsplit

from shorturl.core.exceptions import (
    InvalidURLError,
    MalformedIdentifierError,
    ShortURLNotFoundError,
)

ALLOWED_SCHEMES = frozenset({"http", "https"})
DEFAULT_MAX_URL_LENGTH = 2048

_IDENTIFIER_PATTERN = re.compile(r"^([+-]?)0*([0-9]+)$")

# Ids are stored as signed 64-bit integers
MAX_SHORT_URL_ID = 2**63 - 1
_MAX_ID_DIGITS = len(str(MAX_SHORT_URL_ID))

# Leading and trailing C0 controls and spaces are not part of a URL
_C0_CONTROL_OR_SPACE = "".join(chr(code) for code in range(0x21))


class ValidatedURL(NamedTuple):
    """A submission that passed validation."""
    original_url: str
    hostname: str


def validate_url_length(url: str, max_length: int = DEFAULT_MAX_URL_LENGTH) -> bool:
    """
    Validate URL length to prevent DoS attacks.

    Args:
        url: The URL to validate
        max_length: Maximum allowed length (default: 2048 per RFC 7230)

    Returns:
        True if URL length is valid, False otherwise
    """
    return bool(url) and len(url) <= max_length


def validate_url(
    raw: Optional[str],
    max_length: int = DEFAULT_MAX_URL_LENGTH
) -> ValidatedURL:
    """
    Check that `raw` is an absolute http(s) URL with a hostname.

    Args:
        raw: The submitted value, exactly as received
        max_length: Longest accepted URL

    Returns:
        ValidatedURL carrying the untouched input and its hostname

    Raises:
        InvalidURLError: If the input is missing, too long, unparseable,
            not absolute, or uses a scheme other than http/https
    """
    if not raw or not isinstance(raw, str):
        raise InvalidURLError(raw, reason="Missing URL")

    if not validate_url_length(raw, max_length):
        raise InvalidURLError(raw, reason=f"URL longer than {max_length} characters")

    try:
        parts = urlsplit(raw.strip(_C0_CONTROL_OR_SPACE))
        hostname = parts.hostname
        # Accessing .port validates it (non-numeric or out of range raises)
        parts.port
    except ValueError as e:
        raise InvalidURLError(raw, reason=f"Unparseable URL ({e})")

    if not parts.scheme:
        raise InvalidURLError(raw, reason="URL has no scheme")

    if parts.scheme not in ALLOWED_SCHEMES:
        raise InvalidURLError(raw, reason=f"Unsupported scheme '{parts.scheme}'")

    if not hostname:
        raise InvalidURLError(raw, reason="URL has no host")

    return ValidatedURL(original_url=raw, hostname=hostname)


def parse_short_url_id(segment: str) -> int:
    """
    Parse the identifier segment of /api/shorturl/{short_url}.

    Only an optional sign followed by ASCII digits is accepted. Zero and
    negative numbers parse fine; they just never match a record.

    Raises:
        MalformedIdentifierError: If the segment is not an integer
        ShortURLNotFoundError: If the integer is too large to be an id
    """
    candidate = segment.strip() if isinstance(segment, str) else ""
    match = _IDENTIFIER_PATTERN.match(candidate)
    if not match:
        raise MalformedIdentifierError(segment)

    sign, digits = match.groups()
    if len(digits) > _MAX_ID_DIGITS:
        raise ShortURLNotFoundError(candidate)
    return int(sign + digits)
