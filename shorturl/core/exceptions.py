"""
Custom Exceptions

This module defines the error taxonomy of the short URL service.

Every error a client can trigger carries a `public_message`: the exact text
rendered in the `{"error": ...}` JSON body. The internal message keeps the
detailed cause for logging.
"""

from typing import Optional, Union


class URLShortenerException(Exception):
    """Base exception for URL shortener service."""
    public_message = "internal error"


class InvalidURLError(URLShortenerException):
    """Raised when a submitted URL is rejected (format, scheme or hostname)."""
    public_message = "invalid url"

    def __init__(self, url: Optional[str], reason: str = "Invalid URL format"):
        self.url = url
        self.reason = reason
        super().__init__(f"{reason}: {url!r}")


class HostnameResolutionError(InvalidURLError):
    """Raised when the hostname of a submitted URL does not resolve."""

    def __init__(self, hostname: str, reason: str = "Hostname lookup failed"):
        self.hostname = hostname
        super().__init__(hostname, reason=reason)


class MalformedIdentifierError(URLShortenerException):
    """Raised when a short URL identifier is not an integer."""
    public_message = "Wrong format"

    def __init__(self, identifier: str):
        self.identifier = identifier
        super().__init__(f"Malformed short URL identifier: {identifier!r}")


class ShortURLNotFoundError(URLShortenerException):
    """Raised when no record matches a short URL identifier."""
    public_message = "No short URL found for the given input"

    def __init__(self, short_url: Union[int, str]):
        self.short_url = short_url
        super().__init__(f"Short URL {short_url} not found")


class DatabaseError(URLShortenerException):
    """Raised when database operations fail."""

    def __init__(self, message: str, original_error: Exception = None):
        self.original_error = original_error
        super().__init__(f"Database error: {message}")


class ServiceUnavailableError(URLShortenerException):
    """Raised when a required service is unavailable."""

    def __init__(self, service_name: str):
        self.service_name = service_name
        super().__init__(f"Service '{service_name}' is unavailable")
