"""
URL Shortening Service

This service handles the core business logic for registering URLs:
- Validating the submitted string (absolute http/https URL with a host)
- Checking that the hostname resolves
- Returning the existing short URL or assigning the next one

Design Decisions:
- Validation and the hostname check both finish before the registry is
  touched, so rejected submissions never consume an id
- The hostname check is awaited outside the registry lock
- The submitted string is stored verbatim (no canonicalization)
"""

import logging

from shorturl.core.exceptions import InvalidURLError
from shorturl.core.validators import DEFAULT_MAX_URL_LENGTH, validate_url
from shorturl.services.hostname_resolver import HostnameResolver
from shorturl.services.registry import Registry, UrlRecord

logger = logging.getLogger(__name__)


class URLShorteningService:
    """
    Core business logic for URL shortening.

    Separated from API layer for testability and maintainability.
    """

    def __init__(
        self,
        registry: Registry,
        resolver: HostnameResolver,
        max_url_length: int = DEFAULT_MAX_URL_LENGTH
    ):
        """
        Initialize the URL shortening service.

        Args:
            registry: Registry holding id <-> URL mappings
            resolver: Hostname existence check
            max_url_length: Longest URL accepted
        """
        self.registry = registry
        self.resolver = resolver
        self.max_url_length = max_url_length

    async def create_short_url(self, original_url: str) -> UrlRecord:
        """
        Register a URL or return its existing record.

        Args:
            original_url: The submitted string, exactly as received

        Returns:
            UrlRecord with the short URL id

        Raises:
            InvalidURLError: If validation or the hostname check fails
        """
        try:
            validated = validate_url(original_url, max_length=self.max_url_length)
            await self.resolver.resolve(validated.hostname)
        except InvalidURLError as e:
            logger.info(f"Rejected submission: {e}")
            raise

        return await self.registry.get_or_create(validated.original_url)
