"""
Redirect Service

This service handles URL redirection logic: turning the identifier segment
of /api/shorturl/{short_url} into the URL to redirect to.
"""

from shorturl.core.exceptions import ShortURLNotFoundError
from shorturl.core.validators import parse_short_url_id
from shorturl.services.registry import Registry


class RedirectService:
    """Service for handling URL redirections."""

    def __init__(self, registry: Registry):
        self.registry = registry

    async def get_redirect_url(self, identifier: str) -> str:
        """
        Get the original URL for redirection.

        Raises:
            MalformedIdentifierError: If `identifier` is not an integer
            ShortURLNotFoundError: If no record has that id
        """
        short_url = parse_short_url_id(identifier)
        record = await self.registry.lookup(short_url)
        if record is None:
            raise ShortURLNotFoundError(short_url)
        return record.original_url
