"""
Hostname Resolver

Existence check for the hostname of a submitted URL. A URL is only
registered when its host resolves, which filters out typos and made-up
domains.

Design Decisions:
- Resolution goes through the event loop's getaddrinfo (runs in the default
  executor), so the request suspends instead of blocking the loop
- One attempt per request, bounded by a timeout; no retries
- Every failure (unknown host, resolver error, timeout) surfaces as
  HostnameResolutionError, which clients see as the generic "invalid url"
"""

import asyncio
import logging
import socket

from shorturl.core.exceptions import HostnameResolutionError

logger = logging.getLogger(__name__)


class HostnameResolver:
    """Resolves hostnames with a bounded wait."""

    def __init__(self, timeout: float = 5.0):
        self.timeout = timeout

    async def resolve(self, hostname: str) -> None:
        """
        Check that `hostname` resolves to at least one address.

        Raises:
            HostnameResolutionError: On any lookup failure or timeout
        """
        loop = asyncio.get_running_loop()
        try:
            addresses = await asyncio.wait_for(
                loop.getaddrinfo(hostname, None, type=socket.SOCK_STREAM),
                timeout=self.timeout
            )
        except asyncio.TimeoutError:
            logger.info(f"Hostname lookup timed out after {self.timeout}s: {hostname}")
            raise HostnameResolutionError(hostname, reason="Hostname lookup timed out")
        except (OSError, UnicodeError) as e:
            logger.info(f"Hostname lookup failed for {hostname}: {e}")
            raise HostnameResolutionError(hostname, reason=f"Hostname lookup failed ({e})")

        if not addresses:
            raise HostnameResolutionError(hostname, reason="Hostname has no addresses")


class NoopHostnameResolver(HostnameResolver):
    """Accepts every hostname. Used when HOSTNAME_CHECK_ENABLED is off."""

    async def resolve(self, hostname: str) -> None:
        return None
