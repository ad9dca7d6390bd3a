"""
Registry Manager

This module manages the process-wide registry and hostname resolver.
Both are created once on application startup and shared across requests.

Design:
- One registry per process, built from settings on startup
- Handed to endpoints through FastAPI dependencies (get_registry,
  get_resolver), so tests can swap them via app.dependency_overrides
- Registry state is process-local: each worker process has its own
"""

import logging
from typing import Optional

from shorturl.core.exceptions import ServiceUnavailableError
from shorturl.core.setting import RegistryBackend, Settings, settings
from shorturl.services.hostname_resolver import HostnameResolver, NoopHostnameResolver
from shorturl.services.registry import InMemoryRegistry, Registry

logger = logging.getLogger(__name__)

# Global registry instance (initialized on startup)
_registry: Optional[Registry] = None


async def build_registry(config: Settings) -> Registry:
    """Create the registry backend selected by `config.REGISTRY_BACKEND`."""
    if config.REGISTRY_BACKEND == RegistryBackend.database:
        from shorturl.db.session import create_engine, create_session_maker, create_tables
        from shorturl.services.sql_registry import SQLRegistry

        engine = create_engine(config.DATABASE_URL)
        await create_tables(engine)
        return SQLRegistry(create_session_maker(engine), engine=engine)

    return InMemoryRegistry()


def build_resolver(config: Settings) -> HostnameResolver:
    """Create the hostname existence check configured by `config`."""
    if not config.HOSTNAME_CHECK_ENABLED:
        return NoopHostnameResolver()
    return HostnameResolver(timeout=config.RESOLVER_TIMEOUT_SECONDS)


_resolver: HostnameResolver = build_resolver(settings)


async def initialize_registry(config: Settings = settings) -> None:
    """Initialize the global registry."""
    global _registry

    if _registry is not None:
        logger.warning("Registry already initialized")
        return

    _registry = await build_registry(config)
    logger.info(f"Registry initialized: backend={config.REGISTRY_BACKEND.value}")


async def shutdown_registry() -> None:
    """Release the global registry."""
    global _registry

    if _registry is not None:
        logger.info("Shutting down registry")
        await _registry.close()
        _registry = None


def get_registry() -> Registry:
    """
    FastAPI dependency returning the global registry.

    Raises:
        ServiceUnavailableError: If the application has not started yet
    """
    if _registry is None:
        raise ServiceUnavailableError("registry")
    return _registry


def get_resolver() -> HostnameResolver:
    """FastAPI dependency returning the hostname resolver."""
    return _resolver
