"""Factory for creating sold-item lookups based on configuration.

Implements Factory Pattern for backend selection with registry pattern for extensibility.

Based on:
- Factory Pattern: https://refactoring.guru/design-patterns/factory-method/python
- Registry Pattern: Python Cookbook 3rd Edition, Recipe 9.22
"""

import logging

from auction_invoices.enrichment.base import SoldItemLookup
from auction_invoices.enrichment.http_lookup import HttpSoldItemLookup
from auction_invoices.enrichment.memory_lookup import InMemorySoldItemLookup
from auction_invoices.shared.config import Settings

logger = logging.getLogger(__name__)


class LookupRegistry:
    """Registry of available sold-item lookup backends."""

    _backends: dict[str, type[SoldItemLookup]] = {
        "memory": InMemorySoldItemLookup,
        "http": HttpSoldItemLookup,
    }

    @classmethod
    def register(cls, name: str, backend_class: type[SoldItemLookup]) -> None:
        """Register a new backend.

        Args:
            name: Backend identifier (must match Settings.inventory_backend)
            backend_class: Class implementing SoldItemLookup
        """
        cls._backends[name] = backend_class
        logger.info(f"Registered sold-item lookup backend: {name}")

    @classmethod
    def get_backend_class(cls, name: str) -> type[SoldItemLookup]:
        """Get backend class by name.

        Raises:
            ValueError: If backend not found in registry
        """
        if name not in cls._backends:
            available = ", ".join(cls._backends.keys())
            raise ValueError(
                f"Unknown inventory backend: '{name}'. " f"Available backends: {available}"
            )
        return cls._backends[name]

    @classmethod
    def list_backends(cls) -> list[str]:
        """List all registered backend names."""
        return list(cls._backends.keys())


def create_sold_item_lookup(settings: Settings) -> SoldItemLookup:
    """Create the sold-item lookup selected by settings.inventory_backend.

    Args:
        settings: Application settings

    Returns:
        Configured lookup instance

    Raises:
        ValueError: If configured backend is unknown

    Example:
        >>> settings = Settings(inventory_backend="http")
        >>> lookup = create_sold_item_lookup(settings)
        >>> lookup.lookup_sold_item(132, 528)
    """
    backend_name = settings.inventory_backend
    backend_class = LookupRegistry.get_backend_class(backend_name)
    lookup = backend_class(settings)
    logger.info(f"Created sold-item lookup: {backend_name}")
    return lookup
