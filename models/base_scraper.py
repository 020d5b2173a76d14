"""
Base Scraper Abstract Class.

This module defines the capability contract shared by all vendor-specific
article scrapers. A vendor scraper implements get_article_by_id() and
get_distributor_name(); callers never need to know which vendor they talk to.

Classes:
    BaseScraper: Abstract base class with common scraper interface and configuration.
"""

import asyncio
from abc import ABC, abstractmethod
from typing import Optional
from pydantic import BaseModel
from .models import ProductRecord


class BaseScraper(BaseModel, ABC):
    """
    Abstract base class for vendor-specific article scrapers.

    Attributes:
        distributor_name: Display name of the vendor (e.g., "Conrad").

    Configuration:
        arbitrary_types_allowed: Allows callables (fetch, drift hook) as fields.

    Example:
        >>> class CustomScraper(BaseScraper):
        ...     distributor_name: str = "custom_vendor"
        ...
        ...     def get_article_by_id(self, article_id: str):
        ...         # Implementation here
        ...         pass
    """

    distributor_name: str

    class Config:
        """Pydantic model configuration."""
        arbitrary_types_allowed = True

    def get_distributor_name(self) -> str:
        return self.distributor_name

    @abstractmethod
    def get_article_by_id(self, article_id: str) -> Optional[ProductRecord]:
        """
        Fetch and parse the product page for an article id.

        Args:
            article_id: The vendor's numeric article number, as a string.

        Returns:
            ProductRecord when the article exists, None when the vendor
            reports that no such article exists.

        Raises:
            InvalidIdentifier: If the id is rejected before fetching.
            TransportFailure: If the page could not be fetched.
            WrongPage: If the vendor served an error page.
            StructureError: If a markup block never closes.
            LayoutDrift: If the page exists but its price cannot be parsed.
        """

    async def scrape(self, article_id: str) -> Optional[ProductRecord]:
        """
        Async wrapper around get_article_by_id().

        The lookup blocks on a single HTTP request, so it runs in the default
        executor to let callers fan out over many ids with asyncio.gather.
        """
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, self.get_article_by_id, article_id)
