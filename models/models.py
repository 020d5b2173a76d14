"""
Data Models for Article Scout.

This module defines Pydantic models used throughout the Article Scout application
for type safety and data validation.

Classes:
    Availability: Stock status reported on a vendor product page.
    ProductRecord: Model representing one product scraped from a vendor page.
"""

import datetime
from enum import Enum
from typing import Dict, Optional
from pydantic import BaseModel, Field
from decimal import Decimal


class Availability(str, Enum):
    """Stock status as shown by the vendor's status marker."""

    AVAILABLE = "available"
    NEAR_FUTURE = "near_future"
    UNAVAILABLE = "unavailable"
    UNKNOWN = "unknown"


class ProductRecord(BaseModel):
    """
    Data model representing a single product page scraped from a vendor.

    A record is only created for a page that was positively identified as an
    existing article with a parseable price. Fields cannot be reassigned once
    the record is assembled. The attributes and datasheet_links dicts are
    copied on validation, so they are the caller's own; changing them does not
    affect the scraper or any other record.

    Attributes:
        distributor_name: Name of the vendor (e.g., "Conrad").
        article_id: The vendor's article number the page was requested for.
        source_url: URL the page was fetched from.
        price: Product price as a Decimal for precise financial calculations.
        currency: ISO 4217 currency code (e.g., "EUR").
        description: Concatenated description markup fragments, may be empty.
        attributes: Technical attributes in document order.
        datasheet_links: Datasheet label to URL; repeated labels get "_1", "_2", ...
        availability: Stock status, UNKNOWN when the page shows no known marker.

    Example:
        >>> record = ProductRecord(
        ...     distributor_name="Conrad",
        ...     article_id="123456",
        ...     source_url="https://www.conrad.de/de/p/123456.html",
        ...     price=Decimal("1234.56"),
        ...     currency="EUR",
        ... )
        >>> print(f"{record.distributor_name}: {record.price} {record.currency}")
        Conrad: 1234.56 EUR
    """

    distributor_name: str
    article_id: str
    source_url: str
    price: Optional[Decimal] = None
    currency: Optional[str] = None
    description: str = ""
    attributes: Dict[str, str] = Field(default_factory=dict)
    datasheet_links: Dict[str, str] = Field(default_factory=dict)
    availability: Availability = Availability.UNKNOWN
    scraped_at: datetime.datetime = Field(default_factory=lambda: datetime.datetime.now(datetime.timezone.utc))

    class Config:
        """Pydantic model configuration."""
        frozen = True
