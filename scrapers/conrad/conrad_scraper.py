"""
Conrad Germany Scraper.

This module implements an article scraper for Conrad (www.conrad.de), a German
electronics distributor. Articles are looked up directly by their numeric
article number; the product page is fetched once and every field is pulled
out of the raw HTML with the extractors in scrapers.conrad.extractors.

Classes:
    ConradScraper: Scraper implementation for www.conrad.de
"""

import logging
import sys
from typing import Callable, Optional

from pydantic import field_validator

from config import DEFAULT_ARTICLE_URL_TEMPLATE, ID_PLACEHOLDER, ScraperSettings, check_url_template
from models.base_scraper import BaseScraper
from models.errors import InvalidIdentifier, LayoutDrift, WrongPage
from models.models import ProductRecord
from scrapers.conrad import extractors
from scrapers.http import Fetcher, make_fetcher

logger = logging.getLogger(__name__)

DriftHook = Callable[[str, str], None]

MIN_ARTICLE_ID = 1000


def log_layout_drift(url: str, page: str) -> None:
    logger.warning(
        "No price found on Conrad page %s (%d chars), the page template has probably changed",
        url,
        len(page),
    )


def validate_article_id(article_id: str) -> str:
    """
    Normalize an article id or raise InvalidIdentifier.

    Ids must be plain decimal numbers above MIN_ARTICLE_ID; anything lower is
    a test or placeholder id the shop never serves.
    """
    value = str(article_id).strip()
    if not value.isdigit() or not value.isascii():
        raise InvalidIdentifier(f"article id must be a positive integer, got {article_id!r}")

    number = int(value)
    if not MIN_ARTICLE_ID < number < sys.maxsize:
        raise InvalidIdentifier(f"article id {article_id!r} out of range")
    return value


class ConradScraper(BaseScraper):
    """
    Article scraper for Conrad Germany (www.conrad.de).

    Attributes:
        distributor_name: "Conrad"
        article_url_template: Article page URL containing a "{{id}}" placeholder
        fetch: Callable returning the page text for a URL
        drift_hook: Called with (url, page) when an article page has no parseable price

    Example:
        >>> scraper = ConradScraper()
        >>> record = scraper.get_article_by_id("123456")
        >>> if record:
        ...     print(f"{record.price} {record.currency}")
    """

    distributor_name: str = "Conrad"
    article_url_template: str = DEFAULT_ARTICLE_URL_TEMPLATE
    fetch: Fetcher = make_fetcher()
    drift_hook: DriftHook = log_layout_drift

    @field_validator("article_url_template")
    @classmethod
    def _check_template(cls, value: str) -> str:
        return check_url_template(value)

    @classmethod
    def from_settings(cls, settings: ScraperSettings, drift_hook: Optional[DriftHook] = None) -> "ConradScraper":
        kwargs = {
            "article_url_template": settings.article_url_template,
            "fetch": make_fetcher(settings.transport, settings.timeout),
        }
        if drift_hook is not None:
            kwargs["drift_hook"] = drift_hook
        return cls(**kwargs)

    def article_url(self, article_id: str) -> str:
        return self.article_url_template.replace(ID_PLACEHOLDER, article_id)

    def get_article_by_id(self, article_id: str) -> Optional[ProductRecord]:
        """
        Fetch a Conrad article page and parse it into a ProductRecord.

        Process:
            1. Validates the article id (no request is made for bad ids)
            2. Fetches the article page
            3. Raises WrongPage if Conrad served an error page
            4. Returns None if Conrad reports the article does not exist
            5. Extracts the price; if it is missing, calls drift_hook and raises LayoutDrift
            6. Extracts description, attributes, datasheets and availability

        Args:
            article_id: Conrad article number, e.g. "123456"

        Returns:
            ProductRecord, or None if the article does not exist.
        """
        article_id = validate_article_id(article_id)
        url = self.article_url(article_id)

        logger.info("Scraping Conrad for article=%s", article_id)
        page = self.fetch(url)

        if extractors.is_wrong_page(page):
            logger.error("Conrad returned an error page for %s", url)
            raise WrongPage(f"error page returned for {url}")

        if extractors.is_not_found_page(page):
            logger.warning("Article %s not found on Conrad", article_id)
            return None

        price = extractors.extract_price(page)
        if price is None:
            self.drift_hook(url, page)
            raise LayoutDrift(url)

        amount, currency = price
        logger.debug("Price extracted for article=%s: %s %s", article_id, amount, currency)

        return ProductRecord(
            distributor_name=self.get_distributor_name(),
            article_id=article_id,
            source_url=url,
            price=amount,
            currency=currency,
            description=extractors.extract_description(page),
            attributes=extractors.extract_attributes(page),
            datasheet_links=extractors.extract_datasheets(page, base_url=url),
            availability=extractors.extract_availability(page),
        )
