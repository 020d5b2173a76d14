"""
Scraper Exceptions.

A missing article is not an error: scrapers return None for it. Everything
below is raised to the caller, nothing is retried.
"""


class ScraperError(Exception):
    """Base class for all scraping failures."""


class InvalidIdentifier(ScraperError, ValueError):
    """The article id was rejected before any request was made."""


class TransportFailure(ScraperError):
    """The page could not be fetched."""


class WrongPage(ScraperError):
    """The vendor answered with an error page instead of an article page."""


class StructureError(ScraperError):
    """A markup block never closes; the page template has probably changed."""


class LayoutDrift(ScraperError):
    """The page exists but the price could not be extracted."""

    def __init__(self, url: str, message: str = "price not found on article page"):
        super().__init__(f"{message}: {url}")
        self.url = url
