"""
HTTP transports for article pages.

Each transport is a plain callable (url) -> page text. Any failure, including
a non-2xx status, is raised as TransportFailure with the original exception
chained; retry policy is left to the caller.
"""

import logging
from typing import Callable

import cloudscraper
from curl_cffi import requests as curl_requests

from models.errors import TransportFailure

logger = logging.getLogger(__name__)

Fetcher = Callable[[str], str]

HEADERS = {
    "accept": "text/html,application/xhtml+xml",
    "accept-language": "de-DE,de;q=0.9",
    "user-agent": "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/143.0.0.0 Safari/537.36"
}


def fetch_with_curl_cffi(url: str, timeout: float = 20) -> str:
    # impersonate="chrome124" mimics a modern Chrome browser TLS fingerprint
    try:
        resp = curl_requests.get(url, headers=HEADERS, impersonate="chrome124", timeout=timeout)
        resp.raise_for_status()
    except Exception as e:
        logger.error("HTTP error fetching %s: %s", url, e)
        raise TransportFailure(f"could not fetch {url}: {e}") from e

    return resp.text


def fetch_with_cloudscraper(url: str, timeout: float = 20) -> str:
    scraper = cloudscraper.create_scraper()
    try:
        res = scraper.get(url, headers=HEADERS, timeout=timeout)
        res.raise_for_status()
    except Exception as e:
        logger.error("HTTP error fetching %s: %s", url, e)
        raise TransportFailure(f"could not fetch {url}: {e}") from e

    return res.text


TRANSPORTS = {
    "curl_cffi": fetch_with_curl_cffi,
    "cloudscraper": fetch_with_cloudscraper,
}


def make_fetcher(transport: str = "curl_cffi", timeout: float = 20) -> Fetcher:
    """Bind a named transport to a timeout."""
    try:
        fetch = TRANSPORTS[transport]
    except KeyError:
        raise ValueError(f"unknown transport {transport!r}, expected one of {sorted(TRANSPORTS)}") from None

    def fetcher(url: str) -> str:
        return fetch(url, timeout=timeout)

    return fetcher
