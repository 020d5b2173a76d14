"""Runtime configuration for article scrapers."""

import os
from typing import Mapping, Optional

from pydantic import BaseModel, field_validator

ID_PLACEHOLDER = "{{id}}"
DEFAULT_ARTICLE_URL_TEMPLATE = "https://www.conrad.de/de/p/" + ID_PLACEHOLDER + ".html"
DEFAULT_TRANSPORT = "curl_cffi"
DEFAULT_TIMEOUT = 20.0


def check_url_template(value: str) -> str:
    """Reject article URL templates without an id placeholder."""
    if ID_PLACEHOLDER not in value:
        raise ValueError(f"article URL template needs a {ID_PLACEHOLDER!r} placeholder")
    if not (value.startswith("http://") or value.startswith("https://")):
        raise ValueError("article URL template must start with http:// or https://")
    return value


class ScraperSettings(BaseModel):
    """Validated settings used to build a scraper."""

    article_url_template: str = DEFAULT_ARTICLE_URL_TEMPLATE
    transport: str = DEFAULT_TRANSPORT
    timeout: float = DEFAULT_TIMEOUT

    @field_validator("article_url_template")
    @classmethod
    def _check_template(cls, value: str) -> str:
        return check_url_template(value)

    @field_validator("transport")
    @classmethod
    def _check_transport(cls, value: str) -> str:
        if value not in ("curl_cffi", "cloudscraper"):
            raise ValueError("transport must be 'curl_cffi' or 'cloudscraper'")
        return value

    @field_validator("timeout")
    @classmethod
    def _check_timeout(cls, value: float) -> float:
        if value <= 0:
            raise ValueError("timeout must be positive")
        return value

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "ScraperSettings":
        source: Mapping[str, str] = os.environ if environ is None else environ

        values = {}
        template = source.get("ARTICLE_SCOUT_URL_TEMPLATE", "").strip()
        if template:
            values["article_url_template"] = template

        transport = source.get("ARTICLE_SCOUT_TRANSPORT", "").strip()
        if transport:
            values["transport"] = transport

        timeout = source.get("ARTICLE_SCOUT_TIMEOUT", "").strip()
        if timeout:
            try:
                values["timeout"] = float(timeout)
            except ValueError:
                raise ValueError(f"ARTICLE_SCOUT_TIMEOUT is not a number: {timeout!r}") from None

        return cls(**values)
