from __future__ import annotations

import pytest


def article_page(
    price: str | None = "€ 12,99",
    details: str | None = None,
    downloads: str | None = "",
    availability: str | None = "availability_green",
) -> str:
    """Build a trimmed-down Conrad article page."""
    if details is None:
        details = (
            '<div id="mc_info_123456_produktbezeichnung"><h1>Widerstand 10k</h1></div>'
            '<div id="mc_info_123456_beschreibung"><p>Kohleschicht</p></div>'
            '<div id="mc_info_123456_technischedaten2"><table>'
            "<tr><th>Leistung</th><td> 0.25 W </td></tr>"
            "<tr><th>Toleranz</th><td>5 %</td></tr>"
            "</table></div>"
        )

    parts = ["<html><head><title>Conrad</title></head><body>"]
    if availability is not None:
        parts.append(f'<div class="delivery {availability}">Lieferbar</div>')
    if price is not None:
        parts.append(f'<span id="mc_info_123456_produktpreis">{price}</span>')
    parts.append(f'<div class="inner" id="details">{details}</div>')
    if downloads is not None:
        parts.append(f'<div class="inner" id="download-dokumente"><ul>{downloads}</ul></div>')
    parts.append("</body></html>")
    return "".join(parts)


class FakeFetch:
    """Stands in for the HTTP transport and records requested URLs."""

    def __init__(self, page: str):
        self.page = page
        self.urls: list[str] = []

    def __call__(self, url: str) -> str:
        self.urls.append(url)
        return self.page


@pytest.fixture
def page_factory():
    return article_page


@pytest.fixture
def fetch_factory():
    return FakeFetch
