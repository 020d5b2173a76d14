"""
Field extractors for Conrad article pages.

Every function here is pure: it takes the page (or a block of it) and returns
a field value, or an empty/None value when the field is not on the page. Only
StructureError from the block matcher escapes, since it means the template has
changed under us.
"""

import re
from decimal import Decimal
from typing import Dict, Optional, Tuple
from urllib.parse import urljoin

from bs4 import BeautifulSoup

from models.models import Availability
from scrapers.block_extractor import ExtractionContext, extract_block

CURRENCY = "EUR"

NOT_FOUND_PATTERN = re.compile(r"leider konnten wir keinen artikel mit", re.IGNORECASE)
WRONG_PAGE_PATTERN = re.compile(
    r"die von ihnen gew(?:ä|&auml;)hlte seite|seite wurde nicht gefunden|<title>[^<]*\b(?:error|fehler)\s*404\b",
    re.IGNORECASE,
)

# The euro sign shows up as mojibake when the page charset is misreported
PRICE_PATTERN = re.compile(
    r'<span id="mc_info_\d{4,8}_produktpreis">.{0,5}?(?:€|&euro;|â‚¬)(?:\s|&nbsp;)?(\d{1,3}(?:\.\d{3})+,\d\d|\d{1,7},\d\d)',
    re.IGNORECASE | re.DOTALL,
)

DETAILS_MARKER = re.compile(r'<div class="inner" id="details">', re.IGNORECASE)
DESCRIPTION_MARKERS = [
    re.compile(rf'<div id="mc_info_\d{{4,8}}_{name}">', re.IGNORECASE)
    for name in ("produktbezeichnung", "highlights", "beschreibung", "special", "technischedaten")
]
ATTRIBUTES_MARKER = re.compile(r'<div id="mc_info_\d{4,8}_technischedaten2">', re.IGNORECASE)
DOWNLOADS_MARKER = re.compile(r'<div class="inner" id="download-dokumente"', re.IGNORECASE)

# Both spellings appear in the vendor's markup
AVAILABILITY_PATTERN = re.compile(r'class="[^"]*\bavai(?:la)?bility_(\w+)', re.IGNORECASE)
AVAILABILITY_TOKENS = {
    "available": Availability.AVAILABLE,
    "green": Availability.AVAILABLE,
    "yellow": Availability.NEAR_FUTURE,
    "red": Availability.UNAVAILABLE,
    "unavailable": Availability.UNAVAILABLE,
}

TH_OPEN = re.compile(r"<th\b[^>]*>", re.IGNORECASE)
TH_CLOSE = re.compile(r"</th\s*>", re.IGNORECASE)
TD_OPEN = re.compile(r"<td\b[^>]*>", re.IGNORECASE)
TD_CLOSE = re.compile(r"</td\s*>", re.IGNORECASE)
LI_OPEN = re.compile(r"<li\b[^>]*>", re.IGNORECASE)
LI_CLOSE = re.compile(r"</li\s*>", re.IGNORECASE)


def is_not_found_page(page: str) -> bool:
    return bool(NOT_FOUND_PATTERN.search(page))


def is_wrong_page(page: str) -> bool:
    return bool(WRONG_PAGE_PATTERN.search(page))


def parse_price(text: str) -> Decimal:
    """Parse a German formatted amount such as "1.234,56"."""
    return Decimal(text.replace(".", "").replace(",", "."))


def extract_price(page: str) -> Optional[Tuple[Decimal, str]]:
    match = PRICE_PATTERN.search(page)
    if not match:
        return None
    return parse_price(match.group(1)), CURRENCY


def extract_description(page: str) -> str:
    """Concatenate the description sub-blocks of the details block in fixed order."""
    details = extract_block(page, DETAILS_MARKER)
    if not details:
        return ""

    parts = []
    for marker in DESCRIPTION_MARKERS:
        part = extract_block(details, marker)
        if part:
            parts.append(part)
    return "".join(parts)


def _cell(ctx: ExtractionContext, open_tag: re.Pattern, close_tag: re.Pattern) -> Optional[str]:
    """Return the inner text of the next open_tag..close_tag cell and move past it."""
    open_match = ctx.search(open_tag)
    if not open_match:
        return None
    ctx.advance_past(open_match)

    close_match = ctx.search(close_tag)
    if not close_match:
        return None
    ctx.advance_past(close_match)
    return ctx.text[open_match.end():close_match.start()]


def extract_attributes(page: str) -> Dict[str, str]:
    """
    Read the technical data table as header -> value pairs.

    Pairs keep document order; a repeated header keeps its last value. A
    header without a value cell after it ends the table.
    """
    details = extract_block(page, DETAILS_MARKER)
    if not details:
        return {}
    table = extract_block(details, ATTRIBUTES_MARKER)
    if not table:
        return {}

    attributes: Dict[str, str] = {}
    ctx = ExtractionContext(table)
    while True:
        key = _cell(ctx, TH_OPEN, TH_CLOSE)
        if key is None:
            break

        # the value must be the next cell, not one belonging to a later header
        next_header = ctx.search(TH_OPEN)
        next_value = ctx.search(TD_OPEN)
        if next_value is None or (next_header and next_header.start() < next_value.start()):
            break
        value = _cell(ctx, TD_OPEN, TD_CLOSE)
        if value is None:
            break
        key = key.strip()
        attributes[key] = value.strip()

    return attributes


def _unique_label(label: str, taken: Dict[str, str]) -> str:
    if label not in taken:
        return label
    i = 1
    while f"{label}_{i}" in taken:
        i += 1
    return f"{label}_{i}"


def extract_datasheets(page: str, base_url: Optional[str] = None) -> Dict[str, str]:
    """
    Collect datasheet links from the downloads block.

    List items without a link are headings; they label the links that follow
    them. Links sharing a heading are stored as "label", "label_1", ...
    """
    downloads = extract_block(page, DOWNLOADS_MARKER)
    if not downloads:
        return {}

    links: Dict[str, str] = {}
    label: Optional[str] = None
    ctx = ExtractionContext(downloads)
    while True:
        item = _cell(ctx, LI_OPEN, LI_CLOSE)
        if item is None:
            break

        soup = BeautifulSoup(item, "lxml")
        anchor = soup.find("a", href=True)
        if anchor is None:
            label = soup.get_text(" ", strip=True)
            continue

        href = anchor["href"].strip()
        if base_url:
            href = urljoin(base_url, href)
        name = label if label is not None else anchor.get_text(" ", strip=True)
        links[_unique_label(name, links)] = href

    return links


def extract_availability(page: str) -> Availability:
    match = AVAILABILITY_PATTERN.search(page)
    if not match:
        return Availability.UNKNOWN
    return AVAILABILITY_TOKENS.get(match.group(1).lower(), Availability.UNKNOWN)
