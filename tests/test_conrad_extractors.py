from __future__ import annotations

from decimal import Decimal

import pytest

from models.errors import StructureError
from models.models import Availability
from scrapers.conrad import extractors


def _attributes_page(rows: str) -> str:
    return (
        '<div class="inner" id="details">'
        f'<div id="mc_info_123456_technischedaten2"><table>{rows}</table></div>'
        "</div>"
    )


def _downloads_page(items: str) -> str:
    return f'<div class="inner" id="download-dokumente"><ul>{items}</ul></div>'


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("€ 1.234,56", Decimal("1234.56")),
        ("€12,99", Decimal("12.99")),
        ("&euro; 0,50", Decimal("0.50")),
        ("€&nbsp;12,99", Decimal("12.99")),
        ("ab â‚¬ 1.000.000,00", Decimal("1000000.00")),
    ],
)
def test_price_parses_german_amounts(text: str, expected: Decimal) -> None:
    page = f'<span id="mc_info_123456_produktpreis">{text}</span>'

    assert extractors.extract_price(page) == (expected, "EUR")


def test_price_absent_without_labelled_span() -> None:
    assert extractors.extract_price("<span>€ 12,99</span>") is None
    assert extractors.extract_price('<span id="mc_info_123456_produktpreis">auf Anfrage</span>') is None


def test_description_concatenates_present_blocks_in_fixed_order() -> None:
    page = (
        '<div class="inner" id="details">'
        '<div id="mc_info_1234_technischedaten">tech</div>'
        '<div id="mc_info_1234_produktbezeichnung">name</div>'
        '<div id="mc_info_1234_highlights"><div>nested</div> hl</div>'
        "</div>"
    )

    assert extractors.extract_description(page) == (
        '<div id="mc_info_1234_produktbezeichnung">name</div>'
        '<div id="mc_info_1234_highlights"><div>nested</div> hl</div>'
        '<div id="mc_info_1234_technischedaten">tech</div>'
    )


def test_description_empty_without_details_block() -> None:
    assert extractors.extract_description("<html><body>nothing</body></html>") == ""


def test_attributes_keep_document_order() -> None:
    page = _attributes_page(
        "<tr><th>Spannung</th><td> 12 V </td></tr>"
        "<tr><th>Strom</th><td>2 A</td></tr>"
        "<tr><th>Bauform</th><td>THT</td></tr>"
    )

    attributes = extractors.extract_attributes(page)

    assert list(attributes.items()) == [("Spannung", "12 V"), ("Strom", "2 A"), ("Bauform", "THT")]


def test_attributes_duplicate_header_keeps_last_value() -> None:
    page = _attributes_page(
        "<tr><th>Farbe</th><td>rot</td></tr>"
        "<tr><th>Gewicht</th><td>5 g</td></tr>"
        "<tr><th>Farbe</th><td>blau</td></tr>"
    )

    attributes = extractors.extract_attributes(page)

    assert len(attributes) == 2
    assert attributes["Farbe"] == "blau"


def test_attributes_empty_when_table_block_missing() -> None:
    page = '<div class="inner" id="details"><div id="mc_info_1234_beschreibung">x</div></div>'

    assert extractors.extract_attributes(page) == {}


def test_attributes_header_without_value_ends_scan() -> None:
    page = _attributes_page(
        "<tr><th>A</th></tr>"
        "<tr><th>B</th><td>x</td></tr>"
    )

    assert extractors.extract_attributes(page) == {}


def test_attributes_before_orphan_header_are_kept() -> None:
    page = _attributes_page(
        "<tr><th>Spannung</th><td>12 V</td></tr>"
        "<tr><th>Hinweis</th></tr>"
        "<tr><th>Strom</th><td>2 A</td></tr>"
    )

    assert extractors.extract_attributes(page) == {"Spannung": "12 V"}


def test_attributes_propagate_unbalanced_markup() -> None:
    page = '<div class="inner" id="details"><div id="mc_info_1234_technischedaten2"><table>'

    with pytest.raises(StructureError):
        extractors.extract_attributes(page)


def test_datasheets_share_label_with_numeric_suffix() -> None:
    page = _downloads_page(
        "<li><strong>Datenblatt</strong></li>"
        '<li><a href="https://example.com/a.pdf">PDF</a></li>'
        '<li><a href="https://example.com/b.pdf">PDF</a></li>'
        "<li>Bedienungsanleitung</li>"
        '<li><a href="https://example.com/c.pdf">PDF</a></li>'
    )

    assert extractors.extract_datasheets(page) == {
        "Datenblatt": "https://example.com/a.pdf",
        "Datenblatt_1": "https://example.com/b.pdf",
        "Bedienungsanleitung": "https://example.com/c.pdf",
    }


def test_datasheets_resolve_relative_links_against_page_url() -> None:
    page = _downloads_page('<li>Datenblatt</li><li><a class="pdf" href="/medias/global/ce/1_000/datenblatt.pdf">PDF</a></li>')

    links = extractors.extract_datasheets(page, base_url="https://www.conrad.de/de/p/123456.html")

    assert links == {"Datenblatt": "https://www.conrad.de/medias/global/ce/1_000/datenblatt.pdf"}


def test_datasheet_link_before_any_label_uses_link_text() -> None:
    page = _downloads_page('<li><a href="https://example.com/x.pdf">Sicherheitshinweise</a></li>')

    assert extractors.extract_datasheets(page) == {"Sicherheitshinweise": "https://example.com/x.pdf"}


def test_datasheets_empty_without_downloads_block() -> None:
    assert extractors.extract_datasheets("<div>none</div>") == {}


@pytest.mark.parametrize(
    ("marker", "expected"),
    [
        ('<div class="status availability_green">', Availability.AVAILABLE),
        ('<div class="status avaibility_GREEN">', Availability.AVAILABLE),
        ('<div class="availability_available">', Availability.AVAILABLE),
        ('<div class="status avaibility_yellow">', Availability.NEAR_FUTURE),
        ('<div class="status availability_red">', Availability.UNAVAILABLE),
        ('<div class="status availability_purple">', Availability.UNKNOWN),
        ('<div class="status">', Availability.UNKNOWN),
    ],
)
def test_availability_markers(marker: str, expected: Availability) -> None:
    assert extractors.extract_availability(marker) is expected


def test_page_markers() -> None:
    assert extractors.is_not_found_page("Leider konnten wir keinen Artikel mit der Nummer 99999 finden")
    assert extractors.is_wrong_page("<title>Fehler 404 | Conrad</title>")
    assert extractors.is_wrong_page("Die von Ihnen gewählte Seite existiert nicht")
    assert not extractors.is_wrong_page("<title>Widerstand 10k | Conrad</title>")
