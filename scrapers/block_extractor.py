"""
Balanced Block Extraction.

Vendor pages are well-formed but nest the same element type at varying depth
(promotion boxes, conditional sections), so the first closing tag after an
opener is usually not its own. extract_block() counts depth over a single tag
family to find the real closing tag, without parsing the rest of the page.

Classes:
    ExtractionContext: Page text plus a scan cursor.

Functions:
    extract_block: Return the balanced subtree that starts at a marker.
"""

import re
from dataclasses import dataclass
from typing import Optional, Union

from models.errors import StructureError


Marker = Union[str, re.Pattern]


def compile_marker(marker: Marker) -> re.Pattern:
    """Compile string markers case-insensitively, pass compiled ones through."""
    if isinstance(marker, str):
        return re.compile(marker, re.IGNORECASE)
    return marker


@dataclass
class ExtractionContext:
    """Markup text with a cursor that only moves forward."""

    text: str
    pos: int = 0

    def search(self, pattern: re.Pattern) -> Optional[re.Match]:
        return pattern.search(self.text, self.pos)

    def advance_past(self, match: re.Match) -> None:
        self.pos = match.end()


def extract_block(markup: str, open_marker: Marker, tag: str = "div") -> Optional[str]:
    """
    Return the element opened by open_marker, up to and including its closing tag.

    Args:
        markup: Text to search.
        open_marker: Regex matching the opening tag of the wanted element.
        tag: Tag name used for depth counting.

    Returns:
        The balanced subtree, or None if open_marker does not match.

    Raises:
        StructureError: If the document ends before the element is closed.
    """
    start = compile_marker(open_marker).search(markup)
    if not start:
        return None

    opener = re.compile(rf"<{tag}\b", re.IGNORECASE)
    closer = re.compile(rf"</{tag}\s*>", re.IGNORECASE)

    ctx = ExtractionContext(markup, start.end())
    depth = 1
    while depth > 0:
        close_match = ctx.search(closer)
        if not close_match:
            raise StructureError(
                f"unbalanced markup: <{tag}> opened at offset {start.start()} is never closed"
            )

        open_match = ctx.search(opener)
        if open_match and open_match.start() < close_match.start():
            depth += 1
            ctx.advance_past(open_match)
        else:
            depth -= 1
            ctx.advance_past(close_match)

    return markup[start.start():ctx.pos]
