"""Encoding-safe parsing and serialization of block fragments.

Rendered blocks arrive as arbitrary HTML text: multi-byte characters,
symbols, and entities the editor already escaped.  ``parse()`` turns such a
fragment into a ``BeautifulSoup`` tree without corrupting any of them, and
``serialize()`` writes a tree (or any node of it) back out.

Two-stage design:
    1. ``encode_multibyte()`` -- rewrites every non-ASCII character as a
       numeric character reference so the parser only ever sees ASCII.
       Existing entities are left for the parser to decode, which keeps
       them from being escaped twice.
    2. ``parse()`` -- parses in fragment mode with the ``html.parser``
       builder: no implied ``<html>``/``<body>`` wrapper and no DTD.
       Builder warnings are discarded.

On output, characters that have an HTML 4 entity name are written as that
entity (``&deg;``, ``&copy;``) and all other non-ASCII characters as
numeric references (``&#9728;``).
"""

from __future__ import annotations

import re
import warnings
from html.entities import codepoint2name
from typing import Optional, Union

from bs4 import BeautifulSoup, NavigableString, ParserRejectedMarkup, Tag
from bs4.dammit import EntitySubstitution
from bs4.formatter import HTMLFormatter

from models.errors import EmptyDocumentError

# Element bodies the parser does not entity-decode; left untouched.
_RAW_TEXT_RE = re.compile(
    r"<(script|style)\b.*?</\1\s*>", re.IGNORECASE | re.DOTALL
)

_NON_ASCII_RE = re.compile(r"[^\x00-\x7f]")


# ---------------------------------------------------------------------------
# Output formatting
# ---------------------------------------------------------------------------


def _entity_for(match: re.Match) -> str:
    codepoint = ord(match.group(0))
    name = codepoint2name.get(codepoint)
    if name:
        return f"&{name};"
    return f"&#{codepoint};"


def _substitute_entities(text: str) -> str:
    """Escape ``&``, ``<`` and ``>`` then entity-encode non-ASCII text."""
    text = EntitySubstitution.substitute_xml(text)
    return _NON_ASCII_RE.sub(_entity_for, text)


class BlockMarkupFormatter(HTMLFormatter):
    """HTML formatter that keeps attributes in source order.

    ``HTMLFormatter`` sorts attributes alphabetically by default, which
    would reorder the attributes of every element in the fragment.
    """

    def attributes(self, tag):  # noqa: ANN001
        if tag.attrs is None:
            return []
        return list(tag.attrs.items())


FORMATTER = BlockMarkupFormatter(entity_substitution=_substitute_entities)


# ---------------------------------------------------------------------------
# Parsing
# ---------------------------------------------------------------------------


def _to_char_refs(text: str) -> str:
    return text.encode("ascii", "xmlcharrefreplace").decode("ascii")


def encode_multibyte(html: str) -> str:
    """Rewrite non-ASCII characters in *html* as numeric character references.

    ``<script>`` and ``<style>`` elements are copied verbatim since the
    parser treats their bodies as raw text.
    """
    parts: list[str] = []
    pos = 0
    for match in _RAW_TEXT_RE.finditer(html):
        parts.append(_to_char_refs(html[pos : match.start()]))
        parts.append(match.group(0))
        pos = match.end()
    parts.append(_to_char_refs(html[pos:]))
    return "".join(parts)


def root_element(soup: BeautifulSoup) -> Optional[Tag]:
    """Return the first top-level element of *soup*, or ``None``."""
    return soup.find(True, recursive=False)


def parse(html: str) -> BeautifulSoup:
    """Parse an HTML fragment into a tree.

    Raises:
        EmptyDocumentError: The fragment has no top-level element (empty,
            text-only, or rejected by the parser).
    """
    converted = encode_multibyte(html)

    with warnings.catch_warnings():
        warnings.simplefilter("ignore")
        try:
            soup = BeautifulSoup(
                converted, "html.parser", multi_valued_attributes=None
            )
        except ParserRejectedMarkup as exc:
            raise EmptyDocumentError(
                "Markup rejected by the parser, fallback to use provided HTML."
            ) from exc

    if root_element(soup) is None:
        raise EmptyDocumentError()

    return soup


# ---------------------------------------------------------------------------
# Serialization
# ---------------------------------------------------------------------------


def serialize(node: Union[Tag, NavigableString]) -> str:
    """Serialize a parsed tree, element, or text/comment node to HTML."""
    if isinstance(node, Tag):
        return node.decode(formatter=FORMATTER)
    return node.output_ready(formatter=FORMATTER)
