"""Single-pass HTML tag scanner with queued attribute edits.

``TagScanner`` walks forward through an HTML string one tag at a time
without building a tree.  Attribute edits made on the current tag are
queued as text replacements and only applied by ``get_updated_html()``;
everything the scanner did not touch is returned byte for byte.

Skipped while scanning:
    - comments (``<!-- ... -->``) and bogus comments (``<!...>``, ``<?...>``)
    - the content of raw-text elements (``<script>``, ``<style>``, ...)
    - a ``<`` that does not open a tag, which is plain text

An unterminated tag or comment ends the scan.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Optional, Union

from models.errors import ScanError
from parsing.escaping import escape_attribute, unescape_attribute

RAW_TEXT_ELEMENTS = frozenset(
    {
        "iframe",
        "noembed",
        "noframes",
        "noscript",
        "script",
        "style",
        "textarea",
        "title",
        "xmp",
    }
)

_TAG_NAME_RE = re.compile(r"[A-Za-z][^\s/>]*")
_GAP_RE = re.compile(r"[\s/]*")
_ATTR_NAME_RE = re.compile(r"[^\s/>][^\s/>=]*")
_EQUALS_RE = re.compile(r"\s*=\s*")
_UNQUOTED_RE = re.compile(r"[^\s>]*")
_INVALID_ATTR_NAME_RE = re.compile(r"[\s\"'<>&/=\x00-\x1f\x7f]")

AttributeValue = Union[str, bool]


@dataclass
class _Attribute:
    """An attribute as it appears in the source text."""

    name: str
    start: int
    end: int
    value: Optional[str] = None


@dataclass
class _Edit:
    """Replace ``html[start:end]`` with ``text``."""

    start: int
    end: int
    text: str


class TagScanner:
    """Forward-only tag scanner over *html*.

    Usage::

        scanner = TagScanner('<p class="x">Hi</p>')
        if scanner.next_tag():
            scanner.set_attribute("data-id", "1")
        scanner.get_updated_html()  # '<p data-id="1" class="x">Hi</p>'
    """

    def __init__(self, html: str) -> None:
        self.html = html
        self._cursor = 0
        self._edits: list[_Edit] = []
        self._clear_tag()

    def _clear_tag(self) -> None:
        self._tag_name: Optional[str] = None
        self._is_closer = False
        self._name_end = 0
        self._attributes: list[_Attribute] = []
        # Pending changes for the current tag: value, True, or None to remove.
        self._updates: dict[str, Optional[AttributeValue]] = {}

    # ------------------------------------------------------------------
    # Scanning
    # ------------------------------------------------------------------

    def next_tag(
        self, tag_name: Optional[str] = None, *, skip_closers: bool = True
    ) -> bool:
        """Advance to the next tag, optionally filtered by name.

        Closing tags are skipped unless *skip_closers* is ``False``.
        Returns ``False`` when the input is exhausted.
        """
        wanted = tag_name.lower() if tag_name else None
        while self._advance():
            if self._is_closer and skip_closers:
                continue
            if wanted is None or self._tag_name == wanted:
                return True
        return False

    def _advance(self) -> bool:
        self._flush()
        html = self.html
        end = len(html)
        at = self._cursor
        self._clear_tag()

        while True:
            lt = html.find("<", at)
            if lt == -1 or lt + 1 >= end:
                self._cursor = end
                return False

            if html.startswith("<!--", lt):
                if html.startswith("<!-->", lt):
                    at = lt + 5
                    continue
                if html.startswith("<!--->", lt):
                    at = lt + 6
                    continue
                close = html.find("-->", lt + 4)
                if close == -1:
                    self._cursor = end
                    return False
                at = close + 3
                continue

            if html[lt + 1] in "!?":
                close = html.find(">", lt + 2)
                if close == -1:
                    self._cursor = end
                    return False
                at = close + 1
                continue

            is_closer = html[lt + 1] == "/"
            name_at = lt + 2 if is_closer else lt + 1
            match = _TAG_NAME_RE.match(html, name_at)
            if match is None:
                # "</>" is dropped, any other "<" is text.
                if is_closer and html.startswith(">", name_at):
                    at = name_at + 1
                else:
                    at = lt + 1
                continue

            parsed = self._parse_attributes(match.end())
            if parsed is None:
                self._cursor = end
                return False
            attributes, tag_end = parsed

            self._tag_name = match.group(0).lower()
            self._is_closer = is_closer
            self._name_end = match.end()
            self._attributes = [] if is_closer else attributes
            self._cursor = tag_end

            if not is_closer and self._tag_name in RAW_TEXT_ELEMENTS:
                self._cursor = self._skip_raw_text(self._tag_name, tag_end)
            return True

    def _parse_attributes(
        self, at: int
    ) -> Optional[tuple[list[_Attribute], int]]:
        """Lex attributes from *at* up to the closing ``>``.

        Returns the attributes and the offset just past ``>``, or ``None``
        when the tag is not terminated.
        """
        html = self.html
        end = len(html)
        attributes: list[_Attribute] = []

        while True:
            at = _GAP_RE.match(html, at).end()
            if at >= end:
                return None
            if html[at] == ">":
                return attributes, at + 1

            name_start = at
            at = _ATTR_NAME_RE.match(html, at).end()
            attribute = _Attribute(
                name=html[name_start:at].lower(), start=name_start, end=at
            )

            equals = _EQUALS_RE.match(html, at)
            if equals:
                at = equals.end()
                if at >= end:
                    return None
                quote = html[at]
                if quote in "\"'":
                    close = html.find(quote, at + 1)
                    if close == -1:
                        return None
                    attribute.value = html[at + 1 : close]
                    at = close + 1
                else:
                    unquoted = _UNQUOTED_RE.match(html, at)
                    attribute.value = unquoted.group(0)
                    at = unquoted.end()
                attribute.end = at

            attributes.append(attribute)

    def _skip_raw_text(self, tag_name: str, at: int) -> int:
        closer = re.compile(rf"</{re.escape(tag_name)}[\s/>]", re.IGNORECASE)
        match = closer.search(self.html, at)
        return match.start() if match else len(self.html)

    # ------------------------------------------------------------------
    # Current tag
    # ------------------------------------------------------------------

    def get_tag(self) -> Optional[str]:
        """Lower-cased name of the current tag, or ``None``."""
        return self._tag_name

    def is_tag_closer(self) -> bool:
        return self._tag_name is not None and self._is_closer

    def get_attribute(self, name: str) -> Optional[AttributeValue]:
        """Return the decoded value of *name* on the current tag.

        ``True`` is returned for an attribute without a value and ``None``
        when the attribute is absent.  Queued edits are taken into account.
        """
        if self._tag_name is None or self._is_closer:
            return None
        name = name.lower()
        if name in self._updates:
            value = self._updates[name]
            if isinstance(value, str):
                return unescape_attribute(escape_attribute(value))
            return value
        for attribute in self._attributes:
            if attribute.name == name:
                if attribute.value is None:
                    return True
                return unescape_attribute(attribute.value)
        return None

    def get_attribute_names(self) -> list[str]:
        """Names of the attributes on the current tag, edits included."""
        if self._tag_name is None or self._is_closer:
            return []
        names: list[str] = []
        for attribute in self._attributes:
            if attribute.name not in names:
                names.append(attribute.name)
        for name, value in self._updates.items():
            if value is None and name in names:
                names.remove(name)
            elif value is not None and name not in names:
                names.append(name)
        return names

    def set_attribute(self, name: str, value: AttributeValue) -> None:
        """Queue setting *name* to *value* on the current tag.

        String values are escaped for a double-quoted attribute; existing
        character references in *value* are kept as they are.  ``True``
        writes a valueless attribute and ``False`` removes it.

        Raises:
            ScanError: Not positioned on an opening tag, or *name* is not a
                valid attribute name.
        """
        self._require_opener()
        if not name or _INVALID_ATTR_NAME_RE.search(name):
            raise ScanError(f"Invalid attribute name: {name!r}")
        if value is False:
            self._updates[name.lower()] = None
        else:
            self._updates[name.lower()] = value

    def remove_attribute(self, name: str) -> None:
        """Queue removal of *name* from the current tag."""
        self._require_opener()
        self._updates[name.lower()] = None

    def _require_opener(self) -> None:
        if self._tag_name is None:
            raise ScanError("No current tag to edit.")
        if self._is_closer:
            raise ScanError(f"Cannot edit attributes of closing tag </{self._tag_name}>.")

    # ------------------------------------------------------------------
    # Output
    # ------------------------------------------------------------------

    def _pending_edits(self) -> list[_Edit]:
        edits: list[_Edit] = []
        for name, value in self._updates.items():
            existing = [a for a in self._attributes if a.name == name]

            if existing and value is not None:
                first = existing[0]
                edits.append(
                    _Edit(first.start, first.end, _render_attribute(name, value))
                )
            elif existing:
                edits.append(self._removal(existing[0]))
            elif value is not None:
                edits.append(
                    _Edit(
                        self._name_end,
                        self._name_end,
                        " " + _render_attribute(name, value),
                    )
                )

            # Duplicates are dropped once the attribute is rewritten.
            for duplicate in existing[1:]:
                edits.append(self._removal(duplicate))
        return edits

    def _removal(self, attribute: _Attribute) -> _Edit:
        start = attribute.start
        while start > self._name_end and self.html[start - 1].isspace():
            start -= 1
        return _Edit(start, attribute.end, "")

    def _flush(self) -> None:
        self._edits.extend(self._pending_edits())
        self._updates = {}

    def get_updated_html(self) -> str:
        """Return the input with every queued edit applied."""
        edits = sorted(self._edits + self._pending_edits(), key=lambda e: e.start)
        if not edits:
            return self.html

        parts: list[str] = []
        pos = 0
        for edit in edits:
            parts.append(self.html[pos : edit.start])
            parts.append(edit.text)
            pos = max(pos, edit.end)
        parts.append(self.html[pos:])
        return "".join(parts)


def _render_attribute(name: str, value: AttributeValue) -> str:
    if value is True:
        return name
    return f'{name}="{escape_attribute(str(value))}"'
