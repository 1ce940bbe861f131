"""HTML attribute escaping for block markup.

``escape_attribute()`` follows the WordPress ``esc_attr`` contract: the five
HTML-special characters are escaped, but ampersands that already start a
valid character reference are left alone so that escaping an escaped value is
a no-op.

``escape_serialized()`` escapes every ampersand.  It is used for the JSON
attribute blob, whose string values may themselves hold entity text that
has to survive decoding.
"""

from __future__ import annotations

import html
import json
import re
from typing import Any

# ``&`` not followed by a named, decimal or hex character reference.
_BARE_AMPERSAND_RE = re.compile(
    r"&(?!(?:[A-Za-z][A-Za-z0-9]*|#[0-9]+|#[xX][0-9A-Fa-f]+);)"
)

_SPECIAL_CHARS = {
    "<": "&lt;",
    ">": "&gt;",
    '"': "&quot;",
    "'": "&#039;",
}


def _escape_special(value: str) -> str:
    return "".join(_SPECIAL_CHARS.get(ch, ch) for ch in value)


def escape_attribute(value: str) -> str:
    """Escape *value* for use inside a quoted HTML attribute.

    Existing character references are not double encoded::

        >>> escape_attribute('{"a":"b & c"}')
        '{&quot;a&quot;:&quot;b &amp; c&quot;}'
        >>> escape_attribute("{&quot;a&quot;:1}")
        '{&quot;a&quot;:1}'
    """
    if not value:
        return ""
    value = _BARE_AMPERSAND_RE.sub("&amp;", value)
    return _escape_special(value)


def escape_serialized(value: str) -> str:
    """Escape *value* so that decoding it once gives back *value* exactly.

        >>> escape_serialized('{"a":"&amp;"}')
        '{&quot;a&quot;:&quot;&amp;amp;&quot;}'
    """
    if not value:
        return ""
    return _escape_special(value.replace("&", "&amp;"))


def unescape_attribute(value: str) -> str:
    """Decode character references in an attribute value."""
    return html.unescape(value)


def serialize_attributes(attributes: dict[str, Any]) -> str:
    """Serialize block attributes to compact JSON.

    Key order is preserved and non-ASCII text is written as ``\\uXXXX``
    escapes, matching the JSON emitted by the block editor.

    Raises:
        TypeError: A value is not JSON serializable.
        ValueError: A float is NaN or infinite.
    """
    return json.dumps(attributes, separators=(",", ":"), allow_nan=False)
