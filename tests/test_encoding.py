"""Tests for encoding-safe parsing, serialization and attribute escaping."""

from __future__ import annotations

import pytest

from models.errors import EmptyDocumentError
from parsing.encoding import encode_multibyte, parse, root_element, serialize
from parsing.escaping import (
    escape_attribute,
    escape_serialized,
    serialize_attributes,
    unescape_attribute,
)


class TestEncodeMultibyte:
    def test_non_ascii_becomes_char_refs(self):
        assert encode_multibyte("<p>23°C ☀️ ©</p>") == "<p>23&#176;C &#9728;&#65039; &#169;</p>"

    def test_existing_entities_untouched(self):
        assert encode_multibyte("<p>&copy; &#176; &amp;</p>") == "<p>&copy; &#176; &amp;</p>"

    def test_script_and_style_bodies_untouched(self):
        html = '<p>é</p><script>var s = "é";</script><STYLE>p:after{content:"é"}</STYLE>'
        assert encode_multibyte(html) == (
            '<p>&#233;</p><script>var s = "é";</script><STYLE>p:after{content:"é"}</STYLE>'
        )


class TestParse:
    @pytest.mark.parametrize("html", ["", "   ", "text only", "<!-- comment -->"])
    def test_no_root_element_raises(self, html):
        with pytest.raises(EmptyDocumentError):
            parse(html)

    def test_no_implied_wrapper(self):
        soup = parse("<p>Hi</p>")
        assert soup.find("html") is None
        assert soup.find("body") is None
        assert root_element(soup).name == "p"

    def test_root_is_first_element(self):
        soup = parse("\n<!-- c -->text<section><p>x</p></section><aside></aside>")
        assert root_element(soup).name == "section"


class TestSerialize:
    def test_round_trip_keeps_markup(self):
        html = '<div class="a  b" id="x" data-z="1"><img src="i.png" alt=""/><p>Hi</p></div>'
        assert serialize(parse(html)) == html

    def test_entities_are_not_double_escaped(self):
        soup = parse("<p>é &amp; &#176; &lt;tag&gt; &copy;</p>")
        assert serialize(soup) == "<p>&eacute; &amp; &deg; &lt;tag&gt; &copy;</p>"

    def test_symbols_without_entity_name_use_numeric_refs(self):
        assert serialize(parse("<p>☀ 😀</p>")) == "<p>&#9728; &#128512;</p>"

    def test_attribute_with_double_quotes_uses_single_quotes(self):
        soup = parse("<p>x</p>")
        root_element(soup)["data-json"] = '{"a":"b"}'
        assert serialize(soup) == "<p data-json='{\"a\":\"b\"}'>x</p>"

    def test_attribute_with_both_quotes_is_escaped(self):
        soup = parse("<p>x</p>")
        root_element(soup)["title"] = "it's \"quoted\""
        assert serialize(soup) == '<p title="it\'s &quot;quoted&quot;">x</p>'

    def test_text_around_root_is_kept(self):
        html = "before <p>x</p> after"
        assert serialize(parse(html)) == html

    def test_serialize_single_nodes(self):
        soup = parse("<p>x</p><!-- note -->")
        comment = soup.contents[-1]
        assert serialize(comment) == "<!-- note -->"
        assert serialize(root_element(soup)) == "<p>x</p>"


class TestEscaping:
    def test_escape_attribute(self):
        assert escape_attribute('{"a":"<b> & \'c\'"}') == (
            "{&quot;a&quot;:&quot;&lt;b&gt; &amp; &#039;c&#039;&quot;}"
        )

    def test_escape_attribute_is_idempotent(self):
        once = escape_attribute('{"a":"x & y"}')
        assert escape_attribute(once) == once

    def test_escape_attribute_keeps_valid_references(self):
        assert escape_attribute("&copy; &#169; &#xA9; & &nope") == (
            "&copy; &#169; &#xA9; &amp; &amp;nope"
        )

    def test_escape_serialized_encodes_every_ampersand(self):
        value = '{"a":"Fish &amp; Chips","b":"<i>"}'
        escaped = escape_serialized(value)
        assert escaped == (
            "{&quot;a&quot;:&quot;Fish &amp;amp; Chips&quot;,"
            "&quot;b&quot;:&quot;&lt;i&gt;&quot;}"
        )
        assert unescape_attribute(escaped) == value

    def test_escape_empty(self):
        assert escape_attribute("") == ""

    def test_unescape_attribute(self):
        assert unescape_attribute("{&quot;a&quot;:&#039;b&#039;}") == "{\"a\":'b'}"

    def test_serialize_attributes_is_compact_and_ordered(self):
        assert serialize_attributes({"z": 1, "a": [True, None], "é": "ü"}) == (
            '{"z":1,"a":[true,null],"\\u00e9":"\\u00fc"}'
        )

    def test_serialize_empty_attributes(self):
        assert serialize_attributes({}) == "{}"

    @pytest.mark.parametrize("value", [float("nan"), float("inf")])
    def test_serialize_rejects_non_finite_floats(self, value):
        with pytest.raises(ValueError):
            serialize_attributes({"w": value})
