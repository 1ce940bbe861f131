"""Tree mutation strategy: parse, mutate the root element, serialize."""

from __future__ import annotations

from typing import Any, Optional

from annotator.bypass import flatten, should_bypass
from annotator.config import DEFAULT_CONFIG, AnnotatorConfig
from annotator.hooks import run_markup_hook
from models.block import BlockDescriptor
from parsing.encoding import parse, root_element, serialize
from parsing.escaping import unescape_attribute

BLOCK_ATTRS_ATTRIBUTE = "data-wp-block"
BLOCK_NAME_ATTRIBUTE = "data-wp-block-name"


def process_with_tree(
    html: str,
    block_name: str,
    serialized_attrs: str,
    descriptor: BlockDescriptor,
    instance: Any = None,
    config: Optional[AnnotatorConfig] = None,
) -> str:
    """Annotate the root element of *html* through a parsed tree.

    *block_name* and *serialized_attrs* arrive attribute-escaped.  They are
    decoded before being stored on the element because the serializer
    escapes attribute values itself.  The ``tree_markup_hook`` receives the
    root ``Tag`` after both attributes are set.

    Raises:
        EmptyDocumentError: *html* has no root element.
        ExtensionHookError: A configured hook raised.
    """
    config = config or DEFAULT_CONFIG

    if should_bypass(block_name, descriptor, instance, config):
        return flatten(html)

    soup = parse(html)
    root = root_element(soup)

    root[BLOCK_ATTRS_ATTRIBUTE] = unescape_attribute(serialized_attrs)
    root[BLOCK_NAME_ATTRIBUTE] = unescape_attribute(block_name)

    run_markup_hook(
        "tree_markup_hook",
        config.tree_markup_hook,
        root,
        html,
        descriptor,
        instance,
    )

    return serialize(soup)
