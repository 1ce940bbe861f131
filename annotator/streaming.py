"""Streaming strategy: annotate the first tag in a single forward scan."""

from __future__ import annotations

from typing import Any, Optional

from annotator.bypass import flatten, should_bypass
from annotator.config import DEFAULT_CONFIG, AnnotatorConfig
from annotator.hooks import run_markup_hook
from annotator.tree import BLOCK_ATTRS_ATTRIBUTE, BLOCK_NAME_ATTRIBUTE
from models.block import BlockDescriptor
from parsing.tag_scanner import TagScanner


def process_with_tag_scanner(
    html: str,
    block_name: str,
    serialized_attrs: str,
    descriptor: BlockDescriptor,
    instance: Any = None,
    config: Optional[AnnotatorConfig] = None,
) -> str:
    """Annotate the first opening tag of *html* without building a tree.

    Only the root tag is rewritten; the rest of the fragment is copied
    through as-is.  A fragment without any opening tag is returned
    unchanged.  The ``tag_scanner_markup_hook`` receives the scanner while
    it is still positioned on the root tag.

    Raises:
        ScanError: An edit was rejected by the scanner.
        ExtensionHookError: A configured hook raised.
    """
    config = config or DEFAULT_CONFIG

    if should_bypass(block_name, descriptor, instance, config):
        return flatten(html)

    scanner = TagScanner(html)
    if not scanner.next_tag():
        return html

    scanner.set_attribute(BLOCK_ATTRS_ATTRIBUTE, serialized_attrs)
    scanner.set_attribute(BLOCK_NAME_ATTRIBUTE, block_name)

    run_markup_hook(
        "tag_scanner_markup_hook",
        config.tag_scanner_markup_hook,
        scanner,
        html,
        descriptor,
        instance,
    )

    return scanner.get_updated_html()
