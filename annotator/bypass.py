"""Pattern bypass: flatten reference blocks instead of annotating them.

A reference block (a synced pattern, ``core/block``) renders the blocks of
another stored document.  Its fragment therefore holds several top-level
elements, each already annotated when the nested blocks were rendered.
Annotating the fragment as a whole would tag only the first of them with
the reference block's own name, so the children are passed through
individually instead.
"""

from __future__ import annotations

from typing import Any, Optional

from annotator.config import DEFAULT_CONFIG, AnnotatorConfig
from annotator.hooks import call_hook
from models.block import BlockDescriptor
from parsing.encoding import parse, root_element, serialize


def should_bypass(
    block_name: str,
    descriptor: BlockDescriptor,
    instance: Any = None,
    config: Optional[AnnotatorConfig] = None,
) -> bool:
    """Return ``True`` when the block must be flattened, not annotated.

    Defaults to matching the configured reference block name; a
    ``bypass_filter`` hook gets the default and has the final say.
    """
    config = config or DEFAULT_CONFIG
    is_reference = block_name == config.reference_block_name
    if config.bypass_filter is None:
        return is_reference
    return bool(
        call_hook(
            "bypass_filter",
            config.bypass_filter,
            is_reference,
            block_name,
            descriptor,
            instance,
        )
    )


def flatten(html: str) -> str:
    """Split a multi-root fragment into its top-level nodes and rejoin them.

    The fragment is parsed inside a ``<body>`` container which is never
    emitted.  Each top-level node is serialized on its own; nodes that are
    empty once trimmed (whitespace between blocks) are dropped and the rest
    are concatenated in their original order.
    """
    soup = parse(f"<body>{html}</body>")
    container = root_element(soup)

    node_html: list[str] = []
    for child in container.contents:
        child_html = serialize(child).strip()
        if child_html:
            node_html.append(child_html)

    return "".join(node_html)
