"""Strategy selection and the fallback guard.

``annotate_block()`` is the single entry point for annotating one rendered
block.  It picks the annotator named by the config, runs it, and turns any
failure into an ``AnnotationResult`` carrying the original markup.  Nothing
raised by an annotator or a hook ever reaches the caller.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Optional

from annotator.config import DEFAULT_CONFIG, AnnotatorConfig
from annotator.streaming import process_with_tag_scanner
from annotator.tree import process_with_tree
from models.block import BlockDescriptor
from models.errors import AnnotationError
from models.result import AnnotationResult, Strategy

logger = logging.getLogger("annotator")

_ANNOTATORS: dict[Strategy, Callable[..., str]] = {
    Strategy.TREE: process_with_tree,
    Strategy.TAG_SCANNER: process_with_tag_scanner,
}


def _fallback(
    html: str,
    block_name: str,
    strategy: Strategy,
    exc: Exception,
    exc_info: bool = False,
) -> AnnotationResult:
    logger.warning(
        "annotation fallback",
        exc_info=exc_info,
        extra={
            "block_name": block_name,
            "strategy": strategy.value,
            "reason": f"{type(exc).__name__}: {exc}",
        },
    )
    return AnnotationResult(
        html=html, annotated=False, strategy=strategy, error=str(exc)
    )


def annotate_block(
    html: str,
    block_name: str,
    serialized_attrs: str,
    descriptor: BlockDescriptor,
    instance: Any = None,
    config: Optional[AnnotatorConfig] = None,
) -> AnnotationResult:
    """Annotate *html* and report what happened.

    Blocks without a name and blank fragments are returned untouched
    without selecting a strategy.

    Args:
        html: Rendered block markup.
        block_name: Attribute-escaped block type name.
        serialized_attrs: Attribute-escaped JSON of the block attributes.
        descriptor: The parsed block, passed through to hooks.
        instance: Opaque rendering context, passed through to hooks.
        config: Strategy and hooks; ``DEFAULT_CONFIG`` when omitted.
    """
    if not block_name or not html or not html.strip():
        return AnnotationResult(html=html, annotated=False)

    config = config or DEFAULT_CONFIG
    strategy = config.strategy
    process = _ANNOTATORS[strategy]

    try:
        output = process(
            html, block_name, serialized_attrs, descriptor, instance, config
        )
    except AnnotationError as exc:
        return _fallback(html, block_name, strategy, exc)
    except Exception as exc:  # noqa: BLE001
        return _fallback(html, block_name, strategy, exc, exc_info=True)

    return AnnotationResult(
        html=output, annotated=output != html, strategy=strategy
    )


def annotate(
    html: str,
    block_name: str,
    serialized_attrs: str,
    descriptor: BlockDescriptor,
    instance: Any = None,
    config: Optional[AnnotatorConfig] = None,
) -> str:
    """Return *html* annotated with the block name and attributes.

    Same as ``annotate_block()`` but returns only the markup.
    """
    return annotate_block(
        html, block_name, serialized_attrs, descriptor, instance, config
    ).html
