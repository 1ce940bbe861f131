"""Block-level entry point: filter and serialize attributes, then annotate."""

from __future__ import annotations

import logging
from typing import Any, Optional

from annotator.config import DEFAULT_CONFIG, AnnotatorConfig
from annotator.hooks import call_hook
from annotator.selector import annotate_block
from models.block import BlockDescriptor
from models.errors import ExtensionHookError
from models.result import AnnotationResult
from parsing.escaping import escape_attribute, escape_serialized, serialize_attributes

logger = logging.getLogger("annotator")


def _serialized_attributes(
    descriptor: BlockDescriptor, instance: Any, config: AnnotatorConfig
) -> str:
    attributes = descriptor.attributes
    if config.attributes_filter is not None:
        attributes = call_hook(
            "attributes_filter",
            config.attributes_filter,
            attributes,
            descriptor,
            instance,
        )

    serialized = escape_serialized(serialize_attributes(attributes))

    if config.serialized_attributes_filter is not None:
        serialized = call_hook(
            "serialized_attributes_filter",
            config.serialized_attributes_filter,
            serialized,
            attributes,
            descriptor,
            instance,
        )
    return serialized


def render_block_result(
    html: str,
    descriptor: BlockDescriptor,
    instance: Any = None,
    config: Optional[AnnotatorConfig] = None,
) -> AnnotationResult:
    """Annotate one rendered block from its descriptor.

    Attributes pass through ``attributes_filter``, are serialized to
    compact JSON and attribute-escaped, then pass through
    ``serialized_attributes_filter``.  A failure in either filter, or
    attributes that cannot be JSON encoded, returns *html* unchanged.
    """
    if not descriptor.name or not html or not html.strip():
        return AnnotationResult(html=html, annotated=False)

    config = config or DEFAULT_CONFIG

    try:
        serialized = _serialized_attributes(descriptor, instance, config)
    except (ExtensionHookError, TypeError, ValueError) as exc:
        logger.warning(
            "attribute serialization failed",
            extra={"block_name": descriptor.name, "reason": str(exc)},
        )
        return AnnotationResult(html=html, annotated=False, error=str(exc))

    return annotate_block(
        html,
        escape_attribute(descriptor.name),
        serialized,
        descriptor,
        instance,
        config,
    )


def render_block(
    html: str,
    descriptor: BlockDescriptor,
    instance: Any = None,
    config: Optional[AnnotatorConfig] = None,
) -> str:
    """Return *html* annotated for *descriptor*, or unchanged on failure."""
    return render_block_result(html, descriptor, instance, config).html
