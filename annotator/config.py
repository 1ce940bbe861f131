"""Annotator configuration.

An ``AnnotatorConfig`` is passed explicitly into every annotation call.
Plain settings can be read from the environment with ``from_env()``; hooks
are host code and are only ever supplied in Python.

Hook signatures::

    bypass_filter(default: bool, name, descriptor, instance) -> bool
    attributes_filter(attributes, descriptor, instance) -> dict
    serialized_attributes_filter(serialized, attributes, descriptor, instance) -> str
    tree_markup_hook(root: bs4.Tag, html, descriptor, instance) -> None
    tag_scanner_markup_hook(scanner: TagScanner, html, descriptor, instance) -> None

The two markup hooks change the markup by mutating the object they are
given.  Whatever they return is discarded.
"""

from __future__ import annotations

import os
from typing import Any, Callable, Optional

from pydantic import BaseModel, ConfigDict

from models.result import Strategy

REFERENCE_BLOCK_NAME = "core/block"

ENV_STRATEGY = "BLOCK_MARKUP_STRATEGY"
ENV_REFERENCE_BLOCK = "BLOCK_MARKUP_REFERENCE_BLOCK"


class AnnotatorConfig(BaseModel):
    """Read-only settings and hooks for one or more annotation calls."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    strategy: Strategy = Strategy.TREE
    reference_block_name: str = REFERENCE_BLOCK_NAME

    bypass_filter: Optional[Callable[..., bool]] = None
    attributes_filter: Optional[Callable[..., dict]] = None
    serialized_attributes_filter: Optional[Callable[..., str]] = None
    tree_markup_hook: Optional[Callable[..., Any]] = None
    tag_scanner_markup_hook: Optional[Callable[..., Any]] = None

    @classmethod
    def from_env(cls, **overrides: Any) -> AnnotatorConfig:
        """Build a config from ``BLOCK_MARKUP_*`` environment variables.

        Keyword *overrides* (typically hooks) win over the environment.

        Raises:
            pydantic.ValidationError: ``BLOCK_MARKUP_STRATEGY`` is not a
                known strategy.
        """
        values: dict[str, Any] = {}
        strategy = os.getenv(ENV_STRATEGY, "").strip().lower()
        if strategy:
            values["strategy"] = strategy
        reference = os.getenv(ENV_REFERENCE_BLOCK, "").strip()
        if reference:
            values["reference_block_name"] = reference
        values.update(overrides)
        return cls.model_validate(values)


DEFAULT_CONFIG = AnnotatorConfig()
