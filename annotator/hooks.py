"""Invocation of host-supplied hooks.

Every hook call goes through ``call_hook()`` so that a failing hook always
surfaces as ``ExtensionHookError``, which the strategy selector turns into a
fallback to the original markup.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Optional

from models.errors import ExtensionHookError

logger = logging.getLogger("annotator")


def call_hook(name: str, hook: Callable[..., Any], *args: Any) -> Any:
    """Call *hook* with *args* and return its result.

    Raises:
        ExtensionHookError: The hook raised; the original exception is
            chained as the cause.
    """
    try:
        return hook(*args)
    except Exception as exc:
        raise ExtensionHookError(name, exc) from exc


def run_markup_hook(
    name: str,
    hook: Optional[Callable[..., Any]],
    target: Any,
    html: str,
    descriptor: Any,
    instance: Any,
) -> None:
    """Give a markup hook the root element (or scanner) to mutate in place.

    The hook's return value is never reattached to the markup.
    """
    if hook is None:
        return
    returned = call_hook(name, hook, target, html, descriptor, instance)
    if returned is not None and returned is not target:
        logger.debug(
            "Discarding value returned by %s",
            name,
            extra={"hook": name},
        )
