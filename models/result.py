"""Explicit outcome of one annotation attempt."""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict


class Strategy(str, Enum):
    """How a fragment is annotated."""

    TREE = "tree"
    TAG_SCANNER = "tag_scanner"


class AnnotationResult(BaseModel):
    """Result of dispatching a fragment to an annotator.

    ``annotated`` is ``False`` whenever the original fragment was returned,
    either because there was nothing to do or because the annotator
    failed; ``error`` carries the failure message in the latter case.
    """

    model_config = ConfigDict(frozen=True)

    html: str
    annotated: bool
    strategy: Optional[Strategy] = None
    error: Optional[str] = None

    @property
    def is_fallback(self) -> bool:
        return self.error is not None
