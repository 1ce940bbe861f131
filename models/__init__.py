"""Public re-exports of all model types."""

from models.block import BlockDescriptor
from models.errors import (
    AnnotationError,
    EmptyDocumentError,
    ExtensionHookError,
    ScanError,
)
from models.request import RenderBlockRequest
from models.response import RenderBlockResponse
from models.result import AnnotationResult, Strategy

__all__ = [
    # Blocks
    "BlockDescriptor",
    # Results
    "AnnotationResult",
    "Strategy",
    # Errors
    "AnnotationError",
    "EmptyDocumentError",
    "ExtensionHookError",
    "ScanError",
    # Request/Response
    "RenderBlockRequest",
    "RenderBlockResponse",
]
