"""
Annotation error types.

All errors inherit from AnnotationError so the strategy selector can catch
them in one place and fall back to the original markup.
"""


class AnnotationError(Exception):
    """Base exception for all block annotation failures."""
    pass


class EmptyDocumentError(AnnotationError):
    """Raised when a fragment yields no root element after parsing."""

    def __init__(self, reason: str = "Empty DOM document, fallback to use provided HTML."):
        self.reason = reason
        super().__init__(reason)


class ScanError(AnnotationError):
    """Raised when the tag scanner cannot perform a requested edit."""

    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(reason)


class ExtensionHookError(AnnotationError):
    """Raised when a host-supplied hook raises.

    The hook's own exception is chained as ``__cause__``.
    """

    def __init__(self, hook: str, error: BaseException):
        self.hook = hook
        self.error = error
        super().__init__(f"Hook {hook} failed: {type(error).__name__}: {error}")
