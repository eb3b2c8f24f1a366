"""
TinyGraph - Errors
Exception types raised by the core. User-facing rejections are reported as
toasts instead and never raised.
"""


class GraphEditorError(Exception):
    """Base class for TinyGraph errors."""


class ImportFormatError(GraphEditorError):
    """A graph document could not be parsed or has an invalid structure."""
