from .base import DocumentAdapter, Handle
from .memory import MemoryDocument
from .playwright_adapter import PlaywrightDocumentAdapter

__all__ = [
    "DocumentAdapter",
    "Handle",
    "MemoryDocument",
    "PlaywrightDocumentAdapter",
]
