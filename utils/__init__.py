"""
Utils layer
工具函数层
"""

from .exceptions import (
    ImageCatalogError,
    NotFoundError,
    ValidationError,
    IntegrityViolationError,
    StorageIOError,
)
from .file_naming import (
    MIME_EXTENSIONS,
    extension_for,
    generate_storage_filename,
    build_processed_filename,
)

__all__ = [
    "ImageCatalogError",
    "NotFoundError",
    "ValidationError",
    "IntegrityViolationError",
    "StorageIOError",
    "MIME_EXTENSIONS",
    "extension_for",
    "generate_storage_filename",
    "build_processed_filename",
]
