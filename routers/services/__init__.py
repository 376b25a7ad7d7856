"""
Services layer
业务逻辑层
"""

from .image_service import ImageService
from .processing_service import ProcessingService
from .download_service import DownloadService

__all__ = [
    "ImageService",
    "ProcessingService",
    "DownloadService"
]
