"""
Storage repositories package.
"""
# 项目内部导包
from .base import BaseRepository
from .image_repository import ImageRepository
from .processed_image_repository import ProcessedImageRepository

__all__ = [
    "BaseRepository",
    "ImageRepository",
    "ProcessedImageRepository",
]
