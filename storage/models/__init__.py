"""
Storage models package.
"""
# 项目内部导包
from .image import Image
from .processed_image import ProcessedImage, ProcessingStatus

__all__ = [
    "Image",
    "ProcessedImage",
    "ProcessingStatus",
]
