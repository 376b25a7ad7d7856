"""
Utils layer
路由层工具函数
"""

from .converters import (
    processed_image_to_response,
    image_to_response,
    image_with_processed_to_response,
)

__all__ = [
    "processed_image_to_response",
    "image_to_response",
    "image_with_processed_to_response",
]
