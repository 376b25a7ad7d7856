"""
响应转换工具函数
将ORM模型转换为接口响应模型
"""
# 标准库导包
from typing import List

# 项目内部导包
from models import ImageResponse, ImageWithProcessedResponse, ProcessedImageResponse
from storage.models.image import Image
from storage.models.processed_image import ProcessedImage


def processed_image_to_response(processed_image: ProcessedImage) -> ProcessedImageResponse:
    """
    将ProcessedImage模型转换为ProcessedImageResponse

    Args:
        processed_image: ProcessedImage模型实例

    Returns:
        ProcessedImageResponse对象
    """
    return ProcessedImageResponse(
        id=processed_image.id,
        original_image_id=processed_image.original_image_id,
        processed_path=processed_image.processed_path,
        processing_status=processed_image.processing_status,
        processing_type=processed_image.processing_type,
        file_size=processed_image.file_size,
        width=processed_image.width,
        height=processed_image.height,
        error_message=processed_image.error_message,
        processed_at=processed_image.processed_at,
        created_at=processed_image.created_at,
        updated_at=processed_image.updated_at
    )


def image_to_response(image: Image) -> ImageResponse:
    """将Image模型转换为ImageResponse，不涉及处理结果"""
    return ImageResponse(
        id=image.id,
        filename=image.filename,
        original_path=image.original_path,
        file_size=image.file_size,
        mime_type=image.mime_type,
        width=image.width,
        height=image.height,
        uploaded_at=image.uploaded_at,
        updated_at=image.updated_at
    )


def image_with_processed_to_response(image: Image, include_processed: bool = True) -> ImageWithProcessedResponse:
    """
    将Image模型及其处理结果转换为ImageWithProcessedResponse

    Args:
        image: Image模型实例，include_processed为True时processed_images必须已加载
        include_processed: 是否附带处理结果

    Returns:
        ImageWithProcessedResponse对象
    """
    processed: List[ProcessedImageResponse] = []
    if include_processed:
        processed = [processed_image_to_response(p) for p in image.processed_images]

    return ImageWithProcessedResponse(
        **image_to_response(image).model_dump(),
        processed_images=processed
    )
