"""
图片处理服务类
负责发起处理任务和接收外部处理服务的状态回调
"""
# 标准库导包
import logging
from typing import Optional, Dict, Any

# 第三方库导包
from sqlalchemy.ext.asyncio import AsyncSession

# 项目内部导包
from config import settings
from models import UpdateProcessingStatusRequest
from integrations.processing_backend import ProcessingBackendClient
from storage.models.processed_image import ProcessedImage
from storage.repositories.image_repository import ImageRepository
from storage.repositories.processed_image_repository import ProcessedImageRepository
from utils.exceptions import NotFoundError

# 配置日志
logger = logging.getLogger(__name__)

# 不可为空的结果字段，请求模型已拒绝显式null
_NON_NULLABLE_RESULT_FIELDS = ("processed_path", "file_size", "width", "height")


class ProcessingService:
    """图片处理服务类"""

    def __init__(self, session: AsyncSession, backend: Optional[ProcessingBackendClient] = None):
        """
        初始化处理服务

        Args:
            session: 数据库会话
            backend: 处理服务通知客户端，默认从settings创建
        """
        self.session = session
        self.backend = backend or ProcessingBackendClient.from_settings(settings)
        self.image_repo = ImageRepository(session)
        self.processed_repo = ProcessedImageRepository(session)

    async def process_image(self, image_id: int, processing_type: Optional[str] = None) -> ProcessedImage:
        """
        发起图片处理

        创建pending状态的处理记录并通知处理服务，不等待处理完成。
        同一张图片可以多次发起，包括相同的处理类型

        Args:
            image_id: 原图ID
            processing_type: 处理类型，默认background_removal

        Returns:
            创建的ProcessedImage实例
        """
        processing_type = processing_type or settings.DEFAULT_PROCESSING_TYPE

        image = await self.image_repo.get_by_id(image_id)
        if not image:
            logger.warning(f"发起处理失败，图片不存在: image_id={image_id}")
            raise NotFoundError(f"Image with id {image_id} not found")

        processed_image = await self.processed_repo.create_pending(image_id, processing_type)

        # 先提交，处理服务取到任务时记录必须已可见
        await self.session.commit()

        logger.info(
            f"创建处理记录: processed_image_id={processed_image.id}, "
            f"image_id={image_id}, processing_type={processing_type}"
        )

        await self.backend.notify(processed_image, image)
        return processed_image

    @staticmethod
    def _collect_update_fields(request: UpdateProcessingStatusRequest) -> Dict[str, Any]:
        """
        提取请求中显式传入的结果字段

        未传的字段不出现在结果中；error_message 显式传 null 时保留为None用于清空
        """
        fields = {}
        provided = request.model_fields_set

        for name in _NON_NULLABLE_RESULT_FIELDS:
            if name in provided:
                fields[name] = getattr(request, name)

        if "error_message" in provided:
            fields["error_message"] = request.error_message

        return fields

    async def update_processing_status(self, request: UpdateProcessingStatusRequest) -> ProcessedImage:
        """
        更新处理状态（外部处理服务回调）

        部分更新：只覆盖请求中出现的字段；completed时记录processed_at，
        其他状态不清除已有的processed_at

        Args:
            request: 状态回调请求

        Returns:
            更新后的ProcessedImage实例
        """
        fields = self._collect_update_fields(request)

        processed_image = await self.processed_repo.update_status(
            request.processed_image_id,
            request.status,
            fields
        )
        if not processed_image:
            logger.warning(f"更新处理状态失败，记录不存在: processed_image_id={request.processed_image_id}")
            raise NotFoundError(f"Processed image with id {request.processed_image_id} not found")

        logger.info(
            f"更新处理状态: processed_image_id={processed_image.id}, "
            f"status={processed_image.processing_status.value}, fields={sorted(fields)}"
        )
        return processed_image
