"""
下载服务类
将图片或处理结果解析为文件名、Base64内容和MIME类型
"""
# 标准库导包
import base64
import logging
from typing import Optional

# 第三方库导包
from sqlalchemy.ext.asyncio import AsyncSession

# 项目内部导包
from models import DownloadImageData
from storage.blob_store import BlobStore
from storage.repositories.image_repository import ImageRepository
from storage.repositories.processed_image_repository import ProcessedImageRepository
from utils.exceptions import NotFoundError, ValidationError, IntegrityViolationError
from utils.file_naming import build_processed_filename

# 配置日志
logger = logging.getLogger(__name__)


class DownloadService:
    """下载服务类"""

    def __init__(self, session: AsyncSession, blob_store: Optional[BlobStore] = None):
        self.session = session
        self.blob_store = blob_store or BlobStore()
        self.image_repo = ImageRepository(session)
        self.processed_repo = ProcessedImageRepository(session)

    async def download_image(
        self,
        image_id: Optional[int] = None,
        processed_image_id: Optional[int] = None
    ) -> DownloadImageData:
        """
        下载原图或处理结果

        同时提供两个ID时以image_id为准

        Args:
            image_id: 原图ID
            processed_image_id: 处理记录ID

        Returns:
            DownloadImageData
        """
        if image_id is not None:
            return await self._download_original(image_id)
        if processed_image_id is not None:
            return await self._download_processed(processed_image_id)

        logger.warning("下载失败，未提供image_id或processed_image_id")
        raise ValidationError("Either image_id or processed_image_id must be provided")

    async def _download_original(self, image_id: int) -> DownloadImageData:
        """下载原图"""
        image = await self.image_repo.get_by_id(image_id)
        if not image:
            logger.warning(f"下载失败，原图不存在: image_id={image_id}")
            raise NotFoundError(f"Original image with id {image_id} not found")

        content = await self.blob_store.read(image.original_path)

        return DownloadImageData(
            filename=image.filename,
            file_data=base64.b64encode(content).decode("ascii"),
            mime_type=image.mime_type,
            file_size=image.file_size
        )

    async def _download_processed(self, processed_image_id: int) -> DownloadImageData:
        """
        下载处理结果

        文件名为原图文件名插入处理类型，MIME类型沿用原图；
        处理尚未完成时路径为空，读取会抛出StorageIOError
        """
        processed_image = await self.processed_repo.get_by_id(processed_image_id)
        if not processed_image:
            logger.warning(f"下载失败，处理记录不存在: processed_image_id={processed_image_id}")
            raise NotFoundError(f"Processed image with id {processed_image_id} not found")

        original = await self.image_repo.get_by_id(processed_image.original_image_id)
        if not original:
            logger.error(
                f"数据引用损坏，处理记录的原图不存在: processed_image_id={processed_image_id}, "
                f"original_image_id={processed_image.original_image_id}"
            )
            raise IntegrityViolationError(f"Original image for processed image {processed_image_id} not found")

        content = await self.blob_store.read(processed_image.processed_path)

        return DownloadImageData(
            filename=build_processed_filename(original.filename, processed_image.processing_type),
            file_data=base64.b64encode(content).decode("ascii"),
            mime_type=original.mime_type,
            file_size=processed_image.file_size or 0
        )
