"""
图片服务类
处理图片的上传、查询、画廊和删除等业务逻辑
"""
# 标准库导包
import base64
import binascii
import logging
from typing import Optional, List, Tuple

# 第三方库导包
from sqlalchemy.ext.asyncio import AsyncSession

# 项目内部导包
from config import settings
from models import GetImagesRequest
from storage.blob_store import BlobStore
from storage.models.image import Image
from storage.repositories.image_repository import ImageRepository
from storage.repositories.processed_image_repository import ProcessedImageRepository
from utils.exceptions import NotFoundError, ValidationError
from utils.file_naming import generate_storage_filename

# 配置日志
logger = logging.getLogger(__name__)


def decode_file_data(file_data: str) -> bytes:
    """
    解码Base64文件内容

    Args:
        file_data: Base64字符串

    Returns:
        解码后的字节

    Raises:
        ValidationError: 内容不是合法的Base64
    """
    try:
        # 兼容按行折叠的Base64，先去掉空白字符
        return base64.b64decode("".join(file_data.split()), validate=True)
    except (binascii.Error, ValueError) as e:
        logger.warning(f"文件内容Base64解码失败: {str(e)}")
        raise ValidationError("file_data不是合法的Base64编码") from e


class ImageService:
    """图片服务类"""

    def __init__(self, session: AsyncSession, blob_store: Optional[BlobStore] = None):
        """
        初始化图片服务

        Args:
            session: 数据库会话
            blob_store: Blob存储，默认使用配置中的目录
        """
        self.session = session
        self.blob_store = blob_store or BlobStore()
        self.image_repo = ImageRepository(session)
        self.processed_repo = ProcessedImageRepository(session)

    async def upload_image(
        self,
        filename: str,
        file_data: str,
        mime_type: str,
        width: Optional[int] = None,
        height: Optional[int] = None
    ) -> Image:
        """
        上传图片：先写文件，再写数据库记录

        文件大小以解码后的字节长度为准。写文件成功但插入记录失败时不回滚文件，
        孤立文件由 scripts/cleanup_orphan_blobs.py 统一清理

        Args:
            filename: 展示用文件名
            file_data: Base64编码的文件内容
            mime_type: MIME类型
            width: 图片宽度（可选）
            height: 图片高度（可选）

        Returns:
            创建的Image实例
        """
        content = decode_file_data(file_data)

        if len(content) > settings.MAX_UPLOAD_BYTES:
            logger.warning(f"上传文件过大: filename={filename}, size={len(content)}")
            raise ValidationError(f"文件大小超过限制: {settings.MAX_UPLOAD_BYTES} 字节")

        storage_filename = generate_storage_filename(filename, mime_type)
        storage_path = await self.blob_store.write(storage_filename, content)

        try:
            image = await self.image_repo.create(
                filename=filename,
                original_path=storage_path,
                file_size=len(content),
                mime_type=mime_type,
                width=width,
                height=height
            )
        except Exception as e:
            logger.error(f"创建图片记录失败，遗留孤立文件: path={storage_path}, error={str(e)}")
            raise

        logger.info(f"上传图片成功: image_id={image.id}, filename={filename}, size={image.file_size}")
        return image

    async def list_images(self, params: GetImagesRequest) -> Tuple[List[Image], int]:
        """
        分页获取图片列表

        Args:
            params: 查询参数（分页、状态过滤、是否包含处理结果）

        Returns:
            (图片列表, 满足条件的图片总数)
        """
        images = await self.image_repo.list_images(
            limit=params.limit,
            offset=params.offset,
            processing_status=params.processing_status,
            include_processed=params.include_processed
        )
        total = await self.image_repo.count_images(params.processing_status)
        return images, total

    async def get_image_by_id(self, image_id: int) -> Optional[Image]:
        """
        获取图片详情，不存在时返回None而不是报错

        Args:
            image_id: 图片ID

        Returns:
            Image实例（含全部处理结果）或None
        """
        return await self.image_repo.get_with_processed(image_id)

    async def get_gallery(self) -> List[Image]:
        """获取画廊：至少有一个处理完成结果的图片，按上传时间倒序"""
        return await self.image_repo.get_gallery()

    async def delete_image(self, image_id: int) -> bool:
        """
        删除图片：先删除全部处理记录，再删除图片记录

        不删除磁盘上的原图和处理结果文件

        Args:
            image_id: 图片ID

        Returns:
            是否删除成功
        """
        image = await self.image_repo.get_by_id(image_id)
        if not image:
            logger.warning(f"删除图片失败，图片不存在: image_id={image_id}")
            raise NotFoundError(f"Image with id {image_id} not found")

        removed = await self.processed_repo.delete_by_image_id(image_id)
        deleted = await self.image_repo.delete_by_id(image_id)

        logger.info(f"删除图片成功: image_id={image_id}, 删除处理记录{removed}条")
        return deleted
