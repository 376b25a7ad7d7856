"""
ImageRepository - 原始图片Repository
"""
# 标准库导包
from typing import Optional, List

# 第三方库导包
from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

# 项目内部导包
from storage.models.image import Image
from storage.models.processed_image import ProcessedImage, ProcessingStatus
from storage.repositories.base import BaseRepository


class ImageRepository(BaseRepository[Image]):
    """原始图片Repository"""

    def __init__(self, session: AsyncSession):
        super().__init__(session, Image)

    async def get_with_processed(self, image_id: int) -> Optional[Image]:
        """
        获取图片及其全部处理结果

        Args:
            image_id: 图片ID

        Returns:
            图片实例（processed_images已加载）或None
        """
        query = (
            select(Image)
            .where(Image.id == image_id)
            .options(selectinload(Image.processed_images))
            .execution_options(populate_existing=True)
        )
        result = await self.session.execute(query)
        return result.scalar_one_or_none()

    def _ids_with_status(self, processing_status: ProcessingStatus):
        """拥有指定状态处理结果的图片ID（已去重）"""
        return (
            select(Image.id)
            .join(ProcessedImage, ProcessedImage.original_image_id == Image.id)
            .where(ProcessedImage.processing_status == processing_status)
            .distinct()
        )

    async def list_images(
        self,
        limit: int,
        offset: int,
        processing_status: Optional[ProcessingStatus] = None,
        include_processed: bool = True
    ) -> List[Image]:
        """
        分页获取图片列表

        有状态过滤时先对候选图片ID去重再分页，避免同一张图片占用多个分页位置

        Args:
            limit: 每页数量
            offset: 偏移量
            processing_status: 处理状态过滤（可选）
            include_processed: 是否加载处理结果

        Returns:
            按ID升序排列的图片列表
        """
        if processing_status is not None:
            id_query = (
                self._ids_with_status(processing_status)
                .order_by(Image.id.asc())
                .limit(limit)
                .offset(offset)
            )
            id_result = await self.session.execute(id_query)
            image_ids = list(id_result.scalars().all())
            if not image_ids:
                return []
            query = select(Image).where(Image.id.in_(image_ids))
        else:
            query = select(Image).limit(limit).offset(offset)

        query = query.order_by(Image.id.asc())
        if include_processed:
            query = query.options(selectinload(Image.processed_images)).execution_options(populate_existing=True)

        result = await self.session.execute(query)
        return list(result.scalars().all())

    async def count_images(self, processing_status: Optional[ProcessingStatus] = None) -> int:
        """
        统计图片数量

        Args:
            processing_status: 处理状态过滤（可选）

        Returns:
            满足条件的图片数量
        """
        if processing_status is None:
            return await self.count()

        subquery = self._ids_with_status(processing_status).subquery()
        result = await self.session.execute(select(func.count()).select_from(subquery))
        return result.scalar_one()

    async def get_gallery(self) -> List[Image]:
        """
        获取画廊图片

        只保留至少有一个completed处理结果的图片，附带其全部处理结果，按上传时间倒序

        Returns:
            图片列表
        """
        query = (
            select(Image)
            .where(Image.processed_images.any(ProcessedImage.processing_status == ProcessingStatus.COMPLETED))
            .options(selectinload(Image.processed_images))
            .order_by(Image.uploaded_at.desc(), Image.id.desc())
            .execution_options(populate_existing=True)
        )
        result = await self.session.execute(query)
        return list(result.scalars().all())

    async def list_storage_paths(self) -> List[str]:
        """获取所有原图存储路径"""
        result = await self.session.execute(select(Image.original_path))
        return list(result.scalars().all())
