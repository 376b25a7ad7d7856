"""
ProcessedImageRepository - 处理结果Repository
"""
# 标准库导包
from datetime import datetime
from typing import Optional, List, Dict, Any

# 第三方库导包
from sqlalchemy import select, delete
from sqlalchemy.ext.asyncio import AsyncSession

# 项目内部导包
from storage.models.processed_image import ProcessedImage, ProcessingStatus
from storage.repositories.base import BaseRepository


class ProcessedImageRepository(BaseRepository[ProcessedImage]):
    """处理结果Repository"""

    def __init__(self, session: AsyncSession):
        super().__init__(session, ProcessedImage)

    async def create_pending(self, image_id: int, processing_type: str) -> ProcessedImage:
        """
        创建pending状态的处理记录，结果字段全部为空

        Args:
            image_id: 原图ID
            processing_type: 处理类型

        Returns:
            创建的处理记录
        """
        return await self.create(
            original_image_id=image_id,
            processing_type=processing_type,
            processing_status=ProcessingStatus.PENDING,
            processed_path="",
            file_size=None,
            width=None,
            height=None,
            error_message=None,
            processed_at=None
        )

    async def update_status(
        self,
        processed_image_id: int,
        status: ProcessingStatus,
        fields: Dict[str, Any]
    ) -> Optional[ProcessedImage]:
        """
        更新处理状态

        只覆盖fields中出现的字段；状态为completed时写入processed_at，
        其他状态不改动processed_at；updated_at每次都刷新

        Args:
            processed_image_id: 处理记录ID
            status: 新状态
            fields: 需要覆盖的结果字段

        Returns:
            更新后的处理记录，不存在时返回None
        """
        now = datetime.utcnow()
        update_data = dict(fields)
        update_data["processing_status"] = status
        update_data["updated_at"] = now

        if status == ProcessingStatus.COMPLETED:
            update_data["processed_at"] = now

        return await self.update_by_id(processed_image_id, **update_data)

    async def delete_by_image_id(self, image_id: int) -> int:
        """
        删除指定图片的所有处理记录

        Args:
            image_id: 原图ID

        Returns:
            删除的记录数量
        """
        result = await self.session.execute(
            delete(ProcessedImage).where(ProcessedImage.original_image_id == image_id)
        )
        return result.rowcount

    async def list_storage_paths(self) -> List[str]:
        """获取所有非空的处理结果路径"""
        result = await self.session.execute(
            select(ProcessedImage.processed_path).where(ProcessedImage.processed_path != "")
        )
        return list(result.scalars().all())
