"""
基础Repository类
"""
# 标准库导包
from typing import TypeVar, Generic, Optional
from abc import ABC

# 第三方库导包
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, update, delete
from sqlalchemy.sql import func

# 项目内部导包
from storage.database import Base

# 泛型类型
ModelType = TypeVar('ModelType', bound=Base)


class BaseRepository(Generic[ModelType], ABC):
    """基础Repository类，提供通用的CRUD操作"""

    def __init__(self, session: AsyncSession, model: type[ModelType]):
        """
        初始化Repository

        Args:
            session: 数据库会话
            model: 数据库模型类
        """
        self.session = session
        self.model = model

    async def get_by_id(self, id: int) -> Optional[ModelType]:
        """
        根据ID获取单条记录

        Args:
            id: 记录ID

        Returns:
            模型实例或None
        """
        result = await self.session.execute(
            select(self.model).where(self.model.id == id)
        )
        return result.scalar_one_or_none()

    async def create(self, **kwargs) -> ModelType:
        """
        创建新记录，flush后即可拿到数据库分配的ID

        Args:
            **kwargs: 模型字段值

        Returns:
            创建的模型实例
        """
        instance = self.model(**kwargs)
        self.session.add(instance)
        await self.session.flush()
        await self.session.refresh(instance)
        return instance

    async def update_by_id(self, id: int, **kwargs) -> Optional[ModelType]:
        """
        根据ID做部分更新，只写入传入的字段

        Args:
            id: 记录ID
            **kwargs: 要更新的字段值

        Returns:
            更新后的模型实例，记录不存在时返回None
        """
        # MySQL不支持RETURNING子句，所以先执行UPDATE，然后重新查询
        existing = await self.get_by_id(id)
        if not existing:
            return None

        if kwargs:
            await self.session.execute(
                update(self.model)
                .where(self.model.id == id)
                .values(**kwargs)
            )
            await self.session.flush()

        # 刷新实例，丢弃会话中缓存的旧值
        await self.session.refresh(existing)
        return existing

    async def delete_by_id(self, id: int) -> bool:
        """
        根据ID删除记录

        Args:
            id: 记录ID

        Returns:
            是否删除成功
        """
        result = await self.session.execute(
            delete(self.model).where(self.model.id == id)
        )
        return result.rowcount > 0

    async def count(self) -> int:
        """统计记录数量"""
        result = await self.session.execute(select(func.count(self.model.id)))
        return result.scalar_one()
