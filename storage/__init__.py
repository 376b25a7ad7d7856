"""
Storage层包
提供数据库连接、模型、Repository和Blob存储的统一访问接口
"""
# 项目内部导包
from .database import (
    get_session,
    init_db,
    cleanup_db,
    Base,
    engine,
    async_session_factory
)
from .models import (
    Image,
    ProcessedImage,
    ProcessingStatus
)
from .repositories import (
    BaseRepository,
    ImageRepository,
    ProcessedImageRepository
)
from .blob_store import BlobStore

__all__ = [
    # 数据库连接相关
    "get_session",
    "init_db",
    "cleanup_db",
    "Base",
    "engine",
    "async_session_factory",

    # 模型相关
    "Image",
    "ProcessedImage",
    "ProcessingStatus",

    # Repository相关
    "BaseRepository",
    "ImageRepository",
    "ProcessedImageRepository",

    # Blob存储
    "BlobStore",
]
