"""
本地文件系统Blob存储
按路径整体读写字节，不关心内容结构
"""
# 标准库导包
import logging
import os
from pathlib import Path
from typing import List, Optional

# 第三方库导包
import aiofiles
import aiofiles.os

# 项目内部导包
from config import settings
from utils.exceptions import StorageIOError

# 配置日志
logger = logging.getLogger(__name__)


class BlobStore:
    """本地Blob存储"""

    def __init__(self, upload_dir: Optional[str] = None, processed_dir: Optional[str] = None):
        """
        初始化Blob存储

        Args:
            upload_dir: 原图目录，默认使用settings.UPLOAD_DIR
            processed_dir: 处理结果目录，默认使用settings.PROCESSED_DIR
        """
        self.upload_dir = Path(upload_dir or settings.UPLOAD_DIR)
        self.processed_dir = Path(processed_dir or settings.PROCESSED_DIR)

    async def write(self, filename: str, data: bytes) -> str:
        """
        将字节写入原图目录

        Args:
            filename: 存储文件名
            data: 文件内容

        Returns:
            写入后的存储路径
        """
        path = self.upload_dir / filename
        try:
            await aiofiles.os.makedirs(self.upload_dir, exist_ok=True)
            async with aiofiles.open(path, "wb") as out:
                await out.write(data)
        except OSError as e:
            logger.error(f"写入文件失败: path={path}, error={str(e)}")
            raise StorageIOError(f"写入文件失败: {path}") from e

        logger.info(f"写入文件成功: path={path}, size={len(data)}")
        return str(path)

    async def read(self, path: str) -> bytes:
        """
        读取指定路径的全部字节

        Args:
            path: 存储路径

        Returns:
            文件内容

        Raises:
            StorageIOError: 路径为空、文件缺失或读取失败
        """
        if not path:
            logger.error("读取文件失败: 存储路径为空")
            raise StorageIOError("存储路径为空，文件尚未生成")

        try:
            async with aiofiles.open(path, "rb") as f:
                return await f.read()
        except OSError as e:
            logger.error(f"读取文件失败: path={path}, error={str(e)}")
            raise StorageIOError(f"读取文件失败: {path}") from e

    async def delete(self, path: str) -> bool:
        """
        删除文件

        Returns:
            文件存在并被删除时返回True
        """
        try:
            await aiofiles.os.remove(path)
        except FileNotFoundError:
            return False
        except OSError as e:
            logger.error(f"删除文件失败: path={path}, error={str(e)}")
            raise StorageIOError(f"删除文件失败: {path}") from e
        return True

    def list_files(self) -> List[str]:
        """列出原图目录和处理结果目录下的所有文件路径"""
        paths = []
        for directory in (self.upload_dir, self.processed_dir):
            if not directory.is_dir():
                continue
            for entry in sorted(directory.iterdir()):
                if entry.is_file():
                    paths.append(str(entry))
        return paths


def normalize_path(path: str) -> str:
    """统一路径格式，用于比较数据库记录和磁盘文件"""
    return os.path.normpath(os.path.abspath(path))
