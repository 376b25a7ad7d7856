"""
依赖注入函数
提供Blob存储和处理服务通知客户端，测试中可通过dependency_overrides替换
"""
# 项目内部导包
from config import settings
from integrations.processing_backend import ProcessingBackendClient
from storage.blob_store import BlobStore


def get_blob_store() -> BlobStore:
    """获取Blob存储"""
    return BlobStore(settings.UPLOAD_DIR, settings.PROCESSED_DIR)


def get_processing_backend() -> ProcessingBackendClient:
    """获取处理服务通知客户端"""
    return ProcessingBackendClient.from_settings(settings)
