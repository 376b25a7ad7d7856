"""
外部图片处理服务的通知封装
任务以JSON形式推入Redis队列，由处理服务消费后通过状态回调接口回写结果
"""
# 标准库导包
import asyncio
import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Dict, Any

# 项目内部导包
from redis_client import push_processing_job
from storage.models.image import Image
from storage.models.processed_image import ProcessedImage

logger = logging.getLogger(__name__)


@dataclass
class ProcessingBackendConfig:
    """处理服务通知配置"""
    queue_key: str = "image_catalog:processing_jobs"
    enabled: bool = True
    timeout: float = 2.0


class ProcessingBackendClient:
    """处理服务通知客户端，只负责入队，不等待处理结果"""

    def __init__(self, config: ProcessingBackendConfig):
        self.config = config

    @classmethod
    def from_settings(cls, settings) -> "ProcessingBackendClient":
        """从全局设置创建客户端"""
        config = ProcessingBackendConfig(
            queue_key=getattr(settings, "PROCESSING_QUEUE_KEY", ProcessingBackendConfig.queue_key),
            enabled=getattr(settings, "PROCESSING_NOTIFY_ENABLED", True),
            timeout=getattr(settings, "PROCESSING_NOTIFY_TIMEOUT", ProcessingBackendConfig.timeout),
        )
        return cls(config)

    @staticmethod
    def build_job(processed_image: ProcessedImage, image: Image) -> Dict[str, Any]:
        """构建处理任务数据"""
        return {
            "processed_image_id": processed_image.id,
            "image_id": image.id,
            "processing_type": processed_image.processing_type,
            "original_path": image.original_path,
            "mime_type": image.mime_type,
            "queued_at": datetime.utcnow().isoformat(),
        }

    async def notify(self, processed_image: ProcessedImage, image: Image) -> bool:
        """
        通知处理服务有新任务

        投递失败或超时只记录日志，不影响调用方

        Returns:
            是否成功入队
        """
        if not self.config.enabled:
            logger.info(f"处理服务通知已关闭，跳过入队: processed_image_id={processed_image.id}")
            return False

        job = self.build_job(processed_image, image)
        try:
            await asyncio.wait_for(
                push_processing_job(job, queue_key=self.config.queue_key),
                timeout=self.config.timeout
            )
        except asyncio.TimeoutError:
            logger.warning(
                f"处理任务入队超时，已放弃: processed_image_id={processed_image.id}, "
                f"timeout={self.config.timeout}s"
            )
            return False
        except Exception as e:
            logger.exception(f"处理任务入队失败: processed_image_id={processed_image.id}, error={str(e)}")
            return False

        logger.info(
            f"处理任务已入队: processed_image_id={processed_image.id}, "
            f"image_id={image.id}, processing_type={processed_image.processing_type}"
        )
        return True
