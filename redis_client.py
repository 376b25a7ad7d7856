# 标准库导包
import json
import logging
import threading
from typing import Optional

# 第三方库导包
import redis.asyncio as redis

# 项目内部导包
from config import settings

logger = logging.getLogger(__name__)

# 全局Redis连接池实例
_redis_pool = None
_redis_pool_lock = threading.Lock()


def get_redis():
    """获取Redis连接实例，支持连接池重建"""
    global _redis_pool

    with _redis_pool_lock:
        if _redis_pool is None:
            logger.info("创建新的Redis连接池...")
            _redis_pool = redis.ConnectionPool.from_url(
                settings.REDIS_URL,
                max_connections=50,
                socket_connect_timeout=settings.REDIS_CONNECT_TIMEOUT,  # 连接超时，入队失败时尽快返回
                socket_timeout=settings.REDIS_SOCKET_TIMEOUT,
                socket_keepalive=True,  # 保持连接
                health_check_interval=15,
                retry_on_timeout=False,  # 超时不重试，避免阻塞请求
                decode_responses=True
            )
            logger.info(f"Redis连接池创建完成，连接地址: {settings.REDIS_URL}")

        return redis.Redis(connection_pool=_redis_pool)


# ========== 图片处理队列相关的Redis操作封装 ==========

async def push_processing_job(job: dict, queue_key: Optional[str] = None) -> int:
    """
    将处理任务推入队列

    参数:
        job: 任务数据，会被转换为JSON字符串
        queue_key: 队列键，默认使用settings.PROCESSING_QUEUE_KEY

    返回:
        入队后的队列长度
    """
    if queue_key is None:
        queue_key = settings.PROCESSING_QUEUE_KEY
    r = get_redis()

    length = await r.lpush(queue_key, json.dumps(job, ensure_ascii=False))
    logger.debug(f"处理任务已入队: queue={queue_key}, 队列长度: {length}")
    return length


async def pop_processing_job(queue_key: Optional[str] = None, timeout: int = 0):
    """
    从队列中取出一个处理任务，供外部处理服务使用

    参数:
        queue_key: 队列键，默认使用settings.PROCESSING_QUEUE_KEY
        timeout: 阻塞等待秒数，0表示不阻塞

    返回:
        解析后的任务字典，队列为空时返回None
    """
    if queue_key is None:
        queue_key = settings.PROCESSING_QUEUE_KEY
    r = get_redis()

    if timeout > 0:
        item = await r.brpop(queue_key, timeout=timeout)
        data = item[1] if item else None
    else:
        data = await r.rpop(queue_key)

    if data:
        return json.loads(data)
    return None
