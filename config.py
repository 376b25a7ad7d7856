"""
应用程序配置
"""
# 标准库导包
import os
from typing import List, Optional

# 第三方库导包
from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """应用程序设置类"""

    # 应用基本信息
    APP_NAME: str = "IMAGE CATALOG"
    APP_VERSION: str = "1.0.0"
    POD_ENV: str = Field(default="test", env="POD_ENV")
    DEBUG: bool = Field(default_factory=lambda: Settings._get_debug())
    RELOAD: bool = False

    # 服务器配置
    HOST: str = Field(default="0.0.0.0", env="HOST")
    PORT: int = Field(default=8000, env="PORT")
    WORKERS: int = 1

    # 开发环境数据库配置
    DEV_DB_HOST: str = "localhost:3306"
    DEV_DB_USER: str = "root"
    DEV_DB_PASSWORD: str = "12345678"

    # 线上环境数据库配置
    ONLINE_DB_HOST: str = "localhost:3306"
    ONLINE_DB_USER: str = "root"
    ONLINE_DB_PASSWORD: str = "12345678"

    # 完整数据库URL，设置后忽略上面的主机配置（测试环境使用sqlite+aiosqlite）
    DATABASE_URL: Optional[str] = Field(default=None, env="DATABASE_URL")

    REDIS_DEV_URL: str = "redis://localhost:6379/0"
    REDIS_ONLINE_URL: str = "redis://localhost:6379/0"
    # Redis超时配置，入队在请求路径上执行，超时需保持较短
    REDIS_CONNECT_TIMEOUT: float = Field(default=1.0, env="REDIS_CONNECT_TIMEOUT")
    REDIS_SOCKET_TIMEOUT: float = Field(default=2.0, env="REDIS_SOCKET_TIMEOUT")
    # 数据库名称
    DB_NAME: str = "image_catalog_db"

    # 数据库连接池配置
    DB_POOL_SIZE: int = Field(default=10, env="DB_POOL_SIZE")
    DB_MAX_CONNECTIONS: int = Field(default=20, env="DB_MAX_CONNECTIONS")
    DB_POOL_TIMEOUT: int = Field(default=30, env="DB_POOL_TIMEOUT")
    DB_POOL_RECYCLE: int = Field(default=3600, env="DB_POOL_RECYCLE")

    # 文件存储配置
    UPLOAD_DIR: str = Field(default="uploads", env="UPLOAD_DIR")
    PROCESSED_DIR: str = Field(default="processed", env="PROCESSED_DIR")
    MAX_UPLOAD_BYTES: int = Field(default=20 * 1024 * 1024, env="MAX_UPLOAD_BYTES")

    # 图片处理配置
    DEFAULT_PROCESSING_TYPE: str = "background_removal"
    PROCESSING_QUEUE_KEY: str = "image_catalog:processing_jobs"
    PROCESSING_NOTIFY_ENABLED: bool = Field(default=True, env="PROCESSING_NOTIFY_ENABLED")
    PROCESSING_NOTIFY_TIMEOUT: float = Field(default=2.0, env="PROCESSING_NOTIFY_TIMEOUT")

    # 分页配置
    DEFAULT_PAGE_SIZE: int = 50
    MAX_PAGE_SIZE: int = 100

    # CORS配置 - 允许所有跨域请求
    CORS_ORIGINS: List[str] = ["*"]
    CORS_ALLOW_CREDENTIALS: bool = True
    CORS_ALLOW_METHODS: List[str] = ["*"]
    CORS_ALLOW_HEADERS: List[str] = ["*"]

    # 日志配置
    LOG_LEVEL: str = Field(default="info", env="LOG_LEVEL")

    @staticmethod
    def _get_debug() -> bool:
        """获取DEBUG模式，基于POD_ENV环境变量"""
        return os.getenv("POD_ENV", "test").lower() != "online"

    # 根据环境变量设置当前数据库配置
    @property
    def DB_HOST(self) -> str:
        if self.POD_ENV == "online":
            return self.ONLINE_DB_HOST
        else:  # 默认使用开发环境
            return self.DEV_DB_HOST

    @property
    def DB_USER(self) -> str:
        if self.POD_ENV == "online":
            return self.ONLINE_DB_USER
        else:
            return self.DEV_DB_USER

    @property
    def DB_PASSWORD(self) -> str:
        if self.POD_ENV == "online":
            return self.ONLINE_DB_PASSWORD
        else:
            return self.DEV_DB_PASSWORD

    @property
    def REDIS_URL(self) -> str:
        """根据环境返回对应的Redis连接URL"""
        if self.POD_ENV == "online":
            return self.REDIS_ONLINE_URL
        else:  # 默认使用开发环境
            return self.REDIS_DEV_URL

    # API文档配置
    @property
    def DOCS_URL(self) -> str:
        return "/docs" if self.DEBUG else None

    @property
    def REDOC_URL(self) -> str:
        return "/redoc" if self.DEBUG else None

    @property
    def OPENAPI_URL(self) -> str:
        return "/openapi.json" if self.DEBUG else None

    class Config:
        """Pydantic配置"""
        env_file = ".env"  # 支持从.env文件读取配置
        env_file_encoding = "utf-8"
        case_sensitive = True


# 创建设置实例
settings = Settings()
