"""
业务异常定义
服务层在发现问题的位置记录日志并抛出，由路由层映射为HTTP响应
"""


class ImageCatalogError(Exception):
    """图片目录服务异常基类"""

    status_code: int = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFoundError(ImageCatalogError):
    """引用的图片或处理结果不存在"""

    status_code = 404


class ValidationError(ImageCatalogError):
    """输入格式错误或互相矛盾"""

    status_code = 400


class IntegrityViolationError(ImageCatalogError):
    """处理结果引用的原图缺失，数据引用关系已损坏"""

    status_code = 409


class StorageIOError(ImageCatalogError):
    """Blob读写失败，包括磁盘上文件缺失"""

    status_code = 500
