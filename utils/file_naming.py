"""
文件命名工具
负责存储文件名生成和下载文件名拼接
"""
# 标准库导包
import os
import uuid

# MIME类型到扩展名的映射
MIME_EXTENSIONS = {
    "image/jpeg": ".jpg",
    "image/png": ".png",
    "image/gif": ".gif",
    "image/webp": ".webp",
    "image/bmp": ".bmp",
    "image/tiff": ".tiff",
}

DEFAULT_EXTENSION = ".bin"

# 扩展名（不含点）最大长度，超出时按MIME类型查表
MAX_EXTENSION_LENGTH = 10


def _is_usable_extension(ext: str) -> bool:
    """扩展名只允许字母数字且长度有限，避免存储文件名过长或含特殊字符"""
    suffix = ext[1:]
    return 0 < len(suffix) <= MAX_EXTENSION_LENGTH and suffix.isascii() and suffix.isalnum()


def extension_for(filename: str, mime_type: str) -> str:
    """
    确定存储文件扩展名

    优先使用展示文件名中的扩展名，没有或不可用（过长、含特殊字符）时按MIME类型查表

    Args:
        filename: 展示文件名
        mime_type: MIME类型

    Returns:
        带点的扩展名，如 .png
    """
    _, ext = os.path.splitext(filename)
    if _is_usable_extension(ext):
        return ext
    return MIME_EXTENSIONS.get((mime_type or "").lower(), DEFAULT_EXTENSION)


def generate_storage_filename(filename: str, mime_type: str) -> str:
    """生成与展示文件名无关的唯一存储文件名"""
    return f"{uuid.uuid4().hex}{extension_for(filename, mime_type)}"


def build_processed_filename(original_filename: str, processing_type: str) -> str:
    """
    拼接处理结果的下载文件名

    photo.jpg + resize -> photo_resize.jpg，noext + enhance -> noext_enhance。
    首字符为点的文件名（如 .hidden）视为没有扩展名。
    """
    dot_index = original_filename.rfind(".")
    if dot_index > 0:
        base_name = original_filename[:dot_index]
        extension = original_filename[dot_index:]
    else:
        base_name = original_filename
        extension = ""
    return f"{base_name}_{processing_type}{extension}"
