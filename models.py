"""
数据模型定义
"""
# 标准库导包
from typing import Optional, List
from datetime import datetime

# 第三方库导包
from pydantic import BaseModel, Field, field_validator, model_validator

# 项目内部导包
from storage.models.processed_image import ProcessingStatus


# ========== 请求模型 ==========

class UploadImageRequest(BaseModel):
    """上传图片请求模型"""
    filename: str = Field(..., min_length=1, max_length=255, description="展示用文件名")
    file_data: str = Field(..., description="Base64编码的文件内容")
    mime_type: str = Field(..., min_length=1, description="MIME类型，如image/png")
    width: Optional[int] = Field(default=None, description="图片宽度，未知时为空")
    height: Optional[int] = Field(default=None, description="图片高度，未知时为空")


class ProcessImageRequest(BaseModel):
    """发起图片处理请求模型"""
    image_id: int
    processing_type: str = Field(default="background_removal", min_length=1, description="处理类型")


class UpdateProcessingStatusRequest(BaseModel):
    """处理状态回调请求模型

    未传的字段保持原值；error_message 显式传 null 表示清空，其余结果字段不接受 null
    """
    processed_image_id: int
    status: ProcessingStatus
    processed_path: Optional[str] = None
    file_size: Optional[int] = Field(default=None, ge=0)
    width: Optional[int] = None
    height: Optional[int] = None
    error_message: Optional[str] = None

    @field_validator("processed_path", "file_size", "width", "height")
    @classmethod
    def reject_null(cls, value, info):
        """结果字段可以省略，但不能显式传null"""
        if value is None:
            raise ValueError(f"{info.field_name} cannot be null")
        return value


class GetImagesRequest(BaseModel):
    """图片列表查询参数模型"""
    include_processed: bool = True
    processing_status: Optional[ProcessingStatus] = None
    limit: int = Field(default=50, ge=1, le=100)
    offset: int = Field(default=0, ge=0)


class DownloadImageRequest(BaseModel):
    """下载请求模型，image_id 与 processed_image_id 至少提供一个"""
    image_id: Optional[int] = None
    processed_image_id: Optional[int] = None

    @model_validator(mode="after")
    def check_identifier(self):
        if self.image_id is None and self.processed_image_id is None:
            raise ValueError("Either image_id or processed_image_id must be provided")
        return self


# ========== 响应模型 ==========

class ProcessedImageResponse(BaseModel):
    """处理结果响应模型"""
    id: int
    original_image_id: int
    processed_path: str
    processing_status: ProcessingStatus
    processing_type: str
    file_size: Optional[int] = None
    width: Optional[int] = None
    height: Optional[int] = None
    error_message: Optional[str] = None
    processed_at: Optional[datetime] = None
    created_at: datetime
    updated_at: datetime


class ImageResponse(BaseModel):
    """原始图片响应模型"""
    id: int
    filename: str
    original_path: str
    file_size: int
    mime_type: str
    width: Optional[int] = None
    height: Optional[int] = None
    uploaded_at: datetime
    updated_at: datetime


class ImageWithProcessedResponse(ImageResponse):
    """原始图片及其处理结果响应模型"""
    processed_images: List[ProcessedImageResponse] = Field(default_factory=list)


class DownloadImageData(BaseModel):
    """下载内容"""
    filename: str
    file_data: str = Field(..., description="Base64编码的文件内容")
    mime_type: str
    file_size: int


class UploadImageResponse(BaseModel):
    """上传图片响应模型"""
    success: bool = True
    message: str = "上传成功"
    data: ImageResponse


class ImageListResponse(BaseModel):
    """图片列表响应模型"""
    success: bool = True
    message: str = "获取成功"
    data: List[ImageWithProcessedResponse]
    total: int


class ImageDetailResponse(BaseModel):
    """图片详情响应模型，图片不存在时data为null"""
    success: bool = True
    message: str = "获取成功"
    data: Optional[ImageWithProcessedResponse] = None


class GalleryResponse(BaseModel):
    """画廊响应模型"""
    success: bool = True
    message: str = "获取成功"
    data: List[ImageWithProcessedResponse]
    total: int


class ProcessedImageDetailResponse(BaseModel):
    """处理记录响应模型"""
    success: bool = True
    message: str = "操作成功"
    data: ProcessedImageResponse


class DownloadImageResponse(BaseModel):
    """下载响应模型"""
    success: bool = True
    message: str = "获取成功"
    data: DownloadImageData


class DeleteImageResponse(BaseModel):
    """删除响应模型"""
    success: bool
