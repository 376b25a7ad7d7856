"""
图片路由
提供图片的上传、列表、画廊、详情、下载和删除等API接口
"""
# 标准库导包
import logging
from typing import Optional

# 第三方库导包
from fastapi import APIRouter, HTTPException, Depends, Query
from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.ext.asyncio import AsyncSession

# 项目内部导包
from config import settings
from models import (
    UploadImageRequest,
    UploadImageResponse,
    GetImagesRequest,
    ImageListResponse,
    ImageDetailResponse,
    GalleryResponse,
    DownloadImageRequest,
    DownloadImageResponse,
    DeleteImageResponse
)
from storage.blob_store import BlobStore
from storage.database import get_session
from storage.models.processed_image import ProcessingStatus
from routers.services.image_service import ImageService
from routers.services.download_service import DownloadService
from routers.utils import image_to_response, image_with_processed_to_response
from utils.dependencies import get_blob_store
from utils.exceptions import ImageCatalogError

# 配置日志
logger = logging.getLogger(__name__)

# 创建路由器
router = APIRouter(
    prefix="/images",
    tags=["图片管理"]
)


def get_download_params(
    image_id: Optional[int] = Query(None, description="原图ID"),
    processed_image_id: Optional[int] = Query(None, description="处理记录ID")
) -> DownloadImageRequest:
    """解析下载参数，两个ID都未提供时返回422"""
    try:
        return DownloadImageRequest(image_id=image_id, processed_image_id=processed_image_id)
    except PydanticValidationError as e:
        raise HTTPException(status_code=422, detail=e.errors()[0]["msg"])


@router.post("", response_model=UploadImageResponse, summary="上传图片")
async def upload_image(
    request: UploadImageRequest,
    session: AsyncSession = Depends(get_session),
    blob_store: BlobStore = Depends(get_blob_store)
):
    """
    上传图片

    file_data为Base64编码内容，文件大小以解码后的长度为准
    """
    try:
        image_service = ImageService(session, blob_store)
        image = await image_service.upload_image(
            filename=request.filename,
            file_data=request.file_data,
            mime_type=request.mime_type,
            width=request.width,
            height=request.height
        )

        return UploadImageResponse(
            success=True,
            message="上传成功",
            data=image_to_response(image)
        )

    except ImageCatalogError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
    except Exception as e:
        logger.error(f"上传图片失败: {str(e)}")
        raise HTTPException(status_code=500, detail=f"上传图片失败: {str(e)}")


@router.get("", response_model=ImageListResponse, summary="获取图片列表")
async def get_images(
    include_processed: bool = Query(True, description="是否包含处理结果"),
    processing_status: Optional[ProcessingStatus] = Query(None, description="按处理状态过滤"),
    limit: int = Query(settings.DEFAULT_PAGE_SIZE, ge=1, le=settings.MAX_PAGE_SIZE, description="每页数量"),
    offset: int = Query(0, ge=0, description="偏移量"),
    session: AsyncSession = Depends(get_session)
):
    """
    分页获取图片列表

    按状态过滤时，只要图片有一个处理结果满足状态即入选，附带的处理结果不做过滤
    """
    try:
        params = GetImagesRequest(
            include_processed=include_processed,
            processing_status=processing_status,
            limit=limit,
            offset=offset
        )

        image_service = ImageService(session)
        images, total = await image_service.list_images(params)

        return ImageListResponse(
            success=True,
            message="获取成功",
            data=[image_with_processed_to_response(image, include_processed) for image in images],
            total=total
        )

    except Exception as e:
        logger.error(f"获取图片列表失败: {str(e)}")
        raise HTTPException(status_code=500, detail=f"获取图片列表失败: {str(e)}")


@router.get("/gallery", response_model=GalleryResponse, summary="获取画廊")
async def get_gallery(session: AsyncSession = Depends(get_session)):
    """获取至少有一个处理完成结果的图片，按上传时间倒序"""
    try:
        image_service = ImageService(session)
        images = await image_service.get_gallery()

        return GalleryResponse(
            success=True,
            message="获取成功",
            data=[image_with_processed_to_response(image) for image in images],
            total=len(images)
        )

    except Exception as e:
        logger.error(f"获取画廊失败: {str(e)}")
        raise HTTPException(status_code=500, detail=f"获取画廊失败: {str(e)}")


@router.get("/download", response_model=DownloadImageResponse, summary="下载图片")
async def download_image(
    params: DownloadImageRequest = Depends(get_download_params),
    session: AsyncSession = Depends(get_session),
    blob_store: BlobStore = Depends(get_blob_store)
):
    """
    下载原图或处理结果

    文件内容以Base64编码返回
    """
    try:
        download_service = DownloadService(session, blob_store)
        data = await download_service.download_image(
            image_id=params.image_id,
            processed_image_id=params.processed_image_id
        )

        return DownloadImageResponse(
            success=True,
            message="获取成功",
            data=data
        )

    except ImageCatalogError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
    except Exception as e:
        logger.error(f"下载图片失败: {str(e)}")
        raise HTTPException(status_code=500, detail=f"下载图片失败: {str(e)}")


@router.get("/{image_id}", response_model=ImageDetailResponse, summary="获取图片详情")
async def get_image(
    image_id: int,
    session: AsyncSession = Depends(get_session)
):
    """
    获取图片详情及全部处理结果

    图片不存在时返回data为null，不视为错误
    """
    try:
        image_service = ImageService(session)
        image = await image_service.get_image_by_id(image_id)

        if not image:
            return ImageDetailResponse(success=True, message="图片不存在", data=None)

        return ImageDetailResponse(
            success=True,
            message="获取成功",
            data=image_with_processed_to_response(image)
        )

    except Exception as e:
        logger.error(f"获取图片详情失败: {str(e)}")
        raise HTTPException(status_code=500, detail=f"获取图片详情失败: {str(e)}")


@router.delete("/{image_id}", response_model=DeleteImageResponse, summary="删除图片")
async def delete_image(
    image_id: int,
    session: AsyncSession = Depends(get_session)
):
    """删除图片及其全部处理记录，磁盘文件不删除"""
    try:
        image_service = ImageService(session)
        success = await image_service.delete_image(image_id)
        return DeleteImageResponse(success=success)

    except ImageCatalogError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
    except Exception as e:
        logger.error(f"删除图片失败: {str(e)}")
        raise HTTPException(status_code=500, detail=f"删除图片失败: {str(e)}")
