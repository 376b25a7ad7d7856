"""
图片处理路由
提供发起处理和处理状态回调接口
"""
# 标准库导包
import logging

# 第三方库导包
from fastapi import APIRouter, HTTPException, Depends
from sqlalchemy.ext.asyncio import AsyncSession

# 项目内部导包
from models import (
    ProcessImageRequest,
    UpdateProcessingStatusRequest,
    ProcessedImageDetailResponse
)
from integrations.processing_backend import ProcessingBackendClient
from storage.database import get_session
from routers.services.processing_service import ProcessingService
from routers.utils import processed_image_to_response
from utils.dependencies import get_processing_backend
from utils.exceptions import ImageCatalogError

# 配置日志
logger = logging.getLogger(__name__)

# 创建路由器
router = APIRouter(
    prefix="/processing",
    tags=["图片处理"]
)


@router.post("", response_model=ProcessedImageDetailResponse, summary="发起图片处理")
async def process_image(
    request: ProcessImageRequest,
    session: AsyncSession = Depends(get_session),
    backend: ProcessingBackendClient = Depends(get_processing_backend)
):
    """
    发起图片处理

    创建pending状态的处理记录后立即返回，处理结果由外部服务通过状态回调写回
    """
    try:
        processing_service = ProcessingService(session, backend)
        processed_image = await processing_service.process_image(
            image_id=request.image_id,
            processing_type=request.processing_type
        )

        return ProcessedImageDetailResponse(
            success=True,
            message="已提交处理",
            data=processed_image_to_response(processed_image)
        )

    except ImageCatalogError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
    except Exception as e:
        logger.error(f"发起图片处理失败: {str(e)}")
        raise HTTPException(status_code=500, detail=f"发起图片处理失败: {str(e)}")


@router.post("/status", response_model=ProcessedImageDetailResponse, summary="处理状态回调")
async def update_processing_status(
    request: UpdateProcessingStatusRequest,
    session: AsyncSession = Depends(get_session)
):
    """
    更新处理状态

    由外部处理服务调用；只覆盖请求中出现的字段，error_message传null表示清空
    """
    try:
        processing_service = ProcessingService(session)
        processed_image = await processing_service.update_processing_status(request)

        return ProcessedImageDetailResponse(
            success=True,
            message="更新成功",
            data=processed_image_to_response(processed_image)
        )

    except ImageCatalogError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
    except Exception as e:
        logger.error(f"更新处理状态失败: {str(e)}")
        raise HTTPException(status_code=500, detail=f"更新处理状态失败: {str(e)}")
