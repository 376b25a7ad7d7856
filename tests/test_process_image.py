"""
测试发起图片处理
"""
# 第三方库导包
import pytest
from sqlalchemy import select

# 项目内部导包
from routers.services.processing_service import ProcessingService
from storage.models import ProcessedImage, ProcessingStatus
from utils.exceptions import NotFoundError


async def test_process_creates_pending_record(session, backend, make_image):
    """新建的处理记录为pending，结果字段全部为空"""
    image = await make_image()
    service = ProcessingService(session, backend)

    processed = await service.process_image(image.id, "background_removal")

    assert processed.id is not None
    assert processed.original_image_id == image.id
    assert processed.processing_status == ProcessingStatus.PENDING
    assert processed.processing_type == "background_removal"
    assert processed.processed_path == ""
    assert processed.file_size is None
    assert processed.width is None
    assert processed.height is None
    assert processed.error_message is None
    assert processed.processed_at is None
    assert processed.created_at is not None
    assert processed.updated_at is not None


async def test_process_uses_default_type(session, backend, make_image):
    image = await make_image()

    processed = await ProcessingService(session, backend).process_image(image.id)

    assert processed.processing_type == "background_removal"


async def test_process_notifies_backend(session, backend, make_image):
    """通知内容包含处理记录和原图信息"""
    image = await make_image(original_path="/data/original.png")

    processed = await ProcessingService(session, backend).process_image(image.id, "resize")

    assert len(backend.jobs) == 1
    job = backend.jobs[0]
    assert job["processed_image_id"] == processed.id
    assert job["image_id"] == image.id
    assert job["processing_type"] == "resize"
    assert job["original_path"] == "/data/original.png"
    assert job["mime_type"] == "image/png"


async def test_process_missing_image_is_not_found(session, backend):
    with pytest.raises(NotFoundError):
        await ProcessingService(session, backend).process_image(9999)

    assert backend.jobs == []


async def test_multiple_runs_create_independent_records(session, backend, make_image):
    """同一图片、相同或不同类型都可以重复发起"""
    image = await make_image()
    service = ProcessingService(session, backend)

    first = await service.process_image(image.id, "background_removal")
    second = await service.process_image(image.id, "background_removal")
    third = await service.process_image(image.id, "resize")

    assert len({first.id, second.id, third.id}) == 3
    result = await session.execute(
        select(ProcessedImage)
        .where(ProcessedImage.original_image_id == image.id)
        .order_by(ProcessedImage.id)
    )
    records = list(result.scalars().all())
    assert [r.processing_type for r in records] == ["background_removal", "background_removal", "resize"]
