"""
测试处理状态回调
"""
# 第三方库导包
import pytest

# 项目内部导包
from models import UpdateProcessingStatusRequest
from routers.services.processing_service import ProcessingService
from storage.models import ProcessingStatus
from utils.exceptions import NotFoundError


@pytest.fixture
def service(session, backend):
    return ProcessingService(session, backend)


@pytest.fixture
async def pending(make_image, make_processed):
    image = await make_image()
    return await make_processed(image.id)


async def test_completed_sets_processed_at_and_keeps_dimensions(service, pending):
    """completed写入processed_at，未传的宽高保持原值"""
    await service.update_processing_status(UpdateProcessingStatusRequest(
        processed_image_id=pending.id,
        status=ProcessingStatus.PROCESSING,
        width=640,
        height=480
    ))

    updated = await service.update_processing_status(UpdateProcessingStatusRequest(
        processed_image_id=pending.id,
        status=ProcessingStatus.COMPLETED,
        file_size=512
    ))

    assert updated.processing_status == ProcessingStatus.COMPLETED
    assert updated.processed_at is not None
    assert updated.file_size == 512
    assert updated.width == 640
    assert updated.height == 480


async def test_failed_sets_error_and_leaves_processed_at_null(service, pending):
    updated = await service.update_processing_status(UpdateProcessingStatusRequest(
        processed_image_id=pending.id,
        status=ProcessingStatus.FAILED,
        error_message="X"
    ))

    assert updated.processing_status == ProcessingStatus.FAILED
    assert updated.error_message == "X"
    assert updated.processed_at is None


async def test_status_only_update_preserves_fields(service, pending):
    """只传状态时其他字段不变"""
    await service.update_processing_status(UpdateProcessingStatusRequest(
        processed_image_id=pending.id,
        status=ProcessingStatus.COMPLETED,
        processed_path="/processed/a.png",
        file_size=10,
        width=1,
        height=2
    ))

    updated = await service.update_processing_status(UpdateProcessingStatusRequest(
        processed_image_id=pending.id,
        status=ProcessingStatus.PROCESSING
    ))

    assert updated.processing_status == ProcessingStatus.PROCESSING
    assert updated.processed_path == "/processed/a.png"
    assert updated.file_size == 10
    assert updated.width == 1
    assert updated.height == 2


async def test_processed_at_not_cleared_when_leaving_completed(service, pending):
    completed = await service.update_processing_status(UpdateProcessingStatusRequest(
        processed_image_id=pending.id,
        status=ProcessingStatus.COMPLETED
    ))
    stamped_at = completed.processed_at

    updated = await service.update_processing_status(UpdateProcessingStatusRequest(
        processed_image_id=pending.id,
        status=ProcessingStatus.FAILED,
        error_message="re-run failed"
    ))

    assert updated.processed_at == stamped_at


async def test_updated_at_is_bumped(service, pending):
    before = pending.updated_at

    updated = await service.update_processing_status(UpdateProcessingStatusRequest(
        processed_image_id=pending.id,
        status=ProcessingStatus.PROCESSING
    ))

    assert updated.updated_at >= before


async def test_explicit_null_error_message_clears(service, pending):
    """error_message显式传null清空，省略则保留"""
    await service.update_processing_status(UpdateProcessingStatusRequest(
        processed_image_id=pending.id,
        status=ProcessingStatus.FAILED,
        error_message="boom"
    ))

    kept = await service.update_processing_status(UpdateProcessingStatusRequest(
        processed_image_id=pending.id,
        status=ProcessingStatus.PENDING
    ))
    assert kept.error_message == "boom"

    cleared = await service.update_processing_status(UpdateProcessingStatusRequest.model_validate({
        "processed_image_id": pending.id,
        "status": "processing",
        "error_message": None
    }))
    assert cleared.error_message is None


async def test_missing_record_is_not_found(service, db):
    with pytest.raises(NotFoundError):
        await service.update_processing_status(UpdateProcessingStatusRequest(
            processed_image_id=9999,
            status=ProcessingStatus.COMPLETED
        ))


def test_invalid_status_is_rejected_by_model():
    from pydantic import ValidationError as PydanticValidationError

    with pytest.raises(PydanticValidationError):
        UpdateProcessingStatusRequest(processed_image_id=1, status="done")


@pytest.mark.parametrize("field", ["processed_path", "file_size", "width", "height"])
def test_explicit_null_result_field_is_rejected(field):
    """结果字段显式传null不被接受，只有error_message可以清空"""
    from pydantic import ValidationError as PydanticValidationError

    with pytest.raises(PydanticValidationError):
        UpdateProcessingStatusRequest.model_validate({
            "processed_image_id": 1,
            "status": "completed",
            field: None
        })


def test_omitted_result_fields_are_accepted():
    request = UpdateProcessingStatusRequest(processed_image_id=1, status=ProcessingStatus.COMPLETED)

    assert request.model_fields_set == {"processed_image_id", "status"}
