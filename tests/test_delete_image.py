"""
测试图片删除
"""
# 标准库导包
import base64
import os

# 第三方库导包
import pytest
from sqlalchemy import select, func

# 项目内部导包
from routers.services.image_service import ImageService
from storage.models import ProcessedImage
from storage.repositories import ImageRepository
from utils.exceptions import NotFoundError


@pytest.fixture
def service(session, blob_store):
    return ImageService(session, blob_store)


async def _count_processed(session, image_id):
    result = await session.execute(
        select(func.count(ProcessedImage.id)).where(ProcessedImage.original_image_id == image_id)
    )
    return result.scalar_one()


async def test_delete_removes_image_and_processed(service, session, make_image, make_processed):
    image = await make_image()
    for processing_type in ("background_removal", "resize", "enhance"):
        await make_processed(image.id, processing_type)
    other = await make_image()
    await make_processed(other.id)

    assert await service.delete_image(image.id) is True

    assert await ImageRepository(session).get_by_id(image.id) is None
    assert await _count_processed(session, image.id) == 0
    assert await _count_processed(session, other.id) == 1


async def test_delete_image_without_processed(service, session, make_image):
    image = await make_image()

    assert await service.delete_image(image.id) is True
    assert await ImageRepository(session).get_by_id(image.id) is None


async def test_delete_twice_raises_not_found(service, make_image):
    image = await make_image()
    await service.delete_image(image.id)

    with pytest.raises(NotFoundError):
        await service.delete_image(image.id)


async def test_delete_missing_image(service, db):
    with pytest.raises(NotFoundError):
        await service.delete_image(9999)


async def test_delete_keeps_files_on_disk(service):
    image = await service.upload_image(
        filename="keep.png",
        file_data=base64.b64encode(b"keep me").decode(),
        mime_type="image/png"
    )

    await service.delete_image(image.id)

    assert os.path.exists(image.original_path)
