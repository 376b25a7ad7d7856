"""
测试公共夹具
使用临时sqlite数据库和临时目录作为Blob存储
"""
# 标准库导包
import os
import tempfile

# 测试环境配置，必须在导入项目模块之前设置
_TEST_ROOT = tempfile.mkdtemp(prefix="image_catalog_test_")
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{os.path.join(_TEST_ROOT, 'test.db')}"
os.environ["UPLOAD_DIR"] = os.path.join(_TEST_ROOT, "uploads")
os.environ["PROCESSED_DIR"] = os.path.join(_TEST_ROOT, "processed")
os.environ["PROCESSING_NOTIFY_ENABLED"] = "false"

# 第三方库导包
import httpx
import pytest

# 项目内部导包
from integrations.processing_backend import ProcessingBackendClient, ProcessingBackendConfig
from storage import models  # noqa: F401
from storage.blob_store import BlobStore
from storage.database import Base, engine, async_session_factory
from storage.repositories import ImageRepository, ProcessedImageRepository


# 1x1 PNG
PNG_BASE64 = "iVBORw0KGgoAAAANSUhEUgAAAAEAAAABCAYAAAAfFcSJAAAADUlEQVR42mNkYPhfDwAChAI9lq5oYwAAAABJRU5ErkJggg=="


class RecordingBackend(ProcessingBackendClient):
    """记录通知内容的处理服务客户端，不连接Redis"""

    def __init__(self):
        super().__init__(ProcessingBackendConfig(queue_key="test:processing_jobs", enabled=True))
        self.jobs = []

    async def notify(self, processed_image, image) -> bool:
        self.jobs.append(self.build_job(processed_image, image))
        return True


@pytest.fixture
async def db():
    """每个测试重建全部数据表"""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)
    yield
    await engine.dispose()


@pytest.fixture
async def session(db):
    async with async_session_factory() as s:
        yield s


@pytest.fixture
def blob_store(tmp_path):
    return BlobStore(str(tmp_path / "uploads"), str(tmp_path / "processed"))


@pytest.fixture
def backend():
    return RecordingBackend()


@pytest.fixture
def make_image(session):
    """直接创建图片记录的工厂"""
    repo = ImageRepository(session)
    counter = {"n": 0}

    async def _make(**overrides):
        counter["n"] += 1
        fields = {
            "filename": f"image_{counter['n']}.png",
            "original_path": f"/nonexistent/image_{counter['n']}.png",
            "file_size": 100,
            "mime_type": "image/png",
        }
        fields.update(overrides)
        return await repo.create(**fields)

    return _make


@pytest.fixture
def make_processed(session):
    """直接创建处理记录的工厂"""
    repo = ProcessedImageRepository(session)

    async def _make(image_id, processing_type="background_removal", **overrides):
        fields = {
            "original_image_id": image_id,
            "processing_type": processing_type,
            "processed_path": "",
        }
        fields.update(overrides)
        return await repo.create(**fields)

    return _make


@pytest.fixture
async def client(db, blob_store, backend):
    """注入临时Blob存储和记录型处理服务客户端的HTTP客户端"""
    from main import app
    from utils.dependencies import get_blob_store, get_processing_backend

    app.dependency_overrides[get_blob_store] = lambda: blob_store
    app.dependency_overrides[get_processing_backend] = lambda: backend

    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as c:
        yield c

    app.dependency_overrides.clear()
