"""
测试孤立文件清理
"""
# 标准库导包
import base64
import os

# 项目内部导包
from routers.services.image_service import ImageService
from scripts.cleanup_orphan_blobs import cleanup_orphan_blobs, find_orphan_blobs


async def _upload(session, blob_store, name):
    return await ImageService(session, blob_store).upload_image(
        filename=name,
        file_data=base64.b64encode(name.encode()).decode(),
        mime_type="image/png"
    )


async def test_find_orphans_after_delete(session, blob_store):
    kept = await _upload(session, blob_store, "kept.png")
    removed = await _upload(session, blob_store, "removed.png")
    await ImageService(session, blob_store).delete_image(removed.id)

    orphans = await find_orphan_blobs(session, blob_store)

    assert orphans == [removed.original_path]
    assert kept.original_path not in orphans


async def test_referenced_processed_file_is_kept(session, blob_store, make_processed):
    image = await _upload(session, blob_store, "a.png")
    blob_store.processed_dir.mkdir(parents=True, exist_ok=True)
    result_path = blob_store.processed_dir / "a_result.png"
    result_path.write_bytes(b"result")
    stray_path = blob_store.processed_dir / "stray.png"
    stray_path.write_bytes(b"stray")
    await make_processed(image.id, processed_path=str(result_path))

    orphans = await find_orphan_blobs(session, blob_store)

    assert orphans == [str(stray_path)]


async def test_dry_run_keeps_files(session, blob_store):
    image = await _upload(session, blob_store, "gone.png")
    await ImageService(session, blob_store).delete_image(image.id)

    orphans = await cleanup_orphan_blobs(session, blob_store, dry_run=True)

    assert orphans == [image.original_path]
    assert os.path.exists(image.original_path)


async def test_cleanup_deletes_orphans(session, blob_store):
    kept = await _upload(session, blob_store, "kept.png")
    gone = await _upload(session, blob_store, "gone.png")
    await ImageService(session, blob_store).delete_image(gone.id)

    orphans = await cleanup_orphan_blobs(session, blob_store)

    assert orphans == [gone.original_path]
    assert not os.path.exists(gone.original_path)
    assert os.path.exists(kept.original_path)
