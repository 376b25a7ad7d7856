"""
清理孤立文件的脚本

删除图片或上传失败后，磁盘上会留下没有任何记录引用的文件。
本脚本扫描UPLOAD_DIR和PROCESSED_DIR，删除不被images/processed_images引用的文件。

用法:
    python scripts/cleanup_orphan_blobs.py --dry-run
    python scripts/cleanup_orphan_blobs.py
"""
# 标准库导包
import argparse
import asyncio
import sys
from pathlib import Path
from typing import List, Set

# 添加项目根目录到Python路径
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

# 项目内部导包
from storage import cleanup_db, async_session_factory
from storage.blob_store import BlobStore, normalize_path
from storage.repositories import ImageRepository, ProcessedImageRepository


async def collect_referenced_paths(session) -> Set[str]:
    """收集数据库中引用的全部文件路径"""
    image_paths = await ImageRepository(session).list_storage_paths()
    processed_paths = await ProcessedImageRepository(session).list_storage_paths()
    return {normalize_path(p) for p in image_paths + processed_paths}


async def find_orphan_blobs(session, blob_store: BlobStore) -> List[str]:
    """找出没有记录引用的文件"""
    referenced = await collect_referenced_paths(session)
    return [
        path for path in blob_store.list_files()
        if normalize_path(path) not in referenced
    ]


async def cleanup_orphan_blobs(session, blob_store: BlobStore, dry_run: bool = False) -> List[str]:
    """
    清理孤立文件

    Args:
        session: 数据库会话
        blob_store: Blob存储
        dry_run: 只列出不删除

    Returns:
        孤立文件路径列表
    """
    orphans = await find_orphan_blobs(session, blob_store)
    if not dry_run:
        for path in orphans:
            await blob_store.delete(path)
    return orphans


async def main(dry_run: bool):
    """主函数"""
    print("开始扫描孤立文件...")

    try:
        async with async_session_factory() as session:
            orphans = await cleanup_orphan_blobs(session, BlobStore(), dry_run=dry_run)

        action = "发现" if dry_run else "已删除"
        print(f"✓ {action}孤立文件 {len(orphans)} 个")
        for path in orphans:
            print(f"  - {path}")

    except Exception as e:
        print(f"✗ 清理失败: {str(e)}")
        import traceback
        traceback.print_exc()
        return 1

    finally:
        await cleanup_db()

    return 0


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="清理没有记录引用的图片文件")
    parser.add_argument("--dry-run", action="store_true", help="只列出孤立文件，不删除")
    args = parser.parse_args()

    exit_code = asyncio.run(main(args.dry_run))
    sys.exit(exit_code)
