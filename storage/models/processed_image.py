"""
ProcessedImage模型 - 处理结果表
"""
# 标准库导包
import enum
from datetime import datetime
from typing import Optional

# 第三方库导包
from sqlalchemy import String, Text, Integer, DateTime, ForeignKey, BigInteger, Enum
from sqlalchemy.orm import Mapped, mapped_column, relationship

# 项目内部导包
from storage.database import Base


class ProcessingStatus(str, enum.Enum):
    """处理状态"""
    PENDING = "pending"
    PROCESSING = "processing"
    COMPLETED = "completed"
    FAILED = "failed"


class ProcessedImage(Base):
    """处理结果表，一行对应一次处理尝试"""

    __tablename__ = "processed_images"

    # 核心字段
    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    original_image_id: Mapped[int] = mapped_column(Integer, ForeignKey("images.id", ondelete="CASCADE"), nullable=False, index=True)
    processed_path: Mapped[str] = mapped_column(Text, nullable=False, default="", comment="处理结果路径，结果产生前为空字符串")
    processing_status: Mapped[ProcessingStatus] = mapped_column(
        Enum(
            ProcessingStatus,
            name="image_processing_status",
            values_callable=lambda e: [member.value for member in e]
        ),
        nullable=False,
        default=ProcessingStatus.PENDING,
        comment="状态：pending/processing/completed/failed"
    )
    processing_type: Mapped[str] = mapped_column(String(100), nullable=False, comment="处理类型，如background_removal")
    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=datetime.utcnow)
    updated_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow)

    # 结果字段，仅在处理完成后填充
    file_size: Mapped[Optional[int]] = mapped_column(BigInteger, nullable=True, comment="结果文件大小，字节")
    width: Mapped[Optional[int]] = mapped_column(Integer, nullable=True, comment="结果图片宽度")
    height: Mapped[Optional[int]] = mapped_column(Integer, nullable=True, comment="结果图片高度")
    error_message: Mapped[Optional[str]] = mapped_column(Text, nullable=True, comment="失败原因")
    processed_at: Mapped[Optional[datetime]] = mapped_column(DateTime, nullable=True, comment="完成时间")

    # 关系定义
    original_image: Mapped["Image"] = relationship("Image", back_populates="processed_images")

    def __repr__(self):
        return (
            f"<ProcessedImage(id={self.id}, original_image_id={self.original_image_id}, "
            f"processing_type={self.processing_type}, processing_status={self.processing_status})>"
        )
