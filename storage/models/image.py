"""
Image模型 - 原始图片表
"""
# 标准库导包
from datetime import datetime
from typing import Optional

# 第三方库导包
from sqlalchemy import String, Text, Integer, DateTime, BigInteger, Index
from sqlalchemy.orm import Mapped, mapped_column, relationship

# 项目内部导包
from storage.database import Base


class Image(Base):
    """原始图片表"""

    __tablename__ = "images"

    # 核心字段
    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    filename: Mapped[str] = mapped_column(String(255), nullable=False, comment="展示用文件名，不保证唯一")
    original_path: Mapped[str] = mapped_column(Text, nullable=False, comment="Blob存储路径")
    file_size: Mapped[int] = mapped_column(BigInteger, nullable=False, comment="文件大小，字节")
    mime_type: Mapped[str] = mapped_column(String(100), nullable=False, comment="MIME类型，如image/png")
    uploaded_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=datetime.utcnow)
    updated_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow)

    # 扩展字段
    width: Mapped[Optional[int]] = mapped_column(Integer, nullable=True, comment="图片宽度，未知时为空")
    height: Mapped[Optional[int]] = mapped_column(Integer, nullable=True, comment="图片高度，未知时为空")

    # 关系定义
    processed_images: Mapped[list["ProcessedImage"]] = relationship(
        "ProcessedImage",
        back_populates="original_image",
        order_by="ProcessedImage.id",
        passive_deletes=True
    )

    __table_args__ = (
        Index("idx_images_uploaded_at", "uploaded_at"),
    )

    def __repr__(self):
        return f"<Image(id={self.id}, filename={self.filename}, mime_type={self.mime_type})>"
