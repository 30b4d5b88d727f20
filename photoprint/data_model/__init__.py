"""
資料模型模組

提供應用程式的核心資料結構，使用 Pydantic 進行驗證
"""

from .core import (
    SUPPORTED_EXTENSIONS,
    BatchConfig,
    BatchResult,
    EmbedResult,
    ImageMetadata,
    PhysicalSize,
    PixelDimensions,
    PrintRequirement,
    PrintSpec,
    StoredPhoto,
    ValidationReport,
    ValidationRequirements,
    ValidationResult,
    is_supported_image,
)

__all__ = [
    "BatchConfig",
    "BatchResult",
    "EmbedResult",
    "ImageMetadata",
    "PhysicalSize",
    "PixelDimensions",
    "PrintRequirement",
    "PrintSpec",
    "StoredPhoto",
    "SUPPORTED_EXTENSIONS",
    "ValidationReport",
    "ValidationRequirements",
    "ValidationResult",
    "is_supported_image",
]
