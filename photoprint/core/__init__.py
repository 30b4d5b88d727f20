"""
核心模組 - 定義介面、錯誤類型和上傳流程

處理器與上傳流程請直接從子模組匯入：
    from photoprint.core.upload import PrintUploadPipeline
    from photoprint.core.processor import PrintBatchProcessor
"""

from .errors import (
    ImageDecodeError,
    ImageEncodeError,
    InvalidDPIError,
    PhotoPrintError,
    ValidationFailedError,
)
from .interfaces import DecodedImage, ImageCodecProtocol, StorageProtocol


__all__ = [
    "DecodedImage",
    "ImageCodecProtocol",
    "ImageDecodeError",
    "ImageEncodeError",
    "InvalidDPIError",
    "PhotoPrintError",
    "StorageProtocol",
    "ValidationFailedError",
]
