"""
錯誤類型定義

- InvalidDPIError: 呼叫端傳入非正數 DPI
- ImageDecodeError: 位元組無法解碼為圖片
- ImageEncodeError: 嵌入 DPI 時重新編碼失敗
- ValidationFailedError: 驗證有硬性錯誤，上傳必須拒絕
"""

from typing import TYPE_CHECKING


if TYPE_CHECKING:
    from photoprint.data_model import ValidationResult


class PhotoPrintError(Exception):
    """基礎錯誤"""


class InvalidDPIError(PhotoPrintError, ValueError):
    """DPI 必須為正數"""


class ImageDecodeError(PhotoPrintError):
    """圖片解碼錯誤"""

    def __init__(self, cause: BaseException | str) -> None:
        self.cause = cause
        super().__init__(str(cause))


class ImageEncodeError(PhotoPrintError):
    """圖片重新編碼錯誤"""


class ValidationFailedError(PhotoPrintError):
    """
    驗證失敗

    Attributes:
        result: 完整驗證結果（含所有錯誤與警告）
    """

    def __init__(self, result: "ValidationResult") -> None:
        self.result = result
        super().__init__("; ".join(result.errors))
