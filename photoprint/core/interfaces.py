"""
介面定義

圖片編解碼與物件儲存都透過窄介面注入，
驗證器與 DPI 嵌入器可以用假的 codec 測試，不需要真實圖片
"""

from dataclasses import dataclass
from typing import Protocol, runtime_checkable

from photoprint.common.formats import OutputFormat


@dataclass(frozen=True, slots=True)
class DecodedImage:
    """
    解碼後的圖片標頭資訊

    Attributes:
        width: 寬度（像素）
        height: 高度（像素）
        format: 小寫格式名稱 (jpeg, png, webp...)
        size_bytes: 原始位元組大小
        dpi: 密度標籤（無則為 None）
    """

    width: int
    height: int
    format: str
    size_bytes: int
    dpi: float | None = None


@runtime_checkable
class ImageCodecProtocol(Protocol):
    """圖片編解碼介面"""

    name: str

    def decode(self, data: bytes) -> DecodedImage:
        """
        讀取圖片標頭

        Raises:
            ImageDecodeError: 無法解碼時
        """
        ...

    def reencode(self, data: bytes, *, dpi: float, output_format: OutputFormat) -> bytes:
        """
        移除衝突的中繼資料並以指定 DPI 重新編碼

        Raises:
            ImageEncodeError: 編碼失敗時
        """
        ...


@runtime_checkable
class StorageProtocol(Protocol):
    """物件儲存介面"""

    def upload(self, key: str, data: bytes, content_type: str) -> str:
        """上傳並回傳存取 URL"""
        ...
