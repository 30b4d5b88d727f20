"""
圖片中繼資料擷取

讀取寬高、格式、大小與內嵌 DPI，有 DPI 時一併換算實體尺寸
"""

import logging

from photoprint.common.units import px_to_cm
from photoprint.core.interfaces import ImageCodecProtocol
from photoprint.data_model import ImageMetadata


logger = logging.getLogger(__name__)


class MetadataExtractor:
    """
    中繼資料擷取器

    依賴抽象的 ImageCodecProtocol，測試時可注入假的 codec
    """

    def __init__(self, codec: ImageCodecProtocol) -> None:
        self._codec = codec

    def extract(self, data: bytes) -> ImageMetadata:
        """
        擷取中繼資料

        Args:
            data: 圖片原始位元組

        Returns:
            圖片中繼資料

        Raises:
            ImageDecodeError: 無法解碼時
        """
        decoded = self._codec.decode(data)

        physical_width: float | None = None
        physical_height: float | None = None
        if decoded.dpi and decoded.width and decoded.height:
            physical_width = px_to_cm(decoded.width, decoded.dpi)
            physical_height = px_to_cm(decoded.height, decoded.dpi)

        logger.debug(
            "Extracted %s %dx%d, %d bytes, dpi=%s",
            decoded.format,
            decoded.width,
            decoded.height,
            decoded.size_bytes,
            decoded.dpi,
        )

        return ImageMetadata(
            width=decoded.width,
            height=decoded.height,
            format=decoded.format,
            size_bytes=decoded.size_bytes,
            dpi=decoded.dpi or None,
            physical_width_cm=physical_width,
            physical_height_cm=physical_height,
        )
