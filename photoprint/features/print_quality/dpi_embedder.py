"""
DPI 嵌入器

重新編碼圖片並寫入正確的 DPI，輸出格式：
- PNG 來源 → PNG
- 其他來源 → JPEG
"""

import logging

from photoprint.common.formats import output_format_for
from photoprint.common.units import DEFAULT_PRINT_DPI, require_positive_dpi
from photoprint.core.errors import ImageDecodeError, ImageEncodeError
from photoprint.core.interfaces import ImageCodecProtocol
from photoprint.data_model import EmbedResult


logger = logging.getLogger(__name__)


class DPIEmbedder:
    """DPI 嵌入器"""

    def __init__(self, codec: ImageCodecProtocol) -> None:
        self._codec = codec

    def embed_dpi(self, data: bytes, dpi: float = DEFAULT_PRINT_DPI) -> EmbedResult:
        """
        以指定 DPI 重新編碼圖片

        呼叫前應先通過驗證（確認可解碼）

        Args:
            data: 圖片原始位元組
            dpi: 目標 DPI

        Returns:
            新的圖片位元組與標準格式 (jpg / png)

        Raises:
            InvalidDPIError: DPI <= 0 時
            ImageEncodeError: 解碼或重新編碼失敗時
        """
        require_positive_dpi(dpi)

        try:
            source = self._codec.decode(data)
        except ImageDecodeError as e:
            raise ImageEncodeError(f"Cannot read source image: {e}") from e

        output_format = output_format_for(source.format)
        buffer = self._codec.reencode(data, dpi=dpi, output_format=output_format)

        logger.info(
            "Embedded %s DPI: %s -> %s (%d -> %d bytes)",
            f"{dpi:g}",
            source.format,
            output_format,
            source.size_bytes,
            len(buffer),
        )
        return EmbedResult(buffer=buffer, format=output_format)
