"""
照片上傳流程

驗證 → 嵌入 DPI → 儲存 → 由嵌入後的真實像素推算實體尺寸
"""

import logging
import time
from collections.abc import Callable
from pathlib import PurePosixPath

from photoprint.common.units import truncate_decimals
from photoprint.data_model import PrintSpec, StoredPhoto, ValidationRequirements
from photoprint.features.print_quality import (
    DPIEmbedder,
    ImageValidator,
    MetadataExtractor,
    calculate_physical_size,
)
from photoprint.settings import AppSettings

from .errors import ValidationFailedError
from .interfaces import ImageCodecProtocol, StorageProtocol


logger = logging.getLogger(__name__)


class PrintUploadPipeline:
    """
    照片上傳流程

    所有協作者皆可注入，本身不保存任何請求狀態
    """

    def __init__(
        self,
        storage: StorageProtocol,
        extractor: MetadataExtractor,
        validator: ImageValidator,
        embedder: DPIEmbedder,
        settings: AppSettings,
        clock: Callable[[], float] = time.time,
    ):
        """
        初始化上傳流程

        Args:
            storage: 物件儲存
            extractor: 中繼資料擷取器（用於讀取嵌入後的圖片）
            validator: 圖片驗證器
            embedder: DPI 嵌入器
            settings: 應用程式設定
            clock: 產生儲存 key 時間戳記的時鐘（秒）
        """
        self._storage = storage
        self._extractor = extractor
        self._validator = validator
        self._embedder = embedder
        self._settings = settings
        self._clock = clock

    @classmethod
    def from_codec(
        cls,
        codec: ImageCodecProtocol,
        storage: StorageProtocol,
        settings: AppSettings,
        clock: Callable[[], float] = time.time,
    ) -> "PrintUploadPipeline":
        """以單一編解碼器組裝完整流程"""
        extractor = MetadataExtractor(codec)
        return cls(
            storage=storage,
            extractor=extractor,
            validator=ImageValidator(extractor),
            embedder=DPIEmbedder(codec),
            settings=settings,
            clock=clock,
        )

    def build_requirements(self, spec: PrintSpec) -> ValidationRequirements:
        """由套餐規格建立驗證需求"""
        return ValidationRequirements(
            min_dpi=spec.resolution_dpi or self._settings.default_dpi,
            max_file_size_bytes=self._settings.max_upload_bytes,
            allowed_formats=self._settings.allowed_formats,
            expected_width_cm=spec.width_cm,
            expected_height_cm=spec.height_cm,
            tolerance_cm=self._settings.tolerance_cm,
        )

    def upload(
        self,
        data: bytes,
        filename: str,
        owner_id: int,
        spec: PrintSpec,
    ) -> StoredPhoto:
        """
        驗證並儲存一張照片

        Args:
            data: 上傳的圖片位元組
            filename: 原始檔名
            owner_id: 上傳者編號
            spec: 訂購套餐的印刷規格

        Returns:
            已儲存照片的紀錄

        Raises:
            ValidationFailedError: 驗證有硬性錯誤時
            ImageEncodeError: 嵌入 DPI 失敗時
        """
        requirements = self.build_requirements(spec)
        result = self._validator.validate_image(data, requirements)
        if not result.is_valid:
            logger.info("Rejected %s: %s", filename, "; ".join(result.errors))
            raise ValidationFailedError(result)

        target_dpi = spec.resolution_dpi or self._settings.default_dpi
        embedded = self._embedder.embed_dpi(data, target_dpi)

        key = self._build_key(owner_id, filename, embedded.extension)
        url = self._storage.upload(key, embedded.buffer, embedded.content_type)

        # 實體尺寸以嵌入後圖片的真實像素計算
        final = self._extractor.extract(embedded.buffer)
        physical = calculate_physical_size(final.width, final.height, target_dpi)

        logger.info(
            "Stored %s as %s (%dx%d px, %s DPI)",
            filename,
            key,
            final.width,
            final.height,
            f"{target_dpi:g}",
        )

        return StoredPhoto(
            key=key,
            url=url,
            original_filename=filename,
            format=embedded.format,
            content_type=embedded.content_type,
            size_bytes=len(embedded.buffer),
            width_px=final.width,
            height_px=final.height,
            dpi=target_dpi,
            physical_width_cm=truncate_decimals(physical.width_cm),
            physical_height_cm=truncate_decimals(physical.height_cm),
            warnings=result.warnings,
        )

    def _build_key(self, owner_id: int, filename: str, extension: str) -> str:
        """儲存 key：<prefix>/<owner>/<毫秒>-<檔名>.<jpg|png>"""
        stem = PurePosixPath(filename.replace("\\", "/")).stem or "photo"
        timestamp = int(self._clock() * 1000)
        return f"{self._settings.storage_prefix}/{owner_id}/{timestamp}-{stem}{extension}"
