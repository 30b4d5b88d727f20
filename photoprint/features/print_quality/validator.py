"""
印刷品質驗證器

依序檢查：
1. 格式（硬性錯誤）
2. 檔案大小（硬性錯誤）
3. 最少像素（硬性錯誤）
4. DPI 是否存在（警告）
5. DPI 是否足夠（警告）
6. 實體尺寸是否在容許誤差內（警告）
7. 低 DPI 時的 300 DPI 像素建議（警告）

錯誤與警告的順序固定，方便測試比對
"""

import logging
import math

from photoprint.common.formats import normalize_format, normalize_formats
from photoprint.common.units import DEFAULT_PRINT_DPI, cm_to_px, px_to_cm
from photoprint.core.errors import ImageDecodeError
from photoprint.data_model import (
    ImageMetadata,
    PixelDimensions,
    ValidationReport,
    ValidationRequirements,
    ValidationResult,
)

from .calculator import calculate_required_pixels
from .metadata import MetadataExtractor


logger = logging.getLogger(__name__)

# 品質警告通道，交由營運或印前審核處理
quality_logger = logging.getLogger("photoprint.quality")

BYTES_PER_MB = 1024 * 1024


class ImageValidator:
    """
    圖片驗證器

    validate_image 永遠回傳結果，解碼失敗也只會變成一條錯誤
    """

    def __init__(self, extractor: MetadataExtractor) -> None:
        self._extractor = extractor

    def validate_image(
        self, data: bytes, requirements: ValidationRequirements
    ) -> ValidationResult:
        """
        驗證圖片

        Args:
            data: 圖片原始位元組
            requirements: 驗證需求

        Returns:
            驗證結果
        """
        try:
            metadata = self._extractor.extract(data)
        except ImageDecodeError as e:
            logger.info("Image rejected, cannot decode: %s", e)
            return ValidationResult(
                metadata=ImageMetadata.empty(),
                errors=(f"Error processing image: {e}",),
            )

        errors: list[str] = []
        warnings: list[str] = []

        self._check_format(metadata, requirements, errors)
        self._check_file_size(metadata, requirements, errors)
        self._check_min_pixels(metadata, requirements, errors)
        self._check_dpi(metadata, requirements, warnings)
        self._check_physical_size(metadata, requirements, warnings)
        self._check_print_resolution(metadata, requirements, warnings)

        for warning in warnings:
            quality_logger.warning(warning)

        return ValidationResult(
            metadata=metadata,
            errors=tuple(errors),
            warnings=tuple(warnings),
        )

    def build_report(
        self, data: bytes, requirements: ValidationRequirements
    ) -> ValidationReport:
        """
        驗證並產生上傳前預覽報告

        有預期實體尺寸時附上建議像素
        """
        result = self.validate_image(data, requirements)
        metadata = result.metadata

        recommended: PixelDimensions | None = None
        if requirements.expected_width_cm and requirements.expected_height_cm:
            recommended = calculate_required_pixels(
                requirements.expected_width_cm,
                requirements.expected_height_cm,
                requirements.min_dpi or DEFAULT_PRINT_DPI,
            )

        return ValidationReport(
            is_valid=result.is_valid,
            metadata=metadata,
            size_mb=f"{metadata.size_mb:.2f}",
            physical_width_cm=_format_cm(metadata.physical_width_cm),
            physical_height_cm=_format_cm(metadata.physical_height_cm),
            errors=result.errors,
            warnings=result.warnings,
            recommended_pixels=recommended,
            message=(
                "Image is valid for printing"
                if result.is_valid
                else "Image does not meet the quality requirements"
            ),
        )

    @staticmethod
    def _check_format(
        metadata: ImageMetadata,
        requirements: ValidationRequirements,
        errors: list[str],
    ) -> None:
        if requirements.allowed_formats is None:
            return
        allowed = normalize_formats(requirements.allowed_formats)
        if normalize_format(metadata.format) not in allowed:
            errors.append(
                f"Format not allowed. Expected: {', '.join(requirements.allowed_formats)}. "
                f"Received: {metadata.format}"
            )

    @staticmethod
    def _check_file_size(
        metadata: ImageMetadata,
        requirements: ValidationRequirements,
        errors: list[str],
    ) -> None:
        limit = requirements.max_file_size_bytes
        if limit is not None and metadata.size_bytes > limit:
            errors.append(
                f"File too large. Maximum: {limit / BYTES_PER_MB:.2f}MB. "
                f"Actual: {metadata.size_mb:.2f}MB"
            )

    @staticmethod
    def _check_min_pixels(
        metadata: ImageMetadata,
        requirements: ValidationRequirements,
        errors: list[str],
    ) -> None:
        if requirements.min_width_px is not None and metadata.width < requirements.min_width_px:
            errors.append(
                f"Insufficient width. Minimum: {requirements.min_width_px}px. "
                f"Actual: {metadata.width}px"
            )
        if requirements.min_height_px is not None and metadata.height < requirements.min_height_px:
            errors.append(
                f"Insufficient height. Minimum: {requirements.min_height_px}px. "
                f"Actual: {metadata.height}px"
            )

    @staticmethod
    def _check_dpi(
        metadata: ImageMetadata,
        requirements: ValidationRequirements,
        warnings: list[str],
    ) -> None:
        if not metadata.dpi:
            warnings.append(
                f"Image has no DPI metadata. {DEFAULT_PRINT_DPI} DPI will be assumed "
                "for printing."
            )
        elif requirements.min_dpi and metadata.dpi < requirements.min_dpi:
            warnings.append(
                f"Low DPI. Recommended: {requirements.min_dpi:g} DPI. "
                f"Actual: {metadata.dpi:g} DPI. "
                "Print may not have the expected quality."
            )

    @staticmethod
    def _check_physical_size(
        metadata: ImageMetadata,
        requirements: ValidationRequirements,
        warnings: list[str],
    ) -> None:
        expected_width = requirements.expected_width_cm
        expected_height = requirements.expected_height_cm
        if not (expected_width and expected_height):
            return

        # 一律由像素重新計算，不使用 metadata 上的實體尺寸
        dpi = metadata.dpi or DEFAULT_PRINT_DPI
        actual_width = px_to_cm(metadata.width, dpi)
        actual_height = px_to_cm(metadata.height, dpi)

        tolerance = requirements.tolerance_cm
        if (
            abs(actual_width - expected_width) <= tolerance
            and abs(actual_height - expected_height) <= tolerance
        ):
            return

        required = calculate_required_pixels(expected_width, expected_height, dpi)
        warnings.append(
            "Physical dimensions do not match the expected size. "
            f"Expected: {expected_width:.1f}cm x {expected_height:.1f}cm. "
            f"Actual: {actual_width:.1f}cm x {actual_height:.1f}cm (at {dpi:g} DPI). "
            f"An image of {required.width}x{required.height} pixels at {dpi:g} DPI "
            "is recommended."
        )

    @staticmethod
    def _check_print_resolution(
        metadata: ImageMetadata,
        requirements: ValidationRequirements,
        warnings: list[str],
    ) -> None:
        dpi = metadata.dpi
        if requirements.min_dpi != DEFAULT_PRINT_DPI or not dpi or dpi >= DEFAULT_PRINT_DPI:
            return

        scale = DEFAULT_PRINT_DPI / dpi
        if requirements.expected_width_cm:
            min_width = cm_to_px(requirements.expected_width_cm, DEFAULT_PRINT_DPI)
        else:
            min_width = math.ceil(metadata.width * scale)
        if requirements.expected_height_cm:
            min_height = cm_to_px(requirements.expected_height_cm, DEFAULT_PRINT_DPI)
        else:
            min_height = math.ceil(metadata.height * scale)

        warnings.append(
            f"For high-quality printing at {DEFAULT_PRINT_DPI} DPI, an image of "
            f"at least {min_width}x{min_height} pixels is recommended."
        )


def _format_cm(value: float | None) -> str | None:
    return None if value is None else f"{value:.2f}"
