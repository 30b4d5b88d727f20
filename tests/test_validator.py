"""
印刷品質驗證器測試

大部分使用假 codec，確保訊息內容與順序固定
"""

import logging
from collections.abc import Callable

import pytest

from photoprint.data_model import ImageMetadata, ValidationRequirements
from photoprint.features.print_quality import ImageValidator, MetadataExtractor


MB = 1024 * 1024

MISSING_DPI_WARNING = "Image has no DPI metadata. 300 DPI will be assumed for printing."


def _validator(codec: object) -> ImageValidator:
    return ImageValidator(MetadataExtractor(codec))  # type: ignore[arg-type]


class TestDecodeFailure:
    """解碼失敗測試"""

    @pytest.mark.unit
    def test_returns_single_error(self, fake_codec: Callable) -> None:
        validator = _validator(fake_codec(decode_error="cannot identify image file"))
        result = validator.validate_image(b"garbage", ValidationRequirements())

        assert result.is_valid is False
        assert result.errors == ("Error processing image: cannot identify image file",)
        assert result.warnings == ()
        assert result.metadata == ImageMetadata.empty()

    @pytest.mark.integration
    def test_real_garbage_never_raises(self, pillow_codec) -> None:
        result = _validator(pillow_codec).validate_image(b"\x00\x01", ValidationRequirements())
        assert result.is_valid is False
        assert len(result.errors) == 1
        assert result.errors[0].startswith("Error processing image: ")
        assert result.metadata.format == "unknown"


class TestFormatCheck:
    """格式檢查測試"""

    @pytest.mark.unit
    def test_jpeg_matches_jpg(self, fake_codec: Callable) -> None:
        validator = _validator(fake_codec(format="jpeg", dpi=300))
        result = validator.validate_image(
            b"x", ValidationRequirements(allowed_formats=("jpg", "png"))
        )
        assert result.is_valid is True
        assert result.errors == ()

    @pytest.mark.unit
    def test_allowed_list_normalized(self, fake_codec: Callable) -> None:
        validator = _validator(fake_codec(format="jpg", dpi=300))
        result = validator.validate_image(
            b"x", ValidationRequirements(allowed_formats=("JPEG",))
        )
        assert result.is_valid is True

    @pytest.mark.unit
    def test_rejected_format(self, fake_codec: Callable) -> None:
        validator = _validator(fake_codec(format="webp", dpi=300))
        result = validator.validate_image(
            b"x", ValidationRequirements(allowed_formats=("jpg", "jpeg", "png"))
        )
        assert result.is_valid is False
        assert result.errors == (
            "Format not allowed. Expected: jpg, jpeg, png. Received: webp",
        )

    @pytest.mark.unit
    def test_no_allowed_formats_skips_check(self, fake_codec: Callable) -> None:
        validator = _validator(fake_codec(format="gif", dpi=300))
        assert validator.validate_image(b"x", ValidationRequirements()).is_valid is True


class TestFileSizeCheck:
    """檔案大小檢查測試"""

    @pytest.mark.unit
    def test_too_large(self, fake_codec: Callable) -> None:
        validator = _validator(fake_codec(size_bytes=2 * MB, dpi=300))
        result = validator.validate_image(
            b"x", ValidationRequirements(max_file_size_bytes=1 * MB)
        )
        assert result.is_valid is False
        assert result.errors == ("File too large. Maximum: 1.00MB. Actual: 2.00MB",)

    @pytest.mark.unit
    def test_exact_limit_passes(self, fake_codec: Callable) -> None:
        validator = _validator(fake_codec(size_bytes=MB, dpi=300))
        result = validator.validate_image(b"x", ValidationRequirements(max_file_size_bytes=MB))
        assert result.is_valid is True


class TestPixelMinimums:
    """最少像素檢查測試"""

    @pytest.mark.unit
    def test_width_and_height(self, fake_codec: Callable) -> None:
        validator = _validator(fake_codec(width=800, height=600, dpi=300))
        result = validator.validate_image(
            b"x", ValidationRequirements(min_width_px=1000, min_height_px=1000)
        )
        assert result.errors == (
            "Insufficient width. Minimum: 1000px. Actual: 800px",
            "Insufficient height. Minimum: 1000px. Actual: 600px",
        )

    @pytest.mark.unit
    def test_only_height(self, fake_codec: Callable) -> None:
        validator = _validator(fake_codec(width=1200, height=600, dpi=300))
        result = validator.validate_image(
            b"x", ValidationRequirements(min_width_px=1000, min_height_px=1000)
        )
        assert result.errors == ("Insufficient height. Minimum: 1000px. Actual: 600px",)

    @pytest.mark.unit
    def test_error_order(self, fake_codec: Callable) -> None:
        validator = _validator(
            fake_codec(width=10, height=10, format="gif", size_bytes=3 * MB, dpi=300)
        )
        result = validator.validate_image(
            b"x",
            ValidationRequirements(
                allowed_formats=("png",),
                max_file_size_bytes=MB,
                min_width_px=20,
                min_height_px=20,
            ),
        )
        assert [e.split(".")[0] for e in result.errors] == [
            "Format not allowed",
            "File too large",
            "Insufficient width",
            "Insufficient height",
        ]


class TestDpiWarnings:
    """DPI 警告測試"""

    @pytest.mark.unit
    def test_missing_dpi_only_warns(self, fake_codec: Callable) -> None:
        result = _validator(fake_codec(dpi=None)).validate_image(b"x", ValidationRequirements())
        assert result.is_valid is True
        assert result.warnings == (MISSING_DPI_WARNING,)

    @pytest.mark.unit
    def test_missing_dpi_with_min_dpi_single_warning(self, fake_codec: Callable) -> None:
        result = _validator(fake_codec(dpi=None)).validate_image(
            b"x", ValidationRequirements(min_dpi=300)
        )
        assert result.warnings == (MISSING_DPI_WARNING,)

    @pytest.mark.unit
    def test_low_dpi(self, fake_codec: Callable) -> None:
        result = _validator(fake_codec(dpi=150)).validate_image(
            b"x", ValidationRequirements(min_dpi=200)
        )
        assert result.is_valid is True
        assert result.warnings == (
            "Low DPI. Recommended: 200 DPI. Actual: 150 DPI. "
            "Print may not have the expected quality.",
        )

    @pytest.mark.unit
    def test_sufficient_dpi_no_warnings(self, fake_codec: Callable) -> None:
        result = _validator(fake_codec(dpi=300)).validate_image(
            b"x", ValidationRequirements(min_dpi=300)
        )
        assert result.warnings == ()

    @pytest.mark.unit
    def test_print_hint_scales_current_pixels(self, fake_codec: Callable) -> None:
        result = _validator(fake_codec(width=600, height=900, dpi=150)).validate_image(
            b"x", ValidationRequirements(min_dpi=300)
        )
        assert result.warnings == (
            "Low DPI. Recommended: 300 DPI. Actual: 150 DPI. "
            "Print may not have the expected quality.",
            "For high-quality printing at 300 DPI, an image of at least "
            "1200x1800 pixels is recommended.",
        )

    @pytest.mark.unit
    def test_print_hint_only_for_300(self, fake_codec: Callable) -> None:
        result = _validator(fake_codec(width=600, height=900, dpi=150)).validate_image(
            b"x", ValidationRequirements(min_dpi=240)
        )
        assert len(result.warnings) == 1
        assert result.warnings[0].startswith("Low DPI.")


class TestPhysicalSizeTolerance:
    """實體尺寸容許誤差測試"""

    @pytest.mark.unit
    def test_within_tolerance_assumed_dpi(self, fake_codec: Callable) -> None:
        result = _validator(fake_codec(width=1200, height=1800)).validate_image(
            b"x",
            ValidationRequirements(expected_width_cm=10, expected_height_cm=15, tolerance_cm=0.5),
        )
        assert result.is_valid is True
        assert result.warnings == (MISSING_DPI_WARNING,)

    @pytest.mark.unit
    def test_mismatch_warning(self, fake_codec: Callable) -> None:
        result = _validator(fake_codec(width=400, height=600)).validate_image(
            b"x",
            ValidationRequirements(expected_width_cm=10, expected_height_cm=15, tolerance_cm=0.5),
        )
        assert result.is_valid is True
        assert result.warnings == (
            MISSING_DPI_WARNING,
            "Physical dimensions do not match the expected size. "
            "Expected: 10.0cm x 15.0cm. Actual: 3.4cm x 5.1cm (at 300 DPI). "
            "An image of 1182x1772 pixels at 300 DPI is recommended.",
        )

    @pytest.mark.unit
    def test_single_axis_mismatch(self, fake_codec: Callable) -> None:
        result = _validator(fake_codec(width=1200, height=1200, dpi=300)).validate_image(
            b"x", ValidationRequirements(expected_width_cm=10, expected_height_cm=15)
        )
        assert len(result.warnings) == 1
        assert result.warnings[0].startswith("Physical dimensions do not match")

    @pytest.mark.unit
    def test_embedded_dpi_used(self, fake_codec: Callable) -> None:
        # 600x900 @ 150 DPI = 10.16cm x 15.24cm
        result = _validator(fake_codec(width=600, height=900, dpi=150)).validate_image(
            b"x", ValidationRequirements(expected_width_cm=10, expected_height_cm=15)
        )
        assert result.warnings == ()

    @pytest.mark.unit
    def test_requires_both_dimensions(self, fake_codec: Callable) -> None:
        result = _validator(fake_codec(width=10, height=10, dpi=300)).validate_image(
            b"x", ValidationRequirements(expected_width_cm=10)
        )
        assert result.warnings == ()

    @pytest.mark.unit
    def test_default_tolerance(self) -> None:
        assert ValidationRequirements().tolerance_cm == 0.5

    @pytest.mark.unit
    def test_zero_tolerance_is_exact(self, fake_codec: Callable) -> None:
        # 10.16cm x 15.24cm 在預設誤差內，但誤差為 0 時需完全相符
        result = _validator(fake_codec(width=1200, height=1800, dpi=300)).validate_image(
            b"x",
            ValidationRequirements(expected_width_cm=10, expected_height_cm=15, tolerance_cm=0),
        )
        assert len(result.warnings) == 1
        assert result.warnings[0].startswith("Physical dimensions do not match")

    @pytest.mark.unit
    def test_zero_tolerance_exact_match_passes(self, fake_codec: Callable) -> None:
        result = _validator(fake_codec(width=300, height=600, dpi=300)).validate_image(
            b"x",
            ValidationRequirements(
                expected_width_cm=2.54, expected_height_cm=5.08, tolerance_cm=0
            ),
        )
        assert result.warnings == ()

    @pytest.mark.unit
    def test_print_hint_uses_expected_size(self, fake_codec: Callable) -> None:
        result = _validator(fake_codec(width=600, height=900, dpi=150)).validate_image(
            b"x",
            ValidationRequirements(min_dpi=300, expected_width_cm=10, expected_height_cm=15),
        )
        assert result.warnings == (
            "Low DPI. Recommended: 300 DPI. Actual: 150 DPI. "
            "Print may not have the expected quality.",
            "For high-quality printing at 300 DPI, an image of at least "
            "1182x1772 pixels is recommended.",
        )


class TestQualityChannel:
    """品質警告日誌測試"""

    @pytest.mark.unit
    def test_warnings_logged(self, fake_codec: Callable, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.WARNING, logger="photoprint.quality"):
            _validator(fake_codec(dpi=None)).validate_image(b"x", ValidationRequirements())
        assert [r.getMessage() for r in caplog.records if r.name == "photoprint.quality"] == [
            MISSING_DPI_WARNING
        ]


class TestBuildReport:
    """驗證報告測試"""

    @pytest.mark.unit
    def test_valid_report(self, fake_codec: Callable) -> None:
        validator = _validator(fake_codec(width=1200, height=1800, dpi=300, size_bytes=MB // 2))
        report = validator.build_report(
            b"x",
            ValidationRequirements(min_dpi=300, expected_width_cm=10, expected_height_cm=15),
        )
        assert report.is_valid is True
        assert report.size_mb == "0.50"
        assert report.physical_width_cm == "10.16"
        assert report.physical_height_cm == "15.24"
        assert report.recommended_pixels is not None
        assert (report.recommended_pixels.width, report.recommended_pixels.height) == (1182, 1772)
        assert report.message == "Image is valid for printing"

    @pytest.mark.unit
    def test_invalid_report(self, fake_codec: Callable) -> None:
        report = _validator(fake_codec(decode_error="bad")).build_report(
            b"x", ValidationRequirements()
        )
        assert report.is_valid is False
        assert report.physical_width_cm is None
        assert report.recommended_pixels is None
        assert report.message == "Image does not meet the quality requirements"
