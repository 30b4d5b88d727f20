"""
Pillow 編解碼器

讀取圖片標頭（寬高、格式、密度）並以指定 DPI 重新編碼：
- JPEG: 品質 95、4:4:4 色度取樣、最佳化霍夫曼表
- PNG: 最高無失真壓縮等級
重新編碼前移除 EXIF 與舊的密度資訊，只保留 ICC 色彩描述檔與 EXIF 方向
"""

import io
import logging
from typing import ClassVar, Final

from PIL import Image, UnidentifiedImageError

from photoprint.common.formats import OutputFormat
from photoprint.core.errors import ImageDecodeError, ImageEncodeError
from photoprint.core.interfaces import DecodedImage

from .registry import CodecRegistry


logger = logging.getLogger(__name__)

# Pillow 以 MPO 回報多數手機拍攝的 JPEG
PILLOW_FORMAT_NAMES: Final[dict[str, str]] = {"MPO": "jpeg"}

# JPEG 可直接編碼的色彩模式
JPEG_MODES: Final[frozenset[str]] = frozenset({"RGB", "L", "CMYK"})

# 重新編碼時需移除的中繼資料（方向另外保留）
STRIPPED_INFO_KEYS: Final[tuple[str, ...]] = (
    "exif",
    "dpi",
    "jfif",
    "jfif_version",
    "jfif_density",
    "jfif_unit",
    "xmp",
    "XML:com.adobe.xmp",
)

# EXIF Orientation 標籤
EXIF_ORIENTATION: Final = 0x0112

DECODE_ERRORS: Final[tuple[type[Exception], ...]] = (
    UnidentifiedImageError,
    OSError,
    ValueError,
    Image.DecompressionBombError,
)


@CodecRegistry.register("pillow")
class PillowCodec:
    """
    基於 Pillow 的圖片編解碼器

    無狀態，可在多執行緒間共用
    """

    name: ClassVar[str] = "pillow"

    def __init__(self, jpeg_quality: int = 95, png_compress_level: int = 9) -> None:
        """
        初始化編解碼器

        Args:
            jpeg_quality: JPEG 品質 (1-95)
            png_compress_level: PNG 壓縮等級 (0-9)
        """
        self.jpeg_quality = jpeg_quality
        self.png_compress_level = png_compress_level

    def decode(self, data: bytes) -> DecodedImage:
        """讀取圖片標頭，不解碼像素"""
        try:
            with Image.open(io.BytesIO(data)) as image:
                width, height = image.size
                fmt = image.format or "unknown"
                dpi = _read_dpi(image.info)
        except DECODE_ERRORS as e:
            raise ImageDecodeError(e) from e

        return DecodedImage(
            width=width,
            height=height,
            format=PILLOW_FORMAT_NAMES.get(fmt, fmt.lower()),
            size_bytes=len(data),
            dpi=dpi,
        )

    def reencode(self, data: bytes, *, dpi: float, output_format: OutputFormat) -> bytes:
        """移除衝突中繼資料並以新的 DPI 重新編碼"""
        try:
            with Image.open(io.BytesIO(data)) as source:
                source.load()
                icc_profile = source.info.get("icc_profile")
                orientation = source.getexif().get(EXIF_ORIENTATION)
                image = source.copy()
        except DECODE_ERRORS as e:
            raise ImageEncodeError(f"Cannot decode image for re-encoding: {e}") from e

        for key in STRIPPED_INFO_KEYS:
            image.info.pop(key, None)

        save_kwargs: dict[str, object] = {"dpi": (dpi, dpi)}
        if icc_profile:
            save_kwargs["icc_profile"] = icc_profile
        if orientation is not None:
            # 只帶回方向，不帶 EXIF 解析度標籤
            exif = Image.Exif()
            exif[EXIF_ORIENTATION] = orientation
            save_kwargs["exif"] = exif

        if output_format == "png":
            pil_format = "PNG"
            save_kwargs["compress_level"] = self.png_compress_level
        else:
            pil_format = "JPEG"
            if image.mode not in JPEG_MODES:
                image = image.convert("L" if image.mode in ("1", "I", "I;16", "F") else "RGB")
            save_kwargs.update(
                quality=self.jpeg_quality,
                subsampling=0,  # 4:4:4
                optimize=True,
            )

        buffer = io.BytesIO()
        try:
            image.save(buffer, format=pil_format, **save_kwargs)
        except (OSError, ValueError) as e:
            raise ImageEncodeError(f"Cannot encode {output_format}: {e}") from e

        logger.debug(
            "Re-encoded %dx%d image as %s at %s DPI (%d bytes)",
            image.width,
            image.height,
            output_format,
            dpi,
            buffer.tell(),
        )
        return buffer.getvalue()


def _read_dpi(info: dict[str, object]) -> float | None:
    """取得水平方向 DPI，零或不存在時回傳 None"""
    raw = info.get("dpi")
    if not isinstance(raw, tuple) or not raw:
        return None
    try:
        value = float(raw[0])
    except (TypeError, ValueError):
        return None
    # PNG 以每公尺像素儲存，誤差最多 0.0127 DPI（300 DPI 讀回為 299.9994）
    value = round(value, 1)
    return value if value > 0 else None
