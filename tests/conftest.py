"""
Pytest 配置和共用 fixtures
"""

import io
from collections.abc import Callable

import numpy as np
import pytest
from PIL import Image

from photoprint.backends.pillow_codec import PillowCodec
from photoprint.common.formats import OutputFormat
from photoprint.core.errors import ImageDecodeError, ImageEncodeError
from photoprint.core.interfaces import DecodedImage
from photoprint.settings import AppSettings


class FakeCodec:
    """
    回傳固定中繼資料的假 codec

    不需要真實圖片即可測試驗證器與 DPI 嵌入器
    """

    name = "fake"

    def __init__(
        self,
        width: int = 1200,
        height: int = 1800,
        format: str = "jpeg",
        dpi: float | None = None,
        size_bytes: int | None = None,
        decode_error: str | None = None,
        encode_error: str | None = None,
    ) -> None:
        self.width = width
        self.height = height
        self.format = format
        self.dpi = dpi
        self.size_bytes = size_bytes
        self.decode_error = decode_error
        self.encode_error = encode_error
        self.reencode_calls: list[tuple[bytes, float, str]] = []

    def decode(self, data: bytes) -> DecodedImage:
        if self.decode_error is not None:
            raise ImageDecodeError(self.decode_error)
        return DecodedImage(
            width=self.width,
            height=self.height,
            format=self.format,
            size_bytes=self.size_bytes if self.size_bytes is not None else len(data),
            dpi=self.dpi,
        )

    def reencode(self, data: bytes, *, dpi: float, output_format: OutputFormat) -> bytes:
        if self.encode_error is not None:
            raise ImageEncodeError(self.encode_error)
        self.reencode_calls.append((data, dpi, output_format))
        return f"{output_format}@{dpi:g}:".encode() + data


@pytest.fixture
def fake_codec() -> Callable[..., FakeCodec]:
    """建立假 codec 的工廠"""
    return FakeCodec


@pytest.fixture
def pillow_codec() -> PillowCodec:
    """真實的 Pillow codec"""
    return PillowCodec()


@pytest.fixture
def app_settings() -> AppSettings:
    """不讀取 .env 的預設設定"""
    return AppSettings(_env_file=None)


def create_photo_array(size: tuple[int, int]) -> np.ndarray:
    """
    建立帶漸層的 RGB 測試照片

    Args:
        size: 圖片尺寸 (width, height)

    Returns:
        RGB 圖片 (H, W, 3), uint8
    """
    width, height = size
    x = np.linspace(0, 255, width, dtype=np.float32)
    y = np.linspace(0, 255, height, dtype=np.float32)
    red = np.broadcast_to(x, (height, width))
    green = np.broadcast_to(y[:, None], (height, width))
    blue = (red + green) / 2
    return np.stack([red, green, blue], axis=-1).astype(np.uint8)


def encode_photo(
    size: tuple[int, int] = (120, 180),
    fmt: str = "JPEG",
    dpi: float | None = None,
    mode: str = "RGB",
    exif_dpi: float | None = None,
    orientation: int | None = None,
) -> bytes:
    """
    將測試照片編碼為位元組

    Args:
        size: 圖片尺寸
        fmt: Pillow 格式名稱
        dpi: 寫入的密度標籤（None 表示不寫入）
        mode: 色彩模式
        exif_dpi: 另外寫入 EXIF 解析度標籤（模擬瀏覽器或相機的衝突資訊）
        orientation: 寫入 EXIF 方向標籤（模擬手機直拍照片）
    """
    image = Image.fromarray(create_photo_array(size))
    if mode != "RGB":
        image = image.convert(mode)

    kwargs: dict[str, object] = {}
    if dpi is not None:
        kwargs["dpi"] = (dpi, dpi)
    exif = Image.Exif()
    if exif_dpi is not None:
        exif[0x011A] = exif_dpi  # XResolution
        exif[0x011B] = exif_dpi  # YResolution
        exif[0x0128] = 2  # inches
    if orientation is not None:
        exif[0x0112] = orientation
    if len(exif):
        kwargs["exif"] = exif.tobytes()

    buffer = io.BytesIO()
    image.save(buffer, format=fmt, **kwargs)
    return buffer.getvalue()


@pytest.fixture
def photo_bytes() -> Callable[..., bytes]:
    """編碼測試照片的工廠"""
    return encode_photo


def decode_image(data: bytes) -> tuple[np.ndarray, dict[str, object]]:
    """解碼為像素陣列與 info"""
    with Image.open(io.BytesIO(data)) as image:
        return np.asarray(image.convert("RGB")), dict(image.info)


@pytest.fixture
def decoded() -> Callable[[bytes], tuple[np.ndarray, dict[str, object]]]:
    """解碼工具"""
    return decode_image
