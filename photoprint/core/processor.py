"""
批次處理器模組

將資料夾中的照片逐一送進上傳流程，輸出至本機資料夾
依賴抽象介面而非具體實作，遵循依賴反轉原則 (DIP)
"""

import logging
import threading
from collections.abc import Callable
from concurrent.futures import ThreadPoolExecutor, as_completed
from pathlib import Path

from photoprint.backends.storage import LocalStorage
from photoprint.data_model import BatchConfig, BatchResult, is_supported_image
from photoprint.settings import AppSettings

from .errors import PhotoPrintError
from .interfaces import ImageCodecProtocol, StorageProtocol
from .upload import PrintUploadPipeline


logger = logging.getLogger(__name__)

ProgressCallback = Callable[[str, bool], None]
PipelineFactory = Callable[[StorageProtocol], PrintUploadPipeline]


class PrintBatchProcessor:
    """
    批次處理器

    支援序列和並行處理模式，單一檔案失敗不會中斷整批
    """

    def __init__(
        self,
        codec: ImageCodecProtocol,
        settings: AppSettings,
        progress_callback: ProgressCallback | None = None,
        max_workers: int = 1,
        pipeline_factory: PipelineFactory | None = None,
    ):
        """
        初始化處理器

        Args:
            codec: 圖片編解碼器
            settings: 應用程式設定
            progress_callback: 進度回調函數 (filename, success)
            max_workers: 並行工作執行緒數（1=序列處理，>1=並行處理）
            pipeline_factory: 以儲存建立上傳流程（可注入以供測試）
        """
        self._codec = codec
        self._settings = settings
        self._progress_callback = progress_callback
        self._max_workers = max(1, max_workers)
        self._pipeline_factory = pipeline_factory or self._default_pipeline
        self._progress_lock = threading.Lock()

    def _default_pipeline(self, storage: StorageProtocol) -> PrintUploadPipeline:
        return PrintUploadPipeline.from_codec(self._codec, storage, self._settings)

    def scan_images(self, folder: Path) -> list[Path]:
        """
        掃描資料夾中的圖片檔案

        Args:
            folder: 資料夾路徑

        Returns:
            圖片檔案路徑列表（已排序）
        """
        return [f for f in sorted(folder.iterdir()) if is_supported_image(f)]

    def process_folder(self, config: BatchConfig) -> BatchResult:
        """
        處理資料夾中的所有圖片

        根據 max_workers 自動選擇序列或並行模式

        Args:
            config: 批次設定

        Returns:
            處理結果
        """
        output_folder = config.output_folder
        if output_folder is None:
            raise ValueError("Output folder is not set")

        output_folder.mkdir(parents=True, exist_ok=True)

        image_files = self.scan_images(config.input_folder)
        total = len(image_files)
        if total == 0:
            return BatchResult(total=0, success=0, failed=0, output_folder=output_folder)

        pipeline = self._pipeline_factory(LocalStorage(output_folder))

        def _process_one(image_path: Path) -> tuple[str, str | None]:
            try:
                pipeline.upload(
                    image_path.read_bytes(),
                    image_path.name,
                    config.owner_id,
                    config.spec,
                )
            except (PhotoPrintError, OSError) as e:
                logger.warning("Failed to prepare %s: %s", image_path.name, e)
                return image_path.name, str(e)
            return image_path.name, None

        failures: dict[str, str] = {}

        if self._max_workers <= 1 or total == 1:
            for image_path in image_files:
                self._record(*_process_one(image_path), failures)
        else:
            logger.info(
                "Parallel processing: %d images with %d workers",
                total,
                self._max_workers,
            )
            with ThreadPoolExecutor(max_workers=self._max_workers) as executor:
                futures = [executor.submit(_process_one, path) for path in image_files]
                for future in as_completed(futures):
                    self._record(*future.result(), failures)

        return BatchResult(
            total=total,
            success=total - len(failures),
            failed=len(failures),
            output_folder=output_folder,
            failures=failures,
        )

    def _record(self, filename: str, error: str | None, failures: dict[str, str]) -> None:
        with self._progress_lock:
            if error is not None:
                failures[filename] = error
            if self._progress_callback is not None:
                self._progress_callback(filename, error is None)
