"""
批次進度條

以 rich 顯示印前處理進度，可直接作為 PrintBatchProcessor 的 progress_callback
"""

from rich.progress import (
    BarColumn,
    MofNCompleteColumn,
    Progress,
    SpinnerColumn,
    TextColumn,
    TimeElapsedColumn,
)


class RichProgressBar:
    """
    印前處理進度條

    用法::

        with RichProgressBar(total=len(images)) as bar:
            processor = PrintBatchProcessor(codec, settings, progress_callback=bar)
            processor.process_folder(config)
    """

    def __init__(self, total: int) -> None:
        self._progress = Progress(
            SpinnerColumn(),
            TextColumn("[bold blue]{task.description}"),
            BarColumn(bar_width=30),
            MofNCompleteColumn(),
            TimeElapsedColumn(),
        )
        self._task_id = self._progress.add_task("Preparing", total=total)
        self._accepted = 0
        self._rejected = 0

    def __enter__(self) -> "RichProgressBar":
        self._progress.start()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: object,
    ) -> None:
        self._progress.stop()

    def __call__(self, filename: str, success: bool) -> None:
        self.update(filename, success=success)

    def update(self, filename: str, *, success: bool) -> None:
        """
        記錄一張照片的處理結果

        Args:
            filename: 檔案名稱
            success: 是否通過驗證並完成 DPI 嵌入
        """
        if success:
            self._accepted += 1
        else:
            self._rejected += 1

        status = "[green]READY[/green]" if success else "[red]REJECTED[/red]"
        self._progress.update(self._task_id, advance=1, description=f"{filename} {status}")

    @property
    def accepted_count(self) -> int:
        """通過數量"""
        return self._accepted

    @property
    def rejected_count(self) -> int:
        """退件數量"""
        return self._rejected
