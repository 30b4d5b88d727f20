"""
本機資料夾儲存

將物件寫入本機資料夾並回傳 file:// URI，供命令列批次處理使用
"""

import logging
from pathlib import Path


logger = logging.getLogger(__name__)


class LocalStorage:
    """
    本機資料夾儲存

    key 中的 "/" 對應子資料夾
    """

    def __init__(self, root: Path) -> None:
        self.root = root

    def upload(self, key: str, data: bytes, content_type: str) -> str:
        """寫入檔案並回傳 URI"""
        target = (self.root / key).resolve()
        if not target.is_relative_to(self.root.resolve()):
            raise ValueError(f"Storage key escapes root: {key}")

        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_bytes(data)
        logger.info("Stored %s (%s, %d bytes)", target, content_type, len(data))
        return target.as_uri()
