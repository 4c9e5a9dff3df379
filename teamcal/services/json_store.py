"""
Whole-document JSON store shared by every request.

read() loads the full dataset into a fresh snapshot and write() replaces the
whole file. There is no locking: two overlapping read/mutate/write cycles
resolve last-write-wins, and the later write silently drops the earlier
mutation.
"""

import json
import shutil
import tempfile
from pathlib import Path
from typing import Any, Dict

from fastapi.concurrency import run_in_threadpool
from pydantic import ValidationError

from ..models.user import StoreDocument
from ..utils.exceptions import StoreError
from ..utils.logger import get_logger

logger = get_logger(__name__)


class JsonDocumentStore:
    """Async read()/write() over a single JSON file"""

    def __init__(self, path: Path):
        self.path = Path(path)

    async def read(self) -> StoreDocument:
        """Reload the whole document. A missing file yields the default dataset."""
        return await run_in_threadpool(self._load)

    async def write(self, document: StoreDocument) -> None:
        """Persist the whole document, replacing whatever is on disk."""
        payload = document.model_dump(mode="json", by_alias=True, exclude_none=True)
        await run_in_threadpool(self._atomic_write, payload)

    def _load(self) -> StoreDocument:
        if not self.path.exists():
            return StoreDocument()
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                raw = json.load(f)
        except (json.JSONDecodeError, OSError) as e:
            logger.error("Failed to read store", path=str(self.path), error=str(e))
            raise StoreError(f"Failed to load {self.path}: {str(e)}")
        if not raw:
            return StoreDocument()
        try:
            return StoreDocument.model_validate(raw)
        except ValidationError as e:
            logger.error("Store document failed validation", path=str(self.path), error=str(e))
            raise StoreError(f"Invalid document in {self.path}: {str(e)}")

    def _atomic_write(self, payload: Dict[str, Any]) -> None:
        """Write JSON file atomically. Any IO failure leaves no temp file behind."""
        temp_path = None
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with tempfile.NamedTemporaryFile(
                mode="w", dir=str(self.path.parent), delete=False, encoding="utf-8"
            ) as tf:
                temp_path = Path(tf.name)
                json.dump(payload, tf, indent=2, ensure_ascii=False)
            shutil.move(str(temp_path), str(self.path))
        except OSError as e:
            if temp_path is not None and temp_path.exists():
                temp_path.unlink()
            logger.error("Failed to write store", path=str(self.path), error=str(e))
            raise StoreError(f"Failed to save {self.path}: {str(e)}")
