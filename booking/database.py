import json
import logging
import os
import tempfile
import threading
from typing import Generic, List, Optional, Sequence, Type, TypeVar

from pydantic import BaseModel, TypeAdapter, ValidationError

from booking.errors import StoreError
from booking.logging_config import get_logger

T = TypeVar("T", bound=BaseModel)


class RecordStore(Generic[T]):
    """
    A JSON file holding an array of `model` records. This is the makeshift
    database: every save rewrites the whole file.

    The file is created (with its parent directories) when missing. Empty or
    malformed content is not fatal; `load` logs a warning and returns an
    empty list. Real I/O failures raise StoreError.

    Writes go to a temporary file in the same directory which then replaces
    the target, so a concurrent reader sees either the old or the new array.
    """

    def __init__(self, path: str, model: Type[T], logger: Optional[logging.Logger] = None):
        self.path = path
        self.model = model
        self.lock = threading.RLock()
        self._adapter = TypeAdapter(List[model])
        self._logger = logger or get_logger(__name__)
        self._ensure_file()

    def _ensure_file(self) -> None:
        if os.path.exists(self.path):
            return
        parent = os.path.dirname(self.path)
        try:
            if parent:
                os.makedirs(parent, exist_ok=True)
            # "x": another process may have created it meanwhile
            with open(self.path, "x", encoding="utf-8"):
                pass
        except FileExistsError:
            if os.path.isfile(self.path):
                return
            self._logger.error("Cannot create data file %s", self.path, extra={"event": "store_create_failed"})
            raise StoreError("create", self.path)
        except OSError as e:
            self._logger.error("Error creating data file %s: %s", self.path, e, extra={"event": "store_create_failed"})
            raise StoreError("create", self.path) from e
        self._logger.info("Created empty data file %s", self.path, extra={"event": "store_created"})

    def load(self) -> List[T]:
        with self.lock:
            try:
                with open(self.path, "rb") as f:
                    data = f.read()
            except FileNotFoundError:
                self._ensure_file()
                return []
            except OSError as e:
                self._logger.error("Error reading %s: %s", self.path, e, extra={"event": "store_read_failed"})
                raise StoreError("read", self.path) from e

        try:
            raw = data.decode("utf-8")
        except UnicodeDecodeError as e:
            self._warn_corrupt(f"invalid UTF-8 at byte {e.start}")
            return []
        if not raw.strip():
            self._warn_corrupt("file is empty")
            return []
        try:
            return self._adapter.validate_python(json.loads(raw))
        except json.JSONDecodeError as e:
            self._warn_corrupt(f"invalid JSON ({e.msg} at line {e.lineno})")
        except ValidationError as e:
            self._warn_corrupt(f"{e.error_count()} invalid record field(s)")
        return []

    def save(self, records: Sequence[T]) -> None:
        payload = self._adapter.dump_json(list(records), indent=2)
        directory = os.path.dirname(self.path) or "."
        with self.lock:
            tmp_path = None
            try:
                fd, tmp_path = tempfile.mkstemp(prefix=".", suffix=".tmp", dir=directory)
                with os.fdopen(fd, "wb") as f:
                    f.write(payload)
                    f.flush()
                    os.fsync(f.fileno())
                os.replace(tmp_path, self.path)
            except OSError as e:
                self._logger.error("Error saving %s: %s", self.path, e, extra={"event": "store_write_failed"})
                if tmp_path and os.path.exists(tmp_path):
                    os.remove(tmp_path)
                raise StoreError("write", self.path) from e
        self._logger.debug("Saved %d record(s) to %s", len(records), self.path, extra={"event": "store_saved"})

    def _warn_corrupt(self, reason: str) -> None:
        self._logger.warning(
            "Data file %s is empty or corrupted (%s). Returning an empty list.",
            self.path,
            reason,
            extra={"event": "store_corrupt"},
        )
