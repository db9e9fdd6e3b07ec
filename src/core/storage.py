import re
import time
from pathlib import Path
from typing import Protocol

from src.core.logger import get_logger

logger = get_logger("storage")

_UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9._-]+")


class FileStorage(Protocol):
    """Where uploaded images go. ``save`` returns the public URL of the file."""

    def save(self, filename: str, data: bytes) -> str: ...


def safe_filename(filename: str) -> str:
    """Strip directories and anything outside ``[A-Za-z0-9._-]``."""
    name = _UNSAFE_CHARS.sub("_", Path(filename or "").name).strip("._")
    return name or "upload"


class LocalFileStorage:
    """Writes files under a local folder served at ``url_prefix``."""

    def __init__(self, folder: str, url_prefix: str = "/uploads"):
        self.folder = Path(folder)
        self.url_prefix = url_prefix.rstrip("/")
        self.folder.mkdir(parents=True, exist_ok=True)

    def save(self, filename: str, data: bytes) -> str:
        stored_name = f"{int(time.time() * 1000)}-{safe_filename(filename)}"
        path = self.folder / stored_name
        path.write_bytes(data)
        logger.info("File saved to %s", path)
        return f"{self.url_prefix}/{stored_name}"
