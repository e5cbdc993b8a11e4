import logging
import secrets
import time
from pathlib import Path

from ...domain.errors import NotFound
from ...domain.ports.persistence import BlobStore

logger = logging.getLogger(__name__)


class FilesystemBlobStore(BlobStore):
    """Flat directory of uploaded files addressed by generated names."""

    def __init__(self, root: Path) -> None:
        root.mkdir(parents=True, exist_ok=True)
        self._root = root

    def save(self, data: bytes, suggested_name: str) -> str:
        suffix = Path(suggested_name or "").suffix.lower()
        stored_name = f"image-{int(time.time() * 1000)}-{secrets.randbelow(10**9)}{suffix}"
        self._path(stored_name).write_bytes(data)
        logger.info("Stored blob %s (%d bytes)", stored_name, len(data))
        return stored_name

    def delete(self, stored_name: str) -> None:
        self._path(stored_name).unlink()
        logger.info("Deleted blob %s", stored_name)

    def exists(self, stored_name: str) -> bool:
        try:
            return self._path(stored_name).is_file()
        except NotFound:
            return False

    def read_bytes(self, stored_name: str) -> bytes:
        return self._path(stored_name).read_bytes()

    def _path(self, stored_name: str) -> Path:
        if not stored_name or Path(stored_name).name != stored_name or stored_name in {".", ".."}:
            raise NotFound("Image file does not exist on the server")
        return self._root / stored_name
