"""
Filesystem blob store.

Files live under ``{root_dir}/{bucket}/{path}`` and are served from
``{public_base_url}/{bucket}/{path}``. Uploads never overwrite an existing
file.
"""

import asyncio
from pathlib import Path
from urllib.parse import quote, unquote

from canteiro.config import get_logger
from canteiro.core.exceptions import BlobAlreadyExistsError, BlobStorageError
from canteiro.core.interfaces.storage import IBlobStore

logger = get_logger(__name__)


class LocalBlobStore(IBlobStore):
    """Blob store backed by a local directory."""

    def __init__(self, root_dir: Path, bucket: str, public_base_url: str):
        self.root_dir = Path(root_dir)
        self.bucket = bucket
        self.public_base_url = public_base_url.rstrip("/")
        self._bucket_dir = self.root_dir / bucket

    def _resolve(self, path: str) -> Path:
        target = (self._bucket_dir / path.lstrip("/")).resolve()
        if not target.is_relative_to(self._bucket_dir.resolve()):
            raise BlobStorageError(
                f"Path escapes bucket: {path}",
                code="INVALID_BLOB_PATH",
                details={"path": path},
            )
        return target

    async def upload(self, path: str, data: bytes, content_type: str) -> str:
        target = self._resolve(path)

        def _write() -> None:
            target.parent.mkdir(parents=True, exist_ok=True)
            with open(target, "xb") as f:
                f.write(data)

        try:
            await asyncio.to_thread(_write)
        except FileExistsError as e:
            raise BlobAlreadyExistsError(path) from e

        logger.debug(
            "blob_uploaded",
            bucket=self.bucket,
            path=path,
            size=len(data),
            content_type=content_type,
        )
        return path

    def get_public_url(self, path: str) -> str:
        return f"{self.public_base_url}/{self.bucket}/{quote(path.lstrip('/'))}"

    async def remove(self, path: str) -> bool:
        target = self._resolve(path)
        try:
            await asyncio.to_thread(target.unlink)
        except FileNotFoundError:
            logger.debug("blob_missing", bucket=self.bucket, path=path)
            return False
        logger.info("blob_removed", bucket=self.bucket, path=path)
        return True

    def path_from_url(self, url: str) -> str | None:
        prefix = f"{self.public_base_url}/{self.bucket}/"
        if not url or not url.startswith(prefix):
            return None
        path = unquote(url[len(prefix):])
        return path or None
