# app/services/blob_store.py
import os
import shutil
import mimetypes
import logging

from app.config import settings

logger = logging.getLogger(__name__)

UPLOADS_URL_PATH = "/static/uploads"


class BlobStore:
    """Opaque object store addressed by namespace + key."""

    def upload(self, namespace: str, key: str, data: bytes, content_type: str) -> str:
        raise NotImplementedError

    def delete_namespace(self, namespace: str) -> None:
        raise NotImplementedError


class LocalBlobStore(BlobStore):
    """Stores blobs on disk under ``root/<namespace>/`` and serves them from the static mount."""

    def __init__(self, root: str, public_url: str):
        self.root = root
        self.public_url = public_url.rstrip("/")

    def _namespace_dir(self, namespace: str) -> str:
        if not namespace or "/" in namespace or "\\" in namespace or namespace in (".", ".."):
            raise ValueError(f"Invalid blob namespace: {namespace!r}")
        return os.path.join(self.root, namespace)

    def upload(self, namespace: str, key: str, data: bytes, content_type: str) -> str:
        folder_path = self._namespace_dir(namespace)
        os.makedirs(folder_path, exist_ok=True)

        ext = mimetypes.guess_extension(content_type or "") or ""
        filename = f"{key}{ext}"
        file_path = os.path.join(folder_path, filename)

        with open(file_path, "wb") as buffer:
            buffer.write(data)

        logger.info(f"Stored blob {namespace}/{filename} ({len(data)} bytes)")
        return f"{self.public_url}/{namespace}/{filename}"

    def delete_namespace(self, namespace: str) -> None:
        folder_path = self._namespace_dir(namespace)
        if os.path.isdir(folder_path):
            shutil.rmtree(folder_path)
            logger.info(f"Deleted blob namespace {namespace}")


def get_blob_store() -> BlobStore:
    return LocalBlobStore(
        root=settings.UPLOAD_DIR,
        public_url=f"{settings.PUBLIC_BASE_URL.rstrip('/')}{UPLOADS_URL_PATH}",
    )
