from __future__ import annotations

import posixpath

from django.contrib.staticfiles.storage import staticfiles_storage
from django.core.files.base import ContentFile

from .base import BaseBuildStorage


class DjangoStorageBackend(BaseBuildStorage):
    """Storage backend using Django's staticfiles storage.

    Works with any Django storage backend configured for static files
    (S3 via django-storages, local filesystem, GCS, Azure, etc.)
    """

    def list_files(self) -> list[str]:
        return sorted(self._walk(""))

    def _walk(self, directory: str) -> list[str]:
        directories, files = staticfiles_storage.listdir(directory)
        found = [posixpath.join(directory, name) for name in files]
        for name in directories:
            found.extend(self._walk(posixpath.join(directory, name)))
        return found

    def read(self, path: str) -> bytes:
        with staticfiles_storage.open(path, "rb") as handle:
            return handle.read()  # type: ignore[no-any-return]

    def save(self, path: str, content: str | bytes) -> str:
        if staticfiles_storage.exists(path):
            staticfiles_storage.delete(path)

        payload = content.encode("utf-8") if isinstance(content, str) else content
        return staticfiles_storage.save(path, ContentFile(payload))  # type: ignore[no-any-return]

    def delete(self, path: str) -> None:
        if staticfiles_storage.exists(path):
            staticfiles_storage.delete(path)

    def exists(self, path: str) -> bool:
        return staticfiles_storage.exists(path)  # type: ignore[no-any-return]
