from __future__ import annotations

from pathlib import Path

from django.conf import settings

from ..conf import get_setting
from .base import BaseBuildStorage


class LocalFileStorage(BaseBuildStorage):
    """Local filesystem storage rooted at the build output directory.

    The root is the ``root`` argument, else the BUILD_DIR setting, else
    STATIC_ROOT.
    """

    def __init__(self, root: str | Path | None = None) -> None:
        if root is None:
            root = get_setting("BUILD_DIR") or getattr(settings, "STATIC_ROOT", None)
        if not root:
            raise ValueError("BUILD_DIR or STATIC_ROOT must be configured for LocalFileStorage")
        self.root = Path(root)

    def _get_full_path(self, path: str) -> Path:
        full_path = (self.root / path).resolve()
        root_resolved = self.root.resolve()
        if not full_path.is_relative_to(root_resolved):
            raise ValueError(
                f"Path traversal detected: {path!r} resolves outside {self.root}"
            )
        return full_path

    def list_files(self) -> list[str]:
        if not self.root.is_dir():
            return []
        return sorted(
            path.relative_to(self.root).as_posix()
            for path in self.root.rglob("*")
            if path.is_file()
        )

    def read(self, path: str) -> bytes:
        return self._get_full_path(path).read_bytes()

    def save(self, path: str, content: str | bytes) -> str:
        full_path = self._get_full_path(path)
        full_path.parent.mkdir(parents=True, exist_ok=True)
        if isinstance(content, str):
            full_path.write_text(content, encoding="utf-8")
        else:
            full_path.write_bytes(content)
        return path

    def delete(self, path: str) -> None:
        full_path = self._get_full_path(path)
        if full_path.exists():
            full_path.unlink()

    def exists(self, path: str) -> bool:
        return self._get_full_path(path).exists()
