from __future__ import annotations

from abc import ABC, abstractmethod


class BaseBuildStorage(ABC):
    """Abstract base class for build output storage backends.

    Storage backends give the pipeline access to a finished build: listing
    its files, reading them, and writing back the consolidated result.
    All paths are POSIX paths relative to the build root.
    """

    @abstractmethod
    def list_files(self) -> list[str]:
        """List every file of the build.

        Returns:
            Relative paths, sorted
        """
        ...

    @abstractmethod
    def read(self, path: str) -> bytes:
        """Read a file from the build.

        Args:
            path: The storage path (e.g., "static/css/main-a1b2c3d4.css")

        Returns:
            The raw file content
        """
        ...

    @abstractmethod
    def save(self, path: str, content: str | bytes) -> str:
        """Save content to the build, replacing any existing file.

        Args:
            path: The storage path
            content: Text (written as UTF-8) or raw bytes

        Returns:
            The path the content was saved under
        """
        ...

    @abstractmethod
    def delete(self, path: str) -> None:
        """Delete a file from the build.

        Args:
            path: The storage path to delete
        """
        ...

    @abstractmethod
    def exists(self, path: str) -> bool:
        """Check if a file exists in the build.

        Args:
            path: The storage path to check

        Returns:
            True if the file exists
        """
        ...
