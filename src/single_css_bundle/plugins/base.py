"""Base class for build plugins."""

from __future__ import annotations

from abc import ABC, abstractmethod

from ..graph import OutputGraph


class BaseBuildPlugin(ABC):
    """Abstract base class for build-tool plugins.

    The host calls ``build_start`` once per build, ``transform_index_html``
    once per generated HTML document and ``generate_bundle`` exactly once,
    after every chunk and asset has been emitted and before the output graph
    is written to storage.
    """

    name: str = ""

    enforce: str | None = None
    """Ordering hint for the host: ``"pre"``, ``"post"`` or None."""

    def build_start(self) -> None:
        """Reset per-build state."""

    def transform_index_html(self, html: str) -> str:
        """Return the transformed HTML document."""
        return html

    @abstractmethod
    def generate_bundle(self, graph: OutputGraph) -> None:
        """Mutate the finished output graph in place.

        Args:
            graph: Output path -> asset mapping owned by the host.
        """
        ...
