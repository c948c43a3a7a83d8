"""Build plugin that ships exactly one stylesheet."""

from __future__ import annotations

import logging

from ..conf import get_setting
from ..consolidator import consolidate_stylesheets, patch_chunk_metadata
from ..graph import OutputGraph
from ..paths import ResolvedTarget, resolve_target
from ..rewriter import rewrite_html
from .base import BaseBuildPlugin

logger = logging.getLogger(__name__)


class SingleCssBundlePlugin(BaseBuildPlugin):
    """Concatenate all stylesheets of the target directory into one file.

    Every ``.css`` asset emitted directly into the directory of
    ``css_file_name`` (default ``static/css/main.css``) is merged into
    ``css_file_name``. References in generated HTML and in chunk metadata
    are rewritten so the client only needs to load that one file.
    """

    name = "single-css-bundle"
    enforce = "post"

    def __init__(self, css_file_name: str | None = None) -> None:
        if css_file_name is None:
            css_file_name = get_setting("CSS_FILE_NAME")
        self.css_file_name: str = css_file_name.replace("\\", "/")
        self._target: ResolvedTarget | None = None
        self._fragments: tuple[str, ...] = ()

    @property
    def target(self) -> ResolvedTarget:
        if self._target is None:
            self._target = resolve_target(self.css_file_name)
        return self._target

    @property
    def fragments(self) -> tuple[str, ...]:
        """Stylesheet paths merged during the current build."""
        return self._fragments

    def build_start(self) -> None:
        self._target = resolve_target(self.css_file_name)
        self._fragments = ()

    def transform_index_html(self, html: str) -> str:
        return rewrite_html(html, self.target, self._fragments)

    def generate_bundle(self, graph: OutputGraph) -> None:
        target = self.target
        merged = consolidate_stylesheets(graph, target)
        if not merged:
            return

        self._fragments = tuple(merged)
        patched = patch_chunk_metadata(graph, target)
        logger.info(
            "Consolidated %d stylesheet(s) into %s (%d chunk(s) patched)",
            len(merged),
            target.canonical_path,
            patched,
        )
