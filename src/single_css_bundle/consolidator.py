"""Merge stylesheet fragments into the canonical stylesheet.

Pipeline: Select -> Concatenate -> Replace -> Patch chunk metadata
"""

from __future__ import annotations

import logging
import posixpath

from .graph import ChunkAsset, OutputGraph, StylesheetAsset
from .paths import STYLESHEET_EXTENSION, ResolvedTarget, output_directory

logger = logging.getLogger(__name__)


class StylesheetDecodeError(ValueError):
    """A stylesheet payload could not be decoded as UTF-8."""


def to_css_source(file_name: str, source: str | bytes | None) -> str:
    """Return the text of a stylesheet payload."""
    if source is None:
        return ""
    if isinstance(source, str):
        return source
    try:
        return bytes(source).decode("utf-8")
    except UnicodeDecodeError as exc:
        raise StylesheetDecodeError(
            f"Stylesheet {file_name!r} is not valid UTF-8: {exc}"
        ) from exc


def select_stylesheets(graph: OutputGraph, directory: str) -> list[str]:
    """Return the keys of stylesheets located directly in ``directory``.

    Keys are returned in the graph's enumeration order.
    """
    return [
        file_name
        for file_name, asset in graph.items()
        if isinstance(asset, StylesheetAsset)
        and file_name.endswith(STYLESHEET_EXTENSION)
        and output_directory(file_name) == directory
    ]


def consolidate_stylesheets(graph: OutputGraph, target: ResolvedTarget) -> list[str]:
    """Replace every stylesheet in the target directory with one merged asset.

    Returns the merged keys in concatenation order, or an empty list when
    the directory holds no stylesheet (the graph is then left untouched).
    """
    selected = select_stylesheets(graph, target.directory)
    if not selected:
        logger.debug("No stylesheets found in %r", target.directory or ".")
        return []

    combined = "\n".join(
        to_css_source(file_name, graph[file_name].source)  # type: ignore[union-attr]
        for file_name in selected
    )

    for file_name in selected:
        del graph[file_name]

    graph[target.canonical_path] = StylesheetAsset(
        file_name=target.canonical_path,
        source=combined,
        name=posixpath.basename(target.canonical_path),
    )
    logger.debug("Merged %s into %s", ", ".join(selected), target.canonical_path)
    return selected


def patch_chunk_metadata(graph: OutputGraph, target: ResolvedTarget) -> int:
    """Point every chunk that imports stylesheets at the canonical stylesheet.

    Chunks importing no stylesheet keep an empty list. Returns the number of
    patched chunks.
    """
    patched = 0
    for asset in graph.values():
        if isinstance(asset, ChunkAsset) and asset.imported_stylesheets:
            asset.imported_stylesheets = [target.canonical_path]
            patched += 1
    return patched
