"""Run the single-stylesheet stage against a finished build.

Pipeline: Load -> Generate bundle -> Transform HTML -> Publish
"""

from __future__ import annotations

import json
import logging
import posixpath
from importlib import import_module
from typing import Any, NamedTuple

import rcssmin

from .conf import get_setting
from .consolidator import to_css_source
from .graph import ChunkAsset, OutputGraph, StylesheetAsset
from .paths import STYLESHEET_EXTENSION
from .plugins.single_css import SingleCssBundlePlugin
from .signals import stylesheets_consolidated

logger = logging.getLogger(__name__)

SCRIPT_EXTENSIONS = (".js", ".mjs", ".cjs")


class ConsolidationResult(NamedTuple):
    """Outcome of one pipeline run."""

    canonical_path: str
    fragments: tuple[str, ...]
    html_documents: tuple[str, ...]
    dry_run: bool = False


def run_single_css_bundle(
    storage: Any = None,
    css_file_name: str | None = None,
    manifest_path: str | None = None,
    dry_run: bool = False,
) -> ConsolidationResult:
    """Main entry point: consolidate the stylesheets of a written build."""
    if storage is None:
        storage = get_storage()
    if manifest_path is None:
        manifest_path = get_setting("MANIFEST_PATH")

    plugin = SingleCssBundlePlugin(css_file_name)
    plugin.build_start()

    files = storage.list_files()
    manifest = read_manifest(storage, manifest_path)
    graph = load_output_graph(storage, files, manifest)

    plugin.generate_bundle(graph)
    fragments = plugin.fragments

    documents = _transform_html(plugin, storage, files)

    if not dry_run:
        if fragments:
            write_output_graph(storage, graph, fragments, plugin.target.canonical_path)
        for file_name, html in documents:
            storage.save(file_name, html)
        if fragments:
            if manifest is not None:
                patch_manifest(manifest, graph, fragments, plugin.target.canonical_path)
                storage.save(manifest_path, json.dumps(manifest, indent=2) + "\n")
            stylesheets_consolidated.send(
                sender=SingleCssBundlePlugin,
                canonical_path=plugin.target.canonical_path,
                fragments=fragments,
            )

    return ConsolidationResult(
        canonical_path=plugin.target.canonical_path,
        fragments=fragments,
        html_documents=tuple(file_name for file_name, _ in documents),
        dry_run=dry_run,
    )


def read_manifest(storage: Any, manifest_path: str | None) -> dict[str, Any] | None:
    """Read the bundler manifest, or None if the build has none."""
    if not manifest_path or not storage.exists(manifest_path):
        logger.warning(
            "Manifest %r not found; chunk metadata will not be patched.", manifest_path
        )
        return None

    manifest = json.loads(storage.read(manifest_path).decode("utf-8"))
    if not isinstance(manifest, dict):
        raise ValueError(f"Manifest {manifest_path!r} must be a JSON object")
    return manifest


def load_output_graph(
    storage: Any,
    files: list[str],
    manifest: dict[str, Any] | None,
) -> OutputGraph:
    """Build the output graph of a written build.

    Manifest entries come first, in manifest order, each chunk followed by
    the stylesheets it imports. Stylesheets the manifest does not mention
    follow in file-name order.
    """
    existing = set(files)
    graph: OutputGraph = {}

    def add_stylesheet(file_name: str) -> None:
        if file_name in graph or file_name not in existing:
            return
        graph[file_name] = StylesheetAsset(
            file_name=file_name,
            source=storage.read(file_name),
            name=posixpath.basename(file_name),
        )

    for entry in (manifest or {}).values():
        if not isinstance(entry, dict):
            continue
        file_name = entry.get("file", "")
        imported = list(entry.get("css") or [])
        if file_name.endswith(SCRIPT_EXTENSIONS) and file_name not in graph:
            graph[file_name] = ChunkAsset(
                file_name=file_name, imported_stylesheets=imported
            )
        elif file_name.endswith(STYLESHEET_EXTENSION):
            add_stylesheet(file_name)
        for stylesheet in imported:
            add_stylesheet(stylesheet)

    for file_name in files:
        if file_name.endswith(STYLESHEET_EXTENSION):
            add_stylesheet(file_name)

    return graph


def write_output_graph(
    storage: Any,
    graph: OutputGraph,
    fragments: tuple[str, ...],
    canonical_path: str,
) -> None:
    """Save the consolidated stylesheet, then delete the merged fragments.

    The canonical file is written before anything is deleted so that a
    failed save leaves the original fragments in place.
    """
    asset = graph[canonical_path]
    content = to_css_source(canonical_path, asset.source)  # type: ignore[union-attr]
    if get_setting("MINIFY_CSS"):
        content = _minify_css(content)

    storage.save(canonical_path, content)
    logger.info("Published stylesheet %s", canonical_path)

    for file_name in fragments:
        if file_name != canonical_path:
            storage.delete(file_name)


def patch_manifest(
    manifest: dict[str, Any],
    graph: OutputGraph,
    fragments: tuple[str, ...],
    canonical_path: str,
) -> None:
    """Mirror the patched output graph into the manifest in place."""
    merged = set(fragments)
    for entry in manifest.values():
        if not isinstance(entry, dict):
            continue
        file_name = entry.get("file")
        if file_name in merged:
            entry["file"] = canonical_path
        chunk = graph.get(file_name) if file_name else None
        if isinstance(chunk, ChunkAsset) and entry.get("css"):
            entry["css"] = list(chunk.imported_stylesheets)


def _transform_html(
    plugin: SingleCssBundlePlugin,
    storage: Any,
    files: list[str],
) -> list[tuple[str, str]]:
    """Return ``(path, html)`` for every HTML document whose references change."""
    suffixes = tuple(get_setting("HTML_SUFFIXES"))
    rewritten: list[tuple[str, str]] = []
    for file_name in files:
        if not file_name.endswith(suffixes):
            continue
        html = storage.read(file_name).decode("utf-8")
        transformed = plugin.transform_index_html(html)
        if transformed == html:
            continue
        rewritten.append((file_name, transformed))
        logger.debug("Rewrote stylesheet references in %s", file_name)
    return rewritten


def _minify_css(content: str) -> str:
    """Minify CSS content using rcssmin."""
    return rcssmin.cssmin(content)  # type: ignore[no-any-return]


def get_storage() -> Any:
    """Import and instantiate the configured storage backend."""
    storage_path = get_setting("STORAGE_BACKEND")
    cls = import_class(storage_path)
    return cls()


def import_class(dotted_path: str) -> type:
    """Import a class from a dotted path string."""
    module_path, class_name = dotted_path.rsplit(".", 1)
    module = import_module(module_path)
    return getattr(module, class_name)  # type: ignore[no-any-return]
