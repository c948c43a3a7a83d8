"""Pytest fixtures for django-single-css-bundle tests."""

import json
from unittest import mock

import pytest

from single_css_bundle.graph import ChunkAsset, StylesheetAsset
from single_css_bundle.storage.local import LocalFileStorage


@pytest.fixture
def two_fragment_graph():
    """Output graph with two stylesheet fragments and a chunk importing both."""
    return {
        "static/js/main-abc.js": ChunkAsset(
            file_name="static/js/main-abc.js",
            imported_stylesheets=["static/css/a-h1.css", "static/css/b-h2.css"],
        ),
        "static/css/a-h1.css": StylesheetAsset(
            file_name="static/css/a-h1.css", source="body{color:red}"
        ),
        "static/css/b-h2.css": StylesheetAsset(
            file_name="static/css/b-h2.css", source="p{color:blue}"
        ),
    }


@pytest.fixture
def sample_index_html():
    """Entry HTML document referencing two hashed stylesheets."""
    return (
        "<!doctype html><html><head>"
        '<link rel="stylesheet" href="/static/css/main-4f2a91.css">'
        '<link rel="stylesheet" href="/static/css/vendor-77aa01.css">'
        '<script type="module" src="/static/js/main-abc.js"></script>'
        "</head><body><div id=\"root\"></div></body></html>"
    )


@pytest.fixture
def build_dir(tmp_path):
    """A written Vite build with two stylesheet fragments and a manifest."""
    files = {
        "index.html": (
            "<html><head>"
            '<link rel="stylesheet" href="./static/css/main-a1b2.css">'
            '<link rel="stylesheet" href="./static/css/lazy-c3d4.css">'
            "</head><body></body></html>"
        ),
        "static/js/main.js": "import './lazy.js';",
        "static/js/lazy.js": "export default 1;",
        "static/css/main-a1b2.css": "body{margin:0}",
        "static/css/lazy-c3d4.css": ".lazy{display:none}",
        "static/media/codicon.ttf": "font",
        ".vite/manifest.json": json.dumps(
            {
                "src/main.tsx": {
                    "file": "static/js/main.js",
                    "isEntry": True,
                    "css": ["static/css/main-a1b2.css"],
                },
                "src/lazy.tsx": {
                    "file": "static/js/lazy.js",
                    "isDynamicEntry": True,
                    "css": ["static/css/lazy-c3d4.css"],
                },
                "src/worker.ts": {"file": "static/js/worker.js"},
            }
        ),
    }
    for name, content in files.items():
        path = tmp_path / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
    return tmp_path


@pytest.fixture
def build_storage(build_dir):
    """LocalFileStorage rooted at the sample build."""
    return LocalFileStorage(build_dir)


@pytest.fixture
def mock_storage():
    """Mock storage backend."""
    storage = mock.Mock()
    storage.list_files.return_value = []
    storage.exists.return_value = False
    return storage
