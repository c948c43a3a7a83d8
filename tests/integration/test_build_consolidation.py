"""Integration tests for consolidating a written build directory.

Runs run_single_css_bundle against LocalFileStorage on a temporary build
laid out the way Vite writes it, covering the graph scenarios end to end:
merge, no-op, isolation, HTML rewrite, chunk metadata and idempotence.
"""

from __future__ import annotations

import json

import pytest
from django.test import override_settings

from single_css_bundle.pipeline import run_single_css_bundle
from single_css_bundle.storage.local import LocalFileStorage


def _write_build(root, files):
    for name, content in files.items():
        path = root / name
        path.parent.mkdir(parents=True, exist_ok=True)
        if isinstance(content, bytes):
            path.write_bytes(content)
        else:
            path.write_text(content, encoding="utf-8")
    return LocalFileStorage(root)


def _snapshot(root):
    return {
        path.relative_to(root).as_posix(): path.read_bytes()
        for path in sorted(root.rglob("*"))
        if path.is_file()
    }


class TestScenarios:
    def test_two_fragments_merge_into_main(self, tmp_path):
        """Scenario: a-h1.css and b-h2.css become static/css/main.css.

        Integration targets: load_output_graph -> SingleCssBundlePlugin ->
            write_output_graph -> patch_manifest
        Verification:
        - merged payload joined by a single newline
        - originals removed
        - chunk css list is the canonical singleton
        """
        storage = _write_build(
            tmp_path,
            {
                "static/css/a-h1.css": "body{color:red}",
                "static/css/b-h2.css": "p{color:blue}",
                "static/js/main.js": "",
                ".vite/manifest.json": json.dumps(
                    {
                        "src/main.ts": {
                            "file": "static/js/main.js",
                            "css": ["static/css/a-h1.css", "static/css/b-h2.css"],
                        }
                    }
                ),
            },
        )

        run_single_css_bundle(storage=storage)

        files = _snapshot(tmp_path)
        css_files = sorted(name for name in files if name.endswith(".css"))
        assert css_files == ["static/css/main.css"]
        assert files["static/css/main.css"] == b"body{color:red}\np{color:blue}"
        manifest = json.loads(files[".vite/manifest.json"])
        assert manifest["src/main.ts"]["css"] == ["static/css/main.css"]

    def test_build_without_stylesheets_is_unchanged(self, tmp_path):
        storage = _write_build(
            tmp_path,
            {
                "index.html": "<html></html>",
                "static/js/main.js": "",
                "static/media/logo.svg": "<svg/>",
            },
        )
        before = _snapshot(tmp_path)

        result = run_single_css_bundle(storage=storage)

        assert result.fragments == ()
        assert _snapshot(tmp_path) == before

    def test_html_reference_rewritten(self, tmp_path):
        storage = _write_build(
            tmp_path,
            {
                "index.html": '<link rel="stylesheet" href="/static/css/a-h1abcd.css">',
                "static/css/a-h1abcd.css": "a{}",
            },
        )

        run_single_css_bundle(storage=storage)

        assert (tmp_path / "index.html").read_text() == (
            '<link rel="stylesheet" href="/static/css/main.css">'
        )

    def test_custom_directory_isolation(self, tmp_path):
        storage = _write_build(
            tmp_path,
            {
                "static/css/a-h1.css": "a{}",
                "static/css/b-h2.css": "b{}",
            },
        )
        before = _snapshot(tmp_path)

        result = run_single_css_bundle(storage=storage, css_file_name="assets/style.css")

        assert result.fragments == ()
        assert _snapshot(tmp_path) == before

    def test_nested_and_sibling_stylesheets_survive(self, tmp_path):
        storage = _write_build(
            tmp_path,
            {
                "static/css/a.css": "a{}",
                "static/css/themes/dark.css": "dark{}",
                "static/vendor/lib.css": "lib{}",
            },
        )

        run_single_css_bundle(storage=storage)

        files = _snapshot(tmp_path)
        assert files["static/css/themes/dark.css"] == b"dark{}"
        assert files["static/vendor/lib.css"] == b"lib{}"
        assert files["static/css/main.css"] == b"a{}"
        assert "static/css/a.css" not in files

    def test_second_run_is_idempotent(self, build_storage, build_dir):
        """Consolidating an already consolidated build changes nothing.

        Verification:
        - same stylesheet payload
        - same file set
        - same manifest
        """
        run_single_css_bundle(storage=build_storage)
        first = _snapshot(build_dir)

        result = run_single_css_bundle(storage=build_storage)

        assert result.fragments == ("static/css/main.css",)
        assert _snapshot(build_dir) == first

    def test_undecodable_stylesheet_aborts_before_writing(self, tmp_path):
        storage = _write_build(
            tmp_path,
            {
                "index.html": '<link href="/static/css/main-1.css">',
                "static/css/main-1.css": "a{}",
                "static/css/main-2.css": b"\xff\xfe",
            },
        )
        before = _snapshot(tmp_path)

        with pytest.raises(ValueError, match="not valid UTF-8"):
            run_single_css_bundle(storage=storage)

        assert _snapshot(tmp_path) == before

    @override_settings(SINGLE_CSS_BUNDLE={"HTML_SUFFIXES": [".php"]})
    def test_html_suffixes_setting(self, tmp_path):
        storage = _write_build(
            tmp_path,
            {
                "index.html": '<link href="/static/css/main-1.css">',
                "index.php": '<link href="/static/css/main-1.css">',
                "static/css/main-1.css": "a{}",
            },
        )

        result = run_single_css_bundle(storage=storage)

        assert result.html_documents == ("index.php",)
        assert "main-1.css" in (tmp_path / "index.html").read_text()
        assert "main.css" in (tmp_path / "index.php").read_text()
