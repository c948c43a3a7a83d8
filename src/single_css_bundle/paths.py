"""Resolve the canonical stylesheet path and the pattern for its variants.

The configured ``CSS_FILE_NAME`` is split into a directory and a base name.
Both are used as the literal output key of the consolidated stylesheet and as
the prefix of a pattern that recognizes any build-time variant of the name,
e.g. ``static/css/main-ab12cd34.css`` for ``static/css/main.css``.
"""

from __future__ import annotations

import posixpath
import re
from typing import NamedTuple

STYLESHEET_EXTENSION = ".css"

_SPECIAL_REGEX_CHARS = re.compile(r"[\\^$.*+?()\[\]{}|]")


class ResolvedTarget(NamedTuple):
    """Canonical stylesheet location derived from one configuration."""

    directory: str
    base_name: str
    canonical_path: str
    match_pattern: re.Pattern[str]


def normalize_path(path: str) -> str:
    """Rewrite Windows separators to forward slashes."""
    return path.replace("\\", "/")


def output_directory(path: str) -> str:
    """Return the directory of an output path, ``""`` for the build root."""
    directory = posixpath.dirname(normalize_path(path).rstrip("/"))
    if directory in ("", "."):
        return ""
    return directory


def split_output_path(path: str) -> tuple[str, str]:
    """Split an output path into ``(directory, base_name)``.

    Never fails: a path without a directory yields ``""`` and a path without
    an extension yields the whole file name as the base name.
    """
    normalized = normalize_path(path)
    base_name, _ = posixpath.splitext(posixpath.basename(normalized.rstrip("/")))
    return output_directory(normalized), base_name


def escape_regex(segment: str) -> str:
    """Backslash-escape every regex metacharacter in ``segment``."""
    return _SPECIAL_REGEX_CHARS.sub(r"\\\g<0>", segment)


def build_match_pattern(
    directory: str,
    base_name: str,
    extension: str = STYLESHEET_EXTENSION,
) -> re.Pattern[str]:
    """Compile a pattern matching ``directory/base_name<anything>extension``.

    The variable part never contains a quote character, so a match cannot
    run past the end of a quoted HTML attribute value.
    """
    prefix = f"{directory}/{base_name}" if directory else base_name
    return re.compile(f"{escape_regex(prefix)}[^\"']*{escape_regex(extension)}")


def resolve_target(css_file_name: str) -> ResolvedTarget:
    """Derive the canonical path, its directory and its variant pattern."""
    canonical_path = normalize_path(css_file_name)
    directory, base_name = split_output_path(canonical_path)
    return ResolvedTarget(
        directory=directory,
        base_name=base_name,
        canonical_path=canonical_path,
        match_pattern=build_match_pattern(directory, base_name),
    )
