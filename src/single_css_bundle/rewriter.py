"""Rewrite stylesheet references in generated HTML documents."""

from __future__ import annotations

import re
from collections.abc import Iterable

from .paths import ResolvedTarget, escape_regex


def fragment_pattern(fragment: str) -> re.Pattern[str]:
    """Compile a pattern matching a whole reference to ``fragment``.

    The reference starts the document or follows a quote, ``=`` or
    whitespace and may carry a ``/`` or ``./`` prefix. It ends at a quote,
    whitespace, ``>``, ``?``, ``#`` or the end of input.
    """
    return re.compile(
        r"(?:(?<=[\"'=\s])|^)(?P<prefix>\.?/)?"
        + escape_regex(fragment)
        + r"(?=[\"'\s?#>]|$)"
    )


def rewrite_html(
    html: str,
    target: ResolvedTarget,
    fragments: Iterable[str] = (),
) -> str:
    """Point stylesheet references in ``html`` at the canonical stylesheet.

    Every variant of the canonical name is replaced. ``fragments`` lists
    stylesheet paths merged during the same build; whole references to
    those are replaced too.
    """
    canonical_path = target.canonical_path
    for fragment in set(fragments):
        if fragment and fragment != canonical_path:
            html = fragment_pattern(fragment).sub(
                lambda match: (match.group("prefix") or "") + canonical_path, html
            )
    return target.match_pattern.sub(lambda _match: canonical_path, html)
