"""Middleware pointing stylesheet references at the consolidated stylesheet."""

from __future__ import annotations

import logging
from collections.abc import Callable

from django.http import HttpRequest, HttpResponse

from .conf import get_setting
from .paths import resolve_target
from .rewriter import rewrite_html

logger = logging.getLogger(__name__)


class SingleCssMiddleware:
    """Rewrite stylesheet links in rendered HTML to the canonical stylesheet.

    Templates may still reference hashed fragment names such as
    ``static/css/main-ab12cd34.css``. Once the build has been consolidated
    those files no longer exist, so every variant of the canonical name is
    rewritten. Streaming and non-HTML responses pass through untouched.
    """

    def __init__(self, get_response: Callable[[HttpRequest], HttpResponse]) -> None:
        self.get_response = get_response

    def __call__(self, request: HttpRequest) -> HttpResponse:
        response = self.get_response(request)

        if not get_setting("REWRITE_HTML_RESPONSES"):
            return response

        if getattr(response, "streaming", False):
            return response

        content_type = response.get("Content-Type", "")
        if "text/html" not in content_type:
            return response

        target = resolve_target(get_setting("CSS_FILE_NAME"))
        charset = response.charset or "utf-8"
        content = response.content.decode(charset)
        rewritten = rewrite_html(content, target)
        if rewritten == content:
            return response

        response.content = rewritten.encode(charset)
        response["Content-Length"] = len(response.content)
        logger.debug("Rewrote stylesheet references for %s", request.path)

        return response
