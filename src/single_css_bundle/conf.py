"""Configuration and settings for django-single-css-bundle."""

from typing import Any

from django.conf import settings

DEFAULTS: dict[str, Any] = {
    # Canonical output path of the consolidated stylesheet
    "CSS_FILE_NAME": "static/css/main.css",
    # Build output root (falls back to STATIC_ROOT)
    "BUILD_DIR": None,
    # Bundler manifest, relative to the build root
    "MANIFEST_PATH": ".vite/manifest.json",
    "HTML_SUFFIXES": [".html", ".htm"],
    # Storage settings
    "STORAGE_BACKEND": "single_css_bundle.storage.local.LocalFileStorage",
    # Asset optimization
    "MINIFY_CSS": False,
    # Middleware
    "REWRITE_HTML_RESPONSES": True,
}


_UNSET = object()


def get_setting(key: str, default: Any = _UNSET) -> Any:
    """Get a setting from SINGLE_CSS_BUNDLE dict or return default."""
    user_settings: dict[str, Any] = getattr(settings, "SINGLE_CSS_BUNDLE", {})
    fallback = DEFAULTS.get(key) if default is _UNSET else default
    return user_settings.get(key, fallback)
