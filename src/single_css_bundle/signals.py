"""Signals sent by django-single-css-bundle.

``stylesheets_consolidated`` fires after the pipeline has written a
consolidated stylesheet. Receivers get ``canonical_path`` and the merged
``fragments`` as keyword arguments, e.g. to purge a CDN cache.
"""

from __future__ import annotations

from django.dispatch import Signal

stylesheets_consolidated = Signal()
