"""Django app configuration for django-single-css-bundle."""

from django.apps import AppConfig


class SingleCssBundleConfig(AppConfig):
    name = "single_css_bundle"
    verbose_name = "Single CSS Bundle"
