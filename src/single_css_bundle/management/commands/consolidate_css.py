"""Management command to consolidate a build's stylesheets."""

from __future__ import annotations

import logging

from django.core.management.base import BaseCommand, CommandError, CommandParser

logger = logging.getLogger(__name__)


class Command(BaseCommand):
    help = "Merge the stylesheets of a finished build into one stylesheet."

    def add_arguments(self, parser: CommandParser) -> None:
        parser.add_argument(
            "--build-dir",
            help="Build output directory. Defaults to the BUILD_DIR setting, then STATIC_ROOT.",
        )
        parser.add_argument(
            "--css-file-name",
            help="Canonical stylesheet path relative to the build directory.",
        )
        parser.add_argument(
            "--manifest",
            help="Bundler manifest path relative to the build directory.",
        )
        parser.add_argument(
            "--dry-run",
            action="store_true",
            help="Show what would be merged without writing anything.",
        )

    def handle(self, **options: object) -> None:
        from single_css_bundle.pipeline import get_storage, run_single_css_bundle
        from single_css_bundle.storage.local import LocalFileStorage

        build_dir = options.get("build_dir")
        dry_run = bool(options.get("dry_run"))

        try:
            storage = LocalFileStorage(build_dir) if build_dir else get_storage()  # type: ignore[arg-type]
            result = run_single_css_bundle(
                storage=storage,
                css_file_name=options.get("css_file_name"),  # type: ignore[arg-type]
                manifest_path=options.get("manifest"),  # type: ignore[arg-type]
                dry_run=dry_run,
            )
        except Exception as exc:
            logger.exception("Failed to consolidate stylesheets")
            raise CommandError(f"Stylesheet consolidation failed: {exc}") from exc

        prefix = "[DRY RUN] " if dry_run else ""
        if not result.fragments:
            self.stdout.write(
                f"{prefix}No stylesheets to merge for {result.canonical_path}."
            )
        else:
            verb = "Would merge" if dry_run else "Merged"
            for fragment in result.fragments:
                self.stdout.write(f"  {verb}: {fragment}")
        for document in result.html_documents:
            self.stdout.write(f"  {prefix}Rewrote: {document}")

        self.stdout.write(
            self.style.SUCCESS(
                f"\n{prefix}Done. Stylesheets: {len(result.fragments)}, "
                f"HTML documents: {len(result.html_documents)}"
            )
        )
