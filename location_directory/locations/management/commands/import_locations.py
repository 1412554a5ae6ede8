"""
Management command to import locations from delimited spreadsheet exports.

Usage:
    python manage.py import_locations <path ...>
    python manage.py import_locations data/*.csv --dry-run
    python manage.py import_locations data/ --verbose
"""

import glob
import logging
import time
from pathlib import Path
from typing import List

from django.core.management.base import BaseCommand, CommandParser

from locations.services.exceptions import ImportFileError
from locations.services.importer import run_import
from locations.services.report import ImportResult
from locations.services.store import DjangoLocationStore, DryRunLocationStore

logger = logging.getLogger(__name__)

SUPPORTED_EXTENSIONS = (".csv", ".tsv", ".txt")


class Command(BaseCommand):
    """
    Management command to import location files.
    """

    help = "Import locations from CSV, TSV or semicolon-separated text files"

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.stats = {
            "files_seen": 0,
            "files_processed": 0,
            "files_skipped": 0,
            "files_failed": 0,
            "rows": 0,
            "inserted": 0,
            "updated": 0,
            "skipped": 0,
        }
        self.reasons = []
        self.start_time = None
        self.dry_run = False
        self.verbose = False

    def add_arguments(self, parser: CommandParser) -> None:
        """
        Add command line arguments.
        """
        parser.add_argument(
            "paths",
            nargs="+",
            type=str,
            help="File paths, directory paths, or glob patterns to import",
        )

        parser.add_argument(
            "--dry-run",
            action="store_true",
            default=False,
            help="Parse and validate only, do not save to database",
        )

        parser.add_argument(
            "--verbose",
            action="store_true",
            default=False,
            help="Enable verbose debug logging",
        )

    def handle(self, *args, **options) -> None:
        """
        Main command handler.
        """
        self.start_time = time.time()
        self.dry_run = options["dry_run"]
        self.verbose = options["verbose"]

        if self.verbose:
            logging.getLogger("locations").setLevel(logging.DEBUG)
            self.stdout.write("Verbose logging enabled")

        if self.dry_run:
            self.stdout.write(
                self.style.WARNING("DRY RUN MODE - No data will be saved")
            )

        files_to_process = self._discover_files(options["paths"])

        if not files_to_process:
            self.stdout.write(self.style.ERROR("No files found to process"))
            return

        self.stdout.write(f"Found {len(files_to_process)} files to process")

        store = DryRunLocationStore() if self.dry_run else DjangoLocationStore()

        for file_path in files_to_process:
            self._process_file(file_path, store)

        self._print_summary()

    def _discover_files(self, paths: List[str]) -> List[Path]:
        """
        Discover all files to process from paths and globs.
        """
        files_to_process = []

        for path_str in paths:
            path = Path(path_str)

            if "*" in path_str or "?" in path_str:
                for glob_file in sorted(glob.glob(path_str, recursive=True)):
                    file_path = Path(glob_file)
                    if file_path.is_file():
                        files_to_process.append(file_path)

            elif path.is_file():
                files_to_process.append(path)

            elif path.is_dir():
                files_to_process.extend(
                    sorted(p for p in path.rglob("*") if p.is_file())
                )

            else:
                self.stdout.write(self.style.WARNING(f"Path not found: {path_str}"))

        self.stats["files_seen"] = len(files_to_process)

        supported_files = []
        for file_path in files_to_process:
            if file_path.suffix.lower() in SUPPORTED_EXTENSIONS:
                supported_files.append(file_path)
            else:
                self.stats["files_skipped"] += 1
                logger.info(f"Skipping unsupported file type: {file_path}")

        return supported_files

    def _process_file(self, file_path: Path, store) -> None:
        """
        Import a single file and fold its result into the totals.
        """
        self.stdout.write(f"Processing: {file_path}")

        try:
            result = run_import(file_path.read_bytes(), store=store)
        except (ImportFileError, OSError) as e:
            self.stats["files_failed"] += 1
            logger.error(f"Error importing {file_path}: {e}")
            self.stdout.write(self.style.ERROR(f"Error processing {file_path}: {e}"))
            return

        self.stats["files_processed"] += 1
        self._accumulate(file_path, result)

        self.stdout.write(
            f"  {result.rows} rows: {result.inserted} inserted, "
            f"{result.updated} updated, {result.skipped} skipped "
            f"(delimiter {result.delimiter!r})"
        )

    def _accumulate(self, file_path: Path, result: ImportResult) -> None:
        for key in ("rows", "inserted", "updated", "skipped"):
            self.stats[key] += getattr(result, key)

        for reason in result.reasons:
            self.reasons.append((file_path.name, reason))

    def _print_summary(self) -> None:
        """
        Print a formatted summary table of the import operation.
        """
        duration = time.time() - self.start_time

        self.stdout.write("\n" + "=" * 60)
        self.stdout.write(self.style.SUCCESS("LOCATION IMPORT SUMMARY"))
        self.stdout.write("=" * 60)

        self.stdout.write(f"Files seen:       {self.stats['files_seen']}")
        self.stdout.write(f"Files processed:  {self.stats['files_processed']}")
        self.stdout.write(f"Files skipped:    {self.stats['files_skipped']}")
        self.stdout.write(f"Files failed:     {self.stats['files_failed']}")

        self.stdout.write(f"\nRows read:        {self.stats['rows']}")
        self.stdout.write(f"Rows skipped:     {self.stats['skipped']}")

        if not self.dry_run:
            self.stdout.write(f"\nLocations inserted: {self.stats['inserted']}")
            self.stdout.write(f"Locations updated:  {self.stats['updated']}")
        else:
            self.stdout.write(
                f"\n{self.style.WARNING('DRY RUN - No database changes made')}"
            )
            self.stdout.write(f"Would insert:     {self.stats['inserted']}")
            self.stdout.write(f"Would update:     {self.stats['updated']}")

        if self.reasons:
            self.stdout.write("\nFirst skipped rows:")
            for file_name, reason in self.reasons[:10]:
                self.stdout.write(
                    f"  {file_name} row {reason.idx}: {reason.reason} "
                    f"(name={reason.name!r}, sourceid={reason.sourceid!r})"
                )

        self.stdout.write(f"\nDuration:         {duration:.2f} seconds")
        self.stdout.write("=" * 60)

        if self.stats["files_failed"] or self.stats["skipped"]:
            self.stdout.write(
                self.style.WARNING(
                    f"Import completed with {self.stats['skipped']} skipped rows "
                    f"and {self.stats['files_failed']} failed files. "
                    "Check logs for details."
                )
            )
        else:
            self.stdout.write(self.style.SUCCESS("Import completed successfully!"))
