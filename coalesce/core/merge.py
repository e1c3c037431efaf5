from __future__ import annotations
# -*- coding: utf-8 -*-

"""
merge.py – Drives a run: validate paths, then either preview (dry run) or
write the output, then summarize.

Per-file and per-directory failures are counted and the run continues.
Path resolution failures and failures to open or write the output end the
run; they are reported once and recorded in MergeSummary.error.
"""

import os
from dataclasses import dataclass
from typing import Optional, Tuple, TextIO

from .config import HELP_SUGGESTION
from .errors import (
    EntryWriteError,
    OutputOpenError,
    OutputWriteError,
    PathResolutionError,
)
from .fs_scan import SourceFileProvider
from .options import AppOptions
from .paths import prepare_paths
from .render import ENCODING, OutputFileGenerator
from ..adapters.diagnostics import DiagnosticSink, LoggingDiagnostics


@dataclass
class MergeSummary:
    processed: int = 0
    skipped: int = 0
    dry_run: bool = False
    source_count: int = 0
    # name of the error kind that ended the run, None on success
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


class DirectoryMerger:
    def __init__(
        self,
        options: AppOptions,
        diagnostics: Optional[DiagnosticSink] = None,
        dry_run: bool = False,
    ):
        self.options = options
        self.diagnostics = diagnostics or LoggingDiagnostics()
        self.dry_run = dry_run

    def merge(self) -> MergeSummary:
        summary = MergeSummary(dry_run=self.dry_run)

        try:
            prepare_paths(self.options, self.diagnostics)
        except PathResolutionError as e:
            self.diagnostics.error(str(e))
            self.diagnostics.suggestion(HELP_SUGGESTION)
            summary.error = type(e).__name__
            return summary

        summary.source_count = len(self.options.valid_source_directory_paths)

        if self.dry_run:
            summary.processed = self._execute_dry_run()
        else:
            try:
                summary.processed, summary.skipped = self._execute_merge()
            except (OutputOpenError, OutputWriteError) as e:
                self.diagnostics.error(str(e))
                summary.error = type(e).__name__
                return summary

        self.diagnostics.info("")
        self._print_summary(summary)
        return summary

    # --- phases ------------------------------------------------------------

    def _execute_dry_run(self) -> int:
        self.diagnostics.warning("--- DRY RUN MODE ---")
        self.diagnostics.info("The following files would be included in the merge output:")

        provider = SourceFileProvider(self.options, self.diagnostics)
        count = 0
        for source_directory in self.options.valid_source_directory_paths:
            for file_path in provider.iter_eligible_files(source_directory):
                self.diagnostics.info(f"- {file_path}")
                count += 1
        return count

    def _execute_merge(self) -> Tuple[int, int]:
        output = self.options.output_file_path
        self._safely_delete(output)
        self.diagnostics.info(f"Starting merge process. Output will be saved to: {output}")

        try:
            writer = open(output, "w", encoding=ENCODING)
        except OSError as e:
            raise OutputOpenError(f"Could not open output file '{output}': {e}") from e

        try:
            with writer:
                return self._process_all_sources(writer)
        except OSError as e:
            raise OutputWriteError(output, e) from e

    def _process_all_sources(self, writer: TextIO) -> Tuple[int, int]:
        processed = 0
        skipped = 0
        provider = SourceFileProvider(self.options, self.diagnostics)
        generator = OutputFileGenerator(writer)

        for source_directory in self.options.valid_source_directory_paths:
            self.diagnostics.info(f"--- Processing Source: {source_directory} ---")
            for file_path in provider.iter_eligible_files(source_directory):
                try:
                    generator.write_entry(file_path, self.options)
                    processed += 1
                except EntryWriteError as e:
                    self.diagnostics.warning(str(e))
                    skipped += 1

        return processed, skipped

    def _safely_delete(self, file_path: str) -> None:
        try:
            if os.path.isfile(file_path):
                os.remove(file_path)
                self.diagnostics.info(f"Deleted existing output file: {file_path}")
        except OSError as e:
            self.diagnostics.warning(
                f"Could not delete existing file '{file_path}'. "
                f"It might be locked or protected. Error: {e}"
            )

    def _print_summary(self, summary: MergeSummary) -> None:
        if summary.dry_run:
            if summary.processed > 0:
                self.diagnostics.success(f"Dry run complete. Found {summary.processed} files to include.")
            else:
                self.diagnostics.warning("Dry run complete. No eligible files were found.")
            return

        if summary.processed > 0:
            self.diagnostics.success(
                f"Merging complete. Processed {summary.processed} files "
                f"across {summary.source_count} source directories."
            )
        else:
            self.diagnostics.warning("No eligible files were found in the provided source directories.")

        if summary.skipped > 0:
            self.diagnostics.info(
                f"Skipped {summary.skipped} files (unreadable, excluded, or output file itself)."
            )
