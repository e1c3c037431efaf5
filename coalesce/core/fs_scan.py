from __future__ import annotations
# -*- coding: utf-8 -*-

"""
fs_scan.py – Walks a source directory and yields the eligible files.

Traversal is depth-first: in every directory its files come first in lexical
order, then its subdirectories in lexical order. Symlinked directories are
not followed. Each call to iter_eligible_files() walks the tree again.
"""

import os
from typing import Iterator, List, Optional

from .errors import DirectoryAccessError
from .file_filter import FileFilter
from .options import AppOptions
from ..adapters.diagnostics import DiagnosticSink, LoggingDiagnostics


def iter_files(source_directory: str, on_error=None) -> Iterator[str]:
    """All regular files below `source_directory`, absolute, in stable order."""

    def _onerror(err: OSError) -> None:
        if on_error is not None:
            on_error(DirectoryAccessError(err.filename or source_directory, err))

    for dirpath, dirnames, filenames in os.walk(source_directory, topdown=True, onerror=_onerror):
        dirnames.sort()
        for fn in sorted(filenames):
            yield os.path.join(dirpath, fn)


class SourceFileProvider:
    def __init__(self, options: AppOptions, diagnostics: Optional[DiagnosticSink] = None):
        self.options = options
        self.diagnostics = diagnostics or LoggingDiagnostics()
        self.file_filter = FileFilter(options, self.diagnostics)
        self.access_errors: List[DirectoryAccessError] = []

    def _report(self, error: DirectoryAccessError) -> None:
        self.access_errors.append(error)
        self.diagnostics.warning(str(error))

    def iter_eligible_files(self, source_directory: str) -> Iterator[str]:
        source_directory = os.fspath(source_directory)
        if not os.path.isdir(source_directory):
            self._report(DirectoryAccessError(source_directory, FileNotFoundError("directory not found")))
            return

        for file_path in iter_files(source_directory, on_error=self._report):
            if self.file_filter.should_skip(file_path, source_directory):
                continue
            yield file_path
