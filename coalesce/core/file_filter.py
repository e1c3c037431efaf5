from __future__ import annotations
# -*- coding: utf-8 -*-

"""
file_filter.py – Decides whether a single candidate file is skipped.

Rules are checked in a fixed order and the first match wins, so the verbose
message always names the most specific reason:

1. the file is the output file itself
2. its name is in excludeFileNames
3. a directory segment between the source root and the file is in excludeDirectoryNames
4. its extension is in excludeExtensions
5. includeExtensions is set and the extension is in neither includeExtensions
   nor pathOnlyExtensions
"""

import os
import re
from typing import Optional

from .heuristics import file_extension
from .options import AppOptions, lowered
from ..adapters.diagnostics import DiagnosticSink

# Only the platform separators: a backslash is an ordinary name character on POSIX.
_SEPARATORS = re.compile("[" + re.escape(os.sep + (os.altsep or "")) + "]")


class FileFilter:
    def __init__(self, options: AppOptions, diagnostics: Optional[DiagnosticSink] = None):
        self.options = options
        self.diagnostics = diagnostics
        self._output = options.output_file_path.lower()
        self._file_names = lowered(options.exclude_file_names)
        self._dir_names = lowered(options.exclude_directory_names)
        self._exclude_exts = lowered(options.exclude_extensions)
        self._include_exts = lowered(options.include_extensions)
        self._path_only_exts = lowered(options.path_only_extensions)

    def _skip(self, message: str) -> bool:
        if self.diagnostics:
            self.diagnostics.verbose(message)
        return True

    def should_skip(self, file_path: str, source_root: str) -> bool:
        file_path = os.fspath(file_path)
        source_root = os.fspath(source_root)

        if file_path.lower() == self._output:
            return self._skip(f"Skipping '{file_path}' because it is the output file.")

        file_name = os.path.basename(file_path)
        if file_name.lower() in self._file_names:
            return self._skip(f"Skipping '{file_name}' due to 'excludeFileNames' rule.")

        if self._dir_names:
            rel = os.path.relpath(file_path, source_root)
            segments = _SEPARATORS.split(rel)
            # last segment is the file name
            for segment in segments[:-1]:
                if segment.lower() in self._dir_names:
                    return self._skip(
                        f"Skipping '{file_path}' because it's in an excluded directory ('{segment}')."
                    )

        ext = file_extension(file_name)
        if self._exclude_exts and ext.lower() in self._exclude_exts:
            return self._skip(f"Skipping '{file_name}' due to 'excludeExtensions' rule for '{ext}'.")

        if self._include_exts:
            key = ext.lower()
            if key not in self._include_exts and key not in self._path_only_exts:
                return self._skip(
                    f"Skipping '{file_name}' because its extension ('{ext}') is not in "
                    f"'includeExtensions' or 'pathOnlyExtensions'."
                )

        return False
