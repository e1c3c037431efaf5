from __future__ import annotations
# -*- coding: utf-8 -*-

"""
render.py – One Markdown section per file.

    ### `relative/path.ext`

    ```lang
    ...file lines...
    ```

    ---

Path-only files get an HTML comment instead of a code block and are never
opened. The horizontal rule closes every section, so sections can simply be
concatenated.
"""

import io
import os
from typing import Optional, TextIO

from .errors import EntryWriteError
from .heuristics import file_extension, lang_for
from .options import AppOptions, contains_ignore_case

ENCODING = "utf-8"


def display_path(file_path: str, cwd: Optional[str] = None) -> str:
    """Path relative to the working directory; absolute if there is no relative form."""
    try:
        return os.path.relpath(file_path, cwd or os.getcwd())
    except ValueError:
        # different drive on Windows
        return file_path


class OutputFileGenerator:
    """
    Renders each entry into a buffer and hands it to `writer` in one call, so
    a failed read never leaves a half-written section behind.

    Read failures raise EntryWriteError; failures of `writer` itself are
    OSError and propagate unchanged.
    """

    def __init__(self, writer: TextIO):
        self.writer = writer

    def write_entry(self, file_path: str, options: AppOptions) -> None:
        file_path = os.fspath(file_path)
        file_name = os.path.basename(file_path)
        ext = file_extension(file_name)
        path_only = contains_ignore_case(options.path_only_extensions, ext) if ext else False

        section = io.StringIO()
        if path_only:
            _write_header(section, file_path)
            section.write(f"<!-- Content of binary file '{file_name}' not included. -->\n")
        else:
            try:
                with open(file_path, "r", encoding=ENCODING, errors="replace") as src:
                    _write_header(section, file_path)
                    section.write(f"```{lang_for(ext)}\n")
                    for line in src:
                        section.write(line if line.endswith("\n") else line + "\n")
                    section.write("```\n")
            except OSError as e:
                raise EntryWriteError(file_path, e) from e

        section.write("\n---\n\n")
        self.writer.write(section.getvalue())


def _write_header(section: TextIO, file_path: str) -> None:
    section.write(f"### `{display_path(file_path)}`\n\n")
