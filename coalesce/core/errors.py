from __future__ import annotations
# -*- coding: utf-8 -*-

"""
errors.py – Error kinds raised along the config → filter → emit pipeline.

Errors local to one file or one source directory are recovered by the caller
and end up in skip counts. Errors that make the configuration or the
destination meaningless abort the run and are reported once.
"""

from typing import List, Optional


class CoalesceError(Exception):
    """Base class for all coalesce errors."""


class ConfigLoadError(CoalesceError):
    """The base configuration could not be read or parsed."""

    def __init__(self, message: str, source: Optional[str] = None):
        super().__init__(message)
        self.source = source


class OptionsValidationError(CoalesceError):
    """The merged options are unusable. `problems` lists every failed check."""

    def __init__(self, message: str, problems: Optional[List["OptionsValidationError"]] = None):
        super().__init__(message)
        self.problems: List[OptionsValidationError] = problems if problems is not None else [self]


class MissingOutputPath(OptionsValidationError):
    def __init__(self):
        super().__init__(
            "Missing output file path. Please specify it as an argument or in your config file."
        )


class MissingSourceDirectories(OptionsValidationError):
    def __init__(self):
        super().__init__(
            "Missing source directories. Please provide at least one source directory "
            "as an argument or in your config file."
        )


class PathResolutionError(CoalesceError):
    """The output directory does not exist."""


class NoValidSourceDirectories(PathResolutionError):
    """None of the configured source directories exists."""


class DirectoryAccessError(CoalesceError):
    """A source directory (or one of its subdirectories) could not be listed."""

    def __init__(self, path: str, cause: Optional[BaseException] = None):
        detail = f" Error: {cause}" if cause else ""
        super().__init__(f"Could not access directory '{path}'. Skipping.{detail}")
        self.path = path


class EntryWriteError(CoalesceError):
    """A single file could not be opened or read while rendering its entry."""

    def __init__(self, path: str, cause: Optional[BaseException] = None):
        detail = f" {cause}" if cause else ""
        super().__init__(f"Could not process file '{path}'.{detail}")
        self.path = path


class OutputOpenError(CoalesceError):
    """The destination file could not be created or opened."""


class OutputWriteError(CoalesceError):
    """Writing to the already opened destination failed (e.g. disk full)."""

    def __init__(self, path: str, cause: Optional[BaseException] = None):
        detail = f" {cause}" if cause else ""
        super().__init__(f"Could not write to output file '{path}'.{detail}")
        self.path = path
