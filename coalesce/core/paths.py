from __future__ import annotations
# -*- coding: utf-8 -*-

"""
paths.py – Turns configured output/source paths into absolute, verified locations.
"""

import os
from typing import List

from .errors import NoValidSourceDirectories, PathResolutionError
from .options import AppOptions
from ..adapters.diagnostics import DiagnosticSink


def resolve_output_path(options: AppOptions) -> str:
    """Makes output_file_path absolute in place; its parent directory must exist."""
    options.output_file_path = os.path.abspath(os.path.expanduser(options.output_file_path))
    output_dir = os.path.dirname(options.output_file_path)
    if not output_dir or not os.path.isdir(output_dir):
        raise PathResolutionError(
            f"Output directory not found: '{output_dir}'. Please ensure the directory exists."
        )
    return options.output_file_path


def resolve_source_paths(options: AppOptions, diagnostics: DiagnosticSink) -> List[str]:
    valid: List[str] = []
    for source in options.source_directory_paths:
        full = os.path.abspath(os.path.expanduser(source))
        if not os.path.isdir(full):
            diagnostics.warning(f"Source directory not found: '{full}'. Skipping.")
            continue
        if full in valid:
            diagnostics.verbose(f"Source directory listed more than once: '{full}'. Ignoring repeat.")
            continue
        valid.append(full)
        diagnostics.info(f"- Added Source Directory: {full}")
    return valid


def prepare_paths(options: AppOptions, diagnostics: DiagnosticSink) -> None:
    """
    Resolves the output path, then fills options.valid_source_directory_paths.
    Raises PathResolutionError (or NoValidSourceDirectories) when the run
    cannot proceed.
    """
    resolve_output_path(options)
    valid = resolve_source_paths(options, diagnostics)
    options.set_valid_source_directories(valid)
    if not valid:
        raise NoValidSourceDirectories("No valid source directories were provided or found.")
