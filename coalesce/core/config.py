from __future__ import annotations
# -*- coding: utf-8 -*-

"""
config.py – Builds the AppOptions for a run.

1. Base options: --config file, ./coalesce.yaml, or the built-in defaults.
2. CLI overrides, applied per field by OVERRIDE_STRATEGIES (REPLACE or ADD).
3. Validation: an output path and at least one source directory are required.
"""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml
from pydantic import ValidationError
from pydantic.alias_generators import to_camel

from .errors import (
    ConfigLoadError,
    MissingOutputPath,
    MissingSourceDirectories,
    OptionsValidationError,
)
from .heuristics import DEFAULT_CONFIG_FILE_NAME
from .options import LIST_FIELDS, AppOptions, contains_ignore_case, normalize_ext
from .resources import DEFAULT_CONFIG_RESOURCE, read_resource
from ..adapters.diagnostics import DiagnosticSink, LoggingDiagnostics

REPLACE = "replace"
ADD = "add"

OVERRIDE_STRATEGIES: Dict[str, str] = {
    "output_file_path": REPLACE,
    "source_directory_paths": REPLACE,
    "exclude_directory_names": ADD,
    "exclude_file_names": ADD,
    # A CLI include list is a focused whitelist, so it replaces the configured one.
    "include_extensions": REPLACE,
    "exclude_extensions": ADD,
    "path_only_extensions": ADD,
}

YAML_KEYS = {to_camel(name) for name in ("output_file_path",) + LIST_FIELDS}

USAGE_EXAMPLE = "Example: coalesce coalesce.md ./src"
HELP_SUGGESTION = "Run 'coalesce --help' for a list of commands and options."


@dataclass
class Overrides:
    """Values supplied on the command line. Empty means 'not given'."""

    output_file_path: Optional[str] = None
    source_directory_paths: List[str] = field(default_factory=list)
    exclude_directory_names: List[str] = field(default_factory=list)
    exclude_file_names: List[str] = field(default_factory=list)
    include_extensions: List[str] = field(default_factory=list)
    exclude_extensions: List[str] = field(default_factory=list)
    path_only_extensions: List[str] = field(default_factory=list)

    def __post_init__(self):
        for name in ("include_extensions", "exclude_extensions", "path_only_extensions"):
            values = getattr(self, name) or []
            setattr(self, name, [normalize_ext(v) for v in values if v and v.strip()])


# --- Loading ---------------------------------------------------------------

def parse_options_yaml(content: str, source: str = "<string>") -> AppOptions:
    """
    Empty content (or only comments) gives an all-empty AppOptions.
    Malformed YAML, multiple documents, non-mapping documents and wrongly
    typed values raise ConfigLoadError.
    """
    if not content or not content.strip():
        return AppOptions()

    try:
        data = yaml.safe_load(content)
    except yaml.YAMLError as e:
        raise ConfigLoadError(
            f"Error loading or parsing config file '{source}': The configuration file is malformed. {e}",
            source,
        ) from e

    if data is None:
        return AppOptions()
    if not isinstance(data, dict):
        raise ConfigLoadError(
            f"Error loading or parsing config file '{source}': "
            f"expected a mapping of option names, got {type(data).__name__}.",
            source,
        )

    known: Dict[str, Any] = {k: v for k, v in data.items() if k in YAML_KEYS}
    try:
        return AppOptions.model_validate(known)
    except ValidationError as e:
        raise ConfigLoadError(
            f"Error loading or parsing config file '{source}': {e}",
            source,
        ) from e


def load_options_from_file(path: Path) -> AppOptions:
    try:
        content = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigLoadError(f"Error loading or parsing config file '{path}': {e}", str(path)) from e
    return parse_options_yaml(content, str(path))


def load_default_options() -> AppOptions:
    try:
        content = read_resource(DEFAULT_CONFIG_RESOURCE)
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigLoadError(f"FATAL: Could not load the built-in default configuration. {e}") from e
    try:
        return parse_options_yaml(content, DEFAULT_CONFIG_RESOURCE)
    except ConfigLoadError as e:
        raise ConfigLoadError(f"FATAL: Could not load the built-in default configuration. {e}") from e


def load_options(
    config_path: Optional[os.PathLike] = None,
    diagnostics: Optional[DiagnosticSink] = None,
    cwd: Optional[Path] = None,
) -> AppOptions:
    diagnostics = diagnostics or LoggingDiagnostics()
    resolved: Optional[Path] = None

    if config_path is not None:
        candidate = Path(config_path).expanduser().absolute()
        if not candidate.is_file():
            diagnostics.warning(f"Configuration file specified via --config not found: {candidate}")
            return load_default_options()
        resolved = candidate
    else:
        default_path = (cwd or Path.cwd()) / DEFAULT_CONFIG_FILE_NAME
        if default_path.is_file():
            resolved = default_path

    if resolved is not None:
        diagnostics.info(f"Loading configuration from: {resolved}")
        return load_options_from_file(resolved)

    diagnostics.verbose(f"No '{DEFAULT_CONFIG_FILE_NAME}' found. Using built-in default configuration.")
    return load_default_options()


# --- Overrides & validation ------------------------------------------------

def apply_overrides(
    options: AppOptions,
    overrides: Overrides,
    diagnostics: Optional[DiagnosticSink] = None,
) -> AppOptions:
    """Mutates and returns `options`. Empty override values leave a field untouched."""
    for name, strategy in OVERRIDE_STRATEGIES.items():
        value = getattr(overrides, name)
        if not value:
            continue
        key = to_camel(name)

        if strategy == REPLACE:
            if isinstance(value, str):
                if diagnostics:
                    diagnostics.verbose(f"Overriding '{key}' with CLI argument: '{value}'")
                setattr(options, name, value)
            else:
                if diagnostics:
                    diagnostics.verbose(f"Replacing '{key}' with CLI arguments.")
                setattr(options, name, list(value))
            continue

        if diagnostics:
            diagnostics.verbose(f"Adding to '{key}' from CLI arguments.")
        current: List[str] = getattr(options, name)
        for item in value:
            if not contains_ignore_case(current, item):
                current.append(item)

    return options


def validate_options(options: AppOptions) -> None:
    problems: List[OptionsValidationError] = []
    if not options.output_file_path.strip():
        problems.append(MissingOutputPath())
    if not options.source_directory_paths:
        problems.append(MissingSourceDirectories())

    if len(problems) == 1:
        raise problems[0]
    if problems:
        raise OptionsValidationError("; ".join(str(p) for p in problems), problems)


def build_options(
    overrides: Optional[Overrides] = None,
    config_path: Optional[os.PathLike] = None,
    diagnostics: Optional[DiagnosticSink] = None,
    cwd: Optional[Path] = None,
) -> Optional[AppOptions]:
    """
    Load, override and validate. Returns None on any failure; the reason has
    already been reported to `diagnostics`.
    """
    diagnostics = diagnostics or LoggingDiagnostics()

    try:
        options = load_options(config_path, diagnostics, cwd=cwd)
    except ConfigLoadError as e:
        diagnostics.error(str(e))
        return None

    apply_overrides(options, overrides or Overrides(), diagnostics)

    try:
        validate_options(options)
    except OptionsValidationError as e:
        for problem in e.problems:
            diagnostics.error(str(problem))
        diagnostics.error(USAGE_EXAMPLE)
        diagnostics.suggestion(HELP_SUGGESTION)
        return None

    return options
