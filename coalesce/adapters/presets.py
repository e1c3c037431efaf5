from __future__ import annotations
# -*- coding: utf-8 -*-

"""
presets.py – Configuration presets and the `init` command.

Built-in presets ship in coalesce/resources/presets. User presets live in
$COALESCE_PRESETS_DIR (default ~/.coalesce/presets) and win over built-ins
with the same name.
"""

import os
import stat
import sys
from pathlib import Path
from typing import Dict, List, Optional

from .diagnostics import DiagnosticSink
from ..core.heuristics import DEFAULT_CONFIG_FILE_NAME
from ..core.resources import (
    DEFAULT_CONFIG_RESOURCE,
    PRESETS_README_RESOURCE,
    RUN_SCRIPT_BAT_RESOURCE,
    RUN_SCRIPT_SH_RESOURCE,
    builtin_preset_names,
    read_builtin_preset,
    read_resource,
)

PRESETS_ENV = "COALESCE_PRESETS_DIR"
PRESETS_README_FILE_NAME = "_readme.md"
PRESETS_TEMPLATE_FILE_NAME = "_template.yaml"
BATCH_FILE_NAME = "coalesce-run.bat"
SHELL_FILE_NAME = "coalesce-run.sh"


def presets_dir() -> Path:
    env = os.environ.get(PRESETS_ENV)
    if env:
        return Path(env).expanduser()
    return Path.home() / ".coalesce" / "presets"


def ensure_presets_dir(diagnostics: DiagnosticSink) -> Optional[Path]:
    """Creates the presets directory and seeds readme/template. Failures are warnings."""
    path = presets_dir()
    try:
        if not path.is_dir():
            path.mkdir(parents=True, exist_ok=True)
            diagnostics.verbose(f"Created presets directory: {path}")

        readme = path / PRESETS_README_FILE_NAME
        if not readme.exists():
            readme.write_text(read_resource(PRESETS_README_RESOURCE), encoding="utf-8")

        template = path / PRESETS_TEMPLATE_FILE_NAME
        if not template.exists():
            template.write_text(read_resource(DEFAULT_CONFIG_RESOURCE), encoding="utf-8")
    except OSError as e:
        diagnostics.warning(f"Could not create or write to the presets directory '{path}': {e}")
        return None
    return path


def custom_preset_names(diagnostics: DiagnosticSink) -> List[str]:
    path = presets_dir()
    if not path.is_dir():
        return []
    try:
        return [p.stem for p in path.glob("*.yaml") if not p.stem.startswith("_")]
    except OSError as e:
        diagnostics.warning(f"Could not read custom presets from '{path}': {e}")
        return []


def list_presets(diagnostics: DiagnosticSink) -> Dict[str, str]:
    """Preset name → label; also reported through `diagnostics`."""
    ensure_presets_dir(diagnostics)

    custom = {n.lower(): n for n in custom_preset_names(diagnostics)}
    builtin = {n.lower(): n for n in builtin_preset_names()}

    listing: Dict[str, str] = {}
    for key in sorted(set(custom) | set(builtin)):
        if key in custom and key in builtin:
            listing[custom[key]] = "custom, overrides built-in"
        elif key in custom:
            listing[custom[key]] = "custom"
        else:
            listing[builtin[key]] = "built-in"

    diagnostics.info("Available presets:")
    for name, label in listing.items():
        diagnostics.info(f"- {name} ({label})")
    return listing


def show_presets_path(diagnostics: DiagnosticSink) -> Optional[Path]:
    path = ensure_presets_dir(diagnostics)
    if path is None:
        diagnostics.error("Could not determine the presets directory path.")
        return None
    diagnostics.info(str(path))
    return path


def get_preset_content(name: str, diagnostics: DiagnosticSink) -> Optional[str]:
    user_preset = presets_dir() / f"{name}.yaml"
    if user_preset.is_file():
        try:
            diagnostics.verbose(f"Loading user-defined preset from: {user_preset}")
            return user_preset.read_text(encoding="utf-8")
        except OSError as e:
            diagnostics.warning(f"Could not read user preset file '{user_preset}': {e}")

    if name.lower() in builtin_preset_names():
        try:
            diagnostics.verbose(f"Loading built-in preset: {name}")
            return read_builtin_preset(name)
        except OSError as e:
            diagnostics.error(f"Could not load built-in preset '{name}': {e}")
            return None

    return None


# --- init ------------------------------------------------------------------

def _write_if_absent(path: Path, content: str, label: str, diagnostics: DiagnosticSink) -> bool:
    if path.exists():
        diagnostics.warning(f"{label} '{path.name}' already exists. Generation skipped.")
        diagnostics.info(str(path))
        return False
    try:
        # newline="" keeps the line endings of `content` as they are
        with path.open("w", encoding="utf-8", newline="") as fh:
            fh.write(content)
    except OSError as e:
        diagnostics.error(f"Failed to generate '{path.name}': {e}")
        return False
    return True


def generate_run_script(target_dir: Path, diagnostics: DiagnosticSink, platform: Optional[str] = None) -> Optional[Path]:
    platform = platform or sys.platform
    try:
        if platform.startswith("win"):
            content = read_resource(RUN_SCRIPT_BAT_RESOURCE).replace("\r\n", "\n").replace("\n", "\r\n")
            path = target_dir / BATCH_FILE_NAME
            if _write_if_absent(path, content, "Batch file", diagnostics):
                diagnostics.success(f"Created Windows run script: {path}")
                return path
            return None

        content = read_resource(RUN_SCRIPT_SH_RESOURCE).replace("\r\n", "\n")
    except OSError as e:
        diagnostics.error(f"Failed to generate run script: {e}")
        return None

    path = target_dir / SHELL_FILE_NAME
    if not _write_if_absent(path, content, "Shell script", diagnostics):
        return None
    try:
        path.chmod(path.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
    except OSError as e:
        diagnostics.warning(f"Could not mark '{path.name}' as executable: {e}")
        diagnostics.info(f"-> To make it executable, run: chmod +x {SHELL_FILE_NAME}")
    diagnostics.success(f"Created Linux/macOS run script: {path}")
    return path


def generate_default_config(
    preset: Optional[str],
    diagnostics: DiagnosticSink,
    target_dir: Optional[Path] = None,
    platform: Optional[str] = None,
) -> bool:
    """Writes coalesce.yaml (and a run script) into `target_dir`. False if the preset is unknown."""
    target_dir = target_dir or Path.cwd()
    ensure_presets_dir(diagnostics)

    if not preset or not preset.strip():
        try:
            content: Optional[str] = read_resource(DEFAULT_CONFIG_RESOURCE)
        except OSError as e:
            diagnostics.error(f"Could not load the built-in default configuration. {e}")
            return False
        source_name = "default configuration"
    else:
        content = get_preset_content(preset, diagnostics)
        source_name = f"preset '{preset}'"

    if content is None:
        diagnostics.error(f"Preset '{preset}' not found.")
        diagnostics.suggestion("Run 'coalesce preset list' to see all available presets.")
        return False

    config_path = target_dir / DEFAULT_CONFIG_FILE_NAME
    if _write_if_absent(config_path, content, "Configuration file", diagnostics):
        diagnostics.success(f"Created configuration file from {source_name}: {config_path}")

    generate_run_script(target_dir, diagnostics, platform=platform)
    return True
