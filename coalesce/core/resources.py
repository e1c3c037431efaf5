from __future__ import annotations
# -*- coding: utf-8 -*-

"""
resources.py – Access to the files shipped inside the package
(default configuration, presets, run scripts).
"""

from pathlib import Path
from typing import List

from .heuristics import RESOURCES_DIR

DEFAULT_CONFIG_RESOURCE = "default_config.yaml"
PRESETS_README_RESOURCE = "presets/_readme.md"
RUN_SCRIPT_SH_RESOURCE = "coalesce-run.sh"
RUN_SCRIPT_BAT_RESOURCE = "coalesce-run.bat"


def resource_path(name: str) -> Path:
    return RESOURCES_DIR / name


def read_resource(name: str) -> str:
    """Raises FileNotFoundError when the resource is not part of the install."""
    path = resource_path(name)
    if not path.is_file():
        raise FileNotFoundError(f"Could not find embedded resource '{name}'.")
    return path.read_text(encoding="utf-8")


def builtin_preset_names() -> List[str]:
    presets_dir = RESOURCES_DIR / "presets"
    if not presets_dir.is_dir():
        return []
    return sorted(
        p.stem for p in presets_dir.glob("*.yaml") if not p.name.startswith("_")
    )


def read_builtin_preset(name: str) -> str:
    return read_resource(f"presets/{name.lower()}.yaml")
