from __future__ import annotations
# -*- coding: utf-8 -*-

"""
heuristics.py – Static tables: extension → fence language, well-known names.
"""

from pathlib import Path

# Keys are lower-case extensions including the leading dot.
LANG_MAP = {
    # Web
    ".html": "html", ".htm": "html", ".css": "css", ".scss": "scss", ".sass": "sass",
    ".js": "javascript", ".jsx": "javascript", ".mjs": "javascript", ".cjs": "javascript",
    ".ts": "typescript", ".tsx": "typescript", ".svelte": "svelte", ".vue": "vue",
    ".json": "json", ".xml": "xml", ".md": "markdown",
    # C# / .NET
    ".cs": "csharp", ".csproj": "xml", ".sln": "text", ".props": "xml", ".targets": "xml",
    ".razor": "razor", ".xaml": "xml", ".fs": "fsharp", ".vb": "vbnet",
    # Systems
    ".c": "c", ".h": "c", ".cpp": "cpp", ".hpp": "cpp", ".cc": "cpp",
    ".rs": "rust", ".go": "go", ".java": "java", ".kt": "kotlin", ".swift": "swift",
    # Scripting
    ".py": "python", ".rb": "ruby", ".php": "php", ".pl": "perl", ".lua": "lua",
    ".sh": "shell", ".bash": "bash", ".bat": "batch", ".cmd": "batch", ".ps1": "powershell",
    ".sql": "sql",
    # Config / data
    ".yaml": "yaml", ".yml": "yaml", ".toml": "toml", ".ini": "ini",
    ".dockerfile": "dockerfile", ".tf": "hcl", ".hcl": "hcl",
    ".txt": "text",
}

# Name of the configuration file picked up from the working directory.
DEFAULT_CONFIG_FILE_NAME = "coalesce.yaml"

# Packaged resources (default config, presets, run scripts).
RESOURCES_DIR = Path(__file__).resolve().parent.parent / "resources"


def file_extension(file_name: str) -> str:
    """
    Extension of a bare file name, leading dot included.

    Dotfiles count as their own extension ('.gitignore'); a trailing dot or a
    name without dots yields ''.
    """
    dot = file_name.rfind(".")
    if dot == -1 or dot == len(file_name) - 1:
        return ""
    return file_name[dot:]


def lang_for(ext: str) -> str:
    return LANG_MAP.get(ext.lower(), "")
