#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
coalesce – merge the source files of one or more directories into a single
Markdown document.

    coalesce [output-file] [source-dirs ...] [options]
    coalesce init [--preset NAME]
    coalesce preset list|path
"""

from __future__ import annotations

import argparse
import sys
from typing import List, Optional

from ..adapters.diagnostics import DiagnosticsConfig, create_console_diagnostics
from ..adapters.presets import generate_default_config, list_presets, show_presets_path
from ..core.config import Overrides, build_options
from ..core.merge import DirectoryMerger

SUBCOMMANDS = ("init", "preset")
OUTPUT_FLAGS = ("-q", "--quiet", "-v", "--verbose", "--no-color")


def _add_output_flags(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("-q", "--quiet", action="store_true",
                        help="Suppresses all informational output. Only warnings and errors will be displayed.")
    parser.add_argument("-v", "--verbose", action="store_true",
                        help="Enables detailed output, showing why files are skipped and how configuration is applied.")
    parser.add_argument("--no-color", action="store_true", help="Disable colored console output.")


def build_merge_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="coalesce",
        description="A tool to merge multiple source files into a single output file, "
                    "respecting directory structure and file types.",
        epilog="Other commands: 'coalesce init [--preset NAME]', 'coalesce preset list|path'.",
    )
    parser.add_argument("output_file", nargs="?", metavar="output-file",
                        help="Path for the merged output file. Required if not in config.")
    parser.add_argument("source_dirs", nargs="*", metavar="source-dirs",
                        help="Source directories to scan. Required if not in config.")
    parser.add_argument("--exclude-dir", action="extend", nargs="+", default=[], metavar="NAME",
                        help="Excludes a directory by name (e.g. 'node_modules'). Can be used multiple times.")
    parser.add_argument("--exclude-file", action="extend", nargs="+", default=[], metavar="NAME",
                        help="Excludes a file by name (e.g. 'package-lock.json'). Can be used multiple times.")
    parser.add_argument("--include-ext", action="extend", nargs="+", default=[], metavar="EXT",
                        help="Includes a file extension (e.g. '.md'). Replaces the config list. Can be used multiple times.")
    parser.add_argument("--exclude-ext", action="extend", nargs="+", default=[], metavar="EXT",
                        help="Excludes a file extension (e.g. '.log'). Can be used multiple times.")
    parser.add_argument("--path-only-ext", action="extend", nargs="+", default=[], metavar="EXT",
                        help="Includes a file by path only, without its content (e.g. '.dll'). Can be used multiple times.")
    parser.add_argument("--config", metavar="FILE",
                        help="Path to a YAML configuration file. If not provided, 'coalesce.yaml' "
                             "in the current directory is used if it exists.")
    parser.add_argument("--dry-run", action="store_true",
                        help="Simulates a merge, printing which files would be included without writing the output file.")
    _add_output_flags(parser)
    return parser


def build_command_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="coalesce")
    sub = parser.add_subparsers(dest="command", required=True)

    init = sub.add_parser("init", help="Generates a default 'coalesce.yaml' and run script in the current directory.")
    init.add_argument("--preset", help="Initializes 'coalesce.yaml' from a built-in or custom preset template.")
    _add_output_flags(init)

    preset = sub.add_parser("preset", help="Manage configuration presets.")
    preset_sub = preset.add_subparsers(dest="preset_command", required=True)
    for name, text in (("list", "Lists all available built-in and custom presets."),
                       ("path", "Displays the path to the user's presets directory.")):
        p = preset_sub.add_parser(name, help=text)
        _add_output_flags(p)
    return parser


def _diagnostics_for(args: argparse.Namespace):
    return create_console_diagnostics(
        DiagnosticsConfig(quiet=args.quiet, verbose=args.verbose, no_color=args.no_color)
    )


def run_merge(args: argparse.Namespace) -> int:
    diagnostics = _diagnostics_for(args)

    overrides = Overrides(
        output_file_path=args.output_file,
        source_directory_paths=list(args.source_dirs),
        exclude_directory_names=args.exclude_dir,
        exclude_file_names=args.exclude_file,
        include_extensions=args.include_ext,
        exclude_extensions=args.exclude_ext,
        path_only_extensions=args.path_only_ext,
    )
    options = build_options(overrides, config_path=args.config, diagnostics=diagnostics)
    if options is None:
        return 1

    try:
        summary = DirectoryMerger(options, diagnostics, dry_run=args.dry_run).merge()
    except Exception as e:
        diagnostics.error(f"An unexpected error occurred: {e}")
        return 1
    return 0 if summary.ok else 1


def run_command(args: argparse.Namespace) -> int:
    diagnostics = _diagnostics_for(args)
    if args.command == "init":
        return 0 if generate_default_config(args.preset, diagnostics) else 1
    if args.preset_command == "list":
        list_presets(diagnostics)
        return 0
    return 0 if show_presets_path(diagnostics) is not None else 1


def _command_argv(argv: List[str]) -> Optional[List[str]]:
    """
    argv reordered for the subcommand parser, or None for a merge run.
    Output flags may precede the subcommand: 'coalesce -v init' == 'coalesce init -v'.
    """
    i = 0
    while i < len(argv) and argv[i] in OUTPUT_FLAGS:
        i += 1
    if i < len(argv) and argv[i] in SUBCOMMANDS:
        return argv[i:] + argv[:i]
    return None


def main(argv: Optional[List[str]] = None) -> int:
    argv = list(sys.argv[1:] if argv is None else argv)
    # An output file named like a subcommand is not supported.
    command_argv = _command_argv(argv)
    if command_argv is not None:
        return run_command(build_command_parser().parse_args(command_argv))
    return run_merge(build_merge_parser().parse_args(argv))


if __name__ == "__main__":
    sys.exit(main())
