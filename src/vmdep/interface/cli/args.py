from __future__ import annotations

"""
CLI Argument Definition and Mapping.

Defines the command-line interface schema and translates raw argparse
namespaces into configuration overrides for the scan engine.
"""

import argparse
from typing import Any, Dict, List, Optional

from vmdep.domain.constants import DEFAULT_DIRECTIVES, DEFAULT_EXTENSION

# Marker for "--log-file" given without a path
DEFAULT_LOG_FILE = "<default>"

# -----------------------------------------------------------------------------
# ARGUMENT DEFINITION
# -----------------------------------------------------------------------------

def build_parser() -> argparse.ArgumentParser:
    """
    Construct the argument parser for the vmdep CLI.

    Returns:
        argparse.ArgumentParser: Configured parser instance.
    """
    p = argparse.ArgumentParser(
        prog="vmdep",
        description="Discover include/parse dependencies between Velocity templates.",
    )

    # --- Resolution ---
    p.add_argument(
        "-r", "--root",
        dest="roots",
        action="append",
        default=None,
        help="Template root directory. Repeat for several roots, highest priority first.",
    )
    p.add_argument(
        "-f", "--file",
        dest="file",
        default=None,
        help="Starting template file. Without it every template under the roots is scanned.",
    )

    # --- Lexer ---
    p.add_argument(
        "-d", "--directive",
        dest="directives",
        action="append",
        default=None,
        help=f"Directive that references another file (default: {', '.join(DEFAULT_DIRECTIVES)}).",
    )
    p.add_argument(
        "-e", "--encoding",
        dest="encoding",
        default=None,
        help="Template file encoding (default: utf-8).",
    )
    p.add_argument(
        "--ext",
        dest="extension",
        default=None,
        help=f"Template file extension (default: {DEFAULT_EXTENSION}).",
    )

    # --- Traversal mode ---
    p.add_argument(
        "--reverse",
        action="store_true",
        help="List the files that depend on --file instead of its dependencies.",
    )
    p.add_argument(
        "--recursive",
        action="store_true",
        help="Follow dependencies (or dependants) transitively.",
    )
    p.add_argument(
        "--variable",
        action="store_true",
        help="Report includes whose path contains a template variable.",
    )

    # --- Configuration ---
    p.add_argument(
        "-c", "--config",
        dest="config_path",
        default=None,
        help="JSON configuration file (default: the user configuration).",
    )
    p.add_argument(
        "--use-defaults",
        action="store_true",
        help="Ignore any configuration file.",
    )
    p.add_argument(
        "--dump-config",
        action="store_true",
        help="Print the effective configuration and exit.",
    )
    p.add_argument(
        "--save-config",
        action="store_true",
        help="Persist the effective configuration before scanning.",
    )

    # --- Output and diagnostics ---
    p.add_argument(
        "--json",
        dest="json_output",
        action="store_true",
        help="Print the dependency graph as JSON.",
    )
    p.add_argument(
        "--log-file",
        dest="log_file",
        nargs="?",
        const=DEFAULT_LOG_FILE,
        default=None,
        help="Also write logs to a rotating file (default location if no path is given).",
    )
    p.add_argument(
        "--debug",
        action="store_true",
        help="Elevate logging verbosity to DEBUG.",
    )

    return p

# -----------------------------------------------------------------------------
# ARGUMENT MAPPING
# -----------------------------------------------------------------------------

def args_to_overrides(args: argparse.Namespace) -> Dict[str, Any]:
    """
    Translate the argparse Namespace into a configuration dictionary.

    Only values given on the command line are returned, so they can be
    merged over a loaded configuration.

    Args:
        args: Parsed command-line arguments.

    Returns:
        Dict[str, Any]: Configuration overrides subset.
    """
    overrides: Dict[str, Any] = {}

    if args.roots:
        overrides["roots"] = _flatten_csv(args.roots)
    if args.file:
        overrides["file"] = args.file
    if args.directives:
        overrides["directives"] = _flatten_csv(args.directives)
    if args.encoding:
        overrides["encoding"] = args.encoding
    if args.extension:
        overrides["extension"] = args.extension

    if args.reverse:
        overrides["reverse"] = True
    if args.recursive:
        overrides["recursive"] = True
    if args.variable:
        overrides["variable"] = True

    return overrides

# -----------------------------------------------------------------------------
# HELPERS
# -----------------------------------------------------------------------------

def _flatten_csv(values: Optional[List[str]]) -> List[str]:
    """
    Expand repeated and comma-separated values into a single list.
    """
    out: List[str] = []
    for value in values or []:
        out.extend(x.strip() for x in value.split(",") if x.strip())
    return out
