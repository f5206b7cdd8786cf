from __future__ import annotations

"""
Command Line Interface (CLI) Application Controller.

Orchestrates the CLI lifecycle: initialization of logging, loading and
merging of configuration sources (defaults, JSON file, CLI overrides),
dependency scan execution, and result rendering.
"""

import json
import sys
from typing import Any, Dict, List, Optional

from vmdep.core.analysis.graph_renderer import (
    graph_to_payload,
    render_graph,
    render_variable_report,
    summarize_graph,
)
from vmdep.core.pipeline.engine import run_scan
from vmdep.core.pipeline.validator import validate_config
from vmdep.domain.config import get_default_config, load_config, save_config
from vmdep.domain.models import ConfigurationError, FileNode, ScanConfig
from vmdep.infra.fs import missing_directories
from vmdep.infra.logging import (
    LoggingConfig,
    configure_logging,
    get_default_log_path,
    get_logger,
)
from vmdep.interface.cli import args as cli_args

logger = get_logger(__name__)

# -----------------------------------------------------------------------------
# ENTRYPOINT ORCHESTRATOR
# -----------------------------------------------------------------------------

def main(argv: Optional[List[str]] = None) -> int:
    """
    Execute the main CLI application workflow.

    Args:
        argv: Optional list of command line arguments. Defaults to sys.argv.

    Returns:
        int: Process exit code (0 success, 1 scan failure, 2 invalid input).
    """
    # 1. Argument parsing phase
    parser = cli_args.build_parser()
    args = parser.parse_args(argv)

    # 2. Logging bootstrap
    log_file = args.log_file
    if log_file == cli_args.DEFAULT_LOG_FILE:
        log_file = get_default_log_path()
    log_level = "DEBUG" if args.debug else "INFO"
    configure_logging(LoggingConfig(level=log_level, console=True, log_file=log_file))

    logger.debug("CLI execution initiated. Resolving configuration hierarchy...")

    # 3. Resolve base configuration
    if args.use_defaults:
        base_conf = get_default_config()
    else:
        base_conf = load_config(args.config_path)

    # 4. Merge overrides and validate
    raw_conf = _merge_config(base_conf, cli_args.args_to_overrides(args))
    clean_conf, warnings = validate_config(raw_conf, strict=False)
    for w in warnings:
        logger.warning(f"Configuration Constraint: {w}")

    if args.dump_config:
        print(json.dumps(clean_conf, ensure_ascii=False, indent=2))
        return 0

    if args.save_config:
        save_config(clean_conf, args.config_path)

    # 5. Pre-flight verification
    missing = missing_directories(clean_conf["roots"])
    if missing:
        msg = f"Root directory does not exist: {', '.join(missing)}"
        logger.error(msg)
        print(f"ERROR: {msg}", file=sys.stderr)
        return 2

    try:
        scan_conf = ScanConfig.from_dict(clean_conf)
    except ConfigurationError as e:
        logger.error(str(e))
        print(f"ERROR: {e}", file=sys.stderr)
        return 2

    # 6. Scan execution
    try:
        graph = run_scan(scan_conf)
    except KeyboardInterrupt:
        print("Interrupted.", file=sys.stderr)
        return 130
    except Exception as e:
        msg = f"Dependency scan failed: {e}"
        logger.critical(msg, exc_info=True)
        print(f"ERROR: {msg}", file=sys.stderr)
        return 1

    # 7. Output rendering
    if args.json_output:
        print(json.dumps(graph_to_payload(graph), ensure_ascii=False, indent=2))
    else:
        _print_human_summary(graph, scan_conf)

    return 0

# -----------------------------------------------------------------------------
# CONFIGURATION MERGING
# -----------------------------------------------------------------------------

def _merge_config(base: Dict[str, Any], overrides: Dict[str, Any]) -> Dict[str, Any]:
    """
    Shallow-merge override values into the base configuration.

    Only known keys are merged, preventing schema pollution.
    """
    out = dict(base)
    for k in get_default_config():
        if k in overrides and overrides[k] is not None:
            out[k] = overrides[k]
    return out

# -----------------------------------------------------------------------------
# OUTPUT RENDERING
# -----------------------------------------------------------------------------

def _print_human_summary(graph: Dict[str, FileNode], conf: ScanConfig) -> None:
    """Print the rendered graph followed by status counters."""
    if conf.variable:
        lines = render_variable_report(graph)
        if not lines:
            lines = ["No variable include paths found."]
    else:
        lines = render_graph(graph)

    for line in lines:
        print(line)

    summary = summarize_graph(graph)
    print("-" * 60)
    print(
        f"{summary['files']} file(s), {summary['edges']} dependency edge(s) | "
        f"missing: {summary['missing']} | variable: {summary['has_variable']}"
    )
