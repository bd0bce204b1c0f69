"""Command-line interface for the soft-float differential harness.

Usage:
    python -m sfdiff run
    python -m sfdiff run --config configs/harness/default.json --samples 1000
    python -m sfdiff run --backend mypkg.adapter:SoftDouble --batch -o var/report.json
    python -m sfdiff list
    python -m sfdiff validate configs/harness/default.json
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any

from .catalog import operations
from .config import HarnessConfig, build_config, load_config, validate_config
from .driver import run_suite
from .exceptions import (
    BackendUnavailableError,
    ComparisonFailure,
    OutputError,
    SfdiffError,
    UnknownOperationError,
    ValidationError,
)
from .output import write_report
from .reporting import format_report

logger = logging.getLogger(__name__)

# Exit codes
EXIT_SUCCESS = 0
EXIT_ERROR = 1
EXIT_CONFIG_NOT_FOUND = 2
EXIT_VALIDATION_FAILED = 3
EXIT_BACKEND_UNAVAILABLE = 4
EXIT_COMPARISON_FAILED = 5


def setup_logging(level: str = "INFO", quiet: bool = False) -> None:
    """Configure the root logger for CLI use.

    Args:
        level: Level name from the config
        quiet: Only log errors
    """
    logging.basicConfig(
        level=logging.ERROR if quiet else getattr(logging, level, logging.INFO),
        format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
        datefmt="%H:%M:%S",
    )


def create_parser() -> argparse.ArgumentParser:
    """Create the CLI argument parser."""
    parser = argparse.ArgumentParser(
        prog="sfdiff",
        description="Differential tester for soft-float backends against native doubles",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s run
  %(prog)s run --samples 1000 --op addition division
  %(prog)s run --config configs/harness/default.json --batch -o var/report.json
  %(prog)s list
  %(prog)s validate configs/harness/default.json
""",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    # run command
    run_parser = subparsers.add_parser(
        "run",
        help="Run the harness",
        description="Run edge-case vectors and random sweeps against a backend.",
    )
    run_parser.add_argument(
        "-c",
        "--config",
        type=Path,
        help="Path to config JSON file (default: built-in defaults)",
    )
    run_parser.add_argument(
        "--backend",
        help="Backend name or 'module:attribute' (default: numpy)",
    )
    run_parser.add_argument(
        "-n",
        "--samples",
        type=int,
        help="Random samples per magnitude band",
    )
    run_parser.add_argument(
        "--op",
        dest="operations",
        nargs="+",
        metavar="ID",
        help="Restrict the run to these operations",
    )
    run_parser.add_argument(
        "--seed",
        nargs=2,
        type=int,
        metavar=("STATE", "STREAM"),
        help="Generator seed pair (default: 0 0)",
    )
    run_parser.add_argument(
        "--batch",
        action="store_true",
        help="Collect every mismatch instead of stopping at the first",
    )
    run_parser.add_argument(
        "-o",
        "--output",
        type=Path,
        help="Write the JSON report to this file",
    )
    run_parser.add_argument(
        "-q",
        "--quiet",
        action="store_true",
        help="Suppress progress output (only errors)",
    )
    run_parser.add_argument(
        "--json",
        action="store_true",
        help="Print the report as JSON",
    )

    # list command
    list_parser = subparsers.add_parser(
        "list",
        help="List catalog operations",
        description="Print the operations, their tolerance model and bands.",
    )
    list_parser.add_argument(
        "--json",
        action="store_true",
        help="Output as JSON",
    )

    # validate command
    validate_parser = subparsers.add_parser(
        "validate",
        help="Validate config file without running",
        description="Validate a harness config file.",
    )
    validate_parser.add_argument(
        "config",
        type=Path,
        help="Path to config JSON file",
    )

    return parser


def _resolve_config(args: argparse.Namespace) -> HarnessConfig:
    """Merge file/env settings with command-line overrides."""
    if args.config is not None:
        base = load_config(Path(args.config).resolve())
    else:
        base = build_config()

    data: dict[str, Any] = base.model_dump()
    if args.backend:
        data["backend"] = args.backend
    if args.samples is not None:
        data["sample_count"] = args.samples
    if args.seed is not None:
        data["seed_state"], data["seed_stream"] = args.seed
    if args.operations:
        data["operations"] = args.operations
    if args.batch:
        data["fail_fast"] = False
    return validate_config(data)


def cmd_run(args: argparse.Namespace) -> int:
    """Execute the 'run' command."""
    if args.config is not None and not Path(args.config).exists():
        print(f"Error: Config file not found: {args.config}", file=sys.stderr)
        return EXIT_CONFIG_NOT_FOUND

    try:
        config = _resolve_config(args)
        setup_logging(config.log_level, quiet=args.quiet)
        report = run_suite(config)

        if args.output is not None:
            path = write_report(
                report, args.output, config=config.model_dump(mode="json")
            )
            logger.info("Report written to %s", path)

        if args.json:
            print(json.dumps(report.to_dict(), indent=2, sort_keys=True))
        elif not args.quiet:
            print(format_report(report))

        return EXIT_SUCCESS if report.ok else EXIT_COMPARISON_FAILED

    except ComparisonFailure as e:
        if args.json:
            print(json.dumps(e.to_dict(), indent=2, sort_keys=True))
        print(f"Comparison failed: {e.message}", file=sys.stderr)
        return EXIT_COMPARISON_FAILED

    except BackendUnavailableError as e:
        print(f"Error: backend unavailable: {e.message}", file=sys.stderr)
        return EXIT_BACKEND_UNAVAILABLE

    except (ValidationError, UnknownOperationError) as e:
        print(f"Config validation error: {e.message}", file=sys.stderr)
        return EXIT_VALIDATION_FAILED

    except FileNotFoundError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_CONFIG_NOT_FOUND

    except OutputError as e:
        print(f"Output error: {e.message}", file=sys.stderr)
        return EXIT_ERROR

    except SfdiffError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_ERROR


def cmd_list(args: argparse.Namespace) -> int:
    """Print the operation catalog."""
    rows = [
        {
            "operation": spec.op_id.value,
            "arity": spec.arity.value,
            "tolerance": spec.tolerance_model.value,
            "multiplier": spec.error_multiplier,
            "bands": [band.name for band in spec.bands],
        }
        for spec in operations()
    ]
    if args.json:
        print(json.dumps(rows, indent=2))
        return EXIT_SUCCESS

    for row in rows:
        print(
            f"{row['operation']:<18} {row['arity']:<7} {row['tolerance']:<9} "
            f"x{row['multiplier']:<6g} {', '.join(row['bands'])}"
        )
    return EXIT_SUCCESS


def cmd_validate(args: argparse.Namespace) -> int:
    """Execute the 'validate' command."""
    config_path = Path(args.config).resolve()

    if not config_path.exists():
        print(f"Error: Config file not found: {config_path}", file=sys.stderr)
        return EXIT_CONFIG_NOT_FOUND

    try:
        load_config(config_path, apply_env=False)
        print(f"Config valid: {config_path}")
        return EXIT_SUCCESS

    except (ValidationError, UnknownOperationError) as e:
        print(f"Validation error: {e.message}", file=sys.stderr)
        return EXIT_VALIDATION_FAILED

    except OutputError as e:
        print(f"JSON parse error: {e.message}", file=sys.stderr)
        return EXIT_VALIDATION_FAILED

    except SfdiffError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_ERROR


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point."""
    parser = create_parser()
    args = parser.parse_args(argv)

    if args.command == "run":
        return cmd_run(args)
    elif args.command == "list":
        return cmd_list(args)
    elif args.command == "validate":
        return cmd_validate(args)

    parser.print_help()
    return EXIT_SUCCESS


if __name__ == "__main__":
    sys.exit(main())
