"""
Airdrop CLI - Main Entry Point

Parses command-line arguments and dispatches to subcommands.

Usage:
    python -m airdrop_cli root <entries> [--json]
    python -m airdrop_cli prove <entries> (--index N | --address A --amount N) [--out PATH] [--json]
    python -m airdrop_cli verify <proof.json> [--address A --amount N] [--root HEX] [--json]
    python -m airdrop_cli demo [--json]
    python -m airdrop_cli config --init | --show

Environment Variables:
    AIRDROP_HASH_ALGORITHM      Hasher name (default: sha256)
    AIRDROP_LEAF_ENCODING       raw | decimal-csv (default: raw)
    AIRDROP_LOG_LEVEL           Log level (default: INFO)
    AIRDROP_LOG_FILE            Also log to this file
    AIRDROP_OUTPUT_FORMAT       human | json
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
import traceback
from pathlib import Path
from typing import Sequence

from airdrop_core.crypto.hashing import available_hashers
from airdrop_core.records import LEAF_ENCODINGS
from airdrop_cli import __version__
from airdrop_cli.commands import demo, prove, root, verify
from airdrop_cli.commands.common import EXIT_RUNTIME_ERROR, EXIT_SUCCESS
from airdrop_cli.config import get_default_config_template, load_config


def setup_logging(level: str = "INFO", log_file: str | None = None) -> None:
    """Configure logging for the CLI."""
    log_level = getattr(logging, level.upper(), logging.INFO)

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]

    if log_file:
        handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(
        level=log_level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        handlers=handlers,
        force=True,
    )


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser with all subcommands."""
    parser = argparse.ArgumentParser(
        prog="airdrop",
        description="Commit to airdrop lists with a Merkle root, issue and verify claim proofs.",
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}"
    )
    parser.add_argument(
        "--config", "-c",
        type=Path,
        default=None,
        help="Path to configuration file (default: ./airdrop.json, ./airdrop.yaml or ~/.config/airdrop/config.json)",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Log level (overrides config)",
    )
    parser.add_argument(
        "--hash",
        dest="hash_algorithm",
        type=str,
        default=None,
        choices=available_hashers(),
        help="Hash algorithm (overrides config)",
    )
    parser.add_argument(
        "--leaf-encoding",
        type=str,
        default=None,
        choices=list(LEAF_ENCODINGS),
        help="How records are rendered before leaf hashing (overrides config)",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # --- root command ---
    root_parser = subparsers.add_parser(
        "root",
        help="Compute the Merkle root of an entry list",
        description="Commit to an entry list (JSON, YAML or CSV) and print the root.",
    )
    root_parser.add_argument("entries", type=str, help="Entries file")
    root_parser.add_argument("--json", action="store_true", default=False, help="JSON output")
    root_parser.set_defaults(func=root.root_cmd)

    # --- prove command ---
    prove_parser = subparsers.add_parser(
        "prove",
        help="Generate an inclusion proof for one entry",
        description="Generate a proof document for an entry, selected by index or by address and amount.",
    )
    prove_parser.add_argument("entries", type=str, help="Entries file")
    prove_parser.add_argument("--index", type=int, default=None, help="Entry position (0-based)")
    prove_parser.add_argument("--address", type=str, default=None, help="Beneficiary address")
    prove_parser.add_argument("--amount", type=int, default=None, help="Beneficiary amount")
    prove_parser.add_argument("--out", "-o", type=str, default=None, help="Also write the proof document here")
    prove_parser.add_argument("--json", action="store_true", default=False, help="JSON output")
    prove_parser.set_defaults(func=prove.prove_cmd)

    # --- verify command ---
    verify_parser = subparsers.add_parser(
        "verify",
        help="Verify a proof document offline",
        description="Replay a proof document and check it reproduces the root.",
    )
    verify_parser.add_argument("proof_path", type=str, help="Proof document (JSON)")
    verify_parser.add_argument("--address", type=str, default=None, help="Recompute the leaf from this address")
    verify_parser.add_argument("--amount", type=int, default=None, help="Recompute the leaf from this amount")
    verify_parser.add_argument("--root", type=str, default=None, help="Independently published root (hex)")
    verify_parser.add_argument("--json", action="store_true", default=False, help="JSON output")
    verify_parser.set_defaults(func=verify.verify_cmd)

    # --- demo command ---
    demo_parser = subparsers.add_parser(
        "demo",
        help="Run the two-entry walkthrough",
        description="Commit to two entries and check a right and a tampered claim.",
    )
    demo_parser.add_argument("--json", action="store_true", default=False, help="JSON output")
    demo_parser.set_defaults(func=demo.demo_cmd)

    # --- config command ---
    config_parser = subparsers.add_parser(
        "config",
        help="Manage CLI configuration",
        description="Initialize or display configuration.",
    )
    config_parser.add_argument(
        "--init",
        action="store_true",
        default=False,
        help="Create a template configuration file",
    )
    config_parser.add_argument(
        "--show",
        action="store_true",
        default=False,
        help="Show current configuration",
    )
    config_parser.add_argument(
        "--path",
        type=str,
        default="airdrop.json",
        help="Path for config file (default: airdrop.json)",
    )
    config_parser.set_defaults(func=config_cmd)

    return parser


def config_cmd(args: argparse.Namespace) -> int:
    """Handle config command."""
    if args.init:
        config_path = Path(args.path)
        if config_path.exists():
            print(f"Error: Config file already exists: {config_path}", file=sys.stderr)
            return EXIT_RUNTIME_ERROR

        config_path.write_text(get_default_config_template())
        print(f"Created configuration file: {config_path}")
        print("You can also use environment variables (AIRDROP_* prefix).")
        return EXIT_SUCCESS

    if args.show:
        print(json.dumps(args.cli_config.to_dict(), indent=2))
        return EXIT_SUCCESS

    print("Usage: airdrop config [--init|--show]")
    print("  --init  Create a template configuration file")
    print("  --show  Show current configuration")
    return EXIT_SUCCESS


def main(argv: Sequence[str] | None = None) -> int:
    """
    Main entry point for the CLI.

    Args:
        argv: Command-line arguments (defaults to sys.argv[1:])

    Returns:
        Exit code (0=success, 1=error, 2=verification failed)
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return EXIT_RUNTIME_ERROR

    try:
        config = load_config(args.config)
    except Exception as e:
        print(f"Error loading configuration: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    # Command-line flags win over file and environment
    if args.hash_algorithm:
        config.tree.hash_algorithm = args.hash_algorithm
    if args.leaf_encoding:
        config.tree.leaf_encoding = args.leaf_encoding

    log_level = args.log_level or config.log_level
    setup_logging(level=log_level, log_file=config.log_file)

    args.cli_config = config

    try:
        return args.func(args)
    except KeyboardInterrupt:
        print("\nInterrupted.", file=sys.stderr)
        return EXIT_RUNTIME_ERROR
    except Exception as e:
        if log_level.upper() == "DEBUG":
            traceback.print_exc()
        else:
            print(f"Error: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR


if __name__ == "__main__":
    sys.exit(main())
