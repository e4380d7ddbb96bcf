"""
Claim Mapper - Command Line Entry Point

Maps one raw claim record (a JSON object) into a normalized claim and
prints it as JSON. Mapping warnings go to stderr.

Usage:
    claim-mapper claim.json                   # Map a claim file
    cat claim.json | claim-mapper             # Map from stdin
    claim-mapper claim.json --quiet           # Suppress warnings
    python -m claim_mapper.cli claim.json --logger structlog --log-format json

Exit codes:
    0  claim mapped
    1  claim rejected (mapping error printed to stderr as JSON)
    2  input could not be read or is not valid JSON
"""

import argparse
import json
import sys
from pathlib import Path
from typing import Any, TextIO

from claim_mapper.config import configure_logging
from claim_mapper.config.settings import LogFormat
from claim_mapper.exceptions import ClaimMappingError
from claim_mapper.mapping import ClaimMapper
from claim_mapper.mapping.logger import ClaimLogger, ConsoleLogger, NoopLogger, StructlogLogger


EXIT_OK = 0
EXIT_REJECTED = 1
EXIT_BAD_INPUT = 2


def load_payload(source: str | None, stdin: TextIO) -> Any:
    """Read and decode the JSON payload from a file path or stdin."""
    if source in (None, "-"):
        return json.load(stdin)
    return json.loads(Path(source).read_text(encoding="utf-8"))


def build_logger(args: argparse.Namespace, stderr: TextIO) -> ClaimLogger:
    """Pick the logging capability requested on the command line."""
    if args.quiet or args.logger == "noop":
        return NoopLogger()
    if args.logger == "structlog":
        return StructlogLogger()
    return ConsoleLogger(stderr)


def build_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="claim-mapper",
        description="Normalize one raw claim record into a strict claim",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  claim-mapper claim.json              Map a claim file
  claim-mapper - < claim.json          Map from stdin
  claim-mapper claim.json --quiet      Map without printing warnings
        """,
    )
    parser.add_argument(
        "source",
        nargs="?",
        default=None,
        help="Path to a JSON file holding one claim object (default: stdin)",
    )
    parser.add_argument(
        "--quiet",
        action="store_true",
        help="Do not print mapping warnings",
    )
    parser.add_argument(
        "--logger",
        choices=["console", "structlog", "noop"],
        default="console",
        help="Where mapping warnings are sent",
    )
    parser.add_argument(
        "--log-format",
        choices=[fmt.value for fmt in LogFormat],
        default=LogFormat.CONSOLE.value,
        help="Format of structured log output on stderr",
    )
    parser.add_argument(
        "--indent",
        type=int,
        default=2,
        help="JSON indentation of the printed claim",
    )
    return parser


def main(
    argv: list[str] | None = None,
    stdin: TextIO | None = None,
    stdout: TextIO | None = None,
    stderr: TextIO | None = None,
) -> int:
    """Main entry point."""
    stdin = stdin or sys.stdin
    stdout = stdout or sys.stdout
    stderr = stderr or sys.stderr

    args = build_parser().parse_args(argv)
    configure_logging(LogFormat(args.log_format))

    try:
        payload = load_payload(args.source, stdin)
    except (OSError, json.JSONDecodeError) as exc:
        print(f"Could not read claim input: {exc}", file=stderr)
        return EXIT_BAD_INPUT

    mapper = ClaimMapper(logger=build_logger(args, stderr))

    try:
        claim = mapper.map(payload)
    except ClaimMappingError as exc:
        print(json.dumps(exc.to_dict(), default=str), file=stderr)
        return EXIT_REJECTED

    print(json.dumps(claim.to_dict(), indent=args.indent), file=stdout)
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
