"""
Recover secrets from share documents.

Usage:
    shamir-recover testcase1.json testcase2.json
    shamir-recover shares.yaml --output-base 16
    shamir-recover shares.json --config settings.yaml --log-level DEBUG
"""

from __future__ import annotations

import argparse
import sys
from typing import List, Optional, TextIO

from .codec import MAX_BASE, MIN_BASE, encode
from .config import load_settings
from .errors import ShamirError
from .io import load_share_document
from .reconstruct import ReconstructionCoordinator
from .utils.logging import configure_logging, get_logger

logger = get_logger(__name__)


def _base_arg(value: str) -> int:
    base = int(value)
    if not MIN_BASE <= base <= MAX_BASE:
        raise argparse.ArgumentTypeError(f"base must be within {MIN_BASE}-{MAX_BASE}")
    return base


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="shamir-recover",
        description="Reconstruct Shamir-shared secrets from share documents.",
    )
    parser.add_argument("files", nargs="+", help="JSON or YAML share documents")
    parser.add_argument("--config", help="Settings file (JSON or YAML)")
    parser.add_argument("--log-level", help="Override the configured log level")
    parser.add_argument("--json-logs", action="store_true", help="Emit logs as JSON")
    parser.add_argument("--log-file", help="Also write logs to this file")
    parser.add_argument("--output-base", type=_base_arg, default=10, help="Base for printed secrets")
    return parser


def recover_file(
    path: str,
    coordinator: ReconstructionCoordinator,
    output_base: int,
    out: TextIO,
    err: TextIO,
) -> bool:
    try:
        document = load_share_document(path)
    except ShamirError as exc:
        print(f"Error for {path}: {exc.kind}: {exc}", file=err)
        return False
    result = coordinator.recover(document)
    for diagnostic in result.diagnostics:
        print(f"Warning for {path}: {diagnostic.kind}: {diagnostic.message}", file=err)
    if not result.ok:
        print(f"Error for {path}: {result.error.kind}: {result.error}", file=err)  # type: ignore[union-attr]
        return False
    print(f"Secret for {path}: {encode(result.secret, output_base)}", file=out)  # type: ignore[arg-type]
    return True


def main(
    argv: Optional[List[str]] = None,
    out: Optional[TextIO] = None,
    err: Optional[TextIO] = None,
) -> int:
    out = out or sys.stdout
    err = err or sys.stderr
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        settings = load_settings(args.config)
    except (OSError, ValueError) as exc:
        print(f"Invalid settings: {exc}", file=err)
        return 2
    configure_logging(
        level=args.log_level or settings.log_level,
        json_output=args.json_logs,
        log_file=args.log_file,
        stream=err,
    )
    coordinator = ReconstructionCoordinator(settings)
    failures = 0
    for path in args.files:
        if not recover_file(path, coordinator, args.output_base, out, err):
            failures += 1
    logger.debug("Processed %d files, %d failed", len(args.files), failures)
    return 1 if failures else 0


if __name__ == "__main__":
    sys.exit(main())
