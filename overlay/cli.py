"""
Command-line entry point for the overlay bridge.

    echo '{"operation": "generate", ...}' | python -m overlay

stdout carries the single response document; logs go to stderr.
"""

from __future__ import annotations
from dataclasses import replace
from typing import List, Optional
import argparse
import io
import logging
import sys

from .bridge import BridgeConfig, OverlayBridge


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="neon-genie-overlay",
        description="Run one deterministic Neon Genie request read from stdin",
    )
    parser.add_argument("--corpus-path", help="Corpus directory (overrides NEON_CORPUS_PATH)")
    parser.add_argument("--mode", help="Execution mode (overrides NEON_MODE)")
    parser.add_argument("--log-level", help="stderr log level (overrides NEON_LOG_LEVEL)")
    return parser


def configure_logging(level: str) -> None:
    logging.basicConfig(
        stream=sys.stderr,
        level=getattr(logging, level.upper(), logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    config = BridgeConfig.from_env()
    if args.corpus_path:
        config = replace(config, corpus_path=args.corpus_path)
    if args.mode:
        config = replace(config, mode=args.mode)
    if args.log_level:
        config = replace(config, log_level=args.log_level.upper())
    configure_logging(config.log_level)

    stdin = io.TextIOWrapper(sys.stdin.buffer, encoding="utf-8")
    stdout = io.TextIOWrapper(sys.stdout.buffer, encoding="utf-8")
    try:
        return OverlayBridge(config, stdin=stdin, stdout=stdout).run()
    finally:
        stdout.flush()
        stdout.detach()


if __name__ == "__main__":
    sys.exit(main())
