"""CLI entrypoint: python -m protozoa.cli

Usage:
    python -m protozoa.cli --block block.json
    python -m protozoa.cli --block block.json --confirmations 10000 50000 1000000 --config engine.json
"""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

from protozoa.config.defaults import default_config, load_config
from protozoa.core.errors import ProtozoaError
from protozoa.core.log import configure_logging
from protozoa.core.types import BlockData
from protozoa.session import CreatureSession


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Generate a creature from block data and optionally evolve it."
    )
    parser.add_argument(
        "--block",
        required=True,
        help="Path to a JSON file with block fields (height, hash, nonce, timestamp, ...).",
    )
    parser.add_argument(
        "--config",
        default=None,
        help="Path to an engine config JSON file. Defaults to default_config().",
    )
    parser.add_argument(
        "--confirmations",
        type=int,
        nargs="*",
        default=[],
        help="Confirmation counts to evolve through, in order.",
    )
    parser.add_argument(
        "--history-dir",
        default=None,
        help="Mirror evolution history to JSONL files in this directory.",
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> None:
    args = _parse_args(argv)

    config = load_config(args.config) if args.config else default_config()
    if args.history_dir:
        config.history.storage_dir = Path(args.history_dir)
    configure_logging(config.logging)

    block_path = Path(args.block)
    if not block_path.exists():
        print(f"ERROR: block file not found: {block_path}", file=sys.stderr)
        sys.exit(1)
    block = BlockData.from_dict(json.loads(block_path.read_text(encoding="utf-8")))

    session = CreatureSession(config)
    try:
        creature = session.generate(block)
        results = [
            session.evolve(block.with_confirmations(c)).to_dict()
            for c in args.confirmations
        ]
    except ProtozoaError as exc:
        print(f"ERROR: {exc}", file=sys.stderr)
        sys.exit(1)

    print(json.dumps({"creature": creature.to_dict(), "evolution": results}, indent=2))


if __name__ == "__main__":
    main()
