"""Command-line driver: read a board snapshot, search once, write the move.

Usage:
    gomokubot state.txt action.txt --depth 3 --seed 7
"""

from __future__ import annotations

import argparse
import logging
import random
import sys
from typing import Optional, Sequence

from gomokubot.agent.minimax_agent import decide
from gomokubot.agent.search import SEARCH_DEPTH, NoLegalMoveError, SearchConfig
from gomokubot.game.board import ContractError
from gomokubot.game.snapshot import SnapshotError, read_snapshot, write_move

logger = logging.getLogger("gomokubot")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="gomokubot",
        description="Pick the next Gomoku move for a board snapshot",
    )
    parser.add_argument("input", help="Snapshot file: player id then 15x15 cell values")
    parser.add_argument("output", help="File to write the chosen move to as 'x y'")
    parser.add_argument(
        "--depth",
        type=int,
        default=SEARCH_DEPTH,
        help=f"Search depth (default: {SEARCH_DEPTH})",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Seed for the evaluation jitter",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        config = SearchConfig(depth=args.depth)
        snapshot = read_snapshot(args.input)
        move = decide(snapshot.player, snapshot.board, config=config, rng=random.Random(args.seed))
    except (OSError, ValueError, SnapshotError, NoLegalMoveError, ContractError) as exc:
        logger.error("Could not choose a move: %s", exc)
        return 1

    write_move(args.output, move)
    logger.info("Wrote %d %d to %s", move.x, move.y, args.output)
    return 0


if __name__ == "__main__":
    sys.exit(main())
