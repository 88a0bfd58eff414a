"""
Entry point for inspecting the Tetris core from the command line.

Supports two modes:
  - pieces: Print every standard piece and its distinct rotations.
  - probe:  Print every resting placement of one piece on an empty board.

Usage:
    python main.py --mode pieces
    python main.py --mode probe --piece 6
    python main.py --mode probe --config config/board.yaml
"""

from __future__ import annotations

import argparse
import pathlib
import sys

import yaml

from tetris_core.game.board import Board
from tetris_core.game.pieces import standard_pieces
from tetris_core.search import enumerate_placements

PIECE_NAMES = ["stick", "L1", "L2", "S1", "S2", "square", "pyramid"]


def load_config(config_path: str | pathlib.Path) -> dict:
    """Load configuration from a YAML file.

    Args:
        config_path: Path to the YAML config file.

    Returns:
        Dict of configuration key-value pairs (empty for an empty file).

    Raises:
        FileNotFoundError: If the config file does not exist.
    """
    config_path = pathlib.Path(config_path)
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")
    with open(config_path, "r") as f:
        return yaml.safe_load(f) or {}


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments.

    Returns:
        Namespace with mode, config, and piece attributes.
    """
    parser = argparse.ArgumentParser(
        description="Tetris core: inspect pieces and placement probes.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--mode",
        type=str,
        choices=["pieces", "probe"],
        default="pieces",
        help="Run mode: 'pieces' (show rotations), 'probe' (list placements).",
    )
    parser.add_argument(
        "--config",
        type=str,
        default="config/board.yaml",
        help="Path to the YAML configuration file.",
    )
    parser.add_argument(
        "--piece",
        type=int,
        default=0,
        help="Index of the standard piece to probe (0=stick ... 6=pyramid).",
    )
    return parser.parse_args(argv)


def show_pieces() -> None:
    """Print each standard piece with all of its distinct rotations."""
    for name, piece in zip(PIECE_NAMES, standard_pieces()):
        rotations = piece.rotations()
        print(f"== {name} ({len(rotations)} rotations)")
        for rotation in rotations:
            print(rotation)
            print()


def probe(config: dict, piece_index: int) -> None:
    """Print every placement of a standard piece on an empty board."""
    width = config.get("board_width", 10)
    height = config.get("board_height", 24)
    limit_height = height - config.get("top_space", 4)

    board = Board(width, height)
    piece = standard_pieces()[piece_index]
    placements = enumerate_placements(board, piece, limit_height)

    print(f"Board: {width}x{height}, limit height {limit_height}")
    print(f"Piece: {PIECE_NAMES[piece_index]}, {len(placements)} placements")
    for p in placements:
        print(
            f"  x={p.x:<2d} y={p.y:<2d} width={p.piece.width} skirt={list(p.piece.skirt)} "
            f"result={p.result.name} max_height={p.max_height}"
        )


def main(argv: list[str] | None = None) -> None:
    """Main entry point: parse args, load config, and dispatch to the selected mode."""
    args = parse_args(argv)

    if args.mode == "pieces":
        show_pieces()

    elif args.mode == "probe":
        if not 0 <= args.piece < len(PIECE_NAMES):
            print(f"Error: --piece must be between 0 and {len(PIECE_NAMES) - 1}.", file=sys.stderr)
            sys.exit(1)
        config = load_config(args.config)
        probe(config, args.piece)

    else:
        print(f"Unknown mode: {args.mode}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
