"""
Command line drivers for the Minesweeper engine.

Usage:
    python main.py play [--preset NAME | --width W --height H --mines M]
    python main.py demo [--games N] [--seed S]
"""
import argparse
import logging
import sys
from typing import Callable, Iterable, List, Optional, Tuple

from .board import PRESETS, BoardConfig, GameState
from .engine import ClickKind, Minesweeper
from .environment import MinesweeperEnv
from .render import render_board, render_snapshot


logger = logging.getLogger(__name__)

Command = Tuple[Optional[ClickKind], int, int]

USAGE = "commands: r X Y (reveal), f X Y (flag), n (new game), q (quit)"

_KINDS = {
    "r": ClickKind.REVEAL,
    "reveal": ClickKind.REVEAL,
    "f": ClickKind.FLAG,
    "flag": ClickKind.FLAG,
}


# ============================================================================
# Interactive Play
# ============================================================================

def parse_command(line: str) -> Command:
    """
    Translate a typed command into a click.

    Returns:
        (kind, x, y); kind is None for quit.

    Raises:
        ValueError: If the command cannot be understood.
    """
    parts = line.split()
    if not parts:
        raise ValueError("empty command")

    word = parts[0].lower()
    if word in ("q", "quit", "exit"):
        return None, 0, 0
    if word in ("n", "new", "reset"):
        return ClickKind.RESET, 0, 0
    if word not in _KINDS:
        raise ValueError(f"unknown command: {parts[0]}")
    if len(parts) != 3:
        raise ValueError(f"{word} needs X and Y")
    return _KINDS[word], int(parts[1]), int(parts[2])


def play(
    game: Minesweeper,
    lines: Iterable[str],
    write: Callable[[str], None] = print,
) -> None:
    """
    Run the interactive loop until quit or the input runs out.

    Args:
        game: Engine to drive.
        lines: Source of typed commands.
        write: Output sink.
    """
    write(render_snapshot(game.snapshot()))
    for line in lines:
        try:
            kind, x, y = parse_command(line)
        except ValueError as exc:
            write(f"{exc}; {USAGE}")
            continue

        if kind is None:
            break

        was_playing = game.game_state == GameState.PLAYING
        game.click(kind, x, y)
        write(render_snapshot(game.snapshot()))

        if was_playing and game.game_state == GameState.WON:
            write(f"*** WIN in {game.elapsed_seconds}s! (n for a new game) ***")
        elif was_playing and game.game_state == GameState.LOST:
            write("*** LOST (hit mine) - n for a new game ***")


def _read_lines() -> Iterable[str]:
    while True:
        try:
            yield input("> ")
        except EOFError:
            return


def run_play(args: argparse.Namespace, config: BoardConfig) -> None:
    """Play interactively on stdin/stdout."""
    game = Minesweeper(config, seed=args.seed)
    print(
        f"Board: {config.width}x{config.height} with {config.num_mines} mines"
    )
    print(USAGE)
    play(game, _read_lines())


# ============================================================================
# Random Demo
# ============================================================================

def run_demo(args: argparse.Namespace, config: BoardConfig) -> int:
    """
    Play games by revealing random hidden cells.

    Returns:
        Number of games won.
    """
    env = MinesweeperEnv(config=config)
    env.action_space.seed(args.seed)
    wins = 0

    for game_index in range(args.games):
        seed = None if args.seed is None else args.seed + game_index
        env.reset(seed=seed)
        done = False
        info = {}

        while not done:
            action = env.action_space.sample(mask=env.get_action_mask())
            _, _, terminated, truncated, info = env.step(action)
            done = terminated or truncated

        if info.get("game_state") == GameState.WON.name:
            wins += 1
        print(f"=== Game {game_index + 1}/{args.games}: {info.get('game_state')} ===")
        print(render_board(env.game.snapshot()))

    print(f"\n=== Final: {wins}/{args.games} wins ===")
    return wins


# ============================================================================
# Entry Point
# ============================================================================

def build_config(args: argparse.Namespace) -> BoardConfig:
    """
    Build a board configuration from parsed arguments.

    Raises:
        ValueError: If the dimensions or mine count are invalid.
    """
    base = PRESETS[args.preset]
    return BoardConfig(
        width=args.width if args.width is not None else base.width,
        height=args.height if args.height is not None else base.height,
        num_mines=args.mines if args.mines is not None else base.num_mines,
    )


def _add_board_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--preset",
        choices=sorted(PRESETS),
        default="intermediate",
        help="Board preset",
    )
    parser.add_argument("--width", type=int, default=None, help="Columns")
    parser.add_argument("--height", type=int, default=None, help="Rows")
    parser.add_argument("--mines", type=int, default=None, help="Mine count")
    parser.add_argument(
        "--seed", type=int, default=None, help="Random seed for mine layouts"
    )


def build_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        description="Minesweeper - play in the terminal or watch a random player"
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Enable debug logging"
    )
    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    play_parser = subparsers.add_parser("play", help="Play in the terminal")
    _add_board_arguments(play_parser)

    demo_parser = subparsers.add_parser(
        "demo", help="Watch a random player reveal cells"
    )
    _add_board_arguments(demo_parser)
    demo_parser.add_argument(
        "--games", type=int, default=5, help="Number of games"
    )

    return parser


def main(argv: Optional[List[str]] = None) -> None:
    """Parse arguments and run the appropriate command."""
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="[%(asctime)s] %(levelname)s %(name)s: %(message)s",
        datefmt="%H:%M:%S",
        stream=sys.stderr,
    )

    if args.command is None:
        parser.print_help()
        return

    try:
        config = build_config(args)
    except ValueError as exc:
        parser.error(str(exc))

    logger.debug("Using board %s", config)
    if args.command == "play":
        run_play(args, config)
    elif args.command == "demo":
        run_demo(args, config)
