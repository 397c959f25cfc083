"""
Tetra CLI - Command-line interface for the engine.

Usage:
    tetra roll [--count N] [--seed S]          Print random legal arrangements
    tetra tumble [--steps N] [--seed S]        Tumble the default die
    tetra demo [--seed S]                      Walk one die across the band board
    tetra serve [--host H] [--port P]          Run the REST API
"""

import argparse
import random
import sys

from .config import configure_logging


def main(argv=None):
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Tetra - Tetrahedral Dice Engine",
        prog="tetra",
    )
    parser.add_argument("--log-level", default=None, help="Logging level (default from TETRA_LOG_LEVEL)")
    subparsers = parser.add_subparsers(dest="command", help="Commands")

    roll_parser = subparsers.add_parser("roll", help="Print random legal face arrangements")
    roll_parser.add_argument("--count", type=int, default=1, help="Number of rolls")
    roll_parser.add_argument("--seed", type=int, default=None, help="Random seed")

    tumble_parser = subparsers.add_parser("tumble", help="Tumble a die with random tips and spins")
    tumble_parser.add_argument("--steps", type=int, default=12, help="Number of tips")
    tumble_parser.add_argument("--seed", type=int, default=None, help="Random seed")

    demo_parser = subparsers.add_parser("demo", help="Walk one die across the band board")
    demo_parser.add_argument("--seed", type=int, default=None, help="Random seed")

    serve_parser = subparsers.add_parser("serve", help="Run the REST API")
    serve_parser.add_argument("--host", default="127.0.0.1")
    serve_parser.add_argument("--port", type=int, default=8000)

    args = parser.parse_args(argv)
    configure_logging(args.log_level)

    if args.command == "roll":
        cmd_roll(args)
    elif args.command == "tumble":
        cmd_tumble(args)
    elif args.command == "demo":
        cmd_demo(args)
    elif args.command == "serve":
        cmd_serve(args)
    else:
        parser.print_help()
        sys.exit(1)


def cmd_roll(args):
    """Print random legal arrangements."""
    from .engine_core.faces import DieFaces

    rng = random.Random(args.seed)
    faces = DieFaces()
    for _ in range(args.count):
        faces.roll(rng)
        print(f"[{faces}] pointing {faces.pointing_direction.value}, top {faces.top}")


def cmd_tumble(args):
    """Tumble the default die."""
    from .engine_core.faces import DieFaces

    faces = DieFaces()
    print(f"Start:  [{faces}] pointing {faces.pointing_direction.value}")
    faces.simulated_roll(args.steps, random.Random(args.seed))
    print(f"After {args.steps}: [{faces}] pointing {faces.pointing_direction.value}")


def cmd_demo(args):
    """
    Walk one die on the band board.

    The die is placed on a fitting cell and walks right as far as the
    board allows, stepping down and back up when it runs out of room.
    """
    from .board import band_layout, build_board
    from .engine_core.die import Die
    from .engine_core.errors import TetraError
    from .engine_core.faces import Direction, PointingDirection

    rng = random.Random(args.seed)
    board = build_board(band_layout())
    die = Die(die_id="10", owner_id=1)
    die.roll(rng)

    start = 11 if die.pointing_direction is PointingDirection.UP else 21
    die.place(board, start)
    print(f"Die {die.die_id} on cell {start}: [{die}] pointing {die.pointing_direction.value}")
    print(f"Moves available: {die.move_count}")

    while die.move_count > 0:
        planner = die.planner
        vertical = Direction.DOWN if planner.speculative.can_tip_down else Direction.UP
        for direction in (Direction.RIGHT, vertical, Direction.LEFT):
            try:
                cell_id = die.tentative_move(board, direction)
            except TetraError as e:
                print(f"  {direction.value:>5}: refused ({e.error_code})")
                continue
            print(f"  {direction.value:>5}: ghost on {cell_id} [{planner.speculative}]")
            break
        else:
            print("No legal step left; abandoning the walk")
            die.reset_moves()
            return

    try:
        cell_id = die.commit_move(board)
    except TetraError as e:
        print(f"Commit refused: {e.message}")
        die.reset_moves()
        return
    print(f"Committed on cell {cell_id}: [{die}] pointing {die.pointing_direction.value}")


def cmd_serve(args):
    """Run the API with uvicorn."""
    import uvicorn

    uvicorn.run("tetra.api.app:app", host=args.host, port=args.port)


if __name__ == "__main__":
    main()
