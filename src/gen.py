import argparse
import json
import logging
import os
import random

from cube import CubeState, InvalidMoveToken
from sequencer import DEFAULT_SCRAMBLE_MOVES, MoveSequencer, format_moves, from_notation, to_notation


def generate_scramble(length, rng=None):
    """
    Scramble a fresh cube with `length` random moves.

    Returns:
        dict: scramble tokens, the same moves in Singmaster notation and the
              resulting 54-character state
    """
    c = CubeState()
    moves = MoveSequencer.scramble_sequence(c, length, rng=rng)
    return {
        "scramble": moves,
        "notation": to_notation(moves),
        "state": c.serialize(),
    }


def generate_scrambles(count, length=DEFAULT_SCRAMBLE_MOVES, seed=None):
    if count < 0:
        raise ValueError(f"Scramble count must be non-negative, got {count}")
    rng = random.Random(seed)
    return [generate_scramble(length, rng=rng) for _ in range(count)]


def write_scrambles(scrambles, output_file):
    """Write scrambles as JSON lines, one object per line."""
    directory = os.path.dirname(output_file)
    if directory:
        os.makedirs(directory, exist_ok=True)

    with open(output_file, "w") as f:
        for scramble_data in scrambles:
            f.write(json.dumps(scramble_data) + "\n")
    return output_file


def read_scrambles(input_file):
    with open(input_file, 'r') as f:
        return [json.loads(line) for line in f if line.strip()]


def build_parser():
    parser = argparse.ArgumentParser(description='Generate random cube scrambles or apply a move sequence')

    mode_group = parser.add_mutually_exclusive_group()
    mode_group.add_argument('--moves', type=int, default=DEFAULT_SCRAMBLE_MOVES,
                        help='Number of random moves per scramble')
    mode_group.add_argument('--apply', type=str,
                        help="Space separated move tokens to apply to a solved cube (e.g. \"front right'\")")
    mode_group.add_argument('--algorithm', type=str,
                        help="Singmaster algorithm to apply to a solved cube (e.g. \"R U R' U'\")")

    parser.add_argument('--count', type=int, default=1,
                        help='Number of scrambles to generate')
    parser.add_argument('--seed', type=int, default=None,
                        help='Seed for reproducible scrambles')
    parser.add_argument('--output', type=str, default=None,
                        help='Write scrambles to this file as JSON lines instead of printing them')
    parser.add_argument('--verbose', action='store_true',
                        help='Enable debug logging')
    return parser


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s %(levelname)s %(message)s")

    if args.apply is not None or args.algorithm is not None:
        c = CubeState()
        try:
            tokens = args.apply.split() if args.apply is not None else from_notation(args.algorithm)
            MoveSequencer.apply_moves(c, tokens)
        except InvalidMoveToken as e:
            parser.error(str(e))
        print(f"Applied moves: {format_moves(c.move_history)}")
        print(c)
        print(f"State: {c.serialize()}")
        print(f"Solved: {c.is_solved()}")
        return 0

    if args.moves < 0:
        parser.error("--moves must be non-negative")
    if args.count < 0:
        parser.error("--count must be non-negative")

    scrambles = generate_scrambles(args.count, args.moves, seed=args.seed)

    if args.output:
        write_scrambles(scrambles, args.output)
        print(f"{len(scrambles)} scrambles of {args.moves} moves saved to {args.output}")
        return 0

    for i, scramble_data in enumerate(scrambles, 1):
        print(f"Scramble {i}: {format_moves(scramble_data['scramble'])}")
        print(f"Notation: {scramble_data['notation']}")
        print(f"State: {scramble_data['state']}")
        c = CubeState()
        MoveSequencer.apply_moves(c, scramble_data['scramble'])
        print(c)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
