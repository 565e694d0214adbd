import logging
import random
import unittest
from unittest import mock

from cube import CubeState, Face, InvalidFace, InvalidMoveToken
from sequencer import (
    MoveSequencer,
    format_moves,
    from_notation,
    invert_moves,
    make_token,
    parse_token,
    to_notation,
)


class TestTokens(unittest.TestCase):

    def test_parse_token(self):
        self.assertEqual(parse_token("front"), (Face.FRONT, True))
        self.assertEqual(parse_token("front'"), (Face.FRONT, False))
        self.assertEqual(parse_token("  down' "), (Face.DOWN, False))

    def test_parse_token_rejects_unknown_face(self):
        for bad in ("F", "sideways'", "'", "", 7):
            with self.subTest(token=bad):
                with self.assertRaises(InvalidMoveToken):
                    parse_token(bad)

    def test_invalid_token_chains_invalid_face(self):
        with self.assertRaises(InvalidMoveToken) as ctx:
            parse_token("middle'")
        self.assertIsInstance(ctx.exception.__cause__, InvalidFace)
        self.assertEqual(ctx.exception.token, "middle'")

    def test_make_token(self):
        self.assertEqual(make_token(Face.LEFT), "left")
        self.assertEqual(make_token("left", clockwise=False), "left'")

    def test_format_moves(self):
        self.assertEqual(format_moves(["up", "right'"]), "up right'")
        self.assertEqual(format_moves([]), "")


class TestNotation(unittest.TestCase):

    def test_from_notation(self):
        self.assertEqual(from_notation("R U2 F'"), ["right", "up", "up", "front'"])
        self.assertEqual(from_notation(""), [])

    def test_from_notation_rejects_unknown_moves(self):
        for bad in ("X", "R3", "M", "u"):
            with self.subTest(algorithm=bad):
                with self.assertRaises(InvalidMoveToken):
                    from_notation(bad)

    def test_to_notation(self):
        self.assertEqual(to_notation(["back", "left'", "down"]), "B L' D")

    def test_sexy_move_six_times_is_identity(self):
        cube = CubeState()
        MoveSequencer.apply_moves(cube, from_notation("R U R' U'") * 6)
        self.assertTrue(cube.is_solved())


class TestApplyMoves(unittest.TestCase):

    def test_apply_moves_dispatches_by_direction(self):
        cube = CubeState()
        MoveSequencer.apply_moves(cube, ["front", "up'"])

        expected = CubeState()
        expected.rotate_clockwise("front")
        expected.rotate_counterclockwise("up")
        self.assertEqual(cube.serialize(), expected.serialize())
        self.assertEqual(cube.move_history, ("front", "up'"))

    def test_apply_moves_stops_at_invalid_token(self):
        cube = CubeState()
        with self.assertRaises(InvalidMoveToken):
            MoveSequencer.apply_moves(cube, ["up", "sideways", "front"])

        expected = CubeState()
        expected.rotate_clockwise("up")
        self.assertEqual(cube.serialize(), expected.serialize())
        self.assertEqual(cube.move_history, ("up",))

    def test_invert_moves_restores_state(self):
        tokens = ["front", "right'", "up", "back", "left'", "down"]
        self.assertEqual(invert_moves(tokens), ["down'", "left", "back'", "up'", "right", "front'"])

        cube = CubeState()
        MoveSequencer.apply_moves(cube, tokens)
        MoveSequencer.apply_moves(cube, invert_moves(tokens))
        self.assertTrue(cube.is_solved())


class TestScramble(unittest.TestCase):

    def test_history_matches_scramble(self):
        cube = CubeState()
        moves = MoveSequencer.scramble_sequence(cube, 25, rng=random.Random(3))
        self.assertEqual(len(moves), 25)
        self.assertEqual(list(cube.move_history), moves)

    def test_replaying_history_reproduces_state(self):
        cube = CubeState()
        MoveSequencer.scramble_sequence(cube, 30, rng=random.Random(11))
        state = cube.serialize()
        history = list(cube.move_history)

        cube.reset_to_solved()
        MoveSequencer.apply_moves(cube, history)
        self.assertEqual(cube.serialize(), state)

    def test_scramble_clears_previous_history(self):
        cube = CubeState()
        cube.rotate_clockwise("up")
        moves = MoveSequencer.scramble_sequence(cube, 5, rng=random.Random(0))
        self.assertEqual(list(cube.move_history), moves)

    def test_same_seed_same_scramble(self):
        a, b = CubeState(), CubeState()
        moves_a = MoveSequencer.scramble_sequence(a, 20, rng=random.Random(42))
        moves_b = MoveSequencer.scramble_sequence(b, 20, rng=random.Random(42))
        self.assertEqual(moves_a, moves_b)
        self.assertEqual(a.serialize(), b.serialize())

    def test_scramble_uses_every_face_and_both_directions(self):
        moves = MoveSequencer.scramble_sequence(CubeState(), 300, rng=random.Random(5))
        parsed = [parse_token(token) for token in moves]
        self.assertEqual({face for face, _ in parsed}, set(Face))
        self.assertEqual({clockwise for _, clockwise in parsed}, {True, False})

    def test_default_rng(self):
        cube = CubeState()
        moves = MoveSequencer.scramble_sequence(cube)
        self.assertEqual(len(moves), 20)
        self.assertEqual(cube.color_counts(), CubeState().color_counts())

    def test_scramble_logs_moves_at_debug(self):
        with self.assertLogs("sequencer", level=logging.DEBUG) as logs:
            moves = MoveSequencer.scramble_sequence(CubeState(), 3, rng=random.Random(9))
        self.assertIn(f"Scrambled cube with 3 moves: {format_moves(moves)}", logs.output[-1])

    def test_scramble_skips_formatting_without_debug(self):
        logger = logging.getLogger("sequencer")
        self.addCleanup(logger.setLevel, logger.level)
        logger.setLevel(logging.WARNING)

        with mock.patch("sequencer.format_moves") as formatter:
            MoveSequencer.scramble_sequence(CubeState(), 5, rng=random.Random(9))
        formatter.assert_not_called()

    def test_zero_and_negative_counts(self):
        cube = CubeState()
        self.assertEqual(MoveSequencer.scramble_sequence(cube, 0), [])
        self.assertTrue(cube.is_solved())
        with self.assertRaises(ValueError):
            MoveSequencer.scramble_sequence(cube, -1)


if __name__ == "__main__":
    unittest.main()
