import logging
import random

from cube import Face, InvalidFace, InvalidMoveToken, REVERSAL_MARKER, to_face

logger = logging.getLogger(__name__)
logger.addHandler(logging.NullHandler())

DEFAULT_SCRAMBLE_MOVES = 20

# Singmaster letters for the six faces
NOTATION_LETTERS = {
    'U': Face.UP,
    'D': Face.DOWN,
    'F': Face.FRONT,
    'B': Face.BACK,
    'L': Face.LEFT,
    'R': Face.RIGHT,
}
FACE_LETTERS = {face: letter for letter, face in NOTATION_LETTERS.items()}


def parse_token(token):
    """
    Split a move token into its face and direction.

    "front" is a clockwise front turn, "front'" a counterclockwise one.

    Returns:
        tuple: (Face, clockwise)
    """
    if not isinstance(token, str):
        raise InvalidMoveToken(token, "not a string")

    name = token.strip()
    clockwise = True
    if name.endswith(REVERSAL_MARKER):
        name = name[:-len(REVERSAL_MARKER)]
        clockwise = False

    try:
        face = to_face(name)
    except InvalidFace as e:
        raise InvalidMoveToken(token, str(e)) from e
    return face, clockwise


def make_token(face, clockwise=True):
    face = to_face(face)
    return face.value if clockwise else face.value + REVERSAL_MARKER


def invert_moves(tokens):
    """Return the tokens that undo `tokens`: reversed order, every direction flipped."""
    inverse = []
    for token in reversed(list(tokens)):
        face, clockwise = parse_token(token)
        inverse.append(make_token(face, not clockwise))
    return inverse


def format_moves(tokens):
    return " ".join(tokens)


def from_notation(algorithm):
    """
    Translate a Singmaster algorithm into move tokens.

    Examples:
    - "R U R'" -> ["right", "up", "right'"]
    - "F2 B'" -> ["front", "front", "back'"]

    Half turns become two clockwise quarter turns.
    """
    tokens = []
    for move in algorithm.split():
        face = NOTATION_LETTERS.get(move[0])
        suffix = move[1:]
        if face is None or suffix not in ("", "'", "2"):
            raise InvalidMoveToken(move, "unknown notation")

        if suffix == "2":
            tokens.extend([face.value, face.value])
        else:
            tokens.append(make_token(face, clockwise=suffix == ""))
    return tokens


def to_notation(tokens):
    """Translate move tokens into a Singmaster algorithm string."""
    moves = []
    for token in tokens:
        face, clockwise = parse_token(token)
        moves.append(FACE_LETTERS[face] + ("" if clockwise else "'"))
    return " ".join(moves)


class MoveSequencer:
    """
    Feeds move tokens to a CubeState.

    The sequencer keeps no state of its own. The only randomness lives in
    scramble_sequence(), which takes an optional random.Random so scrambles can
    be reproduced.
    """

    @staticmethod
    def apply_move(cube, token):
        face, clockwise = parse_token(token)
        if clockwise:
            cube.rotate_clockwise(face)
        else:
            cube.rotate_counterclockwise(face)

    @classmethod
    def apply_moves(cls, cube, tokens):
        """
        Apply tokens in order.

        Processing stops at the first invalid token with InvalidMoveToken; moves
        applied before it stay applied. Clone the cube first if that matters.
        """
        count = 0
        for token in tokens:
            cls.apply_move(cube, token)
            count += 1
        logger.debug("Applied %d moves", count)
        return cube

    @classmethod
    def scramble_sequence(cls, cube, count=DEFAULT_SCRAMBLE_MOVES, rng=None):
        """
        Scramble the cube with `count` random quarter turns.

        The move history is cleared first, so afterwards it equals the returned
        token list.

        Args:
            cube: CubeState to scramble in place
            count: Number of moves
            rng: Optional random.Random; the module-level generator is used otherwise

        Returns:
            list: The applied move tokens
        """
        if count < 0:
            raise ValueError(f"Scramble length must be non-negative, got {count}")
        if rng is None:
            rng = random

        faces = list(Face)
        cube.clear_history()

        moves = []
        for _ in range(count):
            face = rng.choice(faces)
            clockwise = rng.random() < 0.5
            token = make_token(face, clockwise)
            cls.apply_move(cube, token)
            moves.append(token)

        if logger.isEnabledFor(logging.DEBUG):
            logger.debug("Scrambled cube with %d moves: %s", count, format_moves(moves))
        return moves
