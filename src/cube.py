import copy
import enum
import logging
from collections import Counter
from types import MappingProxyType

import numpy as np

logger = logging.getLogger(__name__)
logger.addHandler(logging.NullHandler())


class Face(enum.Enum):
    UP = "up"
    DOWN = "down"
    FRONT = "front"
    BACK = "back"
    LEFT = "left"
    RIGHT = "right"


class InvalidFace(ValueError):
    """Raised when an operation names something that is not one of the six faces."""

    def __init__(self, face):
        super().__init__(f"Invalid face: {face!r}")
        self.face = face


class InvalidMoveToken(ValueError):
    """Raised when a move token cannot be resolved to a face turn."""

    def __init__(self, token, reason=None):
        message = f"Invalid move token: {token!r}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)
        self.token = token


# Face order of the 54-sticker string handed to renderers (and to kociemba)
SERIAL_ORDER = (Face.UP, Face.RIGHT, Face.FRONT, Face.DOWN, Face.LEFT, Face.BACK)

SOLVED_COLORS = MappingProxyType({
    Face.UP: 'w',     # white
    Face.DOWN: 'y',   # yellow
    Face.FRONT: 'r',  # red
    Face.BACK: 'o',   # orange
    Face.LEFT: 'g',   # green
    Face.RIGHT: 'b',  # blue
})

# One-hot column order used by CubeState.encode()
COLOR_ORDER = tuple(SOLVED_COLORS[face] for face in SERIAL_ORDER)

# new[i] = old[CLOCKWISE[i]]; corners cycle 0->2->8->6, edges 1->5->7->3, center fixed
CLOCKWISE = (6, 3, 0, 7, 4, 1, 8, 5, 2)

# For a clockwise turn of the key face, each band receives the stickers of the
# next band in the tuple (the last one wraps to the first), read position by
# position in the listed index order.
ADJACENCY = MappingProxyType({
    Face.UP: (
        (Face.FRONT, (0, 1, 2)),
        (Face.RIGHT, (0, 1, 2)),
        (Face.BACK, (0, 1, 2)),
        (Face.LEFT, (0, 1, 2)),
    ),
    Face.DOWN: (
        (Face.FRONT, (6, 7, 8)),
        (Face.LEFT, (6, 7, 8)),
        (Face.BACK, (6, 7, 8)),
        (Face.RIGHT, (6, 7, 8)),
    ),
    Face.FRONT: (
        (Face.UP, (6, 7, 8)),
        (Face.LEFT, (8, 5, 2)),
        (Face.DOWN, (2, 1, 0)),
        (Face.RIGHT, (0, 3, 6)),
    ),
    Face.BACK: (
        (Face.UP, (0, 1, 2)),
        (Face.RIGHT, (2, 5, 8)),
        (Face.DOWN, (8, 7, 6)),
        (Face.LEFT, (6, 3, 0)),
    ),
    Face.LEFT: (
        (Face.UP, (0, 3, 6)),
        (Face.BACK, (8, 5, 2)),
        (Face.DOWN, (0, 3, 6)),
        (Face.FRONT, (0, 3, 6)),
    ),
    Face.RIGHT: (
        (Face.UP, (2, 5, 8)),
        (Face.FRONT, (2, 5, 8)),
        (Face.DOWN, (2, 5, 8)),
        (Face.BACK, (6, 3, 0)),
    ),
})

REVERSAL_MARKER = "'"


def to_face(face):
    """Resolve a Face member or its string value, raising InvalidFace otherwise."""
    if isinstance(face, Face):
        return face
    try:
        return Face(face)
    except ValueError:
        raise InvalidFace(face) from None


class CubeState:
    """
    A 3x3 Rubik's cube held as six facelet grids plus the history of applied moves.

    Each face is a list of 9 stickers indexed in row-major order:
    0 1 2
    3 4 5
    6 7 8

    Index 4 is the center and never moves. Every face turn is a permutation of
    stickers driven by CLOCKWISE and ADJACENCY, so the 54 stickers (9 of each
    color) are conserved by any sequence of moves.
    """

    def __init__(self):
        self.faces = {}
        self._history = []
        self._fill_solved()

    def _fill_solved(self):
        for face in Face:
            self.faces[face] = [SOLVED_COLORS[face]] * 9

    @property
    def move_history(self):
        """Applied move tokens, oldest first."""
        return tuple(self._history)

    def clear_history(self):
        self._history = []

    def clone(self):
        """Create an independent deep copy, history included."""
        new_cube = CubeState()
        new_cube.faces = copy.deepcopy(self.faces)
        new_cube._history = list(self._history)
        return new_cube

    copy = clone

    def facelets(self, face):
        """Return a copy of the 9 stickers of a face."""
        return list(self.faces[to_face(face)])

    def serialize(self):
        """
        Flatten the cube into its 54-character sticker string.

        Faces are emitted in the order up, right, front, down, left, back and each
        face in row-major order. Renderers depend on this layout.
        """
        return "".join("".join(self.faces[face]) for face in SERIAL_ORDER)

    def __str__(self):
        """Return the unfolded net: up on top, left/front/right/back, down below."""
        result = []

        for i in range(0, 9, 3):
            result.append("      " + " ".join(self.faces[Face.UP][i:i+3]))

        for row in range(3):
            row_str = []
            for face in (Face.LEFT, Face.FRONT, Face.RIGHT, Face.BACK):
                row_str.extend(self.faces[face][row*3:row*3+3])
                if face is not Face.BACK:
                    row_str.append(" ")
            result.append(" ".join(row_str))

        for i in range(0, 9, 3):
            result.append("      " + " ".join(self.faces[Face.DOWN][i:i+3]))

        return "\n".join(result)

    def __repr__(self):
        return f"CubeState({self.serialize()!r}, moves={len(self._history)})"

    def __eq__(self, other):
        if not isinstance(other, CubeState):
            return NotImplemented
        return self.faces == other.faces

    def is_solved(self):
        """Check if every face shows a single color."""
        return all(all(face[0] == sticker for sticker in face) for face in self.faces.values())

    def color_counts(self):
        return Counter(self.serialize())

    def rotate_clockwise(self, face, record_move=True):
        """Turn a face a quarter turn clockwise, as seen looking at that face."""
        face = to_face(face)
        self._turn(face)

        if record_move:
            self._history.append(face.value)
        logger.debug("Rotated %s clockwise", face.value)

    def _turn(self, face):
        old = self.faces[face]
        self.faces[face] = [old[i] for i in CLOCKWISE]

        bands = ADJACENCY[face]
        # Read every band before writing any of them
        values = [[self.faces[f][i] for i in indices] for f, indices in bands]
        for k, (target, indices) in enumerate(bands):
            source = values[(k + 1) % len(bands)]
            for index, sticker in zip(indices, source):
                self.faces[target][index] = sticker

    def rotate_counterclockwise(self, face, record_move=True):
        """Turn a face a quarter turn counterclockwise (three clockwise turns)."""
        face = to_face(face)

        for _ in range(3):
            self._turn(face)

        if record_move:
            self._history.append(face.value + REVERSAL_MARKER)
        logger.debug("Rotated %s counterclockwise", face.value)

    def reset_to_solved(self):
        """Restore the solved baseline and forget the move history."""
        self._fill_solved()
        self._history = []
        logger.debug("Cube reset to solved state")

    def to_kociemba_string(self):
        """
        Convert cube state to Kociemba facelet notation.

        Every sticker is replaced by the letter (U, R, F, D, L, B) of the face whose
        center has the same color. The face order already matches Kociemba's
        URFDLB order, so the result can be handed straight to kociemba.solve().
        """
        letters = {
            Face.UP: 'U', Face.RIGHT: 'R', Face.FRONT: 'F',
            Face.DOWN: 'D', Face.LEFT: 'L', Face.BACK: 'B',
        }
        color_map = {self.faces[face][4]: letters[face] for face in Face}
        return "".join(color_map[color] for color in self.serialize())

    def encode(self):
        """One-hot encode the stickers, in serialize() order, as a flat float32 array."""
        columns = {color: i for i, color in enumerate(COLOR_ORDER)}
        state = np.zeros((54, len(COLOR_ORDER)), dtype=np.float32)
        for position, color in enumerate(self.serialize()):
            state[position, columns[color]] = 1.0
        return state.reshape(-1)
