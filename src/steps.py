"""
Step records for UIs that walk through a sequence of moves one stage at a time.

A step record is {description, cube snapshot, moves}. StepRecorder keeps a
working copy of the cube, applies each stage's moves to it and snapshots the
result. It replays fixed move lists only: nothing here looks at the cube to
decide what to do next, so replaying DEMO_ROUTINE does not solve a scrambled cube.
"""
import logging
from dataclasses import dataclass, field
from typing import List

from cube import CubeState
from sequencer import MoveSequencer

logger = logging.getLogger(__name__)
logger.addHandler(logging.NullHandler())

# Fixed stages shown by the demo walkthrough, in order
DEMO_ROUTINE = (
    ("Solve white cross", ["front", "right", "up", "right'", "up'", "front'"]),
    ("Solve white corners", ["right", "up", "right'", "up'"]),
    ("Solve middle layer", ["up", "right", "up'", "right'", "up'", "front'", "up", "front"]),
    ("Solve yellow cross", ["front", "right", "up", "right'", "up'", "front'"]),
    ("Solve yellow edges", ["right", "up", "right'", "up", "right", "up", "up", "right'"]),
    ("Solve yellow corners", ["up", "right", "up'", "left", "up", "right'", "up'", "left'"]),
    ("Orient yellow corners", ["right'", "down", "right'", "down", "down", "right", "down", "right"]),
)


@dataclass
class StepRecord:
    description: str
    cube: CubeState
    moves: List[str] = field(default_factory=list)

    def as_dict(self):
        return {
            "description": self.description,
            "state": self.cube.serialize(),
            "moves": list(self.moves),
        }


class StepRecorder:
    """Applies stages of moves to a private copy of a cube and records each stage."""

    def __init__(self, cube, description="Initial state"):
        self.cube = cube.clone()
        self.steps = [StepRecord(description, self.cube.clone())]
        self.moves = []

    def apply(self, moves, description):
        moves = list(moves)
        if not moves:
            return None

        # Working cube only advances once the whole stage has applied
        cube = self.cube.clone()
        MoveSequencer.apply_moves(cube, moves)
        self.cube = cube
        self.moves.extend(moves)
        record = StepRecord(description, cube.clone(), moves)
        self.steps.append(record)
        logger.debug("Recorded step %r with %d moves", description, len(moves))
        return record


def replay_routine(cube, routine=DEMO_ROUTINE):
    """
    Replay a fixed routine on a copy of `cube`.

    If the cube is already solved only the initial record is produced.

    Returns:
        tuple: (steps, moves) - the step records and every move applied
    """
    recorder = StepRecorder(cube)
    if recorder.cube.is_solved():
        return recorder.steps, recorder.moves

    for description, moves in routine:
        recorder.apply(moves, description)
    return recorder.steps, recorder.moves
