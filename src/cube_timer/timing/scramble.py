"""
Scramble (shuffle) generation.

A scramble is a first-order random walk over the 12 quarter-turn moves of
the cube. The first move is drawn uniformly from all 12; every following
move is drawn uniformly from the 8 moves whose axis differs from the axis
of the previous move, so consecutive moves never cancel or merge.

Axis groups:
    RL: R R' L L'
    FB: F F' B B'
    UD: U U' D D'

Usage:
    generator = ScrambleGenerator()
    tokens = generator.generate(25)
    text = render_scramble(tokens)        # "R, U', F, ..."
    for row in ScrambleRows(tokens):      # rows of 5 for layout
        print(" ".join(row))
"""

from enum import Enum
from typing import Iterator, List, Optional, Sequence
import logging
import numpy as np

logger = logging.getLogger(__name__)

SCRAMBLE_SEPARATOR = ", "
ROW_SIZE = 5


class Axis(str, Enum):
    """Mutually exclusive face pairings."""
    RL = "RL"
    FB = "FB"
    UD = "UD"


class MoveToken(str, Enum):
    """One atomic quarter turn."""
    R = "R"
    R_PRIME = "R'"
    L = "L"
    L_PRIME = "L'"
    F = "F"
    F_PRIME = "F'"
    B = "B"
    B_PRIME = "B'"
    U = "U"
    U_PRIME = "U'"
    D = "D"
    D_PRIME = "D'"

    @property
    def axis(self) -> Axis:
        return _AXIS_OF_FACE[self.value[0]]

    def __str__(self) -> str:
        return self.value


_AXIS_OF_FACE = {
    'R': Axis.RL, 'L': Axis.RL,
    'F': Axis.FB, 'B': Axis.FB,
    'U': Axis.UD, 'D': Axis.UD,
}

ALL_MOVES: tuple = tuple(MoveToken)

# Candidate pools per excluded axis, precomputed once
_MOVES_EXCLUDING = {
    axis: tuple(m for m in ALL_MOVES if m.axis is not axis)
    for axis in Axis
}


class ScrambleGenerator:
    """
    Generates scrambles satisfying the axis-exclusion constraint.

    Randomness comes from a numpy Generator; pass a seed (or an existing
    Generator) to make the output reproducible.
    """

    def __init__(
        self,
        seed: Optional[int] = None,
        rng: Optional[np.random.Generator] = None
    ):
        self.rng = rng if rng is not None else np.random.default_rng(seed)

    def generate(self, length: int) -> List[MoveToken]:
        """
        Generate a scramble of exactly `length` moves.

        Args:
            length: Number of moves (0 yields an empty list)

        Returns:
            List of MoveToken, no two consecutive sharing an axis
        """
        if length < 0:
            raise ValueError(f"Scramble length must be non-negative, got {length}")

        sequence: List[MoveToken] = []
        if length == 0:
            return sequence

        last = ALL_MOVES[int(self.rng.integers(len(ALL_MOVES)))]
        sequence.append(last)

        for _ in range(1, length):
            last = self._pick_turn(last)
            sequence.append(last)

        logger.debug(f"Generated scramble of {length} moves")
        return sequence

    def _pick_turn(self, prev: MoveToken) -> MoveToken:
        candidates = _MOVES_EXCLUDING[prev.axis]
        return candidates[int(self.rng.integers(len(candidates)))]


def render_scramble(tokens: Sequence[MoveToken], separator: str = SCRAMBLE_SEPARATOR) -> str:
    """Join tokens into the persisted text form."""
    return separator.join(str(t) for t in tokens)


def parse_scramble(text: str, separator: str = SCRAMBLE_SEPARATOR) -> List[MoveToken]:
    """
    Parse a persisted scramble back into tokens.

    Raises:
        ValueError: if a token is not one of the 12 moves
    """
    stripped = text.strip()
    if not stripped:
        return []
    return [MoveToken(part.strip()) for part in stripped.split(separator.strip())]


class ScrambleRows:
    """
    Restartable, lazy grouping of a scramble into display rows.

    Each iteration starts from the first token again; rows hold at most
    `row_size` token strings, the last row may be shorter.
    """

    def __init__(self, tokens: Sequence[MoveToken], row_size: int = ROW_SIZE):
        if row_size < 1:
            raise ValueError(f"row_size must be positive, got {row_size}")
        self.tokens = tuple(tokens)
        self.row_size = row_size

    def __iter__(self) -> Iterator[List[str]]:
        for start in range(0, len(self.tokens), self.row_size):
            yield [str(t) for t in self.tokens[start:start + self.row_size]]

    def __len__(self) -> int:
        return -(-len(self.tokens) // self.row_size)
