"""
Move Resolver
=============

Slide-and-merge algorithm for the four directional commands.

Every line (a row for LEFT/RIGHT, a column for UP/DOWN) is read from the
destination edge inward, folded into a compacted line, and written back.
A merged tile is emitted directly into the output, so it can never take
part in a second merge during the same call.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import List, Sequence, Tuple, Union

import numpy as np

from crack2048.core.grid import Grid


class Direction(IntEnum):
    """Directional command. Values double as gym action ids."""
    UP = 0
    DOWN = 1
    LEFT = 2
    RIGHT = 3

    @classmethod
    def coerce(cls, value: Union["Direction", int, str]) -> "Direction":
        """
        Convert an action id or name into a Direction.

        Raises:
            ValueError: If value does not name a direction.
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls[value.upper()]
            except KeyError:
                raise ValueError(f"Unknown direction: {value!r}") from None
        if isinstance(value, bool) or not isinstance(value, (int, np.integer)):
            raise ValueError(f"Unknown direction: {value!r}")
        return cls(int(value))


@dataclass(frozen=True)
class MoveResult:
    """Result of resolving one direction over a grid."""
    changed: bool
    score_delta: int
    merges: int


def collapse_line(line: Sequence[int]) -> Tuple[List[int], int, int]:
    """
    Compact one line toward index 0.

    Args:
        line: Tile values ordered from the destination edge inward.

    Returns:
        (new_line, score_delta, merges). new_line has the same length as
        line, zero-padded at the far end.
    """
    out: List[int] = []
    pending = 0  # tile waiting for a possible merge partner
    gained = 0
    merges = 0

    for value in line:
        if value == 0:
            continue
        if pending == value:
            out.append(value * 2)
            gained += value * 2
            merges += 1
            pending = 0
        else:
            if pending:
                out.append(pending)
            pending = value

    if pending:
        out.append(pending)

    out.extend([0] * (len(line) - len(out)))
    return out, gained, merges


def line_coordinates(direction: Direction, index: int, size: int) -> List[Tuple[int, int]]:
    """
    Cell coordinates of line ``index``, ordered from the destination edge inward.
    """
    if direction == Direction.LEFT:
        return [(index, c) for c in range(size)]
    if direction == Direction.RIGHT:
        return [(index, c) for c in range(size - 1, -1, -1)]
    if direction == Direction.UP:
        return [(r, index) for r in range(size)]
    if direction == Direction.DOWN:
        return [(r, index) for r in range(size - 1, -1, -1)]
    raise ValueError(f"Unknown direction: {direction!r}")


class MoveResolver:
    """
    Applies a directional move to a Grid in place.

    Stateless: the same resolver can be shared across sessions.
    """

    def resolve(self, grid: Grid, direction: Union[Direction, int, str]) -> MoveResult:
        """
        Slide and merge every line of grid toward direction.

        Args:
            grid: Grid to mutate.
            direction: Direction (or its id / name).

        Returns:
            MoveResult with whether any cell changed, the sum of merged
            tile values, and the number of merges.

        Raises:
            ValueError: If direction is not a valid Direction.
        """
        direction = Direction.coerce(direction)
        size = grid.size

        changed = False
        score_delta = 0
        merges = 0

        for index in range(size):
            coords = line_coordinates(direction, index, size)
            before = [grid.get(r, c) for r, c in coords]
            after, gained, merged = collapse_line(before)

            if after != before:
                changed = True
                for (r, c), value in zip(coords, after):
                    grid.set(r, c, value)

            score_delta += gained
            merges += merged

        return MoveResult(changed=changed, score_delta=score_delta, merges=merges)

    def preview(self, grid: Grid, direction: Union[Direction, int, str]) -> MoveResult:
        """Resolve direction on a copy of grid, leaving grid untouched."""
        return self.resolve(grid.copy(), direction)

    def legal_moves(self, grid: Grid) -> List[Direction]:
        """Directions that would change grid."""
        return [d for d in Direction if self.preview(grid, d).changed]
