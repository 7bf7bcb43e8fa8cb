"""Fixed-size grid data structure for Conway's Game of Life."""

import logging
from typing import Any, Iterator, List, Optional, Sequence, Tuple, Union

import numpy as np
import torch
import torch.nn.functional as F

logger = logging.getLogger(__name__)

SIZE = 5

ALIVE_CELL = "█"
DEAD_CELL = "░"

DEFAULT_PATTERN = (
    (False, False, True, False, False),
    (False, True, False, True, False),
    (False, False, True, False, False),
    (False, False, False, False, False),
    (False, False, False, False, False),
)

PatternLike = Union[np.ndarray, Sequence[Sequence[bool]]]

# Moore neighbourhood without the centre cell
_NEIGHBOR_KERNEL = torch.tensor(
    [[1, 1, 1], [1, 0, 1], [1, 1, 1]], dtype=torch.float32
).unsqueeze(0).unsqueeze(0)


class InvalidPattern(ValueError):
    """Raised when a grid is built from a missing or wrongly sized pattern."""


def next_state(alive: Any, neighbors: Any) -> Any:
    """Apply Conway's rules to a cell state and its live-neighbor count.

    Works on plain values and elementwise on numpy arrays:
    - Live cell with 2-3 neighbors survives
    - Dead cell with exactly 3 neighbors becomes alive
    - All other cells die or stay dead

    Args:
        alive: Current state (bool or boolean array)
        neighbors: Live neighbor count (int or integer array)

    Returns:
        Next state, same shape as the inputs
    """
    return (neighbors == 3) | (alive & (neighbors == 2))


def _copy_pattern(pattern: Optional[PatternLike]) -> np.ndarray:
    """Validate a SIZE x SIZE pattern and return an owned boolean copy."""
    if pattern is None:
        raise InvalidPattern("Pattern must be provided")

    try:
        rows = list(pattern)
    except TypeError as e:
        raise InvalidPattern(f"Pattern must be a {SIZE}x{SIZE} matrix") from e

    if any(isinstance(row, str) for row in rows):
        raise InvalidPattern(
            "Pattern rows must hold cell states, not text; "
            "use parse_pattern_rows() for rows of '0'/'1' characters"
        )

    try:
        cells = np.asarray(rows)
    except ValueError as e:
        # Ragged rows
        raise InvalidPattern(f"Pattern must be {SIZE}x{SIZE}: {e}") from e

    if cells.shape != (SIZE, SIZE):
        raise InvalidPattern(f"Pattern must be {SIZE}x{SIZE}, got shape {cells.shape}")

    if cells.dtype.kind not in "biu":
        raise InvalidPattern(f"Pattern cells must be booleans or integers, got {cells.dtype}")

    return cells.astype(bool)


class Grid:
    """Represents a 5x5 grid for Conway's Game of Life.

    Cells outside the grid are permanently dead: queries for them return
    False and they never count as neighbors. A grid is treated as a snapshot
    of one generation; next_generation() always builds a new instance.
    """

    SIZE = SIZE

    def __init__(self, pattern: Optional[PatternLike] = None) -> None:
        """Initialize a new grid.

        Args:
            pattern: Optional SIZE x SIZE matrix of cell states. The default
                pattern is used when omitted.

        Raises:
            InvalidPattern: If the pattern is not SIZE x SIZE
        """
        self._cells = _copy_pattern(DEFAULT_PATTERN if pattern is None else pattern)

    @classmethod
    def default(cls) -> "Grid":
        """Create a grid holding the built-in default pattern."""
        return cls()

    @classmethod
    def from_pattern(cls, pattern: Optional[PatternLike]) -> "Grid":
        """Create a grid from a caller-supplied pattern.

        The grid owns an independent copy, later changes to ``pattern`` do
        not affect it.

        Args:
            pattern: SIZE x SIZE matrix of truthy/falsy cell states

        Returns:
            New Grid instance

        Raises:
            InvalidPattern: If the pattern is None or not SIZE x SIZE
        """
        try:
            cells = _copy_pattern(pattern)
        except InvalidPattern as e:
            logger.debug(f"Rejected pattern: {e}")
            raise

        return cls(cells)

    @property
    def cells(self) -> np.ndarray:
        """Get a copy of the cell array, indexed as cells[row, col]."""
        return self._cells.copy()

    @property
    def shape(self) -> Tuple[int, int]:
        """Get grid dimensions as (rows, cols)."""
        return (SIZE, SIZE)

    @property
    def population(self) -> int:
        """Get the number of living cells."""
        return int(np.count_nonzero(self._cells))

    def get_cell(self, row: int, col: int) -> bool:
        """Get the state of a cell.

        Args:
            row: Row index
            col: Column index

        Returns:
            True if cell is alive, False if dead or outside the grid
        """
        if not (0 <= row < SIZE and 0 <= col < SIZE):
            return False
        return bool(self._cells[row, col])

    def set_cell(self, row: int, col: int, alive: bool) -> None:
        """Set the state of a cell while building a pattern.

        Writes outside the grid are ignored.

        Args:
            row: Row index
            col: Column index
            alive: Whether the cell should be alive
        """
        if 0 <= row < SIZE and 0 <= col < SIZE:
            self._cells[row, col] = bool(alive)

    def count_neighbors(self, row: int, col: int) -> int:
        """Count living neighbors of a cell.

        Each neighbor is bounds-checked on its own, so the centre may lie
        outside the grid.

        Args:
            row: Row index
            col: Column index

        Returns:
            Number of living neighbors (0-8)
        """
        count = 0
        for dr in [-1, 0, 1]:
            for dc in [-1, 0, 1]:
                if dr == 0 and dc == 0:
                    continue

                nr, nc = row + dr, col + dc
                if 0 <= nr < SIZE and 0 <= nc < SIZE and self._cells[nr, nc]:
                    count += 1

        return count

    def count_all_neighbors(self) -> np.ndarray:
        """Count neighbors for all cells using a PyTorch convolution.

        Zero padding stands in for the dead boundary.

        Returns:
            SIZE x SIZE integer array of neighbor counts
        """
        cells = torch.from_numpy(self._cells.astype(np.float32)).unsqueeze(0).unsqueeze(0)
        neighbors = F.conv2d(cells, _NEIGHBOR_KERNEL, padding=1)
        return neighbors[0, 0].numpy().astype(np.int8)

    def get_next_state(self, row: int, col: int) -> bool:
        """Determine whether a cell is alive in the next generation.

        Args:
            row: Row index
            col: Column index

        Returns:
            True if the cell will be alive
        """
        return bool(next_state(self.get_cell(row, col), self.count_neighbors(row, col)))

    def next_generation(self) -> "Grid":
        """Create the next generation of the grid.

        Every cell is derived from the same snapshot of this grid, which is
        left untouched.

        Returns:
            New Grid representing the next generation
        """
        next_cells = next_state(self._cells, self.count_all_neighbors())

        grid = Grid.from_pattern(next_cells)
        logger.debug(f"Advanced grid: population {self.population} -> {grid.population}")
        return grid

    def rows(self) -> Iterator[Tuple[bool, ...]]:
        """Iterate over rows as tuples of cell states."""
        for row in self._cells:
            yield tuple(bool(cell) for cell in row)

    def to_list(self) -> List[List[bool]]:
        """Convert grid to a nested list of booleans."""
        return [list(row) for row in self.rows()]

    def render(self, generation: int, alive: str = ALIVE_CELL, dead: str = DEAD_CELL) -> str:
        """Render the grid with a generation label.

        Args:
            generation: Generation number shown in the label
            alive: Glyph for living cells
            dead: Glyph for dead cells

        Returns:
            "Generation N:" followed by one line per row
        """
        lines = [f"Generation {generation}:"]
        for row in self.rows():
            lines.append("".join(alive if cell else dead for cell in row))
        return "\n".join(lines)

    def equals(self, other: Optional["Grid"]) -> bool:
        """Check whether another grid has exactly the same cells."""
        if not isinstance(other, Grid):
            return False
        return bool(np.array_equal(self._cells, other._cells))

    def __eq__(self, other: object) -> bool:
        """Check if two grids are equal."""
        return self.equals(other)  # type: ignore[arg-type]

    def __str__(self) -> str:
        """String representation showing one glyph per cell."""
        return "\n".join(
            "".join(ALIVE_CELL if cell else DEAD_CELL for cell in row) for row in self.rows()
        )

    def __repr__(self) -> str:
        return f"Grid(population={self.population})"
