"""Preset 5x5 patterns and parsing of user-entered pattern rows."""

from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from .grid import SIZE, Grid

ALIVE_CHAR = "1"
DEAD_CHAR = "0"


def is_valid_pattern_row(text: Optional[str]) -> bool:
    """Check that a row has exactly SIZE characters, each '0' or '1'."""
    return (
        text is not None
        and len(text) == SIZE
        and all(char in (ALIVE_CHAR, DEAD_CHAR) for char in text)
    )


def parse_pattern_rows(rows: Sequence[str]) -> List[List[bool]]:
    """Parse rows of '0'/'1' characters into a boolean matrix.

    Args:
        rows: SIZE strings of SIZE characters each

    Returns:
        SIZE x SIZE nested list, True for '1'

    Raises:
        ValueError: If the row count is wrong or a row is malformed
    """
    if len(rows) != SIZE:
        raise ValueError(f"Expected {SIZE} rows, got {len(rows)}")

    matrix = []
    for i, row in enumerate(rows, start=1):
        row = row.strip()
        if not is_valid_pattern_row(row):
            raise ValueError(
                f"Row {i} must be exactly {SIZE} characters of '0' and '1', got {row!r}"
            )
        matrix.append([char == ALIVE_CHAR for char in row])

    return matrix


class Pattern:
    """Represents a Game of Life pattern."""

    def __init__(self, name: str, cells: Iterable[Tuple[int, int]], description: str = "") -> None:
        """Initialize a pattern.

        Args:
            name: Pattern name
            cells: (row, col) coordinates of living cells
            description: Optional description
        """
        self.name = name
        self.cells = list(cells)
        self.description = description

    def to_matrix(self) -> List[List[bool]]:
        """Lay the pattern out on a SIZE x SIZE matrix, dropping cells outside it."""
        matrix = [[False] * SIZE for _ in range(SIZE)]
        for row, col in self.cells:
            if 0 <= row < SIZE and 0 <= col < SIZE:
                matrix[row][col] = True
        return matrix

    def to_rows(self) -> List[str]:
        """Get the pattern as rows of '0'/'1' characters."""
        return [
            "".join(ALIVE_CHAR if cell else DEAD_CHAR for cell in row) for row in self.to_matrix()
        ]

    def to_grid(self) -> Grid:
        """Create a new grid holding this pattern."""
        return Grid.from_pattern(self.to_matrix())

    def apply_to_grid(self, grid: Grid, row_offset: int = 0, col_offset: int = 0) -> None:
        """Clear a grid and draw this pattern onto it.

        Cells landing outside the grid are skipped.

        Args:
            grid: Target grid
            row_offset: Vertical offset
            col_offset: Horizontal offset
        """
        for row in range(SIZE):
            for col in range(SIZE):
                grid.set_cell(row, col, False)
        for row, col in self.cells:
            grid.set_cell(row + row_offset, col + col_offset, True)

    def get_bounding_box(self) -> Tuple[int, int, int, int]:
        """Get bounding box of the pattern.

        Returns:
            Tuple of (min_row, min_col, max_row, max_col)
        """
        if not self.cells:
            return (0, 0, 0, 0)

        rows, cols = zip(*self.cells)
        return (min(rows), min(cols), max(rows), max(cols))

    def get_size(self) -> Tuple[int, int]:
        """Get pattern size as (height, width)."""
        min_row, min_col, max_row, max_col = self.get_bounding_box()
        return (max_row - min_row + 1, max_col - min_col + 1)

    @classmethod
    def from_rows(cls, name: str, rows: Sequence[str], description: str = "") -> "Pattern":
        """Create a pattern from rows of '0'/'1' characters.

        Raises:
            ValueError: If the rows are malformed
        """
        matrix = parse_pattern_rows(rows)
        cells = [(r, c) for r in range(SIZE) for c in range(SIZE) if matrix[r][c]]
        return cls(name, cells, description)

    @classmethod
    def from_grid(cls, grid: Grid, name: str, description: str = "") -> "Pattern":
        """Create pattern from current grid state."""
        cells = [
            (r, c) for r, row in enumerate(grid.rows()) for c, alive in enumerate(row) if alive
        ]
        return cls(name, cells, description)

    def __repr__(self) -> str:
        return f"Pattern({self.name!r}, {len(self.cells)} cells)"


class PatternLibrary:
    """Manages a collection of patterns that fit on the grid."""

    def __init__(self) -> None:
        self._patterns: Dict[str, Pattern] = {}
        self._load_builtin_patterns()

    def _load_builtin_patterns(self) -> None:
        """Load built-in patterns."""
        self.add_pattern(Pattern.from_grid(Grid.default(), "Default", "Built-in starting pattern"))

        # Still life patterns
        self.add_pattern(
            Pattern("Block", [(1, 1), (1, 2), (2, 1), (2, 2)], "2x2 still life block")
        )

        self.add_pattern(
            Pattern(
                "Beehive",
                [(1, 2), (1, 3), (2, 1), (2, 4), (3, 2), (3, 3)],
                "Beehive still life",
            )
        )

        # Oscillators
        self.add_pattern(
            Pattern("Blinker", [(1, 2), (2, 2), (3, 2)], "Period-2 oscillator")
        )

        self.add_pattern(
            Pattern(
                "Toad",
                [(2, 1), (2, 2), (2, 3), (3, 0), (3, 1), (3, 2)],
                "Period-2 oscillator",
            )
        )

        # Spaceships
        self.add_pattern(
            Pattern(
                "Glider",
                [(0, 1), (1, 2), (2, 0), (2, 1), (2, 2)],
                "Smallest spaceship, period-4",
            )
        )

    def add_pattern(self, pattern: Pattern) -> None:
        """Add a pattern to the library, replacing any with the same name."""
        self._patterns[pattern.name] = pattern

    def get_pattern(self, name: str) -> Optional[Pattern]:
        """Get a pattern by name, ignoring case.

        Returns:
            Pattern instance or None if not found
        """
        if name in self._patterns:
            return self._patterns[name]

        for pattern_name, pattern in self._patterns.items():
            if pattern_name.lower() == name.lower():
                return pattern
        return None

    def list_patterns(self) -> List[str]:
        """Get list of all pattern names."""
        return list(self._patterns.keys())

    def get_patterns_by_category(self) -> Dict[str, List[str]]:
        """Get patterns organized by category.

        Returns:
            Dictionary mapping categories to pattern name lists
        """
        categories: Dict[str, List[str]] = {
            "Starting": ["Default"],
            "Still Life": ["Block", "Beehive"],
            "Oscillators": ["Blinker", "Toad"],
            "Spaceships": ["Glider"],
            "Custom": [],
        }

        all_builtin = set()
        for cat_patterns in categories.values():
            all_builtin.update(cat_patterns)

        for name in self._patterns:
            if name not in all_builtin:
                categories["Custom"].append(name)

        return {cat: patterns for cat, patterns in categories.items() if patterns}
