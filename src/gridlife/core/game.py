"""Conway's Game of Life simulation engine."""

import logging
from collections import deque
from typing import Any, Deque, Dict, Iterator, Optional, Tuple

from .grid import Grid

logger = logging.getLogger(__name__)


class GameOfLife:
    """Drives a Grid through successive generations.

    The engine holds exactly one current grid and replaces it on every step;
    grids handed out earlier stay valid snapshots. It does no timing of its
    own, so pacing between generations is up to the caller.
    """

    def __init__(self, grid: Grid) -> None:
        """Initialize the game with a grid.

        Args:
            grid: Generation 0 of the simulation
        """
        self.grid = grid
        self._generation = 0
        self._population_history: Deque[int] = deque(maxlen=100)
        self._seen_states: Dict[bytes, int] = {}
        self._cycle_detected = False
        self._cycle_length = 0
        self._cycle_start_generation = 0

        self._update_population_history()
        self._check_for_cycles()

    @property
    def generation(self) -> int:
        """Current generation number."""
        return self._generation

    @property
    def population(self) -> int:
        """Current number of living cells."""
        return self.grid.population

    @property
    def population_history(self) -> list:
        """History of population counts."""
        return list(self._population_history)

    @property
    def cycle_detected(self) -> bool:
        """Whether a cycle has been detected."""
        return self._cycle_detected

    @property
    def cycle_length(self) -> int:
        """Length of detected cycle (0 if no cycle)."""
        return self._cycle_length

    @property
    def cycle_start_generation(self) -> int:
        """Generation where cycle started (0 if no cycle)."""
        return self._cycle_start_generation

    def step(self) -> Grid:
        """Advance the simulation by one generation.

        Returns:
            The new current grid
        """
        self.grid = self.grid.next_generation()
        self._generation += 1
        self._update_population_history()
        self._check_for_cycles()

        return self.grid

    def run(self, generations: int) -> Iterator[Tuple[int, Grid]]:
        """Yield the current grid and advance, ``generations`` times.

        The first item is the current grid itself, so a count of 3 from a
        fresh game yields generations 0, 1 and 2.

        Args:
            generations: Number of generations to yield

        Yields:
            Tuples of (generation, grid)

        Raises:
            ValueError: If generations is negative
        """
        if generations < 0:
            raise ValueError(f"Generation count must be non-negative, got {generations}")

        for i in range(generations):
            yield self._generation, self.grid
            if i < generations - 1:
                self.step()

    def _update_population_history(self) -> None:
        """Update the population history."""
        self._population_history.append(self.population)

    def _check_for_cycles(self) -> None:
        """Record the current state, noting the first repeat as a cycle."""
        if self._cycle_detected:
            return

        current_state = self.grid.cells.tobytes()

        if current_state in self._seen_states:
            first_occurrence = self._seen_states[current_state]
            self._cycle_detected = True
            self._cycle_length = self._generation - first_occurrence
            self._cycle_start_generation = first_occurrence
            logger.debug(
                f"Cycle of length {self._cycle_length} detected at generation {self._generation}"
            )
            return

        self._seen_states[current_state] = self._generation

    def reset(self, grid: Optional[Grid] = None) -> None:
        """Reset the simulation to generation 0.

        Args:
            grid: New starting grid; the current grid is kept when omitted
        """
        if grid is not None:
            self.grid = grid

        self._generation = 0
        self._population_history.clear()
        self._seen_states.clear()
        self._cycle_detected = False
        self._cycle_length = 0
        self._cycle_start_generation = 0

        self._update_population_history()
        self._check_for_cycles()

    def run_until_stable(self, max_generations: int = 100) -> Tuple[int, str]:
        """Run simulation until it dies out or repeats a state.

        A 5x5 grid has finitely many states, so every run ends in a cycle
        or extinction given enough generations.

        Args:
            max_generations: Maximum generations to run

        Returns:
            Tuple of (final_generation, reason) where reason is one of:
            'cycle', 'extinction', 'max_generations'
        """
        for _ in range(max_generations):
            self.step()

            if self.population == 0:
                return self._generation, "extinction"

            if self._cycle_detected:
                return self._generation, "cycle"

        return self._generation, "max_generations"

    def get_statistics(self) -> Dict[str, Any]:
        """Get simulation statistics.

        Returns:
            Dictionary with various statistics
        """
        return {
            "generation": self._generation,
            "population": self.population,
            "population_history": list(self._population_history),
            "population_density": self.population / (Grid.SIZE * Grid.SIZE),
            "cycle_detected": self._cycle_detected,
            "cycle_length": self._cycle_length,
            "cycle_start_generation": self._cycle_start_generation,
            "grid_size": self.grid.shape,
        }
