"""Command-line interface for Conway's Game of Life."""

import argparse
import logging
import sys
import time
from typing import Callable, List, Optional

from ..core.grid import SIZE, Grid
from ..core.game import GameOfLife
from ..core.patterns import PatternLibrary, is_valid_pattern_row, parse_pattern_rows

logger = logging.getLogger(__name__)

DEFAULT_DELAY = 1.0
MAX_GENERATIONS = 50


class CLIGameOfLife:
    """Interactive command-line session for running a simulation.

    All user input goes through ``input_func`` and all pacing through
    ``sleep_func``, so a session can be scripted without a terminal or a
    wall clock.
    """

    def __init__(
        self,
        input_func: Optional[Callable[[str], str]] = None,
        sleep_func: Optional[Callable[[float], None]] = None,
        delay: float = DEFAULT_DELAY,
        pattern_library: Optional[PatternLibrary] = None,
    ) -> None:
        """Initialize CLI interface.

        Args:
            input_func: Called with a prompt, returns one line of user input
                (defaults to input)
            sleep_func: Called with the delay between generations
                (defaults to time.sleep)
            delay: Seconds to wait between generations
            pattern_library: Source of named patterns
        """
        self.input_func = input_func or input
        self.sleep_func = sleep_func or time.sleep
        self.delay = delay
        self.pattern_library = pattern_library or PatternLibrary()
        self.interrupted = False

    def _prompt(self, prompt: str) -> str:
        return self.input_func(prompt).strip()

    def get_initial_pattern(self) -> Grid:
        """Ask the user for the initial pattern.

        Any answer other than 1 or 2 falls back to the default pattern.

        Returns:
            The initial grid
        """
        print("Choose your initial pattern:")
        print("1. Use default pattern")
        print("2. Enter custom pattern manually")
        choice = self._prompt("Enter your choice (1 or 2): ")

        if choice == "1":
            print("Using default pattern...\n")
            return Grid.default()
        if choice == "2":
            return self.get_custom_pattern()

        logger.warning(f"Unrecognized pattern choice {choice!r}, using default pattern")
        print("Invalid choice. Using default pattern.\n")
        return Grid.default()

    def get_custom_pattern(self) -> Grid:
        """Read a custom pattern row by row, re-prompting on invalid rows.

        Returns:
            The custom grid
        """
        print(f"\nEnter your {SIZE}x{SIZE} pattern:")
        print("Use '1' for alive cells and '0' for dead cells")
        print(f"Enter each row as {SIZE} characters (e.g., 00100):\n")

        rows = []
        while len(rows) < SIZE:
            row = self._prompt(f"Row {len(rows) + 1}: ")
            if is_valid_pattern_row(row):
                rows.append(row)
            else:
                print(f"Invalid input. Please enter exactly {SIZE} characters (0s and 1s only).")

        print("\nCustom pattern accepted!\n")
        return Grid.from_pattern(parse_pattern_rows(rows))

    def get_number_of_generations(self, maximum: int = MAX_GENERATIONS) -> int:
        """Ask for a generation count until one in [1, maximum] is given.

        Args:
            maximum: Largest accepted count

        Returns:
            The number of generations
        """
        while True:
            text = self._prompt(f"How many generations to run? (1-{maximum}): ")
            try:
                generations = int(text)
            except ValueError:
                print("Please enter a valid number.")
                continue

            if 1 <= generations <= maximum:
                return generations
            print(f"Please enter a number between 1 and {maximum}.")

    def run_simulation(self, grid: Grid, generations: int) -> int:
        """Display ``generations`` generations starting from ``grid``.

        Waits ``delay`` seconds between generations but not after the last
        one. Interrupting the wait ends the run early and sets
        ``interrupted``; the completion line is still printed.

        Args:
            grid: Generation 0
            generations: Number of generations to display

        Returns:
            Number of generations displayed
        """
        print("\nStarting simulation...\n")
        logger.info(f"Running {generations} generations with {self.delay}s delay")

        self.interrupted = False
        game = GameOfLife(grid)
        displayed = 0
        try:
            for generation, current in game.run(generations):
                print(current.render(generation))
                print()
                displayed += 1

                if displayed < generations:
                    self.sleep_func(self.delay)
        except KeyboardInterrupt:
            self.interrupted = True
            print("\nSimulation interrupted by user")
            logger.warning(f"Simulation stopped after {displayed} of {generations} generations")

        if game.cycle_detected:
            logger.info(
                f"Cycle of length {game.cycle_length} from generation {game.cycle_start_generation}"
            )

        print("Simulation completed!")
        return displayed

    def list_patterns(self) -> None:
        """List available patterns by category."""
        categories = self.pattern_library.get_patterns_by_category()

        print("Available patterns:")
        for category, patterns in categories.items():
            print(f"\n{category}:")
            for pattern_name in patterns:
                pattern = self.pattern_library.get_pattern(pattern_name)
                if pattern:
                    size = pattern.get_size()
                    print(f"  {pattern_name}: {size[0]}x{size[1]}, {len(pattern.cells)} cells")
                    if pattern.description:
                        print(f"    {pattern.description}")


def create_parser() -> argparse.ArgumentParser:
    """Create command-line argument parser.

    Returns:
        Configured ArgumentParser
    """
    parser = argparse.ArgumentParser(
        description=f"Run Conway's Game of Life on a {SIZE}x{SIZE} grid",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Choose a pattern and generation count interactively
  gridlife-cli

  # Run the blinker for 10 generations without waiting
  gridlife-cli --pattern Blinker --generations 10 --delay 0

  # List available patterns
  gridlife-cli --list-patterns
        """,
    )

    parser.add_argument(
        "--pattern",
        type=str,
        help="Start from a named pattern instead of asking",
    )

    parser.add_argument(
        "-g",
        "--generations",
        type=int,
        help=f"Number of generations to display, 1-{MAX_GENERATIONS} (asked for when omitted)",
    )

    parser.add_argument(
        "-d",
        "--delay",
        type=float,
        default=DEFAULT_DELAY,
        help=f"Seconds between generations (default: {DEFAULT_DELAY})",
    )

    parser.add_argument(
        "--list-patterns",
        action="store_true",
        help="List available patterns and exit",
    )

    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )

    return parser


def validate_args(args: argparse.Namespace) -> bool:
    """Validate command-line arguments.

    Args:
        args: Parsed arguments

    Returns:
        True if arguments are valid
    """
    errors = []

    if args.generations is not None and not 1 <= args.generations <= MAX_GENERATIONS:
        errors.append(f"Generations must be between 1 and {MAX_GENERATIONS}")

    if args.delay < 0:
        errors.append("Delay must be non-negative")

    if errors:
        print("Error: Invalid arguments:")
        for error in errors:
            print(f"  - {error}")
        return False

    return True


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for CLI interface.

    Args:
        argv: Command-line arguments, sys.argv[1:] when omitted

    Returns:
        Exit code (0 for success, 1 for error or interruption)
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s - %(levelname)s - %(message)s",
    )

    cli = CLIGameOfLife(delay=args.delay)

    if args.list_patterns:
        cli.list_patterns()
        return 0

    if not validate_args(args):
        return 1

    grid = None
    if args.pattern:
        pattern = cli.pattern_library.get_pattern(args.pattern)
        if not pattern:
            available = cli.pattern_library.list_patterns()
            print(f"Error: Pattern '{args.pattern}' not found")
            print(f"Available patterns: {', '.join(available)}")
            return 1
        grid = pattern.to_grid()

    print("=== Conway's Game of Life ===")
    print("Welcome to the cellular automaton simulation!\n")

    try:
        if grid is None:
            grid = cli.get_initial_pattern()

        generations = args.generations or cli.get_number_of_generations()

        cli.run_simulation(grid, generations)
        return 1 if cli.interrupted else 0

    except KeyboardInterrupt:
        print("\nSimulation interrupted by user")
        return 1
    except EOFError:
        print("\nError: Input ended before the simulation could start")
        return 1
    except Exception as e:
        print(f"Error: {e}")
        if args.verbose:
            import traceback

            traceback.print_exc()
        return 1


if __name__ == "__main__":
    sys.exit(main())
