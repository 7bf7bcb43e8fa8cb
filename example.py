#!/usr/bin/env python3
"""
Example usage of the gridlife package.
"""

from gridlife import GameOfLife, PatternLibrary


def main():
    """Demonstrate programmatic usage of the gridlife package."""
    library = PatternLibrary()
    toad = library.get_pattern("Toad")

    game = GameOfLife(toad.to_grid())

    # Run simulation for 5 generations
    for generation, grid in game.run(5):
        print(grid.render(generation))
        print(f"Population: {grid.population}")

        if game.cycle_detected:
            print(f"Cycle detected! Length: {game.cycle_length}")
            break

        print()

    # Show statistics
    stats = game.get_statistics()
    print("Final statistics:")
    for key, value in stats.items():
        print(f"  {key}: {value}")


if __name__ == "__main__":
    main()
