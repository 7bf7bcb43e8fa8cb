"""Core cellular automata logic."""

from .grid import SIZE, Grid, InvalidPattern, next_state
from .game import GameOfLife
from .patterns import Pattern, PatternLibrary, is_valid_pattern_row, parse_pattern_rows

__all__ = [
    "SIZE",
    "Grid",
    "InvalidPattern",
    "next_state",
    "GameOfLife",
    "Pattern",
    "PatternLibrary",
    "is_valid_pattern_row",
    "parse_pattern_rows",
]
