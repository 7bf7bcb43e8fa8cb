"""Conway's Game of Life on a fixed 5x5 grid."""

__version__ = "0.1.0"

from .core.grid import Grid, InvalidPattern
from .core.game import GameOfLife
from .core.patterns import Pattern, PatternLibrary

__all__ = ["Grid", "InvalidPattern", "GameOfLife", "Pattern", "PatternLibrary"]
