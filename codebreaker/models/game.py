"""
Game Data Models

Contains all game-related data structures and enums.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional


class CellState(Enum):
    """Display state of one grid cell."""
    NONLETTER = "NONLETTER"
    UNGUESSED = "UNGUESSED"
    GUESSED = "GUESSED"
    CONFLICTED = "CONFLICTED"


@dataclass(frozen=True)
class Cell:
    """One rendered grid position. Rebuilt on every layout pass."""
    content: str
    state: CellState
    cipher: Optional[str] = None  # underlying cipher letter, None for non-letters

    @property
    def is_letter(self) -> bool:
        return self.state != CellState.NONLETTER


@dataclass(frozen=True)
class GridLayout:
    """Result of a layout pass."""
    num_cols: int
    cell_width: int
    cells: List[Cell] = field(default_factory=list)

    def rows(self) -> List[List[Cell]]:
        return [self.cells[i:i + self.num_cols] for i in range(0, len(self.cells), self.num_cols)]


@dataclass
class GameState:
    """Client-facing game state representation."""
    game_id: str
    corpus: Optional[str]
    num_cols: int
    cell_width: int
    cells: List[Dict[str, object]]  # content/state/highlighted, JSON ready
    focused_cell: int
    conflicted_char: str
    guess_count: int
    letter_count: int
    has_won: bool
    has_filled_not_won: bool
    plaintext: Optional[str] = None  # Only included once the game is won
