"""
Guess-State Engine

Keeps the player's guessed mapping a partial bijection while handling key
presses. Every update builds a new GuessMapping and swaps it in whole.
"""

from dataclasses import dataclass, field
from typing import Dict, Optional, Sequence

from ..models.game import Cell, CellState
from .cipher import Alphabet

ARROW_LEFT = "ArrowLeft"
ARROW_RIGHT = "ArrowRight"
ARROW_UP = "ArrowUp"
ARROW_DOWN = "ArrowDown"
BACKSPACE = "Backspace"
DELETE = "Delete"

NAVIGATION_KEYS = (ARROW_LEFT, ARROW_RIGHT, ARROW_UP, ARROW_DOWN)
DELETION_KEYS = (BACKSPACE, DELETE)


@dataclass(frozen=True)
class GuessMapping:
    """Player's guessed plain -> cipher and cipher -> plain maps."""
    encryptor: Dict[str, str] = field(default_factory=dict)
    decryptor: Dict[str, str] = field(default_factory=dict)

    def __len__(self) -> int:
        return len(self.encryptor)

    def with_guess(self, plain: str, cipher: str) -> "GuessMapping":
        return GuessMapping(
            encryptor={**self.encryptor, plain: cipher},
            decryptor={**self.decryptor, cipher: plain},
        )

    def with_replacement(self, old_plain: str, new_plain: str) -> "GuessMapping":
        """Moves the cipher letter guessed as `old_plain` over to `new_plain`."""
        cipher = self.encryptor[old_plain]
        encryptor = {k: v for k, v in self.encryptor.items() if k != old_plain}
        encryptor[new_plain] = cipher
        return GuessMapping(
            encryptor=encryptor,
            decryptor={**self.decryptor, cipher: new_plain},
        )

    def without_cipher(self, cipher: str) -> "GuessMapping":
        if cipher not in self.decryptor:
            return self
        plain = self.decryptor[cipher]
        return GuessMapping(
            encryptor={k: v for k, v in self.encryptor.items() if k != plain},
            decryptor={k: v for k, v in self.decryptor.items() if k != cipher},
        )


def has_won(encryptor: Dict[str, str], guessed_encryptor: Dict[str, str]) -> bool:
    return encryptor == guessed_encryptor


def has_filled_not_won(encryptor: Dict[str, str], guessed_encryptor: Dict[str, str]) -> bool:
    """Every letter has a guess but at least one guess is wrong."""
    return not has_won(encryptor, guessed_encryptor) and len(encryptor) == len(guessed_encryptor)


class GuessEngine:
    """
    Input handler for one game.

    This class owns:
    - The guessed mapping
    - The conflicted letter ("" when there is none)
    - The focused cell index
    """

    def __init__(self, alphabet: Alphabet):
        self.alphabet = alphabet
        self.guesses = GuessMapping()
        self.conflicted_char = ""
        self.focus = 0

    def handle_key(self, key: str, index: int, cells: Sequence[Cell], num_cols: int) -> None:
        """
        Applies one key press made while cell `index` had focus.

        Args:
            key: Named key (arrow, Backspace, Delete) or a single character
            index: Index of the focused cell in `cells`
            cells: Cells from the most recent layout pass
            num_cols: Row width of that layout

        Raises:
            ValueError: If index does not point into cells
        """
        if not 0 <= index < len(cells):
            raise ValueError(f"Cell index {index} out of range")

        self.focus = index

        if key in NAVIGATION_KEYS:
            if self._navigate(key, index, len(cells), num_cols):
                return

        if key in DELETION_KEYS:
            self._delete(key, index, cells)
            return

        if len(key) == 1:
            self._input(key, index, cells)

    def _navigate(self, key: str, index: int, total: int, num_cols: int) -> bool:
        last = total - 1
        if key == ARROW_LEFT:
            target = max(0, index - 1)
        elif key == ARROW_RIGHT:
            target = min(last, index + 1)
        elif key == ARROW_UP:
            target = max(0, index - num_cols)
        else:
            target = min(last, index + num_cols)

        if target == index:
            return False
        self.focus = target
        return True

    def _delete(self, key: str, index: int, cells: Sequence[Cell]) -> None:
        target = index
        if key == BACKSPACE and cells[index].state not in (CellState.GUESSED, CellState.CONFLICTED):
            target = max(0, index - 1)
            self.focus = target

        cipher = cells[target].cipher
        if cipher is None or cipher not in self.guesses.decryptor:
            return

        removed = self.guesses.decryptor[cipher]
        self.guesses = self.guesses.without_cipher(cipher)
        if removed == self.conflicted_char:
            self.conflicted_char = ""

    def _input(self, key: str, index: int, cells: Sequence[Cell]) -> None:
        cell = cells[index]
        if cell.state == CellState.NONLETTER:
            return

        pressed = key.upper()
        if pressed not in self.alphabet:
            return

        if cell.state != CellState.UNGUESSED and cell.content == pressed:
            self._advance(index, cells)
            return

        if pressed in self.guesses.encryptor:
            self.conflicted_char = pressed
            return

        self.conflicted_char = ""
        if cell.state == CellState.UNGUESSED:
            self.guesses = self.guesses.with_guess(pressed, cell.cipher)
        else:
            self.guesses = self.guesses.with_replacement(cell.content, pressed)

        self._advance(index, cells)

    def _advance(self, index: int, cells: Sequence[Cell]) -> None:
        """Moves focus to the next unguessed cell holding a different cipher letter."""
        target = next_unguessed(index, cells)
        if target is not None:
            self.focus = target


def next_unguessed(index: int, cells: Sequence[Cell]) -> Optional[int]:
    """
    Scans forward circularly from `index` for an UNGUESSED cell whose cipher
    letter differs from the one at `index`. Returns None after a full lap.
    """
    total = len(cells)
    current = cells[index].cipher
    for offset in range(1, total):
        candidate = (index + offset) % total
        cell = cells[candidate]
        if cell.state == CellState.UNGUESSED and cell.cipher != current:
            return candidate
    return None
