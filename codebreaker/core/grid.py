"""
Grid Builder

Lays plaintext out into fixed-width rows of cells. Rows only break at
whitespace, so words are never split across rows when they can fit.
"""

import re
from typing import Dict, List

from ..models.game import Cell, CellState, GridLayout

_WHITESPACE_RE = re.compile(r"(\s+)")
_BLANK = Cell(content=" ", state=CellState.NONLETTER)


def _letter_cell(plain_char: str, encryptor: Dict[str, str],
                 guessed_decryptor: Dict[str, str], conflicted_char: str) -> Cell:
    if plain_char not in encryptor:
        return Cell(content=plain_char, state=CellState.NONLETTER)

    cipher_char = encryptor[plain_char]
    if cipher_char not in guessed_decryptor:
        return Cell(content=cipher_char, state=CellState.UNGUESSED, cipher=cipher_char)

    guessed_char = guessed_decryptor[cipher_char]
    if guessed_char == conflicted_char:
        return Cell(content=guessed_char, state=CellState.CONFLICTED, cipher=cipher_char)
    return Cell(content=guessed_char, state=CellState.GUESSED, cipher=cipher_char)


def create_grid(plaintext: str,
                encryptor: Dict[str, str],
                guessed_decryptor: Dict[str, str],
                conflicted_char: str,
                available_width: int,
                default_cell_width: int) -> GridLayout:
    """
    Builds the cell grid for one render pass.

    Args:
        plaintext: Hidden text being laid out
        encryptor: True plain -> cipher mapping
        guessed_decryptor: Player's cipher -> plain guesses
        conflicted_char: Guess letter currently flagged as reused, or ""
        available_width: Pixel width of the grid container
        default_cell_width: Preferred pixel width of one cell

    Returns:
        GridLayout with the column count, final cell width and cells

    Raises:
        ValueError: If either width is out of range
    """
    if default_cell_width <= 0:
        raise ValueError("Default cell width must be positive")
    if available_width < 0:
        raise ValueError("Available width cannot be negative")

    tokens = _WHITESPACE_RE.split(plaintext)

    min_cols = max(len(token) for token in tokens)
    num_cols = max(1, min_cols, available_width // default_cell_width)
    cell_width = available_width // num_cols

    cells: List[Cell] = []
    remaining_cols = num_cols

    for token in tokens:
        if token and token.isspace():
            if "\n" in token:
                cells.extend([_BLANK] * remaining_cols)
                remaining_cols = num_cols
            elif remaining_cols > 0:
                cells.append(_BLANK)
                remaining_cols -= 1
            # Spaces at a full row are dropped
            continue

        if remaining_cols < len(token):
            cells.extend([_BLANK] * remaining_cols)
            remaining_cols = num_cols

        cells.extend(
            _letter_cell(char, encryptor, guessed_decryptor, conflicted_char)
            for char in token
        )
        remaining_cols -= len(token)

    return GridLayout(num_cols=num_cols, cell_width=cell_width, cells=cells)
