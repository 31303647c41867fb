"""
Core Package

Cipher generation, grid layout and guess handling. Pure in-memory logic with
no Flask dependencies.
"""

from .cipher import Alphabet, CipherMapping, create_cipher
from .grid import create_grid
from .guesses import GuessEngine, GuessMapping, has_filled_not_won, has_won
from .random_utils import random_int, shuffle

__all__ = [
    'Alphabet', 'CipherMapping', 'create_cipher',
    'create_grid',
    'GuessEngine', 'GuessMapping', 'has_won', 'has_filled_not_won',
    'random_int', 'shuffle'
]
