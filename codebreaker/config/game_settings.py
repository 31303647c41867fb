"""
Game Configuration Constants Module

Corpus locations, the corpus file format and the hint text shown to players.
All game parameters are centralized here to enable easy modification.
"""

import os
from typing import Dict, Final, List

CORPORA_DIR: Final[str] = os.path.join(os.path.dirname(os.path.abspath(__file__)), 'corpora')
"""
Directory holding the bundled corpus files.
"""

CORPORA: Final[Dict[str, str]] = {
    'rural': os.path.join(CORPORA_DIR, 'rural.corpus'),
    'science': os.path.join(CORPORA_DIR, 'science.corpus'),
}
"""
Corpus name -> file path. One corpus is picked at random per new game
unless the client asks for a specific one.
"""

CORPUS_DELIMITER: Final[str] = '\n\n'
"""
Texts inside a corpus file are separated by blank lines.
"""

HINT_WORDS: Final[Dict[int, List[str]]] = {
    1: ['A', 'I'],
    2: ['AM', 'AN', 'AS', 'AT', 'BE', 'BY', 'DO', 'GO', 'HE', 'IF', 'IN', 'IS',
        'IT', 'ME', 'MY', 'NO', 'OF', 'ON', 'OR', 'SO', 'TO', 'UP', 'US', 'WE'],
    3: ['ALL', 'AND', 'ARE', 'BUT', 'CAN', 'FOR', 'HAD', 'HAS', 'HER', 'HIM',
        'HIS', 'ITS', 'NOT', 'ONE', 'OUT', 'SHE', 'THE', 'WAS', 'WHO', 'YOU'],
}
"""
Common short words, grouped by length, offered as a hint.
"""


def validate_corpus_integrity(name: str, texts: List[str]) -> bool:
    """
    Validates the texts loaded from one corpus.

    This function checks that:
    1. The corpus yielded at least one text
    2. Every text contains at least one letter
    3. Every text is in uppercase format

    Returns:
        bool: True if the corpus passes all validation checks

    Raises:
        ValueError: If any validation check fails with detailed error message
    """
    if not texts:
        raise ValueError(f"Corpus '{name}' contains no usable texts")

    for index, text in enumerate(texts):
        if not any(char.isalpha() for char in text):
            raise ValueError(f"Text {index} of corpus '{name}' contains no letters")

        if text != text.upper():
            raise ValueError(f"Text {index} of corpus '{name}' is not in uppercase format")

    return True
