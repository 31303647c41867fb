"""
Cipher Generator

Builds the random substitution cipher for a plaintext. Only letters that
actually occur in the plaintext get a mapping entry.
"""

import random
from dataclasses import dataclass, field
from typing import Dict, Optional, Tuple

from .random_utils import shuffle


@dataclass(frozen=True)
class Alphabet:
    """Ordered run of `count` consecutive symbols starting at `base`."""
    base: str = "A"
    count: int = 26

    def __post_init__(self):
        if len(self.base) != 1:
            raise ValueError("Alphabet base must be a single character")
        if self.count < 1:
            raise ValueError("Alphabet must contain at least one letter")

    @property
    def letters(self) -> Tuple[str, ...]:
        start = ord(self.base)
        return tuple(chr(start + i) for i in range(self.count))

    @property
    def last(self) -> str:
        return chr(ord(self.base) + self.count - 1)

    def __contains__(self, char) -> bool:
        return isinstance(char, str) and len(char) == 1 and self.base <= char <= self.last

    def __len__(self) -> int:
        return self.count


@dataclass(frozen=True)
class CipherMapping:
    """Forward (plain -> cipher) and inverse (cipher -> plain) substitution maps."""
    encryptor: Dict[str, str] = field(default_factory=dict)
    decryptor: Dict[str, str] = field(default_factory=dict)

    def encrypt(self, text: str) -> str:
        return "".join(self.encryptor.get(char, char) for char in text)


def create_cipher(plaintext: str, alphabet: Alphabet,
                  rng: Optional[random.Random] = None) -> CipherMapping:
    """
    Creates a substitution cipher restricted to the letters of `plaintext`.

    Args:
        plaintext: Text the cipher will be applied to
        alphabet: Alphabet the permutation is drawn over
        rng: Optional seeded random source

    Returns:
        CipherMapping whose encryptor and decryptor are exact inverses
    """
    order = list(range(alphabet.count))
    shuffle(order, rng)

    encryptor: Dict[str, str] = {}
    decryptor: Dict[str, str] = {}

    base = ord(alphabet.base)
    for i, shifted in enumerate(order):
        plain_char = chr(base + i)

        # Letters that never appear cannot be guessed
        if plain_char not in plaintext:
            continue

        cipher_char = chr(base + shifted)
        encryptor[plain_char] = cipher_char
        decryptor[cipher_char] = plain_char

    return CipherMapping(encryptor=encryptor, decryptor=decryptor)
