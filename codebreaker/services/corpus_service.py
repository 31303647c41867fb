"""
Corpus Service

Loads plaintext corpora and hands out the next text to play.
"""

import random
from typing import Dict, List, Optional

from ..config.game_settings import CORPUS_DELIMITER, validate_corpus_integrity
from ..core.random_utils import random_int, shuffle
from ..utils.game_logger import game_logger


def split_corpus(raw: str, delimiter: str = CORPUS_DELIMITER, min_text_len: int = 0) -> List[str]:
    """
    Splits a raw corpus into playable texts.

    Carriage returns are dropped before splitting, texts are trimmed and
    uppercased, and texts shorter than `min_text_len` are discarded.
    """
    texts = raw.replace('\r', '').split(delimiter)
    texts = [text.strip() for text in texts]
    return [text.upper() for text in texts if text and len(text) >= min_text_len]


class CorpusService:
    """
    Corpus provider for new games.

    This class handles:
    - Reading and filtering each configured corpus file once
    - Picking a corpus at random
    - Walking each corpus in shuffled order, reshuffling when exhausted
    """

    def __init__(self, corpora: Dict[str, str], min_text_len: int = 0,
                 delimiter: str = CORPUS_DELIMITER, rng: Optional[random.Random] = None):
        """
        Args:
            corpora: Corpus name -> file path
            min_text_len: Minimum length of a playable text
            delimiter: Separator between texts inside a file
            rng: Optional seeded random source

        Raises:
            FileNotFoundError: If a corpus file is missing
        """
        self.rng = rng or random.Random()
        self.corpora: Dict[str, List[str]] = {}
        self._queues: Dict[str, List[str]] = {}

        for name, path in corpora.items():
            try:
                with open(path, 'r', encoding='utf-8') as f:
                    raw = f.read()
            except FileNotFoundError:
                raise FileNotFoundError(f"Corpus file not found: {path}")

            self.corpora[name] = split_corpus(raw, delimiter, min_text_len)
            game_logger.logger.info(f"Corpus '{name}': loaded {len(self.corpora[name])} texts from {path}")

    def corpus_names(self) -> List[str]:
        return sorted(self.corpora)

    def texts(self, name: str) -> List[str]:
        if name not in self.corpora:
            raise ValueError(f"Unknown corpus '{name}'")
        return list(self.corpora[name])

    def random_corpus_name(self) -> str:
        names = self.corpus_names()
        if not names:
            raise ValueError("No corpora configured")
        return names[random_int(0, len(names) - 1, self.rng)]

    def next_plaintext(self, name: Optional[str] = None) -> str:
        """
        Returns the next text of a corpus.

        Args:
            name: Corpus to draw from, or None for a random corpus

        Raises:
            ValueError: If the corpus is unknown or has no usable texts
        """
        if name is None:
            name = self.random_corpus_name()

        texts = self.texts(name)
        validate_corpus_integrity(name, texts)

        queue = self._queues.get(name)
        if not queue:
            queue = texts
            shuffle(queue, self.rng)
            self._queues[name] = queue

        return queue.pop()

    def get_corpus_statistics(self) -> Dict[str, Dict]:
        """
        Summarises each corpus.

        Returns:
            dict: Per corpus name:
                - total_texts: Number of playable texts
                - avg_length: Average text length in characters
                - distinct_letters: Average count of distinct letters per text
        """
        stats = {}
        for name, texts in self.corpora.items():
            if not texts:
                stats[name] = {'total_texts': 0, 'avg_length': 0, 'distinct_letters': 0}
                continue

            stats[name] = {
                'total_texts': len(texts),
                'avg_length': round(sum(len(text) for text in texts) / len(texts), 1),
                'distinct_letters': round(
                    sum(len({char for char in text if char.isalpha()}) for text in texts) / len(texts), 1
                ),
            }
        return stats


# Global service instance
_corpus_service = None


def get_corpus_service() -> Optional[CorpusService]:
    """Get the global corpus service instance."""
    return _corpus_service


def initialize_corpus_service(corpora: Dict[str, str], min_text_len: int = 0,
                              rng: Optional[random.Random] = None) -> CorpusService:
    """Initialize the global corpus service instance."""
    global _corpus_service
    _corpus_service = CorpusService(corpora, min_text_len=min_text_len, rng=rng)
    return _corpus_service
