"""
Game Service

Contains the session layer for cryptogram games: one GameSession per game,
kept in memory by the GameService registry.
"""

import random
import time
import uuid
from typing import Dict, List, Optional

from ..core.cipher import Alphabet, create_cipher
from ..core.grid import create_grid
from ..core.guesses import GuessEngine, has_filled_not_won, has_won
from ..models.game import Cell, GameState, GridLayout
from .corpus_service import CorpusService


class GameSession:
    """
    One cryptogram in progress.

    The cipher is generated once here and never changes. All guess state
    lives in the GuessEngine; cells are rebuilt for every layout pass.
    """

    def __init__(self, game_id: str, plaintext: str, alphabet: Alphabet,
                 corpus: Optional[str] = None, rng: Optional[random.Random] = None):
        self.game_id = game_id
        self.plaintext = plaintext
        self.corpus = corpus
        self.cipher = create_cipher(plaintext, alphabet, rng)
        self.engine = GuessEngine(alphabet)
        self.last_active = time.monotonic()

    def layout(self, width: int, cell_width: int) -> GridLayout:
        return create_grid(
            self.plaintext,
            self.cipher.encryptor,
            self.engine.guesses.decryptor,
            self.engine.conflicted_char,
            width,
            cell_width,
        )

    def handle_key(self, key: str, index: int, width: int, cell_width: int) -> GridLayout:
        """Applies one key press against a fresh layout and returns the new layout."""
        grid = self.layout(width, cell_width)
        self.engine.handle_key(key, index, grid.cells, grid.num_cols)
        return self.layout(width, cell_width)

    @property
    def ciphertext(self) -> str:
        return self.cipher.encrypt(self.plaintext)

    @property
    def has_won(self) -> bool:
        return has_won(self.cipher.encryptor, self.engine.guesses.encryptor)

    @property
    def has_filled_not_won(self) -> bool:
        return has_filled_not_won(self.cipher.encryptor, self.engine.guesses.encryptor)

    def to_state(self, grid: GridLayout) -> GameState:
        focus = min(self.engine.focus, max(0, len(grid.cells) - 1))
        won = self.has_won

        return GameState(
            game_id=self.game_id,
            corpus=self.corpus,
            num_cols=grid.num_cols,
            cell_width=grid.cell_width,
            cells=_serialize_cells(grid.cells, focus),
            focused_cell=focus,
            conflicted_char=self.engine.conflicted_char,
            guess_count=len(self.engine.guesses),
            letter_count=len(self.cipher.encryptor),
            has_won=won,
            has_filled_not_won=self.has_filled_not_won,
            plaintext=self.plaintext if won else None,
        )


def _serialize_cells(cells: List[Cell], focus: int) -> List[Dict[str, object]]:
    """Marks every letter cell that matches the focused cell's content and state."""
    focused = cells[focus] if cells else None
    return [
        {
            'content': cell.content,
            'state': cell.state.value,
            'highlighted': (
                focused is not None
                and cell.is_letter
                and cell.content == focused.content
                and cell.state == focused.state
            ),
        }
        for cell in cells
    ]


class GameService:
    """
    Core game service managing multiple game sessions.

    This class handles:
    - Game session management with unique game IDs
    - Plaintext selection through the corpus service
    - Routing key presses to the right session
    - Game state snapshots without exposing the cipher to clients
    """

    def __init__(self, corpus_service: Optional[CorpusService] = None,
                 alphabet: Optional[Alphabet] = None,
                 default_cell_width: int = 20,
                 rng: Optional[random.Random] = None):
        self.games: Dict[str, GameSession] = {}  # Store active games by game_id
        self.corpus_service = corpus_service
        self.alphabet = alphabet or Alphabet()
        self.default_cell_width = default_cell_width
        self.rng = rng or random.Random()

    def _pick_plaintext(self, corpus: Optional[str]) -> str:
        if self.corpus_service is None:
            raise ValueError("No corpus service configured")
        return self.corpus_service.next_plaintext(corpus)

    def create_new_game(self, corpus: Optional[str] = None, plaintext: Optional[str] = None) -> str:
        """
        Creates a new game session.

        Args:
            corpus: Corpus to draw from; a random corpus when None
            plaintext: Explicit text to play instead of a corpus text

        Returns:
            str: Unique game ID for this session

        Raises:
            ValueError: If the corpus is unknown or empty
        """
        if plaintext is None:
            if corpus is None and self.corpus_service is not None:
                corpus = self.corpus_service.random_corpus_name()
            plaintext = self._pick_plaintext(corpus)

        game_id = str(uuid.uuid4())
        self.games[game_id] = GameSession(game_id, plaintext, self.alphabet, corpus, self.rng)
        return game_id

    def get_session(self, game_id: str) -> Optional[GameSession]:
        return self.games.get(game_id)

    def get_game_state(self, game_id: str, width: int) -> Optional[GameState]:
        """
        Returns the current game state laid out for `width` pixels.

        Returns:
            GameState object or None if game not found
        """
        session = self.games.get(game_id)
        if session is None:
            return None
        session.last_active = time.monotonic()
        return session.to_state(session.layout(width, self.default_cell_width))

    def handle_key(self, game_id: str, key: str, index: int, width: int) -> Optional[GameState]:
        """
        Processes one key press for a session.

        Args:
            game_id: Unique game identifier
            key: Named key or single character
            index: Focused cell index at the time of the press
            width: Current grid container width in pixels

        Returns:
            Updated GameState or None if game not found

        Raises:
            ValueError: If index or width is out of range
        """
        session = self.games.get(game_id)
        if session is None:
            return None
        session.last_active = time.monotonic()
        grid = session.handle_key(key, index, width, self.default_cell_width)
        return session.to_state(grid)

    def next_game(self, game_id: str) -> Optional[GameSession]:
        """
        Replaces a session's puzzle with the next text of the same corpus.
        A session started from an explicit plaintext moves to a random corpus.
        """
        session = self.games.get(game_id)
        if session is None:
            return None

        corpus = session.corpus
        if corpus is None and self.corpus_service is not None:
            corpus = self.corpus_service.random_corpus_name()

        plaintext = self._pick_plaintext(corpus)
        self.games[game_id] = GameSession(game_id, plaintext, self.alphabet, corpus, self.rng)
        return self.games[game_id]

    def cleanup_idle_games(self, max_idle_seconds: float, now: Optional[float] = None) -> List[str]:
        """
        Drops sessions that have not seen a key press or state request for
        `max_idle_seconds`.

        Returns:
            list: IDs of the removed games
        """
        now = time.monotonic() if now is None else now
        expired = [
            game_id for game_id, session in list(self.games.items())
            if now - session.last_active > max_idle_seconds
        ]
        for game_id in expired:
            self.games.pop(game_id, None)
        return expired

    def delete_game(self, game_id: str) -> bool:
        """
        Removes a game session from memory.

        Returns:
            bool: True if game was deleted, False if not found
        """
        if game_id in self.games:
            del self.games[game_id]
            return True
        return False


# Global service instance
_game_service = None


def get_game_service() -> Optional[GameService]:
    """Get the global game service instance."""
    return _game_service


def initialize_game_service(corpus_service: Optional[CorpusService] = None,
                            alphabet: Optional[Alphabet] = None,
                            default_cell_width: int = 20,
                            rng: Optional[random.Random] = None) -> GameService:
    """Initialize the global game service instance."""
    global _game_service
    _game_service = GameService(corpus_service, alphabet, default_cell_width, rng)
    return _game_service
