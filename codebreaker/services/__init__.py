"""
Services Package

Contains all business logic and service classes.
"""

from .corpus_service import CorpusService, get_corpus_service, initialize_corpus_service
from .game_service import GameService, GameSession, get_game_service, initialize_game_service

__all__ = [
    'CorpusService', 'get_corpus_service', 'initialize_corpus_service',
    'GameService', 'GameSession', 'get_game_service', 'initialize_game_service'
]
