"""
Configuration Package

Contains all configuration-related files and settings.

This package separates two types of configuration:
- app_config.py: Flask application configuration (environment-based)
- game_settings.py: Corpus locations and hint text (game content)
"""

from .app_config import Config, DevelopmentConfig, ProductionConfig, TestingConfig, config
from .game_settings import CORPORA, CORPUS_DELIMITER, HINT_WORDS, validate_corpus_integrity

__all__ = [
    # App configuration
    'Config', 'DevelopmentConfig', 'ProductionConfig', 'TestingConfig', 'config',
    # Game content
    'CORPORA', 'CORPUS_DELIMITER', 'HINT_WORDS', 'validate_corpus_integrity'
]
