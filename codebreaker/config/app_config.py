"""
Configuration Management Module

Centralized configuration management following the 12-factor app methodology.
All configuration is loaded from environment variables with sensible defaults.
"""

import os
from dotenv import load_dotenv

# Load environment variables from config.env next to this module
load_dotenv(os.path.join(os.path.dirname(os.path.abspath(__file__)), 'config.env'))


class Config:
    """Base configuration class with all settings."""

    # Flask Settings
    SECRET_KEY = os.getenv('SECRET_KEY', 'dev-secret-key-change-in-production')
    DEBUG = os.getenv('DEBUG', 'False').lower() == 'true'
    TESTING = False

    # Server Settings
    HOST = os.getenv('HOST', '127.0.0.1')
    PORT = int(os.getenv('PORT', 5000))

    # Alphabet Settings
    ALPHABET_BASE = os.getenv('ALPHABET_BASE', 'A')
    ALPHABET_SIZE = int(os.getenv('ALPHABET_SIZE', 26))

    # Layout Settings (pixels)
    DEFAULT_CELL_WIDTH = int(os.getenv('DEFAULT_CELL_WIDTH', 20))
    DEFAULT_GRID_WIDTH = int(os.getenv('DEFAULT_GRID_WIDTH', 600))
    MAX_GRID_WIDTH = int(os.getenv('MAX_GRID_WIDTH', 4000))

    # Corpus Settings
    MIN_TEXT_LEN = int(os.getenv('MIN_TEXT_LEN', 60))
    RANDOM_SEED = os.getenv('RANDOM_SEED') or None

    # Session Settings
    GAME_IDLE_TIMEOUT_SECONDS = int(os.getenv('GAME_IDLE_TIMEOUT_SECONDS', 3600))
    CLEANUP_INTERVAL_SECONDS = int(os.getenv('CLEANUP_INTERVAL_SECONDS', 60))

    # Logging Settings
    LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO')
    LOG_DIR = os.getenv('LOG_DIR', 'logs')


class DevelopmentConfig(Config):
    """Development configuration."""
    DEBUG = True


class ProductionConfig(Config):
    """Production configuration."""
    DEBUG = False


class TestingConfig(Config):
    """Testing configuration."""
    TESTING = True
    DEBUG = True
    RANDOM_SEED = 'codebreaker-tests'


# Configuration mapping
config = {
    'development': DevelopmentConfig,
    'production': ProductionConfig,
    'testing': TestingConfig,
    'default': DevelopmentConfig
}
