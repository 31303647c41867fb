"""
Codebreaker Game Server - Main Entry Point

This is the main entry point for the Codebreaker game server.
It initializes all services and starts the Flask-SocketIO application.
"""

import os
import random
import threading
import time
from codebreaker import create_app
from codebreaker.config import CORPORA, config
from codebreaker.core.cipher import Alphabet
from codebreaker.services.corpus_service import initialize_corpus_service
from codebreaker.services.game_service import get_game_service, initialize_game_service
from codebreaker.utils.game_logger import game_logger


def idle_game_cleanup_worker(max_idle_seconds, interval_seconds):
    """
    Background worker that drops game sessions nobody has touched for
    `max_idle_seconds`. Runs every `interval_seconds`.
    """
    while True:
        try:
            game_service = get_game_service()
            if game_service:
                expired = game_service.cleanup_idle_games(max_idle_seconds)
                if expired:
                    game_logger.logger.info(f"Idle cleanup: removed {len(expired)} game(s)")
                    for game_id in expired:
                        game_logger.log_game_event(game_id, 'game_expired', 'system', idle_seconds=max_idle_seconds)
        except Exception as e:
            game_logger.logger.error(f"Error in idle game cleanup worker: {e}")

        time.sleep(interval_seconds)


def main():
    """Main function to initialize services and start the server."""
    try:
        print("Initializing services...")

        settings = config[os.getenv('APP_ENV', 'default')]
        rng = random.Random(settings.RANDOM_SEED)

        corpus_service = initialize_corpus_service(CORPORA, min_text_len=settings.MIN_TEXT_LEN, rng=rng)
        print(f"✓ Corpus service initialized ({', '.join(corpus_service.corpus_names())})")

        alphabet = Alphabet(settings.ALPHABET_BASE, settings.ALPHABET_SIZE)
        initialize_game_service(corpus_service, alphabet, settings.DEFAULT_CELL_WIDTH, rng)
        print("✓ Game service initialized successfully")

        print("Creating Flask application...")
        app, socketio = create_app(settings)
        print("✓ Flask application created successfully")

        cleanup_thread = threading.Thread(
            target=idle_game_cleanup_worker,
            args=(settings.GAME_IDLE_TIMEOUT_SECONDS, settings.CLEANUP_INTERVAL_SECONDS),
            daemon=True
        )
        cleanup_thread.start()
        print(f"✓ Idle game cleanup started - checking every {settings.CLEANUP_INTERVAL_SECONDS} seconds")

        game_logger.logger.info("Codebreaker Server Starting")

        print(f"\nStarting Codebreaker Game Server on {settings.HOST}:{settings.PORT}")
        print(f"Debug mode: {settings.DEBUG}")
        print(f"Alphabet: {alphabet.base}-{alphabet.last}")
        print("=" * 50)

        socketio.run(app, host=settings.HOST, port=settings.PORT, debug=settings.DEBUG)

    except KeyboardInterrupt:
        print("\nServer shutting down...")
        game_logger.logger.info("Codebreaker Server shutting down (KeyboardInterrupt)")
    except Exception as e:
        print(f"Error starting server: {e}")
        game_logger.logger.error(f"Error starting server: {e}")
        raise


if __name__ == '__main__':
    main()
