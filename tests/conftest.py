"""Shared fixtures for Codebreaker tests."""
import os
import random
import tempfile

# Keep test logs out of the working tree; must happen before codebreaker is imported
os.environ.setdefault('LOG_DIR', tempfile.mkdtemp(prefix='codebreaker-logs-'))

import pytest

from codebreaker import create_app
from codebreaker.config import CORPORA, TestingConfig
from codebreaker.core.cipher import Alphabet
from codebreaker.services.corpus_service import initialize_corpus_service
from codebreaker.services.game_service import initialize_game_service


@pytest.fixture
def rng():
    """Seeded random source so every run is reproducible."""
    return random.Random(1234)


@pytest.fixture
def alphabet():
    return Alphabet()


@pytest.fixture
def corpus_service(rng):
    return initialize_corpus_service(CORPORA, min_text_len=TestingConfig.MIN_TEXT_LEN, rng=rng)


@pytest.fixture
def game_service(corpus_service, alphabet, rng):
    return initialize_game_service(corpus_service, alphabet, TestingConfig.DEFAULT_CELL_WIDTH, rng)


@pytest.fixture
def app_and_socketio(game_service):
    app, socketio = create_app(TestingConfig)
    return app, socketio


@pytest.fixture
def client(app_and_socketio):
    app, _ = app_and_socketio
    return app.test_client()


@pytest.fixture
def socket_client(app_and_socketio):
    app, socketio = app_and_socketio
    test_client = socketio.test_client(app)
    yield test_client
    if test_client.is_connected():
        test_client.disconnect()
