"""
Codebreaker Game Server Application Package

This package contains the cryptogram game server: the cipher and grid engine
under core/, session services, and the HTTP and WebSocket surfaces the
browser client talks to.
"""

from flask import Flask
from flask_cors import CORS
from flask_socketio import SocketIO
from .config import Config, config


def create_app(config_class=Config):
    """
    Build the Flask app and its Socket.IO server.

    The game and corpus services are module singletons and must be
    initialised before requests arrive (see main.py).

    Args:
        config_class: Configuration class, or a key of the `config` mapping
            such as 'production'

    Returns:
        tuple: (app, socketio)

    Raises:
        KeyError: If a configuration name is unknown
    """
    if isinstance(config_class, str):
        config_class = config[config_class]

    app = Flask(__name__)
    app.config.from_object(config_class)

    CORS(app)
    socketio = SocketIO(app, cors_allowed_origins="*", logger=False, engineio_logger=False)

    from .controllers.game_controller import game_bp
    app.register_blueprint(game_bp, url_prefix='/api')

    from .websocket.handlers import register_websocket_handlers
    register_websocket_handlers(socketio)

    app.socketio = socketio
    return app, socketio
