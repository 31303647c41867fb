"""
WebSocket Event Handlers

Real-time key press and resize handling for cryptogram games.
"""

from dataclasses import asdict
from flask import current_app, request
from flask_socketio import emit, join_room, leave_room
from ..utils.decorators import websocket_game_required
from ..utils.game_logger import game_logger
from ..utils.helpers import parse_width


def _room(game_id):
    return f"game_{game_id}"


def _width(data):
    return parse_width(
        data.get('width'),
        current_app.config['DEFAULT_GRID_WIDTH'],
        current_app.config['MAX_GRID_WIDTH']
    )


def register_websocket_handlers(socketio):
    """Register all WebSocket event handlers."""

    @socketio.on('connect')
    def handle_connect():
        """Handle WebSocket connection."""
        game_logger.logger.info(f"WebSocket: client {request.sid} connected")

    @socketio.on('disconnect')
    def handle_disconnect(*args):
        """Handle WebSocket disconnection."""
        game_logger.logger.info(f"WebSocket: client {request.sid} disconnected")

    @socketio.on('join_game')
    @websocket_game_required
    def handle_join_game(data, game_service=None):
        """Join a game room and receive the current state."""
        try:
            game_id = data['game_id']
            width = _width(data)

            state = game_service.get_game_state(game_id, width)
            if state is None:
                emit('error', {'error': 'Game not found'})
                return

            join_room(_room(game_id))
            game_logger.log_user_action(request, 'join_game', game_id, width=width)

            emit('game_state_update', {
                'success': True,
                'state': asdict(state)
            })

        except ValueError as e:
            emit('error', {'error': str(e)})
        except Exception as e:
            game_logger.log_error(request, e, 'join_game', data.get('game_id'))
            emit('error', {'error': 'Failed to join game'})

    @socketio.on('leave_game')
    @websocket_game_required
    def handle_leave_game(data, game_service=None):
        """Leave a game room."""
        leave_room(_room(data['game_id']))
        game_logger.log_user_action(request, 'leave_game', data['game_id'])

    @socketio.on('key_press')
    @websocket_game_required
    def handle_key_press(data, game_service=None):
        """Apply one key press and send back the new state."""
        try:
            game_id = data['game_id']
            key = data.get('key')
            index = data.get('index')

            if not isinstance(key, str) or not key:
                emit('error', {'error': 'Key is required'})
                return
            if not isinstance(index, int) or isinstance(index, bool):
                emit('error', {'error': 'Cell index must be an integer'})
                return

            width = _width(data)
            game_logger.log_user_action(request, 'key_press', game_id, key=key, index=index)

            session = game_service.get_session(game_id)
            if session is None:
                emit('error', {'error': 'Game not found'})
                return
            was_won = session.has_won

            state = game_service.handle_key(game_id, key, index, width)

            emit('game_state_update', {
                'success': True,
                'state': asdict(state)
            })

            if state.has_won and not was_won:
                game_logger.log_game_event(
                    game_id, 'game_won', request.remote_addr,
                    corpus=state.corpus, letter_count=state.letter_count,
                    ciphertext=session.ciphertext
                )
                emit('game_won', {
                    'game_id': game_id,
                    'plaintext': state.plaintext,
                    'ciphertext': session.ciphertext
                }, room=_room(game_id))

        except ValueError as e:
            emit('error', {'error': str(e)})
        except Exception as e:
            game_logger.log_error(request, e, 'key_press', data.get('game_id'))
            emit('error', {'error': 'Failed to process key press'})

    @socketio.on('resize')
    @websocket_game_required
    def handle_resize(data, game_service=None):
        """Re-layout the grid for a new container width."""
        try:
            game_id = data['game_id']
            width = _width(data)

            state = game_service.get_game_state(game_id, width)
            if state is None:
                emit('error', {'error': 'Game not found'})
                return

            emit('game_state_update', {
                'success': True,
                'state': asdict(state)
            })

        except ValueError as e:
            emit('error', {'error': str(e)})
        except Exception as e:
            game_logger.log_error(request, e, 'resize', data.get('game_id'))
            emit('error', {'error': 'Failed to resize grid'})
