"""
Game Controller

Handles all game-related HTTP endpoints.
"""

from flask import Blueprint, current_app, request, jsonify
from dataclasses import asdict
from ..config.game_settings import HINT_WORDS
from ..services.corpus_service import get_corpus_service
from ..services.game_service import get_game_service
from ..utils.decorators import require_game_service
from ..utils.game_logger import game_logger
from ..utils.helpers import parse_width

game_bp = Blueprint('game', __name__)


def _width(value):
    return parse_width(value, current_app.config['DEFAULT_GRID_WIDTH'], current_app.config['MAX_GRID_WIDTH'])


def _json_body():
    """Returns the request's JSON object, {} when there is no body, or None if the body is not an object."""
    data = request.get_json(silent=True)
    if data is None:
        return {}
    return data if isinstance(data, dict) else None


def _error(action, message, status, game_id=None, **kwargs):
    error_response = {
        'success': False,
        'error': message
    }
    game_logger.log_server_response(request, action, False, error_response, game_id, **kwargs)
    return jsonify(error_response), status


@game_bp.route('/new_game', methods=['POST'])
@require_game_service
def new_game(game_service):
    """Create a new game session."""
    try:
        data = _json_body()
        if data is None:
            return _error('new_game', 'Request body must be a JSON object', 400)
        corpus = data.get('corpus')

        try:
            width = _width(data.get('width'))
        except ValueError as e:
            return _error('new_game', str(e), 400)

        corpus_service = get_corpus_service()
        if corpus is not None and (not corpus_service or corpus not in corpus_service.corpus_names()):
            return _error('new_game', f"Unknown corpus '{corpus}'", 400)

        game_logger.log_user_action(request, 'new_game', corpus=corpus, width=width)

        game_id = game_service.create_new_game(corpus)
        state = game_service.get_game_state(game_id, width)

        response_data = {
            'success': True,
            'game_id': game_id,
            'state': asdict(state)
        }

        game_logger.log_server_response(
            request, 'new_game', True, response_data, game_id,
            corpus=state.corpus, letter_count=state.letter_count
        )

        return jsonify(response_data)

    except Exception as e:
        game_logger.log_error(request, e, 'new_game')
        return _error('new_game', str(e), 500)


@game_bp.route('/game/<game_id>/state', methods=['GET'])
@require_game_service
def get_state(game_id, game_service):
    """Get the current game state laid out for the client's grid width."""
    try:
        try:
            width = _width(request.args.get('width'))
        except ValueError as e:
            return _error('get_state', str(e), 400, game_id)

        game_logger.log_user_action(request, 'get_state', game_id, width=width)

        state = game_service.get_game_state(game_id, width)
        if state is None:
            return _error('get_state', 'Game not found', 404, game_id)

        response_data = {
            'success': True,
            'state': asdict(state)
        }

        game_logger.log_server_response(
            request, 'get_state', True, response_data, game_id,
            num_cols=state.num_cols, has_won=state.has_won
        )

        return jsonify(response_data)

    except Exception as e:
        game_logger.log_error(request, e, 'get_state', game_id)
        return _error('get_state', str(e), 500, game_id)


@game_bp.route('/game/<game_id>/key', methods=['POST'])
@require_game_service
def key_press(game_id, game_service):
    """Apply one key press made on the focused cell."""
    try:
        data = _json_body()
        if data is None:
            return _error('key_press', 'Request body must be a JSON object', 400, game_id)
        if not isinstance(data.get('key'), str) or not data['key']:
            return _error('key_press', 'Key is required', 400, game_id)

        key = data['key']
        index = data.get('index')
        if not isinstance(index, int) or isinstance(index, bool):
            return _error('key_press', 'Cell index must be an integer', 400, game_id)

        try:
            width = _width(data.get('width'))
        except ValueError as e:
            return _error('key_press', str(e), 400, game_id)

        game_logger.log_user_action(request, 'key_press', game_id, key=key, index=index)

        session = game_service.get_session(game_id)
        if session is None:
            return _error('key_press', 'Game not found', 404, game_id)
        was_won = session.has_won

        try:
            state = game_service.handle_key(game_id, key, index, width)
        except ValueError as e:
            return _error('key_press', str(e), 400, game_id, attempted_index=index)

        response_data = {
            'success': True,
            'state': asdict(state)
        }

        game_logger.log_server_response(
            request, 'key_press', True, response_data, game_id,
            key=key, focused_cell=state.focused_cell
        )

        if state.conflicted_char:
            game_logger.log_game_event(
                game_id, 'guess_conflict', request.remote_addr,
                conflicted_char=state.conflicted_char
            )
        if state.has_won and not was_won:
            game_logger.log_game_event(
                game_id, 'game_won', request.remote_addr,
                corpus=state.corpus, letter_count=state.letter_count,
                ciphertext=session.ciphertext
            )

        return jsonify(response_data)

    except Exception as e:
        game_logger.log_error(request, e, 'key_press', game_id)
        return _error('key_press', str(e), 500, game_id)


@game_bp.route('/game/<game_id>/next', methods=['POST'])
@require_game_service
def next_game(game_id, game_service):
    """Replace the puzzle with the next text from the same corpus."""
    try:
        data = _json_body()
        if data is None:
            return _error('next_game', 'Request body must be a JSON object', 400, game_id)
        try:
            width = _width(data.get('width'))
        except ValueError as e:
            return _error('next_game', str(e), 400, game_id)

        game_logger.log_user_action(request, 'next_game', game_id)

        if game_service.next_game(game_id) is None:
            return _error('next_game', 'Game not found', 404, game_id)

        state = game_service.get_game_state(game_id, width)
        response_data = {
            'success': True,
            'game_id': game_id,
            'state': asdict(state)
        }

        game_logger.log_server_response(request, 'next_game', True, response_data, game_id)
        game_logger.log_game_event(game_id, 'next_plaintext', request.remote_addr, corpus=state.corpus)

        return jsonify(response_data)

    except Exception as e:
        game_logger.log_error(request, e, 'next_game', game_id)
        return _error('next_game', str(e), 500, game_id)


@game_bp.route('/game/<game_id>', methods=['DELETE'])
@require_game_service
def delete_game(game_id, game_service):
    """Delete a game session."""
    try:
        game_logger.log_user_action(request, 'delete_game', game_id)

        success = game_service.delete_game(game_id)
        response_data = {
            'success': success
        }

        game_logger.log_server_response(request, 'delete_game', success, response_data, game_id)

        if success:
            game_logger.log_game_event(game_id, 'game_deleted', request.remote_addr)
            return jsonify(response_data)

        response_data['error'] = 'Game not found'
        return jsonify(response_data), 404

    except Exception as e:
        game_logger.log_error(request, e, 'delete_game', game_id)
        return _error('delete_game', str(e), 500, game_id)


@game_bp.route('/corpora', methods=['GET'])
def list_corpora():
    """List the available corpora."""
    corpus_service = get_corpus_service()
    if not corpus_service:
        return jsonify({
            'success': False,
            'error': 'Corpus service unavailable'
        }), 500

    game_logger.log_user_action(request, 'list_corpora')

    return jsonify({
        'success': True,
        'corpora': corpus_service.get_corpus_statistics()
    })


@game_bp.route('/hint', methods=['GET'])
def hint():
    """Common short words, grouped by length."""
    game_logger.log_user_action(request, 'hint')

    return jsonify({
        'success': True,
        'hint': {str(length): words for length, words in HINT_WORDS.items()}
    })


@game_bp.route('/health', methods=['GET'])
def health_check():
    """Health check endpoint."""
    try:
        game_service = get_game_service()
        corpus_service = get_corpus_service()

        game_logger.log_user_action(request, 'health_check')

        response_data = {
            'status': 'healthy',
            'active_games': len(game_service.games) if game_service else 0,
            'corpora': corpus_service.corpus_names() if corpus_service else [],
            'log_stats': game_logger.get_log_stats()
        }

        game_logger.log_server_response(request, 'health_check', True, response_data)

        return jsonify(response_data)

    except Exception as e:
        game_logger.log_error(request, e, 'health_check')
        error_response = {
            'status': 'error',
            'error': str(e)
        }
        game_logger.log_server_response(request, 'health_check', False, error_response)
        return jsonify(error_response), 500
