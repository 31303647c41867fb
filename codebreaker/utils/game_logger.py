"""
Game Logger Module for the Codebreaker Server

Every entry is one line: a timestamp, a level and a JSON payload. The
payload always carries `event_type`, `action`, `client` and `details`, so
the daily log files can be read back with `read_entries`.
"""

import logging
import json
from datetime import datetime
from typing import Any, Dict, Iterator, Optional
from pathlib import Path

from ..config.app_config import Config
from .helpers import get_user_identity

USER_ACTION = 'USER_ACTION'
RESPONSE_OK = 'SERVER_RESPONSE_SUCCESS'
RESPONSE_FAILED = 'SERVER_RESPONSE_ERROR'
GAME_EVENT = 'GAME_EVENT'
ERROR = 'ERROR'

_SEPARATOR = ' | '

# State fields that are safe to copy into the log as-is
_STATE_SUMMARY_FIELDS = ('corpus', 'num_cols', 'focused_cell', 'guess_count', 'letter_count', 'has_won')


class GameLogger:
    """
    Structured logger shared by the HTTP controllers and socket handlers.

    Full entries go to `game_log_<date>.log` under `log_dir`; only warnings
    and errors reach the console. Game states are summarised before they
    are written so cell contents and plaintexts stay out of the files.
    """

    def __init__(self, log_dir: str = "logs", level: str = "INFO", name: str = 'codebreaker_game'):
        self.log_dir = Path(log_dir)
        self.log_dir.mkdir(parents=True, exist_ok=True)
        self.level = getattr(logging, str(level).upper(), logging.INFO)
        self.logger = self._setup_logger(name)

    def _log_file(self) -> Path:
        return self.log_dir / f"game_log_{datetime.now().strftime('%Y-%m-%d')}.log"

    def _setup_logger(self, name: str) -> logging.Logger:
        logger = logging.getLogger(name)
        logger.setLevel(self.level)
        logger.propagate = False

        # Re-initialising must not stack handlers
        for handler in list(logger.handlers):
            logger.removeHandler(handler)
            handler.close()

        file_handler = logging.FileHandler(self._log_file(), encoding='utf-8')
        file_handler.setLevel(self.level)
        file_handler.setFormatter(logging.Formatter(
            _SEPARATOR.join(['%(asctime)s', '%(levelname)s', '%(message)s']),
            datefmt='%Y-%m-%d %H:%M:%S'
        ))

        console_handler = logging.StreamHandler()
        console_handler.setLevel(logging.WARNING)
        console_handler.setFormatter(logging.Formatter('%(levelname)s: %(message)s'))

        logger.addHandler(file_handler)
        logger.addHandler(console_handler)
        return logger

    def _write(self, level: int, event_type: str, action: str,
               client: Dict[str, Optional[str]], details: Dict[str, Any]) -> None:
        entry = {
            'timestamp': datetime.now().isoformat(),
            'event_type': event_type,
            'action': action,
            'client': client,
            'details': details
        }
        self.logger.log(level, json.dumps(entry, ensure_ascii=False, default=str))

    def log_user_action(self, request, action: str, game_id: Optional[str] = None, **kwargs):
        """
        Log a request or socket event as it arrives.

        Args:
            request: Flask request (HTTP or Socket.IO context)
            action: Handler name, e.g. 'new_game', 'key_press', 'resize'
            game_id: Game the action targets, if any
            **kwargs: Extra request fields such as width or key
        """
        details = {'game_id': game_id, 'endpoint': getattr(request, 'endpoint', None), **kwargs}
        self._write(logging.INFO, USER_ACTION, action, get_user_identity(request), details)

    def log_server_response(self, request, action: str, success: bool, response_data: Dict[str, Any],
                            game_id: Optional[str] = None, **kwargs):
        """
        Log the payload sent back for an action. Failed responses are logged
        at ERROR level so they also reach the console.
        """
        details = {
            'game_id': game_id,
            'success': success,
            'response': summarize_response(response_data),
            **kwargs
        }
        self._write(
            logging.INFO if success else logging.ERROR,
            RESPONSE_OK if success else RESPONSE_FAILED,
            action, get_user_identity(request), details
        )

    def log_game_event(self, game_id: Optional[str], event: str, user_ip: Optional[str], **kwargs):
        """Log a change in a game itself: a win, a guess conflict, a new plaintext."""
        client = {'user_ip': user_ip or 'unknown', 'session_id': None}
        self._write(logging.INFO, GAME_EVENT, event, client, {'game_id': game_id, **kwargs})

    def log_error(self, request, error: Exception, action: str, game_id: Optional[str] = None):
        details = {
            'game_id': game_id,
            'error_type': type(error).__name__,
            'error_message': str(error)
        }
        self._write(logging.ERROR, ERROR, action, get_user_identity(request), details)

    def read_entries(self) -> Iterator[Dict[str, Any]]:
        """
        Yields the JSON payload of each entry in today's log file.

        Lines that are not structured entries (plain service messages) are
        skipped.
        """
        log_file = self._log_file()
        if not log_file.exists():
            return

        with open(log_file, 'r', encoding='utf-8') as f:
            for line in f:
                parts = line.rstrip('\n').split(_SEPARATOR, 2)
                if len(parts) < 3:
                    continue
                try:
                    entry = json.loads(parts[2])
                except ValueError:
                    continue
                if isinstance(entry, dict) and 'event_type' in entry:
                    yield entry

    def get_log_stats(self) -> Dict[str, Any]:
        """
        Counts today's entries by type, plus wins and conflicts.

        Returns:
            dict: Stats for the health endpoint, or {'error': ...} if the
            log file cannot be read
        """
        log_file = self._log_file()
        if not log_file.exists():
            return {'error': 'No log file found for today'}

        stats = {
            'log_file': str(log_file),
            'total_entries': 0,
            'user_actions': 0,
            'server_responses': 0,
            'game_events': 0,
            'errors': 0,
            'games_won': 0,
            'guess_conflicts': 0
        }
        counters = {
            USER_ACTION: 'user_actions',
            RESPONSE_OK: 'server_responses',
            RESPONSE_FAILED: 'server_responses',
            GAME_EVENT: 'game_events',
            ERROR: 'errors'
        }

        try:
            stats['file_size_mb'] = round(log_file.stat().st_size / (1024 * 1024), 2)
            for entry in self.read_entries():
                stats['total_entries'] += 1
                counter = counters.get(entry['event_type'])
                if counter:
                    stats[counter] += 1
                if entry['event_type'] == GAME_EVENT:
                    if entry.get('action') == 'game_won':
                        stats['games_won'] += 1
                    elif entry.get('action') == 'guess_conflict':
                        stats['guess_conflicts'] += 1
        except OSError as e:
            return {'error': f'Failed to get stats: {e}'}

        return stats


def summarize_response(data: Any) -> Dict[str, Any]:
    """Replaces a full game state with counters that are safe to log."""
    if not isinstance(data, dict):
        return {'data_type': type(data).__name__}

    summary = dict(data)
    state = summary.get('state')
    if isinstance(state, dict):
        summary['state'] = {field: state.get(field) for field in _STATE_SUMMARY_FIELDS}
        summary['state']['cell_count'] = len(state.get('cells', []))
        summary['state']['plaintext_revealed'] = state.get('plaintext') is not None
    return summary


# Global logger instance
game_logger = GameLogger(Config.LOG_DIR, Config.LOG_LEVEL)
