"""Tests for the structured game logger."""
from types import SimpleNamespace

import pytest

from codebreaker.utils.game_logger import GameLogger, summarize_response


@pytest.fixture
def logger(tmp_path):
    game_logger = GameLogger(str(tmp_path), 'INFO', name='codebreaker_game_test')
    yield game_logger
    for handler in list(game_logger.logger.handlers):
        game_logger.logger.removeHandler(handler)
        handler.close()


@pytest.fixture
def request_obj():
    return SimpleNamespace(remote_addr='10.0.0.1', endpoint='game.key_press', sid=None)


class TestSummarizeResponse:
    def test_state_is_collapsed(self):
        data = {'success': True, 'state': {
            'num_cols': 10, 'cells': [{}, {}, {}], 'guess_count': 1,
            'letter_count': 3, 'has_won': False, 'plaintext': None
        }}
        state = summarize_response(data)['state']
        assert state['cell_count'] == 3
        assert state['plaintext_revealed'] is False
        assert 'cells' not in state

    def test_plaintext_is_never_logged(self):
        summary = summarize_response({'state': {'plaintext': 'SECRET', 'cells': []}})
        assert 'SECRET' not in str(summary)
        assert summary['state']['plaintext_revealed'] is True

    def test_non_dict(self):
        assert summarize_response(['x']) == {'data_type': 'list'}


class TestGameLogger:
    def test_entries_are_read_back(self, logger, request_obj):
        logger.log_user_action(request_obj, 'key_press', 'g1', key='A', index=0)
        logger.log_game_event('g1', 'game_won', '10.0.0.1', corpus='rural')

        entries = list(logger.read_entries())
        assert [entry['event_type'] for entry in entries] == ['USER_ACTION', 'GAME_EVENT']
        assert entries[0]['client']['user_ip'] == '10.0.0.1'
        assert entries[0]['details']['key'] == 'A'
        assert entries[1]['details']['corpus'] == 'rural'

    def test_plain_messages_are_skipped(self, logger, request_obj):
        logger.logger.info("Corpus 'rural': loaded 3 texts")
        logger.log_error(request_obj, ValueError('bad'), 'key_press', 'g1')
        entries = list(logger.read_entries())
        assert len(entries) == 1
        assert entries[0]['details']['error_type'] == 'ValueError'

    def test_stats(self, logger, request_obj):
        logger.log_user_action(request_obj, 'new_game')
        logger.log_server_response(request_obj, 'new_game', True, {'success': True})
        logger.log_server_response(request_obj, 'key_press', False, {'success': False, 'error': 'x'})
        logger.log_game_event('g1', 'guess_conflict', None, conflicted_char='C')
        logger.log_game_event('g1', 'game_won', None)

        stats = logger.get_log_stats()
        assert stats['total_entries'] == 5
        assert stats['user_actions'] == 1
        assert stats['server_responses'] == 2
        assert stats['game_events'] == 2
        assert stats['games_won'] == 1
        assert stats['guess_conflicts'] == 1

    def test_stats_without_log_file(self, logger):
        logger._log_file().unlink()
        assert 'error' in logger.get_log_stats()
