"""Tests for the game service and sessions."""
import pytest

from codebreaker.models.game import CellState


def solve(service, game_id, width=200):
    """Types the correct letter into the first unguessed cell until solved."""
    session = service.get_session(game_id)
    state = service.get_game_state(game_id, width)
    while not state.has_won:
        index = next(i for i, cell in enumerate(state.cells) if cell['state'] == 'UNGUESSED')
        grid = session.layout(width, service.default_cell_width)
        plain = session.cipher.decryptor[grid.cells[index].cipher]
        state = service.handle_key(game_id, plain, index, width)
    return state


class TestCreateGame:
    def test_new_game_from_corpus(self, game_service, corpus_service):
        game_id = game_service.create_new_game()
        session = game_service.get_session(game_id)
        assert session.corpus in corpus_service.corpus_names()
        assert session.plaintext in corpus_service.texts(session.corpus)

    def test_new_game_from_named_corpus(self, game_service):
        game_id = game_service.create_new_game('science')
        assert game_service.get_session(game_id).corpus == 'science'

    def test_unknown_corpus(self, game_service):
        with pytest.raises(ValueError):
            game_service.create_new_game('poetry')

    def test_explicit_plaintext(self, game_service):
        game_id = game_service.create_new_game(plaintext='CAT')
        session = game_service.get_session(game_id)
        assert set(session.cipher.encryptor) == {'C', 'A', 'T'}

    def test_ids_are_unique(self, game_service):
        ids = {game_service.create_new_game(plaintext='CAT') for _ in range(5)}
        assert len(ids) == 5


class TestGameState:
    def test_unknown_game(self, game_service):
        assert game_service.get_game_state('missing', 200) is None
        assert game_service.handle_key('missing', 'A', 0, 200) is None

    def test_initial_state(self, game_service):
        game_id = game_service.create_new_game(plaintext='CAT CAT')
        state = game_service.get_game_state(game_id, 200)
        assert state.num_cols == 10
        assert len(state.cells) == 7
        assert state.letter_count == 3
        assert state.guess_count == 0
        assert state.focused_cell == 0
        assert not state.has_won
        assert state.plaintext is None

    def test_cipher_letters_are_not_plaintext_in_state(self, game_service):
        game_id = game_service.create_new_game(plaintext='CAT')
        session = game_service.get_session(game_id)
        state = game_service.get_game_state(game_id, 200)
        assert [cell['content'] for cell in state.cells] == [session.cipher.encryptor[c] for c in 'CAT']

    def test_focused_letter_is_highlighted(self, game_service):
        game_id = game_service.create_new_game(plaintext='CAT CAT')
        state = game_service.get_game_state(game_id, 200)
        highlighted = [i for i, cell in enumerate(state.cells) if cell['highlighted']]
        assert highlighted == [0, 4]

    def test_resize_changes_layout(self, game_service):
        game_id = game_service.create_new_game(plaintext='CAT CAT')
        wide = game_service.get_game_state(game_id, 200)
        narrow = game_service.get_game_state(game_id, 80)
        assert wide.num_cols == 10
        assert narrow.num_cols == 4

    def test_focus_is_clamped_to_layout(self, game_service):
        game_id = game_service.create_new_game(plaintext='CAT')
        game_service.get_session(game_id).engine.focus = 50
        state = game_service.get_game_state(game_id, 200)
        assert state.focused_cell == 2


class TestKeyPresses:
    def test_key_press_records_guess(self, game_service):
        game_id = game_service.create_new_game(plaintext='CAT')
        state = game_service.handle_key(game_id, 'C', 0, 200)
        assert state.guess_count == 1
        assert state.cells[0] == {'content': 'C', 'state': 'GUESSED', 'highlighted': False}
        assert state.focused_cell == 1

    def test_conflict_is_reported(self, game_service):
        game_id = game_service.create_new_game(plaintext='CAT')
        game_service.handle_key(game_id, 'C', 0, 200)
        state = game_service.handle_key(game_id, 'C', 1, 200)
        assert state.conflicted_char == 'C'
        assert state.cells[0]['state'] == CellState.CONFLICTED.value
        assert state.guess_count == 1

    def test_bad_index(self, game_service):
        game_id = game_service.create_new_game(plaintext='CAT')
        with pytest.raises(ValueError):
            game_service.handle_key(game_id, 'C', 9, 200)

    def test_solving_reveals_plaintext(self, game_service):
        game_id = game_service.create_new_game(plaintext='THE CAT SAT ON THE MAT')
        state = solve(game_service, game_id)
        assert state.has_won
        assert state.plaintext == 'THE CAT SAT ON THE MAT'
        assert state.guess_count == state.letter_count

    def test_filled_but_wrong(self, game_service):
        game_id = game_service.create_new_game(plaintext='AB')
        # Swap the two letters
        game_service.handle_key(game_id, 'B', 0, 200)
        state = game_service.handle_key(game_id, 'A', 1, 200)
        assert state.has_filled_not_won
        assert not state.has_won
        assert state.plaintext is None

    def test_ciphertext(self, game_service):
        game_id = game_service.create_new_game(plaintext='CAT, TACT!')
        session = game_service.get_session(game_id)
        c, a, t = (session.cipher.encryptor[letter] for letter in 'CAT')
        assert session.ciphertext == f'{c}{a}{t}, {t}{a}{c}{t}!'

    def test_letterless_plaintext_is_already_won(self, game_service):
        game_id = game_service.create_new_game(plaintext='123 !!!')
        state = game_service.get_game_state(game_id, 200)
        assert state.letter_count == 0
        assert state.has_won

    def test_empty_plaintext(self, game_service):
        game_id = game_service.create_new_game(plaintext='')
        state = game_service.get_game_state(game_id, 200)
        assert state.cells == []
        assert state.has_won


class TestNextAndDelete:
    def test_next_game_keeps_id_and_corpus(self, game_service):
        game_id = game_service.create_new_game('rural')
        game_service.handle_key(game_id, 'A', 0, 600)
        session = game_service.next_game(game_id)
        assert session.game_id == game_id
        assert session.corpus == 'rural'
        assert len(session.engine.guesses) == 0

    def test_next_game_unknown(self, game_service):
        assert game_service.next_game('missing') is None

    def test_next_game_after_explicit_plaintext(self, game_service, corpus_service):
        game_id = game_service.create_new_game(plaintext='CAT')
        session = game_service.next_game(game_id)
        assert session.corpus in corpus_service.corpus_names()
        assert session.plaintext in corpus_service.texts(session.corpus)

    def test_delete(self, game_service):
        game_id = game_service.create_new_game(plaintext='CAT')
        assert game_service.delete_game(game_id)
        assert not game_service.delete_game(game_id)
        assert game_service.get_game_state(game_id, 200) is None


class TestIdleCleanup:
    def test_idle_games_are_removed(self, game_service):
        stale = game_service.create_new_game(plaintext='CAT')
        fresh = game_service.create_new_game(plaintext='DOG')
        game_service.get_session(stale).last_active -= 120

        now = game_service.get_session(fresh).last_active
        assert game_service.cleanup_idle_games(60, now=now) == [stale]
        assert game_service.get_session(stale) is None
        assert game_service.get_session(fresh) is not None

    def test_activity_keeps_a_game_alive(self, game_service):
        game_id = game_service.create_new_game(plaintext='CAT')
        session = game_service.get_session(game_id)
        session.last_active -= 120
        game_service.handle_key(game_id, 'C', 0, 200)
        assert game_service.cleanup_idle_games(60) == []
