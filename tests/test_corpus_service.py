"""Tests for the corpus service."""
import random

import pytest

from codebreaker.config import CORPORA, TestingConfig, validate_corpus_integrity
from codebreaker.services.corpus_service import CorpusService, split_corpus


@pytest.fixture
def corpus_file(tmp_path):
    path = tmp_path / 'tiny.corpus'
    path.write_text('first text here\r\n\r\nsecond text here\n\nno\n\nthird text here\n', encoding='utf-8')
    return path


class TestSplitCorpus:
    def test_splits_on_blank_lines(self):
        assert split_corpus('one\n\ntwo') == ['ONE', 'TWO']

    def test_drops_carriage_returns(self):
        assert split_corpus('one\r\n\r\ntwo') == ['ONE', 'TWO']

    def test_filters_short_texts(self):
        assert split_corpus('a long one\n\nab', min_text_len=5) == ['A LONG ONE']

    def test_keeps_single_newlines_inside_a_text(self):
        assert split_corpus('line one\nline two') == ['LINE ONE\nLINE TWO']

    def test_custom_delimiter(self):
        assert split_corpus('a|b', delimiter='|') == ['A', 'B']

    def test_empty_corpus(self):
        assert split_corpus('') == []


class TestCorpusService:
    def test_loads_and_filters(self, corpus_file):
        service = CorpusService({'tiny': str(corpus_file)}, min_text_len=5)
        assert service.texts('tiny') == ['FIRST TEXT HERE', 'SECOND TEXT HERE', 'THIRD TEXT HERE']

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            CorpusService({'gone': str(tmp_path / 'gone.corpus')})

    def test_unknown_corpus(self, corpus_file):
        service = CorpusService({'tiny': str(corpus_file)})
        with pytest.raises(ValueError):
            service.next_plaintext('other')

    def test_empty_corpus_cannot_be_played(self, tmp_path):
        path = tmp_path / 'empty.corpus'
        path.write_text('', encoding='utf-8')
        service = CorpusService({'empty': str(path)})
        with pytest.raises(ValueError):
            service.next_plaintext('empty')

    def test_every_text_served_before_repeating(self, corpus_file):
        service = CorpusService({'tiny': str(corpus_file)}, min_text_len=5, rng=random.Random(3))
        first_round = {service.next_plaintext('tiny') for _ in range(3)}
        assert first_round == set(service.texts('tiny'))
        assert service.next_plaintext('tiny') in first_round

    def test_random_corpus_when_unspecified(self, corpus_file):
        service = CorpusService({'tiny': str(corpus_file)}, min_text_len=5)
        assert service.random_corpus_name() == 'tiny'
        assert service.next_plaintext() in service.texts('tiny')

    def test_statistics(self, corpus_file):
        service = CorpusService({'tiny': str(corpus_file)}, min_text_len=5)
        stats = service.get_corpus_statistics()
        assert stats['tiny']['total_texts'] == 3
        assert stats['tiny']['avg_length'] > 0


class TestBundledCorpora:
    def test_bundled_corpora_are_playable(self):
        service = CorpusService(CORPORA, min_text_len=TestingConfig.MIN_TEXT_LEN)
        assert service.corpus_names() == sorted(CORPORA)
        for name in service.corpus_names():
            texts = service.texts(name)
            assert validate_corpus_integrity(name, texts)
            assert all(len(text) >= TestingConfig.MIN_TEXT_LEN for text in texts)

    def test_validation_rejects_lowercase(self):
        with pytest.raises(ValueError):
            validate_corpus_integrity('bad', ['lowercase text'])

    def test_validation_rejects_letterless_text(self):
        with pytest.raises(ValueError):
            validate_corpus_integrity('bad', ['12345 !!!'])
