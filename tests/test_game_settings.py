import pytest

from tweetle_prover.config import game_settings
from tweetle_prover.config.game_settings import (
    WORD_LIST, get_word_statistics, validate_word_list_integrity, word_at, word_count
)


def test_word_list_passes_integrity_checks():
    assert validate_word_list_integrity() is True


def test_word_list_is_lowercase_five_letters():
    assert word_count() == len(WORD_LIST) > 0
    assert all(len(w) == 5 and w.islower() for w in WORD_LIST)


def test_word_at_bounds():
    assert word_at(0) == WORD_LIST[0]
    assert word_at(word_count() - 1) == WORD_LIST[-1]
    with pytest.raises(IndexError):
        word_at(word_count())
    with pytest.raises(IndexError):
        word_at(-1)


def test_duplicates_are_reported(monkeypatch):
    monkeypatch.setattr(game_settings, 'WORD_LIST', ['crane', 'slate', 'crane'])
    with pytest.raises(ValueError, match="Duplicate"):
        game_settings.validate_word_list_integrity()


def test_word_statistics():
    stats = get_word_statistics()
    assert stats['total_words'] == word_count()
    assert len(stats['most_common_letters']) == 5


def test_word_at_reads_given_list():
    words = ['crane', 'speed']
    assert word_count(words) == 2
    assert word_at(1, words) == 'speed'
    with pytest.raises(IndexError):
        word_at(2, words)
