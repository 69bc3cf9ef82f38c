"""Trigram similarity tests"""

import pytest
from sqlalchemy import text

from productdb.services.trigram import similarity, trigrams


def test_trigrams_of_single_word():
    assert trigrams("cat") == {"  c", " ca", "cat", "at "}


def test_trigrams_ignore_case_and_punctuation():
    assert trigrams("Cat!") == trigrams("cat")
    assert trigrams("foo-bar") == trigrams("foo bar")


def test_trigrams_of_empty_text():
    assert trigrams("") == set()
    assert trigrams(None) == set()
    assert trigrams("!!!") == set()


def test_identical_words_are_fully_similar():
    assert similarity("word", "WORD") == 1.0


def test_unrelated_words_are_not_similar():
    assert similarity("word", "milk") == 0.0
    assert similarity("", "milk") == 0.0


def test_similarity_matches_pg_trgm():
    # SELECT similarity('Haferdrink', 'Haferdrink ungesüßt, 1 Liter') -> 0.39285713
    assert similarity("Haferdrink", "Haferdrink ungesüßt, 1 Liter") == pytest.approx(11 / 28)


def test_similarity_is_symmetric():
    assert similarity("Vollmilch", "Milch") == similarity("Milch", "Vollmilch")


def test_similarity_available_in_sqlite(engine):
    """The similarity() SQL function is registered on SQLite connections"""
    with engine.connect() as conn:
        value = conn.execute(text("SELECT similarity('word', 'word')")).scalar()

    assert value == 1.0


def test_long_names_dilute_similarity():
    assert similarity("Vollmilch", "Vollmilch 3,5%") == pytest.approx(10 / 14)
    assert similarity("Vollmilch", "Vollmilch 3,5% fettarm, laktosefrei, 1 Liter") == pytest.approx(10 / 41)
