import numpy as np
import pytest

from game.codespace import CodeSpace
from game.feedback import Feedback
from game.scoring import score
from game.secret_code import Code

RED, GREEN, BLUE, YELLOW, BLACK, WHITE = range(6)


def test_score_identical_is_complete():
    code = Code([RED, GREEN, BLUE, YELLOW])
    result = score(code, Code([RED, GREEN, BLUE, YELLOW]))
    assert result.is_complete
    assert result == Feedback.complete(4)


def test_score_all_colors_misplaced():
    result = score(Code([RED, GREEN, BLUE, YELLOW]), Code([GREEN, RED, YELLOW, BLUE]))
    assert result == Feedback.known(0, 4)
    assert not result.is_complete


def test_score_repeated_guess_color_credited_once():
    result = score(Code([RED, GREEN, BLUE, YELLOW]), Code([RED, RED, RED, RED]))
    assert result == Feedback.known(1, 0)


@pytest.mark.parametrize("reference,guess,expected", [
    ([2, 2, 5, 5], [2, 5, 2, 5], (2, 2)),
    ([0, 1, 3, 5], [0, 2, 4, 0], (1, 0)),
    ([0, 0, 1, 1], [1, 1, 0, 0], (0, 4)),
    ([0, 0, 1, 2], [0, 1, 1, 0], (2, 1)),
    ([4, 4, 4, 5], [5, 4, 3, 3], (1, 1)),
    ([1, 2, 3, 4], [5, 5, 5, 0], (0, 0)),
])
def test_score_with_duplicates(reference, guess, expected):
    assert score(Code(reference), Code(guess)).as_tuple() == expected


def test_complete_equals_known_full():
    assert Feedback.complete(4) == Feedback.known(4, 0)
    assert Feedback.complete(4) != Feedback.known(3, 0)
    assert Feedback.unknown() != Feedback.known(0, 0)
    assert hash(Feedback.complete(4)) == hash(Feedback.known(4, 0))


def test_score_invariants_exhaustive(small_rules, small_space):
    length = small_rules["code_length"]
    for reference in small_space:
        for guess in small_space:
            result = score(reference, guess)
            assert 0 <= result.full and 0 <= result.partial
            assert result.full + result.partial <= length
            assert (result.full == length) == (reference == guess)
            assert result.is_complete == (reference == guess)


def test_score_matrix_matches_score(small_rules):
    space = CodeSpace(small_rules)
    everything = np.arange(space.size)
    table = space.feedback_matrix(everything, everything)
    for g, guess in enumerate(space.codes):
        for c, candidate in enumerate(space.codes):
            assert table[g, c] == space.feedback_index(score(candidate, guess))


def test_score_matrix_without_cached_table(small_rules):
    cached = CodeSpace(small_rules)
    uncached = CodeSpace(small_rules, max_table_size=0)
    guesses = np.array([0, 1, cached.size - 1])
    candidates = np.arange(cached.size)
    assert np.array_equal(
        cached.feedback_matrix(guesses, candidates),
        uncached.feedback_matrix(guesses, candidates),
    )
