import pytest

from game.codespace import generate_code_space, generate_feedback_space
from game.errors import EmptyCandidateSet
from game.feedback import Feedback
from game.ruleset import make_rules
from game.secret_code import Code
from solver.candidates import count_candidates, filter_candidates
from solver.oracle import worst_feedback


def test_worst_feedback_keeps_largest_partition(small_rules, small_space):
    feedbacks = generate_feedback_space(small_rules)
    for guess in small_space:
        chosen = worst_feedback(small_space, guess)
        largest = max(count_candidates(small_space, guess, f) for f in feedbacks)
        assert len(filter_candidates(small_space, guess, chosen)) == largest


def test_worst_feedback_classic_opening(classic_rules):
    codes = generate_code_space(classic_rules)
    guess = Code([0, 0, 1, 1])
    chosen = worst_feedback(codes, guess)
    counts = [
        count_candidates(codes, guess, f)
        for f in generate_feedback_space(classic_rules)
    ]
    assert count_candidates(codes, guess, chosen) == max(counts) == 256
    last = max(i for i, n in enumerate(counts) if n == 256)
    assert chosen == generate_feedback_space(classic_rules)[last]


def test_tie_goes_to_last_enumerated_feedback():
    rules = make_rules(2, 3)
    candidates = [Code(p, rules) for p in ([0, 0], [1, 1], [2, 0], [1, 2])]
    guess = Code([0, 1], rules)
    # Known(0, 1) and Known(1, 0) both keep two codes
    assert count_candidates(candidates, guess, Feedback.known(0, 1)) == 2
    assert count_candidates(candidates, guess, Feedback.known(1, 0)) == 2
    assert worst_feedback(candidates, guess) == Feedback.known(1, 0)


def test_tie_with_full_match_concedes(classic_rules):
    guess = Code([0, 1, 2, 3])
    other = Code([5, 5, 5, 5])
    chosen = worst_feedback([guess, other], guess)
    assert chosen == Feedback.known(4, 0)
    assert chosen.normalized(4).is_complete


def test_single_other_candidate_is_never_conceded(classic_rules):
    chosen = worst_feedback([Code([5, 5, 5, 5])], Code([0, 1, 2, 3]))
    assert chosen == Feedback.known(0, 0)


def test_empty_candidates_raise():
    with pytest.raises(EmptyCandidateSet):
        worst_feedback([], Code([0, 1, 2, 3]))
