from game.codespace import generate_code_space, generate_feedback_space
from game.feedback import Feedback
from game.scoring import score
from game.secret_code import Code
from solver.candidates import (
    apply_history,
    count_candidates,
    filter_candidates,
    partition_sizes,
)


def test_target_survives_its_own_feedback(small_space):
    for target in small_space:
        for guess in small_space:
            kept = filter_candidates(small_space, guess, score(target, guess))
            assert target in kept


def test_count_matches_filter(small_rules, small_space):
    for guess in small_space[:: max(1, len(small_space) // 5)]:
        for feedback in generate_feedback_space(small_rules):
            assert count_candidates(small_space, guess, feedback) == len(
                filter_candidates(small_space, guess, feedback)
            )


def test_filter_keeps_order_and_does_not_mutate(classic_rules):
    codes = generate_code_space(classic_rules)
    before = list(codes)
    kept = filter_candidates(codes, Code([0, 0, 1, 1]), Feedback.known(0, 0))
    assert codes == before
    assert kept == sorted(kept)
    assert len(kept) == 4 ** 4


def test_full_match_bucket_is_the_guess(classic_rules):
    codes = generate_code_space(classic_rules)
    guess = Code([3, 1, 4, 1])
    assert filter_candidates(codes, guess, Feedback.known(4, 0)) == [guess]
    assert filter_candidates(codes, guess, Feedback.complete(4)) == [guess]


def test_impossible_feedback_keeps_nothing(classic_rules):
    codes = generate_code_space(classic_rules)
    assert count_candidates(codes, Code([0, 1, 2, 3]), Feedback.known(3, 1)) == 0


def test_partition_sizes_cover_candidates(small_space):
    guess = small_space[len(small_space) // 2]
    sizes = partition_sizes(small_space, guess)
    assert sum(sizes.values()) == len(small_space)
    assert sizes[score(guess, guess)] == 1


def test_apply_history_narrows_to_target(classic_rules):
    codes = generate_code_space(classic_rules)
    target = Code([5, 2, 2, 0])
    history = [(g, score(target, g)) for g in (Code([1, 1, 0, 0]), Code([2, 2, 3, 3]), Code([5, 4, 2, 0]))]
    remaining = apply_history(codes, history)
    assert target in remaining
    assert all(score(c, g) == f for c in remaining for g, f in history)
