import pytest

from game.codespace import generate_code_space, generate_feedback_space
from game.errors import ConfigurationError, EmptyCandidateSet
from game.ruleset import make_rules
from game.scoring import score
from game.secret_code import Code
from solver.candidates import count_candidates, filter_candidates
from solver.solver_manager import MinimaxConfig, MinimaxSolver, best_guess


def brute_force_worst(candidates, guess, feedbacks):
    # the full-match bucket ends the game and never counts
    return max(
        count_candidates(candidates, guess, f)
        for f in feedbacks
        if f.full < len(guess)
    )


def candidate_sets(rules):
    """The full space plus a few sets reached after one or two guesses."""
    codes = generate_code_space(rules)
    sets = [codes]
    for target in (codes[-1], codes[len(codes) // 3]):
        first = filter_candidates(codes, codes[1], score(target, codes[1]))
        sets.append(first)
        second = filter_candidates(first, codes[-2], score(target, codes[-2]))
        sets.append(second)
    sets.append([codes[-1]])
    return sets


def test_best_guess_is_globally_minimax(small_rules, small_solver):
    codes = generate_code_space(small_rules)
    feedbacks = generate_feedback_space(small_rules)
    for candidates in candidate_sets(small_rules):
        guess, worst = small_solver.choose_guess(candidates)
        expected = min(brute_force_worst(candidates, g, feedbacks) for g in codes)
        assert worst == expected
        assert brute_force_worst(candidates, guess, feedbacks) == expected


def test_evaluate_matches_brute_force(small_rules, small_solver):
    codes = generate_code_space(small_rules)
    feedbacks = generate_feedback_space(small_rules)
    for candidates in candidate_sets(small_rules):
        worst = small_solver.evaluate(candidates)
        assert [int(w) for w in worst] == [
            brute_force_worst(candidates, g, feedbacks) for g in codes
        ]


def test_tie_break_lowest_index(small_rules, small_solver):
    for candidates in candidate_sets(small_rules):
        worst = small_solver.evaluate(candidates)
        lowest = min(i for i, w in enumerate(worst) if w == worst.min())
        assert small_solver.best_guess(candidates).index == lowest


def test_guess_always_shrinks_candidates(small_rules, small_solver):
    for candidates in candidate_sets(small_rules):
        _, worst = small_solver.choose_guess(candidates)
        assert worst < len(candidates)


@pytest.mark.parametrize("pieces", [[1, 0, 0], [2, 1, 0], [2, 2, 2]])
def test_lone_candidate_is_guessed(pieces):
    rules = make_rules(3, 3)
    solver = MinimaxSolver(rules, config=MinimaxConfig(max_workers=1))
    target = Code(pieces, rules)
    remaining = filter_candidates(generate_code_space(rules), target, score(target, target))
    assert remaining == [target]
    assert solver.choose_guess(remaining) == (target, 0)


def test_parallel_reduction_is_deterministic(small_rules):
    serial = MinimaxSolver(
        small_rules, config=MinimaxConfig(max_workers=1, use_cache=False)
    )
    parallel = MinimaxSolver(
        small_rules,
        config=MinimaxConfig(max_workers=4, chunk_size=1, use_cache=False),
    )
    for candidates in candidate_sets(small_rules):
        expected = serial.choose_guess(candidates)
        for _ in range(3):
            assert parallel.choose_guess(candidates) == expected


def test_cache_returns_same_answer(small_rules, small_solver):
    candidates = candidate_sets(small_rules)[1]
    first = small_solver.choose_guess(candidates)
    assert small_solver.choose_guess(list(reversed(candidates))) == first
    assert small_solver.cache_len == 1


def test_cache_is_bounded(small_rules):
    solver = MinimaxSolver(
        small_rules, config=MinimaxConfig(max_workers=1, cache_size=2)
    )
    sets = candidate_sets(small_rules)
    for candidates in sets:
        solver.choose_guess(candidates)
    assert solver.cache_len == 2
    # evicted entries are recomputed to the same answer
    uncached = MinimaxSolver(
        small_rules, config=MinimaxConfig(max_workers=1, use_cache=False)
    )
    assert solver.choose_guess(sets[0]) == uncached.choose_guess(sets[0])
    assert solver.cache_len == 2


@pytest.mark.parametrize("field,value", [
    ("chunk_size", 0),
    ("max_workers", 0),
    ("cache_size", -1),
    ("max_table_size", -5),
    ("chunk_size", 2.5),
])
def test_config_rejects_bad_values(field, value):
    with pytest.raises(ConfigurationError):
        MinimaxConfig(**{field: value})


def test_empty_candidates_raise(small_solver):
    with pytest.raises(EmptyCandidateSet):
        small_solver.best_guess([])
    with pytest.raises(EmptyCandidateSet):
        best_guess([])


def test_classic_opening_guess(classic_solver, classic_rules):
    guess, worst = classic_solver.choose_guess(generate_code_space(classic_rules))
    assert worst == 256
    assert guess == Code([1, 1, 0, 0])


def test_module_best_guess_uses_code_rules(classic_rules):
    codes = generate_code_space(classic_rules)
    remaining = filter_candidates(codes, Code([1, 1, 0, 0]), score(Code([2, 3, 4, 5]), Code([1, 1, 0, 0])))
    assert best_guess(remaining) in codes
