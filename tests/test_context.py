import numpy as np
import pytest

from wordle_engine import (
    ContractViolation, FeedbackRule, FixedTargetOracle, GameContext, benchmark, primel_words,
)


def test_opening_is_computed_once(context):
    assert context.opening == "raise"
    assert context.opening_size == pytest.approx(61.0009, abs=1e-4)
    assert context.length == 5
    assert len(context.histogram) == 243


def test_opening_does_not_depend_on_target(context, words):
    for target in words[::331]:
        history = context.play_target(target)
        assert history[0].guess == "raise"
        assert history[0].pool_size == 2315
        assert history[-1].guess == target
        assert history[-1].code == 242
    assert context.opening == "raise"


def test_context_games_match_plain_games(context):
    history = context.play_target("jazzy")
    assert [t.guess for t in history] == ["raise", "tangy", "bawdy", "happy", "jazzy"]


def test_pool_of_one_finishes_next_turn(context):
    history = context.play_target("mamma")
    assert [(t.guess, t.pool_size) for t in history][-2:] == [("kappa", 2), ("mamma", 1)]


def test_solver_shares_histogram(context):
    solver = context.solver(FixedTargetOracle("crane"))
    assert solver.histogram is context.histogram
    assert solver.opening == "raise"
    assert len(solver.play()) == 3


def test_play_random(context):
    rng = np.random.default_rng(2022)
    for _ in range(5):
        history = context.play_random(rng)
        assert history[0].guess == "raise"
        assert history[-1].code == 242


def test_play_target_outside_dictionary(context):
    with pytest.raises(ContractViolation):
        context.play_target("zzzzz")


def test_rejects_inconsistent_dictionary():
    with pytest.raises(ContractViolation):
        GameContext(["rebus", "arise", "route", "cat"])


def test_counted_rule_context(lexicon):
    context = GameContext(lexicon, rule=FeedbackRule.COUNTED)
    assert context.opening == "raise"
    history = context.play_target("eerie")
    assert history[-1].guess == "eerie"


def test_parallel_context(lexicon):
    context = GameContext(lexicon, workers=3)
    assert context.opening == "raise"
    assert [t.guess for t in context.play_target("crane")] == ["raise", "grace", "crane"]


def test_benchmark(context):
    results = benchmark(context, ["rebus", "crane", "jazzy"])
    assert results['total'] == 3
    assert results['total_guesses'] == 10
    assert results['average'] == pytest.approx(10 / 3)
    assert results['distribution'] == {2: 1, 3: 1, 5: 1}
    assert results['max_guesses'] == 5


def test_benchmark_needs_targets(context):
    with pytest.raises(ContractViolation):
        benchmark(context, [])


def test_primel_games():
    primes = primel_words()[::8]
    context = GameContext(primes)
    assert context.opening in primes
    results = benchmark(context)
    assert results['total'] == len(primes)
    assert results['average'] >= 1
