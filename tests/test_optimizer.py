import numpy as np
import pytest

from wordle_engine import (
    ContractViolation, FeedbackRule, Histogram, Pool, best_guess, expected_size, refine,
    score_candidates,
)


def test_expected_size_of_sample_guesses(histogram, pool):
    assert expected_size(histogram, pool, "arise") == pytest.approx(63.7257, abs=1e-4)
    assert expected_size(histogram, pool, "raise") == pytest.approx(61.0009, abs=1e-4)


def test_raise_is_best_opening(histogram, pool):
    assert best_guess(histogram, pool) == "raise"


def test_raise_is_best_opening_counted_rule(lexicon):
    pool = Pool.full(lexicon, FeedbackRule.COUNTED)
    assert best_guess(Histogram.for_lexicon(lexicon), pool) == "raise"


def test_expected_size_at_least_one(histogram, pool):
    small = refine(pool, "arise", 31)
    for guess in small:
        assert expected_size(histogram, small, guess) >= 1.0


def test_expected_size_one_iff_guess_separates_pool():
    pool = Pool.from_words(["ab", "ba", "cd"])
    histogram = Histogram.for_lexicon(pool.lexicon)
    assert expected_size(histogram, pool, "ab") == 1.0
    assert expected_size(histogram, pool, "cd") == pytest.approx(5 / 3)


def test_ties_go_to_first_word_in_lexicographic_order():
    pool = Pool.from_words(["ef", "cd", "ab"])
    histogram = Histogram.for_lexicon(pool.lexicon)
    assert best_guess(histogram, pool) == "ab"
    assert best_guess(histogram, pool, candidates=["ef", "cd", "ab"]) == "ab"
    assert best_guess(histogram, pool, candidates=["ef", "cd"]) == "cd"


def test_best_guess_is_deterministic(histogram, pool):
    small = refine(pool, "raise", 54)
    first = best_guess(histogram, small)
    for _ in range(3):
        assert best_guess(histogram, small) == first
    assert first == "tangy"


def test_best_guess_matches_exhaustive_scan(histogram, pool):
    small = refine(pool, "raise", 54)
    sizes = [(expected_size(histogram, small, w), w) for w in small]
    assert best_guess(histogram, small) == min(sizes)[1]


def test_candidates_outside_pool(histogram, pool):
    small = refine(pool, "raise", 54)
    from_pool = best_guess(histogram, small)
    from_all = best_guess(histogram, small, candidates=pool)
    assert (expected_size(histogram, small, from_all)
            <= expected_size(histogram, small, from_pool))


def test_parallel_matches_sequential(lexicon, pool):
    sequential = Histogram.for_lexicon(lexicon)
    parallel = Histogram.for_lexicon(lexicon, workers=4)
    assert best_guess(parallel, pool) == best_guess(sequential, pool) == "raise"

    small = refine(pool, "raise", 54)
    words1, totals1 = score_candidates(sequential, small)
    words4, totals4 = score_candidates(parallel, small)
    assert words1 == words4 == small.words
    assert np.array_equal(totals1, totals4)
    assert best_guess(parallel, small) == best_guess(sequential, small)


def test_score_candidates_gives_sums_of_squares(histogram, pool):
    words, totals = score_candidates(histogram, pool, ["raise", "arise"])
    assert words == ["arise", "raise"]
    assert totals[0] / len(pool) == pytest.approx(expected_size(histogram, pool, "arise"))
    assert totals[1] / len(pool) == pytest.approx(expected_size(histogram, pool, "raise"))


def test_empty_pool_fails_fast(histogram, lexicon):
    empty = Pool(lexicon, np.array([], dtype=np.intp))
    with pytest.raises(ContractViolation):
        best_guess(histogram, empty)
    with pytest.raises(ContractViolation):
        expected_size(histogram, empty, "raise")


def test_no_candidates(histogram, pool):
    with pytest.raises(ContractViolation):
        best_guess(histogram, pool, candidates=[])
