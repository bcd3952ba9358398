import pytest

from wordle_engine import ContractViolation, FeedbackRule, Outcome, decode, encode, max_code

A, P, E = Outcome.ABSENT, Outcome.PRESENT, Outcome.EXACT


def test_sample_game_codes():
    assert encode("arise", "rebus") == 31
    assert encode("route", "rebus") == 172
    assert encode("rebus", "rebus") == 242


def test_decode_sample_codes():
    assert decode(31, 5) == (A, P, A, P, P)
    assert decode(172, 5) == (E, A, P, A, P)
    assert decode(242, 5) == (E,) * 5
    assert decode(0, 5) == (A,) * 5


def test_decode_inverts_digit_layout():
    for length in (1, 3, 5):
        for code in range(3 ** length):
            digits = decode(code, length)
            assert len(digits) == length
            value = 0
            for d in digits:
                value = value * 3 + int(d)
            assert value == code


@pytest.mark.parametrize("rule", list(FeedbackRule))
def test_self_match_is_max_code(words, rule):
    for w in words:
        assert encode(w, w, rule) == max_code(5)


def test_codes_in_range(words):
    for g in words[::97]:
        for t in words[::89]:
            assert 0 <= encode(g, t) <= max_code(5)


@pytest.mark.parametrize("guess, target, membership, counted", [
    ("speed", "abide", 13, 10),
    ("eerie", "rebus", 145, 63),
    ("level", "hello", 139, 136),
    ("mamma", "magma", 233, 224),
    ("allot", "total", 121, 112),
    ("sassy", "essay", 131, 128),
    ("11113", "13331", 202, 190),
    ("arise", "rebus", 31, 31),
])
def test_repeated_symbols(guess, target, membership, counted):
    assert encode(guess, target) == membership
    assert encode(guess, target, FeedbackRule.MEMBERSHIP) == membership
    assert encode(guess, target, FeedbackRule.COUNTED) == counted


def test_repeated_letter_outcomes():
    # one "e" in abide: membership marks both, counted only the first
    assert decode(encode("speed", "abide"), 5) == (A, A, P, P, P)
    assert decode(encode("speed", "abide", FeedbackRule.COUNTED), 5) == (A, A, P, A, P)


def test_symbol_tuples():
    assert encode((1, 2, 3), (3, 2, 9)) == 0 * 9 + 2 * 3 + 1


def test_length_mismatch():
    with pytest.raises(ContractViolation):
        encode("arise", "rebu")


def test_decode_out_of_range():
    with pytest.raises(ContractViolation):
        decode(243, 5)
    with pytest.raises(ContractViolation):
        decode(-1, 5)
