"""Unit tests for the three-valued logic algebra."""

from itertools import product

from src.bingo.tristate import FALSE, TRUE, UNKNOWN, TriState, all_of, any_of

VALUES = [TRUE, FALSE, UNKNOWN]


def test_and_truth_table():
    assert TRUE.and_(TRUE) is TRUE
    assert TRUE.and_(FALSE) is FALSE
    assert TRUE.and_(UNKNOWN) is UNKNOWN
    assert UNKNOWN.and_(UNKNOWN) is UNKNOWN
    # FALSE dominates an unresolved operand.
    assert FALSE.and_(UNKNOWN) is FALSE
    assert UNKNOWN.and_(FALSE) is FALSE


def test_or_truth_table():
    assert FALSE.or_(FALSE) is FALSE
    assert FALSE.or_(UNKNOWN) is UNKNOWN
    assert TRUE.or_(UNKNOWN) is TRUE
    assert UNKNOWN.or_(TRUE) is TRUE


def test_invert():
    assert TRUE.invert() is FALSE
    assert FALSE.invert() is TRUE
    assert UNKNOWN.invert() is UNKNOWN


def test_matches_is_xnor():
    assert TRUE.matches(TRUE) is TRUE
    assert FALSE.matches(FALSE) is TRUE
    assert TRUE.matches(FALSE) is FALSE
    assert FALSE.matches(TRUE) is FALSE
    for value in VALUES:
        assert UNKNOWN.matches(value) is UNKNOWN
        assert value.matches(UNKNOWN) is UNKNOWN


def test_kleene_laws():
    for a, b in product(VALUES, repeat=2):
        assert a.and_(b) is b.and_(a)
        assert a.or_(b) is b.or_(a)
        assert a.matches(b) is b.matches(a)
        assert a.and_(b).invert() is a.invert().or_(b.invert())
        assert a.or_(b).invert() is a.invert().and_(b.invert())
    for a, b, c in product(VALUES, repeat=3):
        assert a.and_(b).and_(c) is a.and_(b.and_(c))
        assert a.or_(b).or_(c) is a.or_(b.or_(c))
    for a in VALUES:
        assert a.invert().invert() is a
        assert a.and_(a) is a
        assert a.or_(a) is a


def test_truthy_only_rules_out_false():
    assert TRUE.truthy()
    assert UNKNOWN.truthy()
    assert not FALSE.truthy()


def test_folds():
    assert all_of([]) is TRUE
    assert any_of([]) is FALSE
    assert all_of([TRUE, UNKNOWN, FALSE]) is FALSE
    assert all_of([TRUE, UNKNOWN]) is UNKNOWN
    assert any_of([FALSE, UNKNOWN, TRUE]) is TRUE
    assert any_of([FALSE, UNKNOWN]) is UNKNOWN
    assert TriState.of(True) is TRUE
    assert TriState.of(False) is FALSE
