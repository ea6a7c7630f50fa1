"""
Evaluator Test Suite

1. Version sums over fixed trees
2. Operator semantics
3. Overflow policy
"""

import logging

import pytest

from bits.config import OverflowPolicy
from bits.errors import EvaluationOverflow
from bits.evaluator import U64_MAX, Evaluator, evaluate, version_sum
from bits.packet import OperatorCode, Packet

lit = Packet.literal
op = Packet.operator


# --- 1. Version sums ---

def test_version_sum_of_literal_is_its_version():
    assert version_sum(lit(6, 2021)) == 6


def test_version_sum_is_structural():
    tree = op(
        6, OperatorCode.SUM,
        op(0, OperatorCode.SUM, lit(0, 10), lit(6, 11)),
        op(4, OperatorCode.SUM, lit(7, 12), lit(0, 13)),
    )
    assert version_sum(tree) == 23
    # Same versions in a different shape
    flat = op(6, OperatorCode.PRODUCT, lit(0, 1), lit(6, 1), lit(4, 1), lit(7, 1), lit(0, 1))
    assert version_sum(flat) == version_sum(tree)


def test_traversals_are_independent():
    tree = op(1, OperatorCode.LESS_THAN, lit(6, 10), lit(2, 20))
    evaluator = Evaluator()
    first = (evaluator.evaluate(tree), evaluator.version_sum(tree))
    second = (evaluator.version_sum(tree), evaluator.evaluate(tree))
    assert first == (1, 9)
    assert second == (9, 1)


# --- 2. Operators ---

@pytest.mark.parametrize("code, values, expected", [
    (OperatorCode.SUM, [1, 2], 3),
    (OperatorCode.SUM, [5], 5),
    (OperatorCode.PRODUCT, [6, 9], 54),
    (OperatorCode.PRODUCT, [7], 7),
    (OperatorCode.MIN, [7, 8, 9], 7),
    (OperatorCode.MAX, [7, 8, 9], 9),
    (OperatorCode.GREATER_THAN, [15, 5], 1),
    (OperatorCode.GREATER_THAN, [5, 5], 0),
    (OperatorCode.LESS_THAN, [5, 15], 1),
    (OperatorCode.LESS_THAN, [15, 5], 0),
    (OperatorCode.EQUAL, [5, 5], 1),
    (OperatorCode.EQUAL, [5, 15], 0),
])
def test_operator_semantics(code, values, expected):
    tree = op(0, code, *(lit(0, v) for v in values))
    assert evaluate(tree) == expected


@pytest.mark.parametrize("code, expected", [
    (OperatorCode.SUM, 0),
    (OperatorCode.PRODUCT, 1),
    (OperatorCode.MIN, 0),
    (OperatorCode.MAX, 0),
])
def test_childless_operators(code, expected):
    assert evaluate(op(0, code)) == expected


def test_equal_of_two_sum_branches():
    tree = op(
        4, OperatorCode.EQUAL,
        op(2, OperatorCode.SUM, lit(2, 1), lit(4, 3)),
        op(6, OperatorCode.PRODUCT, lit(0, 2), lit(2, 2)),
    )
    assert evaluate(tree) == 1


# --- 3. Overflow ---

def big_product():
    return op(0, OperatorCode.PRODUCT, lit(0, 1 << 63), lit(0, 4))


def test_overflow_is_checked_by_default():
    with pytest.raises(EvaluationOverflow) as exc:
        evaluate(big_product())
    assert exc.value.operator == "PRODUCT"
    assert exc.value.value == 1 << 65
    assert isinstance(exc.value, OverflowError)


def test_overflow_can_wrap():
    assert evaluate(big_product(), OverflowPolicy.WRAP) == 0
    tree = op(0, OperatorCode.SUM, lit(0, U64_MAX), lit(0, 2))
    assert Evaluator(OverflowPolicy.WRAP).evaluate(tree) == 1


def test_u64_max_itself_does_not_overflow():
    tree = op(0, OperatorCode.SUM, lit(0, U64_MAX - 1), lit(0, 1))
    assert evaluate(tree) == U64_MAX


def test_wrapped_results_feed_parent_operators():
    inner = op(0, OperatorCode.SUM, lit(0, U64_MAX), lit(0, 3))
    tree = op(0, OperatorCode.EQUAL, inner, lit(0, 2))
    assert evaluate(tree, OverflowPolicy.WRAP) == 1
    with pytest.raises(EvaluationOverflow):
        evaluate(tree)


def test_wrap_is_logged(caplog):
    with caplog.at_level(logging.DEBUG, logger="bits.evaluator"):
        evaluate(big_product(), OverflowPolicy.WRAP)
    assert any("wrapped" in r.getMessage() for r in caplog.records)
