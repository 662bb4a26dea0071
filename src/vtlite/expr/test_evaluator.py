"""Tests for expression evaluation and value coercion."""

import pytest

from vtlite.errors import EvaluationError
from vtlite.expr import BUILT_INS, evaluate_expression
from vtlite.expr.values import coerce_numeric_like, to_text


def ctx(**values):
    context = dict(BUILT_INS)
    context.update(values)
    return context


def test_resolves_variables():
    assert evaluate_expression("$value + 3", ctx(value=2)) == 5


def test_numeric_strings_are_coerced():
    """Variables holding numeric-looking strings are treated as numbers."""
    assert evaluate_expression("$a * 2", ctx(a=" 21 ")) == 42
    assert evaluate_expression("$a + 1", ctx(a="-1.5")) == -0.5


def test_non_numeric_strings_concatenate():
    assert evaluate_expression('$a + "-" + $b', ctx(a="x", b=3)) == "x-3"


def test_absent_variable_is_none():
    assert evaluate_expression("$missing", ctx()) is None
    assert evaluate_expression('$missing == ""', ctx()) is False


def test_division_is_not_truncated_during_evaluation():
    """Truncation happens on #set, not while evaluating."""
    assert evaluate_expression("10 / 4", ctx()) == 2.5


def test_remainder_follows_dividend_sign():
    assert evaluate_expression("-7 % 2", ctx()) == -1
    assert evaluate_expression("7 % -2", ctx()) == 1


def test_parse_int_builtin():
    assert evaluate_expression("$Integer.parseInt($t) / 10000", ctx(t="251229")) == 25.1229
    assert evaluate_expression("parseInt('12px')", ctx()) == 12


def test_parse_int_rejects_non_numeric_input():
    with pytest.raises(EvaluationError, match="Unable to parse integer"):
        evaluate_expression("$Integer.parseInt($t)", ctx(t="abc"))


def test_math_helpers():
    assert evaluate_expression("Math.floor(7 / 2)", ctx()) == 3
    assert evaluate_expression("Math.round(2.5)", ctx()) == 3
    assert evaluate_expression("Math.max(1, $b, 3)", ctx(b="9")) == 9
    assert evaluate_expression("Math.abs(-4)", ctx()) == 4


def test_equality_between_number_and_numeric_string():
    assert evaluate_expression('$n == "5"', ctx(n=5)) is True
    assert evaluate_expression('$n != ""', ctx(n="251221")) is True
    assert evaluate_expression("true == 1", ctx()) is False


def test_logical_operators_short_circuit():
    # The right-hand side would fail if it were evaluated
    assert evaluate_expression("false && 1 / 0", ctx()) is False
    assert evaluate_expression("$a || 1 / 0", ctx(a="x")) == "x"


def test_relational_operators():
    assert evaluate_expression("$d >= 1 && $d <= 11", ctx(d=8)) is True
    assert evaluate_expression('"abc" < "abd"', ctx()) is True


def test_relational_with_absent_or_non_numeric_operand_is_false():
    """Ordering an absent value or a word against a number is simply false."""
    assert evaluate_expression("$missing < 1", ctx()) is False
    assert evaluate_expression("$missing >= 0", ctx()) is False
    assert evaluate_expression("$w > 1", ctx(w="abc")) is False
    assert evaluate_expression("true > 0", ctx()) is False


@pytest.mark.parametrize(
    "expression",
    [
        "1 / 0",
        "5 % 0",
        '"a" * 2',
        "-true",
        "open('/etc/passwd')",
        "__import__",
        "$Integer.__class__",
        "$Integer.nope(1)",
        "$s.upper()",
        "Math.sqrt(-1)",
        "Math.floor()",
    ],
)
def test_unevaluable_expressions_raise(expression):
    """Nothing outside the builtins is reachable, and bad operands fail loudly."""
    with pytest.raises(EvaluationError) as info:
        evaluate_expression(expression, ctx(s="text"))
    assert info.value.expression == expression


def test_context_values_are_not_callable():
    """Host callables passed in the context cannot be invoked by a template."""
    with pytest.raises(EvaluationError, match="is not a function"):
        evaluate_expression("$fn()", ctx(fn=print))


def test_mapping_member_access():
    assert evaluate_expression("$user.age + 1", ctx(user={"age": "41"})) == 42
    assert evaluate_expression("$user.missing", ctx(user={})) is None


def test_coerce_numeric_like():
    assert coerce_numeric_like("007") == 7
    assert coerce_numeric_like("1.50") == 1.5
    assert coerce_numeric_like("") == ""
    assert coerce_numeric_like("1e3") == "1e3"
    assert coerce_numeric_like("+1") == "+1"


def test_to_text():
    assert to_text(None) == ""
    assert to_text(True) == "true"
    assert to_text(5.0) == "5"
    assert to_text(2.5) == "2.5"
