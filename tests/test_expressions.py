import math

import pytest

from rpncalc.expressions import (
    BinaryExpression,
    ConstExpression,
    FunctionExpression,
    Operator,
    ParserState,
    UnaryExpression,
    VarExpression,
    create_expression,
    get_constant,
    get_operator,
    is_constant,
    is_number,
)


def evaluate(text, state=None):
    state = state or ParserState()
    tokens = text.split()
    expr = create_expression(tokens, state)
    expr.parse(tokens, state)
    return expr.value(state)


def define(name, text, state):
    state.parsing_function = True
    tokens = text.split()
    expr = create_expression(tokens, state)
    expr.parse(tokens, state)
    state.parsing_function = False
    state.functions[name] = expr


@pytest.mark.parametrize(
    "token, expected",
    [
        ("+", Operator.ADD),
        ("-", Operator.SUB),
        ("*", Operator.MUL),
        ("/", Operator.DIV),
        ("^", Operator.POW),
        ("SQRT", Operator.SQRT),
        ("abs", Operator.ABS),
        ("Sin", Operator.SIN),
        ("cos", Operator.COS),
        ("x", Operator.NONE),
        ("", Operator.NONE),
        ("-5", Operator.NONE),
    ],
)
def test_get_operator(token, expected):
    assert get_operator(token) is expected


@pytest.mark.parametrize(
    "token, unary",
    [
        ("+", False),
        ("-", False),
        ("*", False),
        ("/", False),
        ("^", False),
        ("sqrt", True),
        ("abs", True),
        ("sin", True),
        ("cos", True),
    ],
)
def test_unary_flag_splits_operators(token, unary):
    assert get_operator(token).is_unary is unary


def test_create_expression_kinds():
    state = ParserState()

    tokens = ["3", "4", "+"]
    expr = create_expression(tokens, state)
    assert isinstance(expr, BinaryExpression)
    expr.parse(tokens, state)
    assert expr.value(state) == 7.0
    assert tokens == []

    tokens = ["4", "sqrt"]
    expr = create_expression(tokens, state)
    assert isinstance(expr, UnaryExpression)
    expr.parse(tokens, state)
    assert expr.value(state) == 2.0

    tokens = ["3"]
    expr = create_expression(tokens, state)
    assert isinstance(expr, ConstExpression)
    expr.parse(tokens, state)
    assert expr.value(state) == 3.0

    tokens = ["pi"]
    expr = create_expression(tokens, state)
    assert isinstance(expr, ConstExpression)
    expr.parse(tokens, state)
    assert expr.value(state) == math.pi


def test_variable_only_inside_definition():
    state = ParserState()
    tokens = ["x"]
    outside = create_expression(tokens, state)
    assert isinstance(outside, ConstExpression)
    outside.parse(tokens, state)
    assert tokens == ["x"]
    assert outside.value(state) == 0.0

    state.parsing_function = True
    tokens = ["x"]
    inside = create_expression(tokens, state)
    assert isinstance(inside, VarExpression)
    inside.parse(tokens, state)
    assert tokens == []
    state.context.append(7.0)
    assert inside.value(state) == 7.0


@pytest.mark.parametrize(
    "token, expected",
    [("42", True), ("-3.5", True), ("3.", False), (".5", False), ("1e5", False), ("abc", False)],
)
def test_is_number(token, expected):
    assert is_number(token) is expected


def test_constants():
    assert is_constant("pi") and is_constant("e")
    assert not is_constant("x")
    assert get_constant("pi") == math.pi
    assert get_constant("e") == math.e
    assert get_constant("x") == 0.0


def test_const_parse_consumes_last_token():
    state = ParserState()
    tokens = ["1", "2"]
    expr = create_expression(tokens, state)
    expr.parse(tokens, state)
    assert tokens == ["1"]
    assert expr.value(state) == 2.0


def test_unknown_token_is_zero_and_not_consumed():
    state = ParserState()
    tokens = ["5", "foo"]
    expr = create_expression(tokens, state)
    expr.parse(tokens, state)
    assert tokens == ["5", "foo"]
    assert expr.value(state) == 0.0


def test_empty_input_is_zero():
    state = ParserState()
    expr = create_expression([], state)
    expr.parse([], state)
    assert expr.value(state) == 0.0


def test_subtraction_order_postfix():
    assert evaluate("10 4 -") == 6.0
    assert evaluate("4 10 -") == -evaluate("10 4 -")


def test_prefix_order_matches_postfix():
    prefix = ParserState(reversed_order=False)
    assert evaluate("4 10 -", prefix) == evaluate("10 4 -")
    assert evaluate("2 5 /", prefix) == evaluate("5 2 /")


def test_division():
    assert evaluate("5 2 /") == 2.5
    assert evaluate("1 0 /") == math.inf
    assert evaluate("-1 0 /") == -math.inf
    assert math.isnan(evaluate("0 0 /"))


def test_power():
    assert evaluate("2 10 ^") == math.pow(2, 10)
    assert math.isnan(evaluate("-8 0.5 ^"))
    assert evaluate("0 -1 ^") == math.inf


def test_unary_functions():
    assert evaluate("2 sqrt") == math.sqrt(2)
    assert evaluate("-3 abs") == 3.0
    assert evaluate("pi sin") == math.sin(math.pi)
    assert evaluate("pi cos") == math.cos(math.pi)
    assert math.isnan(evaluate("-1 sqrt"))


def test_unknown_operands_are_zero():
    assert evaluate("3 foo +") == 0.0
    assert evaluate("foo") == 0.0


def test_variable_outside_call_is_zero():
    state = ParserState(parsing_function=True)
    assert evaluate("x", state) == 0.0


def test_user_function_call():
    state = ParserState()
    define("sq", "x x *", state)
    assert evaluate("3 sq", state) == evaluate("3 3 *", state)
    assert state.context == []


def test_nested_function_calls_restore_context():
    state = ParserState()
    define("sq", "x x *", state)
    define("inc", "x 1 +", state)
    assert evaluate("2 sq inc", state) == evaluate("2 2 * 1 +", state)
    assert state.context == []


def test_undefined_function_is_zero():
    state = ParserState()
    expr = FunctionExpression()
    expr.parse(["3", "g"], state)
    assert expr.value(state) == 0.0