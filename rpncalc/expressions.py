"""Expression tree for prefix and postfix arithmetic notation."""

from __future__ import annotations

import math
import re
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import IntEnum
from typing import Callable


class Operator(IntEnum):
    """Operators understood by the parser; unary ones follow the binary ones."""

    NONE = 0
    ADD = 1
    SUB = 2
    MUL = 3
    DIV = 4
    POW = 5
    SQRT = 7
    ABS = 8
    SIN = 9
    COS = 10

    @property
    def is_unary(self) -> bool:
        return self > _DOUBLE_PARAM


_DOUBLE_PARAM = 6

_SYMBOLS = {
    "+": Operator.ADD,
    "-": Operator.SUB,
    "*": Operator.MUL,
    "/": Operator.DIV,
    "^": Operator.POW,
}

_NAMED = {
    "sqrt": Operator.SQRT,
    "abs": Operator.ABS,
    "sin": Operator.SIN,
    "cos": Operator.COS,
}

_CONSTANTS = {
    "pi": math.pi,
    "e": math.e,
}

_NUMBER = re.compile(r"-?[0-9]+([.][0-9]+)?")

VARIABLE_NAME = "x"


@dataclass
class ParserState:
    """Shared parsing and evaluation state."""

    reversed_order: bool = True
    parsing_function: bool = False
    functions: dict[str, Expression] = field(default_factory=dict)
    context: list[float] = field(default_factory=list)


def get_operator(token: str) -> Operator:
    """Return the operator a token names, or Operator.NONE."""
    if not token:
        return Operator.NONE
    if len(token) > 1:
        return _NAMED.get(token.lower(), Operator.NONE)
    return _SYMBOLS.get(token, Operator.NONE)


def is_number(token: str) -> bool:
    """True if the token is a plain decimal number."""
    return _NUMBER.fullmatch(token) is not None


def is_constant(token: str) -> bool:
    """True if the token names a known constant."""
    return token in _CONSTANTS


def get_constant(token: str) -> float:
    """Value of a named constant, 0.0 for unknown names."""
    return _CONSTANTS.get(token, 0.0)


class Expression(ABC):
    """A node of the expression tree."""

    @abstractmethod
    def value(self, state: ParserState) -> float:
        """Evaluate the node."""

    @abstractmethod
    def parse(self, tokens: list[str], state: ParserState) -> None:
        """Consume this node's tokens from the end of the list."""


class ConstExpression(Expression):
    """A number or named constant."""

    def __init__(self, value: float | None = None) -> None:
        self._value = 0.0 if value is None else float(value)
        self._fixed = value is not None

    def value(self, state: ParserState) -> float:
        return self._value

    def parse(self, tokens: list[str], state: ParserState) -> None:
        if self._fixed:
            return
        self._fixed = True
        token = tokens.pop()
        self._value = get_constant(token) if is_constant(token) else float(token)


class VarExpression(Expression):
    """The function argument, read from the innermost call context."""

    def value(self, state: ParserState) -> float:
        return state.context[-1] if state.context else 0.0

    def parse(self, tokens: list[str], state: ParserState) -> None:
        tokens.pop()


class FunctionExpression(Expression):
    """A call of a user-defined function with one argument."""

    def __init__(self) -> None:
        self.name = ""
        self.argument: Expression | None = None

    def value(self, state: ParserState) -> float:
        body = state.functions.get(self.name) if self.name else None
        if self.argument is None or body is None:
            return 0.0
        state.context.append(self.argument.value(state))
        try:
            return body.value(state)
        finally:
            state.context.pop()

    def parse(self, tokens: list[str], state: ParserState) -> None:
        self.name = tokens.pop()
        self.argument = create_expression(tokens, state)
        self.argument.parse(tokens, state)


def _guard(func: Callable[[float], float]) -> Callable[[float], float]:
    def wrapped(x: float) -> float:
        try:
            return func(x)
        except ValueError:
            return math.nan

    return wrapped


_UNARY: dict[Operator, Callable[[float], float]] = {
    Operator.SQRT: _guard(math.sqrt),
    Operator.ABS: abs,
    Operator.SIN: _guard(math.sin),
    Operator.COS: _guard(math.cos),
}


class UnaryExpression(Expression):
    """A one-argument mathematical function."""

    def __init__(self) -> None:
        self.op = Operator.NONE
        self.inner: Expression | None = None

    def value(self, state: ParserState) -> float:
        if self.inner is None:
            return 0.0
        func = _UNARY.get(self.op)
        if func is None:
            return 1.0
        return func(self.inner.value(state))

    def parse(self, tokens: list[str], state: ParserState) -> None:
        self.op = get_operator(tokens.pop())
        self.inner = create_expression(tokens, state)
        self.inner.parse(tokens, state)


def _is_odd_integer(y: float) -> bool:
    return y.is_integer() and y % 2 == 1


def _divide(a: float, b: float) -> float:
    if b == 0:
        if a == 0 or math.isnan(a):
            return math.nan
        return math.copysign(math.inf, a) * math.copysign(1.0, b)
    return a / b


def _power(base: float, exponent: float) -> float:
    try:
        return math.pow(base, exponent)
    except OverflowError:
        if base < 0 and _is_odd_integer(exponent):
            return -math.inf
        return math.inf
    except ValueError:
        if base == 0:
            if _is_odd_integer(exponent):
                return math.copysign(math.inf, base)
            return math.inf
        return math.nan


_BINARY: dict[Operator, Callable[[float, float], float]] = {
    Operator.ADD: lambda a, b: a + b,
    Operator.SUB: lambda a, b: a - b,
    Operator.MUL: lambda a, b: a * b,
    Operator.DIV: _divide,
    Operator.POW: _power,
}


class BinaryExpression(Expression):
    """A two-argument arithmetic operator."""

    def __init__(self) -> None:
        self.op = Operator.NONE
        self.left: Expression | None = None
        self.right: Expression | None = None

    def value(self, state: ParserState) -> float:
        if self.left is None or self.right is None:
            return 0.0
        func = _BINARY.get(self.op)
        if func is None:
            return 1.0
        return func(self.left.value(state), self.right.value(state))

    def parse(self, tokens: list[str], state: ParserState) -> None:
        self.op = get_operator(tokens.pop())
        self.left = create_expression(tokens, state)
        self.left.parse(tokens, state)
        self.right = create_expression(tokens, state)
        self.right.parse(tokens, state)
        if state.reversed_order:
            self.left, self.right = self.right, self.left


def create_expression(tokens: list[str], state: ParserState) -> Expression:
    """Create the node for the token at the end of the list.

    Empty input and unknown tokens give a constant zero that consumes nothing.
    """
    if not tokens:
        return ConstExpression(0.0)
    token = tokens[-1]
    op = get_operator(token)
    if op is not Operator.NONE:
        return UnaryExpression() if op.is_unary else BinaryExpression()
    if is_constant(token) or is_number(token):
        return ConstExpression()
    if token in state.functions:
        return FunctionExpression()
    if token == VARIABLE_NAME and state.parsing_function:
        return VarExpression()
    return ConstExpression(0.0)