# expr.py
"""AST nodes for parsed expressions.

The node family is closed: NumberLiteral, SymbolRef, Negate, Factorial,
BinaryOp and Call. Nodes are immutable and own their operands, so a tree
never shares subtrees. ``==`` compares trees structurally.

Each node carries a precedence that is used only when rendering, to decide
where parentheses go. Evaluation order comes from the tree shape alone.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum, IntEnum
from typing import TYPE_CHECKING, Callable, Dict, Optional, Tuple

from .errors import InvalidDefinitionTarget
from .number import NAN, ONE, ZERO, Number, divide, factorial, format_number, is_real, power

if TYPE_CHECKING:
    from .environment import Environment, FunctionDef

logger = logging.getLogger(__name__)


class Precedence(IntEnum):
    """Binding power of a node, loosest first."""
    RELATION = 0        # = < :=
    ADDITION = 1        # + -
    MULTIPLICATION = 2  # * /
    FACTORIAL = 3       # !
    POWER = 4           # ^
    NUMBER = 5          # 42 x -x f(x)


class BinaryKind(Enum):
    ADD = '+'
    SUB = '-'
    MUL = '*'
    DIV = '/'
    POW = '^'
    EQUAL = '='
    LESS = '<'
    DEFINE = ':='


_KIND_PRECEDENCE: Dict[BinaryKind, Precedence] = {
    BinaryKind.ADD: Precedence.ADDITION,
    BinaryKind.SUB: Precedence.ADDITION,
    BinaryKind.MUL: Precedence.MULTIPLICATION,
    BinaryKind.DIV: Precedence.MULTIPLICATION,
    BinaryKind.POW: Precedence.POWER,
    BinaryKind.EQUAL: Precedence.RELATION,
    BinaryKind.LESS: Precedence.RELATION,
    BinaryKind.DEFINE: Precedence.RELATION,
}


def _equal(a: Number, b: Number) -> Number:
    return a if a == b else NAN


def _less(a: Number, b: Number) -> Number:
    if is_real(a) and is_real(b) and a.real < b.real:
        return a
    return NAN


def _define(a: Number, b: Number) -> Number:
    return ONE if a == b else ZERO


_KIND_EVAL: Dict[BinaryKind, Callable[[Number, Number], Number]] = {
    BinaryKind.ADD: lambda a, b: a + b,
    BinaryKind.SUB: lambda a, b: a - b,
    BinaryKind.MUL: lambda a, b: a * b,
    BinaryKind.DIV: divide,
    BinaryKind.POW: power,
    BinaryKind.EQUAL: _equal,
    BinaryKind.LESS: _less,
    BinaryKind.DEFINE: _define,
}


def _parenthesize(operand: Expr, outer: Precedence, same_level: bool = False) -> str:
    """Render an operand, in parentheses if it binds looser than its parent.

    ``same_level`` also wraps an operand of equal precedence; it is set for
    the side the grammar would not attach such an operand to.
    """
    text = operand.render()
    if operand.precedence < outer or (same_level and operand.precedence == outer):
        return f"({text})"
    return text


@dataclass(frozen=True)
class Expr:
    """Base AST node."""

    @property
    def precedence(self) -> Precedence:
        return Precedence.NUMBER

    def render(self) -> str:
        raise NotImplementedError

    def evaluate(self, environment: Environment) -> Number:
        raise NotImplementedError

    def clone(self) -> Expr:
        raise NotImplementedError

    def __str__(self) -> str:
        return self.render()


@dataclass(frozen=True)
class NumberLiteral(Expr):
    value: Number

    def render(self) -> str:
        return format_number(self.value)

    def evaluate(self, environment: Environment) -> Number:
        return self.value

    def clone(self) -> NumberLiteral:
        return NumberLiteral(self.value)


@dataclass(frozen=True)
class SymbolRef(Expr):
    """A constant or free variable, resolved against the environment on every evaluation."""
    name: str

    def render(self) -> str:
        return self.name

    def evaluate(self, environment: Environment) -> Number:
        value = environment.lookup_constant(self.name)
        if value is not None:
            return value
        fallback = environment.settings.unresolved_symbol
        logger.debug(f"Symbol {self.name!r} is unresolved, evaluating to {fallback}")
        return ZERO if fallback == "zero" else NAN

    def clone(self) -> SymbolRef:
        return SymbolRef(self.name)


@dataclass(frozen=True)
class Negate(Expr):
    operand: Expr

    def render(self) -> str:
        return "-" + _parenthesize(self.operand, self.precedence)

    def evaluate(self, environment: Environment) -> Number:
        return -self.operand.evaluate(environment)

    def clone(self) -> Negate:
        return Negate(self.operand.clone())


@dataclass(frozen=True)
class Factorial(Expr):
    operand: Expr

    @property
    def precedence(self) -> Precedence:
        return Precedence.FACTORIAL

    def render(self) -> str:
        return _parenthesize(self.operand, self.precedence) + "!"

    def evaluate(self, environment: Environment) -> Number:
        n = self.operand.evaluate(environment)
        return factorial(n, staircase=environment.settings.factorial == "staircase")

    def clone(self) -> Factorial:
        return Factorial(self.operand.clone())


@dataclass(frozen=True)
class BinaryOp(Expr):
    kind: BinaryKind
    left: Expr
    right: Expr

    def __post_init__(self):
        if self.kind is BinaryKind.DEFINE and not isinstance(self.left, SymbolRef):
            raise InvalidDefinitionTarget(
                f"Left-hand side of ':=' must be a symbol, got {self.left.render()!r}")

    @classmethod
    def define(cls, left: Expr, right: Expr) -> BinaryOp:
        """Build ``left := right``; raises InvalidDefinitionTarget unless left is a SymbolRef."""
        return cls(BinaryKind.DEFINE, left, right)

    @property
    def precedence(self) -> Precedence:
        return _KIND_PRECEDENCE[self.kind]

    @property
    def target(self) -> Optional[str]:
        """Name being defined, for ':=' nodes."""
        if self.kind is BinaryKind.DEFINE:
            return self.left.name
        return None

    def render(self) -> str:
        right_assoc = self.kind is BinaryKind.POW
        left = _parenthesize(self.left, self.precedence, same_level=right_assoc)
        right = _parenthesize(self.right, self.precedence, same_level=not right_assoc)
        return f"{left} {self.kind.value} {right}"

    def evaluate(self, environment: Environment) -> Number:
        a = self.left.evaluate(environment)
        b = self.right.evaluate(environment)
        return _KIND_EVAL[self.kind](a, b)

    def clone(self) -> BinaryOp:
        return BinaryOp(self.kind, self.left.clone(), self.right.clone())


@dataclass(frozen=True)
class Call(Expr):
    """Function application.

    ``definition`` refers to a function owned by the environment the call
    was parsed against; it is not part of structural comparison.
    """
    name: str
    definition: FunctionDef = field(compare=False, repr=False)
    args: Tuple[Expr, ...] = ()

    def render(self) -> str:
        return f"{self.name}({', '.join(arg.render() for arg in self.args)})"

    def evaluate(self, environment: Environment) -> Number:
        values = [arg.evaluate(environment) for arg in self.args]
        return self.definition.call(environment, values)

    def clone(self) -> Call:
        return Call(self.name, self.definition, tuple(arg.clone() for arg in self.args))
