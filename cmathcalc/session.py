# session.py
"""Top-level handling of one input line against a long-lived environment.

A line holding ``name := expr`` at the top defines ``name`` as the value of
``expr``, or removes ``name`` when that value is NaN (so ``a := nan``
undefines ``a``). Any other line is simply evaluated.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, List, Optional, Union

from .config import DEFAULT_SETTINGS
from .environment import Definition, Environment
from .expr import BinaryKind, BinaryOp, Expr
from .number import Number, format_number, is_undefined
from .parser import parse

logger = logging.getLogger(__name__)

DEFINE = "define"
UNDEFINE = "undefine"
EVALUATE = "evaluate"


@dataclass
class Outcome:
    """What executing a line did: its parsed expression, the action taken, and the computed value."""
    action: str
    expr: Expr
    value: Number
    precision: int = DEFAULT_SETTINGS.precision

    def describe(self, precision: Optional[int] = None) -> str:
        """Echo text: ``1 + 2 = 3``, ``define a := 3`` or ``undefine a := nan``.

        Values use ``precision`` significant digits, defaulting to the
        precision of the environment the line ran in.
        """
        if precision is None:
            precision = self.precision
        if self.action == EVALUATE:
            return f"{self.expr.render()} = {format_number(self.value, precision)}"
        return f"{self.action} {self.expr.render()}"


def apply_definition(expr: BinaryOp, environment: Environment) -> Outcome:
    """Bind the target of a ':=' node to the value of its right-hand side.

    A value whose magnitude is NaN unbinds the target instead. A value with
    an infinite component, such as ``1/0``, has an infinite magnitude and is
    bound like any other number.
    """
    name = expr.target
    precision = environment.settings.precision
    value = expr.right.evaluate(environment)
    if is_undefined(value):
        environment.undefine(name)
        logger.info(f"undefine {name}")
        return Outcome(UNDEFINE, expr, value, precision)
    environment.define_constant(name, value)
    logger.info(f"define {name} = {format_number(value, precision)}")
    return Outcome(DEFINE, expr, value, precision)


def execute(text: Union[str, bytes], environment: Environment) -> Outcome:
    """Parse and run one line; ParseError subclasses propagate to the caller."""
    expr = parse(text, environment)
    if isinstance(expr, BinaryOp) and expr.kind is BinaryKind.DEFINE:
        return apply_definition(expr, environment)
    return Outcome(EVALUATE, expr, expr.evaluate(environment), environment.settings.precision)


def visible_bindings(environment: Environment) -> Dict[str, Definition]:
    """Every name reachable from ``environment``, inner scopes shadowing outer ones."""
    scopes = []
    scope: Optional[Environment] = environment
    while scope is not None:
        scopes.append(scope)
        scope = scope.parent
    bindings: Dict[str, Definition] = {}
    for scope in reversed(scopes):
        bindings.update(scope.items())
    return dict(sorted(bindings.items()))


def dump_symbols(environment: Environment, precision: Optional[int] = None) -> List[str]:
    """Lines describing every visible binding ordered by name, like ``e = 2.71828``."""
    if precision is None:
        precision = environment.settings.precision
    return [definition.render(name, precision)
            for name, definition in visible_bindings(environment).items()]
