# environment.py
"""Symbol tables: definitions and the chained scopes that hold them.

An Environment maps names to definitions and may point at an enclosing
Environment. Lookups walk from the innermost scope outwards and return the
first match. A call to a user-defined function gets a fresh child scope
holding its parameters; that scope lives only for the duration of the call.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable, Dict, Iterator, List, Optional, Sequence, Tuple

from .config import DEFAULT_SETTINGS, EvaluationSettings
from .number import NAN, Number, format_number, guarded

if TYPE_CHECKING:
    from .expr import Expr

logger = logging.getLogger(__name__)


class Definition:
    """Base class for environment entries."""

    def render(self, name: str, precision: Optional[int] = None) -> str:
        raise NotImplementedError


@dataclass(eq=False)
class ConstantDef(Definition):
    """A named number. Redefinition updates ``value`` in place."""
    value: Number

    def render(self, name: str, precision: Optional[int] = None) -> str:
        return f"{name} = {format_number(self.value, precision)}"


class FunctionDef(Definition):
    """Something a Call node can invoke."""
    arity = 1

    def call(self, environment: Environment, args: Sequence[Number]) -> Number:
        if len(args) != self.arity:
            logger.debug(f"{type(self).__name__} expects {self.arity} argument(s), got {len(args)}")
            return NAN
        return self._invoke(environment, args)

    def _invoke(self, environment: Environment, args: Sequence[Number]) -> Number:
        raise NotImplementedError


@dataclass(eq=False)
class NativeFunctionDef(FunctionDef):
    func: Callable[[Number], Number]

    def _invoke(self, environment: Environment, args: Sequence[Number]) -> Number:
        return self.func(args[0])

    def render(self, name: str, precision: Optional[int] = None) -> str:
        return f"{name}(x) = native"


@dataclass(eq=False)
class NativeFunction2Def(FunctionDef):
    func: Callable[[Number, Number], Number]
    arity = 2

    def _invoke(self, environment: Environment, args: Sequence[Number]) -> Number:
        return self.func(args[0], args[1])

    def render(self, name: str, precision: Optional[int] = None) -> str:
        return f"{name}(x, y) = native"


@dataclass(eq=False)
class CustomFunctionDef(FunctionDef):
    """A function whose body is an expression over its parameter names."""
    params: Tuple[str, ...]
    body: Expr

    @property
    def arity(self) -> int:
        return len(self.params)

    def _invoke(self, environment: Environment, args: Sequence[Number]) -> Number:
        # Parameters shadow outer bindings; the outer scope is never written.
        scope = environment.child()
        for name, value in zip(self.params, args):
            scope.define_constant(name, value)
        return self.body.evaluate(scope)

    def render(self, name: str, precision: Optional[int] = None) -> str:
        return f"{name}({', '.join(self.params)}) = {self.body.render()}"


class Environment:
    """A scope of name -> Definition bindings with an optional enclosing scope."""

    def __init__(self, settings: Optional[EvaluationSettings] = None,
                 parent: Optional[Environment] = None):
        self._bindings: Dict[str, Definition] = {}
        self._settings = settings
        self.parent = parent

    @property
    def settings(self) -> EvaluationSettings:
        """Settings of the nearest scope that has them, defaults at the root."""
        scope: Optional[Environment] = self
        while scope is not None:
            if scope._settings is not None:
                return scope._settings
            scope = scope.parent
        return DEFAULT_SETTINGS

    def child(self) -> Environment:
        return Environment(parent=self)

    def define_constant(self, name: str, value: Number) -> ConstantDef:
        value = complex(value)
        existing = self._bindings.get(name)
        if isinstance(existing, ConstantDef):
            existing.value = value
            return existing
        definition = ConstantDef(value)
        self._bindings[name] = definition
        return definition

    def define_native_function(self, name: str, func: Callable[..., Number],
                               arity: int = 1) -> FunctionDef:
        """Bind a Python callable taking one (or, with arity=2, two) numbers."""
        impl = guarded(func, name)
        if arity == 1:
            definition: FunctionDef = NativeFunctionDef(impl)
        elif arity == 2:
            definition = NativeFunction2Def(impl)
        else:
            raise ValueError(f"Native functions take 1 or 2 arguments, not {arity}")
        self._bindings[name] = definition
        return definition

    def define_custom_function(self, name: str, params: Sequence[str], body: Expr) -> CustomFunctionDef:
        definition = CustomFunctionDef(tuple(params), body)
        self._bindings[name] = definition
        return definition

    def undefine(self, name: str) -> Optional[Definition]:
        """Remove a binding from this scope; outer scopes are left alone."""
        return self._bindings.pop(name, None)

    def lookup(self, name: str) -> Optional[Definition]:
        scope: Optional[Environment] = self
        while scope is not None:
            definition = scope._bindings.get(name)
            if definition is not None:
                return definition
            scope = scope.parent
        return None

    def lookup_constant(self, name: str) -> Optional[Number]:
        definition = self.lookup(name)
        if isinstance(definition, ConstantDef):
            return definition.value
        return None

    def __contains__(self, name: str) -> bool:
        return self.lookup(name) is not None

    def __len__(self) -> int:
        return len(self._bindings)

    def __iter__(self) -> Iterator[str]:
        return iter(sorted(self._bindings))

    def items(self) -> List[Tuple[str, Definition]]:
        """This scope's bindings, ordered by name."""
        return sorted(self._bindings.items())

    def dump(self, precision: Optional[int] = None) -> List[str]:
        """One line per binding in this scope, e.g. ``pi = 3.14159`` or ``sin(x) = native``."""
        if precision is None:
            precision = self.settings.precision
        return [definition.render(name, precision) for name, definition in self.items()]
