# prelude.py
"""Standard constants and functions an embedding seeds its root scope with."""

import cmath
import math
from typing import Optional

from .config import EvaluationSettings
from .environment import Environment
from .number import NAN

STANDARD_CONSTANTS = {
    'i': complex(0, 1),
    'e': complex(math.e),
    'pi': complex(math.pi),
    'π': complex(math.pi),
    'nan': NAN,
}

STANDARD_FUNCTIONS = {
    'Re': lambda x: complex(x.real),
    'Im': lambda x: complex(x.imag),
    'arg': cmath.phase,
    'sin': cmath.sin,
    'cos': cmath.cos,
    'tan': cmath.tan,
    'exp': cmath.exp,
    'sqrt': cmath.sqrt,
    'log': cmath.log,
}

STANDARD_FUNCTIONS2 = {
    # magnitude and angle are taken from the real parts
    'polar': lambda r, phi: cmath.rect(r.real, phi.real),
}


def inject_standard_symbols(environment: Environment) -> Environment:
    for name, value in STANDARD_CONSTANTS.items():
        environment.define_constant(name, value)
    for name, func in STANDARD_FUNCTIONS.items():
        environment.define_native_function(name, func)
    for name, func in STANDARD_FUNCTIONS2.items():
        environment.define_native_function(name, func, arity=2)
    return environment


def standard_environment(settings: Optional[EvaluationSettings] = None) -> Environment:
    """A root scope holding the standard bindings."""
    return inject_standard_symbols(Environment(settings))
