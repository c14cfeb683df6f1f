# number.py
"""Complex number helpers shared by the evaluator and the standard bindings.

Every value computed by an expression is a Python ``complex``. Operations
here never raise: a result that has no sensible value becomes ``NAN``, the
sentinel printed as ``nan``.
"""

import cmath
import functools
import logging
import math
from typing import Callable, Optional

logger = logging.getLogger(__name__)

Number = complex

NAN: Number = complex(math.nan, math.nan)
ZERO: Number = complex(0.0, 0.0)
ONE: Number = complex(1.0, 0.0)

# Smallest power of ten above the largest finite float; reads back as inf.
_OVERFLOW_DIGITS = "1" + "0" * 309


def is_nan(n: Number) -> bool:
    return cmath.isnan(n)


def is_undefined(n: Number) -> bool:
    """True when the magnitude of n is NaN; an infinite component makes it infinite instead."""
    return cmath.isnan(n) and not cmath.isinf(n)


def is_real(n: Number) -> bool:
    return n.imag == 0


def _div_by_zero(x: float) -> float:
    if x == 0 or math.isnan(x):
        return math.nan
    return math.copysign(math.inf, x)


def divide(a: Number, b: Number) -> Number:
    """Divide like C complex division: a zero divisor gives infinities or NaN, not an exception."""
    if b == 0:
        return complex(_div_by_zero(a.real), _div_by_zero(a.imag))
    return a / b


def power(a: Number, b: Number) -> Number:
    """Raise a to b; a real base equal to e goes through exp() for accuracy."""
    if is_real(a) and a.real == math.e:
        return _checked("exp", cmath.exp, b)
    return _checked("pow", lambda x, y: x ** y, a, b)


def _checked(name: str, func: Callable[..., Number], *args: Number) -> Number:
    try:
        return complex(func(*args))
    except (ArithmeticError, ValueError) as e:
        logger.debug(f"{name}{args} is undefined: {e}")
        return NAN


def guarded(func: Callable[..., Number], name: Optional[str] = None) -> Callable[..., Number]:
    """Wrap a numeric callable so domain and overflow errors produce NAN."""
    label = name or getattr(func, "__name__", "function")

    @functools.wraps(func)
    def wrapper(*args: Number) -> Number:
        return _checked(label, func, *args)

    return wrapper


def _format_component(x: float, precision: Optional[int]) -> str:
    if precision is not None:
        return format(x, f".{precision}g")
    if math.isinf(x):
        return ("-" if x < 0 else "") + _OVERFLOW_DIGITS
    if math.isfinite(x) and x == math.floor(x):
        return str(int(x))
    return repr(x)


def format_number(n: Number, precision: Optional[int] = None) -> str:
    """Render a number as text: ``3``, ``2i``, ``i``, ``1 + 2i``.

    With ``precision`` set, components use that many significant digits;
    otherwise integral values print as plain digit runs (infinity as the
    first power of ten that overflows) and everything else prints exactly,
    so the text of a parsed literal reads back to the same value.
    """
    n = complex(n)
    if is_nan(n):
        return "nan"
    if n.imag == 0:
        return _format_component(n.real, precision)
    text = ""
    if n.real != 0:
        text = _format_component(n.real, precision) + " + "
    if n.imag != 1:
        text += _format_component(n.imag, precision)
    return text + "i"


def factorial(n: Number, staircase: bool = False) -> Number:
    """Product 1 * 2 * ... * n as a real number.

    By default only non-negative integral reals have a factorial; anything
    else is NAN. With ``staircase`` the product runs while ``i <= Re(n)``,
    so fractional operands use their floor and negative ones give 1.
    """
    bound = n.real
    if not math.isfinite(bound):
        logger.debug(f"factorial of {n} is undefined")
        return NAN
    if not staircase and (n.imag != 0 or bound < 0 or bound != math.floor(bound)):
        logger.debug(f"factorial of {n} is undefined")
        return NAN
    y = 1.0
    i = 1.0
    while i <= bound:
        y *= i
        if math.isinf(y):
            break
        i += 1
    return complex(y, 0.0)
