import cmath
import math

import pytest

from cmathcalc.number import NAN, divide, factorial, format_number, guarded, is_nan, is_real, is_undefined, power


@pytest.mark.parametrize("value, text", [
    (complex(3), "3"),
    (complex(-3), "-3"),
    (complex(2.5), "2.5"),
    (complex(0.1 + 0.2), "0.30000000000000004"),
    (complex(1e20), "100000000000000000000"),
    (complex(2.0 ** 60), "1152921504606846976"),
    (complex(1, 2), "1 + 2i"),
    (complex(0, 1), "i"),
    (complex(0, 2), "2i"),
    (complex(0, -1), "-1i"),
    (complex(3, -4), "3 + -4i"),
    (complex(math.inf, 0), "1" + "0" * 309),
    (complex(-math.inf, 0), "-1" + "0" * 309),
    (NAN, "nan"),
    (complex(1, math.nan), "nan"),
])
def test_format_number(value, text):
    assert format_number(value) == text


def test_format_number_with_precision():
    assert format_number(complex(math.pi), 6) == "3.14159"
    assert format_number(complex(math.e, math.pi), 3) == "2.72 + 3.14i"
    assert format_number(complex(120), 6) == "120"
    assert format_number(complex(math.inf), 6) == "inf"


def test_is_nan_and_is_real():
    assert is_nan(NAN)
    assert is_nan(complex(math.nan, 0))
    assert not is_nan(complex(math.inf, 0))
    assert is_real(complex(2, 0))
    assert not is_real(complex(2, 1))


def test_is_undefined_follows_magnitude():
    assert is_undefined(NAN)
    assert is_undefined(complex(math.nan, 0))
    assert not is_undefined(complex(2, 0))
    # an infinite component wins over a NaN one
    assert not is_undefined(complex(math.inf, math.nan))
    assert not is_undefined(divide(complex(1), complex(0)))


def test_divide():
    assert divide(complex(1), complex(4)) == 0.25
    assert divide(complex(1, 1), complex(0, 1)) == complex(1, -1)
    zero = divide(complex(2, -3), complex(0))
    assert zero.real == math.inf
    assert zero.imag == -math.inf
    assert is_nan(divide(complex(0), complex(0)))


def test_power():
    assert power(complex(2), complex(9)) == 512
    assert power(complex(math.e), complex(0, math.pi)) == cmath.exp(complex(0, math.pi))
    # a complex base near e is not special-cased
    assert power(complex(math.e, 1), complex(2)) == complex(math.e, 1) ** 2
    assert is_nan(power(complex(0), complex(-1)))
    assert is_nan(power(complex(10), complex(400)))


def test_factorial():
    assert factorial(complex(0)) == 1
    assert factorial(complex(5)) == 120
    assert factorial(complex(20)) == math.factorial(20)
    assert is_nan(factorial(complex(-1)))
    assert is_nan(factorial(complex(2.5)))
    assert is_nan(factorial(complex(2, 1)))
    assert factorial(complex(2.5), staircase=True) == 2
    assert factorial(complex(-1), staircase=True) == 1
    assert factorial(complex(2, 1), staircase=True) == 2
    assert factorial(complex(1e300)).real == math.inf


def test_guarded_maps_errors_to_nan():
    log = guarded(cmath.log)
    assert log(complex(1)) == 0
    assert is_nan(log(complex(0)))
    assert is_nan(guarded(cmath.exp)(complex(1000)))
    assert log.__name__ == "log"
