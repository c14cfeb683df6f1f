import logging
import math

import pytest

from cmathcalc.errors import ParseError, UnexpectedEof
from cmathcalc.expr import BinaryKind
from cmathcalc.number import is_nan
from cmathcalc.session import DEFINE, EVALUATE, UNDEFINE, dump_symbols, execute, visible_bindings


def test_define_then_lookup(env):
    outcome = execute("a := 3", env)
    assert outcome.action == DEFINE
    assert outcome.value == 3
    assert outcome.expr.kind is BinaryKind.DEFINE
    outcome = execute("a", env)
    assert outcome.action == EVALUATE
    assert outcome.value == 3


def test_define_nan_undefines(env):
    execute("a := 3", env)
    outcome = execute("a := nan", env)
    assert outcome.action == UNDEFINE
    assert "a" not in env
    assert env.lookup("a") is None
    assert is_nan(execute("a", env).value)


def test_define_uses_previous_value(env):
    execute("n := 5", env)
    execute("n := n + 1", env)
    assert execute("n!", env).value == 720


def test_define_with_unresolved_right_side_undefines(env):
    execute("a := 1", env)
    assert execute("a := nosuch", env).action == UNDEFINE
    assert "a" not in env


def test_redefinition_is_seen_by_parsed_trees(env):
    execute("r := 2", env)
    execute("area := π * r^2", env)
    execute("r := 3", env)
    # area was computed eagerly, r is resolved on demand
    assert execute("area", env).value == pytest.approx(4 * 3.141592653589793)
    assert execute("π * r^2", env).value == pytest.approx(9 * 3.141592653589793)


def test_describe(env):
    assert execute("1+2", env).describe() == "1 + 2 = 3"
    assert execute("a := 3", env).describe() == "define a := 3"
    assert execute("a := nan", env).describe() == "undefine a := nan"
    assert execute("e^(i*π) + 1", env).describe() == "e ^ (i * π) + 1 = 1.22465e-16i"
    assert execute("1 < 0", env).describe() == "1 < 0 = nan"
    assert execute("1/3", env).describe(precision=3) == "1 / 3 = 0.333"


def test_describe_uses_environment_precision(make_env):
    env = make_env(precision=3)
    assert execute("1/3", env).describe() == "1 / 3 = 0.333"
    assert execute("1/3", env).describe(precision=5) == "1 / 3 = 0.33333"


def test_define_infinite_value_binds(env):
    outcome = execute("a := 1/0", env)
    assert outcome.action == DEFINE
    assert "a" in env
    assert execute("a", env).value.real == math.inf


def test_only_top_level_definition_binds(env):
    outcome = execute("(a := 1) + 1", env)
    assert outcome.action == EVALUATE
    assert outcome.value == 1
    assert "a" not in env


def test_parse_errors_propagate(env):
    with pytest.raises(UnexpectedEof):
        execute("1 +", env)
    with pytest.raises(ParseError):
        execute("2 := 3", env)
    assert "2" not in env


def test_define_is_logged(env, caplog):
    with caplog.at_level(logging.INFO, logger="cmathcalc.session"):
        execute("a := 2", env)
        execute("a := nan", env)
    assert "define a = 2" in caplog.text
    assert "undefine a" in caplog.text


def test_dump_symbols_includes_outer_scopes(env):
    execute("a := 1", env)
    inner = env.child()
    inner.define_constant("a", 2)
    inner.define_constant("zz", 3)
    lines = dump_symbols(inner)
    assert "a = 2" in lines
    assert "a = 1" not in lines
    assert "zz = 3" in lines
    assert "sin(x) = native" in lines
    assert list(visible_bindings(inner)) == sorted(visible_bindings(inner))
