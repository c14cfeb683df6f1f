
import pytest

from cmathcalc.config import EvaluationSettings
from cmathcalc.prelude import standard_environment


@pytest.hookimpl(hookwrapper=True)
def pytest_runtest_makereport(item, call):
    outcome = yield
    report = outcome.get_result()
    if report.when == "call":
        print(f"TEST: {item.name} - {'PASSED' if report.passed else 'FAILED'}")


@pytest.fixture
def env():
    """A root scope with the standard constants and functions."""
    return standard_environment()


@pytest.fixture
def make_env():
    def _make(**settings):
        return standard_environment(EvaluationSettings(**settings))
    return _make
