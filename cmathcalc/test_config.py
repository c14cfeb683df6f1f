import pytest
from pydantic import ValidationError

from cmathcalc.config import DEFAULT_SETTINGS, EvaluationSettings


def test_defaults():
    settings = EvaluationSettings()
    assert settings.unresolved_symbol == "nan"
    assert settings.factorial == "strict"
    assert settings.strict_symbols is False
    assert settings.precision == 6
    assert settings == DEFAULT_SETTINGS


def test_from_env_reads_prefixed_variables():
    settings = EvaluationSettings.from_env({
        "CMATHCALC_UNRESOLVED_SYMBOL": "zero",
        "CMATHCALC_FACTORIAL": "staircase",
        "CMATHCALC_STRICT_SYMBOLS": "true",
        "CMATHCALC_PRECISION": " 10 ",
        "UNRELATED": "ignored",
    })
    assert settings.unresolved_symbol == "zero"
    assert settings.factorial == "staircase"
    assert settings.strict_symbols is True
    assert settings.precision == 10


def test_from_env_without_variables_gives_defaults():
    assert EvaluationSettings.from_env({}) == DEFAULT_SETTINGS


def test_from_env_uses_process_environment(monkeypatch):
    monkeypatch.setenv("CMATHCALC_PRECISION", "12")
    assert EvaluationSettings.from_env().precision == 12


@pytest.mark.parametrize("kwargs", [
    {"unresolved_symbol": "one"},
    {"factorial": "gamma"},
    {"precision": 0},
    {"precision": 18},
])
def test_invalid_values_rejected(kwargs):
    with pytest.raises(ValidationError):
        EvaluationSettings(**kwargs)


def test_invalid_env_value_rejected():
    with pytest.raises(ValidationError):
        EvaluationSettings.from_env({"CMATHCALC_FACTORIAL": "gamma"})


def test_settings_are_frozen():
    settings = EvaluationSettings()
    with pytest.raises(ValidationError):
        settings.precision = 3
