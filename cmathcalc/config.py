# config.py
"""Evaluation settings.

The settings live on the root Environment and are inherited by every child
scope created for function calls.
"""

import os
from typing import Literal, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field

ENV_PREFIX = "CMATHCALC_"


class EvaluationSettings(BaseModel):
    """Knobs for the behaviors the expression language leaves open."""

    model_config = ConfigDict(frozen=True)

    # Value of a symbol that resolves to nothing at evaluation time.
    unresolved_symbol: Literal["nan", "zero"] = "nan"
    # strict: NaN unless the operand is a non-negative integer.
    # staircase: product 1 * 2 * ... while i <= Re(n).
    factorial: Literal["strict", "staircase"] = "strict"
    strict_symbols: bool = False
    precision: int = Field(6, ge=1, le=17, description="Significant digits when printing results")

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "EvaluationSettings":
        """Build settings from CMATHCALC_* variables, falling back to the defaults."""
        if environ is None:
            environ = os.environ
        values = {}
        for name in cls.model_fields:
            raw = environ.get(ENV_PREFIX + name.upper())
            if raw is not None:
                values[name] = raw.strip()
        return cls(**values)


DEFAULT_SETTINGS = EvaluationSettings()
