"""Complex-number expression language: tokenizer, parser, AST and evaluation environment."""

from .config import EvaluationSettings
from .environment import (
    ConstantDef,
    CustomFunctionDef,
    Definition,
    Environment,
    FunctionDef,
    NativeFunction2Def,
    NativeFunctionDef,
)
from .errors import (
    ExprError,
    InvalidDefinitionTarget,
    ParseError,
    UnexpectedCharacter,
    UnexpectedEof,
    UnexpectedToken,
    UnknownSymbol,
)
from .expr import BinaryKind, BinaryOp, Call, Expr, Factorial, Negate, NumberLiteral, Precedence, SymbolRef
from .lexer import Token, Tokenizer, TokenType, tokenize
from .number import NAN, Number, format_number, is_nan
from .parser import Parser, parse
from .prelude import inject_standard_symbols, standard_environment
from .session import Outcome, dump_symbols, execute

__version__ = "0.1.0"
