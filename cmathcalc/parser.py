# parser.py
"""Recursive-descent parser for the expression language.

Grammar, loosest binding first::

    expr        := relExpr
    relExpr     := addExpr ( (':=' | '=' | '<') addExpr )*
    addExpr     := mulExpr ( ('+' | '-') mulExpr )*
    mulExpr     := facExpr ( ('*' | '/') facExpr )*
    facExpr     := powExpr ( '!' )*
    powExpr     := primaryExpr ( '^' powExpr )?
    primaryExpr := '(' expr ')'
                 | '-' primaryExpr
                 | NUMBER
                 | FUNCTION [ '^' primaryExpr ] ( '(' expr (',' expr)* ')' | expr (',' expr)* )
                 | SYMBOL

An identifier is a FUNCTION when the environment handed to the parser
binds it to a function definition. Without parentheses a call takes the
rest of the expression as its argument list, so ``sin x + 1`` is
``sin(x + 1)``. The parser looks one token ahead and never backtracks.
"""

from __future__ import annotations

import logging
from typing import Dict, List, Union

from .environment import Environment, FunctionDef
from .errors import UnexpectedEof, UnexpectedToken, UnknownSymbol
from .expr import BinaryKind, BinaryOp, Call, Expr, Factorial, Negate, NumberLiteral, SymbolRef
from .lexer import Token, Tokenizer, TokenType

logger = logging.getLogger(__name__)

_RELATION_OPS: Dict[str, BinaryKind] = {
    TokenType.DEFINE: BinaryKind.DEFINE,
    TokenType.EQU: BinaryKind.EQUAL,
    TokenType.LESS: BinaryKind.LESS,
}

_ADDITION_OPS: Dict[str, BinaryKind] = {
    TokenType.PLUS: BinaryKind.ADD,
    TokenType.MINUS: BinaryKind.SUB,
}

_MULTIPLICATION_OPS: Dict[str, BinaryKind] = {
    TokenType.MUL: BinaryKind.MUL,
    TokenType.DIV: BinaryKind.DIV,
}


class Parser:
    """Builds an AST from expression text, consulting an environment to recognize function names."""

    def __init__(self, text: Union[str, bytes], environment: Environment):
        self.tokens = Tokenizer(text)
        self.environment = environment
        self.strict = environment.settings.strict_symbols
        self.tokens.next()

    def _current(self) -> Token:
        return self.tokens.current

    def _advance(self) -> Token:
        tok = self.tokens.current
        self.tokens.next()
        return tok

    def _unexpected(self, tok: Token) -> UnexpectedToken:
        if tok.type == TokenType.EOF:
            return UnexpectedEof("Unexpected end of expression", tok.pos)
        return UnexpectedToken(f"Unexpected token {tok.value!r}", tok.pos)

    def _expect(self, typ: str) -> Token:
        tok = self._current()
        if tok.type != typ:
            raise self._unexpected(tok)
        return self._advance()

    def parse(self) -> Expr:
        node = self.expr()
        if self._current().type != TokenType.EOF:
            raise self._unexpected(self._current())
        logger.debug(f"Parsed {self.tokens.text!r} as {node!r}")
        return node

    def expr(self) -> Expr:
        return self.rel_expr()

    def _binary_chain(self, operand, ops: Dict[str, BinaryKind]) -> Expr:
        """Left-associative sequence of operands joined by any of ``ops``."""
        left = operand()
        while self._current().type in ops:
            kind = ops[self._advance().type]
            left = BinaryOp(kind, left, operand())
        return left

    def rel_expr(self) -> Expr:
        return self._binary_chain(self.add_expr, _RELATION_OPS)

    def add_expr(self) -> Expr:
        return self._binary_chain(self.mul_expr, _ADDITION_OPS)

    def mul_expr(self) -> Expr:
        return self._binary_chain(self.fac_expr, _MULTIPLICATION_OPS)

    def fac_expr(self) -> Expr:
        node = self.pow_expr()
        while self._current().type == TokenType.FAC:
            self._advance()
            node = Factorial(node)
        return node

    def pow_expr(self) -> Expr:
        base = self.primary_expr()
        if self._current().type == TokenType.POW:
            self._advance()
            # right-associative: 2^3^2 == 2^(3^2)
            return BinaryOp(BinaryKind.POW, base, self.pow_expr())
        return base

    def primary_expr(self) -> Expr:
        tok = self._current()
        if tok.type == TokenType.RND_OPEN:
            self._advance()
            node = self.expr()
            self._expect(TokenType.RND_CLOSE)
            return node
        if tok.type == TokenType.MINUS:
            self._advance()
            return Negate(self.primary_expr())
        if tok.type == TokenType.NUMBER:
            self._advance()
            return NumberLiteral(complex(tok.value))
        if tok.type == TokenType.SYMBOL:
            self._advance()
            definition = self.environment.lookup(tok.value)
            if isinstance(definition, FunctionDef):
                return self._call(tok.value, definition)
            if (definition is None and self.strict
                    and self._current().type != TokenType.DEFINE):
                raise UnknownSymbol(tok.value, tok.pos)
            return SymbolRef(tok.value)
        raise self._unexpected(tok)

    def _call(self, name: str, definition: FunctionDef) -> Expr:
        exponent = None
        if self._current().type == TokenType.POW:
            # sin^2(x) squares the call's result
            self._advance()
            exponent = self.primary_expr()
        if self._current().type == TokenType.RND_OPEN:
            self._advance()
            args = self._arguments()
            self._expect(TokenType.RND_CLOSE)
        else:
            args = self._arguments()
        node: Expr = Call(name, definition, tuple(args))
        if exponent is not None:
            node = BinaryOp(BinaryKind.POW, node, exponent)
        return node

    def _arguments(self) -> List[Expr]:
        args = [self.expr()]
        while self._current().type == TokenType.COMMA:
            self._advance()
            args.append(self.expr())
        return args


def parse(expression: Union[str, bytes], environment: Environment) -> Expr:
    """Parse ``expression`` against ``environment``; raises a ParseError subclass on failure."""
    return Parser(expression, environment).parse()
