import logging
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Callable

from treelox import expr as ex
from treelox import stmt as st
from treelox.errors import ParseError
from treelox.tokens import Token, TokenType as TT, TokenGroup as TG

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ParseResult:
    statements: list[st.Stmt] = field(default_factory=list)
    errors: list[ParseError] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors


class Parser:
    """Recursive descent parser with one method per grammar rule.

    Syntax errors are collected in ``errors``. A ``ParseError`` raised inside
    a rule unwinds to the enclosing ``declaration()``, which synchronizes on
    the next statement boundary and carries on.
    """

    # Each re-entry into expression() costs about fifteen frames; stay well
    # inside the default recursion limit
    MAX_NESTING = 40

    def __init__(self, tokens: list[Token]) -> None:
        if not tokens or tokens[-1].type != TT.EOF:
            raise ValueError("Token list must end with an EOF token")
        self.tokens = tokens
        self.current = 0
        self.errors: list[ParseError] = []
        self.nesting = 0
        self.block_depth = 0

        self._previous = tokens[0]
        self.skip_error_tokens()

    def parse(self) -> ParseResult:
        statements: list[st.Stmt] = []
        while not self.at_end():
            decl = self.declaration()
            if decl is not None:
                statements.append(decl)

        logger.debug("Parsed %d statements with %d errors", len(statements), len(self.errors))
        return ParseResult(statements, self.errors)

    def parse_expression(self) -> ex.Expr | None:
        """Parse the whole input as one bare expression, or return None."""
        try:
            expr = self.expression()
            if not self.at_end():
                raise self.error(self.peek(), "Expected end of expression")
        except (ParseError, RecursionError):
            return None

        return None if self.errors else expr

    @contextmanager
    def nested(self):
        try:
            self.nesting += 1
            if self.nesting > self.MAX_NESTING:
                raise self.error(self.peek(), "Too much nesting")
            yield
        finally:
            self.nesting -= 1

    def declaration(self) -> st.Stmt | None:
        try:
            if self.match(TT.VAR):
                return self.var_declaration()

            return self.statement()
        except ParseError:
            self.synchronize()
            return None
        except RecursionError:
            self.error(self.peek(), "Too much nesting")
            self.synchronize()
            return None

    def var_declaration(self) -> st.Var:
        name = self.consume(TT.IDENTIFIER, "Expected variable name")

        initializer = None
        if self.match(TT.EQUAL):
            initializer = self.expression()

        self.consume(TT.SEMICOLON, "Expected ';' after variable declaration")
        return st.Var(name, initializer)

    def statement(self) -> st.Stmt:
        if self.match(TT.PRINT):
            return self.print_statement()
        if self.match(TT.LEFT_BRACE):
            return st.Block(self.block())

        return self.expression_statement()

    def print_statement(self) -> st.Print:
        value = self.expression()
        self.consume(TT.SEMICOLON, "Expected ';' after value")
        return st.Print(value)

    def expression_statement(self) -> st.Expression:
        expr = self.expression()
        self.consume(TT.SEMICOLON, "Expected ';' after expression")
        return st.Expression(expr)

    def block(self) -> tuple[st.Stmt, ...]:
        statements: list[st.Stmt] = []

        with self.nested():
            try:
                self.block_depth += 1
                while not self.check(TT.RIGHT_BRACE) and not self.at_end():
                    decl = self.declaration()
                    if decl is not None:
                        statements.append(decl)
            finally:
                self.block_depth -= 1

        self.consume(TT.RIGHT_BRACE, "Expected '}' after block")
        return tuple(statements)

    def expression(self) -> ex.Expr:
        with self.nested():
            return self.comma()

    def comma(self) -> ex.Expr:
        return self.handle_left_binary(self.assignment, TT.COMMA, expr_type=ex.Comma)

    def assignment(self) -> ex.Expr:
        expr = self.conditional()

        if self.match(TT.EQUAL):
            equals = self.previous()
            value = self.assignment()

            if isinstance(expr, ex.Variable):
                return ex.Assign(expr.name, value)

            self.error(equals, "Invalid assignment target")

        return expr

    def conditional(self) -> ex.Expr:
        condition = self.equality()

        if self.match(TT.QUESTION):
            on_true = self.expression()
            self.consume(TT.COLON, "Expected ':' after expression")
            on_false = self.conditional()
            return ex.Conditional(condition, on_true, on_false)

        return condition

    def equality(self) -> ex.Expr:
        return self.handle_left_binary(self.comparison, *TG.Equality)

    def comparison(self) -> ex.Expr:
        return self.handle_left_binary(self.term, *TG.Comparison)

    def term(self) -> ex.Expr:
        return self.handle_left_binary(self.factor, *TG.Term)

    def factor(self) -> ex.Expr:
        return self.handle_left_binary(self.unary, *TG.Factor)

    def unary(self) -> ex.Expr:
        if self.match(TT.BANG, TT.MINUS):
            operator = self.previous()
            right = self.unary()
            return ex.Unary(operator, right)

        return self.primary()

    def primary(self) -> ex.Expr:
        if self.match(TT.FALSE):
            return ex.Literal(False)
        elif self.match(TT.TRUE):
            return ex.Literal(True)
        elif self.match(TT.NIL):
            return ex.Literal(None)

        if self.match(TT.NUMBER, TT.STRING):
            return ex.Literal(self.previous().literal)

        if self.match(TT.IDENTIFIER):
            return ex.Variable(self.previous())

        if self.match(TT.LEFT_PAREN):
            expr = self.expression()
            self.consume(TT.RIGHT_PAREN, "Expected ')' after expression")
            return ex.Grouping(expr)

        # Error productions: a binary operator with no left operand
        for token_group, matcher in (
            (TG.Equality, self.comparison),
            (TG.Comparison, self.term),
            (TG.Term, self.factor),
            (TG.Factor, self.unary),
            ({TT.COMMA}, self.assignment),
        ):
            if self.match(*token_group):
                self.error(self.previous(), "Expected expression before operator")
                return matcher()

        raise self.error(self.peek(), "Expected expression")

    def handle_left_binary(
            self,
            matcher: Callable[[], ex.Expr],
            *token_list: TT,
            expr_type: type[ex.Binary | ex.Comma] = ex.Binary
            ) -> ex.Expr:
        expr = matcher()

        while self.match(*token_list):
            operator = self.previous()
            right = matcher()
            expr = expr_type(expr, operator, right)

        return expr

    def match(self, *types: TT) -> bool:
        for type in types:
            if self.check(type):
                self.advance()
                return True

        return False

    def consume(self, type: TT, message: str) -> Token:
        if self.check(type):
            return self.advance()

        raise self.error(self.peek(), message)

    def check(self, type: TT) -> bool:
        if self.at_end():
            return False

        return self.peek().type == type

    def advance(self) -> Token:
        if not self.at_end():
            self._previous = self.tokens[self.current]
            self.current += 1
            self.skip_error_tokens()

        return self.previous()

    def skip_error_tokens(self) -> None:
        while self.peek().type == TT.ERROR:
            token = self.peek()
            self.errors.append(ParseError.at_token(token, token.literal))
            self.current += 1

    def at_end(self) -> bool:
        return self.peek().type == TT.EOF

    def peek(self) -> Token:
        return self.tokens[self.current]

    def previous(self) -> Token:
        return self._previous

    def error(self, token: Token, message: str) -> ParseError:
        error = ParseError.at_token(token, message)
        self.errors.append(error)
        return error

    def synchronize(self) -> None:
        if not self.at_block_end():
            self.advance()

        while not self.at_end():
            if self.previous().type == TT.SEMICOLON:
                return

            if self.peek().type in TG.StatementStart or self.at_block_end():
                return

            self.advance()

    def at_block_end(self) -> bool:
        # Leave a block's "}" for block() to consume
        return self.block_depth > 0 and self.check(TT.RIGHT_BRACE)
