from enum import Enum, auto
from typing import Final

from treelox.tokens import Token, TokenType as TT


class RuntimeErrorKind(Enum):
    UNDEFINED_VARIABLE = auto()
    TYPE_ERROR = auto()
    DIVISION_BY_ZERO = auto()
    STACK_OVERFLOW = auto()


class LoxRuntimeError(Exception):
    token: Final[Token | None]
    kind: Final[RuntimeErrorKind]

    def __init__(self, token: Token | None, message: str, kind: RuntimeErrorKind) -> None:
        super().__init__(message)
        self.token = token
        self.kind = kind

    @property
    def message(self) -> str:
        return str(self)

    @property
    def line(self) -> int | None:
        return self.token.line if self.token is not None else None


class ParseError(Exception):
    line: Final[int]
    where: Final[str]

    def __init__(self, line: int, where: str, message: str) -> None:
        super().__init__(message)
        self.line = line
        self.where = where

    @classmethod
    def at_token(cls, token: Token, message: str) -> 'ParseError':
        if token.type == TT.EOF:
            return cls(token.line, " at end", message)
        elif token.type == TT.ERROR:
            return cls(token.line, "", message)
        return cls(token.line, f" at '{token.lexeme}'", message)

    @property
    def message(self) -> str:
        return str(self)

    def report(self) -> str:
        return f"[line {self.line}] Error{self.where}: {self.message}"
