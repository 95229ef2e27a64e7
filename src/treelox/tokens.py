from dataclasses import dataclass
from enum import Enum
from typing import Any


class TokenType(Enum):
    LEFT_PAREN = "("
    RIGHT_PAREN = ")"
    LEFT_BRACE = "{"
    RIGHT_BRACE = "}"
    COMMA = ","
    MINUS = "-"
    PLUS = "+"
    SEMICOLON = ";"
    SLASH = "/"
    STAR = "*"
    QUESTION = "?"
    COLON = ":"

    BANG = "!"
    BANG_EQUAL = "!="
    EQUAL = "="
    EQUAL_EQUAL = "=="
    GREATER = ">"
    GREATER_EQUAL = ">="
    LESS = "<"
    LESS_EQUAL = "<="

    IDENTIFIER = "<identifier>"
    STRING = "<string>"
    NUMBER = "<number>"

    FALSE = "false"
    NIL = "nil"
    PRINT = "print"
    TRUE = "true"
    VAR = "var"

    # Reserved words with no grammar of their own
    AND = "and"
    CLASS = "class"
    ELSE = "else"
    FOR = "for"
    FUN = "fun"
    IF = "if"
    OR = "or"
    RETURN = "return"
    SUPER = "super"
    THIS = "this"
    WHILE = "while"

    ERROR = "<error>"
    EOF = "<eof>"

_TT = TokenType
class TokenGroup:
    Comparison = {_TT.GREATER, _TT.GREATER_EQUAL, _TT.LESS, _TT.LESS_EQUAL}
    Equality = {_TT.EQUAL_EQUAL, _TT.BANG_EQUAL}
    Factor = {_TT.STAR, _TT.SLASH}
    Term = {_TT.PLUS, _TT.MINUS}
    Keywords = {tt.value: tt for tt in _TT if isinstance(tt.value, str) and tt.value.isalpha()}
    StatementStart = {
        _TT.VAR, _TT.PRINT, _TT.LEFT_BRACE,
        _TT.CLASS, _TT.FUN, _TT.FOR, _TT.IF, _TT.WHILE, _TT.RETURN,
    }


@dataclass(frozen=True)
class Token:
    type: TokenType
    lexeme: str
    line: int
    literal: Any = None

    def __str__(self) -> str:
        return f"{self.type} {self.lexeme} {self.literal}"
