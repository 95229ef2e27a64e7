from typing import TypeAlias
from dataclasses import dataclass

from treelox.tokens import Token
from treelox.values import Value


@dataclass(frozen=True)
class Binary:
    left: 'Expr'
    operator: Token
    right: 'Expr'

@dataclass(frozen=True)
class Grouping:
    expression: 'Expr'

@dataclass(frozen=True)
class Literal:
    value: Value

@dataclass(frozen=True)
class Unary:
    operator: Token
    right: 'Expr'

@dataclass(frozen=True)
class Conditional:
    condition: 'Expr'
    on_true: 'Expr'
    on_false: 'Expr'

@dataclass(frozen=True)
class Comma:
    left: 'Expr'
    operator: Token
    right: 'Expr'

@dataclass(frozen=True)
class Variable:
    name: Token

@dataclass(frozen=True)
class Assign:
    name: Token
    value: 'Expr'


Expr: TypeAlias = Binary | Grouping | Literal | Unary | Conditional | Comma | Variable | Assign
