from typing import TypeAlias
from dataclasses import dataclass

from treelox import expr as ex
from treelox.tokens import Token


@dataclass(frozen=True)
class Expression:
    expression: ex.Expr

@dataclass(frozen=True)
class Print:
    expression: ex.Expr

@dataclass(frozen=True)
class Var:
    name: Token
    initializer: ex.Expr | None = None

@dataclass(frozen=True)
class Block:
    statements: tuple['Stmt', ...]


Stmt: TypeAlias = Expression | Print | Var | Block
