from typing import Self

from treelox.errors import LoxRuntimeError, RuntimeErrorKind
from treelox.tokens import Token
from treelox.values import Value

class Environment:
    values: dict[str, Value]
    enclosing: Self | None

    def __init__(self, enclosing: Self | None = None) -> None:
        self.values = {}
        self.enclosing = enclosing

    def child(self) -> 'Environment':
        return Environment(self)

    def define(self, name: str, value: Value) -> None:
        self.values[name] = value

    def get(self, name: Token) -> Value:
        environment = self
        while environment is not None:
            if name.lexeme in environment.values:
                return environment.values[name.lexeme]
            environment = environment.enclosing

        raise self.undefined(name)

    def assign(self, name: Token, value: Value) -> None:
        environment = self
        while environment is not None:
            if name.lexeme in environment.values:
                environment.values[name.lexeme] = value
                return
            environment = environment.enclosing

        raise self.undefined(name)

    @staticmethod
    def undefined(name: Token) -> LoxRuntimeError:
        return LoxRuntimeError(name, f"Undefined variable '{name.lexeme}'.",
                               RuntimeErrorKind.UNDEFINED_VARIABLE)
