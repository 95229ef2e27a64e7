import sys
from typing import Never, TextIO, assert_never

from treelox import expr as ex
from treelox import stmt as st
from treelox.environment import Environment
from treelox.errors import LoxRuntimeError, RuntimeErrorKind
from treelox.tokens import Token, TokenType as TT
from treelox.values import Value, is_equal, is_number, is_truthy, stringify


class Interpreter:
    """Tree-walking evaluator.

    Every ``evaluate``/``execute`` call receives the environment it runs in,
    so a block's scope lives exactly as long as the call executing it. Only
    the global environment outlives a single ``interpret`` call.
    """

    globals: Environment

    def __init__(self, out: TextIO | None = None) -> None:
        self.globals = Environment()
        self._out = out

    @property
    def out(self) -> TextIO:
        return self._out if self._out is not None else sys.stdout

    def interpret(self, statements: list[st.Stmt]) -> None:
        for statement in statements:
            try:
                self.execute(statement, self.globals)
            except RecursionError as error:
                raise LoxRuntimeError(None, "Expression nested too deeply to evaluate.",
                                      RuntimeErrorKind.STACK_OVERFLOW) from error

    def execute(self, stmt: st.Stmt, environment: Environment) -> None:
        match stmt:
            case st.Expression(expression):
                self.evaluate(expression, environment)
            case st.Print(expression):
                value = self.evaluate(expression, environment)
                print(stringify(value), file=self.out)
            case st.Var(name, initializer):
                value = None
                if initializer is not None:
                    value = self.evaluate(initializer, environment)

                environment.define(name.lexeme, value)
            case st.Block(statements):
                self.execute_block(statements, environment.child())
            case _:
                assert_never(stmt)

    def execute_block(self, statements: tuple[st.Stmt, ...], environment: Environment) -> None:
        for statement in statements:
            self.execute(statement, environment)

    def evaluate(self, expr: ex.Expr, environment: Environment) -> Value:
        match expr:
            case ex.Literal(value):
                return value
            case ex.Grouping(expression):
                return self.evaluate(expression, environment)
            case ex.Unary(operator, right):
                return self.unary(operator, self.evaluate(right, environment))
            case ex.Binary(left, operator, right):
                left_value = self.evaluate(left, environment)
                right_value = self.evaluate(right, environment)
                return self.binary(operator, left_value, right_value)
            case ex.Comma(left, _, right):
                self.evaluate(left, environment)
                return self.evaluate(right, environment)
            case ex.Conditional(condition, on_true, on_false):
                if is_truthy(self.evaluate(condition, environment)):
                    return self.evaluate(on_true, environment)
                else:
                    return self.evaluate(on_false, environment)
            case ex.Variable(name):
                return environment.get(name)
            case ex.Assign(name, value_expr):
                value = self.evaluate(value_expr, environment)
                environment.assign(name, value)
                return value
            case _:
                assert_never(expr)

    def unary(self, operator: Token, right: Value) -> Value:
        match operator.type:
            case TT.BANG:
                return not is_truthy(right)
            case TT.MINUS:
                self.check_number_operands(operator, right)
                return -right
            case _:
                self.unknown_operator(operator)

    def binary(self, operator: Token, left: Value, right: Value) -> Value:
        match operator.type:
            case TT.BANG_EQUAL:
                return not is_equal(left, right)
            case TT.EQUAL_EQUAL:
                return is_equal(left, right)
            case TT.PLUS:
                if is_number(left) and is_number(right):
                    return left + right
                elif isinstance(left, str) or isinstance(right, str):
                    return stringify(left) + stringify(right)
                raise LoxRuntimeError(operator,
                                      "Operands must be two numbers or include a string.",
                                      RuntimeErrorKind.TYPE_ERROR)

        self.check_number_operands(operator, left, right)

        match operator.type:
            case TT.GREATER:
                return left > right
            case TT.GREATER_EQUAL:
                return left >= right
            case TT.LESS:
                return left < right
            case TT.LESS_EQUAL:
                return left <= right
            case TT.MINUS:
                return left - right
            case TT.STAR:
                return left * right
            case TT.SLASH:
                if right == 0:
                    raise LoxRuntimeError(operator, "Division by zero.",
                                          RuntimeErrorKind.DIVISION_BY_ZERO)
                return left / right
            case _:
                self.unknown_operator(operator)

    def check_number_operands(self, operator: Token, *operands: Value) -> None:
        if not all(map(is_number, operands)):
            plural = "s" if len(operands) > 1 else ""
            verb = "be numbers" if len(operands) > 1 else "be a number"

            raise LoxRuntimeError(operator, f"Operand{plural} must {verb}.",
                                  RuntimeErrorKind.TYPE_ERROR)

    @staticmethod
    def unknown_operator(operator: Token) -> Never:
        raise ValueError(f"'{operator.lexeme}' is not an operator the interpreter knows")
