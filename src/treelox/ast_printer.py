import math
from decimal import Decimal
from typing import assert_never

from treelox import expr as ex
from treelox import stmt as st
from treelox.values import Value, stringify


class AstPrinter:
    """Renders an expression as a fully parenthesized prefix form."""

    def print(self, expr: ex.Expr) -> str:
        match expr:
            case ex.Binary(left, operator, right):
                return self.parenthesize(operator.lexeme, left, right)
            case ex.Comma(left, operator, right):
                return self.parenthesize(operator.lexeme, left, right)
            case ex.Grouping(expression):
                return self.parenthesize("group", expression)
            case ex.Literal(value):
                return stringify(value)
            case ex.Unary(operator, right):
                return self.parenthesize(operator.lexeme, right)
            case ex.Conditional(condition, on_true, on_false):
                return self.parenthesize("?:", condition, on_true, on_false)
            case ex.Variable(name):
                return name.lexeme
            case ex.Assign(name, value):
                return f"(= {name.lexeme} {self.print(value)})"
            case _:
                assert_never(expr)

    def parenthesize(self, name: str, *exprs: ex.Expr) -> str:
        content = " ".join([self.print(expr) for expr in exprs])

        return f"({name} {content})"


class SourcePrinter:
    """Renders AST nodes back to source text that parses to an equal tree.

    Parentheses only come from Grouping nodes; the parser already encoded
    precedence in the shape of the tree.
    """

    def print(self, node: ex.Expr | st.Stmt | list[st.Stmt]) -> str:
        if isinstance(node, list):
            return "\n".join(self.statement(stmt) for stmt in node)
        if isinstance(node, st.Expression | st.Print | st.Var | st.Block):
            return self.statement(node)
        return self.expression(node)

    def statement(self, stmt: st.Stmt) -> str:
        match stmt:
            case st.Expression(expression):
                return f"{self.expression(expression)};"
            case st.Print(expression):
                return f"print {self.expression(expression)};"
            case st.Var(name, None):
                return f"var {name.lexeme};"
            case st.Var(name, initializer):
                return f"var {name.lexeme} = {self.expression(initializer)};"
            case st.Block(()):
                return "{ }"
            case st.Block(statements):
                return "{ " + " ".join(self.statement(s) for s in statements) + " }"
            case _:
                assert_never(stmt)

    def expression(self, expr: ex.Expr) -> str:
        match expr:
            case ex.Binary(left, operator, right):
                return f"{self.expression(left)} {operator.lexeme} {self.expression(right)}"
            case ex.Comma(left, _, right):
                return f"{self.expression(left)}, {self.expression(right)}"
            case ex.Grouping(expression):
                return f"({self.expression(expression)})"
            case ex.Literal(value):
                return self.literal(value)
            case ex.Unary(operator, right):
                return f"{operator.lexeme}{self.expression(right)}"
            case ex.Conditional(condition, on_true, on_false):
                return (f"{self.expression(condition)} ? {self.expression(on_true)}"
                        f" : {self.expression(on_false)}")
            case ex.Variable(name):
                return name.lexeme
            case ex.Assign(name, value):
                return f"{name.lexeme} = {self.expression(value)}"
            case _:
                assert_never(expr)

    @staticmethod
    def literal(value: Value) -> str:
        match value:
            case str(text):
                return f'"{text}"'
            case float(num) if math.isinf(num):
                # Only an overflowing literal produces inf; print one that overflows too
                return "1" + "0" * 309
            case float(num) if not num.is_integer():
                # Number literals have no exponent syntax
                return format(Decimal(repr(num)), "f")
            case _:
                return stringify(value)
