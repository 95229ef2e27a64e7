"""
Parser tests: precedence, associativity and error recovery
"""

import pytest

from conftest import parse, parse_expression
from treelox import expr as ex
from treelox import stmt as st
from treelox.ast_printer import AstPrinter
from treelox.parser import Parser
from treelox.tokens import Token, TokenType as TT


def tree(source):
    """Prefix form of a single expression statement"""
    result = parse(source + ";")
    assert result.ok, [e.report() for e in result.errors]
    [statement] = result.statements
    return AstPrinter().print(statement.expression)


def messages(source):
    return [error.message for error in parse(source).errors]


class TestPrecedence:

    @pytest.mark.parametrize("source,expected", [
        ("1 + 2 * 3", "(+ 1 (* 2 3))"),
        ("1 - 2 - 3", "(- (- 1 2) 3)"),
        ("-1 * 2", "(* (- 1) 2)"),
        ("!!true", "(! (! true))"),
        ("1 < 2 == 3 >= 4", "(== (< 1 2) (>= 3 4))"),
        ("(1 + 2) * 3", "(* (group (+ 1 2)) 3)"),
        ("1, 2, 3", "(, (, 1 2) 3)"),
    ])
    def test_binary_operators(self, source, expected):
        assert tree(source) == expected

    def test_ternary_is_right_associative(self):
        assert tree("a ? b : c ? d : e") == "(?: a b (?: c d e))"

    def test_ternary_then_branch_allows_comma(self):
        assert tree("a ? b, c : d") == "(?: a (, b c) d)"

    def test_comma_binds_looser_than_ternary(self):
        assert tree("a ? b : c, d") == "(, (?: a b c) d)"

    def test_assignment_is_right_associative(self):
        assert tree("a = b = 1") == "(= a (= b 1))"

    def test_assignment_binds_tighter_than_comma(self):
        assert tree("a = 1, 2") == "(, (= a 1) 2)"


class TestStatements:

    def test_var_declaration_without_initializer(self):
        result = parse("var a;")
        assert result.ok
        [statement] = result.statements
        assert isinstance(statement, st.Var)
        assert statement.name.lexeme == "a"
        assert statement.initializer is None

    def test_block_holds_declarations(self):
        result = parse("{ var a = 1; print a; }")
        [block] = result.statements
        assert isinstance(block, st.Block)
        assert [type(s) for s in block.statements] == [st.Var, st.Print]

    def test_nodes_are_immutable(self):
        [statement] = parse("print 1;").statements
        with pytest.raises(AttributeError):
            statement.expression = ex.Literal(2.0)


class TestErrors:

    def test_missing_semicolon(self):
        result = parse("print 1")
        assert not result.ok
        assert result.statements == []
        [error] = result.errors
        assert error.report() == "[line 1] Error at end: Expected ';' after value"

    def test_invalid_assignment_target(self):
        assert messages("1 + a = 2;") == ["Invalid assignment target"]

    def test_two_independent_errors_are_both_reported(self):
        result = parse("print 1 +;\nvar = 2;\nprint 3;")
        assert [(e.line, e.message) for e in result.errors] == [
            (1, "Expected expression"),
            (2, "Expected variable name"),
        ]
        # The statement after the errors still parsed
        assert len(result.statements) == 1

    def test_errors_inside_blocks_recover(self):
        result = parse("{ print ; print 2; }\nprint 3 3;")
        assert [e.line for e in result.errors] == [1, 2]

    def test_operator_without_left_operand(self):
        assert messages("* 3;") == ["Expected expression before operator"]

    def test_missing_closing_paren(self):
        result = parse("print (1 + 2;")
        [error] = result.errors
        assert error.report() == "[line 1] Error at ';': Expected ')' after expression"

    def test_missing_ternary_colon(self):
        assert messages("true ? 1;") == ["Expected ':' after expression"]

    def test_reserved_word_is_rejected(self):
        assert messages("if;") == ["Expected expression"]

    def test_lexical_errors_become_parse_errors(self):
        result = parse("print 1 @ 2;\nprint \"open;")
        reports = [e.report() for e in result.errors]
        assert "[line 1] Error: Unexpected character `@`" in reports
        assert "[line 2] Error: Unterminated string" in reports

    def test_deep_nesting_is_an_error_not_a_crash(self):
        depth = 500
        result = parse("print " + "(" * depth + "1" + ")" * depth + ";")
        assert not result.ok
        assert "Too much nesting" in [e.message for e in result.errors]

    def test_long_ternary_chain_is_not_nesting(self):
        arms = " ".join(f"x == {i} ? {i} :" for i in range(60))
        result = parse(f"print {arms} -1;")
        assert result.ok, [e.report() for e in result.errors]

    def test_long_assignment_chain_is_not_nesting(self):
        result = parse("a = " * 60 + "1;")
        assert result.ok

    def test_stack_exhaustion_is_reported(self):
        result = parse("print " + "-" * 5000 + "1;\nprint 2;")
        assert [e.message for e in result.errors] == ["Too much nesting"]
        assert len(result.statements) == 1

    def test_missing_semicolon_before_block_end_is_one_error(self):
        result = parse("{ print 1 } print 2;")
        assert [e.report() for e in result.errors] == [
            "[line 1] Error at '}': Expected ';' after value",
        ]
        assert [type(s) for s in result.statements] == [st.Block, st.Print]

    def test_stray_closing_brace_at_top_level(self):
        result = parse("print 1; } print 2;")
        assert len(result.errors) == 1
        assert len(result.statements) == 2

    def test_tokens_must_end_with_eof(self):
        with pytest.raises(ValueError):
            Parser([Token(TT.NUMBER, "1", 1, 1.0)])


class TestBareExpression:

    def test_single_expression(self):
        expr = parse_expression("1 + 2")
        assert isinstance(expr, ex.Binary)

    @pytest.mark.parametrize("source", [
        "print 1;",
        "1 + 2;",
        "var a = 1",
        "1 2",
        "1 +",
        "",
    ])
    def test_anything_else_is_rejected(self, source):
        assert parse_expression(source) is None
