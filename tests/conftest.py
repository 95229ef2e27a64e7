"""
Shared fixtures for interpreter tests
"""

import io

import pytest

from treelox.lox import Lox
from treelox.parser import Parser
from treelox.scanner import Scanner


def parse(source):
    return Parser(Scanner(source).scan_tokens()).parse()


def parse_expression(source):
    return Parser(Scanner(source).scan_tokens()).parse_expression()


class Session:
    """A driver wired to in-memory output and error streams"""

    def __init__(self):
        self.out = io.StringIO()
        self.err = io.StringIO()
        self.lox = Lox(out=self.out, err=self.err)

    def run(self, source, repl=False):
        self.lox.run(source, repl=repl)
        return self

    @property
    def output(self):
        return self.out.getvalue()

    @property
    def errors(self):
        return self.err.getvalue()

    @property
    def lines(self):
        return self.output.splitlines()


@pytest.fixture
def session():
    """Provide a fresh driver for each test"""
    return Session()
