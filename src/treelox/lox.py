import logging
import os
import sys
from typing import TextIO

from treelox import stmt as st
from treelox.errors import LoxRuntimeError, ParseError
from treelox.interpreter import Interpreter
from treelox.parser import Parser
from treelox.scanner import Scanner

logger = logging.getLogger(__name__)


class Lox:
    """Runs source units against one interpreter and tracks error state.

    The interpreter, and with it the global environment, lives as long as
    this object: every ``run`` of a REPL session sees earlier definitions.
    """

    def __init__(self, out: TextIO | None = None, err: TextIO | None = None) -> None:
        self._out = out
        self._err = err
        self.interpreter = Interpreter(out)
        self.had_error = False
        self.had_runtime_error = False

    @property
    def out(self) -> TextIO:
        return self._out if self._out is not None else sys.stdout

    @property
    def err(self) -> TextIO:
        return self._err if self._err is not None else sys.stderr

    def run_file(self, path: str | os.PathLike) -> None:
        with open(path, "r", encoding="utf-8") as file:
            prog = file.read()
        self.run(prog)

    def run_prompt(self, stdin: TextIO | None = None) -> None:
        stdin = stdin if stdin is not None else sys.stdin
        while True:
            print("> ", end="", file=self.out, flush=True)
            line = stdin.readline()
            if not line or line.strip() == "quit":
                break

            self.run(line, repl=True)
            self.had_error = False
            self.had_runtime_error = False

        print("Bye.", file=self.out)

    def run(self, source: str, repl: bool = False) -> None:
        tokens = Scanner(source).scan_tokens()

        if repl:
            expression = Parser(tokens).parse_expression()
            if expression is not None:
                logger.debug("Evaluating bare expression in REPL mode")
                self.execute([st.Print(expression)])
                return

        result = Parser(tokens).parse()
        if not result.ok:
            for error in result.errors:
                self.parse_error(error)
            return

        self.execute(result.statements)

    def execute(self, statements: list[st.Stmt]) -> None:
        try:
            self.interpreter.interpret(statements)
        except LoxRuntimeError as error:
            self.runtime_error(error)

    def parse_error(self, error: ParseError) -> None:
        print(error.report(), file=self.err)
        self.had_error = True

    def runtime_error(self, error: LoxRuntimeError) -> None:
        logger.debug("Execution halted by %s", error.kind.name)
        if error.token is not None:
            print(f"{error}\n[line {error.token.line}]", file=self.err)
        else:
            print(str(error), file=self.err)
        self.had_runtime_error = True
