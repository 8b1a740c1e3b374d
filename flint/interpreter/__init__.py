from __future__ import annotations

import logging
from typing import TextIO

from flint.builtin.env_builtin import register
from flint.errors import IllegalControlFlow, ParseError, RecursionDepthExceeded
from flint.evaluation.evaluator import Evaluator
from flint.reader.parser import Parser
from flint.reader.lexer import tokenize
from flint.reader.syntax import Block
from flint.types.environment import Environment
from flint.types.signal import Break, Return

logger = logging.getLogger(__name__)


class Interpreter:
    """
    Orchestrates reading and evaluating Flint programs.

    Each instance owns its root Environment, populated with a fresh set of
    builtins bound to the given streams (sys.stdin/sys.stdout by default),
    so separate instances never observe each other's state.
    """

    def __init__(self, stdin: TextIO | None = None, stdout: TextIO | None = None):
        self.env: Environment = Environment()
        register(self.env, stdin, stdout)
        self.evaluator = Evaluator(self.env)

    @staticmethod
    def parse(code: str) -> Block:
        tokens = tokenize(code)
        try:
            return Parser(tokens).parse()
        except RecursionError:
            raise ParseError("Program nests too deeply to parse") from None

    def interpret(self, program: Block) -> None:
        """Run a parsed program. A return or break reaching the top level is an error."""
        logger.debug("running program of %d statements", len(program.statements))
        try:
            signal = self.evaluator.execute(program)
        except RecursionError:
            raise RecursionDepthExceeded("Program nests too deeply to run") from None
        if isinstance(signal, Return):
            raise IllegalControlFlow("Cannot return from outside a function")
        if isinstance(signal, Break):
            raise IllegalControlFlow("Cannot break from outside a loop")
        logger.debug("program finished")

    def eval(self, code: str) -> None:
        """Lex, parse and run `code`. The first error raised anywhere aborts the run."""
        self.interpret(self.parse(code))
