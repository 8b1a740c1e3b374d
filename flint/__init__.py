# Flint: a small statically-typed scripting language.
#
# Pipeline: reader (lexer -> parser -> AST) -> evaluation (tree walker over a
# scope chain). The Interpreter in flint.interpreter ties the stages together.
#
# The package logger stays silent unless the host application configures
# logging (the CLI does, from FLINT_LOG_LEVEL or --log-level).

import logging

__version__ = "0.1.0"

logging.getLogger(__name__).addHandler(logging.NullHandler())
