"""Source reading for Flint: tokens, lexer, syntax tree and parser."""
