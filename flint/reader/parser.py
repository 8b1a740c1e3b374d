"""
  Flint Parser

- Recursive descent over the filtered token list produced by `tokenize`
- Binary expressions use precedence climbing (left-associative)
- Type annotations are resolved to type descriptors while parsing
- No error recovery: the first unexpected token raises ParseError
"""

from __future__ import annotations

import logging

from flint.errors import ParseError
from flint.reader.lexer import tokenize
from flint.reader.syntax import (
    ArrayLit,
    AssignStmt,
    Binary,
    Block,
    BreakStmt,
    Call,
    CallStmt,
    DeclareStmt,
    Expr,
    ForStmt,
    FuncDecl,
    IfClause,
    IfStmt,
    Literal,
    Param,
    ReturnStmt,
    Stmt,
    Unary,
    Var,
    WhileStmt,
)
from flint.reader.tokens import Token, TokenKind, precedence
from flint.types.type_symbol import VOID, TypeSymbol, array_type, function_type, scalar_type

logger = logging.getLogger(__name__)

DECLARATION_KEYWORDS = (TokenKind.LET, TokenKind.CONST, TokenKind.VAR)


class Parser:
    def __init__(self, tokens: list[Token]):
        if not tokens or tokens[-1].kind is not TokenKind.END_OF_FILE:
            raise ParseError("Token stream must end with an end-of-file token")
        self.tokens = tokens
        self.position = 0

    # ------------------------
    # Token stream helpers
    # ------------------------
    def peek(self, offset: int = 0) -> Token:
        index = min(self.position + offset, len(self.tokens) - 1)
        return self.tokens[index]

    @property
    def current(self) -> Token:
        return self.peek(0)

    def match(self, *kinds: TokenKind) -> bool:
        """True if the upcoming tokens have exactly the given kinds, in order."""
        return all(self.peek(i).kind is kind for i, kind in enumerate(kinds))

    def advance(self) -> Token:
        token = self.current
        if token.kind is not TokenKind.END_OF_FILE:
            self.position += 1
        return token

    def consume(self, kind: TokenKind) -> Token:
        token = self.current
        if token.kind is not kind:
            raise ParseError(
                f"Expected {kind.name} but found {token.kind.name} {token.text!r} at {token.position}",
                token.position,
            )
        self.position += 1
        return token

    # ------------------------
    # Program
    # ------------------------
    def parse(self) -> Block:
        statements: list[Stmt] = []
        while not self.match(TokenKind.END_OF_FILE):
            statements.append(self.parse_statement())
        self.consume(TokenKind.END_OF_FILE)
        logger.debug("parsed %d top-level statements", len(statements))
        return Block(tuple(statements))

    # ------------------------
    # Statements
    # ------------------------
    def parse_statement(self, can_declare: bool = True) -> Stmt:
        kind = self.current.kind

        if kind is TokenKind.IF:
            return self.parse_if()
        if kind in DECLARATION_KEYWORDS or kind is TokenKind.FUNC:
            if not can_declare:
                token = self.current
                raise ParseError(
                    f"'{token.text}' is not allowed here at {token.position}; wrap it in a block",
                    token.position,
                )
            if kind is TokenKind.FUNC:
                return self.parse_function_declaration()
            return self.parse_declaration()
        if kind is TokenKind.FOR:
            return self.parse_for()
        if kind is TokenKind.LEFT_BRACE:
            return self.parse_block()
        if kind is TokenKind.WHILE:
            return self.parse_while()
        if kind is TokenKind.RETURN:
            return self.parse_return()
        if kind is TokenKind.BREAK:
            self.consume(TokenKind.BREAK)
            self.consume(TokenKind.SEMICOLON)
            return BreakStmt()
        if self.match(TokenKind.IDENTIFIER, TokenKind.EQUALS):
            return self.parse_assignment()

        call = self.parse_call()
        self.consume(TokenKind.SEMICOLON)
        return CallStmt(call)

    def parse_block(self) -> Block:
        self.consume(TokenKind.LEFT_BRACE)
        statements: list[Stmt] = []
        while not self.match(TokenKind.RIGHT_BRACE):
            if self.match(TokenKind.END_OF_FILE):
                token = self.current
                raise ParseError(f"Unexpected end of input inside a block at {token.position}", token.position)
            statements.append(self.parse_statement())
        self.consume(TokenKind.RIGHT_BRACE)
        return Block(tuple(statements))

    def parse_declaration(self) -> DeclareStmt:
        if self.match(TokenKind.VAR):
            self.consume(TokenKind.VAR)
            name = self.consume(TokenKind.IDENTIFIER)
            self.consume(TokenKind.EQUALS)
            value = self.parse_expression()
            self.consume(TokenKind.SEMICOLON)
            return DeclareStmt(name.text, None, value, False, name.position)

        is_constant = self.match(TokenKind.CONST)
        self.consume(TokenKind.CONST if is_constant else TokenKind.LET)
        name = self.consume(TokenKind.IDENTIFIER)
        self.consume(TokenKind.COLON)
        declared_type = self.parse_type()
        self.consume(TokenKind.EQUALS)
        value = self.parse_expression()
        self.consume(TokenKind.SEMICOLON)
        return DeclareStmt(name.text, declared_type, value, is_constant, name.position)

    def parse_assignment(self) -> AssignStmt:
        name = self.consume(TokenKind.IDENTIFIER)
        self.consume(TokenKind.EQUALS)
        value = self.parse_expression()
        self.consume(TokenKind.SEMICOLON)
        return AssignStmt(name.text, value, name.position)

    def parse_if_clause(self, keyword: TokenKind) -> IfClause:
        self.consume(keyword)
        self.consume(TokenKind.LEFT_PAREN)
        condition = self.parse_expression()
        self.consume(TokenKind.RIGHT_PAREN)
        body = self.parse_statement(can_declare=False)
        return IfClause(condition, body)

    def parse_if(self) -> IfStmt:
        clauses = [self.parse_if_clause(TokenKind.IF)]
        while self.match(TokenKind.ELSEIF):
            clauses.append(self.parse_if_clause(TokenKind.ELSEIF))

        else_body = None
        if self.match(TokenKind.ELSE):
            self.consume(TokenKind.ELSE)
            else_body = self.parse_statement(can_declare=False)
        return IfStmt(tuple(clauses), else_body)

    def parse_while(self) -> WhileStmt:
        self.consume(TokenKind.WHILE)
        self.consume(TokenKind.LEFT_PAREN)
        condition = self.parse_expression()
        self.consume(TokenKind.RIGHT_PAREN)
        body = self.parse_statement(can_declare=False)
        return WhileStmt(condition, body)

    def parse_for(self) -> ForStmt:
        self.consume(TokenKind.FOR)
        self.consume(TokenKind.LEFT_PAREN)
        self.consume(TokenKind.LET)
        variable = self.consume(TokenKind.IDENTIFIER)
        self.consume(TokenKind.EQUALS)
        lower = self.parse_expression()
        self.consume(TokenKind.COMMA)
        upper = self.parse_expression()
        self.consume(TokenKind.RIGHT_PAREN)
        body = self.parse_statement(can_declare=False)
        return ForStmt(variable.text, lower, upper, body, variable.position)

    def parse_return(self) -> ReturnStmt:
        self.consume(TokenKind.RETURN)
        value = None if self.match(TokenKind.SEMICOLON) else self.parse_expression()
        self.consume(TokenKind.SEMICOLON)
        return ReturnStmt(value)

    def parse_function_declaration(self) -> FuncDecl:
        self.consume(TokenKind.FUNC)
        name = self.consume(TokenKind.IDENTIFIER)
        self.consume(TokenKind.LEFT_PAREN)
        params = self.parse_parameters()
        self.consume(TokenKind.RIGHT_PAREN)
        self.consume(TokenKind.COLON)
        return_type = self.parse_type()
        body = self.parse_block()
        return FuncDecl(name.text, params, return_type, body, name.position)

    def parse_parameters(self) -> tuple[Param, ...]:
        params: list[Param] = []
        if not self.match(TokenKind.IDENTIFIER):
            return ()
        params.append(self.parse_parameter())
        while self.match(TokenKind.COMMA):
            self.consume(TokenKind.COMMA)
            params.append(self.parse_parameter())
        return tuple(params)

    def parse_parameter(self) -> Param:
        name = self.consume(TokenKind.IDENTIFIER)
        self.consume(TokenKind.COLON)
        return Param(name.text, self.parse_type(), name.position)

    # ------------------------
    # Types
    # ------------------------
    def parse_type(self) -> TypeSymbol:
        if self.match(TokenKind.LEFT_PAREN):
            self.consume(TokenKind.LEFT_PAREN)
            parameter_types: list[TypeSymbol] = []
            if not self.match(TokenKind.RIGHT_PAREN):
                parameter_types.append(self.parse_type())
                while self.match(TokenKind.COMMA):
                    self.consume(TokenKind.COMMA)
                    parameter_types.append(self.parse_type())
            self.consume(TokenKind.RIGHT_PAREN)
            self.consume(TokenKind.ARROW)
            return function_type(self.parse_type(), *parameter_types)

        if self.match(TokenKind.VOID):
            self.consume(TokenKind.VOID)
            resolved: TypeSymbol = VOID
        else:
            name = self.consume(TokenKind.IDENTIFIER)
            scalar = scalar_type(name.text)
            if scalar is None:
                raise ParseError(f"Unknown type '{name.text}' at {name.position}", name.position)
            resolved = scalar

        if self.match(TokenKind.LEFT_BRACKET):
            self.consume(TokenKind.LEFT_BRACKET)
            self.consume(TokenKind.RIGHT_BRACKET)
            return array_type(resolved)
        return resolved

    # ------------------------
    # Expressions
    # ------------------------
    def parse_expression(self) -> Expr:
        return self.parse_binary(0)

    def parse_binary(self, parent_precedence: int) -> Expr:
        left = self.parse_primary()
        while True:
            op_precedence = precedence(self.current.kind)
            if op_precedence == 0 or op_precedence <= parent_precedence:
                return left
            operator = self.advance().kind
            right = self.parse_binary(op_precedence)
            left = Binary(left, operator, right)

    def parse_primary(self) -> Expr:
        token = self.current

        if token.kind is TokenKind.NUMBER:
            self.advance()
            return Literal(float(token.text))
        if token.kind is TokenKind.BOOLEAN:
            self.advance()
            return Literal(token.text == "true")
        if token.kind is TokenKind.STRING:
            self.advance()
            return Literal(token.text[1:-1])
        if token.kind is TokenKind.IDENTIFIER:
            if self.match(TokenKind.IDENTIFIER, TokenKind.LEFT_PAREN):
                return self.parse_call()
            self.advance()
            return Var(token.text, token.position)
        if token.kind is TokenKind.MINUS:
            self.advance()
            return Unary(TokenKind.MINUS, self.parse_primary())
        if token.kind is TokenKind.LEFT_PAREN:
            self.advance()
            expression = self.parse_expression()
            self.consume(TokenKind.RIGHT_PAREN)
            return expression
        if token.kind is TokenKind.LEFT_BRACKET:
            self.advance()
            elements = self.parse_value_list(TokenKind.RIGHT_BRACKET)
            self.consume(TokenKind.RIGHT_BRACKET)
            return ArrayLit(elements)

        raise ParseError(
            f"Expected an expression but found {token.kind.name} {token.text!r} at {token.position}",
            token.position,
        )

    def parse_call(self) -> Call:
        name = self.consume(TokenKind.IDENTIFIER)
        self.consume(TokenKind.LEFT_PAREN)
        arguments = self.parse_value_list(TokenKind.RIGHT_PAREN)
        self.consume(TokenKind.RIGHT_PAREN)
        return Call(name.text, arguments, name.position)

    def parse_value_list(self, end: TokenKind) -> tuple[Expr, ...]:
        if self.match(end):
            return ()
        values = [self.parse_expression()]
        while self.match(TokenKind.COMMA):
            self.consume(TokenKind.COMMA)
            values.append(self.parse_expression())
        return tuple(values)


def parse(source: str) -> Block:
    """Lex and parse `source` into the program's top-level block."""
    return Parser(tokenize(source)).parse()
