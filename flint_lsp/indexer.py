from __future__ import annotations

"""
Static indexer for Flint sources, used by the language server.

The buffer is lexed and parsed with the real reader but never evaluated. We
record:
- the first lexer/parser error as a diagnostic (the reader stops there)
- declarations: functions, parameters, variables/constants, for-loop variables

When the buffer does not parse, the declarations of the last buffer that did
are not available here; the server keeps the previous index for that.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional

from flint.builtin.env_builtin import SIGNATURES
from flint.errors import LexError, ParseError
from flint.interpreter import Interpreter
from flint.reader.syntax import (
    Block,
    DeclareStmt,
    ForStmt,
    FuncDecl,
    IfStmt,
    Stmt,
    WhileStmt,
)
from flint.reader.tokens import KEYWORDS, line_and_column


@dataclass
class SymbolDef:
    name: str
    kind: str  # "function" | "parameter" | "var" | "const"
    line: int
    col: int
    detail: str


@dataclass
class DiagnosticInfo:
    message: str
    line: int
    col: int


@dataclass
class DocumentIndex:
    symbols: Dict[str, SymbolDef] = field(default_factory=dict)
    diagnostics: List[DiagnosticInfo] = field(default_factory=list)
    parsed: bool = False


# Builtin signatures for hover/completion without evaluation
BUILTIN_SIGNATURES: Dict[str, str] = {name: f"{name}: {fn_type}" for name, fn_type in SIGNATURES.items()}

KEYWORD_NAMES: List[str] = sorted(KEYWORDS) + ["true", "false"]


class _Collector:
    def __init__(self, text: str, idx: DocumentIndex):
        self.text = text
        self.idx = idx

    def add(self, name: str, kind: str, position: int, detail: str) -> None:
        line, col = line_and_column(self.text, position)
        # first declaration wins; later shadows in inner scopes are not indexed
        self.idx.symbols.setdefault(name, SymbolDef(name=name, kind=kind, line=line, col=col, detail=detail))

    def visit(self, stmt: Stmt) -> None:
        match stmt:
            case Block(statements=statements):
                for inner in statements:
                    self.visit(inner)
            case FuncDecl():
                params = ", ".join(f"{p.name}: {p.type}" for p in stmt.params)
                self.add(stmt.name, "function", stmt.position, f"func {stmt.name}({params}): {stmt.return_type}")
                for p in stmt.params:
                    self.add(p.name, "parameter", p.position, f"{p.name}: {p.type}")
                self.visit(stmt.body)
            case DeclareStmt():
                if stmt.declared_type is None:
                    self.add(stmt.name, "var", stmt.position, f"var {stmt.name}")
                else:
                    kind = "const" if stmt.is_constant else "var"
                    keyword = "const" if stmt.is_constant else "let"
                    self.add(stmt.name, kind, stmt.position, f"{keyword} {stmt.name}: {stmt.declared_type}")
            case ForStmt():
                self.add(stmt.variable, "var", stmt.position, f"let {stmt.variable}: float")
                self.visit(stmt.body)
            case WhileStmt(body=body):
                self.visit(body)
            case IfStmt(clauses=clauses, else_body=else_body):
                for clause in clauses:
                    self.visit(clause.body)
                if else_body is not None:
                    self.visit(else_body)


def build_index(text: str) -> DocumentIndex:
    idx = DocumentIndex()
    try:
        program = Interpreter.parse(text)
    except (LexError, ParseError) as e:
        position = e.position if e.position is not None else 0
        line, col = line_and_column(text, position)
        idx.diagnostics.append(DiagnosticInfo(message=e.message, line=line, col=col))
        return idx

    idx.parsed = True
    _Collector(text, idx).visit(program)
    return idx


def word_at(text: str, line: int, character: int) -> Optional[str]:
    """Identifier under the cursor, or None."""
    lines = text.splitlines()
    if line >= len(lines):
        return None
    row = lines[line]
    start = end = min(character, len(row))
    while start > 0 and (row[start - 1].isalpha() or row[start - 1] == "_"):
        start -= 1
    while end < len(row) and (row[end].isalpha() or row[end] == "_"):
        end += 1
    return row[start:end] or None


def describe_symbol(idx: DocumentIndex, word: str) -> Optional[str]:
    """Hover text for `word`: builtin signature first, then an indexed declaration."""
    if word in BUILTIN_SIGNATURES:
        return BUILTIN_SIGNATURES[word]
    sdef = idx.symbols.get(word)
    if sdef is None:
        return None
    return f"{sdef.detail} ({sdef.kind}, defined at {sdef.line + 1}:{sdef.col + 1})"
