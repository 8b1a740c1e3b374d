from __future__ import annotations

"""
A minimal pygls-based Language Server for Flint.

Features:
- Text synchronization and document store
- Diagnostics: the first lexer/parser error of the buffer
- Hover: builtin signatures and declarations found by the indexer
- Completion: keywords, builtins and declared names
- Document Symbols: from the indexer

Note: We never evaluate the buffer; the index is built from the syntax tree.
"""

import logging
from dataclasses import dataclass
from typing import Dict, List, Optional

from pygls.server import LanguageServer
from lsprotocol.types import (
    TEXT_DOCUMENT_COMPLETION,
    TEXT_DOCUMENT_DID_CHANGE,
    TEXT_DOCUMENT_DID_CLOSE,
    TEXT_DOCUMENT_DID_OPEN,
    TEXT_DOCUMENT_DOCUMENT_SYMBOL,
    TEXT_DOCUMENT_HOVER,
    CompletionItem,
    CompletionItemKind,
    CompletionList,
    CompletionOptions,
    CompletionParams,
    Diagnostic,
    DiagnosticSeverity,
    DidChangeTextDocumentParams,
    DidCloseTextDocumentParams,
    DidOpenTextDocumentParams,
    DocumentSymbol,
    DocumentSymbolParams,
    Hover,
    HoverParams,
    MarkupContent,
    MarkupKind,
    Position,
    Range,
    SymbolKind,
    TextDocumentSyncKind,
)

from flint import __version__, config
from flint_lsp.indexer import (
    BUILTIN_SIGNATURES,
    KEYWORD_NAMES,
    DocumentIndex,
    build_index,
    describe_symbol,
    word_at,
)

logger = logging.getLogger(__name__)

SYMBOL_KINDS: Dict[str, SymbolKind] = {
    "function": SymbolKind.Function,
    "parameter": SymbolKind.Variable,
    "var": SymbolKind.Variable,
    "const": SymbolKind.Constant,
}


@dataclass
class DocumentState:
    text: str
    index: DocumentIndex


class FlintLanguageServer(LanguageServer):
    CMD_NAME = "flint-ls"

    def __init__(self):
        super().__init__(self.CMD_NAME, __version__, text_document_sync_kind=TextDocumentSyncKind.Full)
        self.documents: Dict[str, DocumentState] = {}

    def update_document(self, uri: str, text: str) -> DocumentState:
        idx = build_index(text)
        previous = self.documents.get(uri)
        if not idx.parsed and previous is not None:
            # keep completing/hovering with the last good declarations while the user types
            idx.symbols = previous.index.symbols
        state = DocumentState(text=text, index=idx)
        self.documents[uri] = state
        return state


ls = FlintLanguageServer()


# --- Text sync ---
@ls.feature(TEXT_DOCUMENT_DID_OPEN)
def did_open(params: DidOpenTextDocumentParams):
    uri = params.text_document.uri
    state = ls.update_document(uri, params.text_document.text or "")
    _publish_diagnostics(uri, state)


@ls.feature(TEXT_DOCUMENT_DID_CHANGE)
def did_change(params: DidChangeTextDocumentParams):
    uri = params.text_document.uri
    if params.content_changes:
        text = params.content_changes[-1].text
    else:
        text = ls.documents[uri].text if uri in ls.documents else ""
    state = ls.update_document(uri, text)
    _publish_diagnostics(uri, state)


@ls.feature(TEXT_DOCUMENT_DID_CLOSE)
def did_close(params: DidCloseTextDocumentParams):
    uri = params.text_document.uri
    ls.documents.pop(uri, None)
    ls.publish_diagnostics(uri, [])


# --- Diagnostics ---
def _mk_range(line: int, col: int, length: int = 1) -> Range:
    return Range(start=Position(line=line, character=col), end=Position(line=line, character=col + length))


def _publish_diagnostics(uri: str, state: DocumentState):
    diags: List[Diagnostic] = [
        Diagnostic(
            range=_mk_range(d.line, d.col),
            message=d.message,
            severity=DiagnosticSeverity.Error,
            source=FlintLanguageServer.CMD_NAME,
        )
        for d in state.index.diagnostics
    ]
    logger.debug("publishing %d diagnostic(s) for %s", len(diags), uri)
    ls.publish_diagnostics(uri, diags)


# --- Hover ---
@ls.feature(TEXT_DOCUMENT_HOVER)
def on_hover(params: HoverParams) -> Optional[Hover]:
    state = ls.documents.get(params.text_document.uri)
    if not state:
        return None
    word = word_at(state.text, params.position.line, params.position.character)
    if not word:
        return None
    contents = describe_symbol(state.index, word)
    if contents is None:
        return None
    return Hover(contents=MarkupContent(kind=MarkupKind.PlainText, value=contents))


# --- Completion ---
@ls.feature(TEXT_DOCUMENT_COMPLETION, CompletionOptions(resolve_provider=False))
def on_completion(params: CompletionParams) -> CompletionList:
    items: List[CompletionItem] = [
        CompletionItem(label=kw, kind=CompletionItemKind.Keyword) for kw in KEYWORD_NAMES
    ]
    for name, sig in BUILTIN_SIGNATURES.items():
        items.append(CompletionItem(label=name, kind=CompletionItemKind.Function, detail=sig))

    state = ls.documents.get(params.text_document.uri)
    if state:
        for name, sdef in state.index.symbols.items():
            kind = CompletionItemKind.Function if sdef.kind == "function" else CompletionItemKind.Variable
            items.append(CompletionItem(label=name, kind=kind, detail=sdef.detail))
    return CompletionList(is_incomplete=False, items=items)


# --- Document Symbols ---
@ls.feature(TEXT_DOCUMENT_DOCUMENT_SYMBOL)
def on_document_symbols(params: DocumentSymbolParams) -> Optional[List[DocumentSymbol]]:
    state = ls.documents.get(params.text_document.uri)
    if not state:
        return None
    symbols: List[DocumentSymbol] = []
    for name, sdef in state.index.symbols.items():
        rng = _mk_range(sdef.line, sdef.col, len(name))
        symbols.append(
            DocumentSymbol(
                name=name,
                detail=sdef.detail,
                kind=SYMBOL_KINDS.get(sdef.kind, SymbolKind.Variable),
                range=rng,
                selection_range=rng,
            )
        )
    return symbols


def main() -> None:
    logging.basicConfig(level=config.get_log_level(), format="%(levelname)s %(name)s: %(message)s")
    # Run the language server over stdio
    ls.start_io()


if __name__ == "__main__":
    main()
