"""Minimal LSP server for Chimiaguin — lexical diagnostics only."""

from __future__ import annotations

from lsprotocol.types import (
    TEXT_DOCUMENT_DID_CHANGE,
    TEXT_DOCUMENT_DID_OPEN,
    Diagnostic,
    DiagnosticSeverity,
    DidChangeTextDocumentParams,
    DidOpenTextDocumentParams,
    Position,
    PublishDiagnosticsParams,
    Range,
    TextDocumentSyncKind,
)
from pygls.lsp.server import LanguageServer

from chimiaguin import __version__
from chimiaguin.errors import LexError
from chimiaguin.lexer import collect_errors

server = LanguageServer(
    "chimiaguin-lsp", __version__, text_document_sync_kind=TextDocumentSyncKind.Full
)


def _to_diagnostic(exc: LexError) -> Diagnostic:
    # Lexer positions are 1-based, LSP positions 0-based
    start = exc.span.start
    end = exc.span.end
    return Diagnostic(
        range=Range(
            start=Position(line=start.line - 1, character=start.column - 1),
            end=Position(line=end.line - 1, character=end.column - 1),
        ),
        message=exc.message,
        severity=DiagnosticSeverity.Warning if exc.warning else DiagnosticSeverity.Error,
        source="chimiaguin",
    )


def _validate(ls: LanguageServer, uri: str) -> None:
    """Lex the document and publish diagnostics."""
    doc = ls.workspace.get_text_document(uri)
    filename = uri.rsplit("/", 1)[-1] if "/" in uri else uri
    diagnostics = [_to_diagnostic(exc) for exc in collect_errors(doc.source, filename)]

    ls.text_document_publish_diagnostics(
        PublishDiagnosticsParams(uri=uri, diagnostics=diagnostics)
    )


@server.feature(TEXT_DOCUMENT_DID_OPEN)
def did_open(ls: LanguageServer, params: DidOpenTextDocumentParams) -> None:
    _validate(ls, params.text_document.uri)


@server.feature(TEXT_DOCUMENT_DID_CHANGE)
def did_change(ls: LanguageServer, params: DidChangeTextDocumentParams) -> None:
    _validate(ls, params.text_document.uri)


def main() -> None:
    server.start_io()
