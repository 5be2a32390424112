"""Tests for the LSP server — diagnostic generation."""

from __future__ import annotations

import pytest
from lsprotocol.types import (
    DiagnosticSeverity,
    PublishDiagnosticsParams,
    TextDocumentItem,
    TextDocumentSyncKind,
)
from pygls.lsp.server import LanguageServer
from pygls.workspace import Workspace

from chimiaguin.lsp import _validate


@pytest.fixture
def lsp_env():
    """Create a LanguageServer with an initialized workspace and captured diagnostics."""
    ls = LanguageServer("test", "v0", text_document_sync_kind=TextDocumentSyncKind.Full)
    ws = Workspace(None)
    ls.protocol._workspace = ws

    published: list[PublishDiagnosticsParams] = []
    ls.text_document_publish_diagnostics = lambda params: published.append(params)

    def put(source: str, uri: str = "file:///test.chi") -> None:
        ws.put_text_document(
            TextDocumentItem(uri=uri, language_id="chimiaguin", version=0, text=source)
        )

    return ls, published, put


# ---------------------------------------------------------------------------
# Illegal characters and unterminated strings → Error severity
# ---------------------------------------------------------------------------


class TestErrors:
    def test_illegal_character(self, lsp_env) -> None:
        ls, published, put = lsp_env
        put("puts $x")
        _validate(ls, "file:///test.chi")

        assert len(published) == 1
        diags = published[0].diagnostics
        assert len(diags) == 1
        d = diags[0]
        assert d.severity == DiagnosticSeverity.Error
        assert "'$'" in d.message
        assert d.source == "chimiaguin"
        # $ is at column 6 (1-based) → character 5 (0-based)
        assert d.range.start.line == 0
        assert d.range.start.character == 5
        assert d.range.end.character == 6

    def test_unterminated_string(self, lsp_env) -> None:
        ls, published, put = lsp_env
        put("puts 'oops")
        _validate(ls, "file:///test.chi")

        diags = published[0].diagnostics
        assert len(diags) == 1
        assert diags[0].severity == DiagnosticSeverity.Error
        assert "unterminated" in diags[0].message


# ---------------------------------------------------------------------------
# Out-of-range integers → Warning severity
# ---------------------------------------------------------------------------


class TestWarnings:
    def test_overflow(self, lsp_env) -> None:
        ls, published, put = lsp_env
        put("x = 99999999999")
        _validate(ls, "file:///test.chi")

        diags = published[0].diagnostics
        assert len(diags) == 1
        assert diags[0].severity == DiagnosticSeverity.Warning


# ---------------------------------------------------------------------------
# Clean document → empty diagnostics
# ---------------------------------------------------------------------------


class TestCleanDocument:
    def test_valid_document(self, lsp_env) -> None:
        ls, published, put = lsp_env
        put("class Dog < Animal\n  def bark\n    puts \"Woof #{name}\"\n  end\nend\n")
        _validate(ls, "file:///test.chi")

        assert len(published) == 1
        assert published[0].diagnostics == []


# ---------------------------------------------------------------------------
# Position conversion (1-based → 0-based)
# ---------------------------------------------------------------------------


class TestPositionConversion:
    def test_error_on_second_line(self, lsp_env) -> None:
        ls, published, put = lsp_env
        put("valid first line\n@oops")
        _validate(ls, "file:///test.chi")

        diags = published[0].diagnostics
        assert len(diags) == 1
        d = diags[0]
        # Error is on line 2 (1-based) → LSP line 1 (0-based)
        assert d.range.start.line == 1
        assert d.range.start.character == 0
