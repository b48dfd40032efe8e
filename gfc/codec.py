"""Entry points for reading and writing LST text."""

from __future__ import annotations

from pathlib import Path

from .document import LSTDocument
from .formatter import LSTFormatter
from .lexer import LexerConfig
from .parser import LSTParser, ParserConfig


def parse(
    text: str,
    lexer_config: LexerConfig | None = None,
    parser_config: ParserConfig | None = None,
) -> LSTDocument:
    return LSTParser.from_text(text, lexer_config=lexer_config, parser_config=parser_config).document


def serialize(document: LSTDocument, formatter: LSTFormatter | None = None) -> str:
    return (formatter or LSTFormatter()).format_document(document)


def read(path: str | Path, **kwargs) -> LSTDocument:
    # newline="" keeps CRLF intact for the lexer
    with open(path, "r", encoding="utf-8", newline="") as handle:
        return parse(handle.read(), **kwargs)


def write(document: LSTDocument, path: str | Path, formatter: LSTFormatter | None = None) -> Path:
    path = Path(path)
    with open(path, "w", encoding="utf-8", newline="") as handle:
        handle.write(serialize(document, formatter))
    return path
