"""GFC: the LST typed text format and its companion formats."""

from .nodes import FieldNotFound, FieldType, LSTClass, TypedValue
from .document import ClassNotFound, LSTDocument
from .lexer import LSTLexer, LexerConfig, Token, TokenType
from .parser import ClassHeader, LSTParser, MalformedValue, ParserConfig, parse_class_header, split_segments
from .formatter import FormatError, LSTFormatter
from .codec import parse, read, serialize, write
from .clst import CLSTError, CLSTTable
from .rgb import Pixel, decode_pixels, encode_pixels

__all__ = [
    "FieldNotFound",
    "FieldType",
    "LSTClass",
    "TypedValue",
    "ClassNotFound",
    "LSTDocument",
    "LSTLexer",
    "LexerConfig",
    "Token",
    "TokenType",
    "ClassHeader",
    "LSTParser",
    "MalformedValue",
    "ParserConfig",
    "parse_class_header",
    "split_segments",
    "FormatError",
    "LSTFormatter",
    "parse",
    "read",
    "serialize",
    "write",
    "CLSTError",
    "CLSTTable",
    "Pixel",
    "decode_pixels",
    "encode_pixels",
]
