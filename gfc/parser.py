from typing import List, NotRequired, Optional, TypedDict
from dataclasses import dataclass
import math
import re
from gfc.lexer import LexerConfig, LSTLexer, Token, TokenType
from gfc.document import LSTDocument
from gfc.nodes import INT32_MAX, INT32_MIN, INT64_MAX, INT64_MIN, FieldType, LSTClass, to_float32
from gfc.utils import resolve_config
from gfc.logger import Logger

CLASS_KEYWORD = "class"
HEADER_SUFFIX = ":"
ASSIGNMENT = "="
QUOTE = '"'

_INTEGER_RE = re.compile(r"[+-]?[0-9]+")
_FLOAT_RE = re.compile(r"[+-]?(NaN|Infinity|([0-9]+\.?[0-9]*|\.[0-9]+)([eE][+-]?[0-9]+)?)[fFdD]?")


class MalformedValue(ValueError):
    def __init__(
        self,
        class_name: str,
        field_name: str,
        raw: str,
        reason: str = "malformed value",
        token: Optional[Token] = None,
    ):
        self.class_name = class_name
        self.field_name = field_name
        self.raw = raw
        self.reason = reason
        self.token = token
        message = f"{reason} for field '{field_name}' in class '{class_name}': {raw!r}"
        if token:
            message = f"{message} at line {token.line}, column {token.column}"
        super().__init__(message)


def parse_integer(raw: str, minimum: int = INT32_MIN, maximum: int = INT32_MAX) -> int:
    if not _INTEGER_RE.fullmatch(raw):
        raise ValueError(f"not an integer: {raw!r}")
    value = int(raw)
    if not minimum <= value <= maximum:
        raise ValueError(f"{value} is out of range [{minimum}, {maximum}]")
    return value


def parse_long(raw: str) -> int:
    return parse_integer(raw, INT64_MIN, INT64_MAX)


def parse_float(raw: str) -> float:
    if not _FLOAT_RE.fullmatch(raw):
        raise ValueError(f"not a float: {raw!r}")
    if raw[-1] in "fFdD":
        raw = raw[:-1]
    value = float(raw)
    # literals past the double range overflow to infinity before narrowing
    if math.isinf(value) and "Infinity" not in raw:
        raise ValueError(f"{raw!r} is out of range for a 32-bit float")
    return to_float32(value)


def parse_boolean(raw: str) -> bool:
    lowered = raw.lower()
    if lowered not in ("true", "false"):
        raise ValueError(f"not a boolean: {raw!r}")
    return lowered == "true"


VALUE_PARSERS = {
    FieldType.INTEGER: parse_integer,
    FieldType.FLOAT: parse_float,
    FieldType.LONG: parse_long,
    FieldType.BOOLEAN: parse_boolean,
}


@dataclass
class ClassHeader:
    name: str
    body: List[Token]


def split_segments(tokens: List[Token]) -> List[List[Token]]:
    """Split the token stream on standalone ``end`` tokens.

    The trailing segment after the last ``end`` is always returned, even when
    empty, so the header parser gets a chance to stop on it.
    """
    segments: List[List[Token]] = []
    current: List[Token] = []
    for token in tokens:
        if token.token_type == TokenType.END:
            segments.append(current)
            current = []
        else:
            current.append(token)
    segments.append(current)
    return segments


def parse_class_header(segment: List[Token]) -> Optional[ClassHeader]:
    """Read ``class NAME:`` off the front of a segment.

    A first word other than ``class`` shifts the name lookup by one word.
    Returns None when no header can be read, which ends the document scan.
    """
    offset = 0 if segment and segment[0].token_type == TokenType.CLASS else 1
    name_index = 1 + offset
    if name_index >= len(segment):
        return None
    header = segment[name_index].value
    if not header.endswith(HEADER_SUFFIX):
        return None
    name = header[: -len(HEADER_SUFFIX)]
    if not name:
        return None
    return ClassHeader(name=name, body=segment[name_index + 1 :])


class ParserConfig(TypedDict):
    parse: NotRequired[bool]
    warn_on_collisions: NotRequired[bool]
    enable_logger: NotRequired[bool]


class ParserConfigRequired(TypedDict):
    parse: bool
    warn_on_collisions: bool
    enable_logger: bool


DEFAULT_CONFIG: ParserConfigRequired = {"parse": True, "warn_on_collisions": True, "enable_logger": True}


class LSTParser:
    def __init__(self, tokens: List[Token], config: Optional[ParserConfig] = None):
        self.config = resolve_config(config or {}, DEFAULT_CONFIG)
        self.logger = Logger(config={"name": "LST Parser", "is_enabled": self.config["enable_logger"]}).logger
        self.logger.info("Parser initialized")
        self.tokens = tokens
        self.document = LSTDocument()
        self.class_name = ""
        self.body: List[Token] = []
        self.position = 0
        if self.config["parse"]:
            self.parse_tokens()
            self.logger.debug("Tokens parsed into document")

    @classmethod
    def from_text(
        cls,
        text: str,
        lexer_config: Optional[LexerConfig] = None,
        parser_config: Optional[ParserConfig] = None,
    ) -> "LSTParser":
        lexer = LSTLexer(text, config=lexer_config)
        return cls(lexer.tokens, config=parser_config)

    # -- Document level ---------------------------------------------------

    def parse_tokens(self) -> LSTDocument:
        self.document = LSTDocument()
        for index, segment in enumerate(split_segments(self.tokens)):
            header = parse_class_header(segment)
            if header is None:
                self.logger.info(f"No class header in segment {index}, stopping with {len(self.document)} classes")
                break
            lst_class = self._parse_class(header)
            if lst_class.name in self.document:
                self.logger.warning(f"Class '{lst_class.name}' declared again, replacing earlier declaration")
            if self.config["warn_on_collisions"]:
                for field_name, types in lst_class.collisions().items():
                    tags = ", ".join(field_type.tag for field_type in types)
                    self.logger.warning(f"Field '{field_name}' in class '{lst_class.name}' declared as {tags}")
            self.document.set_class(lst_class)
        return self.document

    # -- Class body cursor ------------------------------------------------

    @property
    def current_token(self) -> Optional[Token]:
        return self.lookahead(0)

    def lookahead(self, distance: int = 1) -> Optional[Token]:
        if 0 <= self.position + distance < len(self.body):
            return self.body[self.position + distance]
        return None

    def advance(self, steps: int = 1) -> None:
        self.logger.debug(f"Advancing {steps} step(s) from position {self.position}")
        self.position = min(self.position + steps, len(self.body))

    def require(self, distance: int, field_name: str) -> Token:
        token = self.lookahead(distance)
        if token is None:
            raise MalformedValue(
                self.class_name, field_name, "", "unexpected end of class body", token=self.current_token
            )
        return token

    def _parse_class(self, header: ClassHeader) -> LSTClass:
        self.logger.debug(f"Parsing class '{header.name}' with {len(header.body)} tokens")
        self.class_name = header.name
        self.body = header.body
        self.position = 0
        values: dict[FieldType, dict] = {field_type: {} for field_type in FieldType}

        while self.current_token is not None:
            field_type = FieldType.from_tag(self.current_token.value)
            if field_type is None:
                self.logger.debug(f"Skipping token '{self.current_token.value}' in class '{self.class_name}'")
                self.advance()
                continue
            field_name = self.require(1, "").value
            self._check_assignment(field_name)
            if field_type == FieldType.STRING:
                value, consumed = self._assemble_string(field_name)
            else:
                value, consumed = self._parse_scalar(field_type, field_name), 4
            values[field_type][field_name] = value
            self.advance(consumed)

        return LSTClass(
            name=header.name,
            strings=values[FieldType.STRING],
            integers=values[FieldType.INTEGER],
            floats=values[FieldType.FLOAT],
            longs=values[FieldType.LONG],
            booleans=values[FieldType.BOOLEAN],
        )

    def _check_assignment(self, field_name: str) -> None:
        token = self.require(2, field_name)
        if token.value != ASSIGNMENT:
            self.logger.warning(
                f"Expected '{ASSIGNMENT}' after field '{field_name}' in class '{self.class_name}', "
                f"got '{token.value}' at line {token.line}, column {token.column}"
            )

    def _parse_scalar(self, field_type: FieldType, field_name: str):
        token = self.require(3, field_name)
        try:
            return VALUE_PARSERS[field_type](token.value)
        except ValueError as exc:
            raise MalformedValue(self.class_name, field_name, token.value, str(exc), token=token) from exc

    def _assemble_string(self, field_name: str) -> tuple[str, int]:
        """Join words from the opening quote up to the word ending in a quote.

        Returns the unquoted text and the number of tokens the whole field
        declaration spans. The scan never leaves the current class body.
        """
        start = 3
        first = self.require(start, field_name)
        if not first.value.startswith(QUOTE):
            raise MalformedValue(self.class_name, field_name, first.value, "string value must be quoted", token=first)

        words: List[str] = []
        distance = start
        while True:
            token = self.lookahead(distance)
            if token is None:
                raise MalformedValue(
                    self.class_name, field_name, " ".join(words), "unterminated string", token=first
                )
            words.append(token.value)
            closes = token.value.endswith(QUOTE) and (distance > start or len(token.value) > 1)
            if closes:
                break
            distance += 1

        text = " ".join(words)
        return text[1:-1], distance + 1
