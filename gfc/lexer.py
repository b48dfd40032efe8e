from typing import NotRequired, Optional, TypedDict
from enum import Enum, auto
from dataclasses import dataclass
import re
from gfc.utils import resolve_config
from gfc.logger import Logger


class TokenType(Enum):
    CLASS = auto()
    END = auto()
    WORD = auto()

    @classmethod
    def get_token_type(cls, value: str):
        if value == "class":
            return cls.CLASS
        if value == "end":
            return cls.END
        return cls.WORD


@dataclass
class Token:
    token_type: TokenType
    value: str
    line: int
    column: int


COMMENT_PREFIX = "#"

_CRLF = re.compile(r"\r\n")
_ANY_NEWLINE = re.compile(r"\r\n|\n")


class LexerConfig(TypedDict):
    tokenize: NotRequired[bool]
    strict_line_endings: NotRequired[bool]
    enable_logger: NotRequired[bool]


class LexerConfigRequired(TypedDict):
    tokenize: bool
    strict_line_endings: bool
    enable_logger: bool


DEFAULT_CONFIG: LexerConfigRequired = {
    "tokenize": True,
    "strict_line_endings": False,
    "enable_logger": True,
}


class LSTLexer:
    """Turns raw LST text into a flat, comment-free word stream.

    Tabs become spaces, lines are split on CRLF (and bare LF unless
    ``strict_line_endings`` is set), words are split on single spaces and a
    word starting with ``#`` drops the rest of its line. Nothing here raises:
    malformed input just yields fewer tokens.
    """

    def __init__(self, input: str, config: Optional[LexerConfig] = None):
        self.input = input
        self.config = resolve_config(config or {}, DEFAULT_CONFIG)
        self.logger = Logger(config={"name": "LST Lexer", "is_enabled": self.config["enable_logger"]}).logger
        self.tokens: list[Token] = []
        if self.config["tokenize"]:
            self.tokenize()

    @property
    def normalized(self) -> str:
        return " ".join(token.value for token in self.tokens)

    def _split_lines(self, text: str) -> list[str]:
        pattern = _CRLF if self.config["strict_line_endings"] else _ANY_NEWLINE
        return pattern.split(text)

    def _add_token(self, value: str, line: int, column: int):
        token_type = TokenType.get_token_type(value)
        self.logger.debug(f"Adding token {token_type} with value '{value}' at line {line}, column {column}")
        self.tokens.append(Token(token_type, value, line, column))

    def _tokenize_line(self, line: str, line_number: int):
        column = 1
        for raw_word in line.split(" "):
            word = raw_word.replace(" ", "")
            if word.startswith(COMMENT_PREFIX):
                self.logger.debug(f"Skipping comment at line {line_number}, column {column}")
                break
            if word:
                self._add_token(word, line_number, column)
            column += len(raw_word) + 1

    def tokenize(self) -> list[Token]:
        self.logger.info("Starting tokenization")
        self.tokens = []
        text = self.input.replace("\t", " ")
        for line_number, line in enumerate(self._split_lines(text), start=1):
            self._tokenize_line(line, line_number)
        self.logger.info(f"Tokenization complete, {len(self.tokens)} tokens")
        return self.tokens
