"""Formatter that renders LST documents back to text."""

from __future__ import annotations

import math
import re
from dataclasses import dataclass

from .document import LSTDocument
from .nodes import FieldType, LSTClass, TypedValue, to_float32

_INVALID_NAME_CHARS = re.compile(r'[\s:"]')
_FORBIDDEN_VALUE_CHARS = ("\r", "\n", "\t")


class FormatError(ValueError):
    pass


@dataclass
class LSTFormatter:
    """Render documents as canonical LST text.

    Anything that would not parse back to the same values raises
    ``FormatError``. NaN floats are written as ``NaN`` and read back as NaN,
    but since NaN never equals itself a document holding one does not
    compare equal to its re-parsed copy.
    """

    indent: str = ""
    line_separator: str = "\r\n"

    def format_document(self, document: LSTDocument) -> str:
        lines: list[str] = []
        for lst_class in document:
            lines.extend(self.format_class(lst_class))
        if not lines:
            return ""
        return self.line_separator.join(lines) + self.line_separator

    def format_class(self, lst_class: LSTClass) -> list[str]:
        self._check_name(lst_class.name, lst_class.name)
        lines = [f"class {lst_class.name}:"]
        for field_name, typed_value in lst_class.fields():
            lines.append(f"{self.indent}{self.format_field(lst_class.name, field_name, typed_value)}")
        lines.append("end")
        return lines

    def format_field(self, class_name: str, field_name: str, typed_value: TypedValue) -> str:
        self._check_name(class_name, field_name)
        value = self._format_value(class_name, field_name, typed_value)
        return f"{typed_value.type.tag} {field_name} = {value}"

    def _format_value(self, class_name: str, field_name: str, typed_value: TypedValue) -> str:
        value = typed_value.value
        match typed_value.type:
            case FieldType.STRING:
                return self._format_string(class_name, field_name, value)
            case FieldType.BOOLEAN:
                return "true" if value else "false"
            case FieldType.FLOAT:
                return self._format_float(value)
        return str(value)

    def _format_string(self, class_name: str, field_name: str, value: str) -> str:
        if any(char in value for char in _FORBIDDEN_VALUE_CHARS):
            raise FormatError(f"String field '{field_name}' in class '{class_name}' spans lines or holds tabs")
        if value != value.strip(" ") or "  " in value:
            raise FormatError(f"String field '{field_name}' in class '{class_name}' has unpreservable spacing")
        quoted = f'"{value}"'
        words = quoted.split(" ")
        for index, word in enumerate(words):
            if word == "end" or word.startswith("#"):
                raise FormatError(f"String field '{field_name}' in class '{class_name}' contains the word {word!r}")
            if index < len(words) - 1 and word.endswith('"'):
                raise FormatError(f"String field '{field_name}' in class '{class_name}' closes early at {word!r}")
        return quoted

    def _format_float(self, value: float) -> str:
        if math.isnan(value):
            return "NaN"
        if math.isinf(value):
            return "Infinity" if value > 0 else "-Infinity"
        # shortest text that reads back as the same 32-bit float
        for precision in range(1, 10):
            text = f"{value:.{precision}g}"
            try:
                if to_float32(float(text)) == value:
                    break
            except ValueError:
                # rounded up past the single precision maximum
                continue
        if text.lstrip("+-").isdigit():
            text += ".0"
        return text

    def _check_name(self, class_name: str, name: str) -> None:
        if not name or name == "end" or name.startswith("#") or _INVALID_NAME_CHARS.search(name):
            raise FormatError(f"Name {name!r} in class {class_name!r} cannot be written as LST")
