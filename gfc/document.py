"""Document container for parsed LST text."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator

from .nodes import FieldNotFound, FieldType, LSTClass


class ClassNotFound(FieldNotFound):
    def __init__(self, class_name: str, field_name: str | None = None, expected_type: FieldType | None = None):
        super().__init__(class_name, field_name, expected_type)

    def __str__(self) -> str:
        if self.field_name is None or self.expected_type is None:
            return f"No class '{self.class_name}'"
        return f"No class '{self.class_name}' (looking up {self.expected_type.tag} field '{self.field_name}')"


@dataclass
class LSTDocument:
    classes: dict[str, LSTClass] = field(default_factory=dict)

    def get_class(self, name: str) -> LSTClass:
        if name not in self.classes:
            raise ClassNotFound(name)
        return self.classes[name]

    def set_class(self, lst_class: LSTClass) -> None:
        self.classes[lst_class.name] = lst_class

    def remove_class(self, name: str) -> LSTClass:
        if name not in self.classes:
            raise ClassNotFound(name)
        return self.classes.pop(name)

    def class_names(self) -> list[str]:
        return list(self.classes)

    def clear(self) -> None:
        self.classes.clear()

    def replace_contents(self, text: str) -> None:
        """Drop every class, then parse ``text`` into this document."""
        from .parser import LSTParser

        self.clear()
        parsed = LSTParser.from_text(text).document
        self.classes.update(parsed.classes)

    def collisions(self) -> dict[str, dict[str, list[FieldType]]]:
        found = {}
        for name, lst_class in self.classes.items():
            class_collisions = lst_class.collisions()
            if class_collisions:
                found[name] = class_collisions
        return found

    # -- Typed getters ----------------------------------------------------

    def get(self, class_name: str, field_name: str, field_type: FieldType):
        lst_class = self.classes.get(class_name)
        if lst_class is None:
            raise ClassNotFound(class_name, field_name, field_type)
        return lst_class.get(field_name, field_type)

    def get_string(self, class_name: str, field_name: str) -> str:
        return self.get(class_name, field_name, FieldType.STRING)

    def get_integer(self, class_name: str, field_name: str) -> int:
        return self.get(class_name, field_name, FieldType.INTEGER)

    def get_float(self, class_name: str, field_name: str) -> float:
        return self.get(class_name, field_name, FieldType.FLOAT)

    def get_long(self, class_name: str, field_name: str) -> int:
        return self.get(class_name, field_name, FieldType.LONG)

    def get_boolean(self, class_name: str, field_name: str) -> bool:
        return self.get(class_name, field_name, FieldType.BOOLEAN)

    def __contains__(self, name: object) -> bool:
        return name in self.classes

    def __len__(self) -> int:
        return len(self.classes)

    def __iter__(self) -> Iterator[LSTClass]:
        return iter(self.classes.values())

    def __str__(self) -> str:
        from .formatter import LSTFormatter

        return LSTFormatter().format_document(self)
