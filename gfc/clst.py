"""CLST: an untyped list format.

Columns are separated by ``;`` and the entries of a column by ``:``. Every
entry is kept as raw text.
"""

from __future__ import annotations

from pathlib import Path

from gfc.logger import Logger

COLUMN_SEPARATOR = ";"
ENTRY_SEPARATOR = ":"


class CLSTError(Exception):
    pass


def _split(text: str, separator: str) -> list[str]:
    parts = text.split(separator)
    # trailing empty parts carry no data
    while parts and parts[-1] == "":
        parts.pop()
    return parts


class CLSTTable:
    def __init__(self, path: str | Path | None = None, enable_logger: bool = True):
        self.logger = Logger(config={"name": "CLST", "is_enabled": enable_logger}).logger
        self.columns: list[list[str]] = []
        self.path = Path(path) if path is not None else None
        if self.path is not None:
            self.load(self.path)

    @classmethod
    def parse(cls, text: str) -> "CLSTTable":
        table = cls()
        table.columns = [_split(column, ENTRY_SEPARATOR) for column in _split(text, COLUMN_SEPARATOR)]
        return table

    def load(self, path: str | Path) -> None:
        path = Path(path)
        text = path.read_text(encoding="utf-8")
        self.columns.extend(_split(column, ENTRY_SEPARATOR) for column in _split(text, COLUMN_SEPARATOR))
        self.logger.info(f"Loaded {len(self.columns)} columns from {path}")

    def _require_columns(self) -> None:
        if not self.columns:
            raise CLSTError("No columns present")

    def get_entry(self, column: int, entry: int) -> str:
        self._require_columns()
        return self.columns[column][entry]

    def get_column(self, column: int) -> list[str]:
        self._require_columns()
        return self.columns[column]

    def overwrite_entry(self, column: int, entry: int, value: str) -> None:
        self._require_columns()
        self.columns[column][entry] = value

    def overwrite_column(self, column: int, values: list[str]) -> None:
        self._require_columns()
        self.columns[column] = list(values)

    def add_column(self, values: list[str]) -> None:
        self.columns.append(list(values))

    def dumps(self) -> str:
        return "".join(ENTRY_SEPARATOR.join(column) + COLUMN_SEPARATOR for column in self.columns)

    def save(self) -> Path:
        if self.path is None:
            raise CLSTError("No file loaded")
        return self.write(self.path)

    def write(self, path: str | Path, change_file: bool = False) -> Path:
        path = Path(path)
        if change_file:
            self.path = path
        path.write_text(self.dumps(), encoding="utf-8")
        self.logger.info(f"Wrote {len(self.columns)} columns to {path}")
        return path
