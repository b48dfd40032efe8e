"""CLI for parsing LST files and writing them back in canonical form."""

from __future__ import annotations

import argparse
from pathlib import Path
from typing import Iterable

from gfc import LSTFormatter, parse

DEFAULT_OUTPUT_DIR = Path("out/")
LST_SUFFIX = ".lst"


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Parse LST files and write them back in canonical form.")
    parser.add_argument("input", help="Path to an .lst file or a directory of .lst files.")
    parser.add_argument(
        "-o",
        "--output-dir",
        default=str(DEFAULT_OUTPUT_DIR),
        help="Directory where normalized files should be written (defaults to out/).",
    )
    parser.add_argument(
        "--indent",
        default="",
        help="Indentation to put in front of field lines (default: none).",
    )
    parser.add_argument(
        "--lf",
        action="store_true",
        help="Write LF line endings instead of CRLF.",
    )
    parser.add_argument(
        "--strict-line-endings",
        action="store_true",
        help="Only treat CRLF as a line break when reading.",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log parser warnings (field collisions, missing '=').",
    )
    return parser.parse_args(argv)


def collect_inputs(path: Path) -> list[Path]:
    if path.is_dir():
        files = sorted(p for p in path.glob(f"*{LST_SUFFIX}") if p.is_file())
        if not files:
            raise FileNotFoundError(f"No {LST_SUFFIX} files found in directory: {path}")
        return files
    if path.is_file():
        return [path]
    raise FileNotFoundError(f"Input path does not exist: {path}")


def normalize_text(text: str, formatter: LSTFormatter, strict_line_endings: bool = False, verbose: bool = False) -> str:
    document = parse(
        text,
        lexer_config={"strict_line_endings": strict_line_endings, "enable_logger": verbose},
        parser_config={"enable_logger": verbose},
    )
    return formatter.format_document(document)


def generate(
    files: Iterable[Path],
    output_dir: Path,
    formatter: LSTFormatter,
    strict_line_endings: bool = False,
    verbose: bool = False,
) -> list[Path]:
    output_dir.mkdir(parents=True, exist_ok=True)
    written: list[Path] = []
    for source in files:
        with open(source, "r", encoding="utf-8", newline="") as handle:
            text = handle.read()
        try:
            normalized = normalize_text(text, formatter, strict_line_endings, verbose)
        except Exception as exc:
            raise RuntimeError(f"Failed to parse {source}") from exc
        destination = output_dir / source.name
        with open(destination, "w", encoding="utf-8", newline="") as handle:
            handle.write(normalized)
        try:
            display_path = destination.relative_to(Path.cwd())
        except ValueError:
            display_path = destination
        print(f"Wrote {display_path}")
        written.append(destination)
    return written


def main(argv: list[str] | None = None) -> None:
    args = parse_args(argv)
    files = collect_inputs(Path(args.input))
    formatter = LSTFormatter(indent=args.indent, line_separator="\n" if args.lf else "\r\n")
    generate(
        files,
        Path(args.output_dir),
        formatter,
        strict_line_endings=args.strict_line_endings,
        verbose=args.verbose,
    )


if __name__ == "__main__":
    main()
