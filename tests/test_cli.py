"""Tests for the normalize command line tool."""

import pytest

import normalize
from gfc import LSTFormatter


def write_inputs(directory, sample_text):
    directory.mkdir()
    (directory / "window.lst").write_bytes(sample_text.encode("utf-8"))
    (directory / "notes.txt").write_text("ignored", encoding="utf-8")
    return directory


def test_collect_inputs_directory(tmp_path, sample_text):
    source = write_inputs(tmp_path / "in", sample_text)
    assert [p.name for p in normalize.collect_inputs(source)] == ["window.lst"]

def test_collect_inputs_single_file(tmp_path):
    path = tmp_path / "one.lst"
    path.write_text("", encoding="utf-8")
    assert normalize.collect_inputs(path) == [path]

def test_collect_inputs_missing(tmp_path):
    with pytest.raises(FileNotFoundError):
        normalize.collect_inputs(tmp_path / "nope")

def test_collect_inputs_empty_directory(tmp_path):
    with pytest.raises(FileNotFoundError):
        normalize.collect_inputs(tmp_path)

def test_normalize_text_drops_comments(sample_text):
    text = normalize.normalize_text(sample_text, LSTFormatter(line_separator="\n"))
    assert "#" not in text
    assert text.splitlines()[0] == "class Window:"
    assert 'str title = "Main Window"' in text

def test_main_writes_outputs(tmp_path, sample_text, capsys):
    source = write_inputs(tmp_path / "in", sample_text)
    output = tmp_path / "out"
    normalize.main([str(source), "-o", str(output), "--lf", "--indent", "  "])
    written = (output / "window.lst").read_bytes().decode("utf-8")
    assert "\r\n" not in written
    assert "  int width = 800\n" in written
    assert "Wrote" in capsys.readouterr().out

def test_main_crlf_by_default(tmp_path, sample_text):
    source = write_inputs(tmp_path / "in", sample_text)
    output = tmp_path / "out"
    normalize.main([str(source / "window.lst"), "-o", str(output)])
    assert b"class Window:\r\n" in (output / "window.lst").read_bytes()

def test_parse_failure_names_file(tmp_path):
    bad = tmp_path / "bad.lst"
    bad.write_text("class A:\r\nint x = nope\r\nend\r\n", encoding="utf-8")
    with pytest.raises(RuntimeError, match="bad.lst"):
        normalize.main([str(bad), "-o", str(tmp_path / "out")])
