from pathlib import Path

import pytest

from utils.checkpoint import (
    Checkpoint,
    CheckpointFormatError,
    CheckpointNotFoundError,
    default_checkpoint_path,
    format_checkpoint,
    load_checkpoint,
    parse_checkpoint,
    save_checkpoint,
)


def test_save_then_load(tmp_path: Path):
    path = save_checkpoint(tmp_path / "cache" / "bonsai", 99999, 42)
    assert path.read_text(encoding="utf-8") == "99999 42\n"
    assert load_checkpoint(path) == Checkpoint(seed=99999, branch_count=42)


def test_format_checkpoint():
    assert format_checkpoint(7, 0) == "7 0\n"


def test_parse_ignores_extra_tokens_and_lines():
    assert parse_checkpoint("5 6 7\nnoise\n") == Checkpoint(5, 6)
    assert parse_checkpoint("  5   6") == Checkpoint(5, 6)


def test_load_missing(tmp_path: Path):
    with pytest.raises(CheckpointNotFoundError):
        load_checkpoint(tmp_path / "nope")
    assert issubclass(CheckpointNotFoundError, FileNotFoundError)


@pytest.mark.parametrize("text", ["", "\n", "12", "x 3", "3 y", "1.5 2", "-1 2", "1 -2"])
def test_parse_malformed(text: str):
    with pytest.raises(CheckpointFormatError):
        parse_checkpoint(text)


@pytest.mark.parametrize("raw", [b"seed count\n", b"\xff\xfe 12\n"])
def test_load_malformed(tmp_path: Path, raw: bytes):
    path = tmp_path / "bonsai"
    path.write_bytes(raw)
    with pytest.raises(CheckpointFormatError):
        load_checkpoint(path)


def test_default_path_precedence(monkeypatch, tmp_path: Path):
    monkeypatch.setenv("BONSAI_CACHE_FILE", str(tmp_path / "explicit"))
    monkeypatch.setenv("XDG_CACHE_HOME", str(tmp_path / "xdg"))
    assert default_checkpoint_path() == tmp_path / "explicit"

    monkeypatch.delenv("BONSAI_CACHE_FILE")
    assert default_checkpoint_path() == tmp_path / "xdg" / "bonsai"

    monkeypatch.delenv("XDG_CACHE_HOME")
    monkeypatch.setenv("HOME", str(tmp_path))
    assert default_checkpoint_path() == tmp_path / ".cache" / "bonsai"
