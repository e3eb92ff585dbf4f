from __future__ import annotations

import io
import logging
import os
from pathlib import Path

import pytest

from bonsai.app import MAX_SEED, App, AppSettings
from bonsai.dice import Dice
from bonsai.render import BaseType
from bonsai.tree_parameters import TreeOptions


# -------------------------
# Fixtures
# -------------------------


@pytest.fixture
def terminal(monkeypatch):
    """Pretend the terminal is 60x20."""
    monkeypatch.setattr(
        "bonsai.app.shutil.get_terminal_size", lambda *a, **k: os.terminal_size((60, 20))
    )


@pytest.fixture
def settings() -> AppSettings:
    return AppSettings(options=TreeOptions(seed=42), print_tree=True)


# -------------------------
# Print mode
# -------------------------


def test_run_print_writes_tree_and_pot(terminal, settings: AppSettings):
    out = io.StringIO()
    text = App(settings).run_print(out=out)

    assert out.getvalue() == text + "\n"
    assert "./~~~\\." in text
    assert "\x1b[" not in text
    assert len(text.splitlines()) <= 20


def test_run_print_is_reproducible(terminal, settings: AppSettings):
    a = App(settings).run_print(out=io.StringIO())
    b = App(settings).run_print(out=io.StringIO())
    assert a == b


def test_run_print_color(terminal, settings: AppSettings):
    text = App(settings).run_print(out=io.StringIO(), color=True)
    assert "\x1b[" in text


def test_run_print_with_message(terminal, settings: AppSettings):
    # a short-lived tree stays clear of the message box
    settings.options = TreeOptions(seed=42, life_start=3)
    settings.message = "hi"
    settings.base = BaseType.NONE
    text = App(settings).run_print(out=io.StringIO())
    assert "hi" in text
    assert "./~~~\\." not in text


def test_run_returns_zero_in_print_mode(terminal, settings: AppSettings, capsys):
    assert App(settings).run() == 0
    assert "./~~~\\." in capsys.readouterr().out


# -------------------------
# Tree construction
# -------------------------


def test_new_tree_sizes_to_terminal(settings: AppSettings):
    tree = App(settings).new_tree(80, 24)
    assert (tree.options.max_x, tree.options.max_y) == (79, 19)
    assert tree.seed == 42


def test_following_trees_get_derived_seeds(settings: AppSettings):
    app = App(settings)
    first = app.new_tree(80, 24)
    second = app.new_tree(80, 24)
    assert first.seed == 42
    assert second.seed == Dice(42).roll_int(MAX_SEED) + 1
    assert app.last_tree is second


# -------------------------
# Checkpoints
# -------------------------


def test_load_valid_checkpoint(tmp_path: Path, settings: AppSettings):
    path = tmp_path / "bonsai"
    path.write_text("99 42\n", encoding="utf-8")
    settings.load_path = path
    app = App(settings)
    assert app.settings.options.seed == 99
    assert app.target_branch_count == 42


def test_load_missing_checkpoint_warns(tmp_path: Path, settings: AppSettings, caplog):
    caplog.set_level(logging.WARNING, logger="bonsai")
    settings.load_path = tmp_path / "missing"
    app = App(settings)
    assert app.settings.options.seed == 42
    assert app.target_branch_count == 0
    assert "No checkpoint" in caplog.text


@pytest.mark.parametrize("content", [b"", b"12", b"abc def", b"-1 3", b"\xff\xfe 12\n"])
def test_load_malformed_checkpoint_warns(tmp_path: Path, settings: AppSettings, caplog, content):
    caplog.set_level(logging.WARNING, logger="bonsai")
    path = tmp_path / "bonsai"
    path.write_bytes(content)
    settings.load_path = path
    app = App(settings)
    assert app.settings.options.seed == 42
    assert "malformed" in caplog.text


def test_zero_seed_checkpoint_is_ignored(tmp_path: Path, settings: AppSettings):
    path = tmp_path / "bonsai"
    path.write_text("0 10\n", encoding="utf-8")
    settings.load_path = path
    app = App(settings)
    assert app.settings.options.seed == 42
    assert app.target_branch_count == 0


def test_save_writes_seed_and_branch_count(tmp_path: Path, settings: AppSettings):
    path = tmp_path / "nested" / "bonsai"
    settings.save_path = path
    app = App(settings)
    tree = app.new_tree(60, 20)
    tree.grow()
    app.save()
    assert path.read_text(encoding="utf-8") == f"42 {tree.branch_count}\n"


def test_save_without_tree_is_noop(tmp_path: Path, settings: AppSettings):
    settings.save_path = tmp_path / "bonsai"
    App(settings).save()
    assert not settings.save_path.exists()


def test_run_saves_on_exit(terminal, tmp_path: Path, settings: AppSettings):
    settings.save_path = tmp_path / "bonsai"
    app = App(settings)
    app.run_print(out=io.StringIO())
    app.save()
    seed, count = settings.save_path.read_text(encoding="utf-8").split()
    assert int(seed) == 42
    assert int(count) == app.last_tree.branch_count
