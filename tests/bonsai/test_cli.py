from __future__ import annotations

import os

import pytest

from bonsai.cli import build_parser, main, settings_from_args
from bonsai.config import Defaults
from bonsai.render import BaseType
from bonsai.tree_parameters import OptionsError
from utils.checkpoint import default_checkpoint_path


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in (
        "BONSAI_LIFE",
        "BONSAI_MULTIPLIER",
        "BONSAI_TIME",
        "BONSAI_WAIT",
        "BONSAI_SEED",
        "BONSAI_LOGFILE",
        "BONSAI_CACHE_FILE",
        "BONSAI_CLAMP_DELTAS",
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def terminal(monkeypatch):
    monkeypatch.setattr(
        "bonsai.app.shutil.get_terminal_size", lambda *a, **k: os.terminal_size((50, 18))
    )


def test_parser_defaults():
    args = build_parser().parse_args([])
    assert args.live is False
    assert args.infinite is False
    assert args.time == Defaults().time_step
    assert args.wait == Defaults().time_wait
    assert args.base is BaseType.LARGE
    assert args.leaf == "&"
    assert args.multiplier == 5
    assert args.life == 32
    assert args.seed is None
    assert args.save is None
    assert args.load is None
    assert args.verbose == 0


def test_parser_flags(tmp_path):
    args = build_parser().parse_args(
        ["-l", "-t", "0.5", "-b", "1", "-c", "&,%", "-M", "8", "-L", "60", "-s", "7", "-vv",
         "-W", str(tmp_path / "save")]
    )
    settings = settings_from_args(args)
    assert settings.live
    assert settings.time_step == 0.5
    assert settings.base is BaseType.SMALL
    assert settings.options.leaves == ("&", "%")
    assert settings.options.multiplier == 8
    assert settings.options.life_start == 60
    assert settings.options.seed == 7
    assert settings.verbosity == 2
    assert settings.save_path == tmp_path / "save"


def test_bare_save_flag_uses_default_path():
    args = build_parser().parse_args(["-W", "-C"])
    assert args.save == default_checkpoint_path()
    assert args.load == default_checkpoint_path()


def test_env_overrides_defaults(monkeypatch):
    monkeypatch.setenv("BONSAI_LIFE", "90")
    args = build_parser(Defaults.from_env()).parse_args([])
    assert args.life == 90


def test_env_seed_used_when_flag_missing(monkeypatch):
    monkeypatch.setenv("BONSAI_SEED", "1234")
    settings = settings_from_args(build_parser().parse_args([]))
    assert settings.options.seed == 1234


@pytest.mark.parametrize(
    "argv",
    [["-M", "30"], ["-L", "201"], ["-s", "0"], ["-s", "-4"], ["-c", "a,,b"]],
)
def test_settings_validation(argv):
    with pytest.raises(OptionsError):
        settings_from_args(build_parser().parse_args(argv))


def test_main_reports_invalid_options(capsys):
    assert main(["-M", "30"]) == 2
    err = capsys.readouterr().err
    assert "usage:" in err
    assert "multiplier" in err


@pytest.mark.parametrize("argv", [["-t", "0"], ["-w", "-1"], ["-b", "7"], ["-t", "soon"]])
def test_argparse_rejects_bad_values(argv):
    with pytest.raises(SystemExit) as exc:
        main(argv)
    assert exc.value.code == 2


def test_main_print_mode(terminal, capsys):
    assert main(["-p", "-s", "42", "-L", "20"]) == 0
    out = capsys.readouterr().out
    assert "./~~~\\." in out

    assert main(["-p", "-s", "42", "-L", "20"]) == 0
    assert capsys.readouterr().out == out


def test_bad_env_seed_exits_2(monkeypatch, capsys):
    monkeypatch.setenv("BONSAI_SEED", "abc")
    assert main(["-p"]) == 2
    err = capsys.readouterr().err
    assert "usage:" in err
    assert "BONSAI_SEED" in err


@pytest.mark.parametrize(
    "name, value",
    [
        ("BONSAI_LIFE", "lots"),
        ("BONSAI_MULTIPLIER", "5.5"),
        ("BONSAI_TIME", "fast"),
        ("BONSAI_CLAMP_DELTAS", "maybe"),
    ],
)
def test_bad_env_defaults_exit_2(monkeypatch, capsys, name, value):
    monkeypatch.setenv(name, value)
    assert main(["-p"]) == 2
    assert "invalid BONSAI_* setting" in capsys.readouterr().err


def test_clamp_from_env_and_flag(monkeypatch):
    assert settings_from_args(build_parser().parse_args([])).options.clamp_deltas is False
    assert settings_from_args(build_parser().parse_args(["--clamp"])).options.clamp_deltas

    monkeypatch.setenv("BONSAI_CLAMP_DELTAS", "yes")
    args = build_parser(Defaults.from_env()).parse_args([])
    assert settings_from_args(args).options.clamp_deltas is True
