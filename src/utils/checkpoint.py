"""Module providing save/load of bonsai growth checkpoints.

A checkpoint is a single text line ``"<seed> <branchCount>"`` followed by a
newline. Loading it back lets a later run regrow the exact same tree and
fast-forward its animation to the saved branch count.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import NamedTuple, Union

_LOGGER = logging.getLogger(__name__)

PathLike = Union[str, "os.PathLike[str]"]


class CheckpointNotFoundError(FileNotFoundError):
    """Raised when the checkpoint file does not exist (first run)."""


class CheckpointFormatError(ValueError):
    """Raised when the checkpoint file content is malformed."""


class Checkpoint(NamedTuple):
    """Seed and branch count of a previous run."""

    seed: int
    branch_count: int


def default_checkpoint_path() -> Path:
    """Return the default checkpoint location.

    ``$BONSAI_CACHE_FILE`` wins, then ``$XDG_CACHE_HOME/bonsai``, then
    ``~/.cache/bonsai``.
    """
    explicit = os.getenv("BONSAI_CACHE_FILE")
    if explicit:
        return Path(explicit).expanduser()
    cache_home = os.getenv("XDG_CACHE_HOME")
    if cache_home:
        return Path(cache_home).expanduser() / "bonsai"
    return Path.home() / ".cache" / "bonsai"


def format_checkpoint(seed: int, branch_count: int) -> str:
    """Return the checkpoint line for `seed` and `branch_count`."""
    return f"{int(seed)} {int(branch_count)}\n"


def parse_checkpoint(text: str) -> Checkpoint:
    """Parse the first line of a checkpoint file.

    Raises:
        CheckpointFormatError: If a token is missing, not an integer, or negative.
    """
    lines = text.splitlines()
    if not lines or not lines[0].strip():
        raise CheckpointFormatError("checkpoint is empty")

    tokens = lines[0].split()
    if len(tokens) < 2:
        raise CheckpointFormatError(
            f"checkpoint needs '<seed> <branchCount>'; got {lines[0]!r}"
        )
    try:
        seed, branch_count = int(tokens[0], 10), int(tokens[1], 10)
    except ValueError as err:
        raise CheckpointFormatError(f"checkpoint tokens must be integers: {err}") from err
    if seed < 0 or branch_count < 0:
        raise CheckpointFormatError(
            f"checkpoint values must be non-negative; got {seed} {branch_count}"
        )
    return Checkpoint(seed, branch_count)


def save_checkpoint(path: PathLike, seed: int, branch_count: int) -> Path:
    """Write a checkpoint, creating parent directories as needed.

    Args:
        path: Destination file.
        seed: Seed of the tree that was grown.
        branch_count: Number of branches the tree reached.

    Returns:
        The path written.
    """
    target = Path(path).expanduser()
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_text(format_checkpoint(seed, branch_count), encoding="utf-8")
    _LOGGER.info(
        "save_checkpoint: wrote '%s' (seed=%d, branches=%d)", target, seed, branch_count
    )
    return target


def load_checkpoint(path: PathLike) -> Checkpoint:
    """Read a checkpoint.

    Raises:
        CheckpointNotFoundError: If `path` does not exist.
        CheckpointFormatError: If the content is malformed or not UTF-8 text.
        OSError: On any other I/O failure.
    """
    source = Path(path).expanduser()
    try:
        text = source.read_text(encoding="utf-8")
    except FileNotFoundError as err:
        raise CheckpointNotFoundError(f"no checkpoint at '{source}'") from err
    except UnicodeDecodeError as err:
        raise CheckpointFormatError(f"checkpoint is not UTF-8 text: {err}") from err
    checkpoint = parse_checkpoint(text)
    _LOGGER.info(
        "load_checkpoint: read '%s' (seed=%d, branches=%d)",
        source,
        checkpoint.seed,
        checkpoint.branch_count,
    )
    return checkpoint
