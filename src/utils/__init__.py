"""The utils package contains the file helpers used by bonsai.

Submodules:
  - checkpoint: save/load of the ``"<seed> <branchCount>"`` checkpoint.

Utilities:
  Checkpoint, save_checkpoint, load_checkpoint, default_checkpoint_path
"""

from utils.checkpoint import (
    Checkpoint,
    CheckpointFormatError,
    CheckpointNotFoundError,
    default_checkpoint_path,
    load_checkpoint,
    save_checkpoint,
)

__all__ = [
    "Checkpoint",
    "CheckpointFormatError",
    "CheckpointNotFoundError",
    "default_checkpoint_path",
    "load_checkpoint",
    "save_checkpoint",
]
