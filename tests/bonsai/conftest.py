from __future__ import annotations

from typing import Iterable, List

import pytest

from bonsai.tree import Tree
from bonsai.tree_parameters import TreeOptions


class ScriptedDice:
    """Stand-in for Dice returning pre-recorded faces in order.

    Records the die size of every roll in `calls` so tests can assert which
    probabilistic triggers were consulted.
    """

    def __init__(self, faces: Iterable[int]) -> None:
        self.faces: List[int] = list(faces)
        self.calls: List[int] = []

    def roll_int(self, less_than: int) -> int:
        self.calls.append(less_than)
        if not self.faces:
            raise AssertionError(f"unexpected roll of d{less_than}")
        face = self.faces.pop(0)
        assert 0 <= face < less_than, f"face {face} impossible on d{less_than}"
        return face


@pytest.fixture
def scripted():
    """Factory for ScriptedDice."""
    return ScriptedDice


@pytest.fixture
def options() -> TreeOptions:
    """
    Reference scenario: 20x20 viewport, life 32, multiplier 5, seed 1.
    """
    return TreeOptions(max_x=20, max_y=20, life_start=32, multiplier=5, seed=1)


@pytest.fixture
def tree(options: TreeOptions) -> Tree:
    return Tree(options)
