"""Module defining the Dice class, the deterministic random source of bonsai.

Dice wraps a NumPy ``Generator(PCG64(seed))``. Two instances built from the
same explicit seed and asked the same ordered sequence of rolls return
identical sequences, which is what makes tree growth reproducible.
"""

from __future__ import annotations

import logging
from typing import Optional, Sequence, TypeVar

import numpy as np

from .config import time_seed

_LOGGER = logging.getLogger(__name__)

T = TypeVar("T")


class Dice:
    """Seeded pseudo-random source with bounded integer and unit float rolls.

    Attributes:
        seed (int): The originating seed. Only this value is ever persisted;
            the generator state itself is never serialised.
    """

    def __init__(self, seed: Optional[int] = None) -> None:
        """Initialize the dice.

        Args:
            seed: Explicit seed. When None, a wall-clock derived seed is used
                and the resulting rolls are not reproducible across runs.

        Raises:
            ValueError: If `seed` is negative.
        """
        if seed is None:
            seed = time_seed()
        seed = int(seed)
        if seed < 0:
            raise ValueError(f"seed must be non-negative; got {seed}")
        self.seed = seed
        self._gen = np.random.Generator(np.random.PCG64(seed))
        _LOGGER.debug("Initialized Dice with PCG64 seed=%d", seed)

    def roll_int(self, less_than: int) -> int:
        """Return a uniformly distributed integer in ``[0, less_than)``.

        Raises:
            ValueError: If `less_than` is not positive.
        """
        if less_than <= 0:
            raise ValueError(f"roll_int needs a positive range; got {less_than}")
        return int(self._gen.integers(0, less_than))

    def roll_float(self) -> float:
        """Return a uniformly distributed float in ``[0, 1)``."""
        return float(self._gen.random())

    def choice(self, items: Sequence[T]) -> T:
        """Return one element of `items`, picked uniformly.

        Raises:
            ValueError: If `items` is empty.
        """
        if not items:
            raise ValueError("choice() needs a non-empty sequence")
        return items[self.roll_int(len(items))]

    def __repr__(self) -> str:
        """Return a string representation of the dice."""
        return f"Dice(seed={self.seed})"
