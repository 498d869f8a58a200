"""Uniform random sources threaded through the rendering call chain.

Nothing in the renderer draws from global random state. Every function that
needs randomness takes a ``Sampler`` argument, so a render is reproducible
given a seeded (or scripted) sampler.

Example:
    >>> from pathtracer.core.sampler import NumpySampler, SequenceSampler
    >>> sampler = NumpySampler(seed=7)
    >>> 0.0 <= sampler.random() < 1.0
    True
    >>> scripted = SequenceSampler([0.25, 0.75])
    >>> scripted.random(), scripted.random(), scripted.random()
    (0.25, 0.75, 0.25)
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol

import numpy as np


class Sampler(Protocol):
    """Source of independent uniform floats in [0, 1)."""

    def random(self) -> float:
        """Draw the next uniform float in [0, 1)."""
        ...


class NumpySampler:
    """Sampler backed by a NumPy ``Generator``.

    Args:
        seed: Seed for ``numpy.random.default_rng``. ``None`` seeds from the OS.
    """

    def __init__(self, seed: int | None = None) -> None:
        self._rng = np.random.default_rng(seed)
        self.draws = 0

    def random(self) -> float:
        self.draws += 1
        return float(self._rng.random())


class SequenceSampler:
    """Sampler that replays a fixed list of values, cycling at the end.

    Useful for tests and for reproducing a single path exactly.

    Args:
        values: The floats to replay. Each must lie in [0, 1).

    Raises:
        ValueError: If values is empty or contains a value outside [0, 1).
    """

    def __init__(self, values: Sequence[float]) -> None:
        if len(values) == 0:
            raise ValueError("SequenceSampler needs at least one value")
        for i, value in enumerate(values):
            if not 0.0 <= value < 1.0:
                raise ValueError(f"Value {i} = {value} is outside [0, 1)")
        self._values = [float(v) for v in values]
        self._index = 0
        self.draws = 0

    def random(self) -> float:
        value = self._values[self._index]
        self._index = (self._index + 1) % len(self._values)
        self.draws += 1
        return value
