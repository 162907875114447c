"""Band (categorical) and linear (value) scales in drawing-space pixels."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Dict, Hashable, List, Sequence, Tuple

import numpy as np


@dataclass(frozen=True)
class BandScale:
    """Equal-width slots over ``[0, width]``, centred, with inner/outer padding."""

    domain: Tuple[Hashable, ...]
    width: float
    padding: float = 0.1
    _index: Dict[Hashable, int] = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        index: Dict[Hashable, int] = {}
        for key in self.domain:
            index.setdefault(key, len(index))
        object.__setattr__(self, "_index", index)

    @property
    def step(self) -> float:
        n = len(self._index)
        return self.width / max(1.0, n - self.padding + 2 * self.padding)

    @property
    def bandwidth(self) -> float:
        return self.step * (1 - self.padding)

    @property
    def offset(self) -> float:
        n = len(self._index)
        return (self.width - self.step * (n - self.padding)) * 0.5

    def __contains__(self, key) -> bool:
        return key in self._index

    def __call__(self, key) -> float:
        """Left edge of `key`'s band. Unknown keys raise KeyError."""
        return self.offset + self.step * self._index[key]

    def center(self, key) -> float:
        return self(key) + self.bandwidth / 2


@dataclass(frozen=True)
class LinearScale:
    """Maps ``[0, max_value]`` onto ``[height, 0]``.

    With ``max_value <= 0`` every value maps to ``height`` (the baseline).
    """

    max_value: float
    height: float

    @property
    def degenerate(self) -> bool:
        return self.max_value <= 0

    def __call__(self, value: float) -> float:
        if self.degenerate:
            return self.height
        return self.height - (value / self.max_value) * self.height

    def ticks(self, count: int = 10) -> List[int]:
        """Round tick values (1, 2 or 5 times a power of ten) from 0 to max."""
        if self.degenerate:
            return [0]
        raw = self.max_value / max(count, 1)
        magnitude = 10 ** math.floor(math.log10(raw))
        err = raw / magnitude
        if err >= 7.07:
            step = 10 * magnitude
        elif err >= 3.16:
            step = 5 * magnitude
        elif err >= 1.41:
            step = 2 * magnitude
        else:
            step = magnitude
        # counts and fatalities are integers
        step = max(1, int(round(step)))
        return [int(v) for v in np.arange(0, self.max_value + 1e-9, step)]


def band_scale(keys: Sequence[Hashable], width: float, padding: float = 0.1) -> BandScale:
    return BandScale(tuple(keys), width, padding)


def linear_scale(values: Sequence[float], height: float) -> LinearScale:
    """Value scale over ``[0, max(values)]``; empty input gives the ``[0, 0]`` domain."""
    return LinearScale(max(values, default=0), height)
