from __future__ import annotations

import random
from typing import Optional

from .pieces import TetrominoType


class PieceRandomizer:
    """Uniform piece source: every kind is equally likely on every draw."""

    def __init__(self, seed: Optional[int] = None) -> None:
        self._kinds = list(TetrominoType)
        self.rng = random.Random(seed)

    def reseed(self, seed: Optional[int]) -> None:
        self.rng.seed(seed)

    def next_kind(self) -> TetrominoType:
        return self.rng.choice(self._kinds)
