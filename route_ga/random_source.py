"""
Seedable random source shared by every stochastic step of the optimizer.

Wraps a numpy Generator so that a run can be replayed bit-for-bit from its
seed, and so that concurrent callers can derive independent streams.
"""

import copy
from typing import Optional, Sequence, Tuple

import numpy as np


class RandomSource:
    """
    Pseudo-random generator with the three primitives the GA needs.

    Usage:
        rng = RandomSource(42)
        rng.uniform01()          # float in [0, 1)
        rng.int_below(10)        # int in [0, 10)
        rng.shuffle(stop_ids)    # shuffled copy

    One instance must not be shared by concurrent runs; use spawn() to hand
    each run its own stream.
    """

    def __init__(self, seed: Optional[int] = None,
                 seed_sequence: Optional[np.random.SeedSequence] = None,
                 spawn_key: Sequence[int] = ()):
        """
        Initialize random source.

        Args:
            seed: Explicit seed; None draws fresh OS entropy
            seed_sequence: Pre-built SeedSequence (used by spawn)
            spawn_key: Position in the spawn tree below seed; RandomSource(
                child.seed, spawn_key=child.spawn_key) replays a spawned child
        """
        if seed_sequence is None:
            seed_sequence = np.random.SeedSequence(seed, spawn_key=tuple(spawn_key))
        self._seed_sequence = seed_sequence
        self._rng = np.random.default_rng(seed_sequence)

    @property
    def seed(self) -> int:
        """Root entropy of this source (shared by every spawned descendant)."""
        return int(self._seed_sequence.entropy)

    @property
    def spawn_key(self) -> Tuple[int, ...]:
        """Path from the root source; empty for a root stream."""
        return tuple(int(key) for key in self._seed_sequence.spawn_key)

    def uniform01(self) -> float:
        return float(self._rng.random())

    def int_below(self, n: int) -> int:
        """
        Uniform integer in [0, n).

        Raises:
            ValueError: If n is not positive
        """
        if n <= 0:
            raise ValueError(f"int_below requires a positive bound, got: {n}")
        return int(self._rng.integers(0, n))

    def shuffle(self, sequence: Sequence) -> list:
        """
        Fisher-Yates shuffle built on int_below.

        Args:
            sequence: Items to shuffle (left untouched)

        Returns:
            New list with the items in random order
        """
        items = list(sequence)
        for i in range(len(items) - 1, 0, -1):
            j = self.int_below(i + 1)
            items[i], items[j] = items[j], items[i]
        return items

    def spawn(self, n: int) -> list["RandomSource"]:
        """
        Derive n independent child streams.

        Children are deterministic given this source's seed, and uncorrelated
        with each other and with the parent.
        """
        return [RandomSource(seed_sequence=child) for child in self._seed_sequence.spawn(n)]

    def clone(self) -> "RandomSource":
        """Independent copy whose future draws match this source's."""
        twin = RandomSource.__new__(RandomSource)
        twin._seed_sequence = copy.deepcopy(self._seed_sequence)
        twin._rng = copy.deepcopy(self._rng)
        return twin

    def __repr__(self) -> str:
        if self.spawn_key:
            return f"RandomSource(seed={self.seed}, spawn_key={self.spawn_key})"
        return f"RandomSource(seed={self.seed})"
