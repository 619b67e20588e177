# Copyright (c) Meta Platforms, Inc. and affiliates.
#
# This source code is licensed under the MIT license found in the
# LICENSE file in the root directory of this source tree.

import numpy as np
import chaospso.common.typing as tp


class UniformRandom:
    """Uniform random generator used by swarms and particles.

    Parameters
    ----------
    seed: int or None
        seed of the underlying random state. If None, it is drawn from numpy's
        global random state (seeding it with :code:`np.random.seed` therefore
        also seeds every generator created afterwards).

    Note
    ----
    Each instance owns its random state, so that two particles never share a stream.
    """

    def __init__(self, seed: tp.Optional[int] = None) -> None:
        if seed is None:
            seed = int(np.random.randint(2 ** 32, dtype=np.uint32))
        self.seed = int(seed)
        self._state = np.random.RandomState(self.seed)

    def next(self) -> float:
        """Uniform draw in [0, 1)"""
        return float(self._state.random_sample())

    def between(self, lo: float, hi: float) -> float:
        """Uniform draw over the half-open range starting at lo and ending at hi
        (lo may be greater than hi)
        """
        return lo + self.next() * (hi - lo)

    def spawn(self) -> "UniformRandom":
        """Creates a new generator, seeded from this one"""
        return UniformRandom(int(self._state.randint(2 ** 32, dtype=np.uint32)))

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(seed={self.seed})"
