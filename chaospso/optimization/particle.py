# Copyright (c) Meta Platforms, Inc. and affiliates.
#
# This source code is licensed under the MIT license found in the
# LICENSE file in the root directory of this source tree.

import sys
import math
import warnings
import numpy as np
import chaospso.common.typing as tp
from chaospso.common import errors
from .params import SwarmParams
from .inertia import InertiaContext


WORST_FITNESS = sys.float_info.max
# failures of the cost function which are considered as "outside of its domain"
_DOMAIN_ERRORS = (ArithmeticError, LookupError, ValueError)


class SwarmLike(tp.Protocol):
    """What a particle needs from its swarm"""

    # pylint: disable=pointless-statement, unused-argument
    epoch: int
    g: np.ndarray

    def update(self, position: np.ndarray, fitness: float) -> None:
        ...


def evaluate(fitness: tp.FitnessFunction, x: np.ndarray) -> float:
    """Evaluates the cost function on a copy of the position.
    Domain failures and non-finite costs are replaced by the worst representable cost.
    """
    try:
        value = float(fitness(np.array(x, copy=True)))
    except _DOMAIN_ERRORS as e:
        warnings.warn(
            f"Cost function failed on {x.tolist()} ({e!r}), using worst cost instead.",
            errors.BadFitnessWarning,
        )
        return WORST_FITNESS
    if not math.isfinite(value):
        warnings.warn(
            f"Cost function returned {value} on {x.tolist()}, using worst cost instead.",
            errors.BadFitnessWarning,
        )
        return WORST_FITNESS
    return value


def round_half_up(value: float, precision: int) -> float:
    """Rounds to the given number of decimal digits, ties going up (toward +inf).
    Values which cannot be scaled to the requested precision are returned unchanged.
    """
    scale = 10.0 ** precision
    scaled = value * scale + 0.5
    if not math.isfinite(scaled):
        return value
    return float(math.floor(scaled) / scale)


class Particle:
    """Candidate solution of a swarm, with its velocity and the memory of its best position.

    Parameters
    ----------
    swarm: Swarm
        the swarm the particle belongs to, read for the global best and notified of improvements
    params: SwarmParams
        configuration of the search
    fitness: callable
        cost function to minimize
    random: RandomLike
        private random generator of the particle

    Note
    ----
    Bounds are copied at construction. The particle is not initialized until
    :code:`randomize` is called (the swarm does it when building its population).
    """

    # pylint: disable=too-many-instance-attributes
    def __init__(
        self, swarm: SwarmLike, params: SwarmParams, fitness: tp.FitnessFunction, random: tp.RandomLike
    ) -> None:
        self._swarm = swarm
        self._params = params
        self._fitness = fitness
        self.random = random
        dims = params.dims
        self.max = np.array(params.max, copy=True)
        self.min = np.array(params.min, copy=True)
        self.vmax = np.array(params.resolved_vmax, copy=True)
        self.x = np.zeros(dims)
        self.p = np.zeros(dims)
        self.v = np.zeros(dims)
        self.best: tp.Optional[float] = None
        self.context = InertiaContext(params.iterations, random)
        self.num_velocity_scatters = 0
        self.num_location_scatters = 0

    def randomize(self) -> None:
        """Draws a random position within the bounds and a random velocity within the caps,
        then evaluates it as the first personal best.
        """
        self._draw()
        self.p[:] = self.x
        self.best = evaluate(self._fitness, self.p)
        self._swarm.update(self.x, self.best)

    def reseed(self) -> None:
        """Draws a new random position and velocity, keeping the memory of the personal best"""
        self._draw()
        self._evaluate_move()

    def _draw(self) -> None:
        for i in range(self._params.dims):
            self.x[i] = self.random.between(self.min[i], self.max[i])
            self.v[i] = 2 * self.vmax[i] * (self.random.next() - 0.5)

    def epoch(self) -> None:
        """Moves the particle once, then updates its personal best if it improved"""
        params = self._params
        rand = self.random
        self.context.epoch = self._swarm.epoch
        for i in range(params.dims):
            rp = rand.next()
            rg = rand.next()
            w = params.inertia.weight(self.context)
            g = self._swarm.g
            v = w * self.v[i] + params.c1 * rp * (self.p[i] - self.x[i]) + params.c2 * rg * (g[i] - self.x[i])
            v = math.copysign(min(abs(v), self.vmax[i]), v)
            if params.velocity_scatter and rand.next() < params.cv:
                v = rand.next() * self.vmax[i]
                self.num_velocity_scatters += 1
            x = self.x[i] + v
            if params.location_scatter and rand.next() < params.cl:
                x = rand.between(-self.max[i], self.max[i])
                self.num_location_scatters += 1
            if params.precision >= 0:
                x = round_half_up(x, params.precision)
            self.x[i] = x
            self.v[i] = v
        self._evaluate_move()

    def _evaluate_move(self) -> None:
        fitness = evaluate(self._fitness, self.x)
        if self.best is None or fitness < self.best:
            self.p[:] = self.x
            self.best = fitness
            self._swarm.update(self.x, fitness)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(x={self.x.tolist()}, best={self.best})"
