# Copyright (c) Meta Platforms, Inc. and affiliates.
#
# This source code is licensed under the MIT license found in the
# LICENSE file in the root directory of this source tree.

import enum
import logging
import numpy as np
import chaospso.common.typing as tp
from chaospso.common import errors
from .params import SwarmParams
from .particle import Particle
from .particle import WORST_FITNESS
from .randomness import UniformRandom
from . import callbacks


logger = logging.getLogger(__name__)
_SwarmCallBack = tp.Callable[["Swarm"], None]


class StopReason(enum.Enum):
    """Why a search stopped. UNKNOWN until a stopping condition fires
    (or if the search was stopped early by a callback).
    """

    TARGET = "target"
    STAGNATION = "stagnation"
    ITERATIONS = "iterations"
    UNKNOWN = "unknown"


class SwarmResult(tp.NamedTuple):
    epoch: int
    fitness: float
    position: np.ndarray
    reason: StopReason


class Swarm:  # pylint: disable=too-many-instance-attributes
    """Population of particles searching for the minimum of a cost function.

    The population is built and randomized at construction, which evaluates
    each particle once. :code:`solve` then moves every particle in order,
    one epoch after the other, until a stopping condition is met.

    Parameters
    ----------
    params: SwarmParams
        configuration of the search
    listener: SwarmListener or None
        notified of personal and global improvements, and of the final results
    fitness: callable
        cost function to minimize, taking a 1d array of size :code:`params.dims`
    seed: int or None
        seed of the swarm random generator, from which each particle generator is seeded.
        Two swarms built with the same seed, parameters and cost function find the same results.

    Note
    ----
    A swarm can only be solved once. Build a new one to run another search.
    """

    def __init__(
        self,
        params: SwarmParams,
        listener: tp.Optional[callbacks.SwarmListener],
        fitness: tp.FitnessFunction,
        seed: tp.Optional[int] = None,
    ) -> None:
        if not isinstance(params, SwarmParams):
            raise errors.SwarmConfigurationError(
                f"params must be a SwarmParams instance (got {type(params)})"
            )
        if not callable(fitness):
            raise errors.SwarmConfigurationError(f"fitness must be callable (got {fitness!r})")
        self.params = params
        self.listener = callbacks.SwarmListener() if listener is None else listener
        self.random = UniformRandom(seed)
        self.g = np.zeros(params.dims)
        self.gbest = WORST_FITNESS
        self.epoch = 0
        self.stagnation = 0
        self.reason = StopReason.UNKNOWN
        self._improved = False
        self._has_best = False
        self._solved = False
        self._callbacks: tp.Dict[str, tp.List[_SwarmCallBack]] = {}
        self.particles: tp.List[Particle] = []
        for _ in range(params.particles):
            particle = Particle(self, params, fitness, self.random.spawn())
            self.particles.append(particle)
            particle.randomize()
        self._improved = False  # initial evaluation is not part of an epoch
        logger.info(
            "Built swarm of %s particles (seed %s), best initial fitness %s",
            params.particles,
            self.random.seed,
            self.gbest,
        )

    @property
    def terminated(self) -> bool:
        return self.reason != StopReason.UNKNOWN

    def register_callback(self, name: str, callback: _SwarmCallBack) -> None:
        """Add a callback called with the swarm at the beginning of each epoch.
        Raising :code:`errors.SwarmEarlyStopping` from it stops the search.

        Parameters
        ----------
        name: str
            name of the event to register the callback for (only :code:`epoch`)
        callback: callable
            a callable taking the swarm as only argument
        """
        assert name in ["epoch"], f'Only "epoch" can have callbacks (not {name})'
        self._callbacks.setdefault(name, []).append(callback)

    def remove_all_callbacks(self) -> None:
        """Removes all registered callables"""
        self._callbacks = {}

    def update(self, position: np.ndarray, fitness: float) -> None:
        """Notifies the swarm of the improvement of a particle personal best.
        The first report is always accepted, so that the global best is an evaluated position.
        """
        self.listener.local_best(self.epoch, fitness, position)
        if fitness < self.gbest or not self._has_best:
            self._has_best = True
            self.g[:] = position
            self.gbest = fitness
            self._improved = True
            logger.debug("Epoch %s: new global best %s at %s", self.epoch, fitness, self.g)
            self.listener.global_best(self.epoch, fitness, self.g)

    def solve(self) -> SwarmResult:
        """Runs the search until a stopping condition is met, then reports the results to the listener

        Returns
        -------
        SwarmResult
            final epoch, best fitness, best position and reason for stopping
        """
        if self._solved:
            raise errors.SwarmRuntimeError("This swarm was already solved, build a new one to search again")
        self._solved = True
        while not self.terminated:
            try:
                for callback in self._callbacks.get("epoch", []):
                    callback(self)
            except errors.SwarmEarlyStopping as e:
                logger.info("Stopping early at epoch %s: %s", self.epoch, e)
                break
            self._sweep()
            self.reason = self._check_termination()
        logger.info(
            "Search ended at epoch %s (%s) with fitness %s", self.epoch, self.reason.value, self.gbest
        )
        position = np.array(self.g, copy=True)
        self.listener.results(self.epoch, self.gbest, position, self.reason)
        return SwarmResult(self.epoch, self.gbest, position, self.reason)

    def _sweep(self) -> None:
        for particle in self.particles:
            particle.epoch()
        self.stagnation = 0 if self._improved else self.stagnation + 1
        self.epoch += 1
        self._improved = False

    def _check_termination(self) -> StopReason:
        params = self.params
        if self.gbest <= params.target:
            return StopReason.TARGET
        if self.epoch >= params.iterations:
            return StopReason.ITERATIONS
        if self.stagnation >= params.stagnation:
            if params.stagnation_policy == "stop":
                return StopReason.STAGNATION
            self._reseed()
        return StopReason.UNKNOWN

    def _reseed(self) -> None:
        reseeded = 0
        for particle in self.particles:
            if self.random.next() < self.params.reseed_rate:
                particle.reseed()
                reseeded += 1
        logger.info("Stagnation at epoch %s: reseeded %s particles", self.epoch, reseeded)
        self.stagnation = 0
        self._improved = False
