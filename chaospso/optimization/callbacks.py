# Copyright (c) Meta Platforms, Inc. and affiliates.
#
# This source code is licensed under the MIT license found in the
# LICENSE file in the root directory of this source tree.

import time
import logging
import numpy as np
import chaospso.common.typing as tp
from chaospso.common import errors

if tp.TYPE_CHECKING:
    from .swarm import Swarm, StopReason  # pylint: disable=cyclic-import

global_logger = logging.getLogger(__name__)


class SwarmListener:
    """Receives the events of a swarm search. All hooks do nothing by default,
    subclasses override the ones they need.
    """

    def results(self, epoch: int, fitness: float, position: np.ndarray, reason: "StopReason") -> None:
        """Called once, when the search ends"""

    def local_best(self, epoch: int, fitness: float, position: np.ndarray) -> None:
        """Called each time a particle improves its own best"""

    def global_best(self, epoch: int, fitness: float, position: np.ndarray) -> None:
        """Called each time the swarm best improves"""


# -------------------------------------------------------------------------------------


class ResultsPrinter(SwarmListener):
    """Prints the results of the search on the console.

    Parameters
    ----------
    print_improvements: bool
        whether to also print each improvement of the swarm best
    """

    def __init__(self, print_improvements: bool = False) -> None:
        self._print_improvements = print_improvements

    def results(self, epoch: int, fitness: float, position: np.ndarray, reason: "StopReason") -> None:
        print(f"Best fitness: {fitness}")
        for i, coordinate in enumerate(position):
            print(f"  x[{i}] = {coordinate}")
        print(f"Epoch: {epoch}")
        print(f"Reason: {reason.value}")

    def global_best(self, epoch: int, fitness: float, position: np.ndarray) -> None:
        if self._print_improvements:
            print(f"Epoch {epoch}, new best {fitness} at {position.tolist()}")


# -------------------------------------------------------------------------------------


class SwarmLogger(SwarmListener):
    """Listener logging the events of the search.

    Parameters
    ----------
    logger:
        given logger that listener will use to log
    log_level:
        log level of the final results and of the swarm best improvements
    local_log_level:
        log level of the particle best improvements (the most frequent event)
    """

    def __init__(
        self,
        *,
        logger: logging.Logger = global_logger,
        log_level: int = logging.INFO,
        local_log_level: int = logging.DEBUG,
    ) -> None:
        self._logger = logger
        self._log_level = log_level
        self._local_log_level = local_log_level

    def results(self, epoch: int, fitness: float, position: np.ndarray, reason: "StopReason") -> None:
        self._logger.log(
            self._log_level,
            "Stopped at epoch %s (%s), best fitness %s at %s",
            epoch,
            reason.value,
            fitness,
            position.tolist(),
        )

    def local_best(self, epoch: int, fitness: float, position: np.ndarray) -> None:
        self._logger.log(self._local_log_level, "Epoch %s, particle best %s", epoch, fitness)

    def global_best(self, epoch: int, fitness: float, position: np.ndarray) -> None:
        self._logger.log(self._log_level, "Epoch %s, swarm best %s at %s", epoch, fitness, position.tolist())


# -------------------------------------------------------------------------------------


class HistoryRecorder(SwarmListener):
    """Records every event of the search, for later inspection.

    Attributes
    ----------
    local_bests: list of (epoch, fitness) tuples
    global_bests: list of (epoch, fitness, position) tuples
    result: (epoch, fitness, position, reason) tuple, or None until the search ends
    """

    def __init__(self) -> None:
        self.local_bests: tp.List[tp.Tuple[int, float]] = []
        self.global_bests: tp.List[tp.Tuple[int, float, np.ndarray]] = []
        self.result: tp.Optional[tp.Tuple[int, float, np.ndarray, "StopReason"]] = None

    def results(self, epoch: int, fitness: float, position: np.ndarray, reason: "StopReason") -> None:
        if self.result is not None:
            raise errors.SwarmRuntimeError("Results were already reported")
        self.result = (epoch, fitness, np.array(position, copy=True), reason)

    def local_best(self, epoch: int, fitness: float, position: np.ndarray) -> None:
        self.local_bests.append((epoch, fitness))

    def global_best(self, epoch: int, fitness: float, position: np.ndarray) -> None:
        # the swarm reuses its array, copy it
        self.global_bests.append((epoch, fitness, np.array(position, copy=True)))


# -------------------------------------------------------------------------------------


class EarlyStopping:
    """Callback for stopping the :code:`solve` method before a stopping condition is met.
    The swarm then reports its results with an unknown stopping reason.

    Parameters
    ----------
    stopping_criterion: func(swarm) -> bool
        function that takes the current swarm as input and returns True
        if the search must be stopped

    Note
    ----
    This callback must be registered on the "epoch" event.

    Example
    -------
    In the following code, the :code:`solve` method will be stopped after the 4th epoch

    >>> early_stopping = EarlyStopping(lambda swarm: swarm.epoch >= 4)
    >>> swarm.register_callback("epoch", early_stopping)
    >>> swarm.solve()
    """

    def __init__(self, stopping_criterion: tp.Callable[["Swarm"], bool]) -> None:
        self.stopping_criterion = stopping_criterion

    def __call__(self, swarm: "Swarm") -> None:
        if self.stopping_criterion(swarm):
            raise errors.SwarmEarlyStopping("Early stopping criterion is reached")

    @classmethod
    def timer(cls, max_duration: float) -> "EarlyStopping":
        """Early stop when max_duration seconds has been reached (from the first epoch)"""
        return cls(_DurationCriterion(max_duration))


class _DurationCriterion:
    def __init__(self, max_duration: float) -> None:
        self._start = float("inf")
        self._max_duration = max_duration

    def __call__(self, swarm: "Swarm") -> bool:
        if np.isinf(self._start):
            self._start = time.time()
        return time.time() > self._start + self._max_duration
