# Copyright (c) Meta Platforms, Inc. and affiliates.
#
# This source code is licensed under the MIT license found in the
# LICENSE file in the root directory of this source tree.

"""Inertia weight strategies.

The inertia weight damps the previous velocity of a particle at each update.
Strategies are chosen once, when building :code:`SwarmParams`, either by
instance or by registered name.
"""
import chaospso.common.typing as tp
from chaospso.common import tools as cptools
from chaospso.common.decorators import Registry


UNSET_CHAOS = -1.0


class InertiaContext:
    """Information available to a strategy when computing an inertia weight.

    Each particle owns one context. The swarm-level fields (:code:`epoch`,
    :code:`iterations`) are refreshed before each computation, while
    :code:`chaos` evolves with the particle and is only used by chaotic strategies.

    Parameters
    ----------
    iterations: int
        total number of epochs configured for the swarm
    random: RandomLike
        random generator of the particle owning the context
    """

    def __init__(self, iterations: int, random: tp.RandomLike) -> None:
        self.iterations = iterations
        self.random = random
        self.epoch = 0
        self.chaos = UNSET_CHAOS

    def __repr__(self) -> str:
        name = self.__class__.__name__
        return f"{name}(epoch={self.epoch}, iterations={self.iterations}, chaos={self.chaos})"


class InertiaStrategy:
    """Base class of inertia weight strategies.
    Subclasses must implement :code:`weight`, and take only keyword arguments with
    defaults in their constructor so that they can be instantiated from their name.
    """

    def weight(self, context: InertiaContext) -> float:
        raise NotImplementedError

    def __repr__(self) -> str:
        diff = cptools.different_from_defaults(instance=self)
        params = ", ".join(f"{x}={y!r}" for x, y in sorted(diff.items()))
        return f"{self.__class__.__name__}({params})"

    def __eq__(self, other: tp.Any) -> bool:
        return self.__class__ == other.__class__ and self.__dict__ == other.__dict__


registry: Registry[tp.Type[InertiaStrategy]] = Registry()


@registry.register_as("constant")
class Constant(InertiaStrategy):
    """Constant inertia weight"""

    def __init__(self, value: float = 0.7) -> None:
        self.value = value

    def weight(self, context: InertiaContext) -> float:
        return self.value


@registry.register_as("linear")
class Linear(InertiaStrategy):
    """Inertia weight decreasing linearly from :code:`max` at epoch 0
    to :code:`min` at the last configured epoch.
    """

    def __init__(self, min: float = 0.4, max: float = 0.9) -> None:  # pylint: disable=redefined-builtin
        self.min = min
        self.max = max

    def weight(self, context: InertiaContext) -> float:
        return self.max - ((self.max - self.min) / context.iterations) * context.epoch


@registry.register_as("chaotic")
class Chaotic(InertiaStrategy):
    """Linearly decreasing inertia weight mixed with a logistic map term.

    The chaotic term :code:`k` is seeded from the particle random generator
    on first use, then follows :code:`k <- 4 k (1 - k)` at each call.
    The weight is :code:`(max - min) (iterations - epoch) / iterations + min k`.

    Reference
    ---------
    Y. Feng, G.-F. Teng, A.-X. Wang and Y.-M. Yao, Chaotic Inertia Weight in Particle
    Swarm Optimization, ICICIC 2007.
    """

    def __init__(self, min: float = 0.4, max: float = 0.9) -> None:  # pylint: disable=redefined-builtin
        self.min = min
        self.max = max

    def weight(self, context: InertiaContext) -> float:
        if context.chaos == UNSET_CHAOS:
            context.chaos = context.random.next()
        k = 4.0 * context.chaos * (1.0 - context.chaos)
        context.chaos = k
        span = (self.max - self.min) * (context.iterations - context.epoch) / context.iterations
        return span + self.min * k


def get_strategy(strategy: tp.Union[str, InertiaStrategy]) -> InertiaStrategy:
    """Returns the strategy instance, instantiating registered names with their defaults"""
    if isinstance(strategy, InertiaStrategy):
        return strategy
    if isinstance(strategy, str) and strategy in registry:
        return registry[strategy]()
    raise ValueError(f"Unknown inertia strategy {strategy!r} (registered: {sorted(registry)})")
