# Copyright (c) Meta Platforms, Inc. and affiliates.
#
# This source code is licensed under the MIT license found in the
# LICENSE file in the root directory of this source tree.

import math
import pytest
import numpy as np
import chaospso.common.typing as tp
from chaospso.common import errors
from chaospso.common import testing
from chaospso.functions import corefuncs
from . import inertia
from .params import SwarmParams
from .randomness import UniformRandom
from . import particle as particlelib


class FakeSwarm:
    def __init__(self, dims: int, g: tp.Optional[tp.ArrayLike] = None) -> None:
        self.epoch = 0
        self.g = np.zeros(dims) if g is None else np.array(g, dtype=float)
        self.updates: tp.List[tp.Tuple[tp.List[float], float]] = []

    def update(self, position: np.ndarray, fitness: float) -> None:
        self.updates.append((position.tolist(), fitness))


def _make_particle(
    draws: tp.Sequence[float], x: float, v: float, p: float, best: float, g: float = 0.0, **kwargs: tp.Any
) -> tp.Tuple[particlelib.Particle, FakeSwarm]:
    config: tp.Dict[str, tp.Any] = dict(
        dims=1, max=4, min=-4, vmax=10, c1=1, c2=1, inertia=inertia.Constant(0.5)
    )
    config.update(kwargs)
    swarm = FakeSwarm(1, [g])
    part = particlelib.Particle(swarm, SwarmParams(**config), corefuncs.sphere, testing.SequenceRandom(draws))
    part.x[:] = x
    part.v[:] = v
    part.p[:] = p
    part.best = best
    return part, swarm


def test_randomize() -> None:
    params = SwarmParams(dims=3, max=[1, 10, 100], min=[0, -10, 50])
    swarm = FakeSwarm(3)
    part = particlelib.Particle(swarm, params, corefuncs.sphere, UniformRandom(12))
    assert part.best is None
    part.randomize()
    assert np.all(part.x >= params.min)
    assert np.all(part.x <= params.max)
    assert np.all(np.abs(part.v) <= part.vmax)
    np.testing.assert_array_equal(part.p, part.x)
    np.testing.assert_equal(part.best, corefuncs.sphere(part.x))
    testing.printed_assert_equal(swarm.updates, [(part.x.tolist(), part.best)])


def test_bounds_are_copied() -> None:
    params = SwarmParams(dims=2, max=5, min=-5)
    part = particlelib.Particle(FakeSwarm(2), params, corefuncs.sphere, UniformRandom(0))
    part.max[0] = 12
    np.testing.assert_array_equal(params.max, [5, 5])
    np.testing.assert_array_equal(part.vmax, [10, 10])


def test_epoch_update_rule() -> None:
    part, swarm = _make_particle([0.5, 0.25], x=2.0, v=1.0, p=1.0, best=4.0)
    part.epoch()
    # 0.5 * 1 + 0.5 * (1 - 2) + 0.25 * (0 - 2)
    np.testing.assert_almost_equal(part.v, [-0.5])
    np.testing.assert_almost_equal(part.x, [1.5])
    np.testing.assert_almost_equal(part.p, [1.5])
    assert part.best == 2.25
    assert swarm.updates == [([1.5], 2.25)]


def test_epoch_reads_global_best() -> None:
    part, _ = _make_particle([0.0, 1.0], x=0.0, v=0.0, p=0.0, best=0.0, g=3.0)
    part.epoch()
    np.testing.assert_almost_equal(part.v, [3.0])


@testing.parametrized(
    negative=(0.1, [-0.1]),
    partial=(0.3, [-0.3]),
    no_clamp=(10, [-0.5]),
    frozen=(0, [0.0]),
)
def test_epoch_velocity_clamp(vmax: float, expected: tp.List[float]) -> None:
    part, _ = _make_particle([0.5, 0.25], x=2.0, v=1.0, p=1.0, best=4.0, vmax=vmax)
    part.epoch()
    np.testing.assert_almost_equal(part.v, expected)
    np.testing.assert_almost_equal(part.x, [2.0 + expected[0]])


def test_epoch_velocity_scatter() -> None:
    part, _ = _make_particle([0.5, 0.25, 0.0, 0.8], x=2.0, v=1.0, p=1.0, best=4.0, cv=1.0)
    part.epoch()
    np.testing.assert_almost_equal(part.v, [8.0])
    np.testing.assert_almost_equal(part.x, [10.0])
    assert part.num_velocity_scatters == 1
    assert part.num_location_scatters == 0


def test_epoch_velocity_scatter_not_triggered() -> None:
    part, _ = _make_particle([0.5, 0.25, 0.6], x=2.0, v=1.0, p=1.0, best=4.0, cv=0.5)
    part.epoch()
    np.testing.assert_almost_equal(part.v, [-0.5])
    assert part.num_velocity_scatters == 0


def test_epoch_location_scatter() -> None:
    part, _ = _make_particle([0.5, 0.25, 0.0, 0.75], x=2.0, v=1.0, p=1.0, best=4.0, cl=1.0)
    part.epoch()
    np.testing.assert_almost_equal(part.v, [-0.5])  # velocity is kept
    np.testing.assert_almost_equal(part.x, [2.0])  # -4 + 0.75 * 8
    assert part.num_location_scatters == 1


@testing.parametrized(
    tie_up=(1, 0.25, 1.3),
    tie_integer=(0, 0.5, 2.0),
    down=(0, 0.25, 1.0),
    two_digits=(2, 0.123, 1.12),
)
def test_epoch_precision(precision: int, velocity: float, expected: float) -> None:
    # with x = p = g and a unit inertia, the move is the previous velocity
    part, _ = _make_particle(
        [0.3, 0.6],
        x=1.0,
        v=velocity,
        p=1.0,
        g=1.0,
        best=1.0,
        precision=precision,
        inertia=inertia.Constant(1.0),
    )
    part.epoch()
    np.testing.assert_almost_equal(part.x, [expected])


def test_epoch_no_update_on_tie() -> None:
    part, swarm = _make_particle([0.5, 0.25], x=2.0, v=1.0, p=1.0, best=2.25)
    part.epoch()
    assert part.best == 2.25
    np.testing.assert_array_equal(part.p, [1.0])
    assert not swarm.updates


def test_epoch_no_update_when_worse() -> None:
    part, swarm = _make_particle([0.5, 0.25], x=2.0, v=1.0, p=1.0, best=1.0)
    part.epoch()
    assert part.best == 1.0
    np.testing.assert_array_equal(part.p, [1.0])
    np.testing.assert_almost_equal(part.x, [1.5])
    assert not swarm.updates


def test_epoch_chaotic_state_evolves() -> None:
    part, _ = _make_particle([0.5, 0.25, 0.3], x=2.0, v=1.0, p=1.0, best=4.0, inertia=inertia.Chaotic())
    part.context.epoch = 7
    part.epoch()
    assert part.context.epoch == 0  # refreshed from the swarm
    np.testing.assert_almost_equal(part.context.chaos, 0.84)


def test_reseed_keeps_best() -> None:
    params = SwarmParams(dims=2, max=100, min=50)
    swarm = FakeSwarm(2)
    part = particlelib.Particle(swarm, params, corefuncs.sphere, UniformRandom(1))
    part.randomize()
    part.x[:] = part.p[:] = 0
    part.best = 0.0
    part.reseed()
    assert part.best == 0.0
    np.testing.assert_array_equal(part.p, [0, 0])
    assert np.all(part.x >= 50)
    assert len(swarm.updates) == 1


def _failing(x: np.ndarray) -> float:
    return float(x[int(x[0])])


@testing.parametrized(
    index_error=(lambda x: _failing(np.array([12.0])),),
    value_error=(lambda x: math.sqrt(-1),),
    zero_division=(lambda x: 1 / 0,),
    nan=(lambda x: float("nan"),),
    inf=(lambda x: float("inf"),),
)
def test_evaluate_failure(func: tp.Callable[[np.ndarray], float]) -> None:
    with pytest.warns(errors.BadFitnessWarning):
        value = particlelib.evaluate(func, np.array([1.0, 2.0]))
    assert value == particlelib.WORST_FITNESS


def test_evaluate_propagates_other_errors() -> None:
    with pytest.raises(TypeError):
        particlelib.evaluate(lambda x: None, np.array([1.0]))  # type: ignore


def test_evaluate_works_on_copy() -> None:
    x = np.array([1.0, 2.0])

    def func(y: np.ndarray) -> float:
        y[0] = 12
        return 3.0

    assert particlelib.evaluate(func, x) == 3.0
    np.testing.assert_array_equal(x, [1.0, 2.0])


@testing.parametrized(
    half=(2.5, 0, 3.0),
    negative_half=(-2.5, 0, -2.0),
    digits=(3.14159, 2, 3.14),
    digits_up=(0.125, 2, 0.13),
    large=(123456.789, 1, 123456.8),
    no_digits=(7.0, 3, 7.0),
)
def test_round_half_up(value: float, precision: int, expected: float) -> None:
    np.testing.assert_almost_equal(particlelib.round_half_up(value, precision), expected)


@testing.parametrized(
    large_value=(1e10, 300),
    max_precision=(123.456, 308),
    negative=(-1e300, 100),
)
def test_round_half_up_out_of_float_range(value: float, precision: int) -> None:
    assert particlelib.round_half_up(value, precision) == value


@testing.parametrized(**{f"p{p}": (p,) for p in range(6)})
def test_round_half_up_idempotent(precision: int) -> None:
    rand = UniformRandom(precision)
    for _ in range(500):
        value = rand.between(-1000, 1000)
        rounded = particlelib.round_half_up(value, precision)
        assert particlelib.round_half_up(rounded, precision) == rounded
