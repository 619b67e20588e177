# Copyright (c) Meta Platforms, Inc. and affiliates.
#
# This source code is licensed under the MIT license found in the
# LICENSE file in the root directory of this source tree.

"""Classical cost functions, for testing and demonstrating the swarm.
Information registered with each function provides a usual search box ("bounds")
and the location of the minimum ("optimum"), when it is known and unique.
"""
from math import exp, sqrt
import numpy as np
import chaospso.common.typing as tp
from chaospso.common.decorators import Registry


registry: Registry[tp.Callable[[np.ndarray], float]] = Registry()


@registry.register_with_info(bounds=(-500.0, 500.0), optimum=0.0)
def sphere(x: np.ndarray) -> float:
    """The most classical continuous optimization testbed.

    If you do not solve that one then you have a bug."""
    x = np.asarray(x, dtype=float)
    assert x.ndim == 1
    return float(x.dot(x))


@registry.register_with_info(bounds=(-10.0, 10.0), optimum=(1.0, 3.0))
def booth(x: np.ndarray) -> float:
    """Two dimensional quadratic plate, minimum 0 at (1, 3)."""
    x1, x2 = x
    return float((x1 + 2 * x2 - 7) ** 2 + (2 * x1 + x2 - 5) ** 2)


@registry.register_with_info(bounds=(-5.0, 5.0))
def himmelblau(x: np.ndarray) -> float:
    """Two dimensional function with four identical minima (value 0), one of them at (3, 2)."""
    x1, x2 = x
    return float((x1 ** 2 + x2 - 11) ** 2 + (x1 + x2 ** 2 - 7) ** 2)


@registry.register_with_info(bounds=(-5.12, 5.12), optimum=0.0)
def rastrigin(x: np.ndarray) -> float:
    """Classical multimodal function."""
    x = np.asarray(x, dtype=float)
    cosi = float(np.sum(np.cos(2 * np.pi * x)))
    return float(10 * (len(x) - cosi) + sphere(x))


@registry.register_with_info(bounds=(-5.0, 10.0), optimum=1.0)
def rosenbrock(x: np.ndarray) -> float:
    x = np.asarray(x, dtype=float)
    x_m_1 = x[:-1] - 1
    x_diff = x[:-1] ** 2 - x[1:]
    return float(100 * x_diff.dot(x_diff) + x_m_1.dot(x_m_1))


@registry.register_with_info(bounds=(-32.768, 32.768), optimum=0.0)
def ackley(x: np.ndarray) -> float:
    x = np.asarray(x, dtype=float)
    dim = x.size
    sum_cos = np.sum(np.cos(2 * np.pi * x))
    return float(-20.0 * exp(-0.2 * sqrt(sphere(x) / dim)) - exp(sum_cos / dim) + 20 + exp(1))


@registry.register_with_info(bounds=(-600.0, 600.0), optimum=0.0)
def griewank(x: np.ndarray) -> float:
    """Multimodal function, often used in Bayesian optimization."""
    x = np.asarray(x, dtype=float)
    part1 = sphere(x)
    part2 = np.prod(np.cos(x / np.sqrt(1 + np.arange(len(x)))))
    return 1 + (float(part1) / 4000.0) - float(part2)
