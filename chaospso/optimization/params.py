# Copyright (c) Meta Platforms, Inc. and affiliates.
#
# This source code is licensed under the MIT license found in the
# LICENSE file in the root directory of this source tree.

import sys
import numpy as np
import chaospso.common.typing as tp
from chaospso.common import errors
from chaospso.common import tools as cptools
from . import inertia as inertialib


DISABLED = -1
STAGNATION_POLICIES = ("stop", "reseed")
# largest number of decimal digits whose scale 10 ** precision is a finite float
MAX_PRECISION = sys.float_info.max_10_exp
DEFAULT_INERTIA = "linear"


class SwarmParams:
    """Configuration of a particle swarm search.

    Parameters
    ----------
    dims: int
        dimension of the search space
    max: float or sequence of floats
        upper bound of each dimension (a scalar is used for all dimensions)
    min: float or sequence of floats
        lower bound of each dimension (a scalar is used for all dimensions)
    vmax: float or sequence of floats
        velocity cap of each dimension. -1 derives the cap as :code:`|max| + |min|`
    c1: float
        cognitive coefficient (attraction toward the particle best)
    c2: float
        social coefficient (attraction toward the swarm best)
    cv: float
        probability of dissipative velocity scatter at each update, -1 to disable
    cl: float
        probability of dissipative location scatter at each update, -1 to disable
    precision: int
        number of decimal digits positions are rounded to, -1 to disable rounding
    particles: int
        population size
    stagnation: int
        number of epochs without improvement of the swarm best before stagnation is declared
    target: float
        the search stops as soon as the swarm best is lower or equal to this value
    iterations: int
        maximum number of epochs
    inertia: str or InertiaStrategy
        inertia weight strategy, or name of a registered strategy (see :code:`inertia.registry`)
    stagnation_policy: str
        "stop" ends the search on stagnation, "reseed" randomizes part of the population instead
        and lets the search go on until the target or the iteration cap
    reseed_rate: float
        probability for each particle to be reseeded under the "reseed" policy

    Note
    ----
    Parameters are checked at construction and cannot be modified afterwards.
    Use :code:`SwarmParams(**{**params.config(), "c1": 1.5})` to derive a variant.
    """

    # pylint: disable=too-many-arguments,too-many-instance-attributes,redefined-builtin,too-many-locals
    def __init__(
        self,
        dims: int,
        max: tp.BoundValue,
        min: tp.BoundValue,
        vmax: tp.BoundValue = DISABLED,
        c1: float = 2.0,
        c2: float = 2.0,
        cv: float = DISABLED,
        cl: float = DISABLED,
        precision: int = DISABLED,
        particles: int = 30,
        stagnation: int = 100,
        target: float = 0.0,
        iterations: int = 1000,
        inertia: tp.Union[str, inertialib.InertiaStrategy] = DEFAULT_INERTIA,
        stagnation_policy: str = "stop",
        reseed_rate: float = 0.5,
    ) -> None:
        if int(dims) != dims or dims <= 0:
            raise errors.SwarmConfigurationError(f"dims must be a positive integer (got {dims})")
        self.dims = int(dims)
        self.max = self._as_array("max", max)
        self.min = self._as_array("min", min)
        if np.any(self.max < self.min):
            bad = np.where(self.max < self.min)[0].tolist()
            raise errors.SwarmConfigurationError(
                f"max must be greater or equal to min (fails for dimensions {bad})"
            )
        self.vmax = self._as_array("vmax", vmax)
        if np.any((self.vmax < 0) & (self.vmax != DISABLED)):
            raise errors.SwarmConfigurationError(
                f"vmax entries must be non-negative or {DISABLED} (got {self.vmax})"
            )
        self.c1 = float(c1)
        self.c2 = float(c2)
        self.cv = self._as_probability("cv", cv)
        self.cl = self._as_probability("cl", cl)
        if int(precision) != precision or not DISABLED <= precision <= MAX_PRECISION:
            raise errors.SwarmConfigurationError(
                f"precision must be an integer in [{DISABLED}, {MAX_PRECISION}] (got {precision})"
            )
        self.precision = int(precision)
        self.particles = self._as_positive_int("particles", particles)
        self.stagnation = self._as_positive_int("stagnation", stagnation)
        self.iterations = self._as_positive_int("iterations", iterations)
        self.target = float(target)
        try:
            self.inertia = inertialib.get_strategy(inertia)
        except ValueError as e:
            raise errors.SwarmConfigurationError(str(e)) from e
        if stagnation_policy not in STAGNATION_POLICIES:
            raise errors.SwarmConfigurationError(
                f"stagnation_policy must be one of {STAGNATION_POLICIES} (got {stagnation_policy!r})"
            )
        self.stagnation_policy = stagnation_policy
        if not 0 <= reseed_rate <= 1:
            raise errors.SwarmConfigurationError(f"reseed_rate must be in [0, 1] (got {reseed_rate})")
        self.reseed_rate = float(reseed_rate)
        self._frozen = True

    def _as_array(self, name: str, value: tp.BoundValue) -> np.ndarray:
        array = np.array(value, dtype=float)
        if not array.shape:
            array = np.full(self.dims, float(array))
        if array.shape != (self.dims,):
            raise errors.SwarmConfigurationError(
                f"{name} must be a scalar or have shape ({self.dims},) (got shape {array.shape})"
            )
        if not np.all(np.isfinite(array)):
            raise errors.SwarmConfigurationError(f"{name} must be finite (got {array})")
        array.flags.writeable = False
        return array

    @staticmethod
    def _as_probability(name: str, value: float) -> float:
        if value != DISABLED and not 0 <= value <= 1:
            raise errors.SwarmConfigurationError(f"{name} must be in [0, 1] or {DISABLED} (got {value})")
        return float(value)

    @staticmethod
    def _as_positive_int(name: str, value: int) -> int:
        if int(value) != value or value <= 0:
            raise errors.SwarmConfigurationError(f"{name} must be a positive integer (got {value})")
        return int(value)

    @property
    def resolved_vmax(self) -> np.ndarray:
        """Velocity cap of each dimension, with disabled entries derived from the bounds"""
        derived = np.abs(self.max) + np.abs(self.min)
        return np.where(self.vmax == DISABLED, derived, self.vmax)

    @property
    def velocity_scatter(self) -> bool:
        return self.cv != DISABLED

    @property
    def location_scatter(self) -> bool:
        return self.cl != DISABLED

    def config(self) -> tp.Dict[str, tp.Any]:
        """Returns the constructor arguments matching this configuration"""
        return {x: y for x, y in self.__dict__.items() if not x.startswith("_")}

    def __setattr__(self, name: str, value: tp.Any) -> None:
        if getattr(self, "_frozen", False):
            raise errors.FrozenParamsError(
                f"Cannot set {name!r}, {self.__class__.__name__} is read-only once built"
            )
        super().__setattr__(name, value)

    def __delattr__(self, name: str) -> None:
        raise errors.FrozenParamsError(
            f"Cannot delete {name!r}, {self.__class__.__name__} is read-only once built"
        )

    def __eq__(self, other: tp.Any) -> bool:
        if self.__class__ != other.__class__:
            return False
        mine, theirs = self.config(), other.config()
        return all(
            np.array_equal(y, theirs[x]) if isinstance(y, np.ndarray) else y == theirs[x]
            for x, y in mine.items()
        )

    def __repr__(self) -> str:
        config = self.config()
        if config["inertia"] == inertialib.get_strategy(DEFAULT_INERTIA):
            config["inertia"] = DEFAULT_INERTIA
        diff = cptools.different_from_defaults(instance=self, instance_dict=config)
        params = ", ".join(
            f"{x}={y.tolist() if isinstance(y, np.ndarray) else y!r}" for x, y in diff.items()
        )
        return f"{self.__class__.__name__}({params})"
