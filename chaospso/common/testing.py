# Copyright (c) Meta Platforms, Inc. and affiliates.
#
# This source code is licensed under the MIT license found in the
# LICENSE file in the root directory of this source tree.

import inspect
import typing as tp
try:
    import pytest
except ImportError:
    pass  # makes most of this module usable without pytest
import numpy as np


def printed_assert_equal(actual: tp.Any, desired: tp.Any, err_msg: str = '') -> None:
    try:
        np.testing.assert_equal(actual, desired, err_msg=err_msg)
    except AssertionError as e:
        print("\n" + "# " * 12 + "DEBUG MESSAGE " + "# " * 12)
        print(f"Expected: {desired}\nbut got:  {actual}")
        raise e


def assert_non_increasing(values: tp.Sequence[float], err_msg: str = "") -> None:
    """Asserts that a sequence never increases, with the position of the first failure.
    This function should only be used in tests.
    """
    for k, (previous, current) in enumerate(zip(values, values[1:])):
        if current > previous:
            message = f"{err_msg}\nValue increased at index {k + 1}: {previous} -> {current}"
            raise AssertionError(message.strip())


class parametrized:
    """Simplified decorator API for specifying named parametrized test with pytests
    (like with old "genty" package)
    See example of use in test_testing

    Parameters
    ----------
    **kwargs:
        name of the argument is converted as id of the experiments, and the provided tuple
        contains a value for each of the arguments of the underlying function (in the definition order).
    """

    def __init__(self, **kwargs: tp.Tuple[tp.Any, ...]):
        self.ids = sorted(kwargs)
        self.params = tuple(kwargs[name] for name in self.ids)
        assert self.params
        self.num_params = len(self.params[0])
        assert all(isinstance(p, (tuple, list)) for p in self.params)
        assert all(self.num_params == len(p) for p in self.params[1:])

    def __call__(self, func: tp.Callable[..., None]) -> tp.Any:  # type is lost here :(
        names = list(inspect.signature(func).parameters.keys())
        assert len(names) == self.num_params, f"Parameter names: {names}"
        params = self.params if self.num_params > 1 else [p[0] for p in self.params]
        return pytest.mark.parametrize(",".join(names), params, ids=self.ids)(func)


class SequenceRandom:
    """Random generator replaying a given sequence of draws in [0, 1), for tests.
    It implements the same interface as :code:`UniformRandom`.
    """

    def __init__(self, draws: tp.Iterable[float]) -> None:
        self._draws = list(draws)
        self.num_draws = 0

    def next(self) -> float:
        if self.num_draws >= len(self._draws):
            raise AssertionError(f"Only {len(self._draws)} draws were provided")
        value = self._draws[self.num_draws]
        self.num_draws += 1
        return value

    def between(self, lo: float, hi: float) -> float:
        return lo + self.next() * (hi - lo)
