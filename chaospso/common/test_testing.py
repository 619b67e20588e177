# Copyright (c) Meta Platforms, Inc. and affiliates.
#
# This source code is licensed under the MIT license found in the
# LICENSE file in the root directory of this source tree.

import typing as tp
import pytest
import numpy as np
from . import testing


@testing.parametrized(
    increasing=([1, 2], "Value increased at index 1: 1 -> 2"),
    late=([3, 2, 2, 5], "Value increased at index 3: 2 -> 5"),
    constant=([1, 1, 1], ""),
    decreasing=([3, 2.5, -1], ""),
    empty=([], ""),
)
def test_assert_non_increasing(values: tp.List[float], message: str) -> None:
    if not message:
        testing.assert_non_increasing(values)
    else:
        with pytest.raises(AssertionError, match=message):
            testing.assert_non_increasing(values)


def test_printed_assert_equal() -> None:
    testing.printed_assert_equal(0, 0)
    np.testing.assert_raises(AssertionError, testing.printed_assert_equal, 0, 1)


@testing.parametrized(
    single=([0.5], 1),
    several=([0.1, 0.9, 0.3], 3),
)
def test_sequence_random(draws: tp.List[float], expected: int) -> None:
    rand = testing.SequenceRandom(draws)
    values = [rand.next() for _ in range(expected - 1)] + [rand.between(2, 4)]
    np.testing.assert_almost_equal(values[-1], 2 + 2 * draws[-1])
    assert rand.num_draws == expected
    with pytest.raises(AssertionError):
        rand.next()


@testing.parametrized(
    a=(1, 2),
    b=(3, 4),
)
def test_parametrized(x: int, y: int) -> None:
    assert y == x + 1


@testing.parametrized(
    a=(1,),
)
def test_parametrized_single(x: int) -> None:
    assert x == 1
