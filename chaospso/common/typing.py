# Copyright (c) Meta Platforms, Inc. and affiliates.
#
# This source code is licensed under the MIT license found in the
# LICENSE file in the root directory of this source tree.

"""Definitions of some convenient types.
"""
# pylint: disable=unused-import
# structures
from typing import Any as Any
from typing import Type as Type
from typing import TypeVar as TypeVar
from typing import Optional as Optional
from typing import Union as Union

# containers
from typing import Dict as Dict
from typing import Tuple as Tuple
from typing import List as List
from typing import Sequence as Sequence
from typing import NamedTuple as NamedTuple
from typing import MutableMapping as MutableMapping

# iterables
from typing import Iterator as Iterator
from typing import Iterable as Iterable

# others
from typing import Callable as Callable
from typing import Hashable as Hashable
from typing import TYPE_CHECKING as TYPE_CHECKING
from typing_extensions import Protocol

#
import numpy as _np


ArrayLike = Union[Tuple[float, ...], List[float], _np.ndarray]
BoundValue = Union[float, int, Sequence[float], _np.ndarray]
FitnessFunction = Callable[[_np.ndarray], float]


# %% Protocol definitions for random generators


class RandomLike(Protocol):
    # pylint: disable=pointless-statement, unused-argument

    def next(self) -> float:
        ...

    def between(self, lo: float, hi: float) -> float:
        ...
