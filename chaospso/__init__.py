# Copyright (c) Meta Platforms, Inc. and affiliates.
#
# This source code is licensed under the MIT license found in the
# LICENSE file in the root directory of this source tree.

from .common import errors as errors
from .common import typing as typing
from .optimization import callbacks as callbacks
from .optimization import inertia as inertia
from .optimization.params import SwarmParams as SwarmParams
from .optimization.randomness import UniformRandom as UniformRandom
from .optimization.swarm import Swarm as Swarm
from .optimization.swarm import StopReason as StopReason
from .optimization.swarm import SwarmResult as SwarmResult
from .functions import corefuncs as corefuncs


__all__ = [
    "Swarm",
    "SwarmParams",
    "SwarmResult",
    "StopReason",
    "UniformRandom",
    "callbacks",
    "inertia",
    "corefuncs",
    "errors",
    "typing",
]


__version__ = "0.1.0"
