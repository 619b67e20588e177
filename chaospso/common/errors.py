# Copyright (c) Meta Platforms, Inc. and affiliates.
#
# This source code is licensed under the MIT license found in the
# LICENSE file in the root directory of this source tree.

# base classes


class ChaosPSOError(Exception):
    """Base class for error raised by chaospso"""


class ChaosPSOWarning(Warning):
    pass


# errors
# pylint: disable=too-many-ancestors


class SwarmEarlyStopping(StopIteration, ChaosPSOError):
    """Stops the solve loop if raised"""


class SwarmRuntimeError(RuntimeError, ChaosPSOError):
    """Runtime error raised by a swarm"""


class SwarmConfigurationError(ValueError, ChaosPSOError):
    """Inconsistent swarm configuration"""


class FrozenParamsError(AttributeError, ChaosPSOError):
    """Swarm parameters cannot be modified once built"""


# warnings


class ChaosPSORuntimeWarning(RuntimeWarning, ChaosPSOWarning):
    """Runtime warning raised by chaospso"""


class BadFitnessWarning(ChaosPSORuntimeWarning):
    """Cost function failed or returned an unusable value, which was replaced by the worst cost"""
