# Copyright (c) Meta Platforms, Inc. and affiliates.
#
# This source code is licensed under the MIT license found in the
# LICENSE file in the root directory of this source tree.

import inspect
import typing as tp
import numpy as np


def different_from_defaults(
    *,
    instance: tp.Any,
    instance_dict: tp.Optional[tp.Dict[str, tp.Any]] = None,
) -> tp.Dict[str, tp.Any]:
    """Checks which attributes are different from defaults arguments

    Parameters
    ----------
    instance: object
        the object to inspect
    instance_dict: dict
        the dict corresponding to the instance, if not provided it's self.__dict__

    Note
    ----
    This is convenient for short repr of data structures.
    Arrays are compared element-wise, and arguments without default are always kept.
    """
    defaults = {
        x: y.default
        for x, y in inspect.signature(instance.__class__.__init__).parameters.items()
        if x not in ["self", "__class__"]
    }
    if instance_dict is None:
        instance_dict = instance.__dict__
    defaults = {x: y for x, y in defaults.items() if x in instance_dict}
    return {
        x: instance_dict[x]
        for x, y in defaults.items()
        if not x.startswith("_") and not _equal(y, instance_dict[x])
    }


def _equal(default: tp.Any, value: tp.Any) -> bool:
    if default is inspect.Parameter.empty:
        return False
    if isinstance(value, np.ndarray) or isinstance(default, np.ndarray):
        return bool(np.array_equal(np.broadcast_to(default, np.shape(value)), value))
    return bool(default == value)
