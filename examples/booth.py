# Copyright (c) Meta Platforms, Inc. and affiliates.
#
# This source code is licensed under the MIT license found in the
# LICENSE file in the root directory of this source tree.

"""Minimizes Booth's function, logging the improvements of the swarm best."""
import logging
import chaospso as cp

logging.basicConfig(level=logging.INFO)

params = cp.SwarmParams(dims=2, max=10, min=-10, particles=40, stagnation=200)
result = cp.Swarm(params, cp.callbacks.SwarmLogger(), cp.corefuncs.booth, seed=12).solve()
print(
    f"Found {result.position.tolist()} (expected [1, 3]) after {result.epoch} epochs ({result.reason.value})"
)
