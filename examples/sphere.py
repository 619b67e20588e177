# Copyright (c) Meta Platforms, Inc. and affiliates.
#
# This source code is licensed under the MIT license found in the
# LICENSE file in the root directory of this source tree.

"""Minimizes the sphere function over integer positions, until the exact optimum is found."""
import chaospso as cp

params = cp.SwarmParams(dims=2, max=[500, 500], min=[-500, -500], c1=2, c2=2, precision=0, target=0)
swarm = cp.Swarm(params, cp.callbacks.ResultsPrinter(), cp.corefuncs.sphere)
swarm.solve()
