# Copyright (c) Meta Platforms, Inc. and affiliates.
#
# This source code is licensed under the MIT license found in the
# LICENSE file in the root directory of this source tree.

"""Compares inertia strategies on Rastrigin's function, with and without dissipative chaos."""
import chaospso as cp

configurations = {
    "linear": dict(inertia="linear"),
    "chaotic": dict(inertia="chaotic"),
    "chaotic+dissipative": dict(inertia=cp.inertia.Chaotic(0.4, 0.9), cv=0.02, cl=0.01),
    "reseed": dict(inertia="linear", stagnation=50, stagnation_policy="reseed"),
}
for name, config in configurations.items():
    params = cp.SwarmParams(dims=10, max=5.12, min=-5.12, iterations=2000, target=1e-6, **config)
    results = [cp.Swarm(params, None, cp.corefuncs.rastrigin, seed=seed).solve() for seed in range(5)]
    fitnesses = sorted(r.fitness for r in results)
    print(f"{name:>20}: median {fitnesses[2]:.4f}, best {fitnesses[0]:.4f}")
