"""Explicit random generator construction for reproducible sampler chains.

Every component that draws a random variate receives a numpy Generator
from its caller; nothing in the sampler touches a process-global RNG.
Independent chains get statistically independent streams spawned from a
single master seed.
"""

import numpy as np


def make_rng(seed: int | None) -> np.random.Generator:
    """Create the Generator for one sampler chain.

    Args:
        seed: Master seed value (e.g., 42). None draws fresh OS entropy.

    Returns:
        A PCG64-backed numpy Generator.
    """
    return np.random.default_rng(seed)


def spawn_chain_rngs(seed: int, n_chains: int) -> list[np.random.Generator]:
    """Create independent Generators for n_chains isolated chains.

    Uses SeedSequence.spawn so the streams do not overlap, which simple
    seed offsets (seed, seed + 1, ...) do not guarantee.

    Usage::

        rngs = spawn_chain_rngs(config.seed, 4)
        results = [auto_wsbm(W, k_max, eta0, True, rng=r) for r in rngs]

    Args:
        seed: Master seed value.
        n_chains: Number of chains (>= 1).

    Returns:
        List of n_chains Generators.
    """
    if n_chains < 1:
        raise ValueError(f"n_chains must be >= 1, got {n_chains}")
    children = np.random.SeedSequence(seed).spawn(n_chains)
    return [np.random.default_rng(child) for child in children]


def verify_seed_determinism(seed: int) -> bool:
    """Verify that the same seed reproduces every variate family the sampler uses.

    Draws Beta, Gamma, Normal and categorical variates twice from fresh
    Generators built with the same seed and compares them.

    Args:
        seed: Seed value to test.

    Returns:
        True if both draws are identical.
    """

    def draw(rng: np.random.Generator) -> list[float]:
        return (
            rng.beta(1.0, 2.0, size=5).tolist()
            + rng.gamma(5.5, 2.0, size=5).tolist()
            + rng.normal(0.0, 1.0, size=5).tolist()
            + rng.choice(4, size=5, p=[0.1, 0.2, 0.3, 0.4]).tolist()
        )

    return draw(make_rng(seed)) == draw(make_rng(seed))
