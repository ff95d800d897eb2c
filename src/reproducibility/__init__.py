"""Reproducibility infrastructure: explicit generators and chain seeding."""

from src.reproducibility.seed import make_rng, spawn_chain_rngs, verify_seed_determinism

__all__ = [
    "make_rng",
    "spawn_chain_rngs",
    "verify_seed_determinism",
]
