"""Synthetic weighted networks drawn from a Weighted Stochastic Block Model.

Nodes are laid out in contiguous communities. Each off-diagonal weight is
drawn on the transformed scale from the Normal distribution of its block
pair and mapped back to (-1, 1) with the inverse Fisher transform.
"""

import logging

import numpy as np

from src.config.experiment import SimulationConfig
from src.weights.transform import fisher_transform, inverse_fisher_transform
from src.weights.types import SimulatedNetwork

log = logging.getLogger(__name__)

DEFAULT_BLOCK_VARIANCE: float = 0.1


def build_block_means(K: int, mu_in: float, mu_out: float) -> np.ndarray:
    """K x K correlation-scale block means: mu_in on the diagonal, mu_out elsewhere."""
    means = np.full((K, K), mu_out, dtype=np.float64)
    np.fill_diagonal(means, mu_in)
    return means


def default_block_sizes(n: int, K: int) -> np.ndarray:
    """floor(n / K) nodes for the first K - 1 communities, the remainder in the last."""
    sizes = np.full(K, n // K, dtype=np.int64)
    sizes[-1] = n - sizes[:-1].sum()
    return sizes


def simulate_wsbm(
    n: int,
    K: int,
    mu_true: np.ndarray,
    rng: np.random.Generator,
    var_true: np.ndarray | None = None,
    block_sizes: np.ndarray | None = None,
) -> SimulatedNetwork:
    """Simulate a symmetric WSBM weight matrix.

    Only the upper triangle (k <= kk) of mu_true and var_true is read, so
    lower-triangle entries are ignored.

    Args:
        n: Number of nodes.
        K: Number of communities.
        mu_true: K x K block means on the correlation scale, inside (-1, 1).
        rng: numpy random Generator for reproducibility.
        var_true: K x K block variances on the transformed scale.
            Defaults to DEFAULT_BLOCK_VARIANCE everywhere.
        block_sizes: Length-K community sizes summing to n.
            Defaults to default_block_sizes(n, K).

    Returns:
        SimulatedNetwork with a zero diagonal.

    Raises:
        ValueError: If shapes or block sizes are inconsistent.
    """
    mu_true = np.asarray(mu_true, dtype=np.float64)
    if mu_true.shape != (K, K):
        raise ValueError(f"mu_true must have shape ({K}, {K}), got {mu_true.shape}")
    if var_true is None:
        var_true = np.full((K, K), DEFAULT_BLOCK_VARIANCE)
    var_true = np.asarray(var_true, dtype=np.float64)
    if var_true.shape != (K, K):
        raise ValueError(
            f"var_true must have shape ({K}, {K}), got {var_true.shape}"
        )
    if block_sizes is None:
        block_sizes = default_block_sizes(n, K)
    block_sizes = np.asarray(block_sizes, dtype=np.int64)
    if block_sizes.shape != (K,) or block_sizes.sum() != n or (block_sizes < 0).any():
        raise ValueError(
            f"block_sizes must be {K} non-negative counts summing to {n}, "
            f"got {block_sizes.tolist()}"
        )

    mu_true_f = fisher_transform(mu_true)
    z_true = np.repeat(np.arange(K), block_sizes)

    # Upper-triangle lookup: parameters of (z_i, z_j) live at [min, max]
    iu, ju = np.triu_indices(n, k=1)
    lo = np.minimum(z_true[iu], z_true[ju])
    hi = np.maximum(z_true[iu], z_true[ju])
    draws = rng.normal(mu_true_f[lo, hi], np.sqrt(var_true[lo, hi]))

    weights_f = np.zeros((n, n), dtype=np.float64)
    weights_f[iu, ju] = draws
    weights_f[ju, iu] = draws

    log.info(
        "Simulated WSBM network (n=%d, K=%d, block sizes=%s)",
        n, K, block_sizes.tolist(),
    )
    return SimulatedNetwork(
        weights=inverse_fisher_transform(weights_f),
        z_true=z_true,
        mu_true=mu_true,
        var_true=var_true,
        n=n,
        K=K,
    )


def simulate_from_config(
    config: SimulationConfig, rng: np.random.Generator
) -> SimulatedNetwork:
    """Simulate a network with equal block variances from a SimulationConfig."""
    mu_true = build_block_means(config.K, config.mu_in, config.mu_out)
    var_true = np.full((config.K, config.K), config.var)
    return simulate_wsbm(config.n, config.K, mu_true, rng, var_true=var_true)
