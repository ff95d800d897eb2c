"""Sufficient statistics of transformed weights for every community pair."""

import numpy as np

from src.sampler.types import PairStatistics


def occupancy_counts(z: np.ndarray, K: int) -> np.ndarray:
    """Number of nodes carrying each of the K labels."""
    return np.bincount(z, minlength=K).astype(np.int64)


def compute_pair_statistics(
    weights_f: np.ndarray, z: np.ndarray, K: int
) -> PairStatistics:
    """Aggregate transformed weights per unordered community pair (k <= kk).

    Cross pairs (k != kk) use the full n_k x n_kk submatrix and count
    n_k * n_kk observations. Same-community pairs count n_k * (n_k - 1) / 2
    observations while their sums run over the full n_k x n_k submatrix,
    including its diagonal, and are then halved. A zero diagonal in
    weights_f therefore contributes nothing.

    Pure and deterministic: the same (weights_f, z) gives bit-identical
    statistics.

    Args:
        weights_f: Transformed weight matrix of shape (n, n).
        z: Community labels of shape (n,), values in [0, K).
        K: Number of communities (truncation level).

    Returns:
        PairStatistics with upper-triangular K x K arrays.
    """
    n_k = occupancy_counts(z, K)

    # One-hot membership; Z.T @ A @ Z sums A over every (k, kk) submatrix
    Z = np.zeros((z.shape[0], K), dtype=np.float64)
    Z[np.arange(z.shape[0]), z] = 1.0
    block_sum = Z.T @ weights_f @ Z
    block_sum_sq = Z.T @ np.square(weights_f) @ Z

    count = np.triu(np.outer(n_k, n_k))
    np.fill_diagonal(count, n_k * (n_k - 1) // 2)

    weight_sum = np.triu(block_sum)
    weight_sum_sq = np.triu(block_sum_sq)
    diag = np.arange(K)
    weight_sum[diag, diag] /= 2.0
    weight_sum_sq[diag, diag] /= 2.0

    centered_sum_sq = np.zeros((K, K), dtype=np.float64)
    occupied = count > 0
    centered_sum_sq[occupied] = (
        weight_sum_sq[occupied] - weight_sum[occupied] ** 2 / count[occupied]
    )

    return PairStatistics(
        count=count,
        weight_sum=weight_sum,
        weight_sum_sq=weight_sum_sq,
        centered_sum_sq=centered_sum_sq,
    )
