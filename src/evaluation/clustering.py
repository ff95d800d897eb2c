"""Agreement measures between a true and an estimated community partition.

Labels are treated as arbitrary identifiers: all measures are invariant
to relabelling, which matters for stick-breaking samplers where the same
partition can appear under different component indices.
"""

import math

import numpy as np
from scipy.stats import entropy
from sklearn.metrics import (
    adjusted_rand_score,
    mutual_info_score,
    normalized_mutual_info_score,
)


def _label_entropy(labels: np.ndarray) -> float:
    """Shannon entropy (nats) of the partition induced by labels."""
    _, counts = np.unique(labels, return_counts=True)
    return float(entropy(counts))


def _check_lengths(z_true: np.ndarray, z_est: np.ndarray) -> tuple[np.ndarray, np.ndarray]:
    z_true = np.asarray(z_true).ravel()
    z_est = np.asarray(z_est).ravel()
    if z_true.shape != z_est.shape:
        raise ValueError(
            f"Partitions differ in length: {z_true.shape[0]} vs {z_est.shape[0]}"
        )
    if z_true.size == 0:
        raise ValueError("Partitions must be non-empty")
    return z_true, z_est


def mutual_information(z_true: np.ndarray, z_est: np.ndarray) -> float:
    """Mutual information (nats) between two partitions."""
    z_true, z_est = _check_lengths(z_true, z_est)
    return float(mutual_info_score(z_true, z_est))


def normalized_mutual_information(z_true: np.ndarray, z_est: np.ndarray) -> float:
    """MI / sqrt(H(z_true) * H(z_est)), in [0, 1]."""
    z_true, z_est = _check_lengths(z_true, z_est)
    return float(
        normalized_mutual_info_score(z_true, z_est, average_method="geometric")
    )


def normalized_variation_of_information(
    z_true: np.ndarray, z_est: np.ndarray
) -> float:
    """Variation of information divided by ln(n), in [0, 1]; 0 for identical partitions.

    VI = H(z_true) + H(z_est) - 2 MI(z_true, z_est).
    """
    z_true, z_est = _check_lengths(z_true, z_est)
    n = z_true.size
    if n == 1:
        return 0.0
    vi = (
        _label_entropy(z_true)
        + _label_entropy(z_est)
        - 2.0 * mutual_info_score(z_true, z_est)
    )
    # Clamp rounding noise around identical partitions
    return max(vi, 0.0) / math.log(n)


def adjusted_rand_index(z_true: np.ndarray, z_est: np.ndarray) -> float:
    """Adjusted Rand index; 1 for identical partitions, about 0 for chance."""
    z_true, z_est = _check_lengths(z_true, z_est)
    return float(adjusted_rand_score(z_true, z_est))


def clustering_summary(z_true: np.ndarray, z_est: np.ndarray) -> dict[str, float]:
    """All agreement measures in one dict, keyed by short name."""
    return {
        "mi": mutual_information(z_true, z_est),
        "nmi": normalized_mutual_information(z_true, z_est),
        "nvi": normalized_variation_of_information(z_true, z_est),
        "ari": adjusted_rand_index(z_true, z_est),
    }
