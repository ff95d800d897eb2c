"""Truncated stick-breaking mixture weights over K communities."""

import numpy as np


def draw_stick_breaking_weights(
    n_k: np.ndarray, eta0: float, rng: np.random.Generator
) -> tuple[np.ndarray, np.ndarray]:
    """Draw break proportions from their Beta posterior and form log weights.

    For k < K - 1:
        beta_k ~ Beta(1 + n_k[k], eta0 + sum_{l > k} n_k[l])
    and beta_{K-1} = 1, so the last component absorbs the remaining stick
    and the weights sum to one exactly. The log mixture weights are

        log_alpha[k] = log(beta_k) + sum_{l < k} log(1 - beta_l)

    K is fixed; unused components only receive small weight.

    Args:
        n_k: Occupancy counts of shape (K,).
        eta0: Concentration parameter (> 0). Larger values keep more
            components populated.
        rng: numpy random Generator for reproducibility.

    Returns:
        (log_beta, log_alpha), both of shape (K,).
    """
    n_k = np.asarray(n_k)
    K = n_k.shape[0]

    # tail[k] = sum of n_k over components after k
    tail = np.concatenate([np.cumsum(n_k[::-1])[::-1][1:], [0]])

    log_beta = np.zeros(K, dtype=np.float64)
    # A break of exactly 0 or 1 is a legitimate -inf log weight
    with np.errstate(divide="ignore"):
        if K > 1:
            breaks = rng.beta(1.0 + n_k[:-1], eta0 + tail[:-1])
            log_beta[:-1] = np.log(breaks)
        # log(1 - beta_l) accumulated over the breaks before each component
        log_remaining = np.log1p(-np.exp(log_beta[:-1]))
    log_alpha = log_beta.copy()
    log_alpha[1:] += np.cumsum(log_remaining)
    return log_beta, log_alpha
