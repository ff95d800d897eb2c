"""Sequential Gibbs sweep over node community labels.

Nodes are visited in index order and each new label is written into the
chain state before the next node is scored, so node i + 1 conditions on
the label node i just received. This in-sweep ordering is part of the
sampler's semantics; a batch update over all nodes would be a different
sampler.
"""

import logging
import math

import numpy as np
from scipy.special import logsumexp

from src.sampler.types import SamplerState

log = logging.getLogger(__name__)

_LOG_2PI = math.log(2.0 * math.pi)


def symmetric_block_matrix(upper: np.ndarray) -> np.ndarray:
    """Mirror the upper triangle (k <= kk) so entry [a, b] reads [min, max]."""
    return np.triu(upper) + np.triu(upper, 1).T


def label_log_scores(
    weights_f_row: np.ndarray,
    node: int,
    z: np.ndarray,
    log_alpha: np.ndarray,
    mu_full: np.ndarray,
    log_var_full: np.ndarray,
    inv_var_full: np.ndarray,
) -> np.ndarray:
    """Unnormalised log posterior of each candidate label for one node.

    score[k] = log_alpha[k] + sum_{ii != node} log N(W_f[node, ii] | mu, var)
    with (mu, var) taken from block pair (min(k, z[ii]), max(k, z[ii])).

    Args:
        weights_f_row: Row `node` of the transformed weight matrix, shape (n,).
        node: Index of the node being resampled.
        z: Current labels of all nodes, shape (n,).
        log_alpha: Log mixture weights, shape (K,).
        mu_full: Symmetrised block means, shape (K, K).
        log_var_full: Log of the symmetrised block variances, shape (K, K).
        inv_var_full: Reciprocal of the symmetrised block variances, shape (K, K).

    Returns:
        Array of K log scores.
    """
    others = np.arange(z.shape[0]) != node
    z_others = z[others]
    resid = weights_f_row[others][None, :] - mu_full[:, z_others]
    log_density = -0.5 * (
        _LOG_2PI + log_var_full[:, z_others] + resid**2 * inv_var_full[:, z_others]
    )
    return log_alpha + log_density.sum(axis=1)


def draw_label(log_scores: np.ndarray, rng: np.random.Generator) -> int:
    """Draw a label from the categorical distribution proportional to exp(log_scores).

    Normalises with log-sum-exp. When underflow leaves all mass on one
    label the draw returns that label deterministically.
    """
    probs = np.exp(log_scores - logsumexp(log_scores))
    probs /= probs.sum()
    return int(rng.choice(log_scores.shape[0], p=probs))


def resample_assignments(
    weights_f: np.ndarray, state: SamplerState, rng: np.random.Generator
) -> int:
    """Run one sequential sweep over all nodes, updating state in place.

    For each node i = 0..n-1, scores every candidate community given the
    stick-breaking weights, current block parameters and the current
    labels of all other nodes (including those already moved in this
    sweep), draws a new label, and immediately updates state.z and
    state.n_k.

    Args:
        weights_f: Transformed weight matrix of shape (n, n).
        state: Chain state; z and n_k are mutated.
        rng: numpy random Generator for reproducibility.

    Returns:
        Number of nodes whose label changed.
    """
    mu_full = symmetric_block_matrix(state.mu)
    var_full = symmetric_block_matrix(state.var)
    log_var_full = np.log(var_full)
    inv_var_full = 1.0 / var_full

    z = state.z
    n_k = state.n_k
    n_changed = 0
    for i in range(z.shape[0]):
        scores = label_log_scores(
            weights_f[i], i, z, state.log_alpha,
            mu_full, log_var_full, inv_var_full,
        )
        new_label = draw_label(scores, rng)
        old_label = int(z[i])
        if new_label != old_label:
            n_k[new_label] += 1
            n_k[old_label] -= 1
            z[i] = new_label
            n_changed += 1

    log.debug("Sweep moved %d of %d nodes", n_changed, z.shape[0])
    return n_changed
