"""Sampler data structures: pair statistics, chain state, and run output."""

from dataclasses import dataclass

import numpy as np


@dataclass(frozen=True)
class PairStatistics:
    """Sufficient statistics of transformed weights per community pair.

    All arrays are K x K and only the upper triangle (k <= kk) is filled;
    the diagonal holds within-community pairs. Derived from (W_f, z) and
    never mutated.
    """

    count: np.ndarray  # int, number of contributing weight observations
    weight_sum: np.ndarray  # float, sum of transformed weights
    weight_sum_sq: np.ndarray  # float, sum of squared transformed weights
    centered_sum_sq: np.ndarray  # float, sum_sq - sum^2 / count (0 when count == 0)

    @property
    def K(self) -> int:
        return self.count.shape[0]


@dataclass
class SamplerState:
    """Mutable state of one Gibbs chain, exclusively owned by its sampler.

    z and n_k are updated in place during an assignment sweep; the block
    parameters and stick-breaking weights are replaced wholesale each
    iteration. Invariant: n_k.sum() == len(z).
    """

    z: np.ndarray  # int (n,), community label per node
    n_k: np.ndarray  # int (K,), occupancy counts
    mu: np.ndarray  # float (K, K), block means (upper triangle)
    var: np.ndarray  # float (K, K), block variances (upper triangle)
    log_beta: np.ndarray  # float (K,), log break proportions
    log_alpha: np.ndarray  # float (K,), log mixture weights

    @property
    def K(self) -> int:
        return self.n_k.shape[0]

    @property
    def n(self) -> int:
        return self.z.shape[0]


@dataclass(frozen=True)
class SamplerResult:
    """Output artifacts of one auto_wsbm run.

    Trace arrays are pre-sized before the loop and zero-filled when
    retention is disabled. Uses frozen=True but omits slots=True since
    numpy arrays don't interact well with __slots__.
    """

    z: np.ndarray  # int (n,), final assignment
    z_history: np.ndarray  # int (n_iter, n), assignment after every iteration
    mu: np.ndarray  # float (K, K), final block means
    var: np.ndarray  # float (K, K), final block variances
    mu_samples: np.ndarray  # float (n_iter - burn_in, K, K), post-burn-in means
    var_samples: np.ndarray  # float (n_iter - burn_in, K, K), post-burn-in variances
    initial_log_likelihood: float  # log-posterior of the initial state
    log_posterior: np.ndarray  # float (n_iter,), per-iteration log-posterior
    n_iter: int
    burn_in: int
    store: bool

    @property
    def n_occupied(self) -> int:
        """Number of distinct communities in the final assignment."""
        return int(np.unique(self.z).size)
