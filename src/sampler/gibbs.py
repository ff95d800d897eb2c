"""Gibbs sampler for the nonparametric Weighted Stochastic Block Model.

Each iteration runs the same fixed pipeline over an explicit SamplerState:

1. Stick-breaking weights from current occupancy counts
2. Sequential resampling sweep over node labels
3. Pair statistics from the new labels
4. Conjugate draws of block means and variances
5. Optional log-posterior and trace storage

The number of communities is bounded by k_max and inferred through the
truncated stick-breaking prior: components without nodes keep only prior
mass rather than being removed.
"""

import logging

import numpy as np

from src.config.experiment import PriorConfig, SamplerConfig
from src.sampler.assignment import resample_assignments
from src.sampler.block_params import block_log_posterior, draw_block_parameters
from src.sampler.statistics import compute_pair_statistics, occupancy_counts
from src.sampler.stick_breaking import draw_stick_breaking_weights
from src.sampler.types import PairStatistics, SamplerResult, SamplerState
from src.weights.transform import fisher_transform
from src.weights.validation import validate_weight_matrix

log = logging.getLogger(__name__)


def build_initial_state(
    weights_f: np.ndarray,
    k_max: int,
    prior: PriorConfig,
    rng: np.random.Generator,
) -> tuple[SamplerState, PairStatistics]:
    """Random starting labels plus one conjugate draw of the block parameters.

    The number of initially used labels K_start is uniform on 1..k_max and
    every node gets a uniform label in 0..K_start-1.

    Returns:
        (state, stats) where stats are the pair statistics of the start labels.
    """
    n = weights_f.shape[0]
    k_start = int(rng.integers(1, k_max, endpoint=True))
    z = rng.integers(0, k_start, size=n).astype(np.int64)
    n_k = occupancy_counts(z, k_max)

    stats = compute_pair_statistics(weights_f, z, k_max)
    mu, var = draw_block_parameters(stats, prior, rng)

    state = SamplerState(
        z=z,
        n_k=n_k,
        mu=mu,
        var=var,
        log_beta=np.zeros(k_max, dtype=np.float64),
        log_alpha=np.zeros(k_max, dtype=np.float64),
    )
    log.debug("Initial state: K_start=%d, n_k=%s", k_start, n_k.tolist())
    return state, stats


def gibbs_step(
    weights_f: np.ndarray,
    state: SamplerState,
    eta0: float,
    prior: PriorConfig,
    rng: np.random.Generator,
) -> PairStatistics:
    """Advance the chain by one full iteration, mutating state.

    Returns:
        Pair statistics of the labels after the sweep, which the new block
        parameters were drawn from.
    """
    state.log_beta, state.log_alpha = draw_stick_breaking_weights(
        state.n_k, eta0, rng
    )
    resample_assignments(weights_f, state, rng)
    stats = compute_pair_statistics(weights_f, state.z, state.K)
    state.mu, state.var = draw_block_parameters(stats, prior, rng)
    return stats


def auto_wsbm(
    weights: np.ndarray,
    k_max: int,
    eta0: float,
    store: bool,
    *,
    sampler: SamplerConfig | None = None,
    prior: PriorConfig | None = None,
    rng: np.random.Generator | None = None,
) -> SamplerResult:
    """Fit a WSBM with an inferred number of communities by Gibbs sampling.

    Args:
        weights: Symmetric n x n weight matrix with entries in (-1, 1).
            The diagonal is included in within-community sums, so pass a
            neutral value (0) there to exclude self-pairs.
        k_max: Truncation level of the stick-breaking prior (>= 1).
        eta0: Stick-breaking concentration parameter (> 0).
        store: Retain assignment history, post-burn-in parameter snapshots
            and the log-posterior series. When False those arrays are
            zero-filled and the likelihood arithmetic is skipped.
        sampler: Iteration count, burn-in and progress settings.
        prior: Conjugate prior hyperparameters.
        rng: Generator for every random draw of this chain. Defaults to a
            freshly seeded Generator.

    Returns:
        SamplerResult with final values and traces.

    Raises:
        WeightMatrixError: If the weight matrix is malformed.
        ValueError: If k_max or eta0 is out of range.
    """
    sampler = sampler if sampler is not None else SamplerConfig()
    prior = prior if prior is not None else PriorConfig()
    rng = rng if rng is not None else np.random.default_rng()

    if k_max < 1:
        raise ValueError(f"k_max must be >= 1, got {k_max}")
    if not eta0 > 0:
        raise ValueError(f"eta0 must be > 0, got {eta0}")
    weights = validate_weight_matrix(weights)
    weights_f = fisher_transform(weights)

    n = weights_f.shape[0]
    K = k_max
    n_iter = sampler.n_iter
    burn_in = sampler.burn_in

    log.info(
        "Starting Gibbs sampler: n=%d, k_max=%d, eta0=%g, iterations=%d, burn-in=%d",
        n, K, eta0, n_iter, burn_in,
    )

    # Trace arenas, sized once
    z_history = np.zeros((n_iter, n), dtype=np.int64)
    mu_samples = np.zeros((n_iter - burn_in, K, K), dtype=np.float64)
    var_samples = np.zeros((n_iter - burn_in, K, K), dtype=np.float64)
    log_posterior = np.zeros(n_iter, dtype=np.float64)

    state, stats = build_initial_state(weights_f, K, prior, rng)
    initial_log_likelihood = 0.0
    if store:
        initial_log_likelihood = block_log_posterior(stats, state.mu, state.var, prior)

    next_report = 0
    for it in range(n_iter):
        stats = gibbs_step(weights_f, state, eta0, prior, rng)

        if store:
            log_posterior[it] = block_log_posterior(stats, state.mu, state.var, prior)
            z_history[it] = state.z
            if it >= burn_in:
                mu_samples[it - burn_in] = state.mu
                var_samples[it - burn_in] = state.var

        percent = it * 100 // n_iter
        if percent >= next_report:
            log.info("%d%% has been done", percent)
            next_report = percent - percent % sampler.progress_step + sampler.progress_step

        log.debug(
            "Iteration %d: occupied=%d, n_k=%s",
            it, int((state.n_k > 0).sum()), state.n_k.tolist(),
        )

    log.info(
        "Gibbs sampler finished: %d occupied communities",
        int((state.n_k > 0).sum()),
    )
    return SamplerResult(
        z=state.z.copy(),
        z_history=z_history,
        mu=state.mu,
        var=state.var,
        mu_samples=mu_samples,
        var_samples=var_samples,
        initial_log_likelihood=initial_log_likelihood,
        log_posterior=log_posterior,
        n_iter=n_iter,
        burn_in=burn_in,
        store=store,
    )
