"""Conjugate normal-inverse-gamma updates of block-pair means and variances."""

import numpy as np

from src.config.experiment import PriorConfig
from src.sampler.types import PairStatistics


def draw_block_parameters(
    stats: PairStatistics,
    prior: PriorConfig,
    rng: np.random.Generator,
) -> tuple[np.ndarray, np.ndarray]:
    """Draw (mu, var) for every community pair from its conjugate posterior.

    For each pair k <= kk with count > 0:
        var ~ InvGamma((count + nu0) / 2,
                       (SS0 + centered + n0*count/(n0+count) * (mean - mu0)^2) / 2)
    and var = SS0 for pairs with no observations. Then, after all
    variances are drawn:
        mu ~ Normal((sum + n0*mu0) / (count + n0), var / (count + n0))

    The lower triangle keeps mu = 0 and var = SS0.

    Args:
        stats: Pair statistics from compute_pair_statistics.
        prior: Conjugate prior hyperparameters.
        rng: numpy random Generator for reproducibility.

    Returns:
        (mu, var), both K x K.
    """
    K = stats.K
    iu, ju = np.triu_indices(K)
    count = stats.count[iu, ju].astype(np.float64)
    total = stats.weight_sum[iu, ju]
    centered = stats.centered_sum_sq[iu, ju]

    var = np.full((K, K), prior.ss0, dtype=np.float64)
    occupied = count > 0
    if occupied.any():
        c = count[occupied]
        mean_obs = total[occupied] / c
        shrink = (prior.n0 * c) / (prior.n0 + c)
        scale_post = prior.ss0 + centered[occupied] + shrink * (mean_obs - prior.mu0) ** 2
        # Inverse-gamma draw as the reciprocal of a Gamma(shape, 2 / scale) draw
        precision = rng.gamma((c + prior.nu0) / 2.0, 2.0 / scale_post)
        var[iu[occupied], ju[occupied]] = 1.0 / precision

    mu = np.zeros((K, K), dtype=np.float64)
    post_n = count + prior.n0
    mu[iu, ju] = rng.normal(
        (total + prior.n0 * prior.mu0) / post_n,
        np.sqrt(var[iu, ju] / post_n),
    )
    return mu, var


def block_log_posterior(
    stats: PairStatistics,
    mu: np.ndarray,
    var: np.ndarray,
    prior: PriorConfig,
) -> float:
    """Unnormalised joint log-posterior of the block parameters.

    Sums over pairs k <= kk the Gaussian log-likelihood kernel

        -count/2 ln var - sum_sq/(2 var) + mu sum/var - count mu^2/(2 var)

    and the normal-inverse-gamma prior kernel

        -1/2 ln(var/n0) - n0/(2 var) (mu - mu0)^2 - (nu0/2 + 1) ln var - SS0/(2 var)

    The last term carries the minus sign of the inverse-gamma density. The
    R and C++ auto_WSBM add +SS0/(2 var) instead, so this series differs
    from their logpost_store output by sum_pairs SS0/var. The value is a
    diagnostic only and never feeds back into the sampler.
    """
    iu, ju = np.triu_indices(stats.K)
    count = stats.count[iu, ju].astype(np.float64)
    s = stats.weight_sum[iu, ju]
    ss = stats.weight_sum_sq[iu, ju]
    m = mu[iu, ju]
    v = var[iu, ju]
    log_v = np.log(v)

    loglik = -0.5 * count * log_v - ss / (2.0 * v) + m * s / v - count * m**2 / (2.0 * v)
    log_prior_mu = -0.5 * np.log(v / prior.n0) - prior.n0 / (2.0 * v) * (m - prior.mu0) ** 2
    log_prior_var = -(prior.nu0 / 2.0 + 1.0) * log_v - prior.ss0 / (2.0 * v)
    return float(np.sum(loglik + log_prior_mu + log_prior_var))
