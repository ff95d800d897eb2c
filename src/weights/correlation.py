"""Taxon abundance counts to correlation-matrix network inputs.

Builds two weight matrices from a samples x taxa count table: one from
compositional proportions and one from centred log-ratio (CLR) transformed
abundances. Both have a zero diagonal and no entry at 1, so they can be
passed straight to the Fisher transform.
"""

import logging

import numpy as np
from scipy.stats import spearmanr

from src.weights.types import CorrelationMatrices

log = logging.getLogger(__name__)

PREVALENCE_THRESHOLD: float = 0.05  # minimum share of samples with a positive count
CLR_PSEUDOCOUNT: float = 1e-7
UNIT_SHIFT: float = 1e-6


def _correlate(data: np.ndarray, method: str) -> np.ndarray:
    """Column-wise correlation matrix of a samples x taxa array."""
    if data.shape[1] == 1:
        return np.ones((1, 1))
    if method == "spearman":
        rho, _ = spearmanr(data, axis=0)
        rho = np.asarray(rho, dtype=np.float64)
        if rho.ndim == 0:
            # two columns come back as a single coefficient
            return np.array([[1.0, rho], [rho, 1.0]])
        return rho
    return np.corrcoef(data, rowvar=False)


def _neutralise(cor: np.ndarray) -> np.ndarray:
    """Zero the diagonal and shift away from exact +1 correlations."""
    cor = cor.copy()
    np.fill_diagonal(cor, 0.0)
    if np.any(cor >= 1.0):
        cor = cor - UNIT_SHIFT
    np.fill_diagonal(cor, 0.0)
    return cor


def centred_log_ratio(counts: np.ndarray) -> np.ndarray:
    """Row-wise CLR transform with a pseudocount against zero abundances."""
    props = counts / counts.sum(axis=1, keepdims=True) + CLR_PSEUDOCOUNT
    props = props / props.sum(axis=1, keepdims=True)
    log_props = np.log(props)
    # log(x / geometric_mean(x)) == log(x) - mean(log(x))
    return log_props - log_props.mean(axis=1, keepdims=True)


def count_to_correlation(
    counts: np.ndarray, method: str = "spearman"
) -> CorrelationMatrices:
    """Convert a samples x taxa count table to correlation weight matrices.

    Taxa present (count > 0) in no more than PREVALENCE_THRESHOLD of samples
    are dropped first. Samples whose remaining counts are all zero are
    dropped as well, since their proportions are undefined.

    Args:
        counts: Non-negative array of shape (n_samples, n_taxa).
        method: "spearman" (rank correlation) or "pearson".

    Returns:
        CorrelationMatrices with compositional and CLR correlation matrices
        over the kept taxa.

    Raises:
        ValueError: For an unknown method, a non 2-D table, negative counts,
            or when no taxon survives the prevalence filter.
    """
    if method not in ("spearman", "pearson"):
        raise ValueError(f"method must be 'spearman' or 'pearson', got {method!r}")
    counts = np.asarray(counts, dtype=np.float64)
    if counts.ndim != 2:
        raise ValueError(f"counts must be 2-D (samples x taxa), got shape {counts.shape}")
    if (counts < 0).any():
        raise ValueError("counts must be non-negative")

    prevalence = (counts > 0).mean(axis=0)
    kept_columns = np.flatnonzero(prevalence > PREVALENCE_THRESHOLD)
    if kept_columns.size == 0:
        raise ValueError(
            f"No taxon is present in more than {PREVALENCE_THRESHOLD:.0%} of samples"
        )
    data = counts[:, kept_columns]
    data = data[data.sum(axis=1) > 0]

    log.info(
        "Kept %d of %d taxa after prevalence filtering (%d samples)",
        kept_columns.size, counts.shape[1], data.shape[0],
    )

    compositional = data / data.sum(axis=1, keepdims=True)
    cor_comp = _neutralise(_correlate(compositional, method))
    cor_clr = _neutralise(_correlate(centred_log_ratio(data), method))

    return CorrelationMatrices(
        compositional=cor_comp,
        clr=cor_clr,
        kept_columns=kept_columns,
    )
