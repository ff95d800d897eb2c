"""Data structures for synthetic networks and count-derived correlation matrices."""

from dataclasses import dataclass

import numpy as np


@dataclass(frozen=True)
class SimulatedNetwork:
    """Immutable container for a simulated WSBM weight matrix and its truth.

    Uses frozen=True but omits slots=True since numpy arrays don't
    interact well with __slots__.
    """

    weights: np.ndarray  # float (n x n) symmetric, correlation scale, zero diagonal
    z_true: np.ndarray  # int array of length n, node -> community
    mu_true: np.ndarray  # float (K x K) block means, correlation scale
    var_true: np.ndarray  # float (K x K) block variances, transformed scale
    n: int
    K: int


@dataclass(frozen=True)
class CorrelationMatrices:
    """Taxon-taxon correlation matrices from an abundance count table."""

    compositional: np.ndarray  # correlation of row-normalised proportions
    clr: np.ndarray  # correlation of centred log-ratio transformed data
    kept_columns: np.ndarray  # indices of taxa surviving the prevalence filter
