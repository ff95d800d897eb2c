"""Fisher z-transform between bounded weights and unrestricted real values.

Weights in (-1, 1), such as correlations, are mapped onto the real line so
that block-pair parameters can be modelled as Gaussian quantities.
"""

import numpy as np


def fisher_transform(weights: np.ndarray) -> np.ndarray:
    """Elementwise 0.5 * ln((1 + w) / (1 - w)).

    Monotone and bijective on (-1, 1). Entries at or beyond +/-1 produce
    +/-inf or NaN; callers validate first with validate_weight_matrix.

    Args:
        weights: Array of weights strictly inside (-1, 1).

    Returns:
        Float64 array of the same shape with unrestricted real values.
    """
    w = np.asarray(weights, dtype=np.float64)
    return 0.5 * np.log((1.0 + w) / (1.0 - w))


def inverse_fisher_transform(transformed: np.ndarray) -> np.ndarray:
    """Map transformed weights back to (-1, 1): (e^{2x} - 1) / (e^{2x} + 1).

    This is tanh, which stays finite for large |x| where the explicit
    exponential ratio would overflow.
    """
    return np.tanh(np.asarray(transformed, dtype=np.float64))
