"""Validation of weight matrices before they reach the sampler.

Malformed input is rejected up front so that no NaN or infinity from the
Fisher transform can propagate through the Gibbs iterations.
"""

import logging

import numpy as np

log = logging.getLogger(__name__)

SYMMETRY_ATOL: float = 1e-10


class WeightMatrixError(ValueError):
    """Raised when a weight matrix is not a valid sampler input."""


def weight_matrix_errors(weights: np.ndarray) -> list[str]:
    """Check a weight matrix against the sampler's input contract.

    Checks (cheapest first):
    1. Two-dimensional and square
    2. Non-empty
    3. All entries finite
    4. Symmetric within SYMMETRY_ATOL
    5. All entries strictly inside (-1, 1)

    Args:
        weights: Candidate n x n weight matrix.

    Returns:
        List of error strings (empty = valid matrix).
    """
    errors: list[str] = []
    W = np.asarray(weights)

    # 1. Shape
    if W.ndim != 2 or W.shape[0] != W.shape[1]:
        errors.append(f"Weight matrix must be square 2-D, got shape {W.shape}")
        return errors

    # 2. Size
    if W.shape[0] == 0:
        errors.append("Weight matrix is empty")
        return errors

    if not np.issubdtype(W.dtype, np.number) or np.iscomplexobj(W):
        errors.append(f"Weight matrix must be real-valued, got dtype {W.dtype}")
        return errors
    W = W.astype(np.float64)

    # 3. Finite
    n_nonfinite = int((~np.isfinite(W)).sum())
    if n_nonfinite:
        errors.append(f"{n_nonfinite} non-finite entries (NaN or inf)")
        return errors

    # 4. Symmetry
    max_asym = float(np.abs(W - W.T).max())
    if max_asym > SYMMETRY_ATOL:
        errors.append(
            f"Weight matrix is not symmetric: max |W - W.T| = {max_asym:.3g}"
        )

    # 5. Open interval (-1, 1)
    out_of_domain = (W <= -1.0) | (W >= 1.0)
    if out_of_domain.any():
        i, j = np.argwhere(out_of_domain)[0]
        errors.append(
            f"{int(out_of_domain.sum())} entries outside (-1, 1), "
            f"first at ({i}, {j}) = {W[i, j]:.6g}"
        )

    return errors


def validate_weight_matrix(weights: np.ndarray) -> np.ndarray:
    """Validate a weight matrix and return it as a float64 array.

    Raises:
        WeightMatrixError: Listing every problem found.
    """
    errors = weight_matrix_errors(weights)
    if errors:
        log.warning("Rejected weight matrix: %s", "; ".join(errors))
        raise WeightMatrixError("Invalid weight matrix: " + "; ".join(errors))
    return np.asarray(weights, dtype=np.float64)
