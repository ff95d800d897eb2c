"""Tests for count-table to correlation-matrix conversion."""

import numpy as np
import pytest

from src.weights.correlation import centred_log_ratio, count_to_correlation
from src.weights.validation import weight_matrix_errors


def _counts(seed: int = 3) -> np.ndarray:
    """40 samples x 6 taxa; taxon 5 appears in a single sample (2.5%)."""
    rng = np.random.default_rng(seed)
    counts = rng.poisson(lam=[20, 5, 50, 10, 30, 0], size=(40, 6)).astype(float)
    counts[0, 5] = 7
    return counts


class TestCountToCorrelation:
    """Filtering, shapes and neutral diagonals."""

    def test_rare_taxon_dropped(self) -> None:
        result = count_to_correlation(_counts())
        assert result.kept_columns.tolist() == [0, 1, 2, 3, 4]
        assert result.compositional.shape == (5, 5)
        assert result.clr.shape == (5, 5)

    @pytest.mark.parametrize("method", ["spearman", "pearson"])
    def test_valid_sampler_inputs(self, method: str) -> None:
        result = count_to_correlation(_counts(), method=method)
        assert weight_matrix_errors(result.compositional) == []
        assert weight_matrix_errors(result.clr) == []

    def test_zero_diagonal(self) -> None:
        result = count_to_correlation(_counts())
        assert np.all(np.diag(result.compositional) == 0.0)
        assert np.all(np.diag(result.clr) == 0.0)

    def test_perfect_correlation_shifted_below_one(self) -> None:
        counts = _counts()
        counts[:, 1] = counts[:, 0]
        result = count_to_correlation(counts)
        assert result.compositional.max() < 1.0
        assert result.clr.max() < 1.0
        assert np.all(np.diag(result.clr) == 0.0)

    def test_two_taxa(self) -> None:
        result = count_to_correlation(_counts()[:, :2])
        assert result.compositional.shape == (2, 2)
        assert result.compositional[0, 1] == result.compositional[1, 0]

    def test_unknown_method_rejected(self) -> None:
        with pytest.raises(ValueError, match="method"):
            count_to_correlation(_counts(), method="kendall")

    def test_negative_counts_rejected(self) -> None:
        counts = _counts()
        counts[2, 2] = -1
        with pytest.raises(ValueError, match="non-negative"):
            count_to_correlation(counts)

    def test_nothing_prevalent_rejected(self) -> None:
        counts = np.zeros((40, 3))
        counts[0, 0] = 1
        with pytest.raises(ValueError, match="No taxon"):
            count_to_correlation(counts)


class TestCentredLogRatio:
    """CLR rows are centred."""

    def test_rows_sum_to_zero(self) -> None:
        clr = centred_log_ratio(_counts()[:, :5])
        np.testing.assert_allclose(clr.sum(axis=1), 0.0, atol=1e-9)

    def test_handles_zero_counts(self) -> None:
        clr = centred_log_ratio(np.array([[0.0, 5.0, 5.0]]))
        assert np.all(np.isfinite(clr))
