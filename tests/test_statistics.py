"""Tests for the pair sufficient-statistics aggregator."""

import numpy as np
import pytest

from src.sampler.statistics import compute_pair_statistics, occupancy_counts


def _weights_f() -> np.ndarray:
    """4 nodes with a zero diagonal; nodes {0, 1} and {2, 3} form the two blocks."""
    return np.array(
        [
            [0.0, 1.0, 0.1, -0.2],
            [1.0, 0.0, 0.3, 0.0],
            [0.1, 0.3, 0.0, 0.5],
            [-0.2, 0.0, 0.5, 0.0],
        ]
    )


class TestOccupancyCounts:
    """Label counting."""

    def test_counts_sum_to_n(self) -> None:
        z = np.array([0, 2, 2, 1, 2])
        n_k = occupancy_counts(z, 4)
        assert n_k.tolist() == [1, 1, 3, 0]
        assert n_k.sum() == 5


class TestPairStatistics:
    """Counts and sums per community pair."""

    def test_within_block_counts(self) -> None:
        stats = compute_pair_statistics(_weights_f(), np.array([0, 0, 1, 1]), 2)
        assert stats.count[0, 0] == 1
        assert stats.count[1, 1] == 1
        assert stats.count[0, 1] == 4

    def test_within_block_sums_halved(self) -> None:
        stats = compute_pair_statistics(_weights_f(), np.array([0, 0, 1, 1]), 2)
        assert stats.weight_sum[0, 0] == pytest.approx(1.0)
        assert stats.weight_sum_sq[0, 0] == pytest.approx(1.0)
        assert stats.weight_sum[1, 1] == pytest.approx(0.5)
        assert stats.weight_sum_sq[1, 1] == pytest.approx(0.25)

    def test_cross_block_sums_full_submatrix(self) -> None:
        stats = compute_pair_statistics(_weights_f(), np.array([0, 0, 1, 1]), 2)
        assert stats.weight_sum[0, 1] == pytest.approx(0.2)
        assert stats.weight_sum_sq[0, 1] == pytest.approx(0.14)

    def test_centered_sum_of_squares(self) -> None:
        stats = compute_pair_statistics(_weights_f(), np.array([0, 0, 1, 1]), 2)
        assert stats.centered_sum_sq[0, 0] == pytest.approx(0.0, abs=1e-12)
        assert stats.centered_sum_sq[0, 1] == pytest.approx(0.14 - 0.2**2 / 4)

    def test_lower_triangle_empty(self) -> None:
        stats = compute_pair_statistics(_weights_f(), np.array([0, 1, 0, 1]), 2)
        assert stats.count[1, 0] == 0
        assert stats.weight_sum[1, 0] == 0.0
        assert stats.weight_sum_sq[1, 0] == 0.0

    def test_label_order_does_not_matter_for_cross_pairs(self) -> None:
        a = compute_pair_statistics(_weights_f(), np.array([0, 0, 1, 1]), 2)
        b = compute_pair_statistics(_weights_f(), np.array([1, 1, 0, 0]), 2)
        assert a.weight_sum[0, 1] == pytest.approx(b.weight_sum[0, 1])
        assert a.weight_sum[0, 0] == pytest.approx(b.weight_sum[1, 1])

    def test_empty_community(self) -> None:
        stats = compute_pair_statistics(_weights_f(), np.array([0, 0, 2, 2]), 3)
        assert stats.count[1, 1] == 0
        assert stats.count[0, 1] == 0
        assert stats.count[1, 2] == 0
        assert stats.centered_sum_sq[1, 1] == 0.0
        assert stats.weight_sum[0, 1] == 0.0

    def test_singleton_community_has_no_within_pairs(self) -> None:
        stats = compute_pair_statistics(_weights_f(), np.array([0, 1, 1, 1]), 2)
        assert stats.count[0, 0] == 0
        assert stats.count[1, 1] == 3
        assert stats.count[0, 1] == 3

    def test_diagonal_included_in_within_sums(self) -> None:
        W_f = _weights_f()
        W_f[0, 0] = 0.4
        stats = compute_pair_statistics(W_f, np.array([0, 0, 1, 1]), 2)
        assert stats.count[0, 0] == 1
        assert stats.weight_sum[0, 0] == pytest.approx((2 * 1.0 + 0.4) / 2)
        assert stats.weight_sum_sq[0, 0] == pytest.approx((2 * 1.0 + 0.16) / 2)

    def test_single_community_counts_all_pairs(self) -> None:
        rng = np.random.default_rng(0)
        A = rng.normal(size=(6, 6))
        W_f = A + A.T
        np.fill_diagonal(W_f, 0.0)
        stats = compute_pair_statistics(W_f, np.zeros(6, dtype=np.int64), 1)
        iu = np.triu_indices(6, k=1)
        assert stats.count[0, 0] == 15
        assert stats.weight_sum[0, 0] == pytest.approx(W_f[iu].sum())
        assert stats.weight_sum_sq[0, 0] == pytest.approx((W_f[iu] ** 2).sum())


class TestAggregatorIdempotence:
    """Repeated aggregation on unchanged inputs is bit-identical."""

    def test_bit_identical(self) -> None:
        rng = np.random.default_rng(7)
        A = rng.normal(size=(25, 25))
        W_f = A + A.T
        z = rng.integers(0, 4, size=25)
        first = compute_pair_statistics(W_f, z, 4)
        second = compute_pair_statistics(W_f, z, 4)
        for name in ("count", "weight_sum", "weight_sum_sq", "centered_sum_sq"):
            assert np.array_equal(getattr(first, name), getattr(second, name))

    def test_inputs_unchanged(self) -> None:
        W_f = _weights_f()
        z = np.array([0, 0, 1, 1])
        compute_pair_statistics(W_f, z, 2)
        np.testing.assert_array_equal(W_f, _weights_f())
        assert z.tolist() == [0, 0, 1, 1]
