"""Tests for the sequential assignment resampler."""

import numpy as np
import pytest
from scipy.stats import norm

from src.sampler.assignment import (
    draw_label,
    label_log_scores,
    resample_assignments,
    symmetric_block_matrix,
)
from src.sampler.types import SamplerState


class _ArgmaxRng:
    """Deterministic stand-in that always picks the most probable label."""

    def choice(self, a, p):
        return int(np.argmax(p))


def _clique_weights_f() -> np.ndarray:
    """Two cliques {0, 1} and {2, 3}: within 1.0, across 0.0, zero diagonal."""
    W_f = np.zeros((4, 4))
    W_f[0, 1] = W_f[1, 0] = 1.0
    W_f[2, 3] = W_f[3, 2] = 1.0
    return W_f


def _state(z, mu, var, log_alpha) -> SamplerState:
    z = np.asarray(z, dtype=np.int64)
    K = len(log_alpha)
    return SamplerState(
        z=z,
        n_k=np.bincount(z, minlength=K).astype(np.int64),
        mu=np.asarray(mu, dtype=np.float64),
        var=np.asarray(var, dtype=np.float64),
        log_beta=np.zeros(K),
        log_alpha=np.asarray(log_alpha, dtype=np.float64),
    )


def _random_setup(seed: int, n: int = 12, K: int = 3):
    rng = np.random.default_rng(seed)
    A = rng.normal(scale=0.4, size=(n, n))
    W_f = A + A.T
    np.fill_diagonal(W_f, 0.0)
    mu = np.triu(rng.normal(size=(K, K)))
    var = np.triu(rng.uniform(0.05, 0.5, size=(K, K))) + np.tril(np.full((K, K), 0.1), -1)
    weights = rng.dirichlet(np.ones(K))
    state = _state(rng.integers(0, K, size=n), mu, var, np.log(weights))
    return W_f, state


class TestSymmetricBlockMatrix:
    """Upper-triangle lookup by ordered pair."""

    def test_mirrors_upper_triangle(self) -> None:
        upper = np.array([[1.0, 2.0], [99.0, 3.0]])
        full = symmetric_block_matrix(upper)
        np.testing.assert_array_equal(full, [[1.0, 2.0], [2.0, 3.0]])


class TestLabelLogScores:
    """Scores match a direct evaluation over node pairs."""

    @pytest.mark.parametrize("seed", range(3))
    def test_matches_brute_force(self, seed: int) -> None:
        W_f, state = _random_setup(seed)
        node = 5
        mu_full = symmetric_block_matrix(state.mu)
        var_full = symmetric_block_matrix(state.var)
        scores = label_log_scores(
            W_f[node], node, state.z, state.log_alpha,
            mu_full, np.log(var_full), 1.0 / var_full,
        )

        expected = np.empty(state.K)
        for k in range(state.K):
            total = state.log_alpha[k]
            for ii in range(state.n):
                if ii == node:
                    continue
                lo, hi = min(k, state.z[ii]), max(k, state.z[ii])
                total += norm.logpdf(
                    W_f[node, ii], state.mu[lo, hi], np.sqrt(state.var[lo, hi])
                )
            expected[k] = total
        np.testing.assert_allclose(scores, expected, rtol=1e-10)

    def test_self_pair_excluded(self) -> None:
        W_f, state = _random_setup(0)
        W_f_changed = W_f.copy()
        W_f_changed[5, 5] = 0.9
        mu_full = symmetric_block_matrix(state.mu)
        var_full = symmetric_block_matrix(state.var)
        args = (state.z, state.log_alpha, mu_full, np.log(var_full), 1.0 / var_full)
        np.testing.assert_array_equal(
            label_log_scores(W_f[5], 5, *args),
            label_log_scores(W_f_changed[5], 5, *args),
        )


class TestDrawLabel:
    """Categorical draws from log scores."""

    def test_degenerate_distribution(self) -> None:
        rng = np.random.default_rng(0)
        scores = np.array([0.0, -1e6, -1e6])
        assert all(draw_label(scores, rng) == 0 for _ in range(50))

    def test_large_magnitude_scores(self) -> None:
        rng = np.random.default_rng(0)
        draws = {draw_label(np.array([-5000.0, -5000.0]), rng) for _ in range(100)}
        assert draws == {0, 1}

    def test_frequencies(self) -> None:
        rng = np.random.default_rng(1)
        scores = np.log(np.array([0.2, 0.8]))
        draws = [draw_label(scores, rng) for _ in range(4000)]
        assert np.mean(draws) == pytest.approx(0.8, abs=0.03)


class TestResampleAssignments:
    """Sweep invariants and sequential semantics."""

    @pytest.mark.parametrize("seed", range(5))
    def test_occupancy_consistent(self, seed: int) -> None:
        W_f, state = _random_setup(seed)
        rng = np.random.default_rng(seed)
        for _ in range(10):
            resample_assignments(W_f, state, rng)
            assert state.n_k.sum() == state.n
            np.testing.assert_array_equal(
                state.n_k, np.bincount(state.z, minlength=state.K)
            )

    def test_single_community_leaves_z_unchanged(self) -> None:
        W_f, _ = _random_setup(0)
        state = _state(np.zeros(12), [[0.3]], [[0.2]], [0.0])
        rng = np.random.default_rng(0)
        for _ in range(5):
            assert resample_assignments(W_f, state, rng) == 0
            assert np.all(state.z == 0)
            assert state.n_k.tolist() == [12]

    def test_updates_visible_within_sweep(self) -> None:
        mu = [[1.0, 0.0], [0.0, 1.0]]
        var = [[0.01, 0.01], [0.01, 0.01]]
        state = _state([1, 1, 1, 1], mu, var, np.log([0.5, 0.5]))
        n_changed = resample_assignments(_clique_weights_f(), state, _ArgmaxRng())
        # Nodes 2 and 3 stay in community 1 only because nodes 0 and 1
        # already left it earlier in the same sweep
        assert state.z.tolist() == [0, 0, 1, 1]
        assert state.n_k.tolist() == [2, 2]
        assert n_changed == 2

    def test_returns_number_of_moves(self) -> None:
        mu = [[1.0, 0.0], [0.0, 1.0]]
        var = [[0.01, 0.01], [0.01, 0.01]]
        state = _state([0, 0, 1, 1], mu, var, np.log([0.5, 0.5]))
        assert resample_assignments(_clique_weights_f(), state, _ArgmaxRng()) == 0
        assert state.z.tolist() == [0, 0, 1, 1]
