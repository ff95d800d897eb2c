"""Tests for explicit generator construction and chain seeding."""

import numpy as np
import pytest

from src.reproducibility import make_rng, spawn_chain_rngs, verify_seed_determinism


class TestMakeRng:
    """make_rng produces reproducible, isolated generators."""

    def test_same_seed_same_sequence(self):
        assert make_rng(42).random(50).tolist() == make_rng(42).random(50).tolist()

    def test_different_seed_different_sequence(self):
        assert make_rng(42).random(10).tolist() != make_rng(99).random(10).tolist()

    def test_does_not_touch_global_state(self):
        np.random.seed(0)
        expected = np.random.rand(5)
        np.random.seed(0)
        make_rng(42).random(100)
        np.testing.assert_array_equal(np.random.rand(5), expected)


class TestSpawnChainRngs:
    """spawn_chain_rngs yields independent reproducible streams."""

    def test_count(self):
        assert len(spawn_chain_rngs(42, 4)) == 4

    def test_streams_differ(self):
        a, b = spawn_chain_rngs(42, 2)
        assert a.random(10).tolist() != b.random(10).tolist()

    def test_reproducible(self):
        first = [r.random(5).tolist() for r in spawn_chain_rngs(7, 3)]
        second = [r.random(5).tolist() for r in spawn_chain_rngs(7, 3)]
        assert first == second

    def test_rejects_zero_chains(self):
        with pytest.raises(ValueError, match="n_chains"):
            spawn_chain_rngs(42, 0)


class TestVerifySeedDeterminism:
    """verify_seed_determinism covers every variate family."""

    def test_passes(self):
        assert verify_seed_determinism(42) is True

    def test_multiple_seeds(self):
        assert verify_seed_determinism(0) is True
        assert verify_seed_determinism(999999) is True
