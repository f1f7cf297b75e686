"""Tests for the seeded random source."""

import numpy as np
import pytest

from izhinet.errors import EntropyUnavailableError
from izhinet.simulation.random_source import RandomSource


class TestDraws:
    def test_same_seed_same_sequence(self):
        r1, r2 = RandomSource(42), RandomSource(42)
        assert np.array_equal(r1.uniform(100), r2.uniform(100))
        assert np.array_equal(r1.gaussian(100), r2.gaussian(100))

    def test_different_seeds_differ(self):
        assert not np.array_equal(RandomSource(1).uniform(10),
                                  RandomSource(2).uniform(10))

    def test_uniform_range(self):
        draws = RandomSource(0).uniform(100000)
        assert draws.min() >= 0.0
        assert draws.max() < 1.0
        assert abs(draws.mean() - 0.5) < 0.01

    def test_gaussian_moments(self):
        draws = RandomSource(0).gaussian(100000)
        assert abs(draws.mean()) < 0.02
        assert abs(draws.std() - 1.0) < 0.02

    def test_scalar_draws(self):
        rng = RandomSource(3)
        assert isinstance(rng.uniform(), float)
        assert isinstance(rng.gaussian(), float)

    def test_matrix_shape(self):
        assert RandomSource(3).uniform((4, 5)).shape == (4, 5)

    def test_uniform_into_buffer(self):
        buffer = np.empty((3, 4))
        filled = RandomSource(5).uniform(out=buffer)
        assert filled is buffer
        assert np.array_equal(buffer, RandomSource(5).uniform((3, 4)))

    def test_scalar_and_vector_draws_share_stream(self):
        r1, r2 = RandomSource(11), RandomSource(11)
        scalars = [r1.uniform() for _ in range(5)]
        assert np.array_equal(scalars, r2.uniform(5))

    def test_large_draw_counts(self):
        """N(N+2) uniforms and N*T gaussians for the canonical network."""
        rng = RandomSource(5)
        assert rng.uniform(1000 * 1002).size == 1002000
        assert np.all(np.isfinite(rng.gaussian(1000 * 1000)))


class TestEntropy:
    def test_from_entropy_records_seed(self):
        rng = RandomSource.from_entropy()
        assert 0 <= rng.seed < 2 ** 64
        replay = RandomSource(rng.seed)
        assert np.array_equal(rng.uniform(10), replay.uniform(10))

    def test_entropy_unavailable(self, monkeypatch):
        class NoEntropy:
            def __init__(self, *args, **kwargs):
                raise OSError("no entropy")

        monkeypatch.setattr(np.random, "SeedSequence", NoEntropy)
        with pytest.raises(EntropyUnavailableError):
            RandomSource.from_entropy()
