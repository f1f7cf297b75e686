"""Tests for post-simulation analysis on synthetic and simulated results."""

import numpy as np
import pytest

from izhinet.simulation.analysis import (
    active_fraction, class_rates, ei_balance, firing_rates,
    population_rate, population_sparseness, spike_raster,
)
from izhinet.simulation.config import SimulationConfig
from izhinet.simulation.engine import SimulationResult, simulate
from izhinet.simulation.firing_log import FiringLog
from izhinet.simulation.network import build_network


def _make_result():
    """Synthetic result: 3 neurons (2 excitatory), 100 ms."""
    log = FiringLog.from_events(
        times=[10, 15, 20, 30, 40, 45, 50],
        neurons=[0, 1, 0, 0, 0, 1, 0],
    )
    return SimulationResult(
        firing_log=log,
        n_neurons=3,
        n_excitatory=2,
        duration=100,
        completed_steps=100,
        seed=0,
    )


class TestRates:
    def test_firing_rates(self):
        rates = firing_rates(_make_result())
        assert rates[0] == pytest.approx(50.0)  # 5 spikes in 100 ms
        assert rates[1] == pytest.approx(20.0)
        assert rates[2] == 0.0

    def test_firing_rates_windowed(self):
        rates = firing_rates(_make_result(), time_window=(0, 50))
        assert rates[0] == pytest.approx(80.0)  # 4 spikes in 50 ms

    def test_active_fraction(self):
        assert active_fraction(_make_result(), threshold_hz=1.0) == pytest.approx(2 / 3)

    def test_population_rate(self):
        times, rates = population_rate(_make_result(), bin_ms=50.0)
        assert list(times) == [25.0, 75.0]
        # 6 spikes in the first bin, 1 in the second, over 3 neurons
        assert rates[0] == pytest.approx(6 / (3 * 0.05))
        assert rates[1] == pytest.approx(1 / (3 * 0.05))

    def test_population_rate_empty_run(self):
        result = _make_result()
        result.completed_steps = 0
        times, rates = population_rate(result)
        assert times.size == 0 and rates.size == 0

    def test_class_rates(self):
        table = class_rates(_make_result())
        assert list(table.index) == ["excitatory", "inhibitory"]
        assert table.loc["excitatory", "n_spikes"] == 7
        assert table.loc["excitatory", "mean_rate_hz"] == pytest.approx(35.0)
        assert table.loc["inhibitory", "n_spikes"] == 0
        assert table.loc["inhibitory", "n_neurons"] == 1


class TestRaster:
    def test_spike_raster(self):
        times, neurons = spike_raster(_make_result())
        assert len(times) == 7
        assert len(neurons) == 7

    def test_spike_raster_subset(self):
        times, neurons = spike_raster(_make_result(), neuron_indices=[1])
        assert list(times) == [15, 45]
        assert np.all(neurons == 1)

    def test_spike_raster_window(self):
        times, _ = spike_raster(_make_result(), time_window=(20, 45))
        assert list(times) == [20, 30, 40]


class TestSparseness:
    def test_uniform_rates_dense(self):
        assert population_sparseness(np.full(10, 5.0)) == pytest.approx(1.0)

    def test_single_active_sparse(self):
        rates = np.zeros(10)
        rates[3] = 7.0
        assert population_sparseness(rates) == pytest.approx(0.1)

    def test_silent(self):
        assert population_sparseness(np.zeros(4)) == 0.0
        assert population_sparseness([]) == 0.0


class TestEIBalance:
    def test_silent_network(self):
        config = SimulationConfig(seed=2, n_excitatory=8, n_inhibitory=2, duration=50,
                                  thalamic_excitatory=0.0, thalamic_inhibitory=0.0)
        network = build_network(config)
        result = simulate(network)
        balance = ei_balance(result, network)
        assert list(balance.columns) == ["exc_input", "inh_input",
                                         "ei_ratio", "firing_rate_hz"]
        assert np.all(balance["firing_rate_hz"] == 0.0)
        assert np.all(balance["exc_input"] == 0.0)

    def test_signs(self):
        config = SimulationConfig(seed=2, n_excitatory=40, n_inhibitory=10,
                                  duration=300, thalamic_excitatory=10.0,
                                  thalamic_inhibitory=10.0)
        network = build_network(config)
        balance = ei_balance(simulate(network), network)
        assert np.all(balance["exc_input"] >= 0.0)
        assert np.all(balance["inh_input"] >= 0.0)
        assert balance["firing_rate_hz"].sum() > 0
