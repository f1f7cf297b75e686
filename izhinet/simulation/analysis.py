"""Post-simulation analysis tools.

Functions for computing firing rates, spike rasters, E/I balance,
and activity statistics from SimulationResult objects.
"""

import numpy as np
import pandas as pd


def _duration_ms(result):
    return float(result.completed_steps)


def firing_rates(result, time_window=None):
    """Compute per-neuron firing rates.

    Parameters
    ----------
    result : SimulationResult
        Simulation output.
    time_window : tuple of float, optional
        (start_ms, end_ms) to restrict rate computation.

    Returns
    -------
    np.ndarray
        Firing rate per neuron (Hz).
    """
    times = result.firing_log.times
    neurons = result.firing_log.neurons

    if time_window is not None:
        t0, t1 = time_window
        in_window = (times >= t0) & (times < t1)
        neurons = neurons[in_window]
        duration_s = (t1 - t0) / 1000.0
    else:
        duration_s = _duration_ms(result) / 1000.0

    if duration_s <= 0:
        return np.zeros(result.n_neurons)
    counts = np.bincount(neurons, minlength=result.n_neurons)
    return counts / duration_s


def spike_raster(result, neuron_indices=None, time_window=None):
    """Extract spike raster data for plotting.

    Parameters
    ----------
    result : SimulationResult
        Simulation output.
    neuron_indices : array-like, optional
        Subset of neurons. If None, all neurons.
    time_window : tuple of float, optional
        (start_ms, end_ms) to restrict.

    Returns
    -------
    times : np.ndarray
        Spike times (ms).
    neurons : np.ndarray
        Neuron indices for each spike.
    """
    times = result.firing_log.times
    neurons = result.firing_log.neurons
    keep = np.ones(len(times), dtype=bool)

    if neuron_indices is not None:
        keep &= np.isin(neurons, np.asarray(neuron_indices))
    if time_window is not None:
        t0, t1 = time_window
        keep &= (times >= t0) & (times < t1)

    return times[keep], neurons[keep]


def active_fraction(result, threshold_hz=1.0, time_window=None):
    """Fraction of neurons firing above a threshold rate.

    Parameters
    ----------
    result : SimulationResult
        Simulation output.
    threshold_hz : float
        Minimum rate to count as "active".
    time_window : tuple of float, optional
        Restrict to time window.

    Returns
    -------
    float
        Fraction of neurons active.
    """
    rates = firing_rates(result, time_window=time_window)
    return float(np.mean(rates > threshold_hz))


def population_rate(result, bin_ms=10.0):
    """Compute population-averaged firing rate over time.

    Parameters
    ----------
    result : SimulationResult
        Simulation output.
    bin_ms : float
        Time bin width (ms).

    Returns
    -------
    times : np.ndarray
        Bin centers (ms).
    rates : np.ndarray
        Population rate (Hz) per bin.
    """
    n_bins = int(_duration_ms(result) / bin_ms)
    if n_bins == 0:
        return np.array([]), np.array([])

    bins = np.clip((result.firing_log.times / bin_ms).astype(int), 0, n_bins - 1)
    counts = np.bincount(bins, minlength=n_bins).astype(np.float64)

    bin_s = bin_ms / 1000.0
    rates = counts / (result.n_neurons * bin_s)
    times = np.arange(n_bins) * bin_ms + bin_ms / 2

    return times, rates


def population_sparseness(rates):
    """Compute Treves-Rolls population sparseness.

    S = (mean(r))^2 / mean(r^2)

    S = 1 means all neurons fire at the same rate (dense).
    S -> 1/N means exactly one neuron fires (maximally sparse).

    Parameters
    ----------
    rates : np.ndarray
        Per-neuron firing rates (Hz). Shape (n_neurons,).

    Returns
    -------
    float
        Sparseness in [0, 1]. Lower = sparser.
    """
    rates = np.asarray(rates, dtype=np.float64)
    if len(rates) == 0:
        return 0.0
    mean_r2 = np.mean(rates ** 2)
    if mean_r2 == 0:
        return 0.0
    return float(np.mean(rates) ** 2 / mean_r2)


def class_rates(result):
    """Spike counts and mean firing rates per neuron class.

    Returns
    -------
    pd.DataFrame
        Indexed by class (excitatory, inhibitory); columns n_neurons,
        n_spikes, mean_rate_hz.
    """
    rates = firing_rates(result)
    counts = np.bincount(result.firing_log.neurons, minlength=result.n_neurons)
    groups = {
        "excitatory": slice(0, result.n_excitatory),
        "inhibitory": slice(result.n_excitatory, result.n_neurons),
    }
    rows = []
    for name, sel in groups.items():
        group_rates = rates[sel]
        rows.append({
            "neuron_class": name,
            "n_neurons": len(group_rates),
            "n_spikes": int(counts[sel].sum()),
            "mean_rate_hz": float(group_rates.mean()) if len(group_rates) else 0.0,
        })
    return pd.DataFrame(rows).set_index("neuron_class")


def ei_balance(result, network):
    """Compute excitatory/inhibitory synaptic drive per neuron.

    Drive is the rate-weighted sum of incoming weights, split by the sign
    of the source neuron's class.

    Parameters
    ----------
    result : SimulationResult
        Simulation output.
    network : Network
        The network that was simulated.

    Returns
    -------
    pd.DataFrame
        Per-neuron: exc_input, inh_input, ei_ratio, firing_rate_hz.
    """
    rates = firing_rates(result)
    exc = network.population.excitatory
    inh = network.population.inhibitory

    exc_input = network.weights[:, exc] @ rates[exc]
    inh_input = np.abs(network.weights[:, inh] @ rates[inh])

    with np.errstate(divide="ignore", invalid="ignore"):
        ei_ratio = np.where(inh_input > 0, exc_input / inh_input, np.inf)

    return pd.DataFrame({
        "exc_input": exc_input,
        "inh_input": inh_input,
        "ei_ratio": ei_ratio,
        "firing_rate_hz": rates,
    })
