"""Pure-numpy Izhikevich network engine.

Implements the Izhikevich (2003) model with a fixed 1 ms step:

    v' = 0.04 v^2 + 5 v + 140 - u + I
    u' = a (b v - u)

    if v >= 30 mV:  v <- c,  u <- u + d

The potential is advanced with two 0.5 ms Euler sub-steps, since a single
1 ms step of the quadratic term is unstable near threshold; the recovery
variable takes one 1 ms step. A spike reaches its targets one millisecond
after it occurs.
"""

from dataclasses import dataclass
from typing import Optional

import numpy as np

from izhinet.errors import NumericalInstabilityError, ResourceError
from izhinet.simulation.firing_log import FiringLog
from izhinet.simulation.network import build_network
from izhinet.simulation.stimulus import thalamic_input
from izhinet.utils import get_logger

LOG = get_logger("simulation.engine")

SPIKE_THRESHOLD = 30.0  # mV
V_INIT = -65.0  # mV


@dataclass(eq=False)
class RunState:
    """Mutable state of a run.

    Attributes
    ----------
    v : np.ndarray
        Membrane potential per neuron (mV).
    u : np.ndarray
        Recovery variable per neuron.
    fired : np.ndarray
        Boolean mask of the neurons that fired in the previous step.
    time : int
        Current millisecond.
    """
    v: np.ndarray
    u: np.ndarray
    fired: np.ndarray
    time: int = 0


@dataclass(eq=False)
class SimulationResult:
    """Results from a simulation run.

    Attributes
    ----------
    firing_log : FiringLog
        All spike events, ordered by time then neuron index.
    n_neurons : int
        Number of neurons.
    n_excitatory : int
        Number of excitatory neurons (the first indices).
    duration : int
        Configured simulation time (ms).
    completed_steps : int
        Milliseconds actually simulated; less than duration if aborted.
    seed : int
        Seed of the run.
    aborted : bool
        True if the run was cancelled before reaching its duration.
    v_trace : Optional[np.ndarray]
        Post-reset membrane potential, shape (n_recorded, completed_steps).
        Only populated if record_v=True.
    recorded_idx : np.ndarray
        Indices of neurons whose traces were recorded.
    """
    firing_log: FiringLog
    n_neurons: int
    n_excitatory: int
    duration: int
    completed_steps: int
    seed: int
    aborted: bool = False
    v_trace: Optional[np.ndarray] = None
    recorded_idx: np.ndarray = None

    @property
    def n_inhibitory(self):
        return self.n_neurons - self.n_excitatory

    @property
    def n_spikes(self):
        """Total number of spikes across all neurons."""
        return len(self.firing_log)

    def mean_rate(self):
        """Mean firing rate across all neurons (Hz)."""
        duration_s = self.completed_steps / 1000.0
        if self.n_neurons == 0 or duration_s == 0:
            return 0.0
        return self.n_spikes / (self.n_neurons * duration_s)

    def neuron_rates(self):
        """Per-neuron firing rates (Hz)."""
        duration_s = self.completed_steps / 1000.0
        counts = np.bincount(self.firing_log.neurons, minlength=self.n_neurons)
        if duration_s == 0:
            return np.zeros(self.n_neurons)
        return counts / duration_s


def initial_state(population):
    """Resting state: v = -65 mV and u = b * v for every neuron."""
    n = population.n_neurons
    try:
        v = np.full(n, V_INIT, dtype=np.float64)
        u = population.b * v
        fired = np.zeros(n, dtype=bool)
    except MemoryError as err:
        raise ResourceError(f"Cannot allocate state vectors for {n} neurons") from err
    return RunState(v=v, u=u, fired=fired)


def integrate_step(state, population, weights, thalamic):
    """Advance v and u by one millisecond, in place.

    Parameters
    ----------
    state : RunState
        Its `fired` mask is the previous step's spikes.
    population : Population
        Model parameters.
    weights : np.ndarray
        Synaptic matrix, shape (N, N).
    thalamic : np.ndarray
        This step's thalamic input, shape (N,).
    """
    current = thalamic
    if np.any(state.fired):
        current = thalamic + weights[:, state.fired].sum(axis=1)

    v, u = state.v, state.u
    v += 0.5 * (0.04 * v ** 2 + 5.0 * v + 140.0 - u + current)
    v += 0.5 * (0.04 * v ** 2 + 5.0 * v + 140.0 - u + current)
    u += population.a * (population.b * v - u)


def check_finite(state):
    """Raise NumericalInstabilityError if any v or u is NaN or infinite."""
    for name, values in (("v", state.v), ("u", state.u)):
        bad = ~np.isfinite(values)
        if np.any(bad):
            neuron = int(np.flatnonzero(bad)[0])
            LOG.error("Non-finite %s for neuron %d at t=%d ms (%d neurons affected)",
                      name, neuron, state.time, int(bad.sum()))
            raise NumericalInstabilityError(state.time, neuron, name)


def detect_and_reset(state, population, firing_log):
    """Record and reset every neuron at or above threshold.

    Appends (state.time, i) to the firing log in ascending index order,
    sets v to c and increments u by d for each spiking neuron, and stores
    the spike mask in state.fired for the next step.

    Returns
    -------
    np.ndarray
        Boolean spike mask.
    """
    fired = state.v >= SPIKE_THRESHOLD
    firing_log.append(state.time, np.flatnonzero(fired))
    state.v[fired] = population.c[fired]
    state.u[fired] += population.d[fired]
    state.fired = fired
    return fired


def simulate(network, record_v=False, record_idx=None, cancel=None):
    """Run a network for its configured duration.

    Parameters
    ----------
    network : Network
        Built by build_network. Its RandomSource supplies the thalamic
        input, so simulating the same Network twice continues its stream;
        rebuild the network to repeat a run.
    record_v : bool
        If True, record membrane potential traces for selected neurons.
    record_idx : array-like, optional
        Indices of neurons to record. If None and record_v=True,
        records the first 100 neurons.
    cancel : callable, optional
        Checked before every millisecond; if it returns True the run stops
        at that step boundary and the result is marked aborted.

    Returns
    -------
    SimulationResult

    Raises
    ------
    NumericalInstabilityError
        If v or u becomes non-finite.
    """
    config = network.config
    population = network.population
    weights = network.weights
    rng = network.rng
    thalamic = thalamic_input(config)
    n = population.n_neurons
    duration = config.duration

    state = initial_state(population)
    firing_log = FiringLog()

    if record_v:
        if record_idx is None:
            record_idx = np.arange(min(100, n))
        else:
            record_idx = np.asarray(record_idx)
        v_trace = np.zeros((len(record_idx), duration), dtype=np.float64)
    else:
        record_idx = np.array([], dtype=int)
        v_trace = None

    LOG.info("Starting simulation: %d neurons, %d ms, seed=%d",
             n, duration, config.seed)

    completed = 0
    aborted = False
    for step in range(duration):
        if cancel is not None and cancel():
            aborted = True
            LOG.warning("Simulation aborted at t=%d ms of %d ms", step, duration)
            break

        state.time = step
        integrate_step(state, population, weights, thalamic.draw(rng))
        check_finite(state)
        detect_and_reset(state, population, firing_log)

        if record_v and len(record_idx) > 0:
            v_trace[:, step] = state.v[record_idx]
        completed += 1

    if v_trace is not None:
        v_trace = v_trace[:, :completed]

    result = SimulationResult(
        firing_log=firing_log,
        n_neurons=n,
        n_excitatory=population.n_excitatory,
        duration=duration,
        completed_steps=completed,
        seed=config.seed,
        aborted=aborted,
        v_trace=v_trace,
        recorded_idx=record_idx,
    )
    LOG.info("Simulation complete: %d spikes, mean rate %.2f Hz",
             result.n_spikes, result.mean_rate())
    return result


def run(config, **kwargs):
    """Build a network from `config` and simulate it."""
    return simulate(build_network(config), **kwargs)
