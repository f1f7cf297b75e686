"""Assemble a simulation-ready network from a configuration.

A Network packages the immutable build products (population parameters
and the synaptic matrix) together with the RandomSource that produced
them, which goes on to supply the run's thalamic input.
"""

from dataclasses import dataclass

import numpy as np

from izhinet.simulation.config import SimulationConfig
from izhinet.simulation.population import Population, generate_population
from izhinet.simulation.random_source import RandomSource
from izhinet.simulation.synapses import build_synaptic_matrix
from izhinet.utils import get_logger

LOG = get_logger("simulation.network")


@dataclass(eq=False)
class Network:
    """A simulation-ready Izhikevich network.

    Attributes
    ----------
    config : SimulationConfig
        The configuration the network was built from.
    population : Population
        Per-neuron model parameters.
    weights : np.ndarray
        Synaptic matrix, shape (N, N), read-only.
    rng : RandomSource
        Random source, already advanced past the build draws.
    """
    config: SimulationConfig
    population: Population
    weights: np.ndarray
    rng: RandomSource

    @property
    def n_neurons(self):
        return self.population.n_neurons

    def summary(self):
        """Return a summary string."""
        w_exc = self.weights[:, self.population.excitatory]
        w_inh = self.weights[:, self.population.inhibitory]
        lines = [
            f"Network: {self.n_neurons:,} neurons "
            f"({self.population.n_excitatory:,} excitatory, "
            f"{self.population.n_inhibitory:,} inhibitory)",
            f"  seed: {self.config.seed}",
            f"  duration: {self.config.duration} ms",
            f"  excitatory weights: [{w_exc.min():.3f}, {w_exc.max():.3f}]",
            f"  inhibitory weights: [{w_inh.min():.3f}, {w_inh.max():.3f}]",
        ]
        return "\n".join(lines)


def build_network(config):
    """Build a Network from a SimulationConfig.

    Seeds a RandomSource with config.seed, then draws the population
    parameters followed by the synaptic matrix.

    Returns
    -------
    Network
    """
    rng = RandomSource(config.seed)
    population = generate_population(config.n_excitatory, config.n_inhibitory, rng)
    weights = build_synaptic_matrix(
        config.n_excitatory, config.n_inhibitory, rng,
        weight_excitatory=config.weight_excitatory,
        weight_inhibitory=config.weight_inhibitory,
    )
    LOG.info("Built network: %d excitatory, %d inhibitory neurons, seed=%d",
             config.n_excitatory, config.n_inhibitory, config.seed)
    return Network(config=config, population=population, weights=weights, rng=rng)
