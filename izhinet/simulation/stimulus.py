"""Thalamic input: background noise current injected every millisecond."""

from dataclasses import dataclass


@dataclass(frozen=True)
class ThalamicInput:
    """Gaussian thalamic drive, scaled by neuron class.

    Attributes
    ----------
    n_excitatory : int
        Number of excitatory neurons (the first indices).
    n_inhibitory : int
        Number of inhibitory neurons.
    excitatory_scale : float
        Standard deviation of the input to excitatory neurons.
    inhibitory_scale : float
        Standard deviation of the input to inhibitory neurons.
    """
    n_excitatory: int
    n_inhibitory: int
    excitatory_scale: float = 5.0
    inhibitory_scale: float = 2.0

    def draw(self, rng):
        """Fresh input vector for one millisecond.

        Consumes N Gaussian draws, excitatory neurons first.
        """
        n = self.n_excitatory + self.n_inhibitory
        current = rng.gaussian(n)
        current[:self.n_excitatory] *= self.excitatory_scale
        current[self.n_excitatory:] *= self.inhibitory_scale
        return current


def thalamic_input(config):
    """The ThalamicInput described by a SimulationConfig."""
    return ThalamicInput(
        n_excitatory=config.n_excitatory,
        n_inhibitory=config.n_inhibitory,
        excitatory_scale=config.thalamic_excitatory,
        inhibitory_scale=config.thalamic_inhibitory,
    )
