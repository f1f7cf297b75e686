"""Heterogeneous Izhikevich population parameters.

Excitatory neurons are regular-spiking cells whose reset (c) and
after-spike jump (d) vary with r^2, shading towards chattering cells;
inhibitory neurons are fast-spiking cells whose recovery rate (a) and
sensitivity (b) vary with r. Izhikevich (2003), IEEE TNN 14(6):1569.

Excitatory neurons occupy indices [0, n_excitatory) and inhibitory
neurons the rest. Every downstream computation relies on this ordering.
"""

from dataclasses import dataclass
from enum import Enum

import numpy as np
import pandas as pd

from izhinet.errors import ResourceError
from izhinet.utils import get_logger

LOG = get_logger("simulation.population")


class NeuronClass(Enum):
    EXCITATORY = "excitatory"
    INHIBITORY = "inhibitory"


@dataclass(frozen=True, eq=False)
class Population:
    """Per-neuron parameters of the Izhikevich model.

    Attributes
    ----------
    n_excitatory : int
        Number of excitatory neurons.
    n_inhibitory : int
        Number of inhibitory neurons.
    a : np.ndarray
        Time scale of the recovery variable u.
    b : np.ndarray
        Sensitivity of u to subthreshold fluctuations of v.
    c : np.ndarray
        After-spike reset value of v (mV).
    d : np.ndarray
        After-spike increment of u.
    """
    n_excitatory: int
    n_inhibitory: int
    a: np.ndarray
    b: np.ndarray
    c: np.ndarray
    d: np.ndarray

    @property
    def n_neurons(self):
        return self.n_excitatory + self.n_inhibitory

    @property
    def excitatory(self):
        """Slice selecting the excitatory neurons."""
        return slice(0, self.n_excitatory)

    @property
    def inhibitory(self):
        """Slice selecting the inhibitory neurons."""
        return slice(self.n_excitatory, self.n_neurons)

    def neuron_class(self, index):
        """The class of neuron `index`."""
        if not 0 <= index < self.n_neurons:
            raise IndexError(f"Neuron index {index} out of range [0, {self.n_neurons})")
        if index < self.n_excitatory:
            return NeuronClass.EXCITATORY
        return NeuronClass.INHIBITORY

    def is_excitatory(self):
        """Boolean mask, True for excitatory neurons."""
        mask = np.zeros(self.n_neurons, dtype=bool)
        mask[self.excitatory] = True
        return mask

    def to_dataframe(self):
        """Parameters as a table, one row per neuron."""
        classes = np.where(self.is_excitatory(),
                           NeuronClass.EXCITATORY.value,
                           NeuronClass.INHIBITORY.value)
        return pd.DataFrame({
            "neuron_class": classes,
            "a": self.a,
            "b": self.b,
            "c": self.c,
            "d": self.d,
        })


def generate_population(n_excitatory, n_inhibitory, rng):
    """Draw the per-neuron parameters of a population.

    Consumes n_excitatory uniform draws (one per excitatory neuron), then
    n_inhibitory uniform draws (one per inhibitory neuron).

    Parameters
    ----------
    n_excitatory, n_inhibitory : int
        Population split.
    rng : RandomSource
        Source of the uniform draws.

    Returns
    -------
    Population
        With read-only parameter arrays.

    Raises
    ------
    ResourceError
        If the parameter vectors cannot be allocated.
    """
    try:
        re = rng.uniform(n_excitatory)
        ri = rng.uniform(n_inhibitory)

        a = np.concatenate([np.full(n_excitatory, 0.02), 0.02 + 0.08 * ri])
        b = np.concatenate([np.full(n_excitatory, 0.2), 0.25 - 0.05 * ri])
        c = np.concatenate([-65.0 + 15.0 * re ** 2, np.full(n_inhibitory, -65.0)])
        d = np.concatenate([8.0 - 6.0 * re ** 2, np.full(n_inhibitory, 2.0)])
    except MemoryError as err:
        raise ResourceError(
            f"Cannot allocate parameters for {n_excitatory + n_inhibitory} neurons"
        ) from err

    for param in (a, b, c, d):
        param.setflags(write=False)

    LOG.debug("Generated parameters for %d excitatory, %d inhibitory neurons",
              n_excitatory, n_inhibitory)

    return Population(
        n_excitatory=n_excitatory,
        n_inhibitory=n_inhibitory,
        a=a, b=b, c=c, d=d,
    )
