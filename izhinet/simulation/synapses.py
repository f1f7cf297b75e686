"""Dense all-to-all synaptic coupling.

weights[i, j] is the current injected into neuron i one millisecond
after neuron j spikes. Columns of excitatory source neurons hold values
in [0, weight_excitatory); columns of inhibitory source neurons hold
values in (-weight_inhibitory, 0].
"""

import numpy as np

from izhinet.errors import ResourceError
from izhinet.utils import get_logger

LOG = get_logger("simulation.synapses")


def matrix_nbytes(n_neurons):
    """Memory footprint (bytes) of an n_neurons x n_neurons float64 matrix."""
    return n_neurons * n_neurons * np.dtype(np.float64).itemsize


def build_synaptic_matrix(n_excitatory, n_inhibitory, rng,
                          weight_excitatory=0.5, weight_inhibitory=1.0):
    """Build the N x N coupling matrix from independent uniform draws.

    Draws are consumed row by row (target neuron), and within a row
    column by column (source neuron).

    Parameters
    ----------
    n_excitatory, n_inhibitory : int
        Population split.
    rng : RandomSource
        Source of the uniform draws.
    weight_excitatory : float
        Scale of weights leaving excitatory neurons.
    weight_inhibitory : float
        Scale of weights leaving inhibitory neurons (negated).

    Returns
    -------
    np.ndarray
        Read-only float64 array, shape (N, N).

    Raises
    ------
    ResourceError
        If the matrix cannot be allocated.
    """
    n = n_excitatory + n_inhibitory
    nbytes = matrix_nbytes(n)
    LOG.info("Building %d x %d synaptic matrix (%.1f MiB)", n, n, nbytes / 2 ** 20)

    try:
        weights = np.empty((n, n), dtype=np.float64)
        rng.uniform(out=weights)
    except MemoryError as err:
        raise ResourceError(
            f"Cannot allocate {nbytes} bytes for a {n} x {n} synaptic matrix"
        ) from err

    weights[:, :n_excitatory] *= weight_excitatory
    weights[:, n_excitatory:] *= -weight_inhibitory

    weights.setflags(write=False)
    return weights
