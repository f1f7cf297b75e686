"""Reproducible random numbers for network construction and input.

One RandomSource is seeded per run and owned by the network it builds;
every draw of the run (parameters, weights, thalamic noise) comes from it
in a fixed order. Gaussian draws use numpy's Ziggurat sampler, so no
parameter tables need to be threaded through call sites.
"""

import numpy as np

from izhinet.errors import EntropyUnavailableError
from izhinet.utils import get_logger

LOG = get_logger("simulation.random_source")


class RandomSource:
    """Seeded generator of uniform [0, 1) and standard-normal doubles.

    Parameters
    ----------
    seed : int
        Non-negative seed. Equal seeds give equal draw sequences.
    """

    def __init__(self, seed):
        self.seed = seed
        self._rng = np.random.Generator(np.random.PCG64(seed))

    @classmethod
    def from_entropy(cls):
        """Seed from operating-system entropy. Must be requested explicitly."""
        seed = cls.entropy_seed()
        LOG.info("Seeded from system entropy: seed=%d", seed)
        return cls(seed)

    @staticmethod
    def entropy_seed():
        """Draw a 64-bit seed from the operating system.

        Raises
        ------
        EntropyUnavailableError
            If no entropy source is available. There is no fallback to a
            weaker seed.
        """
        try:
            entropy = np.random.SeedSequence().entropy
        except (OSError, NotImplementedError) as err:
            raise EntropyUnavailableError(
                f"No system entropy available to seed the run: {err}"
            ) from err
        return int(entropy) & 0xFFFFFFFFFFFFFFFF

    def uniform(self, size=None, out=None):
        """Uniform doubles in [0, 1). A float if size is None, else an array.

        With `out`, fills that float64 array in place (C order) and returns it.
        """
        if out is not None:
            return self._rng.random(out=out)
        return self._rng.random(size)

    def gaussian(self, size=None):
        """Standard-normal doubles. A float if size is None, else an array."""
        return self._rng.standard_normal(size)

    def __repr__(self):
        return f"RandomSource(seed={self.seed})"
