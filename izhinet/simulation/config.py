"""Simulation configuration.

A SimulationConfig fixes everything that determines a run: population
split, duration, seed and the input/coupling scales. Two runs with equal
configurations produce identical firing logs.
"""

import math
import numbers
from dataclasses import asdict, dataclass, fields, replace as _replace
from pathlib import Path

import yaml

from izhinet.errors import ConfigurationError
from izhinet.simulation.random_source import RandomSource


@dataclass(frozen=True)
class SimulationConfig:
    """Configuration of one network simulation.

    Parameters
    ----------
    seed : int
        Seed of the Random Source. Required: runs are reproducible by
        construction.
    n_excitatory : int
        Number of excitatory neurons, occupying indices [0, n_excitatory).
    n_inhibitory : int
        Number of inhibitory neurons, occupying the remaining indices.
    duration : int
        Simulated time (ms). One integration step per millisecond.
    thalamic_excitatory, thalamic_inhibitory : float
        Standard deviation of the thalamic noise current per class.
    weight_excitatory, weight_inhibitory : float
        Upper bound of the uniform weight magnitude for synapses leaving
        an excitatory / inhibitory neuron. Inhibitory weights are negated.
    """
    seed: int
    n_excitatory: int = 800
    n_inhibitory: int = 200
    duration: int = 1000
    thalamic_excitatory: float = 5.0
    thalamic_inhibitory: float = 2.0
    weight_excitatory: float = 0.5
    weight_inhibitory: float = 1.0

    def __post_init__(self):
        problems = []

        if not _is_integer(self.seed):
            problems.append(f"seed must be an integer, got {self.seed!r}")
        elif self.seed < 0:
            problems.append(f"seed must be non-negative, got {self.seed}")

        for name in ("n_excitatory", "n_inhibitory"):
            value = getattr(self, name)
            if not _is_integer(value) or value <= 0:
                problems.append(f"{name} must be a positive integer, got {value!r}")

        if not _is_integer(self.duration) or self.duration < 0:
            problems.append(
                f"duration must be a non-negative integer (ms), got {self.duration!r}"
            )

        for name in ("thalamic_excitatory", "thalamic_inhibitory",
                     "weight_excitatory", "weight_inhibitory"):
            value = getattr(self, name)
            if (isinstance(value, bool) or not isinstance(value, numbers.Real)
                    or not math.isfinite(value) or value < 0):
                problems.append(f"{name} must be a finite number >= 0, got {value!r}")

        if problems:
            raise ConfigurationError("Invalid configuration: " + "; ".join(problems))

    @property
    def n_neurons(self):
        return self.n_excitatory + self.n_inhibitory

    def to_dict(self):
        """Serializable definition of this configuration, for provenance."""
        return asdict(self)

    def replace(self, **changes):
        """A validated copy with some fields changed."""
        return _replace(self, **changes)

    @classmethod
    def from_dict(cls, mapping):
        """Build a configuration from a plain mapping.

        Unknown keys are rejected rather than ignored, and a missing seed
        is an error.
        """
        if not isinstance(mapping, dict):
            raise ConfigurationError(
                f"Configuration must be a mapping, got {type(mapping).__name__}"
            )
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(mapping) - known)
        if unknown:
            raise ConfigurationError(f"Unknown configuration keys: {unknown}")
        if mapping.get("seed") is None:
            raise ConfigurationError("A seed is required for reproducible runs")
        return cls(**mapping)

    @classmethod
    def from_yaml(cls, path, **overrides):
        """Read a configuration from a YAML mapping on disc.

        Keyword overrides that are not None replace values from the file.
        """
        path = Path(path)
        with open(path, "r") as f:
            try:
                mapping = yaml.safe_load(f)
            except yaml.YAMLError as err:
                raise ConfigurationError(f"Cannot parse {path}: {err}") from err
        if mapping is None:
            mapping = {}
        if not isinstance(mapping, dict):
            raise ConfigurationError(f"{path} does not hold a YAML mapping")
        mapping.update({k: v for k, v in overrides.items() if v is not None})
        return cls.from_dict(mapping)

    @classmethod
    def with_entropy_seed(cls, **kwargs):
        """A configuration seeded from operating-system entropy.

        The drawn seed is stored in the configuration, so the run it
        describes can be repeated exactly.
        """
        return cls(seed=RandomSource.entropy_seed(), **kwargs)


def _is_integer(value):
    return isinstance(value, numbers.Integral) and not isinstance(value, bool)
