"""The firing log: every spike of a run, in chronological order.

Events are (time, neuron) pairs with time in integer milliseconds. The
log is append-only; within one millisecond neuron indices are strictly
increasing. Its reference text form is one event per line, two
whitespace-separated integers.
"""

import sys
from pathlib import Path

import numpy as np
import pandas as pd

from izhinet.errors import FiringLogOrderError
from izhinet.utils import get_logger

LOG = get_logger("simulation.firing_log")


class FiringLog:
    """Append-only, time-ordered record of spike events."""

    def __init__(self):
        self._times = []
        self._neurons = []
        self._n_events = 0
        self._last_time = None

    def append(self, time, neurons):
        """Record that `neurons` fired at `time`.

        Parameters
        ----------
        time : int
            Millisecond of the spikes; not earlier than any recorded time.
        neurons : array-like of int
            Strictly increasing neuron indices. May be empty.

        Raises
        ------
        FiringLogOrderError
            If the batch would break chronological or index order.
        """
        neurons = np.asarray(neurons, dtype=np.int64)
        if neurons.size == 0:
            return
        if self._last_time is not None and time < self._last_time:
            raise FiringLogOrderError(
                f"Event time {time} precedes last recorded time {self._last_time}"
            )
        if np.any(np.diff(neurons) <= 0):
            raise FiringLogOrderError(
                f"Neuron indices at t={time} are not strictly increasing"
            )
        if time == self._last_time and neurons[0] <= self._neurons[-1][-1]:
            raise FiringLogOrderError(
                f"Neuron {neurons[0]} at t={time} does not follow "
                f"neuron {self._neurons[-1][-1]}"
            )
        self._times.append(np.full(neurons.size, time, dtype=np.int64))
        self._neurons.append(neurons.copy())
        self._n_events += neurons.size
        self._last_time = time

    @property
    def times(self):
        """Event times (ms), int64 array."""
        if not self._times:
            return np.array([], dtype=np.int64)
        return np.concatenate(self._times)

    @property
    def neurons(self):
        """Event neuron indices, int64 array."""
        if not self._neurons:
            return np.array([], dtype=np.int64)
        return np.concatenate(self._neurons)

    def __len__(self):
        return self._n_events

    def __iter__(self):
        for times, neurons in zip(self._times, self._neurons):
            for t, i in zip(times.tolist(), neurons.tolist()):
                yield t, i

    def __eq__(self, other):
        if not isinstance(other, FiringLog):
            return NotImplemented
        return (len(self) == len(other)
                and np.array_equal(self.times, other.times)
                and np.array_equal(self.neurons, other.neurons))

    def __repr__(self):
        return f"FiringLog({self._n_events} events)"

    def to_dataframe(self):
        """Events as a DataFrame with integer columns time, neuron."""
        return pd.DataFrame({"time": self.times, "neuron": self.neurons})

    def write(self, stream=None):
        """Write the reference text form, one "time neuron" line per event."""
        stream = stream or sys.stdout
        for t, i in self:
            stream.write(f"{t} {i}\n")

    @classmethod
    def from_events(cls, times, neurons):
        """Rebuild a log from parallel arrays of event times and neurons."""
        times = np.asarray(times, dtype=np.int64)
        neurons = np.asarray(neurons, dtype=np.int64)
        if times.shape != neurons.shape:
            raise ValueError(
                f"times and neurons differ in shape: {times.shape} vs {neurons.shape}"
            )
        log = cls()
        if times.size == 0:
            return log
        boundaries = np.flatnonzero(np.diff(times)) + 1
        for ts, ns in zip(np.split(times, boundaries), np.split(neurons, boundaries)):
            log.append(int(ts[0]), ns)
        return log


def write_firings(log, path):
    """Save a firing log in its reference text form."""
    path = Path(path)
    LOG.info("Writing %d firing events to %s", len(log), path)
    with open(path, "w") as f:
        log.write(f)


def read_firings(path):
    """Load a firing log saved by write_firings.

    Raises
    ------
    FiringLogOrderError
        If the file's events are out of order.
    """
    path = Path(path)
    LOG.info("Reading firing events from %s", path)
    if path.stat().st_size == 0:
        return FiringLog()
    events = pd.read_csv(path, sep=r"\s+", header=None,
                         names=["time", "neuron"], dtype=np.int64)
    return FiringLog.from_events(events["time"].values, events["neuron"].values)
