"""Exceptions raised by izhinet.

Every error derives from IzhinetError and from the builtin exception it
specializes, so callers may catch either.
"""


class IzhinetError(Exception):
    """Base class of all izhinet errors."""


class ConfigurationError(IzhinetError, ValueError):
    """Invalid simulation configuration, detected before any allocation."""


class EntropyUnavailableError(IzhinetError, OSError):
    """The operating system could not provide entropy for a seed."""


class ResourceError(IzhinetError, MemoryError):
    """A network array could not be allocated."""


class FiringLogOrderError(IzhinetError, ValueError):
    """Events appended out of chronological or index order."""


class NumericalInstabilityError(IzhinetError, FloatingPointError):
    """A neuron's state became non-finite during integration.

    Attributes
    ----------
    time : int
        Millisecond step at which the anomaly was detected.
    neuron : int
        Lowest index of an offending neuron.
    variable : str
        "v" (membrane potential) or "u" (recovery variable).
    """

    def __init__(self, time, neuron, variable):
        self.time = time
        self.neuron = neuron
        self.variable = variable
        super().__init__(
            f"Non-finite {variable} for neuron {neuron} at t={time} ms"
        )
