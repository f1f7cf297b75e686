"""simulation: Izhikevich spiking network engine.

Pure-numpy implementation of the Izhikevich (2003) network of 800
excitatory and 200 inhibitory neurons, fully coupled, driven by random
thalamic input and integrated in 1 ms steps.

References:
    Izhikevich EM (2003). IEEE Trans Neural Netw 14(6):1569-1572.
"""

from .config import SimulationConfig
from .random_source import RandomSource
from .population import (
    NeuronClass,
    Population,
    generate_population,
)
from .synapses import build_synaptic_matrix
from .stimulus import ThalamicInput
from .firing_log import (
    FiringLog,
    read_firings,
    write_firings,
)
from .network import (
    Network,
    build_network,
)
from .engine import (
    RunState,
    SimulationResult,
    initial_state,
    integrate_step,
    check_finite,
    detect_and_reset,
    simulate,
    run,
)
from .analysis import (
    firing_rates,
    spike_raster,
    active_fraction,
    population_rate,
    population_sparseness,
    class_rates,
    ei_balance,
)
