"""izhinet: Izhikevich spiking network simulation.

Simulates a fully coupled population of excitatory and inhibitory
Izhikevich neurons driven by random thalamic input, producing a
chronological log of spike events.

Subpackages:
    simulation  Configuration, network construction, engine, analysis
    utils       Print-based logging
"""

__version__ = "0.1.0"
