"""Command-line entry point: simulate a network and print its firing log.

    izhinet --seed 42 --duration 1000 > firings.txt
    izhinet --config run.yaml --output firings.txt --summary
"""

import argparse
import sys

from izhinet.errors import ConfigurationError, IzhinetError
from izhinet.simulation.analysis import class_rates
from izhinet.simulation.config import SimulationConfig
from izhinet.simulation.engine import run
from izhinet.simulation.random_source import RandomSource
from izhinet.utils import configure_logging, get_logger

LOG = get_logger("cli")


def build_parser():
    parser = argparse.ArgumentParser(
        prog="izhinet",
        description="Simulate an Izhikevich spiking network and write its firing log.")

    seeding = parser.add_mutually_exclusive_group()
    seeding.add_argument("-s", "--seed", type=int, default=None,
                         help="Seed of the random source.")
    seeding.add_argument("--seed-from-entropy", dest="seed_from_entropy",
                         action="store_true",
                         help="Draw the seed from system entropy (it is logged).")

    parser.add_argument("-c", "--config", default=None,
                        help="YAML file with configuration values.")
    parser.add_argument("-t", "--duration", type=int, default=None,
                        help="Simulated time in milliseconds.")
    parser.add_argument("-e", "--excitatory", type=int, default=None,
                        help="Number of excitatory neurons.")
    parser.add_argument("-i", "--inhibitory", type=int, default=None,
                        help="Number of inhibitory neurons.")
    parser.add_argument("-o", "--output", default=None,
                        help="File to write the firing log to (default: stdout).")
    parser.add_argument("-q", "--quiet", action="store_true",
                        help="Only log warnings and errors.")
    parser.add_argument("--summary", action="store_true",
                        help="Log per-class firing rates after the run.")
    return parser


def load_config(args):
    """Translate parsed arguments into a SimulationConfig."""
    overrides = {
        "n_excitatory": args.excitatory,
        "n_inhibitory": args.inhibitory,
        "duration": args.duration,
    }
    if args.seed_from_entropy:
        overrides["seed"] = RandomSource.entropy_seed()
        LOG.info("Seed drawn from system entropy: %d", overrides["seed"])
    else:
        overrides["seed"] = args.seed

    if args.config is not None:
        return SimulationConfig.from_yaml(args.config, **overrides)

    if overrides["seed"] is None:
        raise ConfigurationError("Provide --seed, --seed-from-entropy, or a config with a seed")
    return SimulationConfig(**{k: v for k, v in overrides.items() if v is not None})


def main(argv=None):
    args = build_parser().parse_args(argv)
    if args.quiet:
        configure_logging(level="WARNING")

    try:
        config = load_config(args)
    except (ConfigurationError, FileNotFoundError) as err:
        LOG.error("%s", err)
        return 2
    except IzhinetError as err:
        LOG.error("%s", err)
        return 1

    LOG.info("Configuration: %s", config.to_dict())

    try:
        stream = sys.stdout if args.output is None else open(args.output, "w")
    except OSError as err:
        LOG.error("Cannot open output file: %s", err)
        return 2

    try:
        return _simulate(config, stream, summary=args.summary)
    finally:
        if stream is not sys.stdout:
            stream.close()


def _simulate(config, stream, summary=False):
    try:
        result = run(config)
    except IzhinetError as err:
        LOG.error("%s", err)
        return 1

    LOG.info("Writing %d firing events", len(result.firing_log))
    try:
        result.firing_log.write(stream)
    except OSError as err:
        LOG.error("Cannot write firing log: %s", err)
        return 1

    if summary:
        LOG.info("Firing rates by class:\n%s", class_rates(result).to_string())

    return 0


if __name__ == "__main__":
    sys.exit(main())
