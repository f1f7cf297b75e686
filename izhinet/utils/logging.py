"""A print-based logger for simulation runs.

Messages are printed with a ruled header carrying the logger name, level
and wall-clock time. They go to standard error by default, so that a
firing log streamed to standard output stays clean for redirection.

Usage:
    from izhinet.utils import get_logger
    log = get_logger("simulation.engine")
    log.info("Simulating %d neurons", 1000)
"""

import sys
from datetime import datetime

LEVELS = {"DEBUG": 10, "INFO": 20, "WARNING": 30, "ERROR": 40}

_settings = {"level": LEVELS["INFO"], "stream": None}


def configure_logging(level=None, stream=None):
    """Set the minimum level and default stream for every izhinet logger.

    Parameters
    ----------
    level : str, optional
        One of DEBUG, INFO, WARNING, ERROR.
    stream : file-like, optional
        Replaces standard error as the default destination.
    """
    if level is not None:
        try:
            _settings["level"] = LEVELS[level.upper()]
        except KeyError:
            raise ValueError(
                f"Unknown log level '{level}'. Use one of {list(LEVELS)}"
            ) from None
    if stream is not None:
        _settings["stream"] = stream


def get_logger(name, out=None):
    """Create a print-based logger.

    Parameters
    ----------
    name : str
        Logger name, displayed in every message header.
    out : file-like, optional
        Additional output stream (e.g., an open log file).

    Returns
    -------
    callable
        A log function with .debug, .info, .warning, .error methods.
    """
    prefix = f"izhinet:{name}"
    line_length = 72

    def _outputs():
        default = _settings["stream"] or sys.stderr
        return [default] + ([out] if out else [])

    def log(level, msg, args):
        if LEVELS[level] < _settings["level"]:
            return
        now = datetime.now().strftime("%H:%M:%S")
        try:
            text = msg % args if args else msg
        except TypeError:
            text = msg
        for dest in _outputs():
            print(f"{'_' * line_length}", file=dest)
            print(f"{prefix} {level} [{now}]", file=dest)
            print(text, file=dest)

    log.debug = lambda msg, *args: log("DEBUG", msg, args)
    log.info = lambda msg, *args: log("INFO", msg, args)
    log.warning = lambda msg, *args: log("WARNING", msg, args)
    log.error = lambda msg, *args: log("ERROR", msg, args)

    return log
