"""Utilities shared across izhinet: the print-based logger."""

from .logging import LEVELS, configure_logging, get_logger
