"""Bootstrap inference for interleaving preference."""

from .engine import (
    BootstrapEngine,
    bootstrap,
    confidence_interval,
    resample_delta,
    spawn_streams,
    validate_confidence_level,
    DEFAULT_ITERATIONS,
    DEFAULT_CONFIDENCE_LEVEL,
)

__all__ = [
    "BootstrapEngine",
    "bootstrap",
    "confidence_interval",
    "resample_delta",
    "spawn_streams",
    "validate_confidence_level",
    "DEFAULT_ITERATIONS",
    "DEFAULT_CONFIDENCE_LEVEL",
]
