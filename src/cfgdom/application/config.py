"""
Analysis configuration.

A single dataclass gathers the knobs of a dominance run so that the CLI,
the facade and the tests agree on names and defaults.
"""

from dataclasses import dataclass
from typing import Optional

from .errors import ConfigError

# Block visitation orders understood by the solver.
ORDERS = {
    "rpo": "Reverse postorder from the entry (fastest convergence)",
    "index": "Registry order, reachable blocks only",
}


@dataclass
class AnalysisConfig:
    """Options for a dominance analysis run."""
    order: str = "rpo"
    trace: bool = False
    maxPasses: Optional[int] = None
    crossCheck: bool = False

    def __post_init__(self):
        if self.order not in ORDERS:
            raise ConfigError(
                "unknown block order %r (expected one of: %s)"
                % (self.order, ", ".join(sorted(ORDERS)))
            )
        if self.maxPasses is not None and self.maxPasses < 1:
            raise ConfigError("maxPasses must be positive, got %r" % (self.maxPasses,))
