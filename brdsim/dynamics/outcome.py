"""Result record produced by one run of the dynamics engine."""
from __future__ import annotations

from dataclasses import dataclass, asdict
from enum import Enum
from typing import Any, Dict, Optional

from brdsim.errors import InvalidArgument


class Status(str, Enum):
    EQUILIBRIUM_FOUND = "Equilibrium found"
    EQUILIBRIUM_NOT_FOUND = "Equilibrium not found"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class GameOutcome:
    """Outcome of best-response play on a single game.

    Attributes
    ----------
    status : Status
        whether the run converged to a pure-strategy Nash equilibrium.
    iterations : int
        number of player evaluations, restarts included.
    movements : int
        number of strategy changes, restarts included.
    restarts : int
        how many times play was re-seeded from an unvisited profile.
    equilibrium : Optional[int]
        code of the converged profile, None when no equilibrium was found.
    """
    status:      Status
    iterations:  int
    movements:   int
    restarts:    int = 0
    equilibrium: Optional[int] = None

    def __post_init__(self):
        if self.iterations < 0 or self.movements < 0 or self.restarts < 0:
            raise InvalidArgument("iterations, movements and restarts must be non-negative")
        if self.found != (self.equilibrium is not None):
            raise InvalidArgument("equilibrium profile must be set exactly when one was found")

    @property
    def found(self) -> bool:
        return self.status is Status.EQUILIBRIUM_FOUND

    def to_dict(self) -> Dict[str, Any]:
        row = asdict(self)
        row["status"] = self.status.value
        return row
