import math
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping, Optional, Tuple


def _finite_or_none(value: float) -> Optional[float]:
    # JSON has no infinity
    return value if math.isfinite(value) else None


@dataclass(frozen=True)
class PathResult:
    """Outcome of one shortest-path computation.

    ``visited`` lists nodes in the order they were settled. ``distances`` is a
    read-only view; unreachable nodes map to ``math.inf``.
    """

    success: bool
    message: str
    distance: float
    path: Tuple[str, ...] = ()
    distances: Mapping[str, float] = field(default_factory=dict)
    visited: Tuple[str, ...] = ()

    def __post_init__(self):
        object.__setattr__(self, "path", tuple(self.path))
        object.__setattr__(self, "visited", tuple(self.visited))
        object.__setattr__(self, "distances", MappingProxyType(dict(self.distances)))

    def to_dict(self) -> dict:
        return {
            "success": self.success,
            "message": self.message,
            "distance": _finite_or_none(self.distance),
            "path": list(self.path),
            "distances": {node_id: _finite_or_none(d) for node_id, d in self.distances.items()},
            "visited": list(self.visited),
        }
