"""
Hit and rec-hit containers shared by the drift algorithms.
"""

from dataclasses import dataclass
from typing import NamedTuple, Optional, Tuple


class WireId(NamedTuple):
    layer_id: int
    wire: int


class LocalPoint(NamedTuple):
    x: float
    y: float
    z: float


class LocalError(NamedTuple):
    """Covariance in the layer frame; only xx is filled by the linear model."""
    xx: float
    xy: float
    yy: float


@dataclass(frozen=True)
class HitObservation:
    """
    A single digitized wire hit.

    Attributes:
        wire_id (WireId): layer and wire number of the hit
        time (float): raw digitized time (ns)
        angle (float, optional): incidence angle from a previous reconstruction pass
        glob_pos (tuple, optional): global position estimate from a previous pass
    """
    wire_id: WireId
    time: float
    angle: Optional[float] = None
    glob_pos: Optional[Tuple[float, float, float]] = None


@dataclass(frozen=True)
class DriftResult:
    """
    The two mirror candidates of an accepted hit, their error and the
    drift distance they were built from.
    left.x + right.x == 2 * wire x; y and z are the wire's.
    """
    left: LocalPoint
    right: LocalPoint
    error: LocalError
    drift_distance: float
