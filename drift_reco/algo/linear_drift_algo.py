"""
Rec-hit algorithms: raw digi time -> two mirror positions around the wire.
"""

import abc

from drift_reco.algo.drift_model import compute_drift
from drift_reco.algo.types import LocalPoint, WireId


class DriftAlgoBase(abc.ABC):
    """
    Common interface of the drift algorithms.

    Reconstruction calls compute() in up to three passes, adding context as it
    becomes known: first the wire alone, then the incidence angle, then the
    angle and a global position estimate. Which of these a concrete algorithm
    actually uses is up to the algorithm.
    """

    def __init__(self, config, sync):
        self.config = config
        self.sync = sync

    @abc.abstractmethod
    def compute(self, layer, wire_id, time, angle=None, glob_pos=None):
        """Return (accepted, DriftResult or None)."""

    def compute_hit(self, layer, hit):
        return self.compute(layer, hit.wire_id, hit.time, angle=hit.angle, glob_pos=hit.glob_pos)


class LinearDriftAlgo(DriftAlgoBase):
    """
    Constant drift velocity, time-independent resolution.

    angle is accepted for interface parity and ignored. glob_pos only reaches
    the sync provider; when it is missing the wire's global position is used.
    """

    def compute(self, layer, wire_id, time, angle=None, glob_pos=None):
        if not isinstance(wire_id, WireId):
            wire_id = WireId(layer.detector_id, wire_id)
        elif wire_id.layer_id != layer.detector_id:
            raise ValueError(f"Wire {wire_id} does not belong to layer {layer.detector_id}")

        step = self.step(angle, glob_pos)

        # Get wire position
        wire_point = LocalPoint(layer.get_wire_position(wire_id.wire), 0., 0.)
        if glob_pos is None:
            glob_pos = layer.to_global(wire_point)

        t_offset = self.sync.offset(layer, wire_id, glob_pos)

        return compute_drift(time, t_offset, wire_point, self.config,
                             wire_id=wire_id, step=step)

    def compute_raw(self, t_raw, t_offset, wire_point=LocalPoint(0., 0., 0.)):
        """Drift conversion with an already known offset and wire position."""
        return compute_drift(t_raw, t_offset, LocalPoint(*wire_point), self.config)

    @staticmethod
    def step(angle, glob_pos):
        # Reconstruction pass implied by the context, for the debug trace
        return 1 + (angle is not None) + (glob_pos is not None)
