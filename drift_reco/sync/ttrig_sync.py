# sync/ttrig_sync.py

import abc
import numpy as np
import pandas as pd

from drift_reco.reco_constants import SPEED_OF_LIGHT

TTRIG_COLUMNS = ["det_id", "ttrig"]
T0_COLUMNS = ["det_id", "wire", "t0"]


class TTrigBaseSync(abc.ABC):
    """
    Time offset to subtract from a raw digi time before drift conversion.

    offset() must be deterministic for a fixed calibration snapshot and free
    of side effects on the caller. Concurrent callers are only safe if the
    concrete provider is safe for concurrent reads.
    """

    @abc.abstractmethod
    def offset(self, layer, wire_id, glob_pos):
        """
        Args:
            layer (Layer): layer the hit belongs to
            wire_id (WireId): layer and wire number
            glob_pos (tuple): global position of the hit (or of the wire on a first pass)
        Returns:
            float: offset in ns
        """


class ConstantSync(TTrigBaseSync):
    def __init__(self, t_offset=0.0):
        self.t_offset = float(t_offset)

    def offset(self, layer, wire_id, glob_pos):
        return self.t_offset


class TableSync(TTrigBaseSync):
    """
    tTrig per layer plus t0 per wire, both read from tab-separated tables.
    Wires missing from the t0 table get t0 = 0; a layer missing from the
    tTrig table raises KeyError.
    """

    def __init__(self, ttrig=None, t0=None):
        self.ttrig = dict(ttrig or {})  # det_id -> tTrig
        self.t0 = dict(t0 or {})        # (det_id, wire) -> t0

    @classmethod
    def from_tsv(cls, ttrig_path, t0_path=None):
        df = pd.read_csv(ttrig_path, sep='\t', comment='#', names=TTRIG_COLUMNS)
        ttrig = {int(row.det_id): float(row.ttrig) for row in df.itertuples()}

        t0 = {}
        if t0_path is not None:
            df = pd.read_csv(t0_path, sep='\t', comment='#', names=T0_COLUMNS)
            t0 = {(int(row.det_id), int(row.wire)): float(row.t0) for row in df.itertuples()}

        print(f"[INFO] Loaded tTrig for {len(ttrig)} layers, t0 for {len(t0)} wires")
        return cls(ttrig, t0)

    def offset(self, layer, wire_id, glob_pos):
        return self.ttrig[wire_id.layer_id] + self.t0.get((wire_id.layer_id, wire_id.wire), 0.0)


class TOFCorrSync(TTrigBaseSync):
    """
    Constant tTrig plus the time of flight of a straight track from the
    origin to glob_pos, when tof_correction is on.
    """

    def __init__(self, t_trig, tof_correction=True):
        self.t_trig = float(t_trig)
        self.tof_correction = tof_correction

    def offset(self, layer, wire_id, glob_pos):
        if not self.tof_correction:
            return self.t_trig
        return self.t_trig + float(np.linalg.norm(glob_pos)) / SPEED_OF_LIGHT


SYNC_TYPES = {
    "constant": ConstantSync,
    "table": TableSync.from_tsv,
    "tofcorr": TOFCorrSync,
}


def sync_from_params(params):
    """
    Build a sync provider from a dict such as
    {"type": "constant", "t_offset": 500.0} or
    {"type": "table", "ttrig_path": "ttrig.tsv", "t0_path": "t0.tsv"}.
    """
    params = dict(params)
    sync_type = params.pop("type", "constant")
    if sync_type not in SYNC_TYPES:
        raise ValueError(f"Unknown time sync type '{sync_type}' (choose from {sorted(SYNC_TYPES)})")
    return SYNC_TYPES[sync_type](**params)
