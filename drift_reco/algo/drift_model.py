"""
Linear time-to-distance conversion for a single wire hit
"""

from drift_reco.algo.types import DriftResult, LocalError, LocalPoint


def in_time_window(drift_time, config):
    """True if the calibrated time is inside [min_time, max_time]."""
    return config.min_time <= drift_time <= config.max_time


def compute_drift(t_raw, t_offset, wire_point, config, wire_id=None, step=None):
    """
    Convert a raw time into the two mirror positions around a wire.

    Args:
        t_raw (float): raw digitized time (ns)
        t_offset (float): time-sync offset to subtract (ns)
        wire_point (LocalPoint): wire position in the layer frame
        config (DriftAlgoConfig): calibration parameters
        wire_id, step: only used in the debug trace
    Returns:
        (bool, DriftResult or None): (False, None) for out-of-time hits
    """
    drift_time = t_raw - t_offset

    # Out-of-window hits come from out-of-time pile-up
    if not in_time_window(drift_time, config):
        if config.debug:
            print(f"[LinearDriftAlgo]*** Drift time out of window for in-time hits {drift_time}")
        return False, None

    # Small negative times are hits close to the wire
    if drift_time < 0.:
        drift_time = 0.

    drift = drift_time * config.drift_velocity

    wx, wy, wz = wire_point
    left = LocalPoint(wx - drift, wy, wz)
    right = LocalPoint(wx + drift, wy, wz)
    error = LocalError(config.hit_resolution * config.hit_resolution, 0., 0.)

    if config.debug:
        print(f"[LinearDriftAlgo] Compute drift distance, for digi at wire: {wire_id}\n"
              f"       Step:           {step}\n"
              f"       Digi time:      {t_raw}\n"
              f"       Drift time:     {drift_time}\n"
              f"       Drift distance: {drift}\n"
              f"       Hit Resolution: {config.hit_resolution}\n"
              f"       Left point:     {tuple(left)}\n"
              f"       Right point:    {tuple(right)}\n"
              f"       Error:          {tuple(error)}")

    return True, DriftResult(left, right, error, drift)
