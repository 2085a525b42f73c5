from dataclasses import dataclass

from drift_reco.reco_constants import (
    DRIFT_VELOCITY,
    MIN_TIME,
    MAX_TIME,
    HIT_RESOLUTION,
    REQUIRED_PARAMS,
)

TRUE_STRINGS = {"true", "yes", "on", "1"}
FALSE_STRINGS = {"false", "no", "off", "0"}


def parse_flag(value, name):
    """Boolean parameter from a bool, 0/1, or a true/false style string."""
    if isinstance(value, bool):
        return value
    if isinstance(value, int) and value in (0, 1):
        return bool(value)
    if isinstance(value, str):
        if value.strip().lower() in TRUE_STRINGS:
            return True
        if value.strip().lower() in FALSE_STRINGS:
            return False
    raise ValueError(f"Parameter '{name}' must be a boolean, got {value!r}")


@dataclass(frozen=True)
class DriftAlgoConfig:
    """
    Calibration parameters of the linear drift model.

    Attributes:
        drift_velocity (float): cm/ns
        min_time (float): lower edge of the accepted drift-time window (ns), may be negative
        max_time (float): upper edge of the accepted drift-time window (ns)
        hit_resolution (float): position resolution (cm)
        debug (bool): print a trace of every computation

    min_time <= max_time is a precondition. Call validate() once after
    building a config from external input; the algorithms do not re-check it.
    """
    drift_velocity: float
    min_time: float
    max_time: float
    hit_resolution: float
    debug: bool = False

    @classmethod
    def from_params(cls, params):
        """
        Build from a parameter dict using the reconstruction parameter names
        (driftVelocity, minTime, maxTime, hitResolution, debug).
        """
        missing = [name for name in REQUIRED_PARAMS if name not in params]
        if missing:
            raise KeyError(f"Missing drift algorithm parameter(s): {', '.join(missing)}")

        return cls(
            drift_velocity=float(params["driftVelocity"]),
            min_time=float(params["minTime"]),
            max_time=float(params["maxTime"]),
            hit_resolution=float(params["hitResolution"]),
            debug=parse_flag(params.get("debug", False), "debug"),
        )

    @classmethod
    def default(cls, debug=False):
        return cls(DRIFT_VELOCITY, MIN_TIME, MAX_TIME, HIT_RESOLUTION, debug)

    def validate(self):
        if self.min_time > self.max_time:
            raise ValueError(f"minTime ({self.min_time}) > maxTime ({self.max_time})")
        if self.drift_velocity <= 0:
            raise ValueError(f"driftVelocity must be positive, got {self.drift_velocity}")
        if self.hit_resolution < 0:
            raise ValueError(f"hitResolution must be non-negative, got {self.hit_resolution}")
        return self
