# reco_constants.py

# Linear drift model defaults (cm, ns)
DRIFT_VELOCITY = 0.00543  # cm/ns
MIN_TIME = -3.0           # ns, small negative times are hits at the wire
MAX_TIME = 415.0          # ns, above this the hit is out-of-time pile-up
HIT_RESOLUTION = 0.02     # cm

SPEED_OF_LIGHT = 29.9792458  # cm/ns

# Parameter names expected by DriftAlgoConfig.from_params
REQUIRED_PARAMS = ["driftVelocity", "minTime", "maxTime", "hitResolution"]

TREE_NAME = "tree"
HIT_BRANCHES = ["detectorID", "elementID", "tdcTime"]
