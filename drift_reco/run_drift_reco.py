"""
Run the linear drift reconstruction over every hit of a ROOT file.
"""

import argparse
import time
import numpy as np

from drift_reco.algo.drift_config import DriftAlgoConfig
from drift_reco.algo.linear_drift_algo import LinearDriftAlgo
from drift_reco.algo.types import WireId
from drift_reco.geom.geom_service import GeometryService
from drift_reco.reco_constants import DRIFT_VELOCITY, MIN_TIME, MAX_TIME, HIT_RESOLUTION, TREE_NAME
from drift_reco.sync.ttrig_sync import sync_from_params
from drift_reco.utils.io_helpers import read_hits, write_rec_hits


def reconstruct_event(detectorIDs, elementIDs, tdcTimes, geom, algo):
    """
    Applies the drift algorithm to each hit of one event.
    Hits on detectors missing from the geometry raise KeyError.

    Returns:
        dict: input ids/times plus per-hit 'accepted', 'leftPos', 'rightPos',
              'driftDistance', 'posError' arrays (NaN for rejected hits)
    """
    det = np.asarray(detectorIDs, dtype=np.int32)
    elem = np.asarray(elementIDs, dtype=np.int32)
    tdc = np.asarray(tdcTimes, dtype=float)

    n = det.size
    accepted = np.zeros(n, dtype=bool)
    left = np.full(n, np.nan)
    right = np.full(n, np.nan)
    drift = np.full(n, np.nan)
    err = np.full(n, np.nan)

    for i in range(n):
        layer = geom.get_layer(int(det[i]))
        ok, result = algo.compute(layer, WireId(int(det[i]), int(elem[i])), float(tdc[i]))
        if not ok:
            continue
        accepted[i] = True
        left[i] = result.left.x
        right[i] = result.right.x
        drift[i] = result.drift_distance
        err[i] = np.sqrt(result.error.xx)

    return {
        "detectorID": det,
        "elementID": elem,
        "tdcTime": tdc,
        "accepted": accepted,
        "leftPos": left,
        "rightPos": right,
        "driftDistance": drift,
        "posError": err,
    }


def run_reconstruction(input_file, output_file, geom_tsv, params, sync_params, tree_name=TREE_NAME):
    """
    Read ROOT file, reconstruct every hit, and write new ROOT file.
    """
    total_start = time.perf_counter()

    config = DriftAlgoConfig.from_params(params).validate()
    algo = LinearDriftAlgo(config, sync_from_params(sync_params))
    geom = GeometryService(tsv_path=geom_tsv)

    hits = read_hits(input_file, tree_name)

    reco_start = time.perf_counter()
    events = []
    n_hits = n_accepted = 0
    for det, elem, tdc in zip(hits["detectorID"], hits["elementID"], hits["tdcTime"]):
        ev = reconstruct_event(det, elem, tdc, geom, algo)
        n_hits += ev["accepted"].size
        n_accepted += int(ev["accepted"].sum())
        events.append(ev)
    reco_end = time.perf_counter()

    write_start = time.perf_counter()
    write_rec_hits(output_file, events, tree_name)
    write_end = time.perf_counter()

    total_end = time.perf_counter()

    print(f"[INFO] {n_accepted}/{n_hits} hits accepted in {len(events)} events")
    print("\n--- Timing Summary ---")
    print(f"Reconstruction time: {reco_end - reco_start:.2f} s")
    print(f"Write time:          {write_end - write_start:.2f} s")
    print(f"Total runtime:       {total_end - total_start:.2f} s")

    return events


def main(argv=None):
    parser = argparse.ArgumentParser(description="Linear drift reconstruction of wire hits")
    parser.add_argument("input_file", help="ROOT file with detectorID/elementID/tdcTime branches")
    parser.add_argument("output_file", help="ROOT file to write rec hits to")
    parser.add_argument("--geom", required=True, help="geometry TSV")
    parser.add_argument("--tree", default=TREE_NAME)
    parser.add_argument("--drift-velocity", type=float, default=DRIFT_VELOCITY)
    parser.add_argument("--min-time", type=float, default=MIN_TIME)
    parser.add_argument("--max-time", type=float, default=MAX_TIME)
    parser.add_argument("--hit-resolution", type=float, default=HIT_RESOLUTION)
    parser.add_argument("--debug", action="store_true")

    sync = parser.add_mutually_exclusive_group()
    sync.add_argument("--t-offset", type=float, default=0.0, help="constant time offset (ns)")
    sync.add_argument("--ttrig", help="per-layer tTrig TSV")
    parser.add_argument("--t0", help="per-wire t0 TSV, used with --ttrig")
    args = parser.parse_args(argv)
    if args.t0 and not args.ttrig:
        parser.error("--t0 requires --ttrig")

    params = {
        "driftVelocity": args.drift_velocity,
        "minTime": args.min_time,
        "maxTime": args.max_time,
        "hitResolution": args.hit_resolution,
        "debug": args.debug,
    }
    if args.ttrig:
        sync_params = {"type": "table", "ttrig_path": args.ttrig, "t0_path": args.t0}
    else:
        sync_params = {"type": "constant", "t_offset": args.t_offset}

    run_reconstruction(args.input_file, args.output_file, args.geom, params, sync_params, args.tree)


if __name__ == "__main__":
    main()
