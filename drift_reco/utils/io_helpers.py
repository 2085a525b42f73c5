import awkward as ak
import numpy as np
import uproot

from drift_reco.reco_constants import TREE_NAME, HIT_BRANCHES


def read_hits(input_filename, tree_name=TREE_NAME):
    """
    Reads the hit-level branches ('detectorID', 'elementID', 'tdcTime') of every event.
    Returns a dict branch -> object array of per-event numpy arrays.
    """
    with uproot.open(input_filename) as f:
        if tree_name not in f:
            raise RuntimeError(f"Could not find '{tree_name}' in {input_filename}")
        tree = f[tree_name]
        missing = [b for b in HIT_BRANCHES if b not in tree.keys()]
        if missing:
            raise RuntimeError(f"Missing branches {missing} in '{tree_name}' of {input_filename}")
        return tree.arrays(HIT_BRANCHES, library="np")


BRANCH_DTYPES = {
    "detectorID": np.int32,
    "elementID": np.int32,
    "tdcTime": np.float64,
    "accepted": np.bool_,
    "leftPos": np.float64,
    "rightPos": np.float64,
    "driftDistance": np.float64,
    "posError": np.float64,
}


def jagged_column(values, dtype):
    """
    One list per event with a fixed dtype, so a run with no events still
    has a typed (empty) column.
    """
    arrays = [np.asarray(v, dtype=dtype) for v in values]
    counts = np.array([a.size for a in arrays], dtype=np.int64)
    flat = np.concatenate(arrays) if arrays else np.empty(0, dtype=dtype)
    return ak.unflatten(flat, counts)


def write_rec_hits(output_filename, events, tree_name=TREE_NAME):
    """
    Writes one entry per event with the hit ids and the rec-hit branches
    ('accepted', 'leftPos', 'rightPos', 'driftDistance', 'posError') as
    jagged arrays.
    """
    columns = {name: jagged_column([ev[name] for ev in events], dtype)
               for name, dtype in BRANCH_DTYPES.items()}

    branch_types = {name: f"var * {np.dtype(dtype).name}" for name, dtype in BRANCH_DTYPES.items()}

    with uproot.recreate(output_filename) as f:
        tree = f.mktree(tree_name, branch_types)
        # A run with no events leaves an empty tree
        if events:
            tree.extend(columns)

    print(f"Wrote rec hits for {len(events)} events to '{output_filename}'")
