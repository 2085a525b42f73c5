import argparse
import os
import numpy as np
import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt
import uproot

from drift_reco.reco_constants import TREE_NAME


def plot_drift_distance(distances, output_path, bins=100, title="Drift Distance Distribution"):
    """
    Histogram of accepted drift distances. NaN entries (rejected hits) are dropped.
    Returns the histogram counts.
    """
    distances = np.asarray(distances, dtype=float)
    distances = distances[~np.isnan(distances)]

    fig, ax = plt.subplots()
    counts, _, _ = ax.hist(distances, bins=bins)
    ax.set_xlabel("Drift Distance (cm)")
    ax.set_ylabel("Counts")
    ax.set_title(title)
    ax.grid(True)

    output_dir = os.path.dirname(output_path)
    if output_dir:
        os.makedirs(output_dir, exist_ok=True)
    fig.savefig(output_path, dpi=300)
    plt.close(fig)

    return counts


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Plot drift distances from a rec-hit ROOT file")
    parser.add_argument("rec_hit_file")
    parser.add_argument("--output", default="drift_plots/drift_distance.png")
    parser.add_argument("--detector", type=int, help="only plot this detector ID")
    args = parser.parse_args()

    tree = uproot.open(args.rec_hit_file)[TREE_NAME]
    drift = np.concatenate(tree["driftDistance"].array(library="np"))
    det = np.concatenate(tree["detectorID"].array(library="np"))

    title = "Drift Distance Distribution"
    if args.detector is not None:
        drift = drift[det == args.detector]
        title = f"Drift Distance Distribution for Detector ID {args.detector}"

    plot_drift_distance(drift, args.output, title=title)
    print(f"Saved {args.output}")
