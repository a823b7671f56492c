import argparse
from pathlib import Path

from leafrake.data.garden_pack import load_garden_pack

ap = argparse.ArgumentParser()
ap.add_argument("pack_dir", nargs="?", default="assets/example_garden")
args = ap.parse_args()

pack = load_garden_pack(Path(args.pack_dir))

print("Cells:", pack.n_cells)
print("Grid shape:", pack.shape)
print("Blocked cells:", int(pack.blocked.sum()))
print("Capacity:", pack.capacity)
print("Sink cell:", pack.sink)

print("\nLoad summary:")
print("  total:", float(pack.load[pack.workable].sum()))
print("  max:", float(pack.load[pack.workable].max()) if pack.workable.any() else 0.0)
print("  zero-load cells:", int((pack.load == 0).sum()))

print("\nIsolated workable cells (0 neighbors):", sum(1 for i in range(pack.n_cells) if pack.workable[i] and not pack.adj[i]))
print("Distance-to-sink available:", pack.sink_dist is not None)
