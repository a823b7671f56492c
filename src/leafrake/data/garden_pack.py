from __future__ import annotations
from dataclasses import dataclass
from pathlib import Path
import json
import numpy as np
import pandas as pd

@dataclass
class GardenGraph:
    load: np.ndarray  # (N,) row-major; negative = blocked
    adj: list[list[int]]  # neighbors as 0-based positions
    capacity: float
    sink_dist: np.ndarray | None = None  # (N,) distance to the compost cell
    shape: tuple[int, int] | None = None
    sink: int | None = None  # 1-based cell id
    pack_dir: Path | None = None

    @property
    def n_cells(self) -> int:
        return int(self.load.shape[0])

    @property
    def workable(self) -> np.ndarray:
        return self.load >= 0

    @property
    def blocked(self) -> np.ndarray:
        return self.load < 0

    @property
    def cell_ids(self) -> np.ndarray:
        return np.arange(1, self.n_cells + 1, dtype=int)


def load_garden_pack(pack_dir: str | Path, capacity: float | None = None) -> GardenGraph:
    """
    Read a pre-computed garden pack:
      attributes.csv  cell_id, load[, row, col, sink_dist]
      adjacency.json  {"<cell_id>": [<cell_id>, ...]}
      meta.json       optional {capacity, rows, cols, sink}

    `capacity` overrides meta.json; one of the two must provide it.
    """
    pack_dir = Path(pack_dir)

    attrs_path = pack_dir / "attributes.csv"
    if not attrs_path.exists():
        raise FileNotFoundError(f"Missing {attrs_path}")
    adj_path = pack_dir / "adjacency.json"
    if not adj_path.exists():
        raise FileNotFoundError(f"Missing {adj_path}")

    attrs = pd.read_csv(attrs_path)
    for col in ("cell_id", "load"):
        if col not in attrs.columns:
            raise KeyError(f"attributes.csv missing '{col}'. Available: {list(attrs.columns)}")

    # row-major order by cell id
    attrs = attrs.sort_values("cell_id").reset_index(drop=True)
    ids = attrs["cell_id"].astype(int).tolist()
    if ids != list(range(1, len(ids) + 1)):
        raise ValueError("attributes.csv cell_id must enumerate 1..N without gaps.")

    load = attrs["load"].to_numpy(dtype=float)
    sink_dist = attrs["sink_dist"].to_numpy(dtype=float) if "sink_dist" in attrs.columns else None

    meta_path = pack_dir / "meta.json"
    meta = json.loads(meta_path.read_text()) if meta_path.exists() else {}

    if capacity is None:
        capacity = meta.get("capacity")
    if capacity is None:
        raise KeyError(f"No capacity given and {meta_path} does not define one.")

    shape = None
    if "rows" in meta and "cols" in meta:
        shape = (int(meta["rows"]), int(meta["cols"]))
    sink = int(meta["sink"]) if meta.get("sink") is not None else None

    # Build adjacency list in 0-based position space
    N = len(ids)
    adj_ids = json.loads(adj_path.read_text())
    adj: list[list[int]] = [[] for _ in range(N)]
    for cid, nbrs in adj_ids.items():
        i = int(cid) - 1
        if not 0 <= i < N or load[i] < 0:
            continue
        adj[i] = sorted({int(n) - 1 for n in nbrs if 1 <= int(n) <= N and load[int(n) - 1] >= 0})

    return GardenGraph(
        load=load,
        adj=adj,
        capacity=float(capacity),
        sink_dist=sink_dist,
        shape=shape,
        sink=sink,
        pack_dir=pack_dir,
    )
