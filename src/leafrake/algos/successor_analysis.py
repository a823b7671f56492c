from __future__ import annotations

from collections import defaultdict
from typing import Dict, List

import numpy as np

BLOCKED = -1  # successor value for blocked cells


# ----------------------------
# Structure of a successor table
# ----------------------------

def find_hubs(table: np.ndarray) -> np.ndarray:
    """Cell ids that rake onto themselves, ascending."""
    return table[table[:, 0] == table[:, 1], 0]


def find_sources(table: np.ndarray) -> np.ndarray:
    """Workable cells absent from the successor column (a hub is its own successor, so never a source)."""
    workable = table[table[:, 1] != BLOCKED, 0]
    targets = table[table[:, 1] != BLOCKED, 1]
    return np.setdiff1d(workable, targets)


def cluster_labels(table: np.ndarray) -> np.ndarray:
    """
    Hub id each cell drains to (BLOCKED for blocked cells).

    Raises ValueError if a chain does not reach a hub within N hops.
    """
    N = table.shape[0]
    succ = table[:, 1]
    labels = np.full(N, 0, dtype=int)
    labels[succ == BLOCKED] = BLOCKED

    for start in range(N):
        if labels[start] != 0:
            continue
        path = [start]
        cur = start
        for _ in range(N + 1):
            nxt = int(succ[cur]) - 1
            if nxt == cur or labels[nxt] != 0:
                break
            path.append(nxt)
            cur = nxt
        else:
            raise ValueError(f"Successor chain from cell {start + 1} does not reach a hub.")

        if nxt == cur:
            hub = cur + 1
        else:
            hub = int(labels[nxt])
            if hub == BLOCKED:
                raise ValueError(f"Cell {cur + 1} rakes into blocked cell {nxt + 1}.")
        for p in path:
            labels[p] = hub

    return labels


def clusters(table: np.ndarray) -> Dict[int, List[int]]:
    """hub id -> sorted member ids (hub included)."""
    labels = cluster_labels(table)
    out: Dict[int, List[int]] = defaultdict(list)
    for cell, hub in zip(table[:, 0].tolist(), labels.tolist()):
        if hub != BLOCKED:
            out[hub].append(cell)
    return dict(sorted(out.items()))


def cluster_loads(table: np.ndarray, load: np.ndarray) -> Dict[int, float]:
    """hub id -> total load over the cluster's members."""
    return {hub: float(sum(load[m - 1] for m in members)) for hub, members in clusters(table).items()}


def summarize(table: np.ndarray, load: np.ndarray, capacity: float) -> dict:
    loads = list(cluster_loads(table, load).values())
    return {
        "num_cells": int(table.shape[0]),
        "num_blocked": int(np.sum(table[:, 1] == BLOCKED)),
        "num_clusters": len(loads),
        "max_cluster_load": max(loads) if loads else 0.0,
        "min_cluster_load": min(loads) if loads else 0.0,
        "num_full_clusters": int(sum(1 for x in loads if x == capacity)),
        "capacity": float(capacity),
    }


# ----------------------------
# Post-processing
# ----------------------------

def skip_zero_hubs(table: np.ndarray, load: np.ndarray) -> np.ndarray:
    """
    Turn sources without leaves into single-cell hubs, repeatedly.

    Once a zero-load source is cut off, the cell it raked into may become a
    source itself; if that one holds no leaves either it is cut off on the
    next pass. Such cells never carry leaves, so later stages can ignore them.
    Returns a new table.
    """
    table = table.copy()
    load = np.asarray(load, dtype=float)
    handled = table[:, 1] == BLOCKED

    while True:
        sources = find_sources(table)
        sources = sources[~handled[sources - 1]]
        empty = sources[load[sources - 1] == 0]
        if empty.size == 0:
            break
        table[empty - 1, 1] = empty
        handled[empty - 1] = True

    return table
