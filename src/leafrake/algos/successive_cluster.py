# src/leafrake/algos/successive_cluster.py
#
# Successive ("one open cluster at a time") cluster formation for the
# leaf-raking problem.
# - Open a cluster at a hub chosen from the unassigned cells
# - Grow it by expanding queued cells, accepting neighbors while the
#   cluster's total load stays within capacity
# - When the queue runs dry, close the cluster and open the next one
#
# Entry point:
#   run(pack, cfg) -> successor table (np.ndarray, shape (N, 2))
#
from __future__ import annotations

from dataclasses import dataclass
from itertools import product
from typing import List, Optional, Tuple

import numpy as np

from leafrake.algos.cluster_policies import (
    CandidateOrder,
    CandidateQueue,
    ConfigurationError,
    HubSelection,
    QueueDiscipline,
    as_candidate_order,
    as_hub_selection,
    as_queue_discipline,
    order_candidates,
    select_hub,
)
from leafrake.algos.successor_analysis import BLOCKED, skip_zero_hubs, summarize


# ----------------------------
# Config
# ----------------------------

@dataclass
class SuccessiveClusterParams:
    hub_selection: HubSelection = HubSelection.NW
    candidate_order: CandidateOrder = CandidateOrder.NW
    queue_discipline: QueueDiscipline = QueueDiscipline.FIFO

    # post-processing: turn leaf-free sources into their own hubs
    remove_empty_nodes: bool = False
    verbose: bool = False

    def __post_init__(self):
        self.hub_selection = as_hub_selection(self.hub_selection)
        self.candidate_order = as_candidate_order(self.candidate_order)
        self.queue_discipline = as_queue_discipline(self.queue_discipline)

    @property
    def name(self) -> str:
        return f"sucClust_{self.candidate_order.value}_{self.queue_discipline.value}_{self.hub_selection.value}"


ALL_POLICY_COMBINATIONS: List[Tuple[HubSelection, CandidateOrder, QueueDiscipline]] = list(
    product(HubSelection, CandidateOrder, QueueDiscipline)
)


def params_from_cfg(cfg: dict) -> SuccessiveClusterParams:
    algo_cfg = (cfg.get("algo", {}) or {}).get("successive_cluster", {}) or {}
    defaults = SuccessiveClusterParams()

    return SuccessiveClusterParams(
        hub_selection=algo_cfg.get("hub_selection", defaults.hub_selection),
        candidate_order=algo_cfg.get("candidate_order", defaults.candidate_order),
        queue_discipline=algo_cfg.get("queue_discipline", defaults.queue_discipline),
        remove_empty_nodes=bool(algo_cfg.get("remove_empty_nodes", defaults.remove_empty_nodes)),
        verbose=bool(algo_cfg.get("verbose", defaults.verbose)),
    )


# ----------------------------
# Core
# ----------------------------

def successive_cluster(
    load: np.ndarray,
    adj: List[List[int]],
    capacity: float,
    sink_dist: Optional[np.ndarray] = None,
    params: Optional[SuccessiveClusterParams] = None,
) -> np.ndarray:
    """
    Grow capacity-bounded clusters one at a time.

    load:      (N,) per-cell load, negative for blocked cells
    adj:       neighbor lists over 0-based positions
    capacity:  maximum total load per cluster
    sink_dist: (N,) distance to the compost cell, only read by KP_min

    Returns the successor table: shape (N, 2), column 0 the cell ids 1..N,
    column 1 the 1-based cell each cell rakes toward (itself for a hub,
    BLOCKED for blocked cells).
    """
    params = params or SuccessiveClusterParams()
    if params.hub_selection is HubSelection.KP_MIN and sink_dist is None:
        raise ConfigurationError("KP_min hub selection needs distance-to-sink data.")

    load = np.asarray(load, dtype=float)
    capacity = float(capacity)
    N = load.shape[0]

    unassigned = load >= 0
    remaining = int(unassigned.sum())
    succ = np.full(N, BLOCKED, dtype=int)
    queue = CandidateQueue(params.queue_discipline)
    num_clusters = 0

    while remaining:
        # open a new cluster
        hub = select_hub(unassigned, load, params.hub_selection, sink_dist)
        unassigned[hub] = False
        remaining -= 1
        succ[hub] = hub
        accumulated = float(load[hub])
        queue.clear()
        num_clusters += 1

        a = hub
        while remaining:
            nbrs = [c for c in adj[a] if unassigned[c]]
            for c in order_candidates(nbrs, load, params.candidate_order):
                trial = accumulated + float(load[c])
                if trial > capacity:
                    continue
                queue.enqueue(c)
                unassigned[c] = False
                remaining -= 1
                succ[c] = a
                accumulated = trial
                # cluster is exactly full: stop scanning a's neighbors
                if accumulated == capacity:
                    break

            if not queue:
                break
            a = queue.dequeue()

        if params.verbose:
            print(f"[successive_cluster] cluster {num_clusters}: hub={hub + 1} load={accumulated:g}")

    out = np.empty((N, 2), dtype=int)
    out[:, 0] = np.arange(1, N + 1)
    out[:, 1] = np.where(succ >= 0, succ + 1, BLOCKED)
    return out


# ----------------------------
# Public entry point
# ----------------------------

def run(pack, cfg: dict) -> np.ndarray:
    """
    Entry point called by runner.

    pack: GardenGraph (load, adj, capacity, sink_dist)
    cfg:  parsed config; algo.successive_cluster.capacity overrides pack.capacity
    """
    params = params_from_cfg(cfg)
    algo_cfg = (cfg.get("algo", {}) or {}).get("successive_cluster", {}) or {}
    capacity = float(algo_cfg.get("capacity", pack.capacity))

    if params.verbose:
        print(f"[successive_cluster] {params.name}: {pack.n_cells} cells, capacity={capacity:g}")

    table = successive_cluster(pack.load, pack.adj, capacity, pack.sink_dist, params)

    if params.remove_empty_nodes:
        table = skip_zero_hubs(table, pack.load)

    if params.verbose:
        stats = summarize(table, pack.load, capacity)
        print(
            f"[successive_cluster] clusters={stats['num_clusters']} "
            f"full={stats['num_full_clusters']} max_load={stats['max_cluster_load']:g}"
        )

    return table
