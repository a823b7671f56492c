"""Shared fixtures: small hand-built garden graphs."""

from collections import deque

import numpy as np
import pytest

from leafrake.data.garden_pack import GardenGraph


def grid_graph(loads, capacity, sink=None):
    """4-neighbour graph over a row-major grid; negative loads are blocked.

    sink is a 1-based cell id; distances are BFS hops through workable cells.
    """
    grid = np.asarray(loads, dtype=float)
    rows, cols = grid.shape
    load = grid.reshape(-1)
    N = load.shape[0]

    adj = [[] for _ in range(N)]
    for r in range(rows):
        for c in range(cols):
            i = r * cols + c
            if load[i] < 0:
                continue
            for dr, dc in ((-1, 0), (0, -1), (0, 1), (1, 0)):
                rr, cc = r + dr, c + dc
                if 0 <= rr < rows and 0 <= cc < cols and load[rr * cols + cc] >= 0:
                    adj[i].append(rr * cols + cc)

    sink_dist = None
    if sink is not None:
        sink_dist = np.full(N, np.inf)
        s = sink - 1
        sink_dist[s] = 0
        q = deque([s])
        while q:
            u = q.popleft()
            r, c = divmod(u, cols)
            for dr, dc in ((-1, 0), (0, -1), (0, 1), (1, 0)):
                rr, cc = r + dr, c + dc
                if not (0 <= rr < rows and 0 <= cc < cols):
                    continue
                v = rr * cols + cc
                if load[v] >= 0 and np.isinf(sink_dist[v]):
                    sink_dist[v] = sink_dist[u] + 1
                    q.append(v)

    return GardenGraph(load=load, adj=adj, capacity=float(capacity), sink_dist=sink_dist, shape=(rows, cols), sink=sink)


def path_graph(loads, capacity, sink_dist=None):
    """Cells 1..N in a line."""
    N = len(loads)
    adj = [[j for j in (i - 1, i + 1) if 0 <= j < N] for i in range(N)]
    return GardenGraph(
        load=np.asarray(loads, dtype=float),
        adj=adj,
        capacity=float(capacity),
        sink_dist=None if sink_dist is None else np.asarray(sink_dist, dtype=float),
    )


@pytest.fixture
def chain4():
    """Path 1-2-3-4, unit loads, capacity 2."""
    return path_graph([1, 1, 1, 1], capacity=2)


@pytest.fixture
def garden_5x5():
    """5x5 garden with a tree, zero-load cells and the compost in the corner."""
    loads = [
        [3, 1, 0, 2, 4],
        [2, -2, 5, 1, 0],
        [0, 3, 3, -2, 2],
        [4, 1, 0, 2, 1],
        [1, 2, 3, 1, -10],
    ]
    return grid_graph(loads, capacity=7, sink=25)


@pytest.fixture
def example_pack_dir():
    from pathlib import Path

    return Path(__file__).resolve().parents[1] / "assets" / "example_garden"
