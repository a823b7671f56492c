from __future__ import annotations

from collections import deque
from enum import Enum
from typing import Iterable, List, Optional

import numpy as np


class ConfigurationError(ValueError):
    """Unknown policy name, or a policy whose inputs are missing."""


# ----------------------------
# Policy names
# ----------------------------

class HubSelection(str, Enum):
    NW = "NW"
    LM_MAX = "LM_max"
    KP_MIN = "KP_min"


class CandidateOrder(str, Enum):
    NW = "NW"
    LM_MAX = "LM_max"
    LM_MIN = "LM_min"


class QueueDiscipline(str, Enum):
    FIFO = "FIFO"
    LIFO = "LIFO"


def _coerce(enum_cls, value, option: str):
    if isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(str(value).strip())
    except ValueError:
        allowed = ", ".join(m.value for m in enum_cls)
        raise ConfigurationError(f"Unknown {option} '{value}'. Allowed: {allowed}") from None


def as_hub_selection(value) -> HubSelection:
    return _coerce(HubSelection, value, "hub_selection")


def as_candidate_order(value) -> CandidateOrder:
    return _coerce(CandidateOrder, value, "candidate_order")


def as_queue_discipline(value) -> QueueDiscipline:
    return _coerce(QueueDiscipline, value, "queue_discipline")


# ----------------------------
# Hub selection
# ----------------------------

def select_hub(
    unassigned: np.ndarray,
    load: np.ndarray,
    policy: HubSelection,
    sink_dist: Optional[np.ndarray] = None,
) -> int:
    """
    Pick the next cluster hub among positions where unassigned is True.

    np.argmax / np.argmin return the first occurrence, and the candidate
    positions are ascending, so ties always go to the smallest index.
    """
    cand = np.flatnonzero(unassigned)
    if policy is HubSelection.NW:
        return int(cand[0])
    if policy is HubSelection.LM_MAX:
        return int(cand[np.argmax(load[cand])])
    if policy is HubSelection.KP_MIN:
        if sink_dist is None:
            raise ConfigurationError("KP_min hub selection needs distance-to-sink data.")
        return int(cand[np.argmin(sink_dist[cand])])
    raise ConfigurationError(f"Unknown hub_selection '{policy}'")


# ----------------------------
# Candidate ordering
# ----------------------------

def order_candidates(candidates: Iterable[int], load: np.ndarray, policy: CandidateOrder) -> List[int]:
    """Expansion order for a node's unassigned neighbors (index is always the secondary key)."""
    cands = sorted(set(int(c) for c in candidates))
    if policy is CandidateOrder.NW:
        return cands
    if policy is CandidateOrder.LM_MAX:
        return sorted(cands, key=lambda c: (-float(load[c]), c))
    if policy is CandidateOrder.LM_MIN:
        return sorted(cands, key=lambda c: (float(load[c]), c))
    raise ConfigurationError(f"Unknown candidate_order '{policy}'")


# ----------------------------
# Candidate queue
# ----------------------------

class CandidateQueue:
    """
    Cells accepted into the current cluster but not yet expanded.
    Items always leave from the head; FIFO appends at the tail, LIFO pushes at the head.
    """

    def __init__(self, discipline: QueueDiscipline | str = QueueDiscipline.FIFO):
        self.discipline = as_queue_discipline(discipline)
        self._items: deque[int] = deque()

    def enqueue(self, item: int) -> None:
        if self.discipline is QueueDiscipline.LIFO:
            self._items.appendleft(item)
        else:
            self._items.append(item)

    def dequeue(self) -> int:
        return self._items.popleft()

    def clear(self) -> None:
        self._items.clear()

    def __len__(self) -> int:
        return len(self._items)

    def __bool__(self) -> bool:
        return bool(self._items)
