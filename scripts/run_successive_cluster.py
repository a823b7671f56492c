import argparse
from pathlib import Path
from datetime import datetime

import yaml
import pandas as pd

from leafrake.data.garden_pack import load_garden_pack
from leafrake.algos.successive_cluster import run, params_from_cfg
from leafrake.algos.successor_analysis import cluster_loads, clusters, summarize

"""
Run successive cluster formation on a garden pack.

example usage from repo root:
python3 scripts/run_successive_cluster.py --config config.yaml --hub LM_max --queue LIFO
"""


def _resolve_repo_root() -> Path:
    return Path(__file__).resolve().parents[1]


def _resolve_config_path(config_arg: str) -> Path:
    p = Path(config_arg).expanduser()
    if not p.is_absolute():
        p = (_resolve_repo_root() / p).resolve()
    return p


def _resolve_path(raw: str, repo_root: Path) -> Path:
    p = Path(raw).expanduser()
    if not p.is_absolute():
        p = (repo_root / p).resolve()
    return p


def _resolve_pack_dir(cfg: dict, repo_root: Path) -> Path:
    paths = cfg.get("paths", {}) or {}
    pack_dir_raw = paths.get("garden_pack_dir")
    if not pack_dir_raw:
        raise KeyError(
            "Missing garden pack directory in config.\n"
            "Provide:\n"
            "  paths.garden_pack_dir: 'assets/example_garden'\n"
        )
    return _resolve_path(pack_dir_raw, repo_root)


def _resolve_outputs_root(cfg: dict, repo_root: Path) -> Path:
    paths = cfg.get("paths", {}) or {}
    return _resolve_path(paths.get("outputs_dir") or "outputs", repo_root)


def main():
    ap = argparse.ArgumentParser()
    ap.add_argument("--config", default="config.yaml")
    ap.add_argument("--hub", choices=["NW", "LM_max", "KP_min"], default=None)
    ap.add_argument("--order", choices=["NW", "LM_max", "LM_min"], default=None)
    ap.add_argument("--queue", choices=["FIFO", "LIFO"], default=None)
    args = ap.parse_args()

    repo_root = _resolve_repo_root()

    cfg_path = _resolve_config_path(args.config)
    print("1) loading config...")
    print("   config =", cfg_path)
    cfg = yaml.safe_load(cfg_path.read_text()) or {}

    algo = (cfg.get("run", {}) or {}).get("algo", "successive_cluster")
    if algo != "successive_cluster":
        raise ValueError(f"Unknown algo: {algo}")

    # command line overrides
    algo_cfg = cfg.setdefault("algo", {}).setdefault("successive_cluster", {})
    if args.hub:
        algo_cfg["hub_selection"] = args.hub
    if args.order:
        algo_cfg["candidate_order"] = args.order
    if args.queue:
        algo_cfg["queue_discipline"] = args.queue

    # fail on bad policy names before any data is read
    params = params_from_cfg(cfg)

    pack_dir = _resolve_pack_dir(cfg, repo_root)
    outputs_root = _resolve_outputs_root(cfg, repo_root)
    print("   pack_dir =", pack_dir)
    print("   outputs_root =", outputs_root)

    print("2) loading garden pack...")
    pack = load_garden_pack(pack_dir, capacity=algo_cfg.get("capacity"))
    print("   loaded pack:", pack.n_cells, "cells,", int(pack.blocked.sum()), "blocked")

    print(f"3) running {params.name}...")
    table = run(pack, cfg)
    stats = summarize(table, pack.load, pack.capacity)
    print("   clusters:", stats["num_clusters"], "| full:", stats["num_full_clusters"])

    # ---- output folder (timestamped) ----
    run_id = datetime.now().strftime("%Y%m%d_%H%M%S")
    run_dir = outputs_root / f"{params.name}_{run_id}"
    run_dir.mkdir(parents=True, exist_ok=True)

    pd.DataFrame(table, columns=["cell_id", "successor"]).to_csv(run_dir / "successors.csv", index=False)

    members = clusters(table)
    loads = cluster_loads(table, pack.load)
    cluster_stats = pd.DataFrame(
        {
            "hub": list(members.keys()),
            "size": [len(m) for m in members.values()],
            "load": [loads[h] for h in members.keys()],
        }
    )
    cluster_stats.to_csv(run_dir / "cluster_stats.csv", index=False)

    print("✅ Saved run:", run_dir)


if __name__ == "__main__":
    main()
