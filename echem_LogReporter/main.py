# echem_LogReporter/main.py
from __future__ import annotations
from pathlib import Path
import logging
import sys
import matplotlib
import yaml

# batch tool: charts go to files only
matplotlib.use("Agg")

from .loaders import text_loader
from .utils.detect import discover_inputs
from .core.pipeline import run_pipeline

def load_config(cfg_path: Path) -> dict:
    with cfg_path.open("r", encoding="utf-8") as f:
        return yaml.safe_load(f) or {}

def _setup_logging(cfg: dict) -> bool:
    log_cfg = cfg.get("logging", {}) or {}
    level = str(log_cfg.get("level", "WARNING")).upper()
    logging.basicConfig(level=getattr(logging, level, logging.WARNING),
                        format="%(levelname)s %(name)s: %(message)s")
    return bool(log_cfg.get("verbose", True))

def main(cfg_path: Path | None = None) -> int:
    # ---------- config ----------
    here = Path(__file__).resolve().parent
    cfg = load_config(cfg_path or here / "config.yaml")
    verbose = _setup_logging(cfg)

    in_raw = (cfg.get("input", {}) or {}).get("path")
    if not in_raw:
        print("[INFO] No input file configured; nothing to do.")
        return 0
    in_path = Path(in_raw).resolve()
    recurse = bool(cfg["input"].get("recurse", True))
    out_root = Path((cfg.get("output", {}) or {}).get("root", "out")).resolve()
    out_root.mkdir(parents=True, exist_ok=True)

    if verbose:
        print(f"[cfg] input={in_path} (recurse={recurse})")
        print(f"[cfg] output={out_root}")

    # ---------- discover ----------
    detected = discover_inputs(in_path, recurse=recurse)
    if not detected:
        print(f"[INFO] No text exports found under: {in_path}")
        return 0
    if verbose:
        print(f"[detector] found {len(detected)} input(s)")

    # ---------- load ----------
    records = []
    for item in detected:
        if verbose:
            print(f"  [load] {item.kind:6} {item.path.name}")
        try:
            records.extend(text_loader.load(item.path))
        except OSError as e:
            print(f"[WARN] loader failed for {item.path.name}: {e}")

    if not records:
        if verbose:
            print("[INFO] No runs loaded; exiting without processing pipeline.")
        return 0

    contexts = run_pipeline(records, cfg, out_root)

    # ---------- present ----------
    for ctx in contexts:
        print(f"\n=== {ctx.source}: {ctx.mode.value} ===")
        print(ctx.report)
    if verbose:
        print(f"\n[summary] processed {len(contexts)} run(s)")
    return 0

if __name__ == "__main__":
    sys.exit(main())
