from __future__ import annotations

import argparse
import glob
import sys

import pandas as pd

from playres.eval.eval_report import PT_ORDER, first_down_rate, situational_slice, stats

# yards/play the baseline rates are calibrated to
TARGET_YPP = {"run": (4.1, 4.5), "pass": (6.3, 6.8)}
SITUATIONS = (("1st&10", 1, 10, 10), ("3rd&1-3", 3, 1, 3), ("3rd&7+", 3, 7, 99))


def latest_sims() -> str:
    found = sorted(glob.glob("runs/sim_*.parquet"))
    return found[-1] if found else ""


def main():
    ap = argparse.ArgumentParser()
    ap.add_argument("--sims", default="")
    args = ap.parse_args()

    sim_path = args.sims or latest_sims()
    if not sim_path:
        print("No sim parquet found in runs/ (expected runs/sim_*.parquet)")
        sys.exit(1)

    print(f"\n== Quick Eval ==\nSIMS: {sim_path}\n")
    sims = pd.read_parquet(sim_path)
    scrimmage = sims[sims["play_type"].isin(["run", "pass"])]

    print("-- Play-type share --")
    print(sims["play_type"].value_counts(normalize=True).reindex(PT_ORDER).fillna(0).round(3).to_string())

    print("\n-- Situational first-down rates --")
    for label, down, lo, hi in SITUATIONS:
        d = situational_slice(scrimmage, down, lo, hi)
        print(f"{label:<8} rate={first_down_rate(d):.3f} (n={len(d)})")

    print("\n-- Yards/play vs calibration targets --")
    for pt, (lo, hi) in TARGET_YPP.items():
        s = stats(scrimmage.loc[scrimmage["play_type"] == pt, "yards"])
        flag = "ok" if lo <= s["mean"] <= hi else "OFF"
        print(f"{pt:<5} mean={s['mean']:.3f} p50={s['p50']:.1f} n={s['n']}  target=[{lo}, {hi}] {flag}")
    print()


if __name__ == "__main__":
    try:
        main()
    except Exception as e:
        import traceback

        print("quick_eval error:", e)
        traceback.print_exc()
        sys.exit(1)
