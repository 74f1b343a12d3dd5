from __future__ import annotations
import argparse
import logging
from pathlib import Path

import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt
import numpy as np
import pandas as pd

from playres.log import setup_logging

logger = logging.getLogger(__name__)

PT_ORDER = ["run", "pass", "punt", "fg"]
CATEGORY_ORDER = ["havoc", "explosive", "success", "unsuccessful"]
YARD_BINS = np.arange(-15, 61, 1)


def situational_slice(df: pd.DataFrame, down: int, ytg_min: int, ytg_max: int) -> pd.DataFrame:
    m = (df["down"] == down) & (df["distance"].between(ytg_min, ytg_max, inclusive="both"))
    return df.loc[m].copy()


def plot_hist_overlay(series: dict[str, pd.Series], bins, title, out_png):
    plt.figure(figsize=(6, 4))
    for label, values in series.items():
        plt.hist(values, bins=bins, alpha=0.5, density=True, label=label)
    plt.xlabel("yards"); plt.ylabel("density"); plt.title(title); plt.legend()
    plt.tight_layout(); plt.savefig(out_png); plt.close()


def stats(x: pd.Series) -> dict:
    x = x.dropna()
    if len(x) == 0:
        return dict(n=0, mean=np.nan, std=np.nan, p10=np.nan, p50=np.nan, p90=np.nan)
    return dict(n=len(x), mean=x.mean(), std=x.std(), p10=x.quantile(.1), p50=x.quantile(.5), p90=x.quantile(.9))


def first_down_rate(df: pd.DataFrame) -> float:
    if len(df) == 0:
        return np.nan
    return float((df["first_down"] | df["touchdown"]).mean())


def build_tables(sims: pd.DataFrame) -> dict[str, pd.DataFrame]:
    scrimmage = sims[sims["play_type"].isin(["run", "pass"])]
    mix = sims["play_type"].value_counts(normalize=True).reindex(PT_ORDER).fillna(0).round(3)
    cats = (scrimmage.groupby("play_type")["category"].value_counts(normalize=True)
            .unstack(fill_value=0).reindex(columns=CATEGORY_ORDER, fill_value=0).round(3))
    yards = pd.DataFrame({pt: stats(scrimmage.loc[scrimmage["play_type"] == pt, "yards"])
                          for pt in ("run", "pass")}).round(2)
    situations = pd.DataFrame({
        "situation": ["1st & 10", "3rd & 1-3", "3rd & 7+", "4th & any"],
        "first_down_rate": [
            first_down_rate(situational_slice(scrimmage, 1, 10, 10)),
            first_down_rate(situational_slice(scrimmage, 3, 1, 3)),
            first_down_rate(situational_slice(scrimmage, 3, 7, 99)),
            first_down_rate(situational_slice(scrimmage, 4, 1, 99)),
        ],
    }).round(3)
    return {"mix": mix.to_frame("share"), "categories": cats, "yards": yards, "situations": situations}


def write_report(sims: pd.DataFrame, out: Path, source: str = "") -> Path:
    out.parent.mkdir(parents=True, exist_ok=True)
    tables = build_tables(sims)
    yards_png = out.parent / "yards_overlay.png"
    scrimmage = sims[sims["play_type"].isin(["run", "pass"])]
    if len(scrimmage) > 0:
        plot_hist_overlay({pt: scrimmage.loc[scrimmage["play_type"] == pt, "yards"].clip(-15, 60)
                           for pt in ("run", "pass")},
                          bins=YARD_BINS, title="Yards/Play (clipped [-15,60])", out_png=yards_png)

    with open(out, "w") as f:
        f.write("# Simulation Evaluation Report\n\n")
        f.write(f"- Sims: **{len(sims):,}** snaps from `{source}`\n")
        if "game" in sims:
            f.write(f"- Games: **{sims['game'].nunique():,}**\n")
        f.write("\n## Play-type distribution\n\n")
        f.write(tables["mix"].to_markdown() + "\n\n")
        f.write("## Outcome categories (share of snaps)\n\n")
        f.write(tables["categories"].to_markdown() + "\n\n")
        f.write("## Yards/play\n\n")
        if yards_png.exists():
            f.write(f"![Yards Overlay]({yards_png.name})\n\n")
        f.write(tables["yards"].to_markdown() + "\n\n")
        f.write("## Situational conversion\n\n")
        f.write(tables["situations"].to_markdown(index=False) + "\n\n")
        f.write("## Notes\n")
        f.write("- Yards include rubber-band penalty yards; incompletions count as 0.\n")
        f.write("- Calibration targets at baseline rates: run 4.1-4.5, pass 6.3-6.8 yards/play.\n")
    logger.info("wrote %s", out)
    return out


def main():
    ap = argparse.ArgumentParser()
    ap.add_argument("--sims", required=True)
    ap.add_argument("--out", default="runs/report.md")
    args = ap.parse_args()

    setup_logging()
    sims = pd.read_parquet(args.sims)
    write_report(sims, Path(args.out), args.sims)


if __name__ == "__main__":
    main()
