"""Small CLI script to plot naive against memoized work from saved drill results.

Usage:
    python -m recursiondrill.viz.create_viz_from_drill_results /path/to/results_dir [output.png]

The script expects JSON files written by ``DrillRunner(save_results=True)`` with
at least the following keys:
- "size"                   -> becomes "Size"
- "cold_body_evaluations"  -> "Body Evaluations" for the "memoized" strategy
- "naive_body_evaluations" -> "Body Evaluations" for the "naive" strategy

The memoized curve uses the cold-cache count, so it does not depend on the
order sizes ran in against a shared cache. Files without it fall back to
"memoized_body_evaluations".

Body evaluations are averaged per (Size, Strategy) and drawn on a log scale,
where the exponential naive curve and the polynomial memoized one separate.
"""
import sys
import json
import glob
from pathlib import Path

from dataclasses import dataclass
from typing import Optional

import pandas as pd
import seaborn as sns
import matplotlib.pyplot as plt


class NoResultsFoundError(RuntimeError):
    """Raised when no JSON result files are present for visualization."""


@dataclass
class VizConfig:
    """Configuration for generating the work comparison plot."""

    results_dir: Path
    output_path: Optional[Path] = None

    def resolve(self) -> "VizConfig":
        return VizConfig(
            results_dir=self.results_dir.expanduser().resolve(),
            output_path=self.output_path.expanduser().resolve()
            if self.output_path is not None
            else None,
        )


def get_problem_name(results_dir: Path) -> str:
    """Read the problem name from the first JSON file in the directory."""
    pattern = str(results_dir / "*.json")
    json_files = sorted(glob.glob(pattern))
    if not json_files:
        return "Unknown problem"

    with open(json_files[0], "r") as f:
        json_data = json.load(f)

    return str(json_data.get("problem", "Unknown problem"))


def build_dataframe(results_dir: Path) -> pd.DataFrame:
    """Load all JSON files in ``results_dir`` into a long-form DataFrame.

    Each result contributes one row per strategy that was run:
    - Size
    - Strategy ("memoized" or "naive")
    - Body Evaluations
    """
    pattern = str(results_dir / "*.json")
    json_files = glob.glob(pattern)

    if not json_files:
        raise NoResultsFoundError(f"No JSON files found in directory: {results_dir}")

    data = []
    for file in json_files:
        with open(file, "r") as f:
            json_data = json.load(f)

        size = json_data.get("size")
        work = {
            "memoized": json_data.get("cold_body_evaluations"),
            "naive": json_data.get("naive_body_evaluations"),
        }
        if work["memoized"] is None:
            work["memoized"] = json_data.get("memoized_body_evaluations")

        for strategy, body_evaluations in work.items():
            if body_evaluations is None:
                continue
            data.append(
                {
                    "Size": size,
                    "Strategy": strategy,
                    "Body Evaluations": body_evaluations,
                }
            )

    df = pd.DataFrame(data, columns=["Size", "Strategy", "Body Evaluations"])
    return df


def build_pivot(df: pd.DataFrame) -> pd.DataFrame:
    """Average body evaluations per size, one column per strategy."""
    pivot_table = pd.pivot_table(
        df,
        values="Body Evaluations",
        index="Size",
        columns="Strategy",
        aggfunc="mean",
    )

    return pivot_table


def plot_work(
    pivot_table: pd.DataFrame, problem_name: str, output_path: Path | None = None
) -> None:
    """Plot the comparison and either show it or save to ``output_path``."""

    plt.figure(figsize=(12, 6))
    sns.lineplot(data=pivot_table, markers=True, dashes=False)

    plt.yscale("log")
    plt.title(f"Recursion Drill: {problem_name}" "\n" "Body evaluations from a cold cache, naive vs memoized")
    plt.xlabel("Size")
    plt.ylabel("Body Evaluations (log scale)")
    plt.tight_layout()

    if output_path is not None:
        plt.savefig(output_path, bbox_inches="tight")
        print(f"Saved plot to {output_path}")
    else:
        plt.show()


def generate_plot(config: VizConfig) -> None:
    cfg = config.resolve()

    if not cfg.results_dir.is_dir():
        raise NoResultsFoundError(f"Not a directory or missing results: {cfg.results_dir}")

    problem_name = get_problem_name(cfg.results_dir)
    df = build_dataframe(cfg.results_dir)
    if df.empty:
        raise NoResultsFoundError(f"No rows to visualize in: {cfg.results_dir}")

    pivot_table = build_pivot(df)
    plot_work(pivot_table, problem_name, cfg.output_path)


def main(argv: list[str]) -> None:
    if len(argv) < 2:
        script = Path(argv[0]).name
        msg = (
            f"Usage: python -m recursiondrill.viz.{Path(script).stem} /path/to/results_dir [output.png]\n"
            "Example: python -m recursiondrill.viz.create_viz_from_drill_results "
            "results fibonacci.png"
        )
        raise SystemExit(msg)

    config = VizConfig(
        results_dir=Path(argv[1]),
        output_path=Path(argv[2]) if len(argv) >= 3 else None,
    )
    generate_plot(config)


if __name__ == "__main__":  # pragma: no cover
    main(sys.argv)
