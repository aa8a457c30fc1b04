# Libraries to import:
import numpy as np
import pandas as pd

from .samplers import sample_points, discrepancy

def estimate_circle_area(points, radius=1.0):
    """
    Monte Carlo estimate of pi * r^2

    Unit-square points are mapped onto the bounding square [-r, r]^2; the
    area is the square's area times the fraction of points inside the circle.
    """
    points = np.asarray(points, dtype=float)
    if points.ndim != 2 or points.shape[1] != 2:
        raise ValueError(f"Expected points of shape (n, 2), got {points.shape}")
    if len(points) == 0:
        raise ValueError("Cannot estimate an area from zero points")

    xy = (2.0 * points - 1.0) * radius
    inside = np.sum(xy[:, 0] ** 2 + xy[:, 1] ** 2 <= radius ** 2)
    return 4.0 * radius ** 2 * inside / len(points)

def run_sampling_benchmark(config):
    """
    Circle-area estimates for every (method, n, repeat)

    Each repeat uses its own seed derived from config.seed, so the grid is
    reproducible.

    Returns:
        long DataFrame: method, n, repeat, estimate, abs_error, rel_error
        (+ discrepancy when enabled)
    """
    true_area = np.pi * config.radius ** 2
    seeds = np.random.SeedSequence(config.seed).spawn(len(config.methods) * len(config.sample_sizes) * config.n_repeats)
    seed_iter = iter(seeds)

    rows = []
    for method in config.methods:
        for n in config.sample_sizes:
            for repeat in range(config.n_repeats):
                points = sample_points(method, n, seed=np.random.default_rng(next(seed_iter)))
                estimate = estimate_circle_area(points, config.radius)
                row = {
                    "method": method,
                    "n": n,
                    "repeat": repeat,
                    "estimate": estimate,
                    "abs_error": abs(estimate - true_area),
                    "rel_error": abs(estimate - true_area) / true_area
                }
                if config.compute_discrepancy:
                    row["discrepancy"] = discrepancy(points) if n <= config.max_discrepancy_n else np.nan
                rows.append(row)

        if config.verbosity >= 1:
            print(f"Sampled {method}: {len(config.sample_sizes)} sizes x {config.n_repeats} repeats")

    return pd.DataFrame(rows)

def summarize_benchmark(results_df, radius=1.0):
    """Per (method, n) mean estimate, mean/std absolute error and RMSE"""
    true_area = np.pi * radius ** 2
    grouped = results_df.groupby(["method", "n"], sort=False)
    summary = grouped.agg(
        mean_estimate=("estimate", "mean"),
        mean_abs_error=("abs_error", "mean"),
        std_abs_error=("abs_error", "std"),
        n_repeats=("repeat", "count")
    )
    summary["rmse"] = grouped["estimate"].apply(lambda s: float(np.sqrt(np.mean((s - true_area) ** 2))))
    if "discrepancy" in results_df.columns:
        summary["mean_discrepancy"] = grouped["discrepancy"].mean()
    return summary.reset_index()
